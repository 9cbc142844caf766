"""
Prompt builders for the Gemini analysis and roadmap calls.

Both prompts demand a single JSON object with a fixed schema so the
response can be parsed without heuristics.
"""
import textwrap
from typing import Optional, Sequence

ANALYSIS_SCHEMA_BLOCK = textwrap.dedent(
    """{
  "matchPercent": 0,
  "atsScore": 0,
  "skillsFound": ["skill"],
  "missingSkills": ["skill"],
  "suggestions": [
    {
      "category": "formatting|keywords|content|structure|general",
      "priority": "high|medium|low",
      "title": "Short title",
      "description": "Concrete, actionable suggestion."
    }
  ],
  "strengthAreas": ["area"],
  "improvementAreas": ["area"]
}"""
)

ROADMAP_SCHEMA_BLOCK = textwrap.dedent(
    """{
  "totalEstimatedDuration": "3-6 months",
  "steps": [
    {
      "stepNumber": 1,
      "title": "Step title",
      "description": "What to learn in this step and why it matters for the role.",
      "estimatedDuration": "2 weeks",
      "skills": ["skill"],
      "resources": [
        {
          "type": "course|documentation|project|tutorial|book",
          "title": "Resource title",
          "url": "https://...",
          "provider": "Udemy"
        }
      ]
    }
  ]
}"""
)

PACE_BY_LEVEL = {
    'intern': '2-4 weeks per fundamentals step, 3-5 weeks per advanced step',
    'entry': '2-4 weeks per fundamentals step, 3-5 weeks per advanced step',
    'mid': '1-3 weeks per step',
    'senior': '1-2 weeks per step',
}


def build_analysis_prompt(
    resume_text: str,
    job_role: str,
    experience_level: str,
    job_description: Optional[str] = None,
) -> str:
    job_block = ''
    if job_description and job_description.strip():
        job_block = f"\nJob description:\n{job_description.strip()}\n"

    prompt = f"""
You are a resume reviewer and career advisor. Review the resume below for a {experience_level}-level {job_role} position.

Resume:
{resume_text}
{job_block}
CRITICAL RULES:
- Respond with ONE JSON object and nothing else: no prose, no markdown fences
- Use EXACTLY the keys of the schema below
- matchPercent: 0-100, how well the resume fits the role requirements
- atsScore: 0-100, how well an applicant tracking system would parse and rank the resume
- skillsFound: technical and soft skills present in the resume that matter for {job_role}
- missingSkills: skills the role expects that the resume does not show
- suggestions: actionable fixes, each with one category and one priority from the listed values
- strengthAreas / improvementAreas: short phrases

Schema:
{ANALYSIS_SCHEMA_BLOCK}
""".strip()
    return prompt


def build_roadmap_prompt(
    missing_skills: Sequence[str],
    job_role: str,
    experience_level: str,
    existing_skills: Sequence[str] = (),
) -> str:
    current = ', '.join(existing_skills) or 'None specified'
    to_learn = ', '.join(missing_skills) or 'None specified'
    pace = PACE_BY_LEVEL.get(experience_level, PACE_BY_LEVEL['mid'])

    prompt = f"""
You are a career coach who designs learning plans. Build a staged learning roadmap for a {experience_level}-level candidate targeting a {job_role} position.

Current skills: {current}
Skills to learn: {to_learn}

CRITICAL RULES:
- Respond with ONE JSON object and nothing else: no prose, no markdown fences
- Order steps from fundamentals to intermediate practice to advanced and production topics
- Each step builds on the previous one and lists the skills it covers
- Give every step 2-4 resources, at least one of them hands-on (project or exercise)
- Only cite resources that exist; when unsure of a deep link, use the provider's main domain
- Prefer free resources (official documentation, freeCodeCamp, MDN, YouTube channels)
- Pace: {pace}

Schema:
{ROADMAP_SCHEMA_BLOCK}
""".strip()
    return prompt
