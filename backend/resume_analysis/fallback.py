"""
Rule-based resume analysis and roadmap generation.

Produces the same shapes as the Gemini adapter without any network I/O.
Used whenever the provider is disabled, unconfigured or fails. Every method
is a pure function of its arguments.
"""
import math
import re
import logging
from typing import List, Optional, Sequence

from django.utils.text import slugify

from resume_analysis.schemas import (
    AnalysisResult,
    Resource,
    Roadmap,
    RoadmapStep,
    Suggestion,
)

logger = logging.getLogger(__name__)


class FallbackGenerator:
    """Keyword-driven stand-in for the AI provider."""

    KNOWN_SKILLS = (
        'JavaScript', 'TypeScript', 'React', 'Node', 'Python', 'Java', 'AWS',
        'Docker', 'SQL', 'MongoDB', 'Git', 'HTML', 'CSS', 'API', 'REST',
        'GraphQL', 'Testing', 'CI/CD', 'Vue', 'Angular', 'Express', 'Django',
        'Flask', 'Kubernetes', 'Redis', 'PostgreSQL', 'MySQL',
    )

    # Skills a hiring team usually expects, most important first
    ROLE_SKILL_MAP = {
        'frontend developer': ['TypeScript', 'React', 'GraphQL', 'Testing', 'Webpack'],
        'backend developer': ['Docker', 'PostgreSQL', 'Redis', 'Microservices'],
        'full stack developer': ['TypeScript', 'GraphQL', 'Docker', 'Testing', 'CI/CD'],
        'data scientist': ['TensorFlow', 'Pandas', 'Scikit-learn', 'Statistics'],
        'devops engineer': ['Kubernetes', 'Terraform', 'Jenkins', 'Ansible'],
    }
    DEFAULT_EXPECTED_SKILLS = ['TypeScript', 'Testing', 'CI/CD']

    MAX_SKILLS_FOUND = 8
    MAX_MISSING_SKILLS = 5
    MAX_ROADMAP_STEPS = 5

    SKILL_RX = re.compile(
        r'\b(' + '|'.join(re.escape(skill) for skill in KNOWN_SKILLS) + r')\b',
        re.IGNORECASE,
    )

    @classmethod
    def extract_skills(cls, resume_text: str) -> List[str]:
        """Known skills in order of first appearance, lowercased and de-duplicated."""
        found = []
        for match in cls.SKILL_RX.findall(resume_text or ''):
            skill = match.lower()
            if skill not in found:
                found.append(skill)
        return found

    @classmethod
    def expected_skills(cls, job_role: str) -> List[str]:
        role_key = ' '.join((job_role or '').lower().split())
        return list(cls.ROLE_SKILL_MAP.get(role_key, cls.DEFAULT_EXPECTED_SKILLS))

    @classmethod
    def analyze(
        cls,
        resume_text: str,
        job_role: str,
        experience_level: str,
        job_description: Optional[str] = None,
    ) -> AnalysisResult:
        found_skills = cls.extract_skills(resume_text)
        found_lookup = set(found_skills)
        missing_skills = [
            skill for skill in cls.expected_skills(job_role)
            if skill.lower() not in found_lookup
        ][:cls.MAX_MISSING_SKILLS]

        # Capped after counting every found skill, not only the eight returned
        match_percent = min(95, 50 + len(found_skills) * 5)
        ats_score = min(90, 60 + len(resume_text or '') // 100)

        return AnalysisResult(
            match_percent=match_percent,
            ats_score=ats_score,
            skills_found=found_skills[:cls.MAX_SKILLS_FOUND],
            missing_skills=missing_skills,
            suggestions=cls._suggestions(missing_skills, job_role),
            strength_areas=(
                ['Technical Skills', 'Relevant Experience'] if len(found_skills) > 3
                else ['Relevant Experience']
            ),
            improvement_areas=(
                ['Technical Stack Coverage', 'Keyword Optimization'] if missing_skills
                else ['Keyword Optimization']
            ),
        )

    @classmethod
    def _suggestions(cls, missing_skills: Sequence[str], job_role: str) -> List[Suggestion]:
        if missing_skills:
            keywords_text = (
                f"Include {', '.join(missing_skills[:3])} in your skills section "
                f"to better match {job_role} requirements."
            )
        else:
            keywords_text = (
                f"Mirror the exact wording of {job_role} job postings in your skills section "
                "so keyword filters pick it up."
            )
        return [
            Suggestion(
                category='keywords',
                priority='high',
                title='Add Missing Technologies',
                description=keywords_text,
            ),
            Suggestion(
                category='formatting',
                priority='medium',
                title='Improve ATS Compatibility',
                description=(
                    'Use standard section headers (Experience, Education, Skills) '
                    'and avoid tables or complex formatting.'
                ),
            ),
            Suggestion(
                category='content',
                priority='high',
                title='Quantify Achievements',
                description=(
                    'Add metrics and numbers to demonstrate impact '
                    '(e.g., "Improved performance by 40%", "Managed team of 5").'
                ),
            ),
        ]

    @classmethod
    def step_weeks(cls, experience_level: str) -> float:
        return 3.5 if experience_level == 'entry' else 2.5

    @classmethod
    def step_duration(cls, experience_level: str) -> str:
        return '3-4 weeks' if experience_level == 'entry' else '2-3 weeks'

    @classmethod
    def _resources(cls, skill: str, job_role: str) -> List[Resource]:
        topic = slugify(skill) or skill.lower()
        return [
            Resource(
                type='course',
                title=f'{skill} Complete Guide',
                url=f'https://www.udemy.com/topic/{topic}/',
                provider='Udemy',
            ),
            Resource(
                type='documentation',
                title=f'Official {skill} Documentation',
                url='https://developer.mozilla.org/',
                provider='MDN',
            ),
            Resource(
                type='project',
                title=f'Build a {job_role} Project with {skill}',
                url=None,
                provider='Self-guided',
            ),
        ]

    @classmethod
    def roadmap(
        cls,
        missing_skills: Sequence[str],
        job_role: str,
        experience_level: str,
        existing_skills: Sequence[str] = (),
    ) -> Roadmap:
        steps = []
        for idx, skill in enumerate(list(missing_skills)[:cls.MAX_ROADMAP_STEPS], 1):
            steps.append(RoadmapStep(
                step_number=idx,
                title=f'Master {skill}',
                description=(
                    f'Learn {skill} fundamentals and apply them to {job_role} projects. '
                    'Build hands-on experience through practical exercises.'
                ),
                estimated_duration=cls.step_duration(experience_level),
                skills=[skill],
                resources=cls._resources(skill, job_role),
            ))

        total_weeks = len(steps) * cls.step_weeks(experience_level)
        months = math.ceil(total_weeks / 4)
        logger.debug('Fallback roadmap: %s steps, %s weeks', len(steps), total_weeks)
        return Roadmap(
            total_estimated_duration=f'{months}-{months + 1} months',
            steps=steps,
        )
