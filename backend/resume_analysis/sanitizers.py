"""
Coerce untyped provider documents into typed analysis and roadmap values.

Provider output is treated as an arbitrary JSON document. Only the top-level
shape is enforced (``ProviderParseError``); everything below it is repaired
with defaults instead of rejected.
"""
import math
from typing import Any, List, Optional

from resume_analysis.exceptions import ProviderParseError
from resume_analysis.schemas import (
    RESOURCE_TYPES,
    SUGGESTION_CATEGORIES,
    SUGGESTION_PRIORITIES,
    AnalysisResult,
    Resource,
    Roadmap,
    RoadmapStep,
    Suggestion,
)

DEFAULT_MATCH_PERCENT = 50
DEFAULT_ATS_SCORE = 70
DEFAULT_TOTAL_DURATION = '3-6 months'
DEFAULT_STEP_DURATION = '1 week'


def clamp_score(value: Any, default: int) -> int:
    """Round a numeric score into [0, 100]; non-numeric input yields ``default``."""
    if isinstance(value, bool):
        number = None
    elif isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            number = None
    else:
        number = None

    if number is None or number != number:  # NaN
        return default
    return int(math.floor(min(100.0, max(0.0, number)) + 0.5))


def _stringify_list(items: Any) -> List[str]:
    if not isinstance(items, list):
        return []
    out = []
    for item in items:
        if isinstance(item, str) and item.strip():
            out.append(item.strip())
    return out


def _dedupe(seq: List[str]) -> List[str]:
    seen = set()
    ordered = []
    for item in seq:
        key = item.lower()
        if key in seen:
            continue
        seen.add(key)
        ordered.append(item)
    return ordered


def _text(value: Any, default: str = '') -> str:
    if isinstance(value, str):
        return value.strip()
    return default


def _choice(value: Any, allowed, default: str) -> str:
    if isinstance(value, str) and value.strip().lower() in allowed:
        return value.strip().lower()
    return default


def sanitize_suggestions(items: Any) -> List[Suggestion]:
    if not isinstance(items, list):
        return []
    suggestions = []
    for item in items:
        if not isinstance(item, dict):
            continue
        suggestions.append(Suggestion(
            category=_choice(item.get('category'), SUGGESTION_CATEGORIES, 'general'),
            priority=_choice(item.get('priority'), SUGGESTION_PRIORITIES, 'medium'),
            title=_text(item.get('title')),
            description=_text(item.get('description')),
        ))
    return suggestions


def sanitize_analysis(payload: Any) -> AnalysisResult:
    if not isinstance(payload, dict):
        raise ProviderParseError('Analysis response must be a JSON object.')

    return AnalysisResult(
        match_percent=clamp_score(payload.get('matchPercent'), DEFAULT_MATCH_PERCENT),
        ats_score=clamp_score(payload.get('atsScore'), DEFAULT_ATS_SCORE),
        skills_found=_dedupe(_stringify_list(payload.get('skillsFound'))),
        missing_skills=_dedupe(_stringify_list(payload.get('missingSkills'))),
        suggestions=sanitize_suggestions(payload.get('suggestions')),
        strength_areas=_stringify_list(payload.get('strengthAreas')),
        improvement_areas=_stringify_list(payload.get('improvementAreas')),
    )


def sanitize_resources(items: Any) -> List[Resource]:
    if not isinstance(items, list):
        return []
    resources = []
    for item in items:
        if not isinstance(item, dict):
            continue
        url: Optional[str] = item.get('url') if isinstance(item.get('url'), str) else None
        resources.append(Resource(
            type=_choice(item.get('type'), RESOURCE_TYPES, 'tutorial'),
            title=_text(item.get('title')),
            url=url.strip() if url and url.strip() else None,
            provider=_text(item.get('provider')),
        ))
    return resources


def sanitize_roadmap(payload: Any) -> Roadmap:
    """
    Build a roadmap from a provider document.

    Steps are numbered by position here; progress fields are left at their
    defaults and reset again by the roadmap engine.
    """
    if not isinstance(payload, dict):
        raise ProviderParseError('Roadmap response must be a JSON object.')
    raw_steps = payload.get('steps')
    if not isinstance(raw_steps, list):
        raise ProviderParseError('Roadmap response is missing a "steps" list.')

    steps = []
    for raw in raw_steps:
        if not isinstance(raw, dict):
            continue
        position = len(steps) + 1
        steps.append(RoadmapStep(
            step_number=position,
            title=_text(raw.get('title')) or f'Step {position}',
            description=_text(raw.get('description')),
            estimated_duration=_text(raw.get('estimatedDuration')) or DEFAULT_STEP_DURATION,
            skills=_stringify_list(raw.get('skills')),
            resources=sanitize_resources(raw.get('resources')),
        ))

    return Roadmap(
        total_estimated_duration=_text(payload.get('totalEstimatedDuration')) or DEFAULT_TOTAL_DURATION,
        steps=steps,
    )

