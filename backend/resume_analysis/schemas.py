"""
Typed values exchanged by the analysis and roadmap engines.

Python attributes are snake_case; ``to_dict`` produces the camelCase wire
form that is persisted and returned to clients.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

EXPERIENCE_LEVELS = ('intern', 'entry', 'mid', 'senior')
SUGGESTION_CATEGORIES = ('formatting', 'keywords', 'content', 'structure', 'general')
SUGGESTION_PRIORITIES = ('high', 'medium', 'low')
RESOURCE_TYPES = ('course', 'documentation', 'project', 'tutorial', 'book')

STATUS_NOT_STARTED = 'not_started'
STATUS_IN_PROGRESS = 'in_progress'
STATUS_COMPLETED = 'completed'
STEP_STATUSES = (STATUS_NOT_STARTED, STATUS_IN_PROGRESS, STATUS_COMPLETED)


@dataclass(frozen=True)
class AnalysisRequest:
    resume_text: str
    job_role: str
    experience_level: str
    job_description: Optional[str] = None


@dataclass
class Suggestion:
    category: str
    priority: str
    title: str
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'category': self.category,
            'priority': self.priority,
            'title': self.title,
            'description': self.description,
        }


@dataclass
class AnalysisResult:
    """Skill-gap analysis of one resume against one target role."""
    match_percent: int
    ats_score: int
    skills_found: List[str] = field(default_factory=list)
    missing_skills: List[str] = field(default_factory=list)
    suggestions: List[Suggestion] = field(default_factory=list)
    strength_areas: List[str] = field(default_factory=list)
    improvement_areas: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'matchPercent': self.match_percent,
            'atsScore': self.ats_score,
            'skillsFound': list(self.skills_found),
            'missingSkills': list(self.missing_skills),
            'suggestions': [s.to_dict() for s in self.suggestions],
            'strengthAreas': list(self.strength_areas),
            'improvementAreas': list(self.improvement_areas),
        }


@dataclass
class Resource:
    type: str
    title: str
    url: Optional[str]
    provider: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.type,
            'title': self.title,
            'url': self.url,
            'provider': self.provider,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Resource':
        return cls(
            type=data.get('type', 'tutorial'),
            title=data.get('title', ''),
            url=data.get('url'),
            provider=data.get('provider', ''),
        )


@dataclass
class RoadmapStep:
    """One stage of a learning plan, with its own progress state."""
    step_number: int
    title: str
    description: str = ''
    estimated_duration: str = '1 week'
    skills: List[str] = field(default_factory=list)
    resources: List[Resource] = field(default_factory=list)
    status: str = STATUS_NOT_STARTED
    progress_percent: int = 0
    notes: str = ''
    started_at: Optional[str] = None
    completed_at: Optional[str] = None

    def with_fresh_progress(self, step_number: int) -> 'RoadmapStep':
        """Copy of this step renumbered and reset to its initial progress state."""
        return replace(
            self,
            step_number=step_number,
            status=STATUS_NOT_STARTED,
            progress_percent=0,
            notes='',
            started_at=None,
            completed_at=None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'stepNumber': self.step_number,
            'title': self.title,
            'description': self.description,
            'estimatedDuration': self.estimated_duration,
            'skills': list(self.skills),
            'resources': [r.to_dict() for r in self.resources],
            'status': self.status,
            'progressPercent': self.progress_percent,
            'notes': self.notes,
            'startedAt': self.started_at,
            'completedAt': self.completed_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RoadmapStep':
        """Rebuild a step from its stored wire form."""
        return cls(
            step_number=data.get('stepNumber', 0),
            title=data.get('title', ''),
            description=data.get('description', ''),
            estimated_duration=data.get('estimatedDuration', '1 week'),
            skills=list(data.get('skills') or []),
            resources=[Resource.from_dict(r) for r in data.get('resources') or []],
            status=data.get('status', STATUS_NOT_STARTED),
            progress_percent=data.get('progressPercent', 0),
            notes=data.get('notes', ''),
            started_at=data.get('startedAt'),
            completed_at=data.get('completedAt'),
        )


@dataclass
class Roadmap:
    total_estimated_duration: str
    steps: List[RoadmapStep] = field(default_factory=list)

    @property
    def overall_progress(self) -> int:
        from resume_analysis.progress import compute_overall_progress
        return compute_overall_progress(self.steps)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'totalEstimatedDuration': self.total_estimated_duration,
            'steps': [s.to_dict() for s in self.steps],
            'overallProgress': self.overall_progress,
        }
