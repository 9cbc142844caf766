"""
Analysis and roadmap orchestration.

Each engine is built with an explicit provider client (or ``None``) and
picks its generation source once per call. Only ``ProviderError`` is caught
on the provider path; anything else is a bug and propagates.
"""
from __future__ import annotations

import enum
import logging
from typing import NamedTuple, Optional, Sequence

from resume_analysis.exceptions import InvalidResumeText, MissingField, ProviderError
from resume_analysis.fallback import FallbackGenerator
from resume_analysis.gemini_client import GeminiClient
from resume_analysis.schemas import AnalysisRequest, AnalysisResult, Roadmap
from resume_analysis.text_validation import validate_resume_text

logger = logging.getLogger(__name__)


class GenerationSource(str, enum.Enum):
    PROVIDER = 'ai'
    FALLBACK = 'fallback'


def select_source(provider: Optional[GeminiClient]) -> GenerationSource:
    if provider is None:
        return GenerationSource.FALLBACK
    return GenerationSource.PROVIDER


class GeneratedAnalysis(NamedTuple):
    result: AnalysisResult
    source: GenerationSource


class GeneratedRoadmap(NamedTuple):
    roadmap: Roadmap
    source: GenerationSource


class AnalysisEngine:
    """Validate a request and produce its ``AnalysisResult``."""

    REQUIRED_FIELDS = (
        ('resume_text', 'resumeText'),
        ('job_role', 'jobRole'),
        ('experience_level', 'experienceLevel'),
    )

    def __init__(self, provider: Optional[GeminiClient] = None, fallback=FallbackGenerator):
        self.provider = provider
        self.fallback = fallback

    def _check_required(self, request: AnalysisRequest) -> None:
        for attr, field_name in self.REQUIRED_FIELDS:
            value = getattr(request, attr)
            if not isinstance(value, str) or not value.strip():
                raise MissingField(field_name)

    def generate(self, request: AnalysisRequest) -> GeneratedAnalysis:
        self._check_required(request)

        validation = validate_resume_text(request.resume_text)
        if not validation.valid:
            raise InvalidResumeText(validation.error_code, validation.error)
        if validation.warning:
            logger.warning('Resume text warning (%s characters): %s', validation.text_length, validation.warning)

        args = (
            request.resume_text,
            request.job_role,
            request.experience_level,
            request.job_description or '',
        )

        if select_source(self.provider) is GenerationSource.PROVIDER:
            try:
                result = self.provider.analyze(*args)
                logger.info('Gemini analysis complete for role %r', request.job_role)
                return GeneratedAnalysis(result, GenerationSource.PROVIDER)
            except ProviderError as exc:
                logger.warning('Gemini analysis failed (%s); falling back to rule-based analysis', exc)

        return GeneratedAnalysis(self.fallback.analyze(*args), GenerationSource.FALLBACK)

    def run(self, request: AnalysisRequest) -> AnalysisResult:
        return self.generate(request).result


class RoadmapEngine:
    """Produce a learning roadmap whose steps start with fresh progress."""

    def __init__(self, provider: Optional[GeminiClient] = None, fallback=FallbackGenerator):
        self.provider = provider
        self.fallback = fallback

    @staticmethod
    def initialize_steps(roadmap: Roadmap) -> Roadmap:
        """Renumber steps by position and reset their progress fields."""
        return Roadmap(
            total_estimated_duration=roadmap.total_estimated_duration,
            steps=[step.with_fresh_progress(idx) for idx, step in enumerate(roadmap.steps, 1)],
        )

    def generate(
        self,
        missing_skills: Sequence[str],
        job_role: str,
        experience_level: str,
        existing_skills: Sequence[str] = (),
    ) -> GeneratedRoadmap:
        args = (list(missing_skills), job_role, experience_level, list(existing_skills))

        if select_source(self.provider) is GenerationSource.PROVIDER:
            try:
                roadmap = self.provider.roadmap(*args)
                logger.info('Gemini roadmap complete: %s steps', len(roadmap.steps))
                return GeneratedRoadmap(self.initialize_steps(roadmap), GenerationSource.PROVIDER)
            except ProviderError as exc:
                logger.warning('Gemini roadmap failed (%s); falling back to rule-based roadmap', exc)

        roadmap = self.fallback.roadmap(*args)
        return GeneratedRoadmap(self.initialize_steps(roadmap), GenerationSource.FALLBACK)

    def run(
        self,
        missing_skills: Sequence[str],
        job_role: str,
        experience_level: str,
        existing_skills: Sequence[str] = (),
    ) -> Roadmap:
        return self.generate(missing_skills, job_role, experience_level, existing_skills).roadmap
