"""
Resume analysis workflows used by the API views.

``create_resume_analysis`` runs the engines and then performs the two
collaborator side effects (artifact upload, record write) once generation
has succeeded. ``update_roadmap_step`` applies one progress update to a
stored record.
"""
import logging
from typing import Any, Dict, Optional

from django.db import DatabaseError, transaction
from django.utils import timezone

from resume_analysis.engines import AnalysisEngine, RoadmapEngine
from resume_analysis.exceptions import ArtifactUploadError, InvalidProgressUpdate, PersistenceError
from resume_analysis.gemini_client import build_provider_client
from resume_analysis.models import ResumeAnalysis
from resume_analysis.progress import apply_step_update
from resume_analysis.schemas import AnalysisRequest
from resume_analysis.storage_utils import (
    delete_resume_artifact,
    text_artifact_name,
    upload_resume_artifact,
)

logger = logging.getLogger(__name__)


def build_engines():
    """Analysis and roadmap engines sharing one provider client built from settings."""
    provider = build_provider_client()
    return AnalysisEngine(provider), RoadmapEngine(provider)


def _discard_artifact(public_id):
    """Remove an uploaded artifact whose record could not be saved."""
    try:
        delete_resume_artifact(public_id)
    except ArtifactUploadError:
        logger.exception('Failed to remove orphaned resume artifact %s', public_id)


def create_resume_analysis(
    user,
    data: Dict[str, Any],
    *,
    analysis_engine: Optional[AnalysisEngine] = None,
    roadmap_engine: Optional[RoadmapEngine] = None,
    uploader=upload_resume_artifact,
) -> ResumeAnalysis:
    """
    Analyse a resume, build its roadmap and persist both.

    ``data`` uses the snake_case keys produced by ``AnalyzeResumeSerializer``.
    Raises ``MissingField``/``InvalidResumeText`` for bad input and
    ``PersistenceError`` when the artifact or the record cannot be stored.
    """
    if analysis_engine is None or roadmap_engine is None:
        default_analysis, default_roadmap = build_engines()
        analysis_engine = analysis_engine or default_analysis
        roadmap_engine = roadmap_engine or default_roadmap

    request = AnalysisRequest(
        resume_text=data.get('resume_text') or '',
        job_role=(data.get('job_role') or '').strip(),
        experience_level=data.get('experience_level') or '',
        job_description=data.get('job_description') or None,
    )
    logger.info(
        'Analysing resume %r (%s characters) for %s %s',
        data.get('file_name'), len(request.resume_text), request.experience_level, request.job_role,
    )

    analysis, analysis_source = analysis_engine.generate(request)
    roadmap, roadmap_source = roadmap_engine.generate(
        analysis.missing_skills,
        request.job_role,
        request.experience_level,
        analysis.skills_found,
    )

    upload = uploader(
        request.resume_text.encode('utf-8'),
        text_artifact_name(data.get('file_name') or ''),
        user.pk,
    )

    roadmap_data = roadmap.to_dict()
    roadmap_data.pop('overallProgress', None)
    roadmap_data['generatedAt'] = timezone.now().isoformat()

    try:
        record = ResumeAnalysis.objects.create(
            user=user,
            file_name=data.get('file_name') or '',
            file_size=data.get('file_size'),
            resume_url=upload.get('url') or '',
            storage_public_id=upload.get('public_id') or '',
            job_role=request.job_role,
            experience_level=request.experience_level,
            job_description=request.job_description,
            analysis=analysis.to_dict(),
            analysis_source=analysis_source.value,
            roadmap=roadmap_data,
            roadmap_source=roadmap_source.value,
        )
    except DatabaseError as exc:
        logger.exception('Failed to save resume analysis for user %s', user.pk)
        _discard_artifact(upload.get('public_id'))
        raise PersistenceError('Failed to save resume analysis.') from exc

    logger.info(
        'Saved resume analysis %s (analysis=%s, roadmap=%s)',
        record.pk, analysis_source.value, roadmap_source.value,
    )
    return record


def update_roadmap_step(
    record: ResumeAnalysis,
    step_number: int,
    *,
    status: Optional[str] = None,
    progress_percent: Optional[int] = None,
    notes: Optional[str] = None,
) -> ResumeAnalysis:
    """Apply one progress update to a stored roadmap step and save it."""
    try:
        with transaction.atomic():
            locked = ResumeAnalysis.objects.select_for_update().get(pk=record.pk)
            try:
                step = locked.get_step(step_number)
            except KeyError:
                raise InvalidProgressUpdate(f'Roadmap has no step {step_number}.') from None

            updated = apply_step_update(
                step,
                status=status,
                progress_percent=progress_percent,
                notes=notes,
            )
            locked.replace_step(updated)
            locked.save(update_fields=['roadmap', 'updated_at'])
    except DatabaseError as exc:
        logger.exception('Failed to update step %s of analysis %s', step_number, record.pk)
        raise PersistenceError('Failed to update roadmap progress.') from exc

    logger.info(
        'Analysis %s step %s -> %s (%s%%), overall %s%%',
        locked.pk, step_number, updated.status, updated.progress_percent, locked.overall_progress,
    )
    return locked
