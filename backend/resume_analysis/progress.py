"""
Roadmap progress tracking.

``compute_overall_progress`` derives the roadmap-level percentage from its
steps; ``apply_step_update`` is the only legal way to move a step between
``not_started``, ``in_progress`` and ``completed``.
"""
from dataclasses import replace
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable, Optional

from django.utils import timezone

from resume_analysis.exceptions import InvalidProgressUpdate
from resume_analysis.schemas import (
    STATUS_COMPLETED,
    STATUS_IN_PROGRESS,
    STATUS_NOT_STARTED,
    STEP_STATUSES,
    RoadmapStep,
)


def _step_progress(step: Any) -> int:
    if isinstance(step, dict):
        value = step.get('progressPercent', 0)
    else:
        value = getattr(step, 'progress_percent', 0)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return int(min(100, max(0, value)))


def compute_overall_progress(steps: Iterable[Any]) -> int:
    """
    Average ``progressPercent`` over all steps, rounded half up.

    Accepts ``RoadmapStep`` objects or their stored dict form. An empty
    roadmap is 0% complete.
    """
    values = [_step_progress(step) for step in steps]
    if not values:
        return 0
    average = Decimal(sum(values)) / Decimal(len(values))
    return int(average.quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def _validate_progress(progress_percent: Any) -> int:
    if isinstance(progress_percent, bool) or not isinstance(progress_percent, int):
        raise InvalidProgressUpdate('progressPercent must be an integer between 0 and 100.')
    if not 0 <= progress_percent <= 100:
        raise InvalidProgressUpdate('progressPercent must be between 0 and 100.')
    return progress_percent


def _derive_status(current: str, progress: int) -> str:
    if progress == 100:
        return STATUS_COMPLETED
    if current == STATUS_NOT_STARTED and progress > 0:
        return STATUS_IN_PROGRESS
    if current == STATUS_COMPLETED:
        return STATUS_IN_PROGRESS
    return current


def apply_step_update(
    step: RoadmapStep,
    *,
    status: Optional[str] = None,
    progress_percent: Optional[int] = None,
    notes: Optional[str] = None,
    now: Optional[datetime] = None,
) -> RoadmapStep:
    """
    Return a copy of ``step`` with the update applied.

    An explicit ``status`` wins over ``progress_percent``; progress alone moves
    the status (100 completes the step, anything above 0 starts it, anything
    below 100 re-opens a completed step). Timestamps already set are kept, so
    applying the same update twice gives the same step.
    """
    if status is not None and status not in STEP_STATUSES:
        raise InvalidProgressUpdate(
            f"status must be one of: {', '.join(STEP_STATUSES)}."
        )
    if progress_percent is not None:
        progress_percent = _validate_progress(progress_percent)

    timestamp = (now or timezone.now()).isoformat()

    if status is None:
        status = (
            _derive_status(step.status, progress_percent)
            if progress_percent is not None else step.status
        )
    progress = step.progress_percent if progress_percent is None else progress_percent

    if status == STATUS_NOT_STARTED:
        updated = replace(step, status=status, progress_percent=0, started_at=None, completed_at=None)
    elif status == STATUS_IN_PROGRESS:
        updated = replace(
            step,
            status=status,
            progress_percent=min(99, progress),
            started_at=step.started_at or timestamp,
            completed_at=None,
        )
    else:
        updated = replace(
            step,
            status=status,
            progress_percent=100,
            started_at=step.started_at or timestamp,
            completed_at=step.completed_at or timestamp,
        )

    if notes is not None:
        updated = replace(updated, notes=notes)
    return updated
