from django.conf import settings
from django.db import models

from resume_analysis.progress import compute_overall_progress
from resume_analysis.schemas import RoadmapStep


class ResumeAnalysis(models.Model):
    """One analysed resume with its learning roadmap.

    ``analysis`` and ``roadmap`` hold the camelCase wire form produced by the
    engines. Step progress inside ``roadmap`` changes over time through
    ``services.update_roadmap_step``; overall progress is always derived
    from those steps.
    """
    EXPERIENCE_LEVELS = [
        ('intern', 'Intern'),
        ('entry', 'Entry Level'),
        ('mid', 'Mid Level'),
        ('senior', 'Senior Level'),
    ]
    SOURCES = [
        ('ai', 'AI Analysis'),
        ('fallback', 'Rule-based Fallback'),
    ]

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='resume_analyses')

    # Uploaded artifact
    file_name = models.CharField(max_length=255)
    file_size = models.PositiveIntegerField(null=True, blank=True)
    resume_url = models.CharField(max_length=500, blank=True)
    storage_public_id = models.CharField(max_length=255, blank=True)

    # Target
    job_role = models.CharField(max_length=100)
    experience_level = models.CharField(max_length=10, choices=EXPERIENCE_LEVELS)
    job_description = models.TextField(null=True, blank=True)

    analysis = models.JSONField(default=dict)
    analysis_source = models.CharField(max_length=10, choices=SOURCES, default='fallback')
    roadmap = models.JSONField(default=dict, help_text="generatedAt, totalEstimatedDuration and steps")
    roadmap_source = models.CharField(max_length=10, choices=SOURCES, default='fallback')

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['user', '-created_at'], name='resume_user_created_idx'),
        ]

    def __str__(self):
        return f"{self.file_name} for {self.job_role} ({self.experience_level})"

    @property
    def steps(self):
        return (self.roadmap or {}).get('steps') or []

    @property
    def overall_progress(self) -> int:
        return compute_overall_progress(self.steps)

    def get_step(self, step_number: int) -> RoadmapStep:
        for data in self.steps:
            if data.get('stepNumber') == step_number:
                return RoadmapStep.from_dict(data)
        raise KeyError(step_number)

    def replace_step(self, step: RoadmapStep) -> None:
        roadmap = dict(self.roadmap or {})
        roadmap['steps'] = [
            step.to_dict() if data.get('stepNumber') == step.step_number else data
            for data in self.steps
        ]
        self.roadmap = roadmap
