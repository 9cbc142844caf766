from django.apps import AppConfig


class ResumeAnalysisConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'resume_analysis'
    verbose_name = 'Resume Analysis'
