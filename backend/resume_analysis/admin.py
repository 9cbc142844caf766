from django.contrib import admin

from resume_analysis.models import ResumeAnalysis


@admin.register(ResumeAnalysis)
class ResumeAnalysisAdmin(admin.ModelAdmin):
    list_display = ['id', 'user', 'file_name', 'job_role', 'experience_level', 'analysis_source', 'created_at']
    list_filter = ['experience_level', 'analysis_source', 'roadmap_source']
    search_fields = ['file_name', 'job_role', 'user__email']
    readonly_fields = ['created_at', 'updated_at', 'overall_progress']
