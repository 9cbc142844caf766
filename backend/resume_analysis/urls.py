"""
URL configuration for resume analysis endpoints.
"""
from django.urls import path

from resume_analysis import views

urlpatterns = [
    path('health', views.health_check, name='health'),
    path('resume/analyze', views.analyze_resume, name='resume-analyze'),
    path('resume/analyses', views.analysis_list, name='resume-analysis-list'),
    path('resume/analyses/<int:analysis_id>', views.analysis_detail, name='resume-analysis-detail'),
    path(
        'resume/analyses/<int:analysis_id>/roadmap/steps/<int:step_number>',
        views.roadmap_step_progress,
        name='roadmap-step-progress',
    ),
]
