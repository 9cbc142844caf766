"""
Serializers for the resume analysis API.

Request and response bodies use camelCase keys; validated data uses the
snake_case names the services expect.
"""
from rest_framework import serializers

from resume_analysis.exceptions import MissingField
from resume_analysis.models import ResumeAnalysis
from resume_analysis.schemas import EXPERIENCE_LEVELS, STEP_STATUSES


class AnalyzeResumeSerializer(serializers.Serializer):
    """
    Input for POST /api/resume/analyze.

    Required fields are declared optional here so that an omitted, null or blank
    value raises ``MissingField`` naming the field instead of a generic
    validation error.
    """
    REQUIRED_FIELDS = (
        ('resume_text', 'resumeText'),
        ('file_name', 'fileName'),
        ('job_role', 'jobRole'),
        ('experience_level', 'experienceLevel'),
    )

    resumeText = serializers.CharField(
        source='resume_text', required=False, allow_blank=True, allow_null=True,
        trim_whitespace=False,
    )
    fileName = serializers.CharField(source='file_name', required=False, allow_blank=True, allow_null=True, max_length=255)
    fileSize = serializers.IntegerField(source='file_size', required=False, allow_null=True, min_value=0)
    jobRole = serializers.CharField(source='job_role', required=False, allow_blank=True, allow_null=True, max_length=100)
    experienceLevel = serializers.CharField(source='experience_level', required=False, allow_blank=True, allow_null=True)
    jobDescription = serializers.CharField(
        source='job_description', required=False, allow_blank=True, allow_null=True, trim_whitespace=False,
    )

    def validate(self, attrs):
        for key, field_name in self.REQUIRED_FIELDS:
            value = attrs.get(key)
            if not value or not value.strip():
                raise MissingField(field_name)

        level = attrs['experience_level'].strip().lower()
        if level not in EXPERIENCE_LEVELS:
            raise serializers.ValidationError({
                'experienceLevel': f"Must be one of: {', '.join(EXPERIENCE_LEVELS)}."
            })
        attrs['experience_level'] = level
        return attrs


class StepProgressSerializer(serializers.Serializer):
    """Input for PATCH .../roadmap/steps/<stepNumber>."""
    status = serializers.ChoiceField(choices=STEP_STATUSES, required=False)
    progressPercent = serializers.IntegerField(source='progress_percent', required=False, min_value=0, max_value=100)
    notes = serializers.CharField(required=False, allow_blank=True, max_length=2000, trim_whitespace=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError('Provide status, progressPercent or notes.')
        return attrs


class ResumeAnalysisSerializer(serializers.ModelSerializer):
    """Stored analysis rendered in the public response shape."""

    class Meta:
        model = ResumeAnalysis
        fields = ['id']

    def to_representation(self, instance):
        roadmap = instance.roadmap or {}
        return {
            'analysisId': str(instance.pk),
            'analysis': instance.analysis,
            'roadmap': {
                'totalEstimatedDuration': roadmap.get('totalEstimatedDuration', ''),
                'generatedAt': roadmap.get('generatedAt'),
                'steps': instance.steps,
                'overallProgress': instance.overall_progress,
            },
            'metadata': {
                'fileName': instance.file_name,
                'fileSize': instance.file_size,
                'resumeUrl': instance.resume_url,
                'jobRole': instance.job_role,
                'experienceLevel': instance.experience_level,
                'analysisSource': instance.analysis_source,
                'roadmapSource': instance.roadmap_source,
                'createdAt': instance.created_at.isoformat() if instance.created_at else None,
            },
        }
