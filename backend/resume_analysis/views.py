"""
API views for resume analysis and roadmap progress.
"""
import logging

from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from resume_analysis import services
from resume_analysis.engines import select_source
from resume_analysis.gemini_client import build_provider_client
from resume_analysis.models import ResumeAnalysis
from resume_analysis.serializers import (
    AnalyzeResumeSerializer,
    ResumeAnalysisSerializer,
    StepProgressSerializer,
)
from resume_analysis.storage_utils import delete_resume_artifact

logger = logging.getLogger(__name__)


@api_view(['GET'])
@permission_classes([AllowAny])
def health_check(request):
    return Response({
        'status': 'healthy',
        'generation_source': select_source(build_provider_client()).value,
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def analyze_resume(request):
    """
    Analyse already-extracted resume text for a target role.

    Request Body:
    {
        "resumeText": "...",
        "fileName": "resume.pdf",
        "fileSize": 48213,
        "jobRole": "Frontend Developer",
        "experienceLevel": "intern|entry|mid|senior",
        "jobDescription": "..."  // optional
    }

    Returns 201 with analysisId, analysis, roadmap (with overallProgress)
    and metadata.
    """
    serializer = AnalyzeResumeSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    record = services.create_resume_analysis(request.user, serializer.validated_data)
    return Response(ResumeAnalysisSerializer(record).data, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def analysis_list(request):
    records = ResumeAnalysis.objects.filter(user=request.user)
    return Response({
        'count': records.count(),
        'results': ResumeAnalysisSerializer(records, many=True).data,
    })


@api_view(['GET', 'DELETE'])
@permission_classes([IsAuthenticated])
def analysis_detail(request, analysis_id):
    record = get_object_or_404(ResumeAnalysis, pk=analysis_id, user=request.user)

    if request.method == 'DELETE':
        delete_resume_artifact(record.storage_public_id)
        record.delete()
        logger.info(f"Deleted resume analysis {analysis_id}")
        return Response(status=status.HTTP_204_NO_CONTENT)

    return Response(ResumeAnalysisSerializer(record).data)


@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def roadmap_step_progress(request, analysis_id, step_number):
    """
    Update progress on one roadmap step.

    Request Body (any subset):
    {
        "status": "not_started|in_progress|completed",
        "progressPercent": 50,
        "notes": "Finished the hooks chapter"
    }
    """
    record = get_object_or_404(ResumeAnalysis, pk=analysis_id, user=request.user)

    serializer = StepProgressSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    record = services.update_roadmap_step(record, step_number, **serializer.validated_data)
    return Response(ResumeAnalysisSerializer(record).data)
