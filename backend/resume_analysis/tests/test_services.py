"""
Tests for the analysis workflow and stored progress updates.
"""
import pytest
from django.core.files.storage import default_storage
from django.db import DatabaseError

from resume_analysis import services
from resume_analysis.engines import AnalysisEngine, RoadmapEngine
from resume_analysis.exceptions import (
    ArtifactUploadError,
    InvalidProgressUpdate,
    InvalidResumeText,
    PersistenceError,
    ProviderTransportError,
)
from resume_analysis.models import ResumeAnalysis
from resume_analysis.schemas import AnalysisResult, Roadmap, RoadmapStep
from resume_analysis.storage_utils import upload_resume_artifact
from resume_analysis.tests.fixtures import FRONTEND_RESUME, ResumeAnalysisFactory, UserFactory

DATA = {
    'resume_text': FRONTEND_RESUME,
    'file_name': 'resume.docx',
    'file_size': 1024,
    'job_role': 'Frontend Developer',
    'experience_level': 'mid',
}


class RecordingUploader:
    def __init__(self, error=None):
        self.error = error
        self.calls = []

    def __call__(self, content, name, owner_id):
        self.calls.append((content, name, owner_id))
        if self.error is not None:
            raise self.error
        return {'url': f'https://files.example.com/{name}', 'public_id': f'resumes/{owner_id}/{name}'}


class GoodProvider:
    def analyze(self, *args):
        return AnalysisResult(match_percent=90, ats_score=85, skills_found=['React'], missing_skills=['GraphQL'])

    def roadmap(self, *args):
        return Roadmap('1-2 months', [RoadmapStep(step_number=3, title='GraphQL', progress_percent=70)])


class FailingProvider:
    def analyze(self, *args):
        raise ProviderTransportError('timeout')

    def roadmap(self, *args):
        raise ProviderTransportError('timeout')


@pytest.mark.django_db
class TestCreateResumeAnalysis:
    def setup_method(self):
        self.user = UserFactory()

    def test_uses_settings_when_no_engines_given(self):
        uploader = RecordingUploader()
        record = services.create_resume_analysis(self.user, DATA, uploader=uploader)

        assert record.analysis_source == 'fallback'
        assert record.roadmap_source == 'fallback'
        assert record.resume_url == 'https://files.example.com/resume.txt'
        assert record.storage_public_id == f'resumes/{self.user.pk}/resume.txt'
        assert uploader.calls == [(FRONTEND_RESUME.encode('utf-8'), 'resume.txt', self.user.pk)]
        assert record.roadmap['generatedAt']
        assert record.overall_progress == 0

    def test_provider_results_are_stored(self):
        provider = GoodProvider()
        record = services.create_resume_analysis(
            self.user,
            DATA,
            analysis_engine=AnalysisEngine(provider),
            roadmap_engine=RoadmapEngine(provider),
            uploader=RecordingUploader(),
        )

        assert record.analysis_source == 'ai'
        assert record.analysis['matchPercent'] == 90
        assert record.roadmap['totalEstimatedDuration'] == '1-2 months'
        assert record.steps[0]['stepNumber'] == 1
        assert record.steps[0]['progressPercent'] == 0

    def test_provider_failure_still_saves(self):
        provider = FailingProvider()
        record = services.create_resume_analysis(
            self.user,
            DATA,
            analysis_engine=AnalysisEngine(provider),
            roadmap_engine=RoadmapEngine(provider),
            uploader=RecordingUploader(),
        )
        assert record.analysis_source == 'fallback'
        assert record.roadmap_source == 'fallback'
        assert len(record.steps) == 4

    def test_invalid_text_skips_side_effects(self):
        uploader = RecordingUploader()
        with pytest.raises(InvalidResumeText):
            services.create_resume_analysis(self.user, dict(DATA, resume_text='Python developer'), uploader=uploader)
        assert uploader.calls == []
        assert ResumeAnalysis.objects.count() == 0

    def test_upload_failure_is_a_persistence_error(self):
        with pytest.raises(PersistenceError):
            services.create_resume_analysis(
                self.user, DATA, uploader=RecordingUploader(error=ArtifactUploadError('gone')),
            )
        assert ResumeAnalysis.objects.count() == 0

    def test_database_failure(self, monkeypatch):
        def broken_create(**kwargs):
            raise DatabaseError('disk I/O error')

        monkeypatch.setattr(ResumeAnalysis.objects, 'create', broken_create)
        with pytest.raises(PersistenceError):
            services.create_resume_analysis(self.user, DATA, uploader=RecordingUploader())

    def test_database_failure_removes_uploaded_artifact(self, monkeypatch):
        def broken_create(**kwargs):
            raise DatabaseError('down')

        stored = []

        def uploader(content, name, owner_id):
            result = upload_resume_artifact(content, name, owner_id)
            stored.append(result['public_id'])
            return result

        monkeypatch.setattr(ResumeAnalysis.objects, 'create', broken_create)
        with pytest.raises(PersistenceError):
            services.create_resume_analysis(self.user, dict(DATA, file_name='cv.pdf'), uploader=uploader)

        assert stored == [f'resumes/{self.user.pk}/cv.txt']
        assert not default_storage.exists(stored[0])

    def test_cleanup_failure_keeps_original_error(self, monkeypatch):
        def broken_create(**kwargs):
            raise DatabaseError('down')

        def broken_delete(public_id):
            raise ArtifactUploadError('bucket gone')

        monkeypatch.setattr(ResumeAnalysis.objects, 'create', broken_create)
        monkeypatch.setattr('resume_analysis.services.delete_resume_artifact', broken_delete)
        with pytest.raises(PersistenceError) as excinfo:
            services.create_resume_analysis(self.user, DATA, uploader=RecordingUploader())
        assert excinfo.type is PersistenceError
        assert isinstance(excinfo.value.__cause__, DatabaseError)


@pytest.mark.django_db
class TestUpdateRoadmapStep:
    def test_updates_and_persists(self):
        record = ResumeAnalysisFactory()

        updated = services.update_roadmap_step(record, 2, status='in_progress', progress_percent=30)

        assert updated.get_step(2).status == 'in_progress'
        assert updated.overall_progress == 8
        record.refresh_from_db()
        assert record.steps[1]['progressPercent'] == 30
        assert record.steps[1]['startedAt']
        assert record.steps[0] == updated.steps[0]

    def test_missing_step(self):
        record = ResumeAnalysisFactory()
        with pytest.raises(InvalidProgressUpdate):
            services.update_roadmap_step(record, 5, status='completed')

    def test_invalid_update_leaves_record_untouched(self):
        record = ResumeAnalysisFactory()
        before = record.roadmap
        with pytest.raises(InvalidProgressUpdate):
            services.update_roadmap_step(record, 1, progress_percent=120)
        record.refresh_from_db()
        assert record.roadmap == before
