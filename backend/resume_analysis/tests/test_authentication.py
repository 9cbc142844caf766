"""
Tests for Firebase token authentication.
"""
import pytest
from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework.test import APIClient

from resume_analysis.tests.fixtures import ResumeAnalysisFactory

User = get_user_model()


@pytest.mark.django_db
class TestFirebaseAuthentication:
    def setup_method(self):
        self.client = APIClient()
        self.url = reverse('resume-analysis-list')

    def test_valid_token_creates_user(self, monkeypatch):
        monkeypatch.setattr('resume_analysis.authentication.initialize_firebase', lambda: object())
        monkeypatch.setattr(
            'resume_analysis.authentication.verify_firebase_token',
            lambda token: {'uid': 'firebase-uid-1', 'email': 'Ada@Example.com', 'name': 'Ada King Lovelace'},
        )
        self.client.credentials(HTTP_AUTHORIZATION='Bearer good-token')

        resp = self.client.get(self.url)

        assert resp.status_code == 200
        user = User.objects.get(username='firebase-uid-1')
        assert user.email == 'ada@example.com'
        assert user.first_name == 'Ada'
        assert user.last_name == 'King Lovelace'

    def test_same_uid_resolves_to_same_user(self, monkeypatch):
        existing = ResumeAnalysisFactory(user__username='firebase-uid-2').user
        monkeypatch.setattr('resume_analysis.authentication.initialize_firebase', lambda: object())
        monkeypatch.setattr(
            'resume_analysis.authentication.verify_firebase_token',
            lambda token: {'uid': 'firebase-uid-2'},
        )
        self.client.credentials(HTTP_AUTHORIZATION='Bearer good-token')

        resp = self.client.get(self.url)

        assert resp.json()['count'] == 1
        assert User.objects.filter(username='firebase-uid-2').count() == 1
        assert User.objects.get(username='firebase-uid-2').pk == existing.pk

    def test_invalid_token(self, monkeypatch):
        monkeypatch.setattr('resume_analysis.authentication.initialize_firebase', lambda: object())
        monkeypatch.setattr('resume_analysis.authentication.verify_firebase_token', lambda token: None)
        self.client.credentials(HTTP_AUTHORIZATION='Bearer bad-token')

        resp = self.client.get(self.url)

        assert resp.status_code == 401
        assert resp.json()['error']['message'] == 'Invalid authentication token'

    def test_firebase_not_configured(self, monkeypatch):
        monkeypatch.setattr('resume_analysis.authentication.initialize_firebase', lambda: None)
        self.client.credentials(HTTP_AUTHORIZATION='Bearer any-token')

        resp = self.client.get(self.url)

        assert resp.status_code == 401

    def test_disabled_user(self, monkeypatch):
        User.objects.create_user(username='firebase-uid-3', is_active=False)
        monkeypatch.setattr('resume_analysis.authentication.initialize_firebase', lambda: object())
        monkeypatch.setattr(
            'resume_analysis.authentication.verify_firebase_token',
            lambda token: {'uid': 'firebase-uid-3'},
        )
        self.client.credentials(HTTP_AUTHORIZATION='Bearer good-token')

        assert self.client.get(self.url).status_code == 401

    def test_no_header(self):
        assert self.client.get(self.url).status_code == 401
