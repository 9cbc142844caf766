"""
Test fixtures and factories for creating test data.
Uses factory_boy for consistent test data generation.
"""
import factory
import requests
from factory.django import DjangoModelFactory
from django.contrib.auth import get_user_model

from resume_analysis.models import ResumeAnalysis

User = get_user_model()

FRONTEND_RESUME = (
    "Jane Doe - jane.doe@example.com\n"
    "Experience\n"
    "Frontend engineer building dashboards with JavaScript and React.\n"
    "Styled components with HTML and CSS, versioned everything in Git.\n"
    "Skills: JavaScript, React, HTML, CSS, Git"
)


def make_step(number, status='not_started', progress=0, **extra):
    step = {
        'stepNumber': number,
        'title': f'Step {number}',
        'description': '',
        'estimatedDuration': '2-3 weeks',
        'skills': [],
        'resources': [],
        'status': status,
        'progressPercent': progress,
        'notes': '',
        'startedAt': None,
        'completedAt': None,
    }
    step.update(extra)
    return step


class UserFactory(DjangoModelFactory):
    """Factory for creating test users"""
    class Meta:
        model = User

    username = factory.Sequence(lambda n: f'user{n}')
    email = factory.Sequence(lambda n: f'user{n}@example.com')
    first_name = factory.Faker('first_name')
    last_name = factory.Faker('last_name')
    is_active = True


class ResumeAnalysisFactory(DjangoModelFactory):
    """Factory for stored analyses with a four-step roadmap"""
    class Meta:
        model = ResumeAnalysis

    user = factory.SubFactory(UserFactory)
    file_name = 'resume.pdf'
    file_size = 48213
    resume_url = ''
    storage_public_id = ''
    job_role = 'Frontend Developer'
    experience_level = 'mid'
    analysis = factory.LazyFunction(lambda: {
        'matchPercent': 75,
        'atsScore': 61,
        'skillsFound': ['javascript', 'react'],
        'missingSkills': ['TypeScript', 'GraphQL', 'Testing', 'Webpack'],
        'suggestions': [],
        'strengthAreas': ['Technical Skills'],
        'improvementAreas': ['Keyword Optimization'],
    })
    roadmap = factory.LazyFunction(lambda: {
        'totalEstimatedDuration': '3-4 months',
        'generatedAt': '2026-01-01T00:00:00+00:00',
        'steps': [make_step(n) for n in range(1, 5)],
    })


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f'{self.status_code} error')

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


def gemini_body(text, finish_reason='STOP'):
    return {
        'candidates': [
            {
                'content': {'parts': [{'text': text}]},
                'finishReason': finish_reason,
            }
        ]
    }

