import pytest


@pytest.fixture(autouse=True)
def offline_settings(settings):
    """Keep every test on the rule-based generator and in-memory storage."""
    settings.GEMINI_API_KEY = ''
    settings.USE_MOCK_AI = False
    settings.STORAGES = {
        'default': {'BACKEND': 'django.core.files.storage.InMemoryStorage'},
        'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
    }
    return settings
