"""
Gemini adapter for resume analysis and roadmap generation.

One ``GeminiClient`` is built per request from settings and handed to the
engines. Every call is a single ``generateContent`` request with no retry;
transport problems surface as ``ProviderTransportError`` and unusable model
output as ``ProviderParseError`` so the engines can fall back.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, Optional, Sequence

import requests
from django.conf import settings

from resume_analysis.exceptions import ProviderParseError, ProviderTransportError
from resume_analysis.prompts import build_analysis_prompt, build_roadmap_prompt
from resume_analysis.sanitizers import sanitize_analysis, sanitize_roadmap
from resume_analysis.schemas import AnalysisResult, Roadmap

logger = logging.getLogger(__name__)

GEMINI_ENDPOINT = 'https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent'
DEFAULT_MODEL = 'gemini-1.5-flash'
DEFAULT_TIMEOUT = 40

CODE_FENCE_RX = re.compile(r'```(?:json)?\s*', re.IGNORECASE)


def strip_code_fence(text: str) -> str:
    """Remove markdown code fences the model sometimes wraps JSON in."""
    return CODE_FENCE_RX.sub('', text or '').strip()


def parse_json_document(raw_text: str) -> Dict[str, Any]:
    cleaned = strip_code_fence(raw_text)
    try:
        payload = json.loads(cleaned)
    except (json.JSONDecodeError, RecursionError) as exc:
        logger.warning('Failed to parse Gemini JSON (%s characters): %s', len(cleaned), exc)
        raise ProviderParseError('Gemini returned an unreadable response.') from exc
    if not isinstance(payload, dict):
        raise ProviderParseError('Gemini response is not a JSON object.')
    return payload


class GeminiClient:
    """Explicitly configured handle on the Gemini REST API."""

    def __init__(
        self,
        api_key: str,
        *,
        model: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        if not api_key:
            raise ValueError('Gemini API key is required.')
        self.api_key = api_key
        self.model = model or DEFAULT_MODEL
        self.timeout = timeout
        self.session = session or requests.Session()

    def __repr__(self) -> str:
        return f'GeminiClient(model={self.model!r}, timeout={self.timeout!r})'

    def generate_content(self, prompt: str) -> str:
        """Send one prompt and return the first text part of the first candidate."""
        endpoint = GEMINI_ENDPOINT.format(model=self.model)
        payload = {
            'contents': [
                {
                    'role': 'user',
                    'parts': [{'text': prompt}],
                }
            ],
            'generationConfig': {
                'temperature': 0.4,
                'topP': 0.9,
                'topK': 40,
                'maxOutputTokens': 8192,
                'responseMimeType': 'application/json',
            },
        }
        try:
            response = self.session.post(
                endpoint,
                params={'key': self.api_key},
                json=payload,
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as exc:
            logger.warning('Gemini API request failed: %s', exc)
            raise ProviderTransportError('Unable to reach Gemini API.') from exc
        except (ValueError, RecursionError) as exc:
            raise ProviderTransportError('Gemini API returned a non-JSON body.') from exc
        if not isinstance(data, dict):
            raise ProviderTransportError('Gemini API returned an unexpected body.')

        feedback = data.get('promptFeedback') or {}
        if not isinstance(feedback, dict):
            raise ProviderTransportError('Gemini API returned malformed prompt feedback.')
        block_reason = feedback.get('blockReason')
        if block_reason:
            raise ProviderTransportError(f'Content was blocked by Gemini: {block_reason}')

        candidates = data.get('candidates') or []
        if not isinstance(candidates, list):
            raise ProviderTransportError('Gemini API returned malformed candidates.')
        if not candidates:
            raise ProviderTransportError('Gemini returned no candidates.')

        first_candidate = candidates[0]
        if not isinstance(first_candidate, dict):
            raise ProviderTransportError('Gemini API returned a malformed candidate.')
        finish_reason = first_candidate.get('finishReason')
        if finish_reason and finish_reason not in ('STOP', 'MAX_TOKENS'):
            raise ProviderTransportError(f'Generation stopped: {finish_reason}')

        content = first_candidate.get('content') or {}
        if not isinstance(content, dict):
            raise ProviderTransportError('Gemini API returned malformed candidate content.')
        parts = content.get('parts') or []
        if not isinstance(parts, list):
            raise ProviderTransportError('Gemini API returned malformed content parts.')

        texts = [
            part['text'] for part in parts
            if isinstance(part, dict) and isinstance(part.get('text'), str) and part['text']
        ]
        if not texts:
            raise ProviderParseError('Gemini response did not include text output.')
        return texts[0]

    def analyze(
        self,
        resume_text: str,
        job_role: str,
        experience_level: str,
        job_description: Optional[str] = None,
    ) -> AnalysisResult:
        prompt = build_analysis_prompt(resume_text, job_role, experience_level, job_description)
        logger.debug('Analysis prompt length: %s characters', len(prompt))
        raw_text = self.generate_content(prompt)
        return sanitize_analysis(parse_json_document(raw_text))

    def roadmap(
        self,
        missing_skills: Sequence[str],
        job_role: str,
        experience_level: str,
        existing_skills: Sequence[str] = (),
    ) -> Roadmap:
        prompt = build_roadmap_prompt(missing_skills, job_role, experience_level, existing_skills)
        logger.debug('Roadmap prompt length: %s characters', len(prompt))
        raw_text = self.generate_content(prompt)
        return sanitize_roadmap(parse_json_document(raw_text))


def build_provider_client() -> Optional[GeminiClient]:
    """
    Build the provider client from settings.

    Returns ``None`` when ``USE_MOCK_AI`` is set or no API key is configured;
    the engines then use the rule-based generator.
    """
    if getattr(settings, 'USE_MOCK_AI', False):
        logger.info('USE_MOCK_AI is set; using rule-based analysis')
        return None
    api_key = getattr(settings, 'GEMINI_API_KEY', '')
    if not api_key:
        logger.info('No Gemini API key configured; using rule-based analysis')
        return None
    return GeminiClient(
        api_key,
        model=getattr(settings, 'GEMINI_MODEL', None),
        timeout=getattr(settings, 'GEMINI_TIMEOUT', DEFAULT_TIMEOUT),
    )
