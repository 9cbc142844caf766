"""
Domain errors for resume analysis and the DRF handler that renders them.

Validation-class errors reach the caller with a specific message.
Provider errors are absorbed by the engines and never rendered here.
Persistence errors are logged with their cause and rendered as a generic
failure.
"""
from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework import status, exceptions as drf_exceptions
import logging

logger = logging.getLogger(__name__)


class ResumeAnalysisError(Exception):
    """Base class for every error raised by the analysis core."""

    code = 'analysis_error'

    def __init__(self, message: str = ''):
        super().__init__(message)
        self.message = message


class MissingField(ResumeAnalysisError):
    """A required input was omitted or blank."""

    code = 'missing_field'

    def __init__(self, field: str, message: str = ''):
        super().__init__(message or f'{field} is required.')
        self.field = field


class InvalidResumeText(ResumeAnalysisError):
    """The resume text failed the quality checks."""

    code = 'invalid_resume_text'

    def __init__(self, reason: str, message: str = ''):
        super().__init__(message or 'Resume text is invalid.')
        self.reason = reason


class InvalidProgressUpdate(ResumeAnalysisError):
    """A roadmap step update would leave the step in an illegal state."""

    code = 'invalid_progress_update'


class ProviderError(ResumeAnalysisError):
    code = 'provider_error'


class ProviderTransportError(ProviderError):
    """The provider could not be reached or answered with an error."""

    code = 'provider_transport_error'


class ProviderParseError(ProviderError):
    """The provider answered, but not with the JSON document we asked for."""

    code = 'provider_parse_error'


class PersistenceError(ResumeAnalysisError):
    code = 'persistence_error'


class ArtifactUploadError(PersistenceError):
    code = 'artifact_upload_error'


GENERIC_FAILURE_MESSAGE = 'An unexpected error occurred. Please try again later.'


def _error_body(code, message, details=None):
    body = {'error': {'code': code, 'message': message}}
    if details:
        body['error']['details'] = details
    return body


def _collect_messages_from_response_data(response_data):
    """Build a list of human-readable messages from DRF error response data."""
    messages = []
    if isinstance(response_data, dict):
        # DRF returns {'field': ['msg']} or {'detail': 'msg'}
        if 'detail' in response_data and not isinstance(response_data.get('detail'), (dict, list)):
            messages.append(str(response_data['detail']))
        for field, value in response_data.items():
            if field == 'detail':
                continue
            if isinstance(value, (list, tuple)) and value:
                msg = str(value[0])
            else:
                msg = str(value)
            messages.append(f"{field}: {msg}")
    elif isinstance(response_data, (list, tuple)):
        messages.extend(str(v) for v in response_data if v)
    elif response_data:
        messages.append(str(response_data))
    return messages


def _handle_domain_error(exc):
    if isinstance(exc, MissingField):
        return Response(
            _error_body(exc.code, exc.message, {'field': exc.field}),
            status=status.HTTP_400_BAD_REQUEST,
        )
    if isinstance(exc, InvalidResumeText):
        return Response(
            _error_body(exc.code, exc.message, {'reason': exc.reason}),
            status=status.HTTP_400_BAD_REQUEST,
        )
    if isinstance(exc, InvalidProgressUpdate):
        return Response(_error_body(exc.code, exc.message), status=status.HTTP_400_BAD_REQUEST)
    if isinstance(exc, PersistenceError):
        logger.error('Persistence failure: %s', exc, exc_info=exc)
        return Response(
            _error_body('internal_server_error', GENERIC_FAILURE_MESSAGE),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    return None


def custom_exception_handler(exc, context):
    """
    Render every API error in one envelope.

    Returns:
        Response with format:
        {
            "error": {
                "code": "error_code",
                "message": "User-friendly error message",
                "details": {...}  # Optional field-specific errors
            }
        }
    """
    if isinstance(exc, ResumeAnalysisError):
        response = _handle_domain_error(exc)
        if response is not None:
            return response

    response = exception_handler(exc, context)

    if response is None:
        logger.error(f"Unhandled exception: {exc}", exc_info=exc)
        return Response(
            _error_body('internal_server_error', GENERIC_FAILURE_MESSAGE),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    # Auth failures always return 401 so clients can re-authenticate.
    if isinstance(exc, (drf_exceptions.NotAuthenticated, drf_exceptions.AuthenticationFailed)):
        response.status_code = status.HTTP_401_UNAUTHORIZED

    messages = _collect_messages_from_response_data(response.data)
    details = None
    if isinstance(response.data, dict):
        details = {}
        for field, errors in response.data.items():
            if field == 'detail':
                continue
            if isinstance(errors, list):
                details[field] = str(errors[0]) if errors else 'Invalid value'
            else:
                details[field] = str(errors)

    response.data = _error_body(
        get_error_code(exc, response.status_code),
        messages[0] if messages else 'An error occurred',
        details,
    )
    return response


def get_error_code(exc, status_code):
    """Generate error code from exception."""
    if hasattr(exc, 'default_code'):
        return exc.default_code

    code_map = {
        400: 'bad_request',
        401: 'unauthorized',
        403: 'forbidden',
        404: 'not_found',
        405: 'method_not_allowed',
        429: 'too_many_requests',
        500: 'internal_server_error',
    }
    return code_map.get(status_code, 'error')
