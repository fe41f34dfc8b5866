import logging

from django.db import IntegrityError
from django.http import Http404
from django.utils import timezone
from rest_framework import status
from rest_framework.exceptions import APIException, NotFound, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler, set_rollback

logger = logging.getLogger(__name__)


class ResourceNotFound(NotFound):
    """A report or doctor identifier that does not exist."""
    default_detail = 'Resource not found.'
    default_code = 'not_found'


class ReferenceConflict(APIException):
    """A write that points at a donor or doctor which does not exist."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Referenced donor or doctor does not exist.'
    default_code = 'reference_conflict'


def _error_code(exc) -> str:
    if isinstance(exc, ValidationError):
        return 'validation_error'
    if isinstance(exc, Http404):
        return 'not_found'
    return getattr(exc, 'default_code', None) or 'api_error'


def _body(status_code: int, code: str, message, path: str, details=None) -> dict:
    body = {
        'ok': False,
        'timestamp': timezone.now().isoformat(),
        'status': status_code,
        'error': code,
        'message': message,
        'path': path,
    }
    if details is not None:
        body['details'] = details
    return body


def api_exception_handler(exc, context):
    request = context.get('request')
    path = request.path if request is not None else ''

    if isinstance(exc, IntegrityError):
        logger.warning('Integrity error on %s: %s', path, exc)
        exc = ReferenceConflict()

    resp = drf_exception_handler(exc, context)
    if resp is None:
        logger.error('Unhandled error on %s', path, exc_info=exc)
        set_rollback()
        return Response(
            _body(500, 'server_error', 'An unexpected error occurred.', path),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    code = _error_code(exc)
    if isinstance(exc, ValidationError):
        return Response(
            _body(resp.status_code, code, 'Validation failed.', path, details=resp.data),
            status=resp.status_code,
        )
    if isinstance(resp.data, dict):
        message = resp.data.get('detail') or resp.data
    else:
        message = str(resp.data)
    return Response(_body(resp.status_code, code, message, path), status=resp.status_code, headers=_passthrough_headers(resp))


def _passthrough_headers(resp) -> dict:
    return {k: v for k, v in resp.items() if k in ('Allow', 'Retry-After', 'WWW-Authenticate')}
