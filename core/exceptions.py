"""
Application error types and the REST framework exception handler.

Service functions raise one of the APIException subclasses below (or one of
DRF's own: NotFound, PermissionDenied, ValidationError); the handler turns
every error into the same JSON envelope:

    {"success": false, "status": "error", "message": "..."}
"""
import logging
import traceback

from django.conf import settings
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class Conflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'A conflicting record already exists.'
    default_code = 'conflict'


class InvalidState(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'This request has already been processed.'
    default_code = 'invalid_state'


class PreconditionFailed(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'A required precondition was not met.'
    default_code = 'precondition_failed'


def _first_message(detail):
    """Pull a single human readable message out of a DRF error detail."""
    if isinstance(detail, dict):
        if 'detail' in detail:
            return _first_message(detail['detail'])
        for field, value in detail.items():
            message = _first_message(value)
            if field == 'non_field_errors':
                return message
            return f"{field}: {message}"
        return ''
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else ''
    return str(detail)


def custom_exception_handler(exc, context):
    response = exception_handler(exc, context)
    view = context.get('view')
    view_name = view.__class__.__name__ if view else 'unknown view'

    if response is None:
        logger.error(f"Unhandled error in {view_name}: {exc}", exc_info=exc)
        data = {
            'success': False,
            'status': 'error',
            'message': str(exc) if settings.DEBUG else 'Something went wrong',
        }
        if settings.DEBUG:
            data['stack'] = ''.join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return Response(data, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    detail = response.data
    payload = {
        'success': False,
        'status': 'error',
        'message': _first_message(detail),
    }
    if isinstance(exc, ValidationError):
        payload['errors'] = detail
    logger.info(f"{response.status_code} in {view_name}: {payload['message']}")
    response.data = payload
    return response
