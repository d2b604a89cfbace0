from datetime import datetime, time

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.permissions import IsDirectorUser, IsManagerUser
from .. import registration
from ..models import RegistrationRequest, RegistrationRole, RequestStatus
from ..serializers import (
    ProvisionedUserSerializer, RegistrationRequestCreateSerializer, RegistrationRequestSerializer,
    PendingRequestQuerySerializer, RequestingManagerSerializer,
)


def _query_param(params, *names):
    """First non-blank value among ``names``, else None."""
    for name in names:
        value = params.get(name)
        if value:
            return value
    return None


def _parse_query_datetime(value, name, end_of_day=False):
    if not value:
        return None
    try:
        parsed = parse_datetime(value)
        parsed_date = parse_date(value) if parsed is None else None
    except ValueError:
        raise ValidationError({name: 'Enter a valid date or date-time.'})
    if parsed is None:
        if parsed_date is None:
            raise ValidationError({name: 'Enter a valid date or date-time.'})
        parsed = datetime.combine(parsed_date, time.max if end_of_day else time.min)
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed


class RegistrationRequestViewSet(mixins.CreateModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """
    Managers submit registration requests; directors review them.

    Approval provisions the account and returns the temporary credentials
    so they can be handed over if the email does not arrive.
    """
    queryset = RegistrationRequest.objects.select_related('requested_by__user', 'location', 'reviewed_by')
    serializer_class = RegistrationRequestSerializer
    parser_classes = [JSONParser, MultiPartParser, FormParser]
    pagination_class = None

    def get_permissions(self):
        if self.action == 'create':
            return [IsManagerUser()]
        if self.action == 'retrieve':
            return [IsAuthenticated()]
        return [IsDirectorUser()]

    def get_serializer_class(self):
        if self.action == 'create':
            return RegistrationRequestCreateSerializer
        return super().get_serializer_class()

    def create(self, request, *args, **kwargs):
        manager = getattr(request.user, 'manager_profile', None)
        if manager is None:
            raise NotFound('Manager profile not found')

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        registration_request = registration.create_registration_request(manager, **serializer.validated_data)
        return Response({
            'success': True,
            'request': RegistrationRequestSerializer(registration_request, context=self.get_serializer_context()).data,
        }, status=status.HTTP_201_CREATED)

    def retrieve(self, request, *args, **kwargs):
        registration_request = registration.get_request(kwargs['pk'])
        return Response({'success': True, 'request': self.get_serializer(registration_request).data})

    @action(detail=False, methods=['GET'])
    def pending(self, request):
        """
        Pending requests (or another status via ``?status=``) with breakdowns.

        Query params: role, status, requestedById, locationId, dateFrom, dateTo
        (snake_case spellings are accepted too). Unknown role or status values
        are ignored; malformed ids or dates are a 400.
        """
        params = request.query_params
        role = params.get('role')
        if role not in RegistrationRole.values:
            role = None
        request_status = params.get('status')
        if request_status not in RequestStatus.values:
            request_status = None

        ids = PendingRequestQuerySerializer(data={
            'requested_by': _query_param(params, 'requestedById', 'requested_by'),
            'location': _query_param(params, 'locationId', 'location'),
        })
        ids.is_valid(raise_exception=True)

        result = registration.get_pending_requests(
            role=role,
            status=request_status,
            requested_by=ids.validated_data.get('requested_by'),
            location=ids.validated_data.get('location'),
            date_from=_parse_query_datetime(_query_param(params, 'dateFrom', 'date_from'), 'dateFrom'),
            date_to=_parse_query_datetime(_query_param(params, 'dateTo', 'date_to'), 'dateTo', end_of_day=True),
        )
        requests = result['requests']
        return Response({
            'success': True,
            'requests': self.get_serializer(requests, many=True).data,
            'totalCount': len(requests),
            'roleCounts': result['role_counts'],
            'managerCounts': result['manager_counts'],
        })

    @action(detail=True, methods=['POST'])
    def approve(self, request, pk=None):
        result = registration.approve_request(pk, request.user)
        return Response({
            'success': True,
            'user': ProvisionedUserSerializer(result['user']).data,
            'credentials': result['credentials'],
            'emailSent': result['email_sent'],
        })

    @action(detail=True, methods=['POST'])
    def reject(self, request, pk=None):
        reason = request.data.get('reason') or request.data.get('rejection_reason')
        registration_request = registration.reject_request(pk, request.user, reason=reason)
        return Response({'success': True, 'request': self.get_serializer(registration_request).data})

    @action(detail=False, methods=['GET'])
    def stats(self, request):
        return Response({'success': True, 'stats': registration.get_approval_stats()})

    @action(detail=False, methods=['GET'])
    def managers(self, request):
        managers = registration.get_requesting_managers()
        return Response({'success': True, 'managers': RequestingManagerSerializer(managers, many=True).data})
