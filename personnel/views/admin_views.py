import logging

from django.db import IntegrityError, transaction
from django.utils import timezone
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from core.exceptions import Conflict, InvalidState
from core.permissions import IsDirectorUser
from users.models import CustomUser, UserRole, UserStatus
from ..identifiers import generate_staff_id
from ..models import AdminProfile
from ..serializers import AdminProfileSerializer, AdminRegistrationSerializer

logger = logging.getLogger(__name__)

PROFILE_FIELDS = [
    'job_title', 'department', 'office_location', 'admin_role_level', 'employment_start_date', 'national_id',
    'address', 'salary', 'bank_name', 'bank_account_number', 'access_expiry_date', 'notes',
]


class AdminViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """
    Back-office admin accounts, registered directly by a director.
    """
    queryset = AdminProfile.objects.select_related('user', 'office_location').order_by('staff_id')
    serializer_class = AdminProfileSerializer
    permission_classes = [IsDirectorUser]

    def get_serializer_class(self):
        if self.action == 'create':
            return AdminRegistrationSerializer
        return super().get_serializer_class()

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        if CustomUser.objects.filter(email__iexact=data['email']).exists():
            raise Conflict('This email is already registered')

        try:
            with transaction.atomic():
                user = CustomUser.objects.create_user(
                    email=data['email'],
                    password=data['password'],
                    first_name=data['first_name'],
                    last_name=data['last_name'],
                    phone_number=data.get('phone_number') or None,
                    gender=data.get('gender') or None,
                    date_of_birth=data.get('date_of_birth'),
                    role=UserRole.ADMIN,
                    status=UserStatus.ACTIVE,
                    must_change_password=True,
                    created_by=request.user,
                )
                profile = AdminProfile.objects.create(
                    user=user,
                    staff_id=generate_staff_id(),
                    created_by=request.user,
                    **{field: data[field] for field in PROFILE_FIELDS if field in data},
                )
        except IntegrityError:
            raise Conflict('This email is already registered')

        logger.info(f"Admin {profile.staff_id} registered for {user.email}")
        return Response({
            'success': True,
            'admin': AdminProfileSerializer(profile, context=self.get_serializer_context()).data,
        }, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['POST'])
    def suspend(self, request, pk=None):
        profile = self.get_object()
        if profile.is_suspended:
            raise InvalidState('This admin is already suspended')

        with transaction.atomic():
            profile.is_suspended = True
            profile.suspension_reason = request.data.get('reason') or None
            profile.suspended_at = timezone.now()
            profile.suspended_by = request.user
            profile.save()
            profile.user.status = UserStatus.SUSPENDED
            profile.user.save(update_fields=['status'])

        logger.info(f"Admin {profile.staff_id} suspended by {request.user.email}")
        return Response({'success': True, 'admin': self.get_serializer(profile).data})

    @action(detail=True, methods=['POST'])
    def reactivate(self, request, pk=None):
        profile = self.get_object()
        if not profile.is_suspended:
            raise InvalidState('This admin is not suspended')

        with transaction.atomic():
            profile.is_suspended = False
            profile.suspension_reason = None
            profile.suspended_at = None
            profile.suspended_by = None
            profile.save()
            profile.user.status = UserStatus.ACTIVE
            profile.user.save(update_fields=['status'])

        logger.info(f"Admin {profile.staff_id} reactivated by {request.user.email}")
        return Response({'success': True, 'admin': self.get_serializer(profile).data})
