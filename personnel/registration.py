"""
Registration requests: manager submissions, director review, and account
provisioning on approval.
"""
import logging
from datetime import timedelta

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import Count, Q
from django.utils import timezone
from django.utils.crypto import get_random_string
from rest_framework.exceptions import NotFound

from core.exceptions import Conflict, PreconditionFailed
from notifications.utils import send_and_save_notification, send_credentials_email
from users.models import CustomUser, UserRole, UserStatus
from .identifiers import generate_employee_id
from .models import (
    Manager, Operator, RegistrationRequest, RegistrationRole, RequestStatus, Secretary, Supervisor,
)

logger = logging.getLogger(__name__)

ROLE_MAPPING = {
    RegistrationRole.SUPERVISOR: UserRole.SUPERVISOR,
    RegistrationRole.HR: UserRole.SECRETARY,
    RegistrationRole.SECRETARY: UserRole.SECRETARY,
    RegistrationRole.GENERAL_SUPERVISOR: UserRole.GENERAL_SUPERVISOR,
    RegistrationRole.GUARD: UserRole.OPERATOR,
}

PASSWORD_RANDOM_LENGTH = 8
PASSWORD_CHARSET = 'ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789'


def generate_password(employee_id):
    random_part = get_random_string(PASSWORD_RANDOM_LENGTH, allowed_chars=PASSWORD_CHARSET)
    return f"{settings.TEMP_PASSWORD_PREFIX}_{employee_id}_{random_part}"


def parse_full_name(full_name):
    """'Ada Lovelace' -> ('Ada', 'Lovelace'); a single name is used for both parts."""
    parts = full_name.split()
    first_name = parts[0]
    last_name = ' '.join(parts[1:]) or first_name
    return first_name, last_name


def normalize_email(email):
    return email.strip().lower()


def _notify(user, title, message, data):
    """Notifications follow a committed change; failing to deliver one must not undo it."""
    try:
        send_and_save_notification(user=user, title=title, message=message, data=data)
    except Exception:
        logger.exception(f"Failed to notify {user.email}: {title}")


def _load_request(request_id, for_update=False):
    queryset = RegistrationRequest.objects.select_related('requested_by__user', 'location')
    if for_update:
        queryset = queryset.select_for_update(of=('self',))
    try:
        return queryset.get(pk=request_id)
    except (RegistrationRequest.DoesNotExist, ValueError):
        raise NotFound('Registration request not found')


def create_registration_request(requested_by, **data):
    """
    Store a new PENDING request for ``requested_by`` (a Manager).

    Raises Conflict when the email already belongs to a user or to another
    pending request.
    """
    email = normalize_email(data.pop('email'))
    full_name = data.pop('full_name').strip()
    logger.info(f"Creating registration request for {email} ({data.get('role')})")

    if CustomUser.objects.filter(email__iexact=email).exists():
        raise Conflict('This email is already registered')
    if RegistrationRequest.objects.filter(email=email, status=RequestStatus.PENDING).exists():
        raise Conflict('A pending registration request already exists for this email')

    try:
        with transaction.atomic():
            registration_request = RegistrationRequest.objects.create(
                requested_by=requested_by,
                email=email,
                full_name=full_name,
                status=RequestStatus.PENDING,
                **data,
            )
    except IntegrityError:
        # a concurrent submission won the partial unique index
        raise Conflict('A pending registration request already exists for this email')

    logger.info(f"Registration request {registration_request.pk} created")

    directors = CustomUser.objects.filter(role=UserRole.DIRECTOR, status=UserStatus.ACTIVE)
    for director in directors:
        _notify(
            user=director,
            title="New Registration Request",
            message=(
                f"{requested_by.user.full_name} submitted {full_name} "
                f"for the {registration_request.get_role_display()} role."
            ),
            data={'registration_request_id': registration_request.pk},
        )
    return registration_request


def get_pending_requests(role=None, status=None, requested_by=None, location=None, date_from=None, date_to=None):
    """
    Filtered request list plus pending breakdowns by role and by manager.

    The two breakdowns always cover every PENDING request, whatever filters
    were applied to the list itself.
    """
    requests = RegistrationRequest.objects.select_related('requested_by__user', 'location', 'reviewed_by')
    requests = requests.filter(status=status or RequestStatus.PENDING)
    if role:
        requests = requests.filter(role=role)
    if requested_by:
        requests = requests.filter(requested_by_id=requested_by)
    if location:
        requests = requests.filter(location_id=location)
    if date_from:
        requests = requests.filter(created_at__gte=date_from)
    if date_to:
        requests = requests.filter(created_at__lte=date_to)
    requests = requests.order_by('-created_at')

    pending = RegistrationRequest.objects.filter(status=RequestStatus.PENDING).order_by()
    role_counts = {
        row['role']: row['count']
        for row in pending.values('role').annotate(count=Count('id'))
    }
    manager_counts = {
        str(row['requested_by']): row['count']
        for row in pending.values('requested_by').annotate(count=Count('id'))
    }
    return {
        'requests': list(requests),
        'role_counts': role_counts,
        'manager_counts': manager_counts,
    }


def get_request(request_id):
    return _load_request(request_id)


def _create_profile(registration_request, user, employee_id):
    role = registration_request.role
    start_date = registration_request.start_date or timezone.localdate()

    if role in (RegistrationRole.SUPERVISOR, RegistrationRole.GENERAL_SUPERVISOR):
        return Supervisor.objects.create(
            user=user,
            employee_id=employee_id,
            location=registration_request.location,
            full_name=registration_request.full_name,
            start_date=start_date,
            date_of_employment=start_date,
            address=registration_request.address or '',
            passport_photo=user.profile_photo,
            supervisor_type=(
                Supervisor.SupervisorType.GENERAL_SUPERVISOR
                if role == RegistrationRole.GENERAL_SUPERVISOR
                else Supervisor.SupervisorType.SUPERVISOR
            ),
        )
    if role in (RegistrationRole.SECRETARY, RegistrationRole.HR):
        return Secretary.objects.create(
            user=user,
            employee_id=employee_id,
            full_name=registration_request.full_name,
            address=registration_request.address or '',
            start_date=start_date,
            date_of_employment=start_date,
        )
    if role == RegistrationRole.GUARD:
        default_supervisor = Supervisor.objects.order_by('id').first()
        if default_supervisor is None:
            raise PreconditionFailed('No supervisor available to assign this guard')
        return Operator.objects.create(
            user=user,
            employee_id=employee_id,
            supervisor=default_supervisor,
            location=registration_request.location,
            shift_type=registration_request.shift,
            passport_photo=user.profile_photo,
            start_date=start_date,
        )
    raise PreconditionFailed(f"Unsupported registration role {role}")


def approve_request(request_id, reviewer):
    """
    Approve a PENDING request: create the account and its role profile, mark
    the request APPROVED, then mail the credentials.

    Account, profile and status change commit together or not at all. Mail
    delivery happens after the commit and its failure only shows up as
    ``email_sent=False``.
    """
    logger.info(f"Approving registration request {request_id} by {reviewer.email}")

    with transaction.atomic():
        registration_request = _load_request(request_id, for_update=True)
        registration_request.ensure_can_transition_to(RequestStatus.APPROVED)

        if CustomUser.objects.filter(email__iexact=registration_request.email).exists():
            raise Conflict('This email is already registered')

        employee_id = generate_employee_id(registration_request.role)
        temporary_password = generate_password(employee_id)
        first_name, last_name = parse_full_name(registration_request.full_name)

        user = CustomUser.objects.create_user(
            email=registration_request.email,
            password=temporary_password,
            role=ROLE_MAPPING[registration_request.role],
            status=UserStatus.ACTIVE,
            first_name=first_name,
            last_name=last_name,
            phone_number=registration_request.phone,
            employee_id=employee_id,
            profile_photo=registration_request.profile_photo.name if registration_request.profile_photo else None,
            gender=registration_request.gender,
            date_of_birth=registration_request.date_of_birth,
            must_change_password=True,
            created_by=reviewer,
        )
        _create_profile(registration_request, user, employee_id)

        registration_request.transition_to(
            RequestStatus.APPROVED,
            reviewer,
            generated_user=user,
            generated_employee_id=employee_id,
            generated_password=temporary_password,
        )

    logger.info(f"Registration request {request_id} approved: user {user.pk}, employee id {employee_id}")

    email_sent = False
    try:
        send_credentials_email(
            email=user.email,
            first_name=first_name,
            username=user.email,
            password=temporary_password,
        )
        email_sent = True
    except Exception:
        logger.exception(f"Failed to send credentials email to {user.email}")

    _notify(
        user=registration_request.requested_by.user,
        title="Registration Request Approved",
        message=f"{registration_request.full_name} was approved with employee id {employee_id}.",
        data={'registration_request_id': registration_request.pk, 'user_id': user.pk},
    )

    return {
        'user': user,
        'credentials': {'email': user.email, 'password': temporary_password},
        'email_sent': email_sent,
    }


def reject_request(request_id, reviewer, reason=None):
    logger.info(f"Rejecting registration request {request_id} by {reviewer.email}")

    with transaction.atomic():
        registration_request = _load_request(request_id, for_update=True)
        registration_request.transition_to(
            RequestStatus.REJECTED,
            reviewer,
            rejection_reason=reason or None,
        )

    logger.info(f"Registration request {request_id} rejected")

    message = f"{registration_request.full_name} was not approved."
    if reason:
        message = f"{message} Reason: {reason}"
    _notify(
        user=registration_request.requested_by.user,
        title="Registration Request Rejected",
        message=message,
        data={'registration_request_id': registration_request.pk},
    )
    return registration_request


def get_approval_stats():
    now = timezone.localtime()
    start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)
    week_ago = now - timedelta(days=7)
    return RegistrationRequest.objects.aggregate(
        pending=Count('id', filter=Q(status=RequestStatus.PENDING)),
        approvedToday=Count('id', filter=Q(status=RequestStatus.APPROVED, reviewed_at__gte=start_of_day)),
        rejectedToday=Count('id', filter=Q(status=RequestStatus.REJECTED, reviewed_at__gte=start_of_day)),
        approvedThisWeek=Count('id', filter=Q(status=RequestStatus.APPROVED, reviewed_at__gte=week_ago)),
    )


def get_requesting_managers():
    """Managers with at least one PENDING request, with their pending count."""
    return (
        Manager.objects.select_related('user')
        .annotate(request_count=Count(
            'registration_requests', filter=Q(registration_requests__status=RequestStatus.PENDING)
        ))
        .filter(request_count__gt=0)
        .order_by('-request_count', 'id')
    )
