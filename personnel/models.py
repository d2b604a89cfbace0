from django.db import models
from django.db.models import Q
from django.core.validators import MinValueValidator
from django.utils import timezone
from users.models import CustomUser
from core.exceptions import InvalidState


class Location(models.Model):
    # ForeignKey from Beat - related_name: beats
    # ForeignKey from RegistrationRequest - related_name: registration_requests
    LOCATION_TYPES = [
        ('OFFICE', 'Office'),
        ('WAREHOUSE', 'Warehouse'),
        ('CLIENT_SITE', 'Client Site'),
        ('OPERATIONAL_BASE', 'Operational Base'),
        ('OTHER', 'Other'),
    ]
    location_name = models.CharField(max_length=255)
    city = models.CharField(max_length=120, db_index=True)
    state = models.CharField(max_length=120, db_index=True)
    lga = models.CharField(max_length=120, blank=True, null=True)
    address = models.CharField(max_length=255)
    latitude = models.FloatField(blank=True, null=True)
    longitude = models.FloatField(blank=True, null=True)
    location_type = models.CharField(max_length=20, choices=LOCATION_TYPES, default='OPERATIONAL_BASE')
    is_active = models.BooleanField(default=True)
    total_beats = models.PositiveIntegerField(default=0)
    contact_person = models.CharField(max_length=255, blank=True, null=True)
    contact_phone = models.CharField(max_length=20, blank=True, null=True)
    notes = models.TextField(blank=True, null=True)
    created_by = models.ForeignKey(
        CustomUser, on_delete=models.SET_NULL, null=True, blank=True, related_name='created_locations'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.location_name} ({self.city})"


class Manager(models.Model):
    # ForeignKey from RegistrationRequest - related_name: registration_requests
    user = models.OneToOneField(CustomUser, on_delete=models.CASCADE, related_name='manager_profile')
    employee_id = models.CharField(max_length=32, blank=True, null=True)
    location = models.ForeignKey(Location, on_delete=models.SET_NULL, null=True, blank=True, related_name='managers')
    department = models.CharField(max_length=120, blank=True, null=True)
    start_date = models.DateField(default=timezone.localdate)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"Manager: {self.user}"


class Supervisor(models.Model):
    # ForeignKey from Operator - related_name: operators
    # ForeignKey from Beat - related_name: beats
    class SupervisorType(models.TextChoices):
        GENERAL_SUPERVISOR = 'GENERAL_SUPERVISOR', 'General Supervisor'
        SUPERVISOR = 'SUPERVISOR', 'Supervisor'
        FIELD_SUPERVISOR = 'FIELD_SUPERVISOR', 'Field Supervisor'
        SHIFT_SUPERVISOR = 'SHIFT_SUPERVISOR', 'Shift Supervisor'
        AREA_SUPERVISOR = 'AREA_SUPERVISOR', 'Area Supervisor'

    user = models.OneToOneField(CustomUser, on_delete=models.CASCADE, related_name='supervisor_profile')
    employee_id = models.CharField(max_length=32)
    location = models.ForeignKey(Location, on_delete=models.SET_NULL, null=True, blank=True, related_name='supervisors')
    supervisor_type = models.CharField(max_length=20, choices=SupervisorType.choices, default=SupervisorType.SUPERVISOR)
    general_supervisor = models.ForeignKey(
        'self', on_delete=models.SET_NULL, null=True, blank=True, related_name='field_supervisors'
    )
    full_name = models.CharField(max_length=255)
    salary = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    start_date = models.DateField(default=timezone.localdate)
    date_of_employment = models.DateField(default=timezone.localdate)
    address = models.CharField(max_length=255, blank=True, default='')
    passport_photo = models.CharField(max_length=255, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.get_supervisor_type_display()}: {self.full_name}"


class Secretary(models.Model):
    user = models.OneToOneField(CustomUser, on_delete=models.CASCADE, related_name='secretary_profile')
    employee_id = models.CharField(max_length=32)
    full_name = models.CharField(max_length=255)
    salary = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    address = models.CharField(max_length=255, blank=True, default='')
    start_date = models.DateField(default=timezone.localdate)
    date_of_employment = models.DateField(default=timezone.localdate)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name_plural = 'secretaries'

    def __str__(self):
        return f"Secretary: {self.full_name}"


class Operator(models.Model):
    """A front-line guard. Every guard reports to a supervisor."""
    user = models.OneToOneField(CustomUser, on_delete=models.CASCADE, related_name='operator_profile')
    employee_id = models.CharField(max_length=32)
    supervisor = models.ForeignKey(Supervisor, on_delete=models.PROTECT, related_name='operators')
    location = models.ForeignKey(Location, on_delete=models.SET_NULL, null=True, blank=True, related_name='operators')
    shift_type = models.CharField(max_length=20, blank=True, null=True)
    passport_photo = models.CharField(max_length=255, blank=True, null=True)
    salary = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    start_date = models.DateField(default=timezone.localdate)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"Operator: {self.user} -> {self.supervisor}"


class AdminProfile(models.Model):
    ROLE_LEVELS = [
        ('BASIC', 'Basic'),
        ('SENIOR', 'Senior'),
        ('LEAD', 'Lead'),
    ]
    user = models.OneToOneField(CustomUser, on_delete=models.CASCADE, related_name='admin_profile')
    staff_id = models.CharField(max_length=32, unique=True)
    job_title = models.CharField(max_length=120)
    department = models.CharField(max_length=120)
    office_location = models.ForeignKey(Location, on_delete=models.SET_NULL, null=True, blank=True, related_name='admins')
    admin_role_level = models.CharField(max_length=10, choices=ROLE_LEVELS, default='BASIC')
    employment_start_date = models.DateField(default=timezone.localdate)
    national_id = models.CharField(max_length=64, blank=True, null=True)
    address = models.CharField(max_length=255, blank=True, null=True)
    salary = models.DecimalField(max_digits=12, decimal_places=2, blank=True, null=True)
    bank_name = models.CharField(max_length=120, blank=True, null=True)
    bank_account_number = models.CharField(max_length=32, blank=True, null=True)
    is_suspended = models.BooleanField(default=False)
    suspension_reason = models.TextField(blank=True, null=True)
    suspended_at = models.DateTimeField(blank=True, null=True)
    suspended_by = models.ForeignKey(
        CustomUser, on_delete=models.SET_NULL, null=True, blank=True, related_name='suspended_admins'
    )
    access_expiry_date = models.DateField(blank=True, null=True)
    notes = models.TextField(blank=True, null=True)
    created_by = models.ForeignKey(
        CustomUser, on_delete=models.SET_NULL, null=True, blank=True, related_name='registered_admins'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.staff_id} - {self.user}"


class Beat(models.Model):
    """A security post at a location; guards are assigned to beats."""
    SHIFT_TYPES = [
        ('DAY', 'Day'),
        ('NIGHT', 'Night'),
        ('24_HOURS', '24 Hours'),
        ('ROTATING', 'Rotating'),
    ]
    beat_code = models.CharField(max_length=40, unique=True)
    beat_name = models.CharField(max_length=255)
    location = models.ForeignKey(Location, on_delete=models.PROTECT, related_name='beats')
    description = models.TextField(blank=True, null=True)
    security_type = models.JSONField(default=list, blank=True)
    number_of_operators = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    shift_type = models.CharField(max_length=10, choices=SHIFT_TYPES)
    start_date = models.DateField(blank=True, null=True)
    end_date = models.DateField(blank=True, null=True)
    supervisor = models.ForeignKey(Supervisor, on_delete=models.SET_NULL, null=True, blank=True, related_name='beats')
    special_instructions = models.TextField(blank=True, null=True)
    is_active = models.BooleanField(default=True)
    created_by = models.ForeignKey(
        CustomUser, on_delete=models.SET_NULL, null=True, blank=True, related_name='created_beats'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.beat_code} - {self.beat_name}"


class RegistrationRole(models.TextChoices):
    SUPERVISOR = 'SUPERVISOR', 'Supervisor'
    HR = 'HR', 'HR Personnel'
    SECRETARY = 'SECRETARY', 'Secretary'
    GENERAL_SUPERVISOR = 'GENERAL_SUPERVISOR', 'General Supervisor'
    GUARD = 'GUARD', 'Guard'


class RequestStatus(models.TextChoices):
    PENDING = 'PENDING', 'Pending'
    APPROVED = 'APPROVED', 'Approved'
    REJECTED = 'REJECTED', 'Rejected'


class RegistrationRequest(models.Model):
    """
    A manager-submitted onboarding record. A director approves it (which
    provisions the account) or rejects it; both outcomes are final and the
    record is kept as an audit trail.
    """
    TRANSITIONS = {
        RequestStatus.PENDING: {RequestStatus.APPROVED, RequestStatus.REJECTED},
        RequestStatus.APPROVED: set(),
        RequestStatus.REJECTED: set(),
    }

    requested_by = models.ForeignKey(Manager, on_delete=models.PROTECT, related_name='registration_requests')
    full_name = models.CharField(max_length=255)
    email = models.EmailField()
    phone = models.CharField(max_length=20)
    role = models.CharField(max_length=20, choices=RegistrationRole.choices)
    location = models.ForeignKey(
        Location, on_delete=models.SET_NULL, null=True, blank=True, related_name='registration_requests'
    )
    department = models.CharField(max_length=120, blank=True, null=True)
    start_date = models.DateField(blank=True, null=True)
    profile_photo = models.ImageField(upload_to='requests/', blank=True, null=True)
    date_of_birth = models.DateField(blank=True, null=True)
    gender = models.CharField(max_length=20, blank=True, null=True)
    address = models.CharField(max_length=255, blank=True, null=True)
    employment_type = models.CharField(max_length=20, default='FULL_TIME')
    shift = models.CharField(max_length=20, blank=True, null=True)
    documents = models.JSONField(blank=True, null=True)
    manager_comments = models.TextField(blank=True, null=True)
    status = models.CharField(max_length=10, choices=RequestStatus.choices, default=RequestStatus.PENDING)
    reviewed_by = models.ForeignKey(
        CustomUser, on_delete=models.SET_NULL, null=True, blank=True, related_name='reviewed_requests'
    )
    reviewed_at = models.DateTimeField(blank=True, null=True)
    rejection_reason = models.TextField(blank=True, null=True)
    generated_user = models.OneToOneField(
        CustomUser, on_delete=models.SET_NULL, null=True, blank=True, related_name='registration_request'
    )
    generated_employee_id = models.CharField(max_length=32, blank=True, null=True)
    # plaintext on purpose: support staff read it back to new hires
    generated_password = models.CharField(max_length=128, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status'], name='regrequest_status_idx'),
            models.Index(fields=['role'], name='regrequest_role_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['email'],
                condition=Q(status='PENDING'),
                name='unique_pending_request_per_email'
            )
        ]

    def __str__(self):
        return f"{self.full_name} <{self.email}> ({self.status})"

    def can_transition_to(self, new_status):
        return new_status in self.TRANSITIONS[RequestStatus(self.status)]

    def ensure_can_transition_to(self, new_status):
        if not self.can_transition_to(new_status):
            raise InvalidState('This request has already been processed')

    def transition_to(self, new_status, reviewer, **fields):
        """Move the request to a terminal status and stamp the review."""
        self.ensure_can_transition_to(new_status)
        self.status = new_status
        self.reviewed_by = reviewer
        self.reviewed_at = timezone.now()
        for name, value in fields.items():
            setattr(self, name, value)
        self.save()
        return self
