from django.db import models
from django.contrib.auth.models import AbstractUser
from django.core.validators import validate_email
from django.contrib.auth.base_user import BaseUserManager
from django.db.models import Q


class UserRole(models.TextChoices):
    DEVELOPER = 'DEVELOPER', 'Developer'
    DIRECTOR = 'DIRECTOR', 'Director'
    MANAGER = 'MANAGER', 'Manager'
    GENERAL_SUPERVISOR = 'GENERAL_SUPERVISOR', 'General Supervisor'
    SUPERVISOR = 'SUPERVISOR', 'Supervisor'
    SECRETARY = 'SECRETARY', 'Secretary'
    ADMIN = 'ADMIN', 'Admin'
    OPERATOR = 'OPERATOR', 'Operator'


class UserStatus(models.TextChoices):
    PENDING = 'PENDING', 'Pending'
    ACTIVE = 'ACTIVE', 'Active'
    SUSPENDED = 'SUSPENDED', 'Suspended'
    INACTIVE = 'INACTIVE', 'Inactive'


class CustomUserManager(BaseUserManager):
    """Custom user model manager where email is the unique identifier"""

    def create_user(self, email, password=None, **extra_fields):
        """Create and save a User with the given email and password."""
        if not email:
            raise ValueError('The Email must be set')
        email = self.normalize_email(email).lower()
        user = self.model(email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password, **extra_fields):
        """Create and save a SuperUser with the given email and password."""
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('role', UserRole.DEVELOPER)
        extra_fields.setdefault('status', UserStatus.ACTIVE)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True.')
        return self.create_user(email, password, **extra_fields)


class CustomUser(AbstractUser):
    # OneToOne from Manager - related_name: manager_profile
    # OneToOne from Supervisor - related_name: supervisor_profile
    # OneToOne from Secretary - related_name: secretary_profile
    # OneToOne from Operator - related_name: operator_profile
    # OneToOne from AdminProfile - related_name: admin_profile
    # ForeignKey from Notification - related_name: notifications
    username = None
    email = models.EmailField(unique=True, validators=[validate_email])
    phone_number = models.CharField(max_length=20, blank=True, null=True)
    first_name = models.CharField(max_length=60, blank=True, null=True)
    last_name = models.CharField(max_length=120, blank=True, null=True)
    role = models.CharField(max_length=20, choices=UserRole.choices, default=UserRole.OPERATOR)
    status = models.CharField(max_length=10, choices=UserStatus.choices, default=UserStatus.ACTIVE)
    employee_id = models.CharField(max_length=32, blank=True, null=True)
    profile_photo = models.CharField(max_length=255, blank=True, null=True)
    gender = models.CharField(max_length=20, blank=True, null=True)
    date_of_birth = models.DateField(blank=True, null=True)
    must_change_password = models.BooleanField(default=False)
    created_by = models.ForeignKey(
        'self', on_delete=models.SET_NULL, null=True, blank=True, related_name='created_users'
    )
    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    objects = CustomUserManager()

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=['employee_id'],
                condition=Q(employee_id__isnull=False),
                name='unique_employee_id'
            )
        ]

    def __str__(self):
        return f"{self.first_name} {self.last_name} ({self.email})"

    @property
    def full_name(self):
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    def save(self, *args, **kwargs):
        self.first_name = self.first_name or ''
        self.last_name = self.last_name or ''
        # Django's auth checks is_active; status is the source of truth
        self.is_active = self.status == UserStatus.ACTIVE
        update_fields = kwargs.get('update_fields')
        if update_fields is not None and 'status' in update_fields:
            kwargs['update_fields'] = set(update_fields) | {'is_active'}
        super().save(*args, **kwargs)
