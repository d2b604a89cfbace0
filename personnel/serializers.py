from django.conf import settings
from rest_framework import serializers
from users.models import CustomUser, UserRole
from users.serializers import MiniUserSerializer
from .models import (
    AdminProfile, Beat, Location, Manager, Operator, RegistrationRequest, RegistrationRole, Supervisor,
)


class LocationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Location
        fields = ['id', 'location_name', 'city', 'state', 'lga', 'address', 'latitude', 'longitude',
                  'location_type', 'is_active', 'total_beats', 'contact_person', 'contact_phone', 'notes',
                  'created_at', 'updated_at']
        read_only_fields = ['id', 'total_beats', 'created_at', 'updated_at']


class MiniLocationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Location
        fields = ['id', 'location_name', 'address']


class SupervisorSerializer(serializers.ModelSerializer):
    user = MiniUserSerializer(read_only=True)
    location = MiniLocationSerializer(read_only=True)

    class Meta:
        model = Supervisor
        fields = ['id', 'user', 'employee_id', 'full_name', 'supervisor_type', 'location', 'start_date', 'created_at']


class OperatorSerializer(serializers.ModelSerializer):
    user = MiniUserSerializer(read_only=True)
    supervisor = serializers.StringRelatedField()
    location = MiniLocationSerializer(read_only=True)

    class Meta:
        model = Operator
        fields = ['id', 'user', 'employee_id', 'supervisor', 'location', 'shift_type', 'start_date', 'created_at']


class BeatSerializer(serializers.ModelSerializer):
    location_detail = MiniLocationSerializer(source='location', read_only=True)
    shift_type = serializers.ChoiceField(choices=Beat.SHIFT_TYPES)
    security_type = serializers.ListField(child=serializers.CharField(max_length=60), allow_empty=False)

    class Meta:
        model = Beat
        fields = ['id', 'beat_code', 'beat_name', 'location', 'location_detail', 'description', 'security_type',
                  'number_of_operators', 'shift_type', 'start_date', 'end_date', 'supervisor',
                  'special_instructions', 'is_active', 'created_at', 'updated_at']
        read_only_fields = ['id', 'beat_code', 'created_at', 'updated_at']

    def validate(self, attrs):
        start_date = attrs.get('start_date', getattr(self.instance, 'start_date', None))
        end_date = attrs.get('end_date', getattr(self.instance, 'end_date', None))
        if start_date and end_date and end_date < start_date:
            raise serializers.ValidationError({'end_date': 'End date cannot be before the start date.'})
        if self.instance and 'location' in attrs and attrs['location'] != self.instance.location:
            raise serializers.ValidationError({'location': 'A beat cannot be moved to another location.'})
        return attrs


class RequestingManagerSerializer(serializers.ModelSerializer):
    name = serializers.CharField(source='user.full_name')
    email = serializers.EmailField(source='user.email')
    profile_photo = serializers.CharField(source='user.profile_photo')
    request_count = serializers.IntegerField()

    class Meta:
        model = Manager
        fields = ['id', 'name', 'email', 'profile_photo', 'request_count']


class RegistrationRequestCreateSerializer(serializers.ModelSerializer):
    """Validates a manager's submission; persistence goes through personnel.registration."""
    full_name = serializers.CharField(max_length=255)
    email = serializers.EmailField()
    phone = serializers.CharField(max_length=20)
    role = serializers.ChoiceField(choices=RegistrationRole.choices)
    location = serializers.PrimaryKeyRelatedField(queryset=Location.objects.all(), required=False, allow_null=True)
    profile_photo = serializers.ImageField(required=False, allow_null=True)

    class Meta:
        model = RegistrationRequest
        fields = ['full_name', 'email', 'phone', 'role', 'location', 'department', 'start_date', 'profile_photo',
                  'date_of_birth', 'gender', 'address', 'employment_type', 'shift', 'documents', 'manager_comments']
        extra_kwargs = {
            'employment_type': {'required': False},
        }
        # the pending-email constraint is checked by the service with a proper Conflict
        validators = []

    def validate_full_name(self, value):
        value = value.strip()
        if len(value) < 3:
            raise serializers.ValidationError('Full name must be at least 3 characters')
        return value

    def validate_email(self, value):
        return value.strip().lower()

    def validate_profile_photo(self, value):
        if value is None:
            return value
        if value.size > settings.PROFILE_PHOTO_MAX_SIZE:
            raise serializers.ValidationError('Profile photo must be 5MB or smaller')
        content_type = getattr(value, 'content_type', None)
        if content_type and content_type not in settings.PROFILE_PHOTO_CONTENT_TYPES:
            raise serializers.ValidationError('Only JPG, PNG, and WebP files are allowed')
        return value


class RegistrationRequestSerializer(serializers.ModelSerializer):
    role_display = serializers.CharField(source='get_role_display', read_only=True)
    location = MiniLocationSerializer(read_only=True)
    requested_by = serializers.SerializerMethodField()
    reviewed_by = MiniUserSerializer(read_only=True)

    class Meta:
        model = RegistrationRequest
        fields = ['id', 'full_name', 'email', 'phone', 'role', 'role_display', 'location', 'department',
                  'start_date', 'profile_photo', 'date_of_birth', 'gender', 'address', 'employment_type', 'shift',
                  'documents', 'manager_comments', 'status', 'requested_by', 'reviewed_by', 'reviewed_at',
                  'rejection_reason', 'generated_employee_id', 'generated_password', 'created_at', 'updated_at']
        read_only_fields = fields

    def get_fields(self):
        fields = super().get_fields()
        request = self.context.get('request')
        user = getattr(request, 'user', None)
        # temporary passwords are only shown to directors
        if not user or getattr(user, 'role', None) not in (UserRole.DIRECTOR, UserRole.DEVELOPER):
            fields.pop('generated_password', None)
        return fields

    def get_requested_by(self, obj):
        manager = obj.requested_by
        return {
            'id': manager.id,
            'name': manager.user.full_name,
            'email': manager.user.email,
            'profile_photo': manager.user.profile_photo,
        }


class ProvisionedUserSerializer(serializers.ModelSerializer):
    full_name = serializers.CharField(read_only=True)

    class Meta:
        model = CustomUser
        fields = ['id', 'employee_id', 'email', 'first_name', 'last_name', 'full_name', 'role']


class AdminProfileSerializer(serializers.ModelSerializer):
    user = MiniUserSerializer(read_only=True)
    office_location = MiniLocationSerializer(read_only=True)

    class Meta:
        model = AdminProfile
        fields = ['id', 'user', 'staff_id', 'job_title', 'department', 'office_location', 'admin_role_level',
                  'employment_start_date', 'national_id', 'address', 'salary', 'bank_name', 'bank_account_number',
                  'is_suspended', 'suspension_reason', 'suspended_at', 'access_expiry_date', 'notes',
                  'created_at', 'updated_at']
        read_only_fields = ['id', 'user', 'staff_id', 'is_suspended', 'suspension_reason', 'suspended_at',
                            'created_at', 'updated_at']


class AdminRegistrationSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=8)
    first_name = serializers.CharField(max_length=60)
    last_name = serializers.CharField(max_length=120)
    phone_number = serializers.CharField(max_length=20, required=False, allow_blank=True)
    job_title = serializers.CharField(max_length=120)
    department = serializers.CharField(max_length=120)
    office_location = serializers.PrimaryKeyRelatedField(queryset=Location.objects.all(), required=False, allow_null=True)
    admin_role_level = serializers.ChoiceField(choices=AdminProfile.ROLE_LEVELS, default='BASIC')
    employment_start_date = serializers.DateField(required=False)
    national_id = serializers.CharField(max_length=64, required=False, allow_blank=True)
    gender = serializers.CharField(max_length=20, required=False, allow_blank=True)
    date_of_birth = serializers.DateField(required=False)
    address = serializers.CharField(max_length=255, required=False, allow_blank=True)
    salary = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
    bank_name = serializers.CharField(max_length=120, required=False, allow_blank=True)
    bank_account_number = serializers.CharField(max_length=32, required=False, allow_blank=True)
    access_expiry_date = serializers.DateField(required=False)
    notes = serializers.CharField(required=False, allow_blank=True)

    def validate_email(self, value):
        return value.strip().lower()


class PendingRequestQuerySerializer(serializers.Serializer):
    """Query string filters for the pending listing."""
    requested_by = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    location = serializers.IntegerField(min_value=1, required=False, allow_null=True)
