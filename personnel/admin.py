from django.contrib import admin
from .models import AdminProfile, Beat, Location, Manager, Operator, RegistrationRequest, Secretary, Supervisor

admin.site.register(Manager)
admin.site.register(Secretary)


@admin.register(Location)
class LocationAdmin(admin.ModelAdmin):
    list_display = ('location_name', 'city', 'state', 'location_type', 'total_beats', 'is_active')
    list_filter = ('location_type', 'state', 'is_active')
    search_fields = ('location_name', 'city', 'state')


@admin.register(Beat)
class BeatAdmin(admin.ModelAdmin):
    list_display = ('beat_code', 'beat_name', 'location', 'shift_type', 'number_of_operators', 'is_active')
    list_filter = ('shift_type', 'is_active', 'location')
    search_fields = ('beat_code', 'beat_name', 'location__location_name')
    readonly_fields = ('beat_code',)


@admin.register(Supervisor)
class SupervisorAdmin(admin.ModelAdmin):
    list_display = ('full_name', 'employee_id', 'supervisor_type', 'location')
    list_filter = ('supervisor_type',)
    search_fields = ('full_name', 'employee_id', 'user__email')


@admin.register(Operator)
class OperatorAdmin(admin.ModelAdmin):
    list_display = ('user', 'employee_id', 'supervisor', 'location', 'shift_type')
    search_fields = ('employee_id', 'user__email')


@admin.register(AdminProfile)
class AdminProfileAdmin(admin.ModelAdmin):
    list_display = ('staff_id', 'user', 'job_title', 'admin_role_level', 'is_suspended')
    list_filter = ('admin_role_level', 'is_suspended')
    search_fields = ('staff_id', 'user__email')
    readonly_fields = ('staff_id',)


@admin.register(RegistrationRequest)
class RegistrationRequestAdmin(admin.ModelAdmin):
    list_display = ('full_name', 'email', 'role', 'status', 'requested_by', 'created_at', 'reviewed_at')
    list_filter = ('status', 'role')
    search_fields = ('full_name', 'email', 'generated_employee_id')
    readonly_fields = ('status', 'reviewed_by', 'reviewed_at', 'generated_user', 'generated_employee_id',
                       'generated_password')
