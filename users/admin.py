from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth import get_user_model

User = get_user_model()


class UserAdmin(BaseUserAdmin):
    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        ('Personal info', {'fields': ('first_name', 'last_name', 'phone_number', 'gender', 'date_of_birth', 'profile_photo')}),
        ('Role', {'fields': ('role', 'status', 'employee_id', 'must_change_password')}),
        ('Permissions', {'fields': ('is_staff', 'is_superuser', 'user_permissions')}),
        ('Important dates', {'fields': ('last_login', 'date_joined')}),
    )
    add_fieldsets = (
        (None, {'classes': ('wide',), 'fields': ('email', 'role', 'password1', 'password2')}),
    )
    ordering = ['email']
    list_display = ('email', 'first_name', 'last_name', 'role', 'status', 'employee_id')
    list_filter = ('role', 'status')
    search_fields = ('email', 'first_name', 'last_name', 'employee_id')


admin.site.register(User, UserAdmin)
