from rest_framework.permissions import BasePermission
from users.models import UserRole as Roles


class BaseHasRoleOrAbove(BasePermission):
    """
    Base role class that can be expanded by adding roles below.
    DEVELOPER accounts pass every check.
    """
    required_roles = []
    message = 'You do not have permission to perform this action.'

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated or not user.is_active:
            return False
        return user.role in [Roles.DEVELOPER, *self.required_roles]


class IsDirectorUser(BaseHasRoleOrAbove):
    """
    Check if user is a director.
    """
    required_roles = [Roles.DIRECTOR]
    message = 'Only directors can perform this action.'


class IsManagerUser(BaseHasRoleOrAbove):
    """
    Check if user is a manager. Directors are deliberately not included:
    registration requests are always submitted by a manager.
    """
    required_roles = [Roles.MANAGER]
    message = 'Only managers can create registration requests.'


class IsManagerOrAboveUser(BaseHasRoleOrAbove):
    """
    Check if user is a manager or above.
    """
    required_roles = [Roles.DIRECTOR, Roles.MANAGER]


class IsSupervisorOrAboveUser(BaseHasRoleOrAbove):
    """
    Check if user is a supervisor or above. Back-office staff (secretaries
    and admins) share this level.
    """
    required_roles = [
        Roles.DIRECTOR, Roles.MANAGER, Roles.GENERAL_SUPERVISOR, Roles.SUPERVISOR,
        Roles.SECRETARY, Roles.ADMIN,
    ]
