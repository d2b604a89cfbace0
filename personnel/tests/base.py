from users.models import CustomUser, UserRole, UserStatus
from personnel.models import Location, Manager, Supervisor
from personnel import registration


class StaffingFixturesMixin:
    """Shared helpers for building directors, managers and requests."""

    def make_user(self, email, role, **extra):
        return CustomUser.objects.create_user(
            email=email,
            password='testpass123',
            role=role,
            status=UserStatus.ACTIVE,
            first_name=extra.pop('first_name', 'Test'),
            last_name=extra.pop('last_name', role.label),
            **extra,
        )

    def make_manager(self, email='manager@example.com', location=None):
        user = self.make_user(email, UserRole.MANAGER, first_name='Ngozi', last_name='Okafor')
        return Manager.objects.create(user=user, location=location)

    def make_location(self, name='Lekki Phase One', **extra):
        return Location.objects.create(
            location_name=name,
            city=extra.pop('city', 'Lekki'),
            state=extra.pop('state', 'Lagos'),
            address=extra.pop('address', '1 Admiralty Way'),
            **extra,
        )

    def make_supervisor(self, email='existing.supervisor@example.com', employee_id='SUP00001'):
        user = self.make_user(email, UserRole.SUPERVISOR, employee_id=employee_id)
        return Supervisor.objects.create(user=user, employee_id=employee_id, full_name=user.full_name)

    def submit(self, manager, email='new.hire@example.com', full_name='Ada Lovelace', role='SUPERVISOR', **extra):
        return registration.create_registration_request(
            manager,
            email=email,
            full_name=full_name,
            phone=extra.pop('phone', '08030000000'),
            role=role,
            **extra,
        )
