from django.core.management.base import BaseCommand
from django.db import transaction
from users.models import CustomUser, UserRole, UserStatus
from personnel.identifiers import generate_employee_id
from personnel.models import Location, Manager, Supervisor, RegistrationRole


class Command(BaseCommand):
    help = 'Create a director, a manager, a supervisor and a location for local development'

    def add_arguments(self, parser):
        parser.add_argument('--password', default='changeme123', help='Password for every seeded account')

    def _get_or_create_user(self, email, role, first_name, last_name, password, **extra):
        user = CustomUser.objects.filter(email=email).first()
        if user:
            self.stdout.write(self.style.WARNING(f'{email} already exists, skipping'))
            return user, False
        user = CustomUser.objects.create_user(
            email=email,
            password=password,
            role=role,
            status=UserStatus.ACTIVE,
            first_name=first_name,
            last_name=last_name,
            **extra,
        )
        self.stdout.write(self.style.SUCCESS(f'Created {role.label} {email}'))
        return user, True

    def handle(self, *args, **options):
        password = options['password']

        with transaction.atomic():
            location, created = Location.objects.get_or_create(
                location_name='Head Office Lagos',
                defaults={'city': 'Ikeja', 'state': 'Lagos', 'address': '12 Allen Avenue', 'location_type': 'OFFICE'},
            )
            if created:
                self.stdout.write(self.style.SUCCESS(f'Created location {location}'))

            self._get_or_create_user('director@example.com', UserRole.DIRECTOR, 'Dayo', 'Adeyemi', password)

            manager_user, created = self._get_or_create_user(
                'manager@example.com', UserRole.MANAGER, 'Ngozi', 'Okafor', password,
            )
            if created:
                Manager.objects.create(user=manager_user, location=location, department='Operations')

            employee_id = generate_employee_id(RegistrationRole.SUPERVISOR)
            supervisor_user, created = self._get_or_create_user(
                'supervisor@example.com', UserRole.SUPERVISOR, 'Tunde', 'Bakare', password, employee_id=employee_id,
            )
            if created:
                Supervisor.objects.create(
                    user=supervisor_user,
                    employee_id=employee_id,
                    location=location,
                    full_name=supervisor_user.full_name,
                )

        self.stdout.write(self.style.SUCCESS('Seeding complete'))
