from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from users.models import UserRole
from personnel import registration
from .base import StaffingFixturesMixin


class StaffListingTests(StaffingFixturesMixin, TestCase):
    def setUp(self):
        self.client = APIClient()
        self.director = self.make_user('director@example.com', UserRole.DIRECTOR)
        self.supervisor = self.make_supervisor()
        manager = self.make_manager()
        request = self.submit(manager, email='guard@example.com', role='GUARD')
        self.guard = registration.approve_request(request.pk, self.director)['user']

    def test_supervisor_lists_operators(self):
        self.client.force_authenticate(user=self.supervisor.user)
        response = self.client.get(reverse('operator-list'), {'supervisor': self.supervisor.pk})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['results'][0]['employee_id'], 'GRD00001')
        self.assertEqual(response.data['results'][0]['user']['email'], 'guard@example.com')

    def test_director_lists_supervisors(self):
        self.client.force_authenticate(user=self.director)
        response = self.client.get(reverse('supervisor-list'), {'supervisor_type': 'SUPERVISOR'})
        self.assertEqual([s['employee_id'] for s in response.data['results']], ['SUP00001'])

    def test_guard_cannot_list_staff(self):
        self.client.force_authenticate(user=self.guard)
        self.assertEqual(self.client.get(reverse('supervisor-list')).status_code, status.HTTP_403_FORBIDDEN)
