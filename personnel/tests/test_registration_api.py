from unittest.mock import patch

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from users.models import CustomUser, UserRole
from personnel.models import RegistrationRequest, RequestStatus
from .base import StaffingFixturesMixin


class RegistrationRequestAPITests(StaffingFixturesMixin, TestCase):
    def setUp(self):
        self.client = APIClient()
        self.director = self.make_user('director@example.com', UserRole.DIRECTOR)
        self.manager = self.make_manager()
        self.location = self.make_location()
        self.list_url = reverse('registration-request-list')
        self.payload = {
            'full_name': 'Chidi Obi',
            'email': 'Chidi.Obi@Example.com',
            'phone': '08031234567',
            'role': 'SUPERVISOR',
            'location': self.location.pk,
            'documents': {'nin': '12345678901'},
        }

    def approve_url(self, pk):
        return reverse('registration-request-approve', args=[pk])

    def test_manager_submits_request(self):
        self.client.force_authenticate(user=self.manager.user)
        response = self.client.post(self.list_url, self.payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['success'])
        body = response.data['request']
        self.assertEqual(body['email'], 'chidi.obi@example.com')
        self.assertEqual(body['status'], RequestStatus.PENDING)
        self.assertEqual(body['requested_by']['id'], self.manager.pk)
        self.assertEqual(body['location']['id'], self.location.pk)
        self.assertNotIn('generated_password', body)

    def test_director_cannot_submit(self):
        self.client.force_authenticate(user=self.director)
        response = self.client.post(self.list_url, self.payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data, {
            'success': False,
            'status': 'error',
            'message': 'Only managers can create registration requests.',
        })

    def test_unauthenticated_is_rejected(self):
        response = self.client.post(self.list_url, self.payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(response.data['success'])

    def test_manager_without_profile(self):
        orphan = self.make_user('orphan@example.com', UserRole.MANAGER)
        self.client.force_authenticate(user=orphan)
        response = self.client.post(self.list_url, self.payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['message'], 'Manager profile not found')

    def test_validation_errors_use_envelope(self):
        self.client.force_authenticate(user=self.manager.user)
        response = self.client.post(self.list_url, {**self.payload, 'full_name': 'Al'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['status'], 'error')
        self.assertEqual(response.data['message'], 'full_name: Full name must be at least 3 characters')
        self.assertIn('full_name', response.data['errors'])

    def test_invalid_role_and_missing_phone(self):
        self.client.force_authenticate(user=self.manager.user)
        payload = {**self.payload, 'role': 'JANITOR'}
        del payload['phone']
        response = self.client.post(self.list_url, payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('role', response.data['errors'])
        self.assertIn('phone', response.data['errors'])

    def test_unknown_location_is_rejected(self):
        self.client.force_authenticate(user=self.manager.user)
        response = self.client.post(self.list_url, {**self.payload, 'location': 99999}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('location', response.data['errors'])

    def test_duplicate_pending_email_conflicts(self):
        self.client.force_authenticate(user=self.manager.user)
        self.client.post(self.list_url, self.payload, format='json')
        response = self.client.post(self.list_url, self.payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['message'], 'A pending registration request already exists for this email')

    def test_pending_listing_for_director(self):
        self.submit(self.manager, email='one@example.com', role='GUARD')
        self.submit(self.manager, email='two@example.com', role='SUPERVISOR')
        self.client.force_authenticate(user=self.director)

        response = self.client.get(reverse('registration-request-pending'), {'role': 'GUARD'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['success'])
        self.assertEqual(response.data['totalCount'], 1)
        self.assertEqual(response.data['requests'][0]['email'], 'one@example.com')
        self.assertEqual(response.data['roleCounts'], {'GUARD': 1, 'SUPERVISOR': 1})
        self.assertEqual(response.data['managerCounts'], {str(self.manager.pk): 2})

    def test_pending_ignores_unknown_role_filter(self):
        self.submit(self.manager, email='one@example.com')
        self.client.force_authenticate(user=self.director)
        response = self.client.get(reverse('registration-request-pending'), {'role': 'JANITOR'})
        self.assertEqual(response.data['totalCount'], 1)

    def test_pending_rejects_malformed_date(self):
        self.client.force_authenticate(user=self.director)
        response = self.client.get(reverse('registration-request-pending'), {'date_from': 'last tuesday'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('dateFrom', response.data['errors'])

    def test_pending_rejects_impossible_calendar_date(self):
        self.client.force_authenticate(user=self.director)
        response = self.client.get(reverse('registration-request-pending'), {'dateFrom': '2024-02-30'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data['success'])
        self.assertIn('dateFrom', response.data['errors'])

    def test_pending_rejects_non_numeric_ids(self):
        self.client.force_authenticate(user=self.director)

        response = self.client.get(reverse('registration-request-pending'), {'requestedById': 'abc'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('requested_by', response.data['errors'])

        response = self.client.get(reverse('registration-request-pending'), {'locationId': 'abc'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('location', response.data['errors'])

    def test_pending_filters_by_requesting_manager(self):
        other = self.make_manager(email='manager2@example.com')
        self.submit(self.manager, email='one@example.com')
        self.submit(other, email='two@example.com')
        self.client.force_authenticate(user=self.director)

        response = self.client.get(reverse('registration-request-pending'), {'requestedById': self.manager.pk})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['totalCount'], 1)
        self.assertEqual(response.data['requests'][0]['email'], 'one@example.com')
        self.assertEqual(response.data['managerCounts'], {str(self.manager.pk): 1, str(other.pk): 1})

        response = self.client.get(reverse('registration-request-pending'), {'requested_by': other.pk})
        self.assertEqual(response.data['totalCount'], 1)
        self.assertEqual(response.data['requests'][0]['email'], 'two@example.com')

    def test_pending_filters_by_location_and_date_window(self):
        self.submit(self.manager, email='one@example.com', location=self.location)
        self.submit(self.manager, email='two@example.com')
        self.client.force_authenticate(user=self.director)
        url = reverse('registration-request-pending')

        response = self.client.get(url, {'locationId': self.location.pk})
        self.assertEqual([r['email'] for r in response.data['requests']], ['one@example.com'])

        self.assertEqual(self.client.get(url, {'dateFrom': '2999-01-01'}).data['totalCount'], 0)
        self.assertEqual(self.client.get(url, {'dateTo': '2000-01-01'}).data['totalCount'], 0)
        self.assertEqual(self.client.get(url, {'dateFrom': '2000-01-01', 'dateTo': '2999-12-31'}).data['totalCount'], 2)

    def test_pending_forbidden_for_manager(self):
        self.client.force_authenticate(user=self.manager.user)
        response = self.client.get(reverse('registration-request-pending'))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data['message'], 'Only directors can perform this action.')

    def test_approve_returns_credentials(self):
        request = self.submit(self.manager, email='chidi@example.com', full_name='Chidi Obi')
        self.client.force_authenticate(user=self.director)

        response = self.client.post(self.approve_url(request.pk))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['success'])
        self.assertTrue(response.data['emailSent'])
        self.assertEqual(response.data['user']['employee_id'], 'SUP00001')
        self.assertEqual(response.data['user']['full_name'], 'Chidi Obi')
        self.assertEqual(response.data['credentials']['email'], 'chidi@example.com')
        user = CustomUser.objects.get(email='chidi@example.com')
        self.assertTrue(user.check_password(response.data['credentials']['password']))

    def test_approve_succeeds_when_manager_notification_fails(self):
        request = self.submit(self.manager, email='chidi@example.com', full_name='Chidi Obi')
        self.client.force_authenticate(user=self.director)

        with patch('personnel.registration.send_and_save_notification', side_effect=RuntimeError('channel layer down')):
            response = self.client.post(self.approve_url(request.pk))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['credentials']['email'], 'chidi@example.com')
        request.refresh_from_db()
        self.assertEqual(request.status, RequestStatus.APPROVED)

    def test_second_approval_is_rejected(self):
        request = self.submit(self.manager, email='chidi@example.com')
        self.client.force_authenticate(user=self.director)
        self.client.post(self.approve_url(request.pk))

        response = self.client.post(self.approve_url(request.pk))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['message'], 'This request has already been processed')
        self.assertEqual(CustomUser.objects.filter(email='chidi@example.com').count(), 1)

    def test_guard_without_supervisor_returns_error(self):
        request = self.submit(self.manager, email='guard@example.com', role='GUARD')
        self.client.force_authenticate(user=self.director)

        response = self.client.post(self.approve_url(request.pk))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['message'], 'No supervisor available to assign this guard')
        self.assertFalse(CustomUser.objects.filter(email='guard@example.com').exists())

    def test_reject(self):
        request = self.submit(self.manager, email='chidi@example.com')
        self.client.force_authenticate(user=self.director)

        response = self.client.post(
            reverse('registration-request-reject', args=[request.pk]), {'reason': 'Failed vetting'}, format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['request']['status'], RequestStatus.REJECTED)
        self.assertEqual(response.data['request']['rejection_reason'], 'Failed vetting')

    def test_retrieve(self):
        request = self.submit(self.manager, email='chidi@example.com')
        self.client.force_authenticate(user=self.director)
        self.client.post(self.approve_url(request.pk))

        response = self.client.get(reverse('registration-request-detail', args=[request.pk]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['request']['generated_employee_id'], 'SUP00001')
        self.assertTrue(response.data['request']['generated_password'].startswith('javelin_SUP00001_'))

    def test_retrieve_hides_password_from_manager(self):
        request = self.submit(self.manager, email='chidi@example.com')
        self.client.force_authenticate(user=self.manager.user)
        response = self.client.get(reverse('registration-request-detail', args=[request.pk]))
        self.assertNotIn('generated_password', response.data['request'])

    def test_retrieve_missing(self):
        self.client.force_authenticate(user=self.director)
        response = self.client.get(reverse('registration-request-detail', args=[123456]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data, {
            'success': False,
            'status': 'error',
            'message': 'Registration request not found',
        })

    def test_stats_and_managers(self):
        self.submit(self.manager, email='one@example.com')
        self.client.force_authenticate(user=self.director)

        stats = self.client.get(reverse('registration-request-stats'))
        managers = self.client.get(reverse('registration-request-managers'))

        self.assertEqual(stats.data['stats'], {
            'pending': 1, 'approvedToday': 0, 'rejectedToday': 0, 'approvedThisWeek': 0,
        })
        self.assertEqual(len(managers.data['managers']), 1)
        self.assertEqual(managers.data['managers'][0]['email'], 'manager@example.com')
        self.assertEqual(managers.data['managers'][0]['request_count'], 1)

    def test_developer_passes_director_gate(self):
        developer = CustomUser.objects.create_superuser(email='dev@example.com', password='devpass123')
        request = self.submit(self.manager, email='chidi@example.com')
        self.client.force_authenticate(user=developer)

        response = self.client.post(self.approve_url(request.pk))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(RegistrationRequest.objects.get(pk=request.pk).reviewed_by, developer)
