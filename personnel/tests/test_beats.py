from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from users.models import UserRole
from personnel.models import Beat
from .base import StaffingFixturesMixin


class BeatAPITests(StaffingFixturesMixin, TestCase):
    def setUp(self):
        self.client = APIClient()
        self.manager = self.make_manager()
        self.location = self.make_location('Lekki Phase One')
        self.client.force_authenticate(user=self.manager.user)
        self.url = reverse('beat-list')

    def beat_payload(self, **overrides):
        payload = {
            'beat_name': 'Main Gate',
            'location': self.location.pk,
            'security_type': ['ARMED', 'PATROL'],
            'number_of_operators': 2,
            'shift_type': 'NIGHT',
        }
        payload.update(overrides)
        return payload

    def test_create_generates_code_and_counts(self):
        first = self.client.post(self.url, self.beat_payload(), format='json')
        second = self.client.post(self.url, self.beat_payload(beat_name='Back Gate'), format='json')

        self.assertEqual(first.status_code, status.HTTP_201_CREATED)
        self.assertEqual(first.data['beat']['beat_code'], 'BEAT-LPO-001')
        self.assertEqual(second.data['beat']['beat_code'], 'BEAT-LPO-002')
        self.location.refresh_from_db()
        self.assertEqual(self.location.total_beats, 2)

    def test_client_supplied_code_is_ignored(self):
        response = self.client.post(self.url, self.beat_payload(beat_code='MY-CODE'), format='json')
        self.assertEqual(response.data['beat']['beat_code'], 'BEAT-LPO-001')

    def test_unknown_location(self):
        response = self.client.post(self.url, self.beat_payload(location=4040), format='json')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['message'], 'Location not found')
        self.assertFalse(Beat.objects.exists())

    def test_end_date_before_start_date(self):
        response = self.client.post(
            self.url, self.beat_payload(start_date='2025-03-01', end_date='2025-02-01'), format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('end_date', response.data['errors'])

    def test_delete_decrements_location_count(self):
        created = self.client.post(self.url, self.beat_payload(), format='json')
        response = self.client.delete(reverse('beat-detail', args=[created.data['beat']['id']]))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.location.refresh_from_db()
        self.assertEqual(self.location.total_beats, 0)

    def test_list_filters_by_location(self):
        other = self.make_location('Ikoyi Towers')
        self.client.post(self.url, self.beat_payload(), format='json')
        self.client.post(self.url, self.beat_payload(location=other.pk), format='json')

        response = self.client.get(self.url, {'location': other.pk})

        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['results'][0]['beat_code'], 'BEAT-IT-001')

    def test_supervisor_can_read_but_not_write(self):
        supervisor = self.make_supervisor()
        self.client.force_authenticate(user=supervisor.user)

        self.assertEqual(self.client.get(self.url).status_code, status.HTTP_200_OK)
        response = self.client.post(self.url, self.beat_payload(), format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_operator_cannot_list(self):
        operator = self.make_user('guard@example.com', UserRole.OPERATOR)
        self.client.force_authenticate(user=operator)
        self.assertEqual(self.client.get(self.url).status_code, status.HTTP_403_FORBIDDEN)


class LocationAPITests(StaffingFixturesMixin, TestCase):
    def setUp(self):
        self.client = APIClient()
        self.manager = self.make_manager()
        self.client.force_authenticate(user=self.manager.user)

    def test_create_and_search(self):
        response = self.client.post(reverse('location-list'), {
            'location_name': 'Victoria Island Office',
            'city': 'Victoria Island',
            'state': 'Lagos',
            'address': '5 Adeola Odeku Street',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['total_beats'], 0)

        found = self.client.get(reverse('location-list'), {'search': 'victoria'})
        self.assertEqual([item['location_name'] for item in found.data], ['Victoria Island Office'])

    def test_location_with_beats_cannot_be_deleted(self):
        location = self.make_location()
        Beat.objects.create(beat_code='BEAT-LPO-001', beat_name='Gate', location=location, shift_type='DAY')

        response = self.client.delete(reverse('location-detail', args=[location.pk]))

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
