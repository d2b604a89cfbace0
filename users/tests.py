from rest_framework.test import APIClient
from django.test import TestCase
from django.urls import reverse
from django.contrib.auth import get_user_model
from rest_framework import status

from users.models import UserRole, UserStatus

User = get_user_model()


class CustomUserModelTests(TestCase):
    def test_email_is_normalised(self):
        user = User.objects.create_user(email='Mixed.Case@Example.COM', password='secret123')
        self.assertEqual(user.email, 'mixed.case@example.com')

    def test_status_drives_is_active(self):
        user = User.objects.create_user(email='guard@example.com', password='secret123')
        self.assertTrue(user.is_active)

        user.status = UserStatus.SUSPENDED
        user.save(update_fields=['status'])
        user.refresh_from_db()
        self.assertFalse(user.is_active)

    def test_superuser_is_developer(self):
        user = User.objects.create_superuser(email='dev@example.com', password='secret123')
        self.assertEqual(user.role, UserRole.DEVELOPER)
        self.assertTrue(user.is_staff)

    def test_full_name(self):
        user = User.objects.create_user(email='a@example.com', first_name='Amaka', last_name='Eze')
        self.assertEqual(user.full_name, 'Amaka Eze')
        self.assertFalse(user.has_usable_password())


class UserViewSetTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.director = User.objects.create_user(
            email='director@example.com', password='secret123', role=UserRole.DIRECTOR
        )
        self.guard = User.objects.create_user(
            email='guard@example.com', password='OldPassw0rd!', role=UserRole.OPERATOR, must_change_password=True
        )

    def test_director_lists_users_by_role(self):
        self.client.force_authenticate(user=self.director)
        response = self.client.get(reverse('user-list'), {'role': UserRole.OPERATOR})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([u['email'] for u in response.data['results']], ['guard@example.com'])

    def test_operator_cannot_list_users(self):
        self.client.force_authenticate(user=self.guard)
        response = self.client.get(reverse('user-list'))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(response.data['success'])

    def test_profile(self):
        self.client.force_authenticate(user=self.guard)
        response = self.client.get(reverse('user-get-profile'))
        self.assertEqual(response.data['user']['email'], 'guard@example.com')
        self.assertTrue(response.data['user']['must_change_password'])

    def test_change_password_clears_flag(self):
        self.client.force_authenticate(user=self.guard)
        response = self.client.post(reverse('user-change-password'), {
            'old_password': 'OldPassw0rd!',
            'new_password': 'N3w-Secure-Passphrase',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('access', response.data['tokens'])
        self.guard.refresh_from_db()
        self.assertFalse(self.guard.must_change_password)
        self.assertTrue(self.guard.check_password('N3w-Secure-Passphrase'))

    def test_change_password_wrong_old_password(self):
        self.client.force_authenticate(user=self.guard)
        response = self.client.post(reverse('user-change-password'), {
            'old_password': 'nope',
            'new_password': 'N3w-Secure-Passphrase',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['message'], 'old_password: Current password is incorrect.')
