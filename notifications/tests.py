from smtplib import SMTPException
from unittest.mock import patch

from channels.db import database_sync_to_async
from channels.testing import WebsocketCommunicator
from django.contrib.auth import get_user_model
from django.core import mail
from django.test import TestCase, TransactionTestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from core.asgi import application
from users.models import UserStatus

from .models import Notification
from .utils import send_and_save_notification, send_credentials_email

User = get_user_model()


class NotificationUtilsTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(email='manager@example.com', password='secret123')

    def test_notification_is_saved(self):
        notification = send_and_save_notification(
            self.user, 'Registration Request Approved', 'Ada was approved.', data={'registration_request_id': 7}
        )
        self.assertEqual(notification.user, self.user)
        self.assertFalse(notification.is_read)
        self.assertEqual(notification.data, {'registration_request_id': 7})

    def test_credentials_email(self):
        send_credentials_email('ada@example.com', 'Ada', 'ada@example.com', 'javelin_SUP00001_abcdEFGH')

        self.assertEqual(len(mail.outbox), 1)
        message = mail.outbox[0]
        self.assertEqual(message.to, ['ada@example.com'])
        self.assertIn('javelin_SUP00001_abcdEFGH', message.body)
        self.assertIn('Hello Ada', message.body)
        self.assertEqual(len(message.alternatives), 1)

    def test_credentials_email_failure_is_raised(self):
        with patch('notifications.utils.send_mail', side_effect=SMTPException('relay down')):
            with self.assertRaises(SMTPException):
                send_credentials_email('ada@example.com', 'Ada', 'ada@example.com', 'secret')


class NotificationViewSetTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(email='manager@example.com', password='secret123')
        self.other = User.objects.create_user(email='other@example.com', password='secret123')
        self.first = Notification.objects.create(user=self.user, title='One', message='First')
        self.second = Notification.objects.create(user=self.user, title='Two', message='Second')
        Notification.objects.create(user=self.other, title='Theirs', message='Not yours')
        self.client.force_authenticate(user=self.user)

    def test_list_only_own(self):
        response = self.client.get(reverse('notification-list'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual({n['title'] for n in response.data}, {'One', 'Two'})

    def test_mark_as_read(self):
        response = self.client.post(reverse('notification-mark-as-read', args=[self.first.pk]))

        self.assertTrue(response.data['success'])
        self.first.refresh_from_db()
        self.assertTrue(self.first.is_read)
        unread = self.client.get(reverse('notification-unread'))
        self.assertEqual([n['title'] for n in unread.data], ['Two'])

    def test_cannot_touch_other_users_notification(self):
        theirs = Notification.objects.get(user=self.other)
        response = self.client.post(reverse('notification-mark-as-read', args=[theirs.pk]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_mark_all_as_read(self):
        response = self.client.post(reverse('notification-mark-all-as-read'))
        self.assertEqual(response.data['updated'], 2)
        self.assertFalse(Notification.objects.filter(user=self.user, is_read=False).exists())


class NotificationSocketTests(TransactionTestCase):
    async def connect(self, path):
        communicator = WebsocketCommunicator(application, path)
        connected, _ = await communicator.connect()
        return communicator, connected

    async def test_anonymous_connection_is_closed(self):
        communicator, connected = await self.connect('/ws/notifications/')
        self.assertFalse(connected)

    async def test_suspended_user_is_rejected(self):
        user = await database_sync_to_async(User.objects.create_user)(
            email='suspended@example.com', password='secret123', status=UserStatus.SUSPENDED
        )
        token = str(AccessToken.for_user(user))
        communicator, connected = await self.connect(f'/ws/notifications/?token={token}')
        self.assertFalse(connected)

    async def test_unread_count_push_and_mark_read(self):
        user = await database_sync_to_async(User.objects.create_user)(email='manager@example.com', password='secret123')
        await database_sync_to_async(Notification.objects.create)(user=user, title='One', message='First')
        token = str(AccessToken.for_user(user))

        communicator, connected = await self.connect(f'/ws/notifications/?token={token}')
        self.assertTrue(connected)
        self.assertEqual(await communicator.receive_json_from(), {'type': 'unread_count', 'count': 1})

        notification = await database_sync_to_async(send_and_save_notification)(
            user, 'Registration Request Approved', 'Ada was approved.'
        )
        pushed = await communicator.receive_json_from()
        self.assertEqual(pushed['type'], 'notification')
        self.assertEqual(pushed['id'], notification.id)
        self.assertEqual(pushed['title'], 'Registration Request Approved')

        await communicator.send_json_to({'action': 'mark_read', 'id': notification.id})
        self.assertEqual(await communicator.receive_json_from(), {
            'type': 'marked_read', 'id': notification.id, 'updated': 1,
        })
        await communicator.disconnect()
