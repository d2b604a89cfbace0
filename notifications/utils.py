import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.conf import settings
from django.core.mail import send_mail
from django.template.loader import render_to_string

from .models import Notification

logger = logging.getLogger(__name__)


def send_and_save_notification(user, title, message, data=None):
    """
    Utility function to send a WebSocket notification and save it to the database.

    Args:
        user: The user to send the notification to
        title: The notification title
        message: The notification message body
        data: Optional JSON-serialisable payload (ids the client can link to)
    """
    notification = Notification.objects.create(
        user=user,
        title=title,
        message=message,
        data=data or {},
    )

    channel_layer = get_channel_layer()
    if channel_layer is None:
        return notification

    logger.info(f"Sending notification to {user.email}: {title}")
    async_to_sync(channel_layer.group_send)(f"user_{user.id}", {
        "type": "send_notification",
        "message": {
            "id": notification.id,
            "title": title,
            "body": message,
            "data": notification.data,
        },
    })
    return notification


def send_credentials_email(email, first_name, username, password):
    """
    Mail freshly generated login credentials to a new account holder.

    Delivery errors are raised to the caller.
    """
    context = {
        'first_name': first_name,
        'username': username,
        'password': password,
        'login_url': settings.FRONTEND_BASE_URL,
    }
    send_mail(
        subject="Your staff account has been created",
        message=render_to_string('notifications/credentials_email.txt', context),
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[email],
        html_message=render_to_string('notifications/credentials_email.html', context),
        fail_silently=False,
    )
    logger.info(f"Credentials email sent to {email}")
