import logging

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncJsonWebsocketConsumer

from .models import Notification

logger = logging.getLogger(__name__)


class NotificationConsumer(AsyncJsonWebsocketConsumer):
    """
    Pushes a user's notifications as they are created.

    On connect the client receives ``{"type": "unread_count", "count": n}``;
    afterwards every new notification arrives as ``{"type": "notification", ...}``.
    The client may send ``{"action": "mark_read", "id": <notification id>}``.

    Connect with ws://<host>/ws/notifications/?token=<access token>
    or an ``Authorization: Bearer <access token>`` header.
    """
    async def connect(self):
        user = self.scope["user"]
        if user.is_anonymous:
            logger.info("Rejected anonymous notification socket")
            await self.close()
            return

        self.group_name = f"user_{user.id}"
        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.accept()
        logger.info(f"Notification socket opened for {user.email}")
        await self.send_json({"type": "unread_count", "count": await self.unread_count()})

    async def disconnect(self, close_code):
        if hasattr(self, "group_name"):
            await self.channel_layer.group_discard(self.group_name, self.channel_name)

    async def receive_json(self, content, **kwargs):
        if content.get("action") != "mark_read":
            await self.send_json({"type": "error", "message": "Unknown action"})
            return
        updated = await self.mark_read(content.get("id"))
        await self.send_json({"type": "marked_read", "id": content.get("id"), "updated": updated})

    async def send_notification(self, event):
        await self.send_json({"type": "notification", **event["message"]})

    @database_sync_to_async
    def unread_count(self):
        return Notification.objects.filter(user=self.scope["user"], is_read=False).count()

    @database_sync_to_async
    def mark_read(self, notification_id):
        try:
            return Notification.objects.filter(user=self.scope["user"], pk=notification_id).update(is_read=True)
        except (TypeError, ValueError):
            return 0
