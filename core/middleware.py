from urllib.parse import parse_qs

import jwt
from channels.db import database_sync_to_async
from channels.middleware import BaseMiddleware
from django.contrib.auth.models import AnonymousUser
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken


def token_from_scope(scope):
    """Raw JWT from ``?token=`` or an ``Authorization: Bearer`` header, else None."""
    query = parse_qs(scope.get("query_string", b"").decode("utf-8"))
    if query.get("token"):
        return query["token"][0]

    for name, value in scope.get("headers", []):
        if name == b"authorization":
            header = value.decode("utf-8")
            prefix, _, token = header.partition(" ")
            if prefix in api_settings.AUTH_HEADER_TYPES and token:
                return token
    return None


@database_sync_to_async
def get_user_from_token(token):
    from users.models import CustomUser, UserStatus

    try:
        user_id = AccessToken(token)[api_settings.USER_ID_CLAIM]
        return CustomUser.objects.get(**{api_settings.USER_ID_FIELD: user_id}, status=UserStatus.ACTIVE)
    except (jwt.InvalidTokenError, TokenError, CustomUser.DoesNotExist, KeyError):
        return AnonymousUser()


class JWTAuthMiddleware(BaseMiddleware):
    """
    Sets ``scope["user"]`` for WebSocket connections from a JWT access token.
    Suspended or inactive accounts stay anonymous.
    """
    async def __call__(self, scope, receive, send):
        token = token_from_scope(scope)
        scope["user"] = await get_user_from_token(token) if token else AnonymousUser()
        return await super().__call__(scope, receive, send)
