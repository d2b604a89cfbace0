import logging

from . import models, serializers
from rest_framework import viewsets, permissions, filters
from core import permissions as core_permissions
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.exceptions import ValidationError
from rest_framework_simplejwt.tokens import RefreshToken

logger = logging.getLogger(__name__)


class UserViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Accounts are read-only here: they are only ever created by admin
    registration or by approving a registration request.
    """
    queryset = models.CustomUser.objects.all().order_by('id')
    serializer_class = serializers.CustomUserSerializer
    permission_classes = [core_permissions.IsDirectorUser]
    filter_backends = [filters.SearchFilter]
    search_fields = ['email', 'first_name', 'last_name', 'employee_id']

    def get_queryset(self):
        queryset = super().get_queryset()
        role = self.request.query_params.get('role')
        user_status = self.request.query_params.get('status')
        if role:
            queryset = queryset.filter(role=role)
        if user_status:
            queryset = queryset.filter(status=user_status)
        return queryset

    @action(detail=False, methods=['POST'], url_path='change-password', permission_classes=[permissions.IsAuthenticated])
    def change_password(self, request):
        """
        Endpoint to change a user's password.
        Requires old_password and new_password in the request body.
        Returns a fresh token pair so the client stays signed in.
        """
        serializer = serializers.ChangePasswordSerializer(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)

        user = request.user
        user.set_password(serializer.validated_data['new_password'])
        user.must_change_password = False
        user.save(update_fields=['password', 'must_change_password'])
        logger.info(f"Password changed for {user.email}")

        refresh = RefreshToken.for_user(user)
        return Response({
            "success": True,
            "message": "Password changed successfully.",
            "tokens": {
                "refresh": str(refresh),
                "access": str(refresh.access_token),
            }
        })

    @action(detail=False, methods=['POST'], url_path='update-photo', permission_classes=[permissions.IsAuthenticated])
    def update_profile_photo(self, request):
        """
        Update the user's profile photo path.

        Request body should contain:
        - profile_photo: path or URL of the profile photo
        """
        user = request.user
        profile_photo = request.data.get('profile_photo')

        if not profile_photo:
            raise ValidationError({'profile_photo': 'This field is required.'})

        user.profile_photo = profile_photo
        user.save(update_fields=['profile_photo'])
        return Response({
            "success": True,
            "profile_photo": user.profile_photo
        })

    @action(detail=False, methods=['GET'], url_path='profile', permission_classes=[permissions.IsAuthenticated])
    def get_profile(self, request):
        """
        Retrieve the profile of the currently authenticated user.
        """
        serializer = self.get_serializer(request.user)
        return Response({"success": True, "user": serializer.data})
