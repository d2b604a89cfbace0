from django.db.models import ProtectedError
from rest_framework import filters, viewsets
from core.exceptions import Conflict
from core.permissions import IsManagerOrAboveUser, IsSupervisorOrAboveUser
from ..models import Location
from ..serializers import LocationSerializer


class LocationViewSet(viewsets.ModelViewSet):
    queryset = Location.objects.all().order_by('location_name')
    serializer_class = LocationSerializer
    pagination_class = None
    filter_backends = [filters.SearchFilter]
    search_fields = ['location_name', 'city', 'state']

    def get_permissions(self):
        if self.action in ['list', 'retrieve']:
            return [IsSupervisorOrAboveUser()]
        return [IsManagerOrAboveUser()]

    def get_queryset(self):
        queryset = super().get_queryset()
        is_active = self.request.query_params.get('is_active')
        if is_active is not None:
            queryset = queryset.filter(is_active=is_active.lower() == 'true')
        return queryset

    def perform_create(self, serializer):
        serializer.save(created_by=self.request.user)

    def perform_destroy(self, instance):
        try:
            instance.delete()
        except ProtectedError:
            raise Conflict('This location still has beats and cannot be deleted')
