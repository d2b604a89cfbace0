import logging

from django.db import transaction
from django.db.models import F
from rest_framework import filters, status, viewsets
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from core.permissions import IsManagerOrAboveUser, IsSupervisorOrAboveUser
from ..identifiers import generate_beat_code
from ..models import Beat, Location
from ..serializers import BeatSerializer

logger = logging.getLogger(__name__)


class BeatViewSet(viewsets.ModelViewSet):
    """
    Security posts. ``beat_code`` is generated from the location name and
    each location keeps a running ``total_beats`` count.
    """
    queryset = Beat.objects.select_related('location', 'supervisor').order_by('-created_at')
    serializer_class = BeatSerializer
    filter_backends = [filters.SearchFilter]
    search_fields = ['beat_code', 'beat_name', 'location__location_name']

    def get_permissions(self):
        if self.action in ['list', 'retrieve']:
            return [IsSupervisorOrAboveUser()]
        return [IsManagerOrAboveUser()]

    def get_queryset(self):
        queryset = super().get_queryset()
        location = self.request.query_params.get('location')
        is_active = self.request.query_params.get('is_active')
        if location:
            queryset = queryset.filter(location_id=location)
        if is_active is not None:
            queryset = queryset.filter(is_active=is_active.lower() == 'true')
        return queryset

    def create(self, request, *args, **kwargs):
        try:
            Location.objects.get(pk=request.data.get('location'))
        except (Location.DoesNotExist, ValueError, TypeError):
            raise NotFound('Location not found')

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        location = serializer.validated_data['location']

        with transaction.atomic():
            beat = serializer.save(beat_code=generate_beat_code(location), created_by=request.user)
            Location.objects.filter(pk=location.pk).update(total_beats=F('total_beats') + 1)

        logger.info(f"Beat {beat.beat_code} created at {location}")
        return Response({'success': True, 'beat': self.get_serializer(beat).data}, status=status.HTTP_201_CREATED)

    def perform_destroy(self, instance):
        with transaction.atomic():
            Location.objects.filter(pk=instance.location_id, total_beats__gt=0).update(
                total_beats=F('total_beats') - 1
            )
            instance.delete()
        logger.info(f"Beat {instance.beat_code} deleted")
