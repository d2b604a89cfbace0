from rest_framework import filters, viewsets
from core.permissions import IsSupervisorOrAboveUser
from ..models import Operator, Supervisor
from ..serializers import OperatorSerializer, SupervisorSerializer


class SupervisorViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = Supervisor.objects.select_related('user', 'location').order_by('id')
    serializer_class = SupervisorSerializer
    permission_classes = [IsSupervisorOrAboveUser]
    filter_backends = [filters.SearchFilter]
    search_fields = ['full_name', 'employee_id', 'user__email']

    def get_queryset(self):
        queryset = super().get_queryset()
        supervisor_type = self.request.query_params.get('supervisor_type')
        if supervisor_type:
            queryset = queryset.filter(supervisor_type=supervisor_type)
        return queryset


class OperatorViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = Operator.objects.select_related('user', 'supervisor', 'location').order_by('id')
    serializer_class = OperatorSerializer
    permission_classes = [IsSupervisorOrAboveUser]
    filter_backends = [filters.SearchFilter]
    search_fields = ['employee_id', 'user__email', 'user__first_name', 'user__last_name']

    def get_queryset(self):
        queryset = super().get_queryset()
        supervisor = self.request.query_params.get('supervisor')
        if supervisor:
            queryset = queryset.filter(supervisor_id=supervisor)
        return queryset
