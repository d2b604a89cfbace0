from django.db import connection
from django.db.utils import OperationalError
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response


@api_view(['GET'])
@permission_classes([AllowAny])
def health_check(request):
    """Liveness check that also confirms the database answers."""
    try:
        connection.ensure_connection()
        database = 'ok'
    except OperationalError:
        database = 'unavailable'
    return Response({'success': database == 'ok', 'database': database},
                    status=200 if database == 'ok' else 503)
