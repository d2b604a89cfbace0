from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views.registration_request_views import RegistrationRequestViewSet
from .views.location_views import LocationViewSet
from .views.beat_views import BeatViewSet
from .views.admin_views import AdminViewSet
from .views.staff_views import OperatorViewSet, SupervisorViewSet

router = DefaultRouter()
router.register(r'registration-requests', RegistrationRequestViewSet, basename='registration-request')
router.register(r'locations', LocationViewSet, basename='location')
router.register(r'beats', BeatViewSet, basename='beat')
router.register(r'admins', AdminViewSet, basename='admin')
router.register(r'supervisors', SupervisorViewSet, basename='supervisor')
router.register(r'operators', OperatorViewSet, basename='operator')

urlpatterns = [
    path('', include(router.urls)),
]
