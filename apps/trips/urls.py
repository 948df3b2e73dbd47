from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'trips'

# Router for ViewSets
# Note: tours must be registered BEFORE empty prefix to avoid URL conflicts
router = DefaultRouter()
router.register(r'tours', views.TourViewSet, basename='tour')
router.register(r'', views.TripViewSet, basename='trip')

urlpatterns = [
    # Trip ViewSet routes
    # GET    /api/trips/                    - List trips (?status=)
    # POST   /api/trips/                    - Create trip (admin)
    # GET    /api/trips/{id}/               - Trip details
    # PATCH  /api/trips/{id}/               - Update trip (admin)
    # DELETE /api/trips/{id}/               - Delete trip (admin)
    # GET    /api/trips/{id}/tours/         - Tours of a trip

    # Tour routes
    # GET    /api/trips/tours/              - List tours (filters)
    # POST   /api/trips/tours/              - Create tour (admin)
    # GET    /api/trips/tours/{id}/         - Tour details with tiers
    # PATCH  /api/trips/tours/{id}/         - Update tour (admin)
    # DELETE /api/trips/tours/{id}/         - Delete tour (admin)
    # GET    /api/trips/tours/tags/         - Distinct tags
    # GET    /api/trips/tours/{id}/attendance/ - Per-group breakdown (admin)

    path('', include(router.urls)),
]
