from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'groups'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.GroupViewSet, basename='group')

urlpatterns = [
    # Group ViewSet routes
    # GET    /api/groups/              - List visible groups (?trip=)
    # POST   /api/groups/              - Create group (trip admin)
    # GET    /api/groups/{id}/         - Get group details
    # PUT    /api/groups/{id}/         - Update group (trip admin)
    # PATCH  /api/groups/{id}/         - Partial update (trip admin)
    # DELETE /api/groups/{id}/         - Delete group (trip admin)

    # Attendance actions (leader or trip admin)
    # GET    /api/groups/{id}/attendance/  - Attendance per tour
    # GET    /api/groups/{id}/agenda/      - Confirmed tours in date order
    # POST   /api/groups/{id}/confirm/     - Confirm members for a tour
    # POST   /api/groups/{id}/cancel/      - Cancel a tour with a reason
    # POST   /api/groups/{id}/payment/     - Record payment state

    # Additional endpoints
    path('my/', views.my_groups, name='my-groups'),

    # Include router URLs
    path('', include(router.urls)),
]
