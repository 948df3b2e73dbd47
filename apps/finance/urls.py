from django.urls import path
from . import views

app_name = 'finance'

urlpatterns = [
    # System
    path('overview/', views.overview, name='overview'),

    # Trips
    path('trips/', views.trips_breakdown, name='trips-breakdown'),
    path('trips/<uuid:trip_id>/', views.trip_summary, name='trip-summary'),

    # Tours
    path('tours/top/', views.top_tours, name='top-tours'),
    path('tours/<uuid:tour_id>/', views.tour_revenue, name='tour-revenue'),

    # Groups
    path('groups/<uuid:group_id>/statement/', views.group_statement, name='group-statement'),
]
