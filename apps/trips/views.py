from rest_framework import serializers, viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from apps.groups.serializers import TourAttendanceReportSerializer
from apps.groups.services import get_tour_attendance
from .models import Trip, Tour
from .permissions import IsTripAdmin, IsTripAdminOrReadOnly
from .serializers import (
    TripSerializer,
    TripWriteSerializer,
    TourSerializer,
    TourListSerializer,
    TourWriteSerializer,
    TourQuerySerializer,
    TripFilterSerializer,
)
from .services import (
    create_trip,
    update_trip,
    delete_trip,
    create_tour,
    update_tour,
    delete_tour,
    search_tours,
    get_all_tags,
    TripNotFoundError,
    TourNotFoundError,
    InvalidTripDatesError,
)


class TourPagination(PageNumberPagination):
    """Custom pagination for tours."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


class TripViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Trip CRUD operations.

    list: Get all trips (optionally ?status=)
    create: Create a trip (trip admins)
    retrieve: Get a trip with its links
    update / partial_update: Edit a trip (trip admins)
    destroy: Delete a trip with its tours and groups (trip admins)
    """

    queryset = Trip.objects.prefetch_related('links')
    serializer_class = TripSerializer
    permission_classes = [IsTripAdminOrReadOnly]

    def get_queryset(self):
        queryset = super().get_queryset()
        trip_status = self.request.query_params.get('status')
        if trip_status:
            queryset = queryset.filter(status=trip_status)
        return queryset

    def get_serializer_class(self):
        if self.action in ['create', 'update', 'partial_update']:
            return TripWriteSerializer
        return TripSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        trip = create_trip(**serializer.validated_data)
        return Response(TripSerializer(trip).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = self.get_serializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            trip = update_trip(trip_id=kwargs['pk'], data=serializer.validated_data)
        except TripNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidTripDatesError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(TripSerializer(trip).data)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_trip(trip_id=kwargs['pk'])
        except TripNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: TourListSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def tours(self, request, pk=None):
        """Tours of this trip in date order."""
        trip = self.get_object()
        serializer = TourListSerializer(search_tours(trip_id=trip.id), many=True)
        return Response(serializer.data)


class TourViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Tour CRUD operations.

    Filters (list): trip, tag, search, min_price, max_price, date
    """

    queryset = Tour.objects.select_related('trip').prefetch_related('links')
    serializer_class = TourSerializer
    permission_classes = [IsTripAdminOrReadOnly]
    pagination_class = TourPagination

    def get_queryset(self):
        if self.action != 'list':
            return super().get_queryset()

        query = TourQuerySerializer(data=self.request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data
        return search_tours(
            trip_id=params.get('trip'),
            tag=params.get('tag'),
            search=params.get('search'),
            min_price=params.get('min_price'),
            max_price=params.get('max_price'),
            on_date=params.get('date'),
        )

    def get_serializer_class(self):
        if self.action == 'list':
            return TourListSerializer
        if self.action in ['create', 'update', 'partial_update']:
            return TourWriteSerializer
        return TourSerializer

    @extend_schema(parameters=[TourQuerySerializer])
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)

        try:
            tour = create_tour(trip_id=data.pop('trip'), **data)
        except TripNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(TourSerializer(tour).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = self.get_serializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            tour = update_tour(tour_id=kwargs['pk'], data=serializer.validated_data)
        except TourNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(TourSerializer(tour).data)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_tour(tour_id=kwargs['pk'])
        except TourNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        parameters=[TripFilterSerializer],
        responses={200: serializers.ListField(child=serializers.CharField())},
    )
    @action(detail=False, methods=['get'])
    def tags(self, request):
        """Distinct tour tags, for category filters."""
        query = TripFilterSerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        return Response(get_all_tags(trip_id=query.validated_data.get('trip')))

    @extend_schema(responses={200: TourAttendanceReportSerializer})
    @action(detail=True, methods=['get'], permission_classes=[IsAuthenticated, IsTripAdmin])
    def attendance(self, request, pk=None):
        """Groups attending this tour with members, totals and payment state."""
        try:
            report = get_tour_attendance(tour_id=pk)
        except TourNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(TourAttendanceReportSerializer(report).data)
