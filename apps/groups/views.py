from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from apps.trips.permissions import IsTripAdmin
from apps.trips.serializers import TripFilterSerializer
from .models import Group
from .serializers import (
    GroupSerializer,
    GroupListSerializer,
    GroupWriteSerializer,
    TourAttendanceEntrySerializer,
    ConfirmAttendanceSerializer,
    CancelAttendanceSerializer,
    PaymentSerializer,
)
from .permissions import IsGroupLeaderOrTripAdmin

from apps.groups.services import (
    create_group,
    update_group,
    delete_group,
    get_groups_for_user,
    confirm_attendance,
    cancel_attendance,
    record_payment,
    get_group_attendance,
    get_group_agenda,
    # Exceptions
    GroupNotFoundError,
    TripNotFoundError,
    TourNotFoundError,
    InvalidMembersError,
    TourNotInTripError,
    UnknownPriceTierError,
    CancellationReasonRequiredError,
    AttendanceNotConfirmedError,
)


class GroupPagination(PageNumberPagination):
    """Custom pagination for groups."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class GroupViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Group CRUD and tour attendance.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Groups the user may see (all for trip admins, led groups otherwise)
    create / update / partial_update / destroy: Trip admins only
    attendance: Every tour of the trip with the group's attendance
    agenda: Confirmed tours in date order
    confirm / cancel / payment: Change attendance on one tour
    """

    queryset = Group.objects.select_related('trip', 'leader')
    serializer_class = GroupSerializer
    permission_classes = [IsAuthenticated, IsGroupLeaderOrTripAdmin]
    pagination_class = GroupPagination

    def get_queryset(self):
        if self.action != 'list':
            return get_groups_for_user(self.request.user)

        query = TripFilterSerializer(data=self.request.query_params)
        query.is_valid(raise_exception=True)
        return get_groups_for_user(
            self.request.user,
            trip_id=query.validated_data.get('trip'),
        )

    @extend_schema(parameters=[TripFilterSerializer])
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'list':
            return GroupListSerializer
        if self.action in ['create', 'update', 'partial_update']:
            return GroupWriteSerializer
        return GroupSerializer

    def get_permissions(self):
        """Set permissions based on action."""
        if self.action in ['create', 'update', 'partial_update', 'destroy']:
            return [IsAuthenticated(), IsTripAdmin()]
        return [IsAuthenticated(), IsGroupLeaderOrTripAdmin()]

    def create(self, request, *args, **kwargs):
        """Create a new group."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)

        try:
            group = create_group(trip_id=data.pop('trip'), **data)
        except TripNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(GroupSerializer(group).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = self.get_serializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            group = update_group(group_id=kwargs['pk'], data=serializer.validated_data)
        except GroupNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(GroupSerializer(group).data)

    def destroy(self, request, *args, **kwargs):
        """Delete a group."""
        try:
            delete_group(group_id=kwargs['pk'])
        except GroupNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: TourAttendanceEntrySerializer(many=True)})
    @action(detail=True, methods=['get'])
    def attendance(self, request, pk=None):
        """Every tour of the trip with this group's attendance and cost."""
        group = self.get_object()
        entries = get_group_attendance(group_id=group.id)
        return Response(TourAttendanceEntrySerializer(entries, many=True).data)

    @extend_schema(responses={200: TourAttendanceEntrySerializer(many=True)})
    @action(detail=True, methods=['get'])
    def agenda(self, request, pk=None):
        """Confirmed tours ordered by effective date and time."""
        group = self.get_object()
        entries = get_group_agenda(group_id=group.id)
        return Response(TourAttendanceEntrySerializer(entries, many=True).data)

    def _attendance_response(self, group, tour_id):
        entry = next(
            e for e in get_group_attendance(group_id=group.id)
            if e.tour.id == tour_id
        )
        return Response(TourAttendanceEntrySerializer(entry).data)

    @extend_schema(
        request=ConfirmAttendanceSerializer,
        responses={200: TourAttendanceEntrySerializer},
    )
    @action(detail=True, methods=['post'])
    def confirm(self, request, pk=None):
        """Confirm members, date and ticket type for a tour."""
        group = self.get_object()
        serializer = ConfirmAttendanceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            confirm_attendance(
                group_id=group.id,
                tour_id=data['tour'],
                members=data['members'],
                custom_date=data.get('custom_date'),
                selected_price_key=data.get('selected_price_key'),
            )
        except TourNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (TourNotInTripError, InvalidMembersError, UnknownPriceTierError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return self._attendance_response(group, data['tour'])

    @extend_schema(
        request=CancelAttendanceSerializer,
        responses={200: TourAttendanceEntrySerializer},
    )
    @action(detail=True, methods=['post'])
    def cancel(self, request, pk=None):
        """Cancel the group's attendance on a tour, with a reason."""
        group = self.get_object()
        serializer = CancelAttendanceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            cancel_attendance(group_id=group.id, tour_id=data['tour'], reason=data['reason'])
        except TourNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (TourNotInTripError, CancellationReasonRequiredError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return self._attendance_response(group, data['tour'])

    @extend_schema(
        request=PaymentSerializer,
        responses={200: TourAttendanceEntrySerializer},
    )
    @action(detail=True, methods=['post'])
    def payment(self, request, pk=None):
        """Mark a confirmed tour as paid or unpaid."""
        group = self.get_object()
        serializer = PaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            record_payment(
                group_id=group.id,
                tour_id=data['tour'],
                is_paid=data['is_paid'],
                payment_date=data.get('payment_date'),
                payment_method=data.get('payment_method'),
            )
        except TourNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (TourNotInTripError, AttendanceNotConfirmedError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return self._attendance_response(group, data['tour'])


@extend_schema(
    responses={200: GroupSerializer(many=True)},
    description="Get all groups led by the current user.",
    tags=['groups'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_groups(request):
    """Get all groups led by the current user."""
    groups = (
        Group.objects
        .filter(leader=request.user)
        .select_related('trip', 'leader')
        .prefetch_related('tour_attendance')
    )
    serializer = GroupSerializer(groups, many=True)
    return Response(serializer.data)
