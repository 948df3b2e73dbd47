from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema

from apps.trips.permissions import IsTripAdmin
from .reports import FinancialReports
from .serializers import (
    # Input serializers
    TripStatusQuerySerializer,
    TopToursQuerySerializer,
    # Response serializers
    OverviewSerializer,
    TripLineSerializer,
    TripSummarySerializer,
    TourRevenueSerializer,
    RankedTourSerializer,
    GroupStatementSerializer,
    ErrorSerializer,
)
from .permissions import IsGroupLeaderForStatement
from .exceptions import FinanceServiceError


@extend_schema(
    parameters=[TripStatusQuerySerializer],
    responses={200: OverviewSerializer},
    description="Revenue, paid and outstanding amounts, people and averages across trips.",
    tags=['finance'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsTripAdmin])
def overview(request):
    """System-wide financial overview - thin HTTP handler."""
    query_serializer = TripStatusQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    data = FinancialReports.system_overview(status=query_serializer.validated_data.get('status'))
    return Response(data)


@extend_schema(
    parameters=[TripStatusQuerySerializer],
    responses={200: TripLineSerializer(many=True)},
    description="One revenue summary line per trip.",
    tags=['finance'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsTripAdmin])
def trips_breakdown(request):
    """Per-trip revenue lines - thin HTTP handler."""
    query_serializer = TripStatusQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    data = FinancialReports.trips_breakdown(status=query_serializer.validated_data.get('status'))
    return Response(data)


@extend_schema(
    responses={200: TripSummarySerializer, 404: ErrorSerializer},
    description="Revenue of one trip with a line per tour.",
    tags=['finance'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsTripAdmin])
def trip_summary(request, trip_id):
    """Trip revenue summary - thin HTTP handler."""
    try:
        data = FinancialReports.trip_summary(trip_id)
    except FinanceServiceError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    return Response(data)


@extend_schema(
    responses={200: TourRevenueSerializer, 404: ErrorSerializer},
    description="Revenue of one tour per group and per ticket tier.",
    tags=['finance'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsTripAdmin])
def tour_revenue(request, tour_id):
    """Tour revenue - thin HTTP handler."""
    try:
        data = FinancialReports.tour_revenue(tour_id)
    except FinanceServiceError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    return Response(data)


@extend_schema(
    parameters=[TopToursQuerySerializer],
    responses={200: RankedTourSerializer(many=True)},
    description="Tours ranked by confirmed members; ties keep date order.",
    tags=['finance'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsTripAdmin])
def top_tours(request):
    """Top tours by confirmed members - thin HTTP handler."""
    query_serializer = TopToursQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    data = FinancialReports.top_tours(trip_id=params.get('trip'), limit=params['limit'])
    return Response({
        'trip': params.get('trip'),
        'limit': params['limit'],
        'results': data,
    })


@extend_schema(
    responses={200: GroupStatementSerializer, 403: ErrorSerializer, 404: ErrorSerializer},
    description="What a group owes for its confirmed tours and what it has paid.",
    tags=['finance'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsGroupLeaderForStatement])
def group_statement(request, group_id):
    """Group statement - thin HTTP handler."""
    try:
        data = FinancialReports.group_statement(group_id)
    except FinanceServiceError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    return Response(data)
