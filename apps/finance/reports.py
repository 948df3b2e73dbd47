"""
Financial Reports Module
========================

Read-only money figures for trip administrators and group leaders.

Every amount here is a fold of ``attendance_total`` over (tour, group)
pairs with non-empty attendance. Nothing multiplies prices itself, so a
group's statement, a tour's revenue and the system overview always agree
with what each group sees on its own tour cards.

Classes:
    FinancialReports: Static methods for each report.

Key Features:
    - System overview (revenue, paid vs outstanding, people, averages)
    - Per-trip breakdown and trip summary with per-tour lines
    - Per-tour revenue with group and ticket tier breakdown
    - Top tours by confirmed members
    - Group statement (owed, paid, outstanding per tour)

Example:
    Revenue of one trip::

        from apps.finance.reports import FinancialReports

        summary = FinancialReports.trip_summary(trip.id)
        print(f"{summary['revenue']} {summary['currency']} from {summary['people']} people")

Note:
    All methods return plain dictionaries and lists. Money values are
    Decimals quantized to two places.
"""

from collections import OrderedDict
from datetime import time
from decimal import Decimal

from django.conf import settings

from apps.groups.models import Group, TourAttendance
from apps.groups.services import effective_date
from apps.pricing import value_attendance
from apps.trips.models import Trip, Tour

from .exceptions import TripNotFoundError, TourNotFoundError, GroupNotFoundError


ZERO = Decimal('0')
CENT = Decimal('0.01')


def _money(value):
    return Decimal(value).quantize(CENT)


def _currency():
    return getattr(settings, 'TOURS_CURRENCY', 'BRL')


def _confirmed_lines(tours):
    """
    Valued attendance for every confirmed (tour, group) pair of ``tours``.

    Returns:
        dict: tour id -> list of (group, attendance, valuation), groups in
        name order. Tours without confirmed groups are absent.
    """
    tours_by_id = {tour.id: tour for tour in tours}
    rows = (
        TourAttendance.objects
        .filter(tour_id__in=tours_by_id.keys())
        .select_related('group')
        .order_by('group__name')
    )

    lines = {}
    for row in rows:
        attendance = row.attendance
        if not attendance.is_confirmed:
            continue
        tour = tours_by_id[row.tour_id]
        lines.setdefault(tour.id, []).append(
            (row.group, attendance, value_attendance(tour, attendance))
        )
    return lines


def _totals(lines):
    revenue = paid = ZERO
    confirmed_people = 0
    for _, attendance, valuation in lines:
        revenue += valuation.total
        confirmed_people += valuation.member_count
        if attendance.is_paid:
            paid += valuation.total
    return revenue, paid, confirmed_people


def _tour_line(tour, lines):
    revenue, paid, confirmed_people = _totals(lines)
    return {
        'tour_id': tour.id,
        'name': tour.name,
        'date': tour.date,
        'time': tour.time,
        'price': _money(tour.price),
        'confirmed_groups': len(lines),
        'confirmed_people': confirmed_people,
        'revenue': _money(revenue),
        'paid': _money(paid),
        'outstanding': _money(revenue - paid),
    }


class FinancialReports:
    """
    Money reports built on the attendance valuation engine.

    Methods:
        system_overview: Totals across trips.
        trips_breakdown: One summary line per trip.
        trip_summary: One trip with per-tour lines.
        tour_revenue: One tour with per-group and per-tier lines.
        top_tours: Tours ranked by confirmed members.
        group_statement: What one group owes and has paid.
    """

    @staticmethod
    def system_overview(status=None):
        """
        Totals across all trips, optionally only trips with ``status``.

        Args:
            status (str, optional): Trip status to restrict to
                ('active', 'upcoming', 'completed').

        Returns:
            dict: A dictionary containing:
                - total_revenue (Decimal): Sum of confirmed attendance totals.
                - paid_revenue (Decimal): Part of it marked paid.
                - outstanding_revenue (Decimal): The rest.
                - total_trips, total_tours, total_groups (int)
                - total_people (int): Group members plus one leader per group.
                - confirmed_people (int): Names confirmed across all tours.
                - average_tour_price (Decimal): Mean flat price of the tours.
                - revenue_per_person (Decimal): total_revenue / total_people.
                - currency (str)

        Note:
            ``total_people`` counts who travels, ``confirmed_people`` counts
            tour seats; one traveller on three tours is one person and three
            seats.
        """
        trips = Trip.objects.all()
        if status:
            trips = trips.filter(status=status)

        tours = list(Tour.objects.filter(trip__in=trips))
        groups = list(Group.objects.filter(trip__in=trips))

        all_lines = [line for lines in _confirmed_lines(tours).values() for line in lines]
        revenue, paid, confirmed_people = _totals(all_lines)

        total_people = sum(group.people_count for group in groups)
        flat_total = sum((tour.price for tour in tours), ZERO)

        return {
            'total_revenue': _money(revenue),
            'paid_revenue': _money(paid),
            'outstanding_revenue': _money(revenue - paid),
            'total_trips': trips.count(),
            'total_tours': len(tours),
            'total_groups': len(groups),
            'total_people': total_people,
            'confirmed_people': confirmed_people,
            'average_tour_price': _money(flat_total / len(tours)) if tours else _money(ZERO),
            'revenue_per_person': _money(revenue / total_people) if total_people else _money(ZERO),
            'currency': _currency(),
        }

    @staticmethod
    def _trip_line(trip, tours, groups, lines):
        revenue, paid, confirmed_people = _totals(
            [line for tour in tours for line in lines.get(tour.id, [])]
        )
        return {
            'trip_id': trip.id,
            'name': trip.name,
            'destination': trip.destination,
            'status': trip.status,
            'start_date': trip.start_date,
            'end_date': trip.end_date,
            'tours_count': len(tours),
            'groups_count': len(groups),
            'people': sum(group.people_count for group in groups),
            'confirmed_people': confirmed_people,
            'revenue': _money(revenue),
            'paid': _money(paid),
            'outstanding': _money(revenue - paid),
        }

    @staticmethod
    def trips_breakdown(status=None):
        """
        One summary line per trip, in trip start order.

        Returns:
            list[dict]: trip_id, name, destination, status, dates,
            tours_count, groups_count, people, confirmed_people, revenue,
            paid and outstanding for each trip.
        """
        trips = Trip.objects.prefetch_related('tours', 'groups')
        if status:
            trips = trips.filter(status=status)
        trips = list(trips)

        all_tours = [tour for trip in trips for tour in trip.tours.all()]
        lines = _confirmed_lines(all_tours)

        return [
            FinancialReports._trip_line(trip, list(trip.tours.all()), list(trip.groups.all()), lines)
            for trip in trips
        ]

    @staticmethod
    def trip_summary(trip_id):
        """
        One trip with a revenue line per tour.

        Args:
            trip_id (UUID): The trip to report on.

        Returns:
            dict: The trip line of ``trips_breakdown`` plus ``tours``
            (list of per-tour lines in date order) and ``currency``.

        Raises:
            TripNotFoundError: If the trip doesn't exist.
        """
        try:
            trip = Trip.objects.prefetch_related('tours', 'groups').get(id=trip_id)
        except Trip.DoesNotExist:
            raise TripNotFoundError(f"Trip {trip_id} not found")

        tours = list(trip.tours.all())
        lines = _confirmed_lines(tours)

        summary = FinancialReports._trip_line(trip, tours, list(trip.groups.all()), lines)
        summary['tours'] = [_tour_line(tour, lines.get(tour.id, [])) for tour in tours]
        summary['currency'] = _currency()
        return summary

    @staticmethod
    def tour_revenue(tour_id):
        """
        Revenue of one tour, per group and per ticket tier.

        Args:
            tour_id (UUID): The tour to report on.

        Returns:
            dict: The per-tour line plus:
                - groups (list): group_id, group_name, members,
                  tier_label, price_per_person, total, is_paid,
                  payment_date, payment_method, effective_date.
                - by_tier (list): label, people, revenue. Groups whose key
                  does not resolve are reported under the flat price with
                  a null label.
                - currency (str)

        Raises:
            TourNotFoundError: If the tour doesn't exist.
        """
        try:
            tour = Tour.objects.get(id=tour_id)
        except Tour.DoesNotExist:
            raise TourNotFoundError(f"Tour {tour_id} not found")

        lines = _confirmed_lines([tour]).get(tour.id, [])
        report = _tour_line(tour, lines)

        by_tier = OrderedDict()
        groups = []
        for group, attendance, valuation in lines:
            groups.append({
                'group_id': group.id,
                'group_name': group.name,
                'members': list(attendance.members),
                'tier_label': valuation.tier_label,
                'price_per_person': _money(valuation.price_per_person),
                'total': _money(valuation.total),
                'is_paid': attendance.is_paid,
                'payment_date': attendance.payment_date,
                'payment_method': attendance.payment_method,
                'effective_date': effective_date(tour, attendance),
            })
            tier = by_tier.setdefault(valuation.tier_label, {'people': 0, 'revenue': ZERO})
            tier['people'] += valuation.member_count
            tier['revenue'] += valuation.total

        report['groups'] = groups
        report['by_tier'] = [
            {'label': label, 'people': tier['people'], 'revenue': _money(tier['revenue'])}
            for label, tier in by_tier.items()
        ]
        report['currency'] = _currency()
        return report

    @staticmethod
    def top_tours(trip_id=None, limit=10):
        """
        Tours ranked by confirmed members, most first.

        Ties keep the tour order (date, time, name), so the ranking is
        stable between calls.

        Args:
            trip_id (UUID, optional): Restrict to one trip.
            limit (int): Number of results.

        Returns:
            list[dict]: rank plus the per-tour line for each tour.
        """
        tours = Tour.objects.all()
        if trip_id:
            tours = tours.filter(trip_id=trip_id)
        tours = list(tours.order_by('date', 'time', 'name'))

        lines = _confirmed_lines(tours)
        ranked = sorted(
            (_tour_line(tour, lines.get(tour.id, [])) for tour in tours),
            key=lambda line: line['confirmed_people'],
            reverse=True,
        )

        return [
            dict(line, rank=position)
            for position, line in enumerate(ranked[:limit], start=1)
        ]

    @staticmethod
    def group_statement(group_id):
        """
        What a group owes for its confirmed tours and what it has paid.

        Args:
            group_id (UUID): The group.

        Returns:
            dict: group_id, group_name, trip_id, trip_name, people,
            lines (one per confirmed tour, in agenda order), total_owed,
            total_paid, outstanding, currency.

        Raises:
            GroupNotFoundError: If the group doesn't exist.
        """
        try:
            group = Group.objects.select_related('trip').get(id=group_id)
        except Group.DoesNotExist:
            raise GroupNotFoundError(f"Group {group_id} not found")

        rows = (
            TourAttendance.objects
            .filter(group=group)
            .select_related('tour')
        )

        statement_lines = []
        owed = paid = ZERO
        for row in rows:
            attendance = row.attendance
            if not attendance.is_confirmed:
                continue
            valuation = value_attendance(row.tour, attendance)
            owed += valuation.total
            if attendance.is_paid:
                paid += valuation.total
            statement_lines.append({
                'tour_id': row.tour.id,
                'tour_name': row.tour.name,
                'date': effective_date(row.tour, attendance),
                'time': row.tour.time,
                'members': list(attendance.members),
                'tier_label': valuation.tier_label,
                'price_per_person': _money(valuation.price_per_person),
                'total': _money(valuation.total),
                'is_paid': attendance.is_paid,
                'payment_date': attendance.payment_date,
                'payment_method': attendance.payment_method,
            })

        statement_lines.sort(key=lambda line: (line['date'], line['time'] or time.min, line['tour_name']))

        return {
            'group_id': group.id,
            'group_name': group.name,
            'trip_id': group.trip.id,
            'trip_name': group.trip.name,
            'people': group.people_count,
            'lines': statement_lines,
            'total_owed': _money(owed),
            'total_paid': _money(paid),
            'outstanding': _money(owed - paid),
            'currency': _currency(),
        }
