#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Service-date expansion and the "useful service IDs" precomputation.

A service is useful when it runs on at least one day of the look-ahead window
starting at the reference service date. Trips, calendars and calendar dates
of other services are excluded from the generated data.
"""

import logging
from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, Iterable, Set

import pandas as pd

from processors.gtfs.schema_definitions import Calendar, CalendarDate

module_logger = logging.getLogger(__name__)

GTFS_DATE_FORMAT = "%Y%m%d"
WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
SERVICE_ADDED = 1
SERVICE_REMOVED = 2


def expand_service_dates(
    calendars: Iterable[Calendar], calendar_dates: Iterable[CalendarDate]
) -> Dict[str, Set[str]]:
    """
    Expand calendar patterns and exceptions into the concrete dates of each service.

    Args:
        calendars: Rows of calendar.txt.
        calendar_dates: Rows of calendar_dates.txt.

    Returns:
        service_id -> set of YYYYMMDD dates the service runs on.
    """
    service_dates: Dict[str, Set[str]] = defaultdict(set)

    for calendar in calendars:
        running_days = {i for i, day in enumerate(WEEKDAYS) if getattr(calendar, day) == 1}
        days = pd.date_range(
            pd.to_datetime(calendar.start_date, format=GTFS_DATE_FORMAT),
            pd.to_datetime(calendar.end_date, format=GTFS_DATE_FORMAT),
            freq="D",
        )
        service_dates[calendar.service_id].update(
            day.strftime(GTFS_DATE_FORMAT) for day in days if day.weekday() in running_days
        )

    for calendar_date in calendar_dates:
        if calendar_date.exception_type == SERVICE_ADDED:
            service_dates[calendar_date.service_id].add(calendar_date.date)
        elif calendar_date.exception_type == SERVICE_REMOVED:
            service_dates[calendar_date.service_id].discard(calendar_date.date)

    return dict(service_dates)


def compute_useful_service_ids(
    service_dates: Dict[str, Set[str]], service_date: date, lookahead_days: int
) -> Set[str]:
    """
    Services running within ``[service_date, service_date + lookahead_days]``.

    When none runs in that window, the services of the first upcoming service
    date are used instead. An empty set means nothing is left to generate.
    """
    window_start = service_date.strftime(GTFS_DATE_FORMAT)
    window_end = (service_date + timedelta(days=lookahead_days)).strftime(GTFS_DATE_FORMAT)

    useful = {
        service_id
        for service_id, dates in service_dates.items()
        if any(window_start <= d <= window_end for d in dates)
    }
    if useful:
        module_logger.info(
            f"{len(useful)} service(s) running between {window_start} and {window_end}."
        )
        return useful

    upcoming = sorted(d for dates in service_dates.values() for d in dates if d >= window_start)
    if not upcoming:
        module_logger.warning(f"No service runs on or after {window_start}.")
        return set()

    first_date = upcoming[0]
    useful = {service_id for service_id, dates in service_dates.items() if first_date in dates}
    module_logger.warning(
        f"No service between {window_start} and {window_end}. "
        f"Using the {len(useful)} service(s) of the first upcoming date {first_date}."
    )
    return useful


def service_dates_frame(service_dates: Dict[str, Set[str]], useful_service_ids: Set[str]) -> pd.DataFrame:
    """Long table of (service_id, date) for the useful services, sorted."""
    rows = [
        {"service_id": service_id, "date": d}
        for service_id in sorted(useful_service_ids)
        for d in sorted(service_dates.get(service_id, ()))
    ]
    return pd.DataFrame(rows, columns=["service_id", "date"])
