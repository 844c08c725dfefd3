# -*- coding: utf-8 -*-
from datetime import date

from processors.gtfs.schema_definitions import Calendar, CalendarDate
from processors.gtfs.service_filter import (
    compute_useful_service_ids,
    expand_service_dates,
    service_dates_frame,
)

WEEKDAYS_ONLY = dict(monday=1, tuesday=1, wednesday=1, thursday=1, friday=1, saturday=0, sunday=0)


def _calendar(service_id, start, end, **days):
    return Calendar(service_id=service_id, start_date=start, end_date=end, **{**WEEKDAYS_ONLY, **days})


def test_expand_service_dates_weekdays_and_exceptions():
    calendars = [_calendar("WKD", "20240304", "20240310")]
    calendar_dates = [
        CalendarDate(service_id="WKD", date="20240305", exception_type=2),
        CalendarDate(service_id="WKD", date="20240309", exception_type=1),
        CalendarDate(service_id="HOL", date="20240401", exception_type=1),
    ]

    service_dates = expand_service_dates(calendars, calendar_dates)

    assert service_dates["WKD"] == {"20240304", "20240306", "20240307", "20240308", "20240309"}
    assert service_dates["HOL"] == {"20240401"}


def test_dates_accept_numbers():
    calendar = Calendar(service_id=7, start_date=20240304, end_date=20240304.0, **WEEKDAYS_ONLY)

    assert calendar.service_id == "7"
    assert expand_service_dates([calendar], []) == {"7": {"20240304"}}


def test_useful_services_within_lookahead():
    service_dates = {
        "NOW": {"20240306"},
        "LATER": {"20240320"},
        "PAST": {"20240101"},
    }

    assert compute_useful_service_ids(service_dates, date(2024, 3, 4), 7) == {"NOW"}
    assert compute_useful_service_ids(service_dates, date(2024, 3, 4), 16) == {"NOW", "LATER"}


def test_useful_services_fall_back_to_first_upcoming_date():
    service_dates = {
        "SUMMER": {"20240701", "20240702"},
        "SUMMER_SAT": {"20240701"},
        "FALL": {"20240903"},
    }

    assert compute_useful_service_ids(service_dates, date(2024, 3, 4), 7) == {"SUMMER", "SUMMER_SAT"}


def test_no_upcoming_service_means_excluding_all():
    assert compute_useful_service_ids({"PAST": {"20200101"}}, date(2024, 3, 4), 7) == set()


def test_service_dates_frame_sorted_and_filtered():
    df = service_dates_frame({"B": {"20240302", "20240301"}, "A": {"20240303"}, "X": {"20240301"}}, {"A", "B"})

    assert list(df.columns) == ["service_id", "date"]
    assert df.values.tolist() == [["A", "20240303"], ["B", "20240301"], ["B", "20240302"]]


def test_service_dates_frame_empty():
    df = service_dates_frame({}, set())

    assert df.empty
    assert list(df.columns) == ["service_id", "date"]
