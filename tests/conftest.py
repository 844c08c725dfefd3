# tests/conftest.py
# -*- coding: utf-8 -*-
"""
Shared fixtures: application settings pinned to a known service date and a
small in-memory Guelph-like feed, shaped the way gtfs-kit returns tables.
"""

from datetime import date

import pandas as pd
import pytest

from config.config_models import AppSettings

WEEKDAYS_ONLY = dict(monday=1, tuesday=1, wednesday=1, thursday=1, friday=1, saturday=0, sunday=0)
NO_DAYS = dict(monday=0, tuesday=0, wednesday=0, thursday=0, friday=0, saturday=0, sunday=0)


@pytest.fixture
def app_settings(tmp_path):
    return AppSettings(
        service_date=date(2024, 3, 4),
        service_lookahead_days=7,
        temp_dir=str(tmp_path / "downloads"),
    )


def _stop_times(trips):
    rows = []
    for trip_id, stop_ids in trips.items():
        for sequence, stop_id in enumerate(stop_ids, start=1):
            rows.append({
                "trip_id": trip_id,
                "stop_id": stop_id,
                "stop_sequence": sequence,
                "departure_time": f"08:{sequence:02d}:00",
            })
    return pd.DataFrame(rows)


@pytest.fixture
def guelph_feed():
    """Raw tables for routes 1 (split by anchors), 99, 50U and Com."""
    routes = pd.DataFrame([
        {"route_id": "R1", "agency_id": "GT", "route_short_name": "1",
         "route_long_name": "Route1-Edinburgh College", "route_type": 3, "route_color": None},
        {"route_id": "R99", "agency_id": "GT", "route_short_name": "99",
         "route_long_name": "Route99", "route_type": 3, "route_color": "000000"},
        {"route_id": "R50U", "agency_id": "GT", "route_short_name": "50 U",
         "route_long_name": "Stone Road Express", "route_type": 3, "route_color": None},
        {"route_id": "RCOM", "agency_id": "GT", "route_short_name": "Com",
         "route_long_name": "Community Bus", "route_type": 3, "route_color": None},
    ])
    stops = pd.DataFrame([
        {"stop_id": "S112", "stop_code": "112", "stop_name": "Edinburgh at Laurelwood northbound",
         "stop_lat": 43.52, "stop_lon": -80.26},
        {"stop_id": "S356", "stop_code": "356", "stop_name": "Gordon Street at Stone Road",
         "stop_lat": 43.53, "stop_lon": -80.23},
        {"stop_id": "S5844", "stop_code": "5844", "stop_name": "University Centre South Loop Platform 2",
         "stop_lat": 43.53, "stop_lon": -80.22},
        {"stop_id": "S5845", "stop_code": "5845", "stop_name": "University Centre South Loop Platform 4",
         "stop_lat": 43.53, "stop_lon": -80.22},
        {"stop_id": "S106", "stop_code": "106", "stop_name": "Edinburgh at College southbound",
         "stop_lat": 43.52, "stop_lon": -80.25},
        {"stop_id": "1015-0213_Foo St at Bar Ave southbound", "stop_code": None,
         "stop_name": "Foo St. at Bar Ave southbound", "stop_lat": 43.54, "stop_lon": -80.24},
        {"stop_id": "Route5A-0549_Victoria Road South at Macalister Boulevard southbound", "stop_code": "",
         "stop_name": "Victoria Road South at Macalister Boulevard southbound",
         "stop_lat": 43.51, "stop_lon": -80.21},
        {"stop_id": "S5841", "stop_code": "5841", "stop_name": "Guelph Central Station Platform 21",
         "stop_lat": 43.54, "stop_lon": -80.25},
        {"stop_id": "S5841B", "stop_code": "5841", "stop_name": "Guelph Central Station Platform 21 depart",
         "stop_lat": 43.54, "stop_lon": -80.25},
    ])
    trips = pd.DataFrame([
        {"route_id": "R1", "service_id": "WKD", "trip_id": "T1", "trip_headsign": "1 University Centre",
         "direction_id": 0},
        {"route_id": "R1", "service_id": "WKD", "trip_id": "T2", "trip_headsign": "1 Edinburgh College",
         "direction_id": 0},
        {"route_id": "R1", "service_id": "SAT", "trip_id": "T3", "trip_headsign": "1 Edinburgh",
         "direction_id": 1},
        {"route_id": "R99", "service_id": "WKD", "trip_id": "T4", "trip_headsign": "99 Mainline Northbound",
         "direction_id": 0},
        {"route_id": "R99", "service_id": "WKD", "trip_id": "T5", "trip_headsign": None,
         "direction_id": 0},
        {"route_id": "R99", "service_id": "WKD", "trip_id": "T6", "trip_headsign": "South Loop to Stone Road Mall",
         "direction_id": 1},
        {"route_id": "R99", "service_id": "OLD", "trip_id": "T7", "trip_headsign": "Nowhere",
         "direction_id": 0},
    ])
    stop_times = _stop_times({
        "T1": ["S112", "1015-0213_Foo St at Bar Ave southbound", "S356", "S5844", "S5845"],
        "T2": ["S112", "S356", "S5845"],
        "T3": ["S5845", "S106", "S112"],
        "T4": ["S5841", "Route5A-0549_Victoria Road South at Macalister Boulevard southbound"],
        "T5": ["S5841", "S5841B", "Route5A-0549_Victoria Road South at Macalister Boulevard southbound"],
        "T6": ["Route5A-0549_Victoria Road South at Macalister Boulevard southbound", "S5841"],
        "T7": ["S5841", "S106"],
    })
    calendar = pd.DataFrame([
        {"service_id": "WKD", **WEEKDAYS_ONLY, "start_date": "20240101", "end_date": "20241231"},
        {"service_id": "SAT", **NO_DAYS, "start_date": "20240101", "end_date": "20241231"},
        {"service_id": "OLD", **WEEKDAYS_ONLY, "start_date": "20230101", "end_date": "20230201"},
    ])
    calendar_dates = pd.DataFrame([
        {"service_id": "WKD", "date": "20240305", "exception_type": 2},
        {"service_id": "SAT", "date": "20240309", "exception_type": 1},
    ])
    return {
        "routes": routes,
        "trips": trips,
        "stops": stops,
        "stop_times": stop_times,
        "calendar": calendar,
        "calendar_dates": calendar_dates,
    }
