#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Default agency tools: the override points an agency adapter fills in.

`DefaultAgencyTools` reads a GTFS feed, asks its hooks how to identify, name,
color and split every route, trip and stop, and produces the normalized
tables. Agencies subclass it and override only the hooks whose default does
not fit their feed.
"""

import logging
import re
import time
from datetime import date
from functools import reduce
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple

import pandas as pd

from common.core_utils import format_duration
from common.clean_utils import clean_label
from common.processor_interface import (
    MalformedStopRecordError,
    ProcessorError,
    ProcessorInterface,
    UnexpectedHeadsignMergeError,
    UnmappableIdentifierError,
)
from config.config_models import AppSettings
from processors.gtfs import extract as gtfs_extract
from processors.gtfs import load as gtfs_load
from processors.gtfs import main_pipeline
from processors.gtfs import service_filter
from processors.gtfs.schema_definitions import (
    Calendar,
    CalendarDate,
    DirectionTrip,
    Route,
    RouteRecord,
    Stop,
    StopRecord,
    Trip,
    TripStopRecord,
)
from processors.gtfs.trip_splitting import RouteTripSpec, merge_trip_stops

ROUTE_TYPE_BUS = 3

DIGITS = re.compile(r"[0-9]+")


def _records_frame(records: Dict[int, Any], table_name: str) -> pd.DataFrame:
    """Records sorted by ID as an output table, missing values as None."""
    rows = [r.model_dump() for r in sorted(records.values(), key=lambda r: r.id)]
    df = pd.DataFrame(rows, columns=gtfs_load.OUTPUT_TABLE_COLUMNS[table_name])
    for column in df.columns:
        if df[column].isna().any():
            df[column] = df[column].astype(object).where(df[column].notna(), None)
    return df


class DefaultAgencyTools(ProcessorInterface):
    """Base agency adapter. Every public hook below may be overridden."""

    agency_label = "GTFS"

    def __init__(self, app_settings: Optional[AppSettings] = None):
        super().__init__(app_settings or AppSettings())
        self.service_ids: Optional[Set[str]] = None
        self.temp_files: List[Path] = []

    @property
    def processor_name(self) -> str:
        return self.agency_label

    # --- Run ---

    def start(self, args: Sequence[str]) -> List[Path]:
        """
        Generate the agency data.

        Args:
            args: ``[gtfs_path, output_dir, files_prefix]``; missing entries
                  fall back to the settings defaults.

        Returns:
            Paths of the files written (empty when every service is excluded).
        """
        settings = self.app_settings
        gtfs_path = args[0] if len(args) > 0 else settings.default_input_path
        output_dir = args[1] if len(args) > 1 else settings.default_output_dir
        files_prefix = args[2] if len(args) > 2 else settings.default_files_prefix

        self.logger.info(f"Generating {self.agency_label} data...")
        started = time.monotonic()
        try:
            written = main_pipeline.run_agency_pipeline(self, gtfs_path, Path(output_dir), files_prefix)
        finally:
            self.cleanup(self.temp_files)
        elapsed_ms = (time.monotonic() - started) * 1000
        self.logger.info(f"Generating {self.agency_label} data... DONE in {format_duration(elapsed_ms)}.")
        return written

    # --- Service filtering ---

    def compute_useful_service_ids(self, raw_data: Dict[str, Any]) -> Optional[Set[str]]:
        """
        Compute, once per run, the services worth generating data for.

        Returns None when the feed has no calendar tables, meaning nothing is
        filtered.
        """
        if self.service_ids is not None:
            return self.service_ids

        calendars = gtfs_extract.records_from_frame(raw_data.get("calendar"), Calendar)
        calendar_dates = gtfs_extract.records_from_frame(raw_data.get("calendar_dates"), CalendarDate)
        if not calendars and not calendar_dates:
            self.logger.warning("Feed has no calendar tables. Keeping every service.")
            return None

        reference = self.app_settings.service_date or date.today()
        service_dates = service_filter.expand_service_dates(calendars, calendar_dates)
        self.service_ids = service_filter.compute_useful_service_ids(
            service_dates, reference, self.app_settings.service_lookahead_days
        )
        return self.service_ids

    def excluding_all(self) -> bool:
        return self.service_ids is not None and not self.service_ids

    def exclude_calendar(self, calendar: Calendar) -> bool:
        return self.service_ids is not None and calendar.service_id not in self.service_ids

    def exclude_calendar_date(self, calendar_date: CalendarDate) -> bool:
        return self.service_ids is not None and calendar_date.service_id not in self.service_ids

    def exclude_trip(self, trip: Trip) -> bool:
        return self.service_ids is not None and trip.service_id not in self.service_ids

    def exclude_route(self, route: Route) -> bool:
        return False

    # --- Agency ---

    def get_agency_route_type(self) -> int:
        return ROUTE_TYPE_BUS

    def get_agency_color(self) -> Optional[str]:
        return None

    # --- Routes ---

    def get_route_id(self, route: Route) -> int:
        if DIGITS.fullmatch(route.route_id):
            return int(route.route_id)
        raise UnmappableIdentifierError(f"Can't find route ID for '{route.route_id}'", record=route)

    def get_route_short_name(self, route: Route) -> str:
        return clean_label(route.route_short_name)

    def get_route_long_name(self, route: Route) -> str:
        return clean_label(route.route_long_name)

    def get_route_color(self, route: Route) -> Optional[str]:
        return route.route_color.strip().upper() if route.route_color else None

    # --- Trips ---

    def get_route_trip_spec(self, route_id: int) -> Optional[RouteTripSpec]:
        return None

    def split_trip(self, route_id: int, trip: Trip) -> List[DirectionTrip]:
        spec = self.get_route_trip_spec(route_id)
        if spec is not None:
            return spec.get_all_trips()
        return [DirectionTrip(route_id=route_id, headsign_id=trip.direction_id_or_default)]

    def split_trip_stop(self, route_id: int, trip: Trip, stop_ids: Sequence[int]) -> int:
        """Direction (headsign ID) the trip's stops belong to."""
        spec = self.get_route_trip_spec(route_id)
        if spec is not None:
            return spec.split_trip_stop(trip.trip_id, stop_ids)
        return trip.direction_id_or_default

    def set_trip_headsign(self, route_id: int, direction_trip: DirectionTrip, trip: Trip) -> None:
        if self.get_route_trip_spec(route_id) is not None:
            return
        direction_trip.set_headsign_string(self.clean_trip_headsign(trip.trip_headsign), trip.direction_id_or_default)

    def clean_trip_headsign(self, trip_headsign: str) -> str:
        return clean_label(trip_headsign)

    def merge_headsign(self, direction_trip: DirectionTrip, direction_trip_to_merge: DirectionTrip) -> bool:
        return False

    def compare_early(self, route_id: int, list1: List[int], list2: List[int], stop1: int, stop2: int) -> int:
        spec = self.get_route_trip_spec(route_id)
        if spec is not None:
            return spec.compare(list1, list2, stop1, stop2)
        return 0

    def direction_finder_enabled(self) -> bool:
        return False

    # --- Stops ---

    def clean_stop_name(self, stop_name: str) -> str:
        return clean_label(stop_name)

    def get_stop_id(self, stop: Stop) -> int:
        if DIGITS.fullmatch(stop.stop_id):
            return int(stop.stop_id)
        raise MalformedStopRecordError(f"Error while getting stop ID for '{stop.stop_id}'", record=stop)

    # --- ETL ---

    def extract(self, source_path: Any, **kwargs) -> Dict[str, Any]:
        local_path = gtfs_extract.resolve_source(
            source_path,
            self.app_settings.temp_dir,
            timeout=self.app_settings.download_timeout_seconds,
        )
        if gtfs_extract.is_remote_source(source_path):
            self.temp_files.append(local_path)
        return gtfs_extract.read_feed_tables(local_path)

    def transform(self, raw_data: Dict[str, Any]) -> Dict[str, pd.DataFrame]:
        if self.direction_finder_enabled():
            self.logger.warning("Direction finder requested but not available. Using GTFS direction IDs.")

        routes, route_ids = self._transform_routes(raw_data)
        stops, stop_ids = self._transform_stops(raw_data)
        stop_sequences = self._stop_sequences(raw_data, stop_ids)
        trips, trip_stops = self._transform_trips(raw_data, route_ids, stop_sequences)
        service_dates = self._transform_service_dates(raw_data)

        self.logger.info(
            f"Transformed {len(routes)} route(s), {len(trips)} directional trip(s), "
            f"{len(stops)} stop(s), {len(service_dates)} service date(s)."
        )
        return {
            "routes": routes,
            "trips": trips,
            "trip_stops": trip_stops,
            "stops": stops,
            "service_dates": service_dates,
        }

    def load(self, transformed_data: Dict[str, Any], output_dir: Path, files_prefix: str = "") -> List[Path]:
        return gtfs_load.write_tables(transformed_data, output_dir, files_prefix)

    def _transform_routes(self, raw_data: Dict[str, Any]) -> Tuple[pd.DataFrame, Dict[str, int]]:
        records: Dict[int, RouteRecord] = {}
        route_ids: Dict[str, int] = {}
        for route in gtfs_extract.records_from_frame(raw_data.get("routes"), Route):
            if self.exclude_route(route):
                continue
            route_id = self.get_route_id(route)
            if route_id in records:
                raise UnmappableIdentifierError(
                    f"Route ID {route_id} derived for '{route.route_short_name}' is already used "
                    f"by '{records[route_id].short_name}'",
                    record=route,
                )
            records[route_id] = RouteRecord(
                id=route_id,
                short_name=self.get_route_short_name(route),
                long_name=self.get_route_long_name(route),
                color=self.get_route_color(route),
            )
            route_ids[route.route_id] = route_id
        return _records_frame(records, "routes"), route_ids

    def _transform_stops(self, raw_data: Dict[str, Any]) -> Tuple[pd.DataFrame, Dict[str, int]]:
        records: Dict[int, StopRecord] = {}
        stop_ids: Dict[str, int] = {}
        for stop in gtfs_extract.records_from_frame(raw_data.get("stops"), Stop, MalformedStopRecordError):
            stop_id = self.get_stop_id(stop)
            stop_ids[stop.stop_id] = stop_id
            if stop_id in records:
                self.logger.debug(f"Stop '{stop.stop_id}' shares ID {stop_id} with an earlier stop. Keeping the first.")
                continue
            records[stop_id] = StopRecord(
                id=stop_id,
                code=stop.stop_code or "",
                name=self.clean_stop_name(stop.stop_name),
                lat=stop.stop_lat,
                lon=stop.stop_lon,
            )
        return _records_frame(records, "stops"), stop_ids

    def _stop_sequences(self, raw_data: Dict[str, Any], stop_ids: Dict[str, int]) -> Dict[str, List[int]]:
        stop_times = raw_data.get("stop_times")
        if stop_times is None or stop_times.empty:
            return {}
        ordered = stop_times[["trip_id", "stop_id", "stop_sequence"]].copy()
        ordered["trip_id"] = ordered["trip_id"].astype(str)
        ordered["stop_id"] = ordered["stop_id"].astype(str)
        ordered = ordered.sort_values(["trip_id", "stop_sequence"], kind="stable")

        unknown = set(ordered["stop_id"]) - set(stop_ids)
        if unknown:
            raise ProcessorError(f"stop_times reference unknown stop(s): {sorted(unknown)[:5]}")

        ordered["derived_stop_id"] = ordered["stop_id"].map(stop_ids)
        return {trip_id: group.tolist() for trip_id, group in ordered.groupby("trip_id")["derived_stop_id"]}

    def _transform_trips(
        self,
        raw_data: Dict[str, Any],
        route_ids: Dict[str, int],
        stop_sequences: Dict[str, List[int]],
    ) -> Tuple[pd.DataFrame, pd.DataFrame]:
        direction_trips: Dict[Tuple[int, int], DirectionTrip] = {}
        stop_lists: Dict[Tuple[int, int], List[Tuple[int, ...]]] = {}

        for trip in gtfs_extract.records_from_frame(raw_data.get("trips"), Trip):
            if self.exclude_trip(trip):
                continue
            route_id = route_ids.get(trip.route_id)
            if route_id is None:
                continue
            trip_stop_ids = stop_sequences.get(trip.trip_id, [])
            if not trip_stop_ids:
                self.logger.debug(f"Trip '{trip.trip_id}' has no stop times. Skipping.")
                continue

            headsign_id = self.split_trip_stop(route_id, trip, trip_stop_ids)
            candidates = {t.headsign_id: t for t in self.split_trip(route_id, trip)}
            candidate = candidates.get(headsign_id)
            if candidate is None:
                candidate = DirectionTrip(route_id=route_id, headsign_id=headsign_id)
            self.set_trip_headsign(route_id, candidate, trip)

            key = (route_id, candidate.headsign_id)
            existing = direction_trips.get(key)
            if existing is None:
                direction_trips[key] = candidate
            elif existing.headsign_value != candidate.headsign_value:
                if not self.merge_headsign(existing, candidate):
                    raise UnexpectedHeadsignMergeError(
                        f"Unexpected trips to merge '{existing.headsign_value}' and "
                        f"'{candidate.headsign_value}' (route {route_id})",
                        record=trip,
                    )

            sequence = tuple(trip_stop_ids)
            known = stop_lists.setdefault(key, [])
            if sequence not in known:
                known.append(sequence)

        trip_rows = []
        trip_stop_rows = []
        for key in sorted(direction_trips):
            direction_trip = direction_trips[key]
            route_id = direction_trip.route_id
            merged = reduce(
                lambda acc, nxt: merge_trip_stops(route_id, acc, list(nxt), self.compare_early),
                stop_lists[key][1:],
                list(stop_lists[key][0]),
            )
            trip_rows.append({
                "id": direction_trip.id,
                "route_id": route_id,
                "headsign_type": int(direction_trip.headsign_type),
                "headsign_value": direction_trip.headsign_value,
                "headsign_id": direction_trip.headsign_id,
            })
            trip_stop_rows.extend(
                TripStopRecord(trip_id=direction_trip.id, stop_id=stop_id, stop_sequence=position).model_dump()
                for position, stop_id in enumerate(merged, start=1)
            )

        trips_df = pd.DataFrame(trip_rows, columns=gtfs_load.OUTPUT_TABLE_COLUMNS["trips"])
        trip_stops_df = pd.DataFrame(trip_stop_rows, columns=gtfs_load.OUTPUT_TABLE_COLUMNS["trip_stops"])
        return trips_df, trip_stops_df

    def _transform_service_dates(self, raw_data: Dict[str, Any]) -> pd.DataFrame:
        calendars = [
            c for c in gtfs_extract.records_from_frame(raw_data.get("calendar"), Calendar)
            if not self.exclude_calendar(c)
        ]
        calendar_dates = [
            cd for cd in gtfs_extract.records_from_frame(raw_data.get("calendar_dates"), CalendarDate)
            if not self.exclude_calendar_date(cd)
        ]
        service_dates = service_filter.expand_service_dates(calendars, calendar_dates)
        kept = set(service_dates) if self.service_ids is None else self.service_ids
        return service_filter.service_dates_frame(service_dates, kept)
