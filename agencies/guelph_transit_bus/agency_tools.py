# -*- coding: utf-8 -*-
"""
Guelph Transit bus adapter.

Feed: http://data.open.guelph.ca/datafiles/guelph-transit/guelph_transit_gtfs.zip

The feed's route IDs change between releases, so route IDs are derived from
short names. Stop IDs come from stop codes or, failing that, from the number
embedded in the composite GTFS stop_id (``<prefix>-<number>_<description>``).
"""

import re
from typing import Optional

from agencies.guelph_transit_bus import route_data
from agencies.guelph_transit_bus.route_trip_specs import ROUTE_TRIP_SPECS
from common import clean_utils
from common.processor_interface import (
    MalformedStopRecordError,
    UnexpectedHeadsignMergeError,
    UnmappableDisplayTextError,
    UnmappableIdentifierError,
)
from processors.gtfs.agency_tools import DefaultAgencyTools
from processors.gtfs.schema_definitions import DirectionTrip, Route, Stop, Trip
from processors.gtfs.trip_splitting import RouteTripSpec

DIGITS = re.compile(r"[0-9]+")
ALL_WHITESPACES = re.compile(r"\s+")

STARTS_WITH_ROUTE_RSN = re.compile(r"^route[0-9]*[A-Z]*-?\s*", re.IGNORECASE)

LEADING_RSN_AND_COMMUNITY_BUS = re.compile(
    r"^" + clean_utils.SEPARATORS + r"*(?:(?:community bus|[0-9]+)" + clean_utils.SEPARATORS + r"+)*",
    re.IGNORECASE,
)
INDUSTRIAL = clean_utils.clean_words("industrial")
INDUSTRIAL_REPLACEMENT = clean_utils.clean_words_replacement(route_data.INDUSTRIAL_SHORT)

CLEAN_DEPART_ARRIVE = re.compile(
    r"(?:" + clean_utils.SEPARATORS + r"+(?:arrival|depart))+" + clean_utils.SEPARATORS + r"*$",
    re.IGNORECASE,
)
PLATFORM = clean_utils.clean_words("platform")
PLATFORM_REPLACEMENT = clean_utils.clean_words_replacement("P")

NORTH_HINTS = ("northbound", "north loop")
SOUTH_HINTS = ("southbound", "south loop")

DASH = "-"
UNDERSCORE = "_"


def _is_digits_only(value: Optional[str]) -> bool:
    return bool(value) and DIGITS.fullmatch(value) is not None


class GuelphTransitBusAgencyTools(DefaultAgencyTools):
    """Override points for the Guelph Transit bus feed."""

    agency_label = "Guelph Transit bus"

    def get_agency_color(self) -> str:
        return route_data.AGENCY_COLOR

    # --- Routes ---

    def get_route_id(self, route: Route) -> int:
        short_name = ALL_WHITESPACES.sub(clean_utils.EMPTY, route.route_short_name)
        if short_name in route_data.SPECIAL_ROUTE_IDS:
            return route_data.SPECIAL_ROUTE_IDS[short_name]
        if _is_digits_only(short_name):
            return int(short_name)  # using route short name as route ID
        match = DIGITS.search(short_name)
        if match and short_name[-1] in route_data.SUFFIX_BANDS:
            return route_data.SUFFIX_BANDS[short_name[-1]] + int(match.group())
        if (
            self.app_settings.good_enough_accepted
            and route.route_short_name.startswith(route_data.SEASONAL_RSN_PREFIXES)
            and _is_digits_only(route.route_id)
        ):
            return int(route.route_id)
        raise UnmappableIdentifierError(
            f"Can't find route ID for '{route.route_short_name}'", record=route
        )

    def get_route_short_name(self, route: Route) -> str:
        return ALL_WHITESPACES.sub(clean_utils.EMPTY, route.route_short_name)

    def get_route_long_name(self, route: Route) -> str:
        long_name = STARTS_WITH_ROUTE_RSN.sub(clean_utils.EMPTY, route.route_long_name)
        if not long_name.strip():
            long_name = route_data.ROUTE_LONG_NAMES.get(self.get_route_id(route), clean_utils.EMPTY)
        if not long_name:
            raise UnmappableDisplayTextError(
                f"Unexpected route long name for '{route.route_short_name}'", record=route
            )
        return clean_utils.clean_label(long_name)

    def get_route_color(self, route: Route) -> str:
        short_name = self.get_route_short_name(route)
        if short_name == route_data.COMMUNITY_BUS_RSN:
            return route_data.COMMUNITY_BUS_COLOR
        if route.route_short_name.startswith(route_data.SEASONAL_RSN_PREFIXES):
            return route_data.SEASONAL_COLOR
        if short_name == route_data.GORDON_CORRIDOR_RSN:
            return route_data.AGENCY_COLOR
        match = DIGITS.search(short_name)
        if match and int(match.group()) in route_data.ROUTE_COLORS:
            return route_data.ROUTE_COLORS[int(match.group())].strip().upper()
        raise UnmappableDisplayTextError(
            f"Unexpected route color for '{route.route_short_name}'", record=route
        )

    # --- Trips ---

    def get_route_trip_spec(self, route_id: int) -> Optional[RouteTripSpec]:
        return ROUTE_TRIP_SPECS.get(route_id)

    def set_trip_headsign(self, route_id: int, direction_trip: DirectionTrip, trip: Trip) -> None:
        if self.get_route_trip_spec(route_id) is not None:
            return  # split
        headsign_lc = trip.trip_headsign.lower()
        if any(hint in headsign_lc for hint in NORTH_HINTS):
            direction_trip.set_headsign_string("North", trip.direction_id_or_default)
        elif any(hint in headsign_lc for hint in SOUTH_HINTS):
            direction_trip.set_headsign_string("South", trip.direction_id_or_default)
        else:
            direction_trip.set_headsign_string(
                self.clean_trip_headsign(trip.trip_headsign), trip.direction_id_or_default
            )

    def clean_trip_headsign(self, trip_headsign: str) -> str:
        trip_headsign = clean_utils.keep_to_and_remove_via(trip_headsign)
        trip_headsign = LEADING_RSN_AND_COMMUNITY_BUS.sub(clean_utils.EMPTY, trip_headsign)
        trip_headsign = clean_utils.clean_separators(trip_headsign)
        trip_headsign = clean_utils.clean_at(trip_headsign)
        trip_headsign = INDUSTRIAL.sub(INDUSTRIAL_REPLACEMENT, trip_headsign)
        trip_headsign = clean_utils.clean_bounds(trip_headsign)
        trip_headsign = clean_utils.clean_numbers(trip_headsign)
        trip_headsign = clean_utils.clean_street_types(trip_headsign)
        return clean_utils.clean_label(trip_headsign)

    def merge_headsign(self, direction_trip: DirectionTrip, direction_trip_to_merge: DirectionTrip) -> bool:
        headsigns = {direction_trip.headsign_value, direction_trip_to_merge.headsign_value}
        rule = route_data.HEADSIGN_MERGE_RULES.get(direction_trip.route_id)
        if rule is not None:
            allowed, canonical = rule
            if headsigns <= allowed:
                direction_trip.set_headsign_string(canonical, direction_trip.headsign_id)
                return True
        raise UnexpectedHeadsignMergeError(
            f"Unexpected trips to merge '{direction_trip.headsign_value}' and "
            f"'{direction_trip_to_merge.headsign_value}' (route {direction_trip.route_id})",
            record=(direction_trip, direction_trip_to_merge),
        )

    # --- Stops ---

    def clean_stop_name(self, stop_name: str) -> str:
        stop_name = clean_utils.clean_separators(stop_name)
        stop_name = CLEAN_DEPART_ARRIVE.sub(clean_utils.EMPTY, stop_name)
        stop_name = clean_utils.remove_points(stop_name)
        stop_name = clean_utils.clean_at(stop_name)
        stop_name = PLATFORM.sub(PLATFORM_REPLACEMENT, stop_name)
        stop_name = clean_utils.clean_bounds(stop_name)
        stop_name = clean_utils.clean_street_types(stop_name)
        stop_name = clean_utils.clean_numbers(stop_name)
        return clean_utils.clean_label(stop_name)

    def get_stop_id(self, stop: Stop) -> int:
        if stop.stop_id in route_data.STOP_ID_OVERRIDES:
            return route_data.STOP_ID_OVERRIDES[stop.stop_id]
        if _is_digits_only(stop.stop_code):
            return int(stop.stop_code)
        index_of_dash = stop.stop_id.find(DASH)
        if index_of_dash >= 0:
            index_of_underscore = stop.stop_id.find(UNDERSCORE, index_of_dash)
            if index_of_underscore >= 0:
                token = stop.stop_id[index_of_dash + 1:index_of_underscore]
                if _is_digits_only(token):
                    return int(token)
        raise MalformedStopRecordError(f"Error while getting stop ID for '{stop.stop_id}'", record=stop)
