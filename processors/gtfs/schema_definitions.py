#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Defines Pydantic models for the GTFS records an agency adapter reads and the
normalized records it produces.

Input models (`Route`, `Trip`, `Stop`, `Calendar`, `CalendarDate`)
are what the override points receive. They are deliberately lenient: the
adapter's own rules decide what is fatal, not the schema.

Output models (`RouteRecord`, `StopRecord`, `DirectionTrip`, `TripStopRecord`)
are the normalized schema written by the load stage.

The schema dictionary `GTFS_FILE_SCHEMAS` maps GTFS filenames to the table
name used by gtfs-kit and whether the feed must provide them.
"""

from datetime import datetime
from enum import IntEnum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, conint, field_validator


def _as_text(value: Any) -> Any:
    """Render id-like values read as numbers back to their text form."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def _as_gtfs_date(value: Any) -> str:
    value = str(_as_text(value))
    try:
        datetime.strptime(value, "%Y%m%d")
    except ValueError as e:
        raise ValueError(f"Date {value} is not a valid YYYYMMDD date.") from e
    return value


# --- Pydantic Model Configuration ---
class GTFSBaseModel(BaseModel):
    """
    Base Pydantic model for all GTFS entities.

    - `extra = "ignore"`: Ignores extra fields not defined in the model.
    - `str_strip_whitespace = True`: Strips leading/trailing whitespace.
    - `frozen = True`: Input records are immutable once read.
    """
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True, frozen=True)


# --- GTFS input models ---

class Route(GTFSBaseModel):
    """
    Represents a route from `routes.txt`.

    Attributes:
        route_id: Required. Raw route identifier.
        agency_id: Optional. Agency for the route.
        route_short_name: Short name for the route (e.g., "50U"). Empty if absent.
        route_long_name: Long name for the route. Empty if absent.
        route_type: Type of route (3: Bus).
        route_color: Optional. Route color as published in the feed.
    """
    route_id: str = Field(min_length=1)
    agency_id: Optional[str] = None
    route_short_name: str = ""
    route_long_name: str = ""
    route_type: Optional[int] = None
    route_color: Optional[str] = None

    _text = field_validator("route_id", "agency_id", "route_short_name", "route_color", mode="before")(_as_text)

    @field_validator("route_short_name", "route_long_name", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        """Missing names are read as empty strings."""
        return "" if v is None else v


class Trip(GTFSBaseModel):
    """
    Represents a trip from `trips.txt`.

    Attributes:
        route_id: Required. ID of the route this trip belongs to.
        service_id: Required. ID of the service pattern for this trip.
        trip_id: Required. Uniquely identifies a trip.
        trip_headsign: Text that appears on signage for the trip. Empty if absent.
        direction_id: Optional. Indicates direction of travel (0 or 1).
    """
    route_id: str = Field(min_length=1)
    service_id: str = Field(min_length=1)
    trip_id: str = Field(min_length=1)
    trip_headsign: str = ""
    direction_id: Optional[conint(ge=0, le=1)] = None

    _text = field_validator("route_id", "service_id", "trip_id", mode="before")(_as_text)

    @field_validator("trip_headsign", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @property
    def direction_id_or_default(self) -> int:
        return self.direction_id if self.direction_id is not None else 0


class Stop(GTFSBaseModel):
    """
    Represents a stop from `stops.txt`.

    Attributes:
        stop_id: Required. Composite identifier, commonly `<prefix>-<routeToken>_<text>`.
        stop_code: Optional. Short number identifying the stop to riders.
        stop_name: Stop name. Empty if absent.
        stop_lat: Optional. Latitude.
        stop_lon: Optional. Longitude.
    """
    stop_id: str = Field(min_length=1)
    stop_code: Optional[str] = None
    stop_name: str = ""
    stop_lat: Optional[float] = None
    stop_lon: Optional[float] = None

    _text = field_validator("stop_id", "stop_code", mode="before")(_as_text)

    @field_validator("stop_name", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class Calendar(GTFSBaseModel):
    """
    Represents a service availability pattern from `calendar.txt`.

    Weekday attributes are 1 when service runs on that day.
    start_date and end_date are YYYYMMDD strings, both inclusive.
    """
    service_id: str = Field(min_length=1)
    monday: conint(ge=0, le=1)
    tuesday: conint(ge=0, le=1)
    wednesday: conint(ge=0, le=1)
    thursday: conint(ge=0, le=1)
    friday: conint(ge=0, le=1)
    saturday: conint(ge=0, le=1)
    sunday: conint(ge=0, le=1)
    start_date: str
    end_date: str

    _text = field_validator("service_id", mode="before")(_as_text)
    _dates = field_validator("start_date", "end_date", mode="before")(_as_gtfs_date)


class CalendarDate(GTFSBaseModel):
    """
    Represents exceptions to service availability from `calendar_dates.txt`.

    Attributes:
        service_id: Required. ID of the service affected by this exception.
        date: Required. Date of the exception (YYYYMMDD).
        exception_type: Required. 1: Service added, 2: Service removed.
    """
    service_id: str = Field(min_length=1)
    date: str
    exception_type: conint(ge=1, le=2)

    _text = field_validator("service_id", mode="before")(_as_text)
    _dates = field_validator("date", mode="before")(_as_gtfs_date)


# --- Normalized output models ---

class HeadsignType(IntEnum):
    """How a directional trip's headsign value is to be read."""
    STRING = 0


class RouteRecord(BaseModel):
    """A route with its derived numeric ID and display values."""
    id: int = Field(ge=0)
    short_name: str
    long_name: str
    color: Optional[str] = None


class StopRecord(BaseModel):
    """A stop with its derived numeric ID and cleaned name."""
    id: int = Field(ge=0)
    code: str = ""
    name: str
    lat: Optional[float] = None
    lon: Optional[float] = None


class DirectionTrip(BaseModel):
    """
    One logical direction of a route: the unit GTFS trips are split into.

    `headsign_id` is the direction number; `id` combines it with the route ID.
    """
    model_config = ConfigDict(validate_assignment=True)

    route_id: int
    headsign_type: HeadsignType = HeadsignType.STRING
    headsign_value: str = ""
    headsign_id: int = 0

    @property
    def id(self) -> int:
        return self.route_id * 100 + self.headsign_id

    def set_headsign_string(self, headsign: str, headsign_id: int) -> None:
        self.headsign_type = HeadsignType.STRING
        self.headsign_value = headsign
        self.headsign_id = headsign_id


class TripStopRecord(BaseModel):
    """Position of a stop within a directional trip's merged stop list."""
    trip_id: int
    stop_id: int
    stop_sequence: int = Field(ge=1)


GTFS_FILE_SCHEMAS: Dict[str, Dict[str, Any]] = {
    "routes.txt": {"table": "routes", "required": True},
    "trips.txt": {"table": "trips", "required": True},
    "stops.txt": {"table": "stops", "required": True},
    "stop_times.txt": {"table": "stop_times", "required": True},
    "calendar.txt": {"table": "calendar", "required": False},
    "calendar_dates.txt": {"table": "calendar_dates", "required": False},
}
