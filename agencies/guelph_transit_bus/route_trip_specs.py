# -*- coding: utf-8 -*-
"""
Direction splitting table for Guelph Transit routes.

Each entry lists, per direction, the headsign and the anchor stops (GTFS stop
codes) a trip in that direction passes in order. Anchors shared by both
directions of a route mark the common segment of a loop; they are expected.
Intermediate stops not listed are allowed.
"""

from types import MappingProxyType
from typing import Mapping, Sequence, Tuple

from agencies.guelph_transit_bus.route_data import (
    GUELPH_CENTRAL_STATION,
    RID_ENDS_WITH_U,
    STONE_ROAD_MALL,
    UNIVERSITY_CENTER,
)
from processors.gtfs.schema_definitions import HeadsignType
from processors.gtfs.trip_splitting import Direction, RouteTripSpec

EAST, WEST, NORTH, SOUTH = Direction.EAST, Direction.WEST, Direction.NORTH, Direction.SOUTH

# (direction, headsign, anchors)
DirectionSpec = Tuple[Direction, str, Sequence[str]]

ROUTE_DIRECTIONS: Mapping[int, Tuple[DirectionSpec, DirectionSpec]] = MappingProxyType({
    1: (
        (EAST, UNIVERSITY_CENTER, ("112", "356", "5844", "5845")),
        (WEST, "Edinburgh @ Laurelwood", ("5845", "106", "112")),
    ),
    2: (
        (EAST, UNIVERSITY_CENTER, ("162", "168", "5834")),
        (WEST, "Edinburgh @ Ironwood", ("5847", "157", "162")),
    ),
    3: (
        (NORTH, "Woodlawn @ Edinburgh", ("5841", "305", "231")),
        (SOUTH, GUELPH_CENTRAL_STATION, ("231", "389", "392", "1130", "5837", "5841")),
    ),
    4: (
        (EAST, "Watson @ Guelph Transit", ("5849", "360", "416")),
        (WEST, GUELPH_CENTRAL_STATION, ("416", "422", "5850")),
    ),
    5: (
        (NORTH, UNIVERSITY_CENTER, ("520", "528", "168", "169", "5844", "5845")),
        (SOUTH, "Frederick @ Waterford", ("5844", "5915", "520")),
    ),
    6: (
        (EAST, UNIVERSITY_CENTER, ("615", "621", "5843")),
        (WEST, "Ironwood @ Kortright", ("5831", "608", "612", "615")),
    ),
    7: (
        (EAST, "Ptarmigan @ Downey", ("5843", "706", "709", "713")),
        (WEST, UNIVERSITY_CENTER, ("713", "717", "5831")),
    ),
    8: (
        (NORTH, GUELPH_CENTRAL_STATION, ("813", "819", "5849")),
        (SOUTH, STONE_ROAD_MALL, ("5850", "808", "813")),
    ),
    9: (
        (EAST, GUELPH_CENTRAL_STATION, ("213", "919", "6067", "5833", "5852")),
        (WEST, "Elmira @ West Acres", ("5839", "904", "213")),
    ),
    10: (
        (EAST, GUELPH_CENTRAL_STATION, ("1015", "1022", "5860")),
        (WEST, "Imperial @ Ferman", ("5858", "1008", "1015")),
    ),
    11: (
        (EAST, GUELPH_CENTRAL_STATION, ("2035", "1122", "5859")),
        (WEST, "Silvercreek @ Greengate", ("5851", "1105", "2035")),
    ),
    12: (
        (NORTH, "Woodlawn @ Victoria", ("5860", "1207", "1214")),
        (SOUTH, GUELPH_CENTRAL_STATION, ("1214", "1221", "5858")),
    ),
    13: (
        (EAST, "Eastview @ Starwood", ("5837", "1313", "370")),
        (WEST, GUELPH_CENTRAL_STATION, ("370", "1324", "1130", "5837", "5841")),
    ),
    14: (
        (EAST, "Watson @ Fleming", ("5859", "1406", "332")),
        (WEST, GUELPH_CENTRAL_STATION, ("332", "1418", "5851")),
    ),
    15: (
        (EAST, UNIVERSITY_CENTER, ("1508", "118", "5847")),
        (WEST, "College @ Flanders", ("5834", "207", "1508")),
    ),
    16: (
        (EAST, "Southgate", ("6058", "1619", "1621", "1624")),
        (WEST, "Clair @ Gordon", ("1624", "1627", "1631", "6058", "6006", "6101")),
    ),
    17: (
        (NORTH, "Woodlawn Smart Ctrs", ("5836", "1501", "5942", "5917")),
        (SOUTH, UNIVERSITY_CENTER, ("5917", "223", "320", "321", "333", "339", "5836")),
    ),
    18: (
        (NORTH, "Eastview @ Victoria", ("5840", "366", "372")),
        (SOUTH, UNIVERSITY_CENTER, ("372", "378", "379", "278", "6047", "1520", "5840")),
    ),
    20: (
        (EAST, GUELPH_CENTRAL_STATION, ("2028", "1130", "5833", "5839")),
        (WEST, "Imperial @ Galaxy Cinema", ("5833", "5863", "2028")),
    ),
    40: (
        (NORTH, GUELPH_CENTRAL_STATION, ("6047", "6047", "5850", "5850")),
        (SOUTH, STONE_ROAD_MALL, ("5850", "156", "6047")),
    ),
    50 + RID_ENDS_WITH_U: (  # 50U
        (EAST, UNIVERSITY_CENTER, ("207", "114", "1516", "5846")),
        (WEST, "Stone @ Edinburgh", ("5846", "1501", "207")),
    ),
    51 + RID_ENDS_WITH_U: (  # 51U
        (EAST, UNIVERSITY_CENTER, ("116", "1520", "5845", "5847")),
        (WEST, "Janefield @ Mason", ("5845", "115", "116")),
    ),
    52 + RID_ENDS_WITH_U: (  # 52U
        (NORTH, UNIVERSITY_CENTER, ("166", "167", "171", "5845")),
        (SOUTH, "Edinburgh @ Rickson", ("5847", "703", "166")),
    ),
    56 + RID_ENDS_WITH_U: (  # 56U
        (NORTH, UNIVERSITY_CENTER, ("6014", "5605", "169", "5842")),
        (SOUTH, "Goodwin @ Samuel", ("5842", "104", "6014")),
    ),
    57 + RID_ENDS_WITH_U: (  # 57U
        (EAST, UNIVERSITY_CENTER, ("5706", "5709", "5846")),
        (WEST, "Ironwood @ Reid", ("5838", "1503", "5706")),
    ),
    58 + RID_ENDS_WITH_U: (  # 58U
        (EAST, UNIVERSITY_CENTER, ("162", "721", "5838")),
        (WEST, "Edinburgh @ Ironwood", ("5846", "1501", "162")),
    ),
})


def build_route_trip_spec(route_id: int, directions: Tuple[DirectionSpec, DirectionSpec]) -> RouteTripSpec:
    (direction0, headsign0, anchors0), (direction1, headsign1, anchors1) = directions
    return (
        RouteTripSpec(
            route_id,
            direction0, HeadsignType.STRING, headsign0,
            direction1, HeadsignType.STRING, headsign1,
        )
        .add_trip_sort(direction0, anchors0)
        .add_trip_sort(direction1, anchors1)
        .compile_both_trip_sort()
    )


ROUTE_TRIP_SPECS: Mapping[int, RouteTripSpec] = MappingProxyType({
    route_id: build_route_trip_spec(route_id, directions)
    for route_id, directions in ROUTE_DIRECTIONS.items()
})
