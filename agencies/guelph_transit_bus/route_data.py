# -*- coding: utf-8 -*-
"""
Static route data for Guelph Transit.

Every table here is reviewed by hand against the published feed: a route or
headsign missing from them stops the generation instead of producing a guess.
"""

from types import MappingProxyType
from typing import FrozenSet, Mapping, Tuple

AGENCY_COLOR = "00A6E5"  # blue

UNIVERSITY_CENTER = "University Ctr"
GUELPH_CENTRAL_STATION = "Guelph Central Sta"
STONE_ROAD_MALL = "Stone Road Mall"
INDUSTRIAL_SHORT = "Ind"

COMMUNITY_BUS_RSN = "Com"
COMMUNITY_BUS_RID = 9_998
COMMUNITY_BUS_COLOR = "D14625"
GORDON_CORRIDOR_RSN = "GC"
GORDON_CORRIDOR_RID = 9_999

SPECIAL_ROUTE_IDS: Mapping[str, int] = MappingProxyType({
    COMMUNITY_BUS_RSN: COMMUNITY_BUS_RID,
    GORDON_CORRIDOR_RSN: GORDON_CORRIDOR_RID,
})

# Trailing letter of the short name -> offset added to its leading digits.
RID_ENDS_WITH_U = 21_000
RID_ENDS_WITH_A = 1_000
RID_ENDS_WITH_B = 2_000

SUFFIX_BANDS: Mapping[str, int] = MappingProxyType({
    "U": RID_ENDS_WITH_U,
    "A": RID_ENDS_WITH_A,
    "B": RID_ENDS_WITH_B,
})

# Seasonal routes, only mapped when "good enough" data is accepted.
SEASONAL_RSN_PREFIXES: Tuple[str, ...] = ("Zone ", "NYE ")
SEASONAL_COLOR = "ED1C24"

ROUTE_COLORS: Mapping[int, str] = MappingProxyType({
    1: "EC008C",
    2: "EC008C",
    3: "91469B",
    4: "1988B7",
    5: "921B1E",
    6: "ED1C24",
    7: "682C91",
    8: "0082B1",
    9: "5C7AAE",
    10: "A54686",
    11: "5C7AAE",
    12: "008290",
    13: "811167",
    14: "485E88",
    15: "8F7140",
    16: "29712A",
    17: "CB640A",
    18: "CB640A",
    20: "556940",
    40: "005689",
    41: "405D18",
    50: "A54686",  # 50U
    51: "405D18",  # 51U
    52: "485E88",  # 52U
    56: "ED1C24",  # 56U
    57: "5C7AAE",  # 57U
    58: "91469b",  # 58U
    99: "4F832E ",
})

# Used when the feed's long name is nothing but the "RouteNN-" token.
ROUTE_LONG_NAMES: Mapping[int, str] = MappingProxyType({
    1: "Edinburgh College",
    2: "College Edinburgh",
    3: "East Loop",
    4: "York",
    5: "Gordon/Goodwin",
    6: "Harvard Ironwood",
    7: "Kortright Downey",
    8: "Stone Road Mall",
    9: "Waterloo",
    10: "Imperial",
    11: "Willow West",
    12: "General Hospital",
    13: "Victoria Rd Rec Ctr",
    14: "Grange",
    15: "University College",
    16: "Southgate",
    17: "Woodlawn Watson",
    18: "Watson Woodlawn",
    20: "Northwest Ind",
    99: "Mainline",
})

# route ID -> (headsigns that may be merged together, canonical headsign)
HEADSIGN_MERGE_RULES: Mapping[int, Tuple[FrozenSet[str], str]] = MappingProxyType({
    1: (frozenset({"Edinburgh @ Laurelwood", "Edinburgh College"}), "Edinburgh College"),
    2: (frozenset({"Edinburgh @ Ironwood", "College Edinburgh"}), "College Edinburgh"),
    5: (frozenset({"Frederick @ Waterford", UNIVERSITY_CENTER, "Goodwin"}), "Goodwin"),
    6: (frozenset({"Ironwood @ Kortright", UNIVERSITY_CENTER, "Harvard Ironwood"}), "Harvard Ironwood"),
    7: (frozenset({"Ptarmigan @ Downey", "Kortright Downey"}), "Kortright Downey"),
    15: (frozenset({"College @ Flanders", UNIVERSITY_CENTER, "University College"}), "University College"),
    16: (frozenset({"Clair @ Gordon", "Southgate"}), "Southgate"),
    17: (frozenset({"Imperial @ Willow", "Woodlawn Watson"}), "Woodlawn Watson"),
    18: (frozenset({"Eastview @ Victoria", "Watson Woodlawn"}), "Watson Woodlawn"),
    20: (
        frozenset({"Imperial @ Galaxy Cinema", GUELPH_CENTRAL_STATION, "Northwest " + INDUSTRIAL_SHORT}),
        "Northwest " + INDUSTRIAL_SHORT,
    ),
    59 + RID_ENDS_WITH_U: (frozenset({"Gordon @ Vaughan", "Clairfields"}), "Clairfields"),  # 59U
    99: (frozenset({"", "North"}), "North"),
})

# Known malformed rows: full GTFS stop_id -> stop ID.
STOP_ID_OVERRIDES: Mapping[str, int] = MappingProxyType({
    "Route5A-0549_Victoria Road South at Macalister Boulevard southbound": 619,
})
