#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Splitting GTFS trips into directional trips.

A `RouteTripSpec` declares, for one route, two directions with a headsign and
an ordered list of anchor stops. GTFS trips of that route are classified into
the direction whose anchors they follow best, and stops of a direction are
ordered by anchor position when the trips' own stop lists disagree.

Anchors are GTFS-level stop identifiers (strings). They are compared against
the text form of the derived stop IDs.
"""

import logging
from enum import IntEnum
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from common.processor_interface import ProcessorError, UnclassifiableTripError
from processors.gtfs.schema_definitions import DirectionTrip, HeadsignType

module_logger = logging.getLogger(__name__)

CompareEarly = Callable[[int, List[int], List[int], int, int], int]


class Direction(IntEnum):
    """Compass directions used as directional trip headsign IDs."""
    EAST = 1
    WEST = 2
    NORTH = 3
    SOUTH = 4


def _in_order_matches(anchors: Sequence[str], stop_ids: Sequence[str]) -> int:
    """Length of the longest run of ``anchors`` found in order within ``stop_ids``."""
    if not anchors or not stop_ids:
        return 0
    previous = [0] * (len(stop_ids) + 1)
    for anchor in anchors:
        current = [0] * (len(stop_ids) + 1)
        for j, stop_id in enumerate(stop_ids, start=1):
            if anchor == stop_id:
                current[j] = previous[j - 1] + 1
            else:
                current[j] = max(previous[j], current[j - 1])
        previous = current
    return previous[-1]


class RouteTripSpec:
    """
    Two-direction split declaration for a single route.

    Built fluently::

        RouteTripSpec(1, Direction.EAST, HeadsignType.STRING, "University Ctr",
                      Direction.WEST, HeadsignType.STRING, "Edinburgh @ Laurelwood")
            .add_trip_sort(Direction.EAST, ["112", "356", "5844"])
            .add_trip_sort(Direction.WEST, ["5845", "106", "112"])
            .compile_both_trip_sort()
    """

    def __init__(
        self,
        route_id: int,
        direction0: int,
        headsign_type0: HeadsignType,
        headsign0: str,
        direction1: int,
        headsign_type1: HeadsignType,
        headsign1: str,
    ):
        if int(direction0) == int(direction1):
            raise ProcessorError(f"Route {route_id}: both directions use headsign ID {int(direction0)}")
        self.route_id = route_id
        self._headsigns: Dict[int, Tuple[HeadsignType, str]] = {
            int(direction0): (headsign_type0, headsign0),
            int(direction1): (headsign_type1, headsign1),
        }
        self._trip_sorts: Dict[int, List[str]] = {}
        self._compiled = False

    @property
    def direction_ids(self) -> List[int]:
        return list(self._headsigns)

    def add_trip_sort(self, direction_id: int, stop_ids: Sequence[str]) -> "RouteTripSpec":
        direction_id = int(direction_id)
        if direction_id not in self._headsigns:
            raise ProcessorError(f"Route {self.route_id}: unknown direction {direction_id}")
        if not stop_ids:
            raise ProcessorError(f"Route {self.route_id}: empty anchor list for direction {direction_id}")
        self._trip_sorts[direction_id] = [str(s) for s in stop_ids]
        return self

    def compile_both_trip_sort(self) -> "RouteTripSpec":
        missing = [d for d in self._headsigns if d not in self._trip_sorts]
        if missing:
            raise ProcessorError(f"Route {self.route_id}: no anchors for direction(s) {missing}")
        self._compiled = True
        return self

    def get_all_trips(self) -> List[DirectionTrip]:
        """Fresh directional trips for both directions."""
        trips = []
        for direction_id, (headsign_type, headsign) in self._headsigns.items():
            trips.append(
                DirectionTrip(
                    route_id=self.route_id,
                    headsign_type=headsign_type,
                    headsign_value=headsign,
                    headsign_id=direction_id,
                )
            )
        return trips

    def _scores(self, stop_ids: Sequence[int]) -> Dict[int, int]:
        as_text = [str(s) for s in stop_ids]
        return {d: _in_order_matches(anchors, as_text) for d, anchors in self._trip_sorts.items()}

    def split_trip_stop(self, trip_id: str, stop_ids: Sequence[int]) -> int:
        """
        Classify one GTFS trip into a direction.

        The direction whose anchors appear the most, in order, in the trip's
        stop sequence wins. A tie is broken by the trip starting at the
        direction's first anchor, then by it ending at the last one.

        Returns:
            The winning direction ID.

        Raises:
            UnclassifiableTripError: No anchor matches, or the tie cannot be broken.
        """
        if not self._compiled:
            raise ProcessorError(f"Route {self.route_id}: trip sort not compiled")
        scores = self._scores(stop_ids)
        best = max(scores.values())
        if best == 0:
            raise UnclassifiableTripError(
                f"Route {self.route_id}: trip {trip_id} matches no anchor of any direction",
                record={"trip_id": trip_id, "stop_ids": list(stop_ids)},
            )
        candidates = [d for d, score in scores.items() if score == best]
        if len(candidates) > 1 and stop_ids:
            first, last = str(stop_ids[0]), str(stop_ids[-1])
            for position, edge in ((0, first), (-1, last)):
                narrowed = [d for d in candidates if self._trip_sorts[d][position] == edge]
                if len(narrowed) == 1:
                    candidates = narrowed
                    break
        if len(candidates) > 1:
            raise UnclassifiableTripError(
                f"Route {self.route_id}: trip {trip_id} matches directions {candidates} equally",
                record={"trip_id": trip_id, "stop_ids": list(stop_ids)},
            )
        return candidates[0]

    def compare(self, list1: Sequence[int], list2: Sequence[int], stop1: int, stop2: int) -> int:
        """
        Order two stops by their anchor position.

        The direction the two lists follow best is tried first. Returns a
        negative number when ``stop1`` comes first, positive when ``stop2``
        does, 0 when no direction lists both stops.
        """
        scores = self._scores(list(list1) + list(list2))
        for direction_id in sorted(scores, key=lambda d: scores[d], reverse=True):
            anchors = self._trip_sorts[direction_id]
            s1, s2 = str(stop1), str(stop2)
            if s1 in anchors and s2 in anchors:
                return anchors.index(s1) - anchors.index(s2)
        return 0


def merge_trip_stops(
    route_id: int,
    list1: Sequence[int],
    list2: Sequence[int],
    compare_early: Optional[CompareEarly] = None,
) -> List[int]:
    """
    Merge two ordered stop lists of the same directional trip into one.

    Stops shared by both lists keep their relative order. When the heads of
    the lists differ, the one that does not occur further down the other list
    goes first; when structure cannot tell, ``compare_early`` decides and
    ``list1`` wins a draw. Each stop appears once in the result.
    """
    list1, list2 = list(list1), list(list2)
    merged: List[int] = []
    seen = set()
    i = j = 0

    def take(stop_id: int) -> None:
        if stop_id not in seen:
            seen.add(stop_id)
            merged.append(stop_id)

    while i < len(list1) or j < len(list2):
        if i < len(list1) and list1[i] in seen:
            i += 1
            continue
        if j < len(list2) and list2[j] in seen:
            j += 1
            continue
        if i >= len(list1):
            take(list2[j])
            j += 1
            continue
        if j >= len(list2):
            take(list1[i])
            i += 1
            continue

        head1, head2 = list1[i], list2[j]
        if head1 == head2:
            take(head1)
            i += 1
            j += 1
            continue

        head1_later_in_2 = head1 in list2[j + 1:]
        head2_later_in_1 = head2 in list1[i + 1:]
        if head2_later_in_1 and not head1_later_in_2:
            take(head1)
            i += 1
        elif head1_later_in_2 and not head2_later_in_1:
            take(head2)
            j += 1
        else:
            decision = compare_early(route_id, list1, list2, head1, head2) if compare_early else 0
            if decision > 0:
                take(head2)
                j += 1
            else:
                take(head1)
                i += 1
    return merged
