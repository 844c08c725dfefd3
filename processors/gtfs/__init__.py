"""
GTFS agency framework.

This package provides the default agency tools every agency adapter extends,
together with the extract, service filtering, trip splitting and load steps
they run through.
"""
