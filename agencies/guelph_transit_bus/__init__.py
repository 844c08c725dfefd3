"""
Guelph Transit bus adapter.
"""

from agencies.guelph_transit_bus.agency_tools import GuelphTransitBusAgencyTools

__all__ = ["GuelphTransitBusAgencyTools"]
