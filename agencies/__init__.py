"""
Agency adapters.
"""
