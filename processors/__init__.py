"""
Feed processors.
"""
