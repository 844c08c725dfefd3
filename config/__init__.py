"""
Application settings and the layered settings loader.
"""

from config.config_loader import GTFSConfigError, load_app_settings
from config.config_models import AppSettings

__all__ = ["AppSettings", "GTFSConfigError", "load_app_settings"]
