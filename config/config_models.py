# config/config_models.py
# -*- coding: utf-8 -*-
"""
Pydantic models for application configuration.

This module defines the structured settings for a feed generation run,
including defaults, type annotations, and descriptions.
It utilizes Pydantic for data validation and settings management.
"""

from datetime import date
from typing import Dict, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Default Static Values (can be overridden by config file/env/cli) ---
DEFAULT_INPUT_PATH_DEFAULT: str = "input/gtfs.zip"
DEFAULT_OUTPUT_DIR_DEFAULT: str = "output/"
DEFAULT_FILES_PREFIX_DEFAULT: str = ""
LOG_PREFIX_DEFAULT: str = "[GUELPH-TRANSIT]"
TEMP_DIR_DEFAULT: str = "/tmp/gtfs_adapter_downloads"
SERVICE_LOOKAHEAD_DAYS_DEFAULT: int = 7
DOWNLOAD_TIMEOUT_SECONDS_DEFAULT: int = 120

SYMBOLS_DEFAULT: Dict[str, str] = {
    "success": "✅", "error": "❌", "warning": "⚠️", "info": "ℹ️",
    "step": "➡️", "gear": "⚙️", "package": "📦", "rocket": "🚀",
    "sparkles": "✨", "critical": "🔥", "debug": "🐛",
}


class AppSettings(BaseSettings):
    """Main application settings."""
    model_config = SettingsConfigDict(env_prefix="GTFS_ADAPTER_", extra="ignore")

    log_level: str = Field(default="INFO", description="Root logging level name.")
    log_file: Optional[str] = Field(default=None, description="Optional log file (append mode).")
    log_prefix: str = Field(default=LOG_PREFIX_DEFAULT, description="Prefix for every log line.")

    default_input_path: str = Field(default=DEFAULT_INPUT_PATH_DEFAULT,
                                    description="GTFS zip, directory or http(s) URL used when none is given.")
    default_output_dir: str = Field(default=DEFAULT_OUTPUT_DIR_DEFAULT,
                                    description="Output directory used when none is given.")
    default_files_prefix: str = Field(default=DEFAULT_FILES_PREFIX_DEFAULT,
                                      description="Output file name prefix used when none is given.")
    temp_dir: str = Field(default=TEMP_DIR_DEFAULT, description="Where downloaded feeds are stored.")
    download_timeout_seconds: int = Field(default=DOWNLOAD_TIMEOUT_SECONDS_DEFAULT,
                                          description="HTTP timeout when the input is a URL.")

    service_date: Optional[date] = Field(default=None,
                                         description="Reference date for useful services. Defaults to today.")
    service_lookahead_days: int = Field(default=SERVICE_LOOKAHEAD_DAYS_DEFAULT, ge=0,
                                        description="Days after the reference date whose services are kept.")
    good_enough_accepted: bool = Field(default=False,
                                       description="Accept seasonal Zone/NYE routes by their numeric GTFS route_id.")

    symbols: Dict[str, str] = Field(default_factory=lambda: dict(SYMBOLS_DEFAULT))
