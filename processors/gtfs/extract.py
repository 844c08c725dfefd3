#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Obtains a GTFS feed and reads its tables.

This module provides functions to download a GTFS feed from a URL, read a
local zip archive or directory with gtfs-kit, and turn the resulting
DataFrames into validated input records.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, Union

import gtfs_kit
import pandas as pd
import requests
from pydantic import BaseModel, ValidationError

from common.processor_interface import FatalDataError, ProcessorError
from processors.gtfs.schema_definitions import GTFS_FILE_SCHEMAS

module_logger = logging.getLogger(__name__)

TEMP_ZIP_FILENAME = "gtfs_feed.zip"


def is_remote_source(source: Union[str, Path]) -> bool:
    return str(source).lower().startswith(("http://", "https://"))


def download_gtfs_feed(
    feed_url: str, download_to_path: Union[str, Path], timeout: int = 120
) -> bool:
    """
    Download a GTFS feed from a given URL to a specified path.

    Args:
        feed_url: The URL of the GTFS zip file.
        download_to_path: The file path (string or Path object) where the
                          downloaded zip file will be saved.
        timeout: Request timeout in seconds.

    Returns:
        True if the download was successful, False otherwise.
    """
    download_path = Path(download_to_path)
    module_logger.info(f"Attempting to download GTFS feed from: {feed_url}")
    response: Optional[requests.Response] = None

    try:
        download_path.parent.mkdir(parents=True, exist_ok=True)
        response = requests.get(feed_url, stream=True, timeout=timeout)
        response.raise_for_status()

        with open(download_path, "wb") as f:
            for chunk in response.iter_content(chunk_size=8192):
                if chunk:
                    f.write(chunk)
        module_logger.info(f"GTFS feed successfully downloaded to: {download_path}")
        return True
    except requests.exceptions.HTTPError as http_err:
        status_code = response.status_code if response is not None else "Unknown"
        module_logger.error(f"HTTP error occurred: {http_err} - Status code: {status_code}")
    except requests.exceptions.ConnectionError as conn_err:
        module_logger.error(f"Connection error occurred: {conn_err}")
    except requests.exceptions.Timeout as timeout_err:
        module_logger.error(f"Timeout error occurred: {timeout_err}")
    except requests.exceptions.RequestException as req_err:
        module_logger.error(f"An unexpected error occurred during download: {req_err}")
    except OSError as io_err:
        module_logger.error(f"File I/O error when saving download: {io_err}")
    return False


def resolve_source(
    source: Union[str, Path], temp_dir: Union[str, Path], timeout: int = 120
) -> Path:
    """
    Return a local path for the feed, downloading it first for http(s) sources.

    Raises:
        ProcessorError: If the download fails or the local path does not exist.
    """
    if is_remote_source(source):
        target = Path(temp_dir) / TEMP_ZIP_FILENAME
        if not download_gtfs_feed(str(source), target, timeout=timeout):
            raise ProcessorError(f"Failed to download GTFS feed from {source}")
        return target

    source_path = Path(source)
    if not source_path.exists():
        raise ProcessorError(f"GTFS feed not found: {source_path}")
    return source_path


def read_feed_tables(source_path: Union[str, Path]) -> Dict[str, Optional[pd.DataFrame]]:
    """
    Read the tables the adapter needs from a GTFS zip archive or directory.

    Args:
        source_path: Local zip file or directory holding the feed.

    Returns:
        Table name -> DataFrame. Optional tables absent from the feed map to None.

    Raises:
        ProcessorError: If gtfs-kit cannot read the feed or a required table is missing.
    """
    module_logger.info(f"Reading feed with gtfs-kit: {source_path}")
    try:
        feed = gtfs_kit.read_feed(str(source_path), dist_units="km")
    except (OSError, ValueError, KeyError) as e:
        raise ProcessorError(f"Could not read GTFS feed {source_path}: {e}", original_error=e) from e

    tables: Dict[str, Optional[pd.DataFrame]] = {}
    for filename, schema in GTFS_FILE_SCHEMAS.items():
        table_name = schema["table"]
        df = getattr(feed, table_name, None)
        if df is None or df.empty:
            if schema["required"]:
                raise ProcessorError(f"Required table '{filename}' not found in feed or is empty.")
            module_logger.info(f"Optional table '{table_name}' not found or empty.")
            df = None
        else:
            module_logger.info(f"Read table: {table_name} with {len(df)} records.")
        tables[table_name] = df
    return tables


def frame_to_dicts(df: Optional[pd.DataFrame]) -> List[Dict[str, Any]]:
    """Rows of ``df`` as plain dictionaries, missing values as None."""
    if df is None or df.empty:
        return []
    plain = df.astype(object)
    plain = plain.where(pd.notna(plain), None)
    return plain.to_dict(orient="records")


def records_from_frame(
    df: Optional[pd.DataFrame],
    model: Type[BaseModel],
    error_cls: Type[ProcessorError] = ProcessorError,
) -> List[BaseModel]:
    """
    Validate each row of ``df`` against ``model``.

    Raises:
        error_cls: For the first row that does not validate, with the row as record.
    """
    records = []
    for row in frame_to_dicts(df):
        try:
            records.append(model.model_validate(row))
        except ValidationError as e:
            message = f"Invalid {model.__name__} row: {e.errors()[0].get('msg')}"
            if issubclass(error_cls, FatalDataError):
                raise error_cls(message, record=row, original_error=e) from e
            raise ProcessorError(message, original_error=e) from e
    return records
