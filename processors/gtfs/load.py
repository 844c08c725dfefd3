#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Writes the normalized tables produced by the transform stage.

Each table is written as a CSV file named ``<files_prefix><table>.csv`` in the
output directory. Columns are written in a fixed order so consecutive runs can
be diffed.
"""

import logging
from pathlib import Path
from typing import Dict, List, Union

import pandas as pd

from common.processor_interface import ProcessorError

module_logger = logging.getLogger(__name__)

OUTPUT_TABLE_COLUMNS: Dict[str, List[str]] = {
    "routes": ["id", "short_name", "long_name", "color"],
    "trips": ["id", "route_id", "headsign_type", "headsign_value", "headsign_id"],
    "trip_stops": ["trip_id", "stop_id", "stop_sequence"],
    "stops": ["id", "code", "name", "lat", "lon"],
    "service_dates": ["service_id", "date"],
}


def output_file_path(output_dir: Union[str, Path], files_prefix: str, table_name: str) -> Path:
    return Path(output_dir) / f"{files_prefix}{table_name}.csv"


def write_table(df: pd.DataFrame, table_name: str, output_dir: Union[str, Path], files_prefix: str = "") -> Path:
    """
    Write one normalized table.

    Args:
        df: Table content. Missing columns are written empty.
        table_name: Key of OUTPUT_TABLE_COLUMNS.
        output_dir: Target directory, created if missing.
        files_prefix: Prefix prepended to the file name.

    Returns:
        The path of the written file.
    """
    columns = OUTPUT_TABLE_COLUMNS.get(table_name)
    if columns is None:
        raise ProcessorError(f"No output definition for table '{table_name}'")

    target = output_file_path(output_dir, files_prefix, table_name)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        df.reindex(columns=columns).to_csv(target, index=False)
    except OSError as e:
        raise ProcessorError(f"Could not write {target}: {e}", original_error=e) from e

    module_logger.info(f"Wrote {len(df)} record(s) to {target}")
    return target


def write_tables(
    tables: Dict[str, pd.DataFrame], output_dir: Union[str, Path], files_prefix: str = ""
) -> List[Path]:
    """Write every known table present in ``tables``, in a fixed order."""
    written = []
    for table_name in OUTPUT_TABLE_COLUMNS:
        df = tables.get(table_name)
        if df is None:
            module_logger.warning(f"Table '{table_name}' missing from transformed data. Skipping.")
            continue
        written.append(write_table(df, table_name, output_dir, files_prefix))
    return written
