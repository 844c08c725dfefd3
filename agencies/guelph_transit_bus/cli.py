# -*- coding: utf-8 -*-
import logging
import sys

import click

from agencies.guelph_transit_bus.agency_tools import GuelphTransitBusAgencyTools
from common.core_utils import setup_logging
from config.config_loader import GTFSConfigError, load_app_settings


@click.command(name="guelph-transit-bus")
@click.argument("gtfs_path", required=False)
@click.argument("output_dir", required=False)
@click.argument("files_prefix", required=False)
def cli(gtfs_path, output_dir, files_prefix):
    """
    Generates the Guelph Transit bus data from a GTFS feed.

    GTFS_PATH is a GTFS zip file, an extracted feed directory or an http(s)
    URL. Output tables are written to OUTPUT_DIR, each file name starting
    with FILES_PREFIX. Missing arguments fall back to the configured
    defaults (config.yaml, then GTFS_ADAPTER_* environment variables).

    Exits with a non-zero status when the feed holds data the adapter
    cannot map.
    """
    try:
        app_settings = load_app_settings()
    except GTFSConfigError as e:
        raise click.ClickException(str(e)) from e

    setup_logging(
        log_level=getattr(logging, app_settings.log_level.upper(), logging.INFO),
        log_file=app_settings.log_file,
        log_prefix=app_settings.log_prefix,
        symbols=app_settings.symbols,
    )

    args = [
        gtfs_path if gtfs_path is not None else app_settings.default_input_path,
        output_dir if output_dir is not None else app_settings.default_output_dir,
        files_prefix if files_prefix is not None else app_settings.default_files_prefix,
    ]
    GuelphTransitBusAgencyTools(app_settings).start(args)


def main():
    cli(args=sys.argv[1:], prog_name="guelph-transit-bus")


if __name__ == "__main__":
    main()
