#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Builds and runs the orchestrated generation run for one agency.

Stages, in order:
1. extract: obtain the feed and read its tables with gtfs-kit.
2. useful_services: compute the services worth generating; stops the run
   without error when none is left.
3. transform: apply the agency hooks to produce the normalized tables.
4. load: write the tables. Only reached when every earlier stage succeeded.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from common.orchestrator import Orchestrator

module_logger = logging.getLogger(__name__)


def extract_stage(tools: Any, source: Any, context: Dict[str, Any], app_settings: Any) -> int:
    context["raw_data"] = tools.extract(source)
    return len(context["raw_data"])


def useful_services_stage(tools: Any, context: Dict[str, Any], app_settings: Any) -> Optional[int]:
    service_ids = tools.compute_useful_service_ids(context["raw_data"])
    if tools.excluding_all():
        module_logger.warning("No useful service found: excluding all. Nothing to generate.")
        context["stop"] = True
    return None if service_ids is None else len(service_ids)


def transform_stage(tools: Any, context: Dict[str, Any], app_settings: Any) -> Dict[str, int]:
    context["transformed_data"] = tools.transform(context["raw_data"])
    return {name: len(df) for name, df in context["transformed_data"].items()}


def load_stage(
    tools: Any, output_dir: Path, files_prefix: str, context: Dict[str, Any], app_settings: Any
) -> List[Path]:
    return tools.load(context["transformed_data"], output_dir, files_prefix)


def build_orchestrator(tools: Any, source: Any, output_dir: Path, files_prefix: str = "") -> Orchestrator:
    """
    Queue the generation stages for ``tools`` on a new Orchestrator.

    Args:
        tools: A DefaultAgencyTools instance.
        source: GTFS zip, directory or http(s) URL.
        output_dir: Directory receiving the output files.
        files_prefix: Prefix prepended to every output file name.
    """
    orchestrator = Orchestrator(tools.app_settings, orchestrator_logger=module_logger)
    orchestrator.add_task("extract", extract_stage, kwargs={"tools": tools, "source": source})
    orchestrator.add_task("useful_services", useful_services_stage, kwargs={"tools": tools})
    orchestrator.add_task("transform", transform_stage, kwargs={"tools": tools})
    orchestrator.add_task(
        "load",
        load_stage,
        kwargs={"tools": tools, "output_dir": output_dir, "files_prefix": files_prefix},
    )
    return orchestrator


def run_agency_pipeline(tools: Any, source: Any, output_dir: Path, files_prefix: str = "") -> List[Path]:
    """
    Run every stage for ``tools``.

    Returns:
        Paths of the files written; empty when the run stopped early.
        A stage failure exits the process with a non-zero status.
    """
    module_logger.info(f"Source: {source} -> output: {output_dir} (prefix '{files_prefix}')")
    orchestrator = build_orchestrator(tools, source, output_dir, files_prefix)
    orchestrator.run()
    return orchestrator.context.get("load_result") or []
