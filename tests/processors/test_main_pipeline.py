# -*- coding: utf-8 -*-
from pathlib import Path
from unittest.mock import MagicMock

import pandas as pd
import pytest

from common.orchestrator import EXIT_FATAL
from common.processor_interface import UnmappableIdentifierError
from processors.gtfs import main_pipeline


@pytest.fixture
def tools():
    tools = MagicMock()
    tools.extract.return_value = {"routes": pd.DataFrame()}
    tools.compute_useful_service_ids.return_value = {"WKD"}
    tools.excluding_all.return_value = False
    tools.transform.return_value = {"routes": pd.DataFrame([{"id": 1}])}
    tools.load.return_value = [Path("out/routes.csv")]
    return tools


def test_build_orchestrator_stage_order(tools):
    orchestrator = main_pipeline.build_orchestrator(tools, "feed.zip", Path("out"), "x_")

    assert [task["name"] for task in orchestrator.tasks] == ["extract", "useful_services", "transform", "load"]
    assert orchestrator.tasks[-1]["kwargs"]["files_prefix"] == "x_"


def test_run_agency_pipeline(tools):
    written = main_pipeline.run_agency_pipeline(tools, "feed.zip", Path("out"), "x_")

    tools.extract.assert_called_once_with("feed.zip")
    tools.compute_useful_service_ids.assert_called_once_with(tools.extract.return_value)
    tools.transform.assert_called_once_with(tools.extract.return_value)
    tools.load.assert_called_once_with(tools.transform.return_value, Path("out"), "x_")
    assert written == [Path("out/routes.csv")]


def test_transform_stage_reports_table_sizes(tools):
    context = {"raw_data": {}}

    assert main_pipeline.transform_stage(tools, context=context, app_settings=None) == {"routes": 1}
    assert context["transformed_data"] is tools.transform.return_value


def test_excluding_all_stops_before_transform(tools):
    tools.excluding_all.return_value = True
    tools.compute_useful_service_ids.return_value = set()

    written = main_pipeline.run_agency_pipeline(tools, "feed.zip", Path("out"))

    tools.transform.assert_not_called()
    tools.load.assert_not_called()
    assert written == []


def test_fatal_data_error_exits_without_loading(tools):
    tools.transform.side_effect = UnmappableIdentifierError("no route ID", record={"route_id": "X"})

    with pytest.raises(SystemExit) as excinfo:
        main_pipeline.run_agency_pipeline(tools, "feed.zip", Path("out"))

    assert excinfo.value.code == EXIT_FATAL
    tools.load.assert_not_called()
