# -*- coding: utf-8 -*-
from pathlib import Path

from common.processor_interface import (
    FatalDataError,
    MalformedStopRecordError,
    ProcessorError,
    ProcessorInterface,
    UnmappableIdentifierError,
)


class MockProcessor(ProcessorInterface):
    """
    Mock class implementing ProcessorInterface for testing purposes.
    """

    @property
    def processor_name(self) -> str:
        return "MockProcessor"

    def extract(self, source_path: Path, **kwargs) -> dict:
        return {"mock_data": "data"}

    def transform(self, raw_data: dict) -> dict:
        return {"transformed_data": raw_data["mock_data"]}

    def load(self, transformed_data: dict, output_dir: Path, files_prefix: str = "") -> list:
        return [output_dir / f"{files_prefix}out.csv"]


def test_processor_name_property():
    assert MockProcessor().processor_name == "MockProcessor"


def test_logger_named_after_class():
    assert MockProcessor().logger.name == "MockProcessor"


def test_app_settings_kept():
    settings = object()

    assert MockProcessor(settings).app_settings is settings


def test_cleanup_removes_files_and_directories(tmp_path):
    temp_file = tmp_path / "download.zip"
    temp_file.write_bytes(b"x")
    temp_dir = tmp_path / "extracted"
    (temp_dir / "nested").mkdir(parents=True)

    MockProcessor().cleanup([temp_file, temp_dir, tmp_path / "absent"])

    assert not temp_file.exists()
    assert not temp_dir.exists()


def test_error_taxonomy():
    error = MalformedStopRecordError("bad stop", record={"stop_id": "x"}, processor_name="Guelph")

    assert isinstance(error, UnmappableIdentifierError)
    assert isinstance(error, FatalDataError)
    assert isinstance(error, ProcessorError)
    assert error.record == {"stop_id": "x"}
    assert error.processor_name == "Guelph"
    assert str(error) == "bad stop"
