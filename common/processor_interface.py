# -*- coding: utf-8 -*-
"""
ProcessorInterface - Abstract base class for feed processors

This module defines the extract/transform/load contract that every agency
adapter goes through, together with the error taxonomy raised when the feed
contains data the adapter does not know how to map.
"""

import logging
import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional


class ProcessorInterface(ABC):
    """
    Abstract base class defining the required methods for all feed processors.

    All processors implement the extract, transform, and load (ETL) pattern
    to convert a raw transit feed into the normalized output tables.
    """

    def __init__(self, app_settings: Any = None):
        """
        Initialize the processor.

        Args:
            app_settings: Application settings (see config.config_models.AppSettings)
        """
        self.app_settings = app_settings
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    @abstractmethod
    def processor_name(self) -> str:
        """Return the name of this processor (e.g., 'Guelph Transit bus')."""
        pass

    @abstractmethod
    def extract(self, source_path: Path, **kwargs) -> Dict[str, Any]:
        """
        Extract raw tables from the source file/directory.

        Args:
            source_path: Path to the source feed
            **kwargs: Additional extraction parameters

        Returns:
            Dictionary of raw tables keyed by table name

        Raises:
            ProcessorError: If extraction fails
        """
        pass

    @abstractmethod
    def transform(self, raw_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Transform raw tables into the normalized schema.

        Args:
            raw_data: Raw tables from the extract phase

        Returns:
            Dictionary of normalized tables ready for loading

        Raises:
            FatalDataError: If a record cannot be mapped
        """
        pass

    @abstractmethod
    def load(self, transformed_data: Dict[str, Any], output_dir: Path, files_prefix: str = "") -> List[Path]:
        """
        Write the normalized tables.

        Args:
            transformed_data: Data from the transform phase
            output_dir: Directory receiving the output files
            files_prefix: Prefix prepended to every output file name

        Returns:
            The paths of the files written
        """
        pass

    def cleanup(self, temp_files: List[Path]) -> None:
        """
        Clean up temporary files created during processing.

        Args:
            temp_files: List of temporary file paths to clean up
        """
        for temp_file in temp_files:
            try:
                if temp_file.exists():
                    if temp_file.is_dir():
                        shutil.rmtree(temp_file)
                    else:
                        temp_file.unlink()
                    self.logger.debug(f"Cleaned up temporary file: {temp_file}")
            except OSError as e:
                self.logger.warning(f"Failed to clean up {temp_file}: {str(e)}")


class ProcessorError(Exception):
    """Custom exception for processor-related errors."""

    def __init__(
        self,
        message: str,
        processor_name: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.processor_name = processor_name
        self.original_error = original_error
        super().__init__(message)


class FatalDataError(ProcessorError):
    """
    Raised when a feed record cannot be mapped by the adapter's static rules.

    These are never recovered locally: they mean the feed drifted from what the
    adapter knows and the adapter source must be updated.
    """

    def __init__(self, message: str, record: Any = None, **kwargs):
        self.record = record
        super().__init__(message, **kwargs)


class UnmappableIdentifierError(FatalDataError):
    """A route or stop cannot be reduced to a stable numeric ID."""


class UnmappableDisplayTextError(FatalDataError):
    """A long name or color is empty or unknown after cleaning."""


class UnexpectedHeadsignMergeError(FatalDataError):
    """Two headsigns of one directional trip are not a known merge pair."""


class MalformedStopRecordError(UnmappableIdentifierError):
    """Neither a numeric stop code nor a parseable composite stop ID."""


class UnclassifiableTripError(FatalDataError):
    """A trip on a split route matches none of the route's anchor lists."""
