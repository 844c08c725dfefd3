# common/orchestrator.py
# -*- coding: utf-8 -*-
"""
Top-level run loop executing the stages of a feed generation run.
"""

import logging
import sys
import time
from typing import Any, Callable, Dict, List, Optional

from common.core_utils import format_duration
from common.processor_interface import FatalDataError

EXIT_FATAL = 1


class Orchestrator:
    """Runs a series of named stages, sharing a context between them."""

    def __init__(
        self,
        app_settings: Any,
        orchestrator_logger: Optional[logging.Logger] = None,
    ):
        """
        Initializes the Orchestrator.

        Args:
            app_settings: The application settings object.
            orchestrator_logger: An optional logger instance.
        """
        self.app_settings = app_settings
        self.logger = orchestrator_logger or logging.getLogger(__name__)
        self.tasks: List[Dict[str, Any]] = []
        # Shared context for stages to pass state between each other
        self.context: Dict[str, Any] = {}

    def add_task(
        self,
        name: str,
        func: Callable,
        args: Optional[List[Any]] = None,
        kwargs: Optional[Dict[str, Any]] = None,
    ):
        """
        Adds a stage to the execution list.

        Args:
            name: A human-readable name for the stage.
            func: Callable receiving ``context`` and ``app_settings`` keyword arguments.
            args: Positional arguments to pass to the function.
            kwargs: Keyword arguments to pass to the function.
        """
        self.tasks.append({
            "name": name,
            "func": func,
            "args": args or [],
            "kwargs": kwargs or {},
        })
        self.logger.debug(f"Task '{name}' added to the queue.")

    def run(self) -> bool:
        """
        Executes all added stages in sequence.

        A stage may set ``context["stop"] = True`` to end the run early without error.

        Returns:
            True if every stage ran, False if a stage stopped the run early.
            A stage failure exits the process.
        """
        self.logger.info("Orchestration started.")
        for i, task in enumerate(self.tasks):
            task_name = task["name"]
            self.logger.info(f"--- Stage {i + 1}: Running task '{task_name}' ---")
            started = time.monotonic()

            try:
                task["kwargs"]["context"] = self.context
                task["kwargs"]["app_settings"] = self.app_settings

                result = task["func"](*task["args"], **task["kwargs"])
                self.context[f"{task_name}_result"] = result

                elapsed_ms = (time.monotonic() - started) * 1000
                self.logger.info(
                    f"✅ Task '{task_name}' completed in {format_duration(elapsed_ms)}."
                )

            except FatalDataError as e:
                self.logger.critical(
                    f"🔥 Task '{task_name}' hit unmappable feed data: {e} (record: {e.record})"
                )
                self._halt()
            except Exception as e:
                self.logger.critical(f"🔥 Task '{task_name}' failed: {e}", exc_info=True)
                self._halt()

            if self.context.get("stop"):
                skipped = len(self.tasks) - i - 1
                self.logger.warning(
                    f"⏹️ Orchestration stopped early by task '{task_name}'. "
                    f"{skipped} remaining task(s) skipped."
                )
                return False

        self.logger.info("✨ Orchestration finished successfully.")
        return True

    def _halt(self) -> None:
        self.logger.error("A fatal error occurred. Halting orchestration and exiting application.")
        sys.exit(EXIT_FATAL)
