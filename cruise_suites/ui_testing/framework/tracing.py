"""
================================================================================
Trace Recorder
================================================================================

Per-test Playwright tracing with a stable archive layout:

    <results_dir>/<spec file stem>/<test title>/trace.zip

Whitespace runs in the test title become underscores. Archives are written
only for tests that did not pass, unless `keep_on_pass` is set.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional, Union

from loguru import logger
from playwright.async_api import BrowserContext


TRACE_FILE_NAME = "trace.zip"


def slugify_title(title: str) -> str:
    """Replace every whitespace run in a test title with an underscore."""
    return re.sub(r"\s+", "_", title)


def trace_dir_for(
    results_dir: Union[str, Path],
    spec_file: Union[str, Path],
    test_title: str,
) -> Path:
    """Folder that holds the trace archive of one test."""
    return Path(results_dir) / Path(spec_file).stem / slugify_title(test_title)


class TraceRecorder:
    """
    Start/stop tracing on one browser context.

    Usage:
        recorder = TraceRecorder(context, trace_dir_for("test-results", __file__, title))
        await recorder.start()
        try:
            ...
        finally:
            await recorder.stop(save=not passed)
    """

    def __init__(self, context: BrowserContext, folder: Path):
        self.context = context
        self.folder = Path(folder)
        self._started = False

    @property
    def archive_path(self) -> Path:
        return self.folder / TRACE_FILE_NAME

    async def start(self) -> None:
        self.folder.mkdir(parents=True, exist_ok=True)
        await self.context.tracing.start(screenshots=True, snapshots=True, sources=True)
        self._started = True
        logger.debug(f"Tracing started for: {self.folder}")

    async def stop(self, save: bool) -> Optional[Path]:
        """
        Stop tracing.

        Args:
            save: Write the archive; otherwise the trace is discarded

        Returns:
            Archive path when saved
        """
        if not self._started:
            return None
        self._started = False

        if not save:
            await self.context.tracing.stop()
            return None

        await self.context.tracing.stop(path=str(self.archive_path))
        logger.info(f"Trace saved: {self.archive_path}")
        return self.archive_path


__all__ = [
    "TRACE_FILE_NAME",
    "TraceRecorder",
    "slugify_title",
    "trace_dir_for",
]
