"""Scan engine — walks a workspace and runs the file analyzer on each source file."""

from __future__ import annotations

import fnmatch
import logging
import os
import threading
import time
from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from itertools import islice
from pathlib import Path

from surfacemap.scanner.analyzer import analyze_file
from surfacemap.scanner.classifier import classify
from surfacemap.scanner.emitter import FindingSink
from surfacemap.scanner.errors import FileReadError, WorkspaceNotFoundError
from surfacemap.scanner.models import Ecosystem, Finding, ScanResult
from surfacemap.scanner.registry import DEFAULT_REGISTRY, PatternRegistry

logger = logging.getLogger(__name__)

# Directories to always skip
DEFAULT_SKIP_DIRS = frozenset(
    {
        ".git",
        "vendor",
        "node_modules",
        "__pycache__",
        ".venv",
        "dist",
        "build",
    }
)

# No size limit unless configured
DEFAULT_MAX_FILE_SIZE: int | None = None


class ScanEngine:
    """Orchestrates endpoint analysis across a directory."""

    def __init__(
        self,
        registry: PatternRegistry = DEFAULT_REGISTRY,
        skip_dirs: Iterable[str] = DEFAULT_SKIP_DIRS,
        exclude_patterns: Iterable[str] = (),
        max_file_size: int | None = DEFAULT_MAX_FILE_SIZE,
        workers: int = 1,
    ) -> None:
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self._registry = registry
        self._skip_dirs = frozenset(skip_dirs)
        self._exclude = tuple(exclude_patterns)
        self._max_file_size = max_file_size
        self._workers = workers

    def scan(
        self,
        directory: str | Path,
        cancel: threading.Event | None = None,
        sink: FindingSink | None = None,
    ) -> ScanResult:
        """Scan a directory and return aggregated results.

        ``cancel`` is checked before each file is started; a file already
        being analyzed is finished first. A cancelled scan returns what
        was found so far with ``cancelled`` set.
        """
        directory = Path(directory).resolve()
        if not directory.is_dir():
            raise WorkspaceNotFoundError(str(directory))

        start = time.time()
        result = ScanResult(directory=str(directory))
        files = self._source_files(directory, result)

        if self._workers > 1:
            self._scan_concurrent(files, result, cancel, sink)
        else:
            for path, ecosystem in files:
                if _is_cancelled(cancel):
                    result.cancelled = True
                    break
                self._record(result, sink, self._analyze(path, ecosystem))

        if result.cancelled:
            logger.info("Scan of %s cancelled", directory)
        result.duration = time.time() - start
        return result

    def _scan_concurrent(
        self,
        files: Iterator[tuple[Path, Ecosystem]],
        result: ScanResult,
        cancel: threading.Event | None,
        sink: FindingSink | None,
    ) -> None:
        """Analyze files in batches, recording each batch in walk order."""
        with ThreadPoolExecutor(max_workers=self._workers) as pool:
            while not result.cancelled:
                batch = list(islice(files, self._workers))
                if not batch:
                    break
                futures = []
                for path, ecosystem in batch:
                    if _is_cancelled(cancel):
                        result.cancelled = True
                        break
                    futures.append(pool.submit(self._analyze, path, ecosystem))
                for future in futures:
                    self._record(result, sink, future.result())

    def _analyze(self, path: Path, ecosystem: Ecosystem) -> list[Finding] | None:
        try:
            return analyze_file(path, ecosystem, self._registry)
        except FileReadError as e:
            logger.warning("%s", e)
            return None

    @staticmethod
    def _record(
        result: ScanResult,
        sink: FindingSink | None,
        findings: list[Finding] | None,
    ) -> None:
        if findings is None:
            result.files_failed += 1
            return
        result.files_scanned += 1
        result.findings.extend(findings)
        if sink is not None:
            for finding in findings:
                sink.emit(finding)

    def _source_files(
        self, directory: Path, result: ScanResult
    ) -> Iterator[tuple[Path, Ecosystem]]:
        """Yield in-scope source files with their ecosystem, in sorted walk order."""
        for path in self._walk(directory):
            in_scope, ecosystem = classify(path.name)
            if not in_scope or ecosystem is None:
                continue
            if self._max_file_size is None:
                yield path, ecosystem
                continue
            try:
                if path.stat().st_size > self._max_file_size:
                    logger.debug("Skipping %s: larger than %d bytes", path, self._max_file_size)
                    result.files_skipped += 1
                    continue
            except OSError as e:
                logger.debug("Skipping %s: %s", path, e)
                result.files_skipped += 1
                continue
            yield path, ecosystem

    def _walk(self, directory: Path) -> Iterator[Path]:
        for root, dirs, files in os.walk(directory):
            # Prune skipped directories in-place
            dirs[:] = sorted(
                d
                for d in dirs
                if d not in self._skip_dirs
                and not d.endswith(".egg-info")
                and not self._is_excluded(d)
            )

            for name in sorted(files):
                if self._is_excluded(name):
                    continue
                yield Path(root) / name

    def _is_excluded(self, name: str) -> bool:
        return any(fnmatch.fnmatch(name, pattern) for pattern in self._exclude)


def _is_cancelled(cancel: threading.Event | None) -> bool:
    return cancel is not None and cancel.is_set()
