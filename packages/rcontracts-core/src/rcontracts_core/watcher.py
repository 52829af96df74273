"""File watcher for contract source changes.

This module provides a watchdog-based file watcher that monitors contract
sources and recompiles the changed file on every save.

Architecture:
- ContractWatcher: Main watcher class with start/stop lifecycle
- Watches the static prefix of the contracts glob recursively
- Debounces rapid changes per file (editors write several times per save)
- Serializes recompiles so two saves never compile concurrently
- Reports deleted sources with the artifacts they had generated

Usage:
    >>> compiler = ContractCompiler(config, cwd)
    >>> with ContractWatcher(compiler, on_compiled=print_result):
    ...     time.sleep(3600)
"""

from __future__ import annotations

import enum
import threading
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog
from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from rcontracts_core.compiler import ContractCompiler, glob_base, matches_pattern
from rcontracts_core.generator import get_generated_files_for_contract
from rcontracts_core.models import CompileResult

if TYPE_CHECKING:
    from watchdog.observers.api import BaseObserver

logger = structlog.get_logger(__name__)


class WatcherState(enum.Enum):
    """State of the ContractWatcher.

    Attributes:
        STOPPED: Watcher is not running
        RUNNING: Watcher is actively monitoring
    """

    STOPPED = "stopped"
    RUNNING = "running"


class WatcherError(Exception):
    """Error in ContractWatcher operation.

    Raised when:
    - Watcher is started while already running
    - Watch directory does not exist
    """


CompiledCallback = Callable[[str, CompileResult], None]
ErrorCallback = Callable[[str, Exception], None]
DeletedCallback = Callable[[str, list[str]], None]


class _ContractEventHandler(FileSystemEventHandler):
    """Internal handler for watchdog file events.

    Filters events to contract sources and debounces each path separately.
    """

    def __init__(
        self,
        cwd: Path,
        pattern: str,
        on_change: Callable[[str], None],
        debounce_seconds: float,
        on_delete: Callable[[str], None] | None = None,
    ) -> None:
        super().__init__()
        self._cwd = cwd.resolve()
        self._pattern = pattern
        self._on_change = on_change
        self._on_delete = on_delete
        self._debounce_seconds = debounce_seconds
        self._timers: dict[str, threading.Timer] = {}
        self._lock = threading.Lock()

    def on_modified(self, event: FileSystemEvent) -> None:
        self._handle(event.src_path, event.is_directory)

    def on_created(self, event: FileSystemEvent) -> None:
        self._handle(event.src_path, event.is_directory)

    def on_moved(self, event: FileSystemEvent) -> None:
        if event.src_path != event.dest_path:
            self._handle_removed(event.src_path, event.is_directory)
        self._handle(event.dest_path, event.is_directory)

    def on_deleted(self, event: FileSystemEvent) -> None:
        self._handle_removed(event.src_path, event.is_directory)

    def _handle(self, raw_path: str | bytes, is_directory: bool) -> None:
        if is_directory:
            return

        if isinstance(raw_path, bytes):
            raw_path = raw_path.decode("utf-8")

        relative = self.relative_source(Path(raw_path))
        if relative is None:
            return

        logger.debug("contract_source_event", path=relative)
        self._schedule(relative)

    def _handle_removed(self, raw_path: str | bytes, is_directory: bool) -> None:
        if is_directory:
            return

        if isinstance(raw_path, bytes):
            raw_path = raw_path.decode("utf-8")

        relative = self.relative_source(Path(raw_path))
        if relative is None:
            return

        with self._lock:
            pending = self._timers.pop(relative, None)
            if pending is not None:
                pending.cancel()

        if self._on_delete is not None:
            self._on_delete(relative)

    def relative_source(self, path: Path) -> str | None:
        """Return the cwd-relative path if it is a watched contract source."""
        try:
            relative = path.resolve().relative_to(self._cwd).as_posix()
        except ValueError:
            return None
        return relative if matches_pattern(relative, self._pattern) else None

    def _schedule(self, relative: str) -> None:
        with self._lock:
            pending = self._timers.pop(relative, None)
            if pending is not None:
                pending.cancel()

            timer = threading.Timer(self._debounce_seconds, self._fire, args=(relative,))
            timer.daemon = True
            self._timers[relative] = timer
            timer.start()

    def _fire(self, relative: str) -> None:
        with self._lock:
            self._timers.pop(relative, None)
        self._on_change(relative)

    def cancel_pending(self) -> None:
        """Cancel every pending debounced callback."""
        with self._lock:
            for timer in self._timers.values():
                timer.cancel()
            self._timers.clear()


class ContractWatcher:
    """Watches contract sources and recompiles them on change.

    Attributes:
        compiler: Compiler used for incremental recompiles.
        debounce_seconds: Debounce delay for rapid changes.
        state: Current watcher state (STOPPED or RUNNING).

    Example:
        >>> def on_compiled(path: str, result: CompileResult) -> None:
        ...     print(path, result.changed_files)
        >>> watcher = ContractWatcher(compiler, on_compiled=on_compiled)
        >>> watcher.start()
        >>> try:
        ...     pass
        ... finally:
        ...     watcher.stop()
    """

    def __init__(
        self,
        compiler: ContractCompiler,
        *,
        debounce_seconds: float = 0.3,
        on_compiled: CompiledCallback | None = None,
        on_error: ErrorCallback | None = None,
        on_deleted: DeletedCallback | None = None,
    ) -> None:
        """Initialize ContractWatcher.

        Args:
            compiler: Compiler whose config and cwd locate the sources.
            debounce_seconds: Delay before recompiling after a change.
            on_compiled: Optional callback receiving (path, CompileResult).
            on_error: Optional callback receiving (path, exception).
            on_deleted: Optional callback receiving (path, artifact paths) when a
                source is removed.

        Raises:
            WatcherError: If the contracts directory does not exist.
        """
        self._compiler = compiler
        self._debounce_seconds = debounce_seconds
        self._on_compiled = on_compiled
        self._on_error = on_error
        self._on_deleted = on_deleted
        self._sources: dict[str, list[str]] = {}
        self._sources_lock = threading.Lock()

        self._watch_dir = compiler.cwd / glob_base(compiler.config.contracts)
        if not self._watch_dir.is_dir():
            raise WatcherError(f"Contracts directory does not exist: {self._watch_dir}")

        self._state = WatcherState.STOPPED
        self._observer: BaseObserver | None = None
        self._handler: _ContractEventHandler | None = None
        self._lock = threading.Lock()
        self._compile_lock = threading.Lock()
        self._log = logger.bind(watch_dir=str(self._watch_dir))

    @property
    def compiler(self) -> ContractCompiler:
        """Get the compiler used for recompiles."""
        return self._compiler

    @property
    def watch_dir(self) -> Path:
        """Get the watched directory."""
        return self._watch_dir

    @property
    def debounce_seconds(self) -> float:
        """Get the debounce delay in seconds."""
        return self._debounce_seconds

    @property
    def state(self) -> WatcherState:
        """Get the current watcher state."""
        with self._lock:
            return self._state

    def start(self) -> None:
        """Start watching for contract source changes.

        Raises:
            WatcherError: If watcher is already running.
        """
        with self._lock:
            if self._state == WatcherState.RUNNING:
                raise WatcherError("Watcher is already running")

            self._log.info("starting_watcher")

            self._handler = _ContractEventHandler(
                cwd=self._compiler.cwd,
                pattern=self._compiler.config.contracts,
                on_change=self.recompile,
                debounce_seconds=self._debounce_seconds,
                on_delete=self.source_deleted,
            )

            self._observer = Observer()
            self._observer.schedule(self._handler, str(self._watch_dir), recursive=True)
            self._observer.start()

            self._state = WatcherState.RUNNING
            self._log.info("watcher_started")

    def stop(self) -> None:
        """Stop watching for changes. Safe to call even if not running."""
        with self._lock:
            if self._state == WatcherState.STOPPED:
                return

            self._log.info("stopping_watcher")

            if self._handler is not None:
                self._handler.cancel_pending()
                self._handler = None

            if self._observer is not None:
                self._observer.stop()
                self._observer.join(timeout=5.0)
                self._observer = None

            self._state = WatcherState.STOPPED
            self._log.info("watcher_stopped")

    def __enter__(self) -> ContractWatcher:
        """Context manager entry - start watching."""
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Context manager exit - stop watching."""
        self.stop()

    def recompile(self, path: str) -> CompileResult | None:
        """Recompile one contract source (debounced entry point).

        Recompiles are serialized. Errors are logged and passed to the
        error callback if provided.

        Args:
            path: Source path relative to the compiler's cwd.

        Returns:
            CompileResult, or None if compilation raised.
        """
        with self._compile_lock:
            self._log.info("contract_change_detected", path=path)
            try:
                result = self._compiler.compile_file(path)
            except Exception as e:
                self._log.error("recompile_error", path=path, error=str(e))
                if self._on_error is not None:
                    self._on_error(path, e)
                return None

            self._log.info(
                "recompile_completed",
                path=path,
                success=result.success,
                changed=len(result.changed_files),
            )
            self.track(result)
            if self._on_compiled is not None:
                self._on_compiled(path, result)
            return result

    def track(self, result: CompileResult) -> None:
        """Remember which contracts each compiled source exported.

        Args:
            result: Result of a full or incremental compile.
        """
        exported: dict[str, list[str]] = {}
        for compiled in result.results:
            if compiled.source_path is not None:
                exported.setdefault(compiled.source_path, []).append(compiled.contract.name)
        with self._sources_lock:
            self._sources.update(exported)

    def source_deleted(self, path: str) -> list[str]:
        """Report a removed contract source.

        Generated artifacts are left in place; their paths are logged and
        passed to the deletion callback.

        Args:
            path: Source path relative to the compiler's cwd.

        Returns:
            Artifact paths generated from the removed source.
        """
        with self._sources_lock:
            names = self._sources.pop(path, [])

        artifacts = [
            str(artifact)
            for name in names
            for artifact in get_generated_files_for_contract(
                name, self._compiler.config, self._compiler.cwd
            )
        ]
        self._log.warning(
            "contract_source_deleted",
            path=path,
            contracts=names,
            artifacts=artifacts,
        )
        if self._on_deleted is not None:
            self._on_deleted(path, artifacts)
        return artifacts
