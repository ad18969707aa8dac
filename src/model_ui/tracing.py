"""
Tracing configuration for model-ui.

This module provides tracing setup using OpenAI Agents SDK's built-in
tracing capabilities. The outermost traced operation opens a trace;
operations nested inside it (recursive child builds, the build inside a
render) are recorded as custom spans of that trace.
"""

import functools
import json
import logging
import sys
import time
from contextlib import contextmanager
from typing import Any, Iterator

from agents import custom_span, set_tracing_disabled, trace
from agents.tracing import (
    Span,
    Trace,
    TracingProcessor,
    get_current_trace,
    set_trace_processors,
)
from agents.tracing.spans import SpanError

from model_ui.config import ModelUIConfig, get_config

_tracing_enabled = False


def _span_name(span: Span[Any]) -> str:
    return getattr(span.span_data, "name", None) or str(span.span_data)


def _span_metadata(span: Span[Any]) -> dict[str, Any] | None:
    return getattr(span.span_data, "data", None)


def _trace_metadata(trace: Trace) -> dict[str, Any] | None:
    return (trace.export() or {}).get("metadata")


class _TimingMixin:
    """Wall-clock durations of traces and spans, keyed by their ids."""

    def _start_timer(self, key: str) -> None:
        self._started[key] = time.perf_counter()

    def _stop_timer(self, key: str) -> float | None:
        started = self._started.pop(key, None)
        if started is None:
            return None
        return round((time.perf_counter() - started) * 1000, 3)


class ConsoleTraceProcessor(_TimingMixin, TracingProcessor):
    """
    A simple tracing processor that prints traces to the console.

    Useful for development and debugging.
    """

    def __init__(self, verbose: bool = False, stream=None):
        """
        Initialize the console tracing processor.

        Args:
            verbose: If True, print span events as well as trace events.
            stream: Output stream, stderr by default.
        """
        self.verbose = verbose
        self.stream = stream or sys.stderr
        self._started: dict[str, float] = {}

    def _print(self, line: str) -> None:
        print(line, file=self.stream)

    def on_trace_start(self, trace: Trace) -> None:
        """Called when a trace starts."""
        self._start_timer(trace.trace_id)
        self._print(f"[TRACE START] {trace.name} (ID: {trace.trace_id[:8]}...)")

    def on_trace_end(self, trace: Trace) -> None:
        """Called when a trace ends."""
        self._print(f"[TRACE END] {trace.name} ({self._stop_timer(trace.trace_id)} ms)")

    def on_span_start(self, span: Span[Any]) -> None:
        """Called when a span starts."""
        if self.verbose:
            self._print(f"  ├─ [SPAN START] {_span_name(span)}")

    def on_span_end(self, span: Span[Any]) -> None:
        """Called when a span ends."""
        if self.verbose:
            suffix = f" ! {span.error['message']}" if span.error else ""
            self._print(f"  └─ [SPAN END] {_span_name(span)}{suffix}")

    def shutdown(self) -> None:
        """Called when the processor is shut down."""
        pass

    def force_flush(self) -> None:
        """Force flush any pending traces."""
        self.stream.flush()


class FileTraceProcessor(_TimingMixin, TracingProcessor):
    """
    A tracing processor that writes traces to a JSON file.

    Useful for persistent logging and later analysis. One line is written
    per finished trace, with its spans in the order they ended.
    """

    def __init__(self, file_path: str = "traces.jsonl"):
        """
        Initialize the file tracing processor.

        Args:
            file_path: Path to the output file (JSON Lines format).
        """
        self.file_path = file_path
        self._started: dict[str, float] = {}
        self._traces: dict[str, dict[str, Any]] = {}

    def on_trace_start(self, trace: Trace) -> None:
        """Called when a trace starts."""
        self._start_timer(trace.trace_id)
        self._traces[trace.trace_id] = {
            "trace_id": trace.trace_id,
            "name": trace.name,
            "metadata": _trace_metadata(trace),
            "spans": [],
        }

    def on_trace_end(self, trace: Trace) -> None:
        """Called when a trace ends."""
        current = self._traces.pop(trace.trace_id, None)
        if current is None:
            return
        current["duration_ms"] = self._stop_timer(trace.trace_id)
        with open(self.file_path, "a", encoding="utf-8") as f:
            f.write(json.dumps(current, default=str) + "\n")

    def on_span_start(self, span: Span[Any]) -> None:
        """Called when a span starts."""
        self._start_timer(span.span_id)

    def on_span_end(self, span: Span[Any]) -> None:
        """Called when a span ends."""
        duration_ms = self._stop_timer(span.span_id)
        current = self._traces.get(span.trace_id)
        if current is None:
            return
        current["spans"].append({
            "span_id": span.span_id,
            "parent_id": span.parent_id,
            "name": _span_name(span),
            "data": _span_metadata(span),
            "duration_ms": duration_ms,
            "error": span.error["message"] if span.error else None,
        })

    def shutdown(self) -> None:
        """Called when the processor is shut down."""
        self._traces.clear()

    def force_flush(self) -> None:
        """Force flush any pending traces."""
        pass


def setup_tracing(
    enabled: bool = True,
    console: bool = True,
    verbose: bool = False,
    file_path: str | None = None,
) -> None:
    """
    Configure tracing for model-ui.

    Installed processors replace the SDK defaults, so traces stay local
    and are never exported to the OpenAI dashboard.

    Args:
        enabled: Whether tracing is enabled.
        console: Whether to print traces to console.
        verbose: Whether to print detailed span information.
        file_path: Optional file path to write traces to.

    Example:
        >>> from model_ui.tracing import setup_tracing
        >>> setup_tracing(console=True, verbose=True)
        >>> # Now every build and render is traced
    """
    global _tracing_enabled

    _tracing_enabled = enabled
    if not enabled:
        set_tracing_disabled(True)
        return

    set_tracing_disabled(False)

    processors: list[TracingProcessor] = []

    if console:
        processors.append(ConsoleTraceProcessor(verbose=verbose))

    if file_path:
        processors.append(FileTraceProcessor(file_path=file_path))

    set_trace_processors(processors)


def setup_logging(level: str | int | None = None) -> None:
    """Set the level of the ``model_ui`` logger tree (defaults to config.log_level)."""
    logging.getLogger("model_ui").setLevel(level or get_config().log_level)


def configure(config: ModelUIConfig | None = None) -> None:
    """
    Apply the logging and tracing settings of a configuration.

    Called once when the package is imported; call it again after
    ``update_config`` to apply changed settings. Tracing is only set up
    when the configuration enables it.

    Args:
        config: Settings to apply. If None, uses the global configuration.
    """
    config = config or get_config()
    setup_logging(config.log_level)
    if config.enable_tracing:
        setup_tracing(
            console=config.trace_to_console,
            verbose=config.trace_verbose,
            file_path=config.trace_file,
        )


def disable_tracing() -> None:
    """Disable all tracing."""
    global _tracing_enabled
    _tracing_enabled = False
    set_tracing_disabled(True)


def enable_tracing() -> None:
    """Enable tracing with whatever processors are installed."""
    global _tracing_enabled
    _tracing_enabled = True
    set_tracing_disabled(False)


def is_tracing_enabled() -> bool:
    return _tracing_enabled


@contextmanager
def traced_operation(name: str, **metadata: Any) -> Iterator[None]:
    """
    Context manager for tracing a specific operation.

    Args:
        name: Name of the operation to trace.
        **metadata: Optional metadata to attach to the trace or span.

    Example:
        >>> with traced_operation("build", model="Person"):
        ...     tree = builder.build(person)
    """
    if not _tracing_enabled:
        yield
        return

    metadata = {key: value for key, value in metadata.items() if value is not None}

    if get_current_trace() is None:
        with trace(name, metadata=metadata or None):
            yield
        return

    with custom_span(name, data=metadata or None) as span:
        try:
            yield
        except Exception as e:
            span.set_error(SpanError(message=f"{type(e).__name__}: {e}", data=None))
            raise


def trace_render(func):
    """Decorator to trace rendering engine ``render`` methods."""

    @functools.wraps(func)
    def wrapper(self, model, *args, **kwargs):
        with traced_operation(f"render:{self.flavour}", model=type(model).__name__):
            return func(self, model, *args, **kwargs)

    return wrapper
