"""Logger with composable output sinks, backed by logfire."""

from __future__ import annotations

import contextlib
from abc import abstractmethod
from pathlib import Path
from typing import Any

from opentelemetry.proto.logs.v1 import logs_pb2
from opentelemetry.sdk.trace import ReadableSpan
from opentelemetry.sdk.trace.export import SpanExporter, SpanExportResult
from pydantic import Field, PrivateAttr, model_validator

from mergespace.core.base import BaseConfig

# The configured logger, None until setup_logger() runs
_current_logger: Logger | None = None


class _LoggerProxy:
    """Forwards attribute access to the configured logger.

    Before setup_logger() has run every logging call is a no-op,
    so library code can log unconditionally.
    """
    def __getattr__(self, name):
        if _current_logger is None:
            if name == 'span':
                return lambda *args, **kwargs: contextlib.nullcontext()

            def _noop(*args, **kwargs):  # noqa: ARG001
                pass
            return _noop
        return getattr(_current_logger, name)

    def __enter__(self):
        if _current_logger is None:
            return self
        return _current_logger.__enter__()

    def __exit__(self, *args):
        if _current_logger is None:
            return False
        return _current_logger.__exit__(*args)


# Imported everywhere as `from mergespace.core.log import logger`
logger = _LoggerProxy()


class LevelFilteringExporter(SpanExporter):
    """Span exporter that drops spans below a minimum level."""

    # Level names to OpenTelemetry severity numbers
    _level_thresholds = {
        'spew': logs_pb2.SEVERITY_NUMBER_TRACE,    # 1
        'trace': logs_pb2.SEVERITY_NUMBER_TRACE3,  # 3
        'debug': logs_pb2.SEVERITY_NUMBER_DEBUG,   # 5
        'info': logs_pb2.SEVERITY_NUMBER_INFO,     # 9
        'warn': logs_pb2.SEVERITY_NUMBER_WARN,     # 13
        'error': logs_pb2.SEVERITY_NUMBER_ERROR,   # 17
        'fatal': logs_pb2.SEVERITY_NUMBER_FATAL,   # 21
    }

    def __init__(self, exporter: SpanExporter, min_level: str):
        """Initialize filtering exporter.

        Args:
            exporter: Exporter receiving the spans that pass
            min_level: Minimum level name (spew, trace, debug, ...)
        """
        self._exporter = exporter
        self._min_severity = self.severity(min_level)

    @classmethod
    def severity(cls, level: str) -> int:
        """Map a level name to its severity number (info if unknown)."""
        return cls._level_thresholds.get(
            level.lower(), logs_pb2.SEVERITY_NUMBER_INFO
        )

    @classmethod
    def level_name(cls, severity: int) -> str:
        """Map a severity number back to the closest level name."""
        for name in ['fatal', 'error', 'warn', 'info', 'debug', 'trace']:
            if severity >= cls._level_thresholds[name]:
                return name
        return 'spew'

    def export(self, spans: list[ReadableSpan]) -> SpanExportResult:
        """Forward the spans at or above the minimum severity."""
        kept = [
            span for span in spans
            if (span.attributes or {}).get(
                'logfire.level_num', logs_pb2.SEVERITY_NUMBER_INFO
            ) >= self._min_severity
        ]
        if kept:
            return self._exporter.export(kept)
        return SpanExportResult.SUCCESS

    def shutdown(self) -> None:
        self._exporter.shutdown()

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        return self._exporter.force_flush(timeout_millis)


class Sink(BaseConfig):
    """Base class for log output sinks.

    Sinks are BaseConfig models, so the cleanup cascade reaches
    their close() automatically.
    """

    enabled: bool = Field(default=True, description="Enable this sink")
    level: str | None = Field(
        default=None,
        description=(
            "Log level for this sink. If None, inherits from Logger.level. "
            "Valid: spew, trace, debug, info, warn, error, fatal"
        )
    )
    escape_special_characters: bool = Field(
        default=False,
        description="Escape newlines/tabs in output"
    )
    format_template: str | None = Field(
        default=None,
        description="Format template string (None writes span JSON)"
    )

    _processor: Any = PrivateAttr(default=None)

    @staticmethod
    def _escape_special_chars(text: str) -> str:
        return (text
            .replace('\\', '\\\\')
            .replace('\n', '\\n')
            .replace('\r', '\\r')
            .replace('\t', '\\t')
        )

    @staticmethod
    def _extract_span_data(span) -> dict:
        """Collect the template fields available for one span."""
        from datetime import UTC, datetime

        attrs = span.attributes or {}
        filepath = attrs.get("code.filepath", "")
        lineno = attrs.get("code.lineno", "")
        level_num = attrs.get(
            "logfire.level_num", logs_pb2.SEVERITY_NUMBER_INFO
        )

        return {
            'timestamp': datetime.fromtimestamp(
                span.start_time / 1e9, tz=UTC
            ),
            'level': LevelFilteringExporter.level_name(level_num),
            'message': attrs.get("logfire.msg", span.name),
            'filepath': filepath,
            'lineno': lineno,
            'location': f"{filepath}:{lineno}" if filepath else "",
            'function': attrs.get("code.function", ""),
        }

    def _format_span(self, span) -> str:
        """Render one span with format_template.

        Attributes passed as keyword arguments to logger calls are
        appended after the message as key=value pairs.
        """
        if not self.format_template:
            import os
            return span.to_json() + os.linesep

        data = self._extract_span_data(span)
        if self.escape_special_characters:
            data['message'] = self._escape_special_chars(data['message'])

        try:
            formatted = self.format_template.format(**data)
        except KeyError as e:
            return f"ERROR: Invalid template field {e}\n"

        skip_prefixes = ('otel.', 'telemetry.', 'service.', 'process.',
                         'code.', 'logfire.')
        extra = {
            key: value
            for key, value in (span.attributes or {}).items()
            if not key.startswith(skip_prefixes)
        }
        if extra:
            attrs_str = ' '.join(
                f"{k}={v!r}" for k, v in sorted(extra.items())
            )
            formatted = f"{formatted} │ {attrs_str}"

        return formatted + '\n'

    @abstractmethod
    def create_processor(self, log_root: Path, run_name: str):
        """Create the OpenTelemetry span processor for this sink.

        Args:
            log_root: Root directory for log files
            run_name: Name of the current analysis run

        Returns:
            SpanProcessor instance or None if not applicable
        """
        pass

    def close(self):
        """Shut down the span processor."""
        if self._processor:
            with contextlib.suppress(Exception):
                self._processor.shutdown()


class ConsoleSink(Sink):
    """Console output sink (configured through logfire itself)."""

    verbose: bool = Field(
        default=False,
        description="Show full span details"
    )
    colors: str = Field(
        default="auto",
        description="Color mode: auto, always, never"
    )

    def create_processor(self, log_root: Path, run_name: str):
        return None


class FileSink(Sink):
    """File output sink."""

    enabled: bool = Field(
        default=False,
        description="Enable file logging"
    )
    path: str = Field(
        default="{log_root}/{run_name}/mergespace.log",
        description="Log file path template"
    )
    format_template: str | None = Field(
        default="{timestamp:%Y-%m-%d %H:%M:%S} {level:<5} {message}",
        description="Format template for each line"
    )

    _file: Any = PrivateAttr(default=None)

    def create_processor(self, log_root: Path, run_name: str):
        """Open the log file and wrap it in a filtering processor."""
        from opentelemetry.sdk.trace.export import (
            BatchSpanProcessor,
            ConsoleSpanExporter,
        )

        log_path = Path(
            self.path.format(log_root=log_root, run_name=run_name)
        )
        log_path.parent.mkdir(parents=True, exist_ok=True)

        # Line buffered; stays open for the lifetime of the sink
        self._file = open(log_path, "a", buffering=1, encoding="utf-8")  # noqa: SIM115

        exporter = ConsoleSpanExporter(
            out=self._file,
            formatter=self._format_span
        )
        return BatchSpanProcessor(
            LevelFilteringExporter(exporter, self.level or "info")
        )

    def close(self):
        """Flush the processor, then close the file."""
        super().close()

        if self._file and not self._file.closed:
            with contextlib.suppress(OSError):
                self._file.flush()
                self._file.close()


class Logger(BaseConfig):
    """Logger with composable output sinks.

    Closing the logger closes every sink through the
    BaseCloseable cascade.
    """

    level: str = Field(
        default="info",
        description=(
            "Default log level for all sinks. Individual sinks can override. "
            "Valid: spew, trace, debug, info, warn, error, fatal"
        )
    )
    console: ConsoleSink = Field(
        default_factory=ConsoleSink,
        description="Console output configuration"
    )
    file: FileSink = Field(
        default_factory=FileSink,
        description="File logging configuration"
    )

    @model_validator(mode='after')
    def _cascade_level_to_sinks(self) -> 'Logger':
        for sink in [self.console, self.file]:
            if sink.level is None:
                sink.level = self.level
        return self

    def setup(self, log_root: Path, run_name: str):
        """Create processors for the enabled sinks and configure logfire.

        Args:
            log_root: Root directory for log files
            run_name: Name of the current analysis run
        """
        for sink in [self.console, self.file]:
            if sink.enabled:
                sink._processor = sink.create_processor(log_root, run_name)

        processors = [
            sink._processor
            for sink in [self.console, self.file]
            if sink.enabled and sink._processor
        ]

        import logfire
        from logfire import ConsoleOptions

        console_config = (
            ConsoleOptions(
                min_log_level=self.console.level,
                verbose=self.console.verbose,
                colors=self.console.colors,
                include_timestamps=True,
            )
            if self.console.enabled
            else False
        )

        logfire.configure(
            service_name=f"mergespace-{run_name}",
            send_to_logfire=False,
            console=console_config,
            additional_span_processors=processors if processors else None,
        )

    # Logging methods - delegate to logfire

    def info(self, msg: str, **kwargs):
        import logfire
        logfire.info(msg, **kwargs)

    def debug(self, msg: str, **kwargs):
        import logfire
        logfire.debug(msg, **kwargs)

    def trace(self, msg: str, **kwargs):
        import logfire
        logfire.log(
            level=LevelFilteringExporter.severity('trace'),
            msg_template=msg,
            attributes=kwargs if kwargs else None
        )

    def spew(self, msg: str, **kwargs):
        """Log below trace, for per-combination noise."""
        import logfire
        logfire.log(
            level=LevelFilteringExporter.severity('spew'),
            msg_template=msg,
            attributes=kwargs if kwargs else None
        )

    def warn(self, msg: str, **kwargs):
        import logfire
        logfire.warn(msg, **kwargs)

    def warning(self, msg: str, **kwargs):
        """Alias for warn()."""
        self.warn(msg, **kwargs)

    def error(self, msg: str, **kwargs):
        import logfire
        logfire.error(msg, **kwargs)

    def span(self, msg: str, **kwargs):
        """Create a span context manager.

        Usage:
            with logger.span("Analyzing {commit}", commit=sha):
                ...
        """
        import logfire
        return logfire.span(msg, **kwargs)


def setup_logger(
    log_root: Path,
    run_name: str,
    console: ConsoleSink | None = None,
    file: FileSink | None = None,
    level: str = "info",
) -> Logger:
    """Initialize the global logger singleton.

    Config calls this once loading has finished; tests call it
    directly.

    Args:
        log_root: Root directory for log files
        run_name: Name of the current analysis run
        console: Console sink config (or None for defaults)
        file: File sink config (or None for defaults)
        level: Default level for sinks that set none

    Returns:
        Logger: The initialized global logger instance
    """
    global _current_logger

    _current_logger = Logger(
        level=level,
        console=console or ConsoleSink(),
        file=file or FileSink(),
    )
    _current_logger.setup(log_root, run_name)

    return _current_logger
