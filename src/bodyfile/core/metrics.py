"""Run ID generation and metrics collection for the bodyfile CLI."""

import time
from collections.abc import Generator, Iterable, Iterator
from contextlib import contextmanager
from typing import Any
from uuid import UUID, uuid4

from bodyfile.core.logging import debug, info
from bodyfile.models.metrics import StepMetrics


class MetricsCollector:
    """Collects metrics for a command execution."""

    def __init__(self, run_id: UUID | None = None, step_name: str = "unknown"):
        self.run_id = run_id or uuid4()
        self.step_name = step_name
        self.start_time: float | None = None
        self.end_time: float | None = None

        self.lines_read = 0
        self.lines_processed = 0
        self.records_output = 0
        self.warnings = 0
        self.errors = 0

    def start(self) -> None:
        """Mark the start of execution."""
        self.start_time = time.perf_counter()

    def stop(self) -> None:
        """Mark the end of execution."""
        self.end_time = time.perf_counter()

    @property
    def duration_ms(self) -> int:
        """Get execution duration in milliseconds."""
        if self.start_time is None:
            return 0
        end = self.end_time or time.perf_counter()
        return int((end - self.start_time) * 1000)

    @property
    def skipped(self) -> int:
        """Lines read but never handed to the codec (comments, blanks)."""
        return self.lines_read - self.lines_processed

    def count_lines(self, stream: Iterable[str]) -> Iterator[str]:
        """Pass lines through while counting them as read."""
        for line in stream:
            self.lines_read += 1
            yield line

    def add_processed(self) -> None:
        """Increment processed line counter."""
        self.lines_processed += 1

    def add_output(self, count: int = 1) -> None:
        """Increment output counter."""
        self.records_output += count

    def add_warning(self, count: int = 1) -> None:
        """Increment warning counter."""
        self.warnings += count

    def add_error(self) -> None:
        """Increment error counter."""
        self.errors += 1

    def to_step_metrics(self) -> StepMetrics:
        """Convert to StepMetrics model."""
        return StepMetrics(
            run_id=self.run_id,
            step_name=self.step_name,
            duration_ms=self.duration_ms,
            lines_read=self.lines_read,
            records_output=self.records_output,
            skipped=self.skipped,
            warnings=self.warnings,
            errors=self.errors,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return self.to_step_metrics().model_dump(mode="json")


def report_metrics(collector: MetricsCollector) -> None:
    """Log a run summary at info level and full metrics at debug level."""
    info(
        f"{collector.step_name}: {collector.records_output} output, "
        f"{collector.errors} errors, {collector.warnings} warnings, "
        f"{collector.skipped} skipped in {collector.duration_ms}ms"
    )
    debug("Run metrics", **collector.to_dict())


@contextmanager
def collect_metrics(
    step_name: str, run_id: UUID | None = None
) -> Generator[MetricsCollector, None, None]:
    """Context manager for collecting metrics.

    Usage:
        with collect_metrics("parse") as metrics:
            for line_number, line in iter_lines(metrics.count_lines(stream)):
                metrics.add_processed()
                ...

    Args:
        step_name: Name of the step being executed
        run_id: Optional run ID for correlation

    Yields:
        MetricsCollector instance
    """
    collector = MetricsCollector(run_id=run_id, step_name=step_name)
    collector.start()
    try:
        yield collector
    finally:
        collector.stop()
