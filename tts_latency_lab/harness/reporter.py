"""
Results aggregation and console output for format sweeps.

Provides the per-format aggregate rows, the tab-separated report table and
the human-readable progress lines printed during a sweep.
"""

from dataclasses import dataclass
from typing import Optional

from ..exceptions import EmptySeriesError, SynthesisError
from ..instrumentation.timing import FormatSeries, SampleRecorder, TimingSample

REPORT_HEADER = ("AudioFormat", "Avg. First Byte Latency", "Avg. Last Byte Latency")
MISSING = "N/A"


@dataclass(frozen=True)
class AggregateRow:
    """Mean latencies for one format group.

    Means are None when the group has no successful samples.
    """

    format_name: str
    mean_first_byte_ms: Optional[float]
    mean_last_byte_ms: Optional[float]
    mean_bytes_read: Optional[float] = None
    sample_count: int = 0
    failure_count: int = 0


def _mean_or_none(recorder: SampleRecorder) -> Optional[float]:
    try:
        return recorder.mean()
    except EmptySeriesError:
        return None


def aggregate(format_name: str, series: FormatSeries, failure_count: int = 0) -> AggregateRow:
    """Reduce a format group's series to its aggregate row."""
    return AggregateRow(
        format_name=format_name,
        mean_first_byte_ms=_mean_or_none(series.first_byte),
        mean_last_byte_ms=_mean_or_none(series.last_byte),
        mean_bytes_read=_mean_or_none(series.bytes_read),
        sample_count=len(series),
        failure_count=failure_count,
    )


def format_mean(value: Optional[float]) -> str:
    """Render a mean for the report, or N/A when there is none."""
    if value is None:
        return MISSING
    return f"{value:.1f}"


class Report:
    """Ordered aggregate rows, one per format, in sweep order."""

    def __init__(self):
        self._rows: list[AggregateRow] = []

    def append(self, row: AggregateRow) -> None:
        self._rows.append(row)

    @property
    def rows(self) -> list[AggregateRow]:
        return list(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def render(self) -> str:
        """Tab-separated table with a header row and one row per format."""
        lines = ["\t".join(REPORT_HEADER)]
        for row in self._rows:
            lines.append("\t".join([
                row.format_name,
                format_mean(row.mean_first_byte_ms),
                format_mean(row.mean_last_byte_ms),
            ]))
        return "\n".join(lines) + "\n"


class ConsoleReporter:
    """Formats the progress log printed during a sweep."""

    def __init__(self, use_color: bool = True):
        self.use_color = use_color

    def _color(self, text: str, color: str) -> str:
        """Apply ANSI color if enabled."""
        if not self.use_color:
            return text

        colors = {
            "green": "\033[92m",
            "red": "\033[91m",
            "yellow": "\033[93m",
            "blue": "\033[94m",
            "bold": "\033[1m",
            "reset": "\033[0m",
        }

        return f"{colors.get(color, '')}{text}{colors['reset']}"

    def format_started(self, format_name: str) -> str:
        return self._color(f"AudioFormat = {format_name}", "bold")

    def call_started(self, count: int) -> str:
        return f"Test {count}"

    def call_completed(self, sample: TimingSample) -> str:
        lines = [
            f"First Byte Latency={sample.first_byte_ms}",
            f"{sample.bytes_read} bytes read.",
            f"Last Byte Latency={sample.last_byte_ms}",
        ]
        return "\n".join(lines)

    def call_failed(self, error: BaseException) -> str:
        return self._color(f"Unable to complete the TTS request: [{describe_error(error)}]", "red")

    def format_summary(self, row: AggregateRow) -> str:
        """Average latencies for a completed format group."""
        lines = [
            f"Average First Byte Latency: {format_mean(row.mean_first_byte_ms)} ms",
            f"Average Last Byte Latency: {format_mean(row.mean_last_byte_ms)} ms",
            f"Average Bytes Read: {format_mean(row.mean_bytes_read)}",
        ]
        if row.failure_count:
            lines.append(self._color(
                f"{row.failure_count} of {row.sample_count + row.failure_count} calls failed",
                "yellow",
            ))
        return "\n".join(lines)

    def duration_summary(self, mean_duration_ms: Optional[float]) -> str:
        return f"Average Wav Length: {format_mean(mean_duration_ms)} ms"

    def final_report(self, report: Report, mean_duration_ms: Optional[float]) -> str:
        """The report table followed by the overall duration estimate."""
        return report.render() + "\n" + self.duration_summary(mean_duration_ms)


def describe_error(error: BaseException) -> str:
    """Short description of a failure for the error log."""
    if isinstance(error, SynthesisError) and error.output_format:
        return f"{type(error).__name__} ({error.output_format}): {error.message}"
    return f"{type(error).__name__}: {error}"
