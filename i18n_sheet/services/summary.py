from __future__ import annotations

from ..models.conversion_result import ConversionResult

"""SUMMARY line rendering for conversion runs."""


def _format_seconds(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # Format very small numbers to avoid scientific notation
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: ConversionResult) -> str:
    """Render the SUMMARY line for one conversion call.

    Format:
    SUMMARY direction={direction} files={files} keys={keys} languages={a,b|-} elapsed_sec={elapsed}

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> r = ConversionResult(direction="to-excel", files=2, keys=10, languages=[],
        ...                      start_time=t, end_time=t, elapsed_seconds=0.0)
        >>> render_summary_line(r)
        'SUMMARY direction=to-excel files=2 keys=10 languages=- elapsed_sec=0'
    """
    languages = ",".join(result.languages) if result.languages else "-"
    return (
        f"SUMMARY direction={result.direction} "
        f"files={result.files} "
        f"keys={result.keys} "
        f"languages={languages} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
