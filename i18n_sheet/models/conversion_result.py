from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

"""Conversion result model used for the SUMMARY output line.

One ConversionResult is returned per orchestrated call (to-excel or
from-excel); it is only built when the call succeeded as a whole.
"""


@dataclass(frozen=True)
class ConversionResult:
    """Aggregated metrics for one conversion call."""
    direction: str  # "to-excel" | "from-excel"
    files: int  # 入力ファイル数 (to-excel) / 出力ファイル数 (from-excel)
    keys: int  # total flattened keys written
    languages: list[str]  # language columns produced (from-excel only)
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    outputs: list[Path] = field(default_factory=list)
