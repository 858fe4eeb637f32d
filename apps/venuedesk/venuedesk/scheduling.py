from __future__ import annotations

from datetime import datetime
from typing import Optional

END_BEFORE_START = "End time should be after start time"
DOORS_AFTER_START = "Doors open should not be after start time"
DOORS_AFTER_END = "Doors open should not be after end time"


def time_warnings(
    start: Optional[datetime],
    end: Optional[datetime],
    doors_open: Optional[datetime],
) -> list[str]:
    warnings = []
    if start is not None and end is not None and end <= start:
        warnings.append(END_BEFORE_START)
    if start is not None and doors_open is not None and doors_open > start:
        warnings.append(DOORS_AFTER_START)
    if end is not None and doors_open is not None and doors_open > end:
        warnings.append(DOORS_AFTER_END)
    return warnings
