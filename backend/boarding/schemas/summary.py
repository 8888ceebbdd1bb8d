"""AI handover summary schemas."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel


class HandoverSummaryRead(BaseModel):
    """Generated handover text for a day."""

    day: dt.date
    boarder_count: int
    summary: str
