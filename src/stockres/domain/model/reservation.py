"""Reservation state shared by cart lines and order items.

A line is either unreserved (NONE), holding stock in exactly one warehouse
(RESERVED), or finished: the hold was dropped (RELEASED) or realised as a
sale (CONSUMED).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class ReservationState(Enum):
    NONE = "NONE"
    RESERVED = "RESERVED"
    RELEASED = "RELEASED"
    CONSUMED = "CONSUMED"


@dataclass(frozen=True)
class Reservation:
    """Where a line's stock is held and since when."""

    warehouse_id: int
    reserved_at: datetime

    def is_older_than(self, cutoff: datetime) -> bool:
        return self.reserved_at < cutoff
