from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime


class TimeProvider(ABC):
    """Clock used for cooldown expiry, order freshness and receipts.

    Every timestamp the rate limiter stores and every `now` handed to the
    integrity checker comes from here, always aware and in UTC. Nothing
    in the library sleeps; windows are measured by subtracting two
    readings of this clock.
    """

    @abstractmethod
    def now(self) -> datetime:
        """Current instant with tzinfo=datetime.UTC."""
