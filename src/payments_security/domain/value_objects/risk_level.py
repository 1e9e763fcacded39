from __future__ import annotations

from enum import Enum


class RiskLevel(Enum):
    """Coarse, informational risk classification of an order.

    Ordered by severity so that levels can be compared with max().
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]


_SEVERITY = {
    RiskLevel.LOW: 0,
    RiskLevel.MEDIUM: 1,
    RiskLevel.HIGH: 2,
}
