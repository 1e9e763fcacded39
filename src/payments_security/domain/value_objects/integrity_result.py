from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class IntegrityResult:
    """Outcome of cross-validating an order snapshot.

    `checks` maps each check name to whether it passed, in evaluation
    order (amount, currency, status, timestamp).
    """

    checks: dict[str, bool]

    @property
    def is_valid(self) -> bool:
        return all(self.checks.values())

    @property
    def failed_checks(self) -> list[str]:
        return [name for name, passed in self.checks.items() if not passed]
