from __future__ import annotations

from typing import TYPE_CHECKING

from payments_security.application.ports import AttemptStore

if TYPE_CHECKING:
    from payments_security.domain.entities import AttemptRecord


class InMemoryAttemptStore(AttemptStore):
    """In-memory attempt store for a single process.

    Implementation notes:
    - Keyed by actor id string
    - Stores frozen AttemptRecords and returns them as-is
    - NOT thread-safe; relies on external LockProvider for serialization
    - State is lost on restart; the worst case is a laxer effective limit
    """

    def __init__(self) -> None:
        self._records: dict[str, AttemptRecord] = {}

    def get(self, actor_id: str) -> AttemptRecord | None:
        return self._records.get(actor_id)

    def save(self, record: AttemptRecord) -> None:
        self._records[record.actor_id] = record

    def delete(self, actor_id: str) -> None:
        self._records.pop(actor_id, None)

    def __len__(self) -> int:
        return len(self._records)
