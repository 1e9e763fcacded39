from datetime import datetime, timedelta

from payments_security.application.ports import AttemptStore
from payments_security.domain.entities import AttemptRecord
from payments_security.infrastructure.attempt_store import InMemoryAttemptStore


class TestInMemoryAttemptStore:
    def test_implements_attempt_store_interface(self) -> None:
        assert isinstance(InMemoryAttemptStore(), AttemptStore)

    def test_get_unknown_actor_returns_none(self) -> None:
        assert InMemoryAttemptStore().get("u1") is None

    def test_save_then_get(self, fixed_time: datetime) -> None:
        store = InMemoryAttemptStore()
        record = AttemptRecord.first_attempt("u1", fixed_time)

        store.save(record)

        assert store.get("u1") == record

    def test_save_replaces_existing_record(self, fixed_time: datetime) -> None:
        store = InMemoryAttemptStore()
        first = AttemptRecord.first_attempt("u1", fixed_time)
        store.save(first)

        store.save(first.register_attempt(fixed_time + timedelta(minutes=1)))

        saved = store.get("u1")
        assert saved is not None
        assert saved.count == 2
        assert len(store) == 1

    def test_delete_removes_record(self, fixed_time: datetime) -> None:
        store = InMemoryAttemptStore()
        store.save(AttemptRecord.first_attempt("u1", fixed_time))

        store.delete("u1")

        assert store.get("u1") is None

    def test_delete_unknown_actor_is_noop(self) -> None:
        store = InMemoryAttemptStore()

        store.delete("u1")

        assert len(store) == 0
