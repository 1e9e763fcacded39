"""Domain entities - Objects with identity and lifecycle."""

from payments_security.domain.entities.attempt_record import AttemptRecord

__all__ = [
    "AttemptRecord",
]
