from __future__ import annotations

import secrets
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

# Gateway limit on the receipt field
MAX_RECEIPT_LENGTH = 40
RECEIPT_PREFIX = "rcpt"


def generate_secure_receipt(actor_id: object, reference_id: object, now: datetime) -> str:
    """Build an unguessable receipt id for a new gateway order.

    Format: rcpt_<actor[-6:]>_<reference[-6:]>_<epoch-ms[-8:]>_<6 hex chars>,
    at most 40 characters.
    """
    epoch_ms = str(int(now.timestamp() * 1000))
    receipt = "_".join(
        [
            RECEIPT_PREFIX,
            str(actor_id)[-6:],
            str(reference_id)[-6:],
            epoch_ms[-8:],
            secrets.token_hex(3),
        ]
    )
    return receipt[:MAX_RECEIPT_LENGTH]
