"""HMAC signature construction for gateway payment callbacks.

The signed payload is `order_id + "|" + payment_id`, HMAC-SHA256 keyed by
the gateway key secret, hex-encoded. Field order and delimiter are a wire
contract with the gateway and are pinned as a versioned scheme.
"""

from __future__ import annotations

import hashlib
import hmac
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SignatureScheme:
    """Versioned description of how callback fields are signed."""

    version: str
    delimiter: str

    def payload(self, order_id: str, payment_id: str) -> bytes:
        return f"{order_id}{self.delimiter}{payment_id}".encode()


SCHEME_V1 = SignatureScheme(version="v1", delimiter="|")


def compute_signature(
    order_id: str,
    payment_id: str,
    secret: str,
    scheme: SignatureScheme = SCHEME_V1,
) -> str:
    """Compute the hex HMAC-SHA256 the gateway attaches to a callback."""
    return hmac.new(
        key=secret.encode(),
        msg=scheme.payload(order_id, payment_id),
        digestmod=hashlib.sha256,
    ).hexdigest()


def signatures_match(expected: str, received: str) -> bool:
    """Constant-time comparison over UTF-8 bytes.

    Comparing bytes rather than str keeps compare_digest total: it raises
    TypeError for non-ASCII str arguments.
    """
    return hmac.compare_digest(
        expected.encode("utf-8", "surrogatepass"),
        received.encode("utf-8", "surrogatepass"),
    )
