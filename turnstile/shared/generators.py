"""
Random identifier generators — pure, side-effect-free functions.
"""

from __future__ import annotations

import uuid


def generate_idempotency_key() -> uuid.UUID:
    """Generate a random (v4) idempotency key for a siteverify request.

    Sending the same key with a retried request lets the service treat the
    retry as the original call instead of reporting ``timeout-or-duplicate``.
    """
    return uuid.uuid4()
