"""Per-policy nonce generation."""

from __future__ import annotations

import base64
import secrets
from typing import Callable

import structlog

logger = structlog.get_logger()

NONCE_BYTES = 46

# randomBytes(n) -> (bytes, is_cryptographically_strong)
RandomSource = Callable[[int], tuple[bytes, bool]]


class WeakRandomnessError(RuntimeError):
    """Raised in strict mode when the random source cannot vouch for its bytes."""


def system_random_bytes(n: int) -> tuple[bytes, bool]:
    """Draw ``n`` bytes from the OS CSPRNG."""
    return secrets.token_bytes(n), True


def generate_nonce(
    random_source: RandomSource = system_random_bytes,
    strict: bool = False,
) -> str:
    """Draw NONCE_BYTES random bytes and return them base64-encoded.

    A weak source only logs a warning unless ``strict`` is set, in which
    case WeakRandomnessError is raised and no nonce is returned.
    """
    raw, strong = random_source(NONCE_BYTES)
    if not strong:
        if strict:
            raise WeakRandomnessError("Random source is not cryptographically strong")
        logger.warning("weak_random_nonce", nbytes=len(raw))
    return base64.b64encode(raw).decode("ascii")


def nonce_token(value: str) -> str:
    """Wrap a nonce as a CSP source expression: ``'nonce-<value>'``."""
    return f"'nonce-{value}'"
