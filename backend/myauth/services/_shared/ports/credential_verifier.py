from __future__ import annotations

from typing import Protocol


class CredentialVerifier(Protocol):
    """Compare a submitted plaintext secret against a stored hash."""

    def verify(self, plaintext: str, stored_hash: str) -> bool: ...
