from __future__ import annotations

from werkzeug.security import check_password_hash

from myauth.services._shared.ports import CredentialVerifier


class WerkzeugCredentialVerifier(CredentialVerifier):
    """Check passwords hashed by :func:`werkzeug.security.generate_password_hash`."""

    def verify(self, plaintext: str, stored_hash: str) -> bool:
        if not plaintext or not stored_hash:
            return False
        return check_password_hash(stored_hash, plaintext)
