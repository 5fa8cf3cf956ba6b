from .werkzeug_verifier import WerkzeugCredentialVerifier

__all__ = ["WerkzeugCredentialVerifier"]
