"""Registration and email-verification flow."""

from .dto import RegistrationIn, RegistrationOut, ResendOut, VerificationConfig, VerificationOut
from .service import VerificationService

__all__ = [
    "VerificationService",
    "VerificationConfig",
    "RegistrationIn",
    "RegistrationOut",
    "VerificationOut",
    "ResendOut",
]
