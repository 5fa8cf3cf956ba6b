"""Application services (session lifecycle and email verification)."""
