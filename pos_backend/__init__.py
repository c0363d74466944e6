"""Point-of-sale backend: JWT auth with refresh tokens, role-gated product inventory."""

__version__ = "0.1.0"
