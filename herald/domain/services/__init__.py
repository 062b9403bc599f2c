"""
Domain Services Package

Architectural Intent:
- Contains stateless-per-call domain logic that does not belong to an entity
"""

from herald.domain.services.emission import Args, Emission, Middleware, Proceed

__all__ = [
    "Args",
    "Emission",
    "Middleware",
    "Proceed",
]
