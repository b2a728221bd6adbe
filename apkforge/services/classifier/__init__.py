"""Framework classifier."""

from .service import classify, normalize

__all__ = ["classify", "normalize"]
