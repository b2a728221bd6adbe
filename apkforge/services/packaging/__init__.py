"""Archive assembler and synthetic segment builders."""

from .service import ApkAssembler

__all__ = ["ApkAssembler"]
