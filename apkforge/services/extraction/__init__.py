"""Framework-specific configuration extractors."""

from .service import (
    EXTRACTOR_REGISTRY,
    AndroidExtractor,
    ConfigExtractor,
    CordovaExtractor,
    Extraction,
    FlutterExtractor,
    GenericExtractor,
    ReactNativeExtractor,
    get_extractor,
    register_extractor,
)

__all__ = [
    "EXTRACTOR_REGISTRY",
    "AndroidExtractor",
    "ConfigExtractor",
    "CordovaExtractor",
    "Extraction",
    "FlutterExtractor",
    "GenericExtractor",
    "ReactNativeExtractor",
    "get_extractor",
    "register_extractor",
]
