"""
Configuration management for APKForge.

Provides centralized, type-safe configuration with environment variable overrides
and sensible defaults for the scanner, the packager and the record store.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load .env file if it exists (looks in cwd and parent directories)
load_dotenv()

DEFAULT_IGNORED_DIRECTORIES = (
    ".git",
    ".svn",
    ".hg",
    "node_modules",
    ".gradle",
    ".dart_tool",
    ".pub-cache",
    "Pods",
    "build",
    ".idea",
)


class ScannerConfig(BaseModel):
    """File-tree walker configuration."""

    max_depth: int = Field(default=12, ge=1, description="Maximum directory recursion depth")
    ignored_directories: list[str] = Field(
        default_factory=lambda: list(DEFAULT_IGNORED_DIRECTORIES),
        description="Directory names never descended into",
    )


class PackagingConfig(BaseModel):
    """Archive assembler configuration."""

    output_subpath: Path = Field(
        default=Path("build/outputs/apk/release"),
        description="Output directory relative to the project root",
    )
    output_file_name: str = Field(default="app-release.apk", description="Archive file name")
    dex_size: int = Field(default=8192, ge=16, description="Synthetic classes.dex size in bytes")
    arsc_size: int = Field(default=4096, ge=8, description="Synthetic resources.arsc size in bytes")
    signature_size: int = Field(default=256, ge=1, description="Placeholder CERT.RSA size in bytes")
    icon_size: int = Field(default=48, ge=1, le=512, description="Launcher icon edge in pixels")
    max_flutter_assets: int = Field(default=10, ge=0, description="Flutter asset files copied")
    asset_ignored_directories: list[str] = Field(
        default_factory=lambda: [".git", "__MACOSX"],
        description="Directory names skipped inside the Flutter assets directory",
    )
    asset_max_depth: int = Field(default=12, ge=1, description="Maximum depth below the assets directory")
    max_asset_bytes: int = Field(
        default=5 * 1024 * 1024, ge=1, description="Per-asset byte cap, larger sources are truncated"
    )


class StorageConfig(BaseModel):
    """Storage configuration for project records and extracted trees."""

    base_path: Path = Field(default=Path("./output"), description="Base path for local storage")
    projects_dir: str = Field(default="projects", description="Sub-directory for extracted trees")
    uploads_dir: str = Field(default="uploads", description="Sub-directory for uploaded archives")


class Config(BaseModel):
    """Root configuration for APKForge."""

    project_name: str = Field(default="APKForge", description="Project identifier")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging level"
    )
    log_format: Literal["auto", "console", "json"] = Field(
        default="auto", description="Log renderer; auto picks console on a TTY and JSON otherwise"
    )
    scanner: ScannerConfig = Field(default_factory=ScannerConfig)
    packaging: PackagingConfig = Field(default_factory=PackagingConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)

    model_config = {"extra": "ignore"}

    @property
    def output_path_parts(self) -> tuple[str, ...]:
        """Output location relative to a project root, as path parts."""
        return (*self.packaging.output_subpath.parts, self.packaging.output_file_name)

    @classmethod
    def from_env(cls) -> Config:
        """Create configuration from environment variables."""
        scanner = ScannerConfig(
            max_depth=int(os.environ.get("APKFORGE_MAX_DEPTH", "12")),
        )
        ignored = os.environ.get("APKFORGE_IGNORED_DIRS")
        if ignored:
            scanner.ignored_directories = [d.strip() for d in ignored.split(",") if d.strip()]

        return cls(
            log_level=os.environ.get("APKFORGE_LOG_LEVEL", "INFO"),  # type: ignore
            log_format=os.environ.get("APKFORGE_LOG_FORMAT", "auto"),  # type: ignore
            scanner=scanner,
            packaging=PackagingConfig(
                max_flutter_assets=int(os.environ.get("APKFORGE_MAX_FLUTTER_ASSETS", "10")),
                max_asset_bytes=int(os.environ.get("APKFORGE_MAX_ASSET_BYTES", str(5 * 1024 * 1024))),
            ),
            storage=StorageConfig(
                base_path=Path(os.environ.get("APKFORGE_OUTPUT_PATH", "./output")),
            ),
        )


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Get cached configuration instance."""
    return Config.from_env()
