"""
Ingestion Service.

Handles project archive intake: validation, hashing, a copy of the upload
and extraction into a per-project directory.
"""

from __future__ import annotations

import asyncio
import hashlib
import shutil
import time
import uuid
import zipfile
from pathlib import Path, PurePosixPath

from pydantic import BaseModel, Field

from ...core.config import Config, get_config
from ...core.exceptions import IngestionError, ValidationError
from ...core.logging import get_logger

logger = get_logger(__name__)


class IngestedProject(BaseModel):
    """Output from the ingestion service."""

    project_id: str = Field(description="Identifier of the project directory")
    name: str = Field(description="Archive name without the .zip suffix")
    original_file_name: str
    file_size: int = Field(ge=0, description="Archive size in bytes")
    sha256_hash: str
    upload_path: Path = Field(description="Stored copy of the uploaded archive")
    project_path: Path = Field(description="Root of the extracted project tree")
    extracted_files: int = Field(default=0, ge=0)


class IngestionService:
    """Service for accepting uploaded project archives.

    This service:
    1. Validates that the upload is a readable ZIP archive
    2. Computes its SHA-256 hash
    3. Keeps a copy under the uploads directory
    4. Extracts it into ``<projects>/<project_id>`` without letting any
       member escape that directory
    """

    def __init__(self, config: Config | None = None) -> None:
        """Initialize the ingestion service.

        Args:
            config: Optional configuration. Defaults to the global config.
        """
        self.config = config or get_config()
        storage = self.config.storage
        self.projects_root = storage.base_path / storage.projects_dir
        self.uploads_root = storage.base_path / storage.uploads_dir

    @staticmethod
    def new_project_id() -> str:
        """Generate a short project identifier."""
        return uuid.uuid4().hex[:8]

    def project_directory(self, project_id: str) -> Path:
        """Directory a project's archive is extracted into."""
        return self.projects_root / project_id

    def _compute_file_hash(self, file_path: Path) -> str:
        sha256 = hashlib.sha256()
        with open(file_path, "rb") as f:
            while chunk := f.read(8192):
                sha256.update(chunk)
        return sha256.hexdigest()

    def validate_archive(self, archive_path: Path) -> None:
        """Validate that the file is a ZIP archive.

        Raises:
            ValidationError: Missing file, wrong extension or not a ZIP container.
        """
        if not archive_path.is_file():
            raise ValidationError(
                message=f"Archive not found: {archive_path}",
                field_name="archive_path",
            )

        if archive_path.suffix.lower() != ".zip":
            raise ValidationError(
                message="Only ZIP files are supported",
                field_name="archive_path",
                actual_value=archive_path.name,
            )

        if not zipfile.is_zipfile(archive_path):
            raise ValidationError(
                message="Invalid archive: not a valid ZIP file",
                field_name="archive_path",
                actual_value=archive_path.name,
            )

    def extract(self, archive_path: Path, destination: Path) -> int:
        """Extract every member of an archive below ``destination``.

        Members with absolute paths or ``..`` segments are rejected before
        anything is written.

        Returns:
            int: Number of files extracted.

        Raises:
            IngestionError: A member would escape the destination or the
                archive is corrupt.
        """
        destination = destination.resolve()
        try:
            with zipfile.ZipFile(archive_path, "r") as zf:
                members = zf.infolist()
                for member in members:
                    self._check_member(member.filename, destination, archive_path)
                destination.mkdir(parents=True, exist_ok=True)
                zf.extractall(destination)
        except zipfile.BadZipFile as e:
            raise IngestionError(
                message="Invalid archive: corrupt ZIP data",
                operation="extract",
                archive_path=str(archive_path),
                cause=e,
            ) from e

        return sum(1 for member in members if not member.is_dir())

    def _check_member(self, name: str, destination: Path, archive_path: Path) -> None:
        member = PurePosixPath(name.replace("\\", "/"))
        target = (destination / member).resolve()
        if member.is_absolute() or ".." in member.parts or not target.is_relative_to(destination):
            raise IngestionError(
                message=f"Archive member escapes the project directory: {name}",
                operation="extract",
                archive_path=str(archive_path),
            )

    @staticmethod
    def project_root(extracted: Path) -> Path:
        """Descend into a single wrapping directory, as produced by most zip tools."""
        children = [p for p in extracted.iterdir() if p.name != "__MACOSX"]
        if len(children) == 1 and children[0].is_dir():
            return children[0]
        return extracted

    async def ingest(self, archive_path: Path, project_id: str | None = None) -> IngestedProject:
        """Validate, store and extract an uploaded project archive.

        Args:
            archive_path: Path to the ``.zip`` upload.
            project_id: Optional identifier; a fresh one is generated otherwise.

        Returns:
            IngestedProject describing the extracted tree.

        Raises:
            ValidationError: The upload is not a ZIP archive.
            IngestionError: Extraction failed.
        """
        return await asyncio.to_thread(self._ingest, archive_path, project_id or self.new_project_id())

    def _ingest(self, archive_path: Path, project_id: str) -> IngestedProject:
        start_time = time.perf_counter()
        logger.info("Starting archive ingestion", archive_path=str(archive_path), project_id=project_id)

        self.validate_archive(archive_path)
        sha256 = self._compute_file_hash(archive_path)

        self.uploads_root.mkdir(parents=True, exist_ok=True)
        upload_path = self.uploads_root / f"{int(time.time() * 1000)}_{archive_path.name}"
        try:
            shutil.copy2(archive_path, upload_path)
        except OSError as e:
            raise IngestionError(
                message=f"Failed to store upload {archive_path.name}",
                operation="store_upload",
                archive_path=str(archive_path),
                cause=e,
            ) from e

        destination = self.project_directory(project_id)
        extracted_files = self.extract(archive_path, destination)
        project_path = self.project_root(destination)

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "Archive ingested",
            project_id=project_id,
            sha256=sha256[:16],
            files=extracted_files,
            duration_ms=duration_ms,
        )

        name = archive_path.name
        return IngestedProject(
            project_id=project_id,
            name=name[: -len(".zip")] if name.lower().endswith(".zip") else name,
            original_file_name=name,
            file_size=archive_path.stat().st_size,
            sha256_hash=sha256,
            upload_path=upload_path,
            project_path=project_path,
            extracted_files=extracted_files,
        )
