"""
Artifact Assembly Service.

Builds the Android-package-shaped ZIP archive for an analyzed project. The
archive is assembled in memory from a sequence of steps, each returning a
``ServiceResult``; a failed step becomes a warning and the remaining steps
still run. Only when assembling or writing the archive as a whole fails is a
minimal fallback archive written instead.
"""

from __future__ import annotations

import io
import time
import zipfile
from collections.abc import Callable
from pathlib import Path

from ...core.config import PackagingConfig, get_config
from ...core.exceptions import PackagingError
from ...core.logging import get_logger
from ...core.types import ServiceResult
from ...models.analysis import Analysis, Framework
from ..scaffolding.templates import manifest_for
from ..scanner import list_project_files
from . import segments

logger = get_logger(__name__)

Entries = dict[str, bytes]

ICON_DENSITIES = ("mdpi", "hdpi", "xhdpi")

GENERIC_ASSET_CANDIDATES = ("index.html", "app.js", "main.js", "package.json")

FALLBACK_CANDIDATES = ("package.json", "index.html", "app.js", "main.dart", "pubspec.yaml")


class ApkAssembler:
    """Service for assembling the output archive of a build.

    This service:
    1. Renders the Android manifest from the extracted build config
    2. Adds synthetic bytecode and resource-table segments
    3. Adds launcher icons and a bounded set of framework assets
    4. Adds placeholder signing metadata over everything above
    5. Writes the archive under the project's output directory
    """

    def __init__(self, config: PackagingConfig | None = None) -> None:
        """Initialize the assembler.

        Args:
            config: Optional packaging configuration. Defaults to the global config.
        """
        self.config = config or get_config().packaging

    def output_path(self, project_path: Path) -> Path:
        """Location of the archive for a project root."""
        return project_path / self.config.output_subpath / self.config.output_file_name

    def assemble(self, project_path: Path, analysis: Analysis) -> ServiceResult[Path]:
        """Assemble and write the archive for one project.

        Args:
            project_path: Project root directory.
            analysis: Analysis providing the framework and build config.

        Returns:
            ServiceResult carrying the archive path. Step failures are reported
            as warnings; ``metadata`` holds ``entries`` and ``fallback``.

        Raises:
            PackagingError: Not even the fallback archive could be written.
        """
        start_time = time.perf_counter()
        output = self.output_path(project_path)

        try:
            entries, warnings = self._collect_entries(project_path, analysis)
            self._write_archive(output, entries)
            result = ServiceResult.with_warnings(output, warnings, entries=len(entries), fallback=False)
        except Exception as e:
            logger.error("Archive assembly failed, writing fallback", output=str(output), error=str(e))
            entries = self._fallback_entries(project_path)
            self._write_archive(output, entries)
            result = ServiceResult.with_warnings(
                output,
                [f"Packaging failed, wrote minimal archive instead: {e}"],
                entries=len(entries),
                fallback=True,
            )

        result.duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "Archive written",
            output=str(output),
            entries=result.metadata["entries"],
            fallback=result.metadata["fallback"],
            warnings=len(result.warnings),
        )
        return result

    def _collect_entries(self, project_path: Path, analysis: Analysis) -> tuple[Entries, list[str]]:
        steps: list[tuple[str, Callable[[], ServiceResult[Entries]]]] = [
            ("manifest", lambda: self._manifest_step(analysis)),
            ("bytecode", self._bytecode_step),
            ("resources", self._resources_step),
            ("icons", self._icon_step),
            ("assets", lambda: self._asset_step(project_path, analysis.framework)),
        ]

        entries: Entries = {}
        warnings: list[str] = []
        for name, step in steps:
            result = self._run_step(name, step)
            if result.success and result.data:
                entries.update(result.data)
            elif not result.success:
                warnings.append(result.error or f"{name} step failed")
            warnings.extend(result.warnings)

        signing = self._run_step("signing", lambda: self._signing_step(entries))
        if signing.success and signing.data:
            entries.update(signing.data)
        elif not signing.success:
            warnings.append(signing.error or "signing step failed")

        return entries, warnings

    def _run_step(self, name: str, step: Callable[[], ServiceResult[Entries]]) -> ServiceResult[Entries]:
        try:
            return step()
        except (OSError, ValueError, PackagingError) as e:
            logger.warning("Packaging step failed", step=name, error=str(e))
            return ServiceResult.fail(f"Packaging step '{name}' failed: {e}")

    def _manifest_step(self, analysis: Analysis) -> ServiceResult[Entries]:
        manifest = manifest_for(analysis.build_config, analysis.framework)
        return ServiceResult.ok({"AndroidManifest.xml": manifest.encode("utf-8")})

    def _bytecode_step(self) -> ServiceResult[Entries]:
        return ServiceResult.ok({"classes.dex": segments.dex_segment(self.config.dex_size)})

    def _resources_step(self) -> ServiceResult[Entries]:
        return ServiceResult.ok({"resources.arsc": segments.arsc_segment(self.config.arsc_size)})

    def _icon_step(self) -> ServiceResult[Entries]:
        icon = segments.launcher_icon(self.config.icon_size)
        return ServiceResult.ok({f"res/mipmap-{density}/ic_launcher.png": icon for density in ICON_DENSITIES})

    def _signing_step(self, entries: Entries) -> ServiceResult[Entries]:
        manifest = segments.jar_manifest(entries)
        return ServiceResult.ok(
            {
                "META-INF/MANIFEST.MF": manifest.encode("utf-8"),
                "META-INF/CERT.SF": segments.signature_file(manifest).encode("utf-8"),
                "META-INF/CERT.RSA": segments.signature_blob(self.config.signature_size),
            }
        )

    def _asset_step(self, project_path: Path, framework: Framework) -> ServiceResult[Entries]:
        """Copy a framework-specific subset of project files under ``assets/``."""
        sources = self._asset_sources(project_path, framework)
        if not sources:
            return ServiceResult.with_warnings({}, [f"No assets found to package for {framework.value}"])

        entries: Entries = {}
        warnings: list[str] = []
        for source, entry_name in sources:
            read = self._read_capped(project_path / source)
            if read.success and read.data is not None:
                entries[entry_name] = read.data
            else:
                warnings.append(read.error or f"Could not read asset {source}")
            warnings.extend(read.warnings)
        return ServiceResult.with_warnings(entries, warnings)

    def _asset_sources(self, project_path: Path, framework: Framework) -> list[tuple[str, str]]:
        if framework is Framework.FLUTTER:
            files = list_project_files(
                project_path / "assets",
                max_depth=self.config.asset_max_depth,
                ignored_directories=self.config.asset_ignored_directories,
            )
            return [
                (f"assets/{name}", f"assets/flutter_assets/{name}")
                for name in files[: self.config.max_flutter_assets]
            ]
        if framework is Framework.REACT_NATIVE:
            return [("index.js", "assets/index.android.bundle")]
        if framework is Framework.CORDOVA:
            return [("www/index.html", "assets/www/index.html")]

        for candidate in GENERIC_ASSET_CANDIDATES:
            if (project_path / candidate).is_file():
                return [(candidate, f"assets/{candidate}")]
        return []

    def _read_capped(self, path: Path) -> ServiceResult[bytes]:
        """Read a file, truncating it to the per-asset byte cap."""
        limit = self.config.max_asset_bytes
        try:
            with open(path, "rb") as f:
                data = f.read(limit + 1)
        except OSError as e:
            logger.warning("Asset unreadable", path=str(path), error=str(e))
            return ServiceResult.fail(f"Skipped asset {path.name}: {e.strerror or e}")

        if len(data) > limit:
            return ServiceResult.with_warnings(
                data[:limit], [f"Asset {path.name} truncated to {limit} bytes"]
            )
        return ServiceResult.ok(data)

    def _fallback_entries(self, project_path: Path) -> Entries:
        entries: Entries = {}
        for candidate in FALLBACK_CANDIDATES:
            read = self._read_capped(project_path / candidate)
            if read.success and read.data is not None:
                entries[candidate] = read.data
        return entries

    def _write_archive(self, output: Path, entries: Entries) -> None:
        """Write entries as a deflated ZIP.

        Raises:
            PackagingError: The archive file could not be written.
        """
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for name, data in entries.items():
                archive.writestr(name, data)

        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_bytes(buffer.getvalue())
        except OSError as e:
            raise PackagingError(
                message=f"Failed to write archive to {output}",
                operation="write_archive",
                entry_name=output.name,
                cause=e,
            ) from e
