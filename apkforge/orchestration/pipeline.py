"""
Build pipeline orchestration.

Runs one build as a strict sequence of stages:

    idle -> validating_requirements -> synthesizing_scaffold
         -> validating_structure -> packaging -> completed

Either validation stage may move the build to ``aborted`` instead. There is
no retry state; a caller re-invokes ``build`` from the start. Every stage
depends on the filesystem state the previous one left behind, so stages are
never run in parallel. Builds of distinct project roots share no state and
may run concurrently.
"""

from __future__ import annotations

import asyncio
import time
from pathlib import Path

from ..core.config import Config, get_config
from ..core.logging import get_logger
from ..models.analysis import Analysis
from ..models.build import BuildResult, BuildStage
from ..services.packaging import ApkAssembler
from ..services.scaffolding import ScaffoldingSynthesizer
from ..services.validation import validate_requirements, validate_structure
from .progress import ProgressObserver, ProgressReporter

logger = get_logger(__name__)


class ApkBuilder:
    """Turns an analyzed project tree into an archive.

    The builder holds configuration and stateless collaborators only; all
    per-build context is passed to :meth:`build`.
    """

    def __init__(
        self,
        config: Config | None = None,
        synthesizer: ScaffoldingSynthesizer | None = None,
        assembler: ApkAssembler | None = None,
    ) -> None:
        """Initialize the builder.

        Args:
            config: Optional configuration. Defaults to the global config.
            synthesizer: Scaffolding synthesizer override.
            assembler: Archive assembler override.
        """
        self.config = config or get_config()
        self.synthesizer = synthesizer or ScaffoldingSynthesizer()
        self.assembler = assembler or ApkAssembler(self.config.packaging)

    async def build(
        self,
        project_path: Path,
        analysis: Analysis,
        progress: ProgressObserver | None = None,
    ) -> BuildResult:
        """Run the build state machine for one project.

        Args:
            project_path: Project root directory.
            analysis: Fresh analysis of ``project_path``.
            progress: Optional observer called at 10, 30, 70 and 100 percent.

        Returns:
            BuildResult: never raises; failures end in the ``aborted`` stage
            with populated ``errors``.
        """
        start_time = time.perf_counter()
        result = BuildResult()
        reporter = ProgressReporter(progress)

        try:
            reporter.report(10, "Starting APK build process...")
            logger.info("Starting build", project_path=str(project_path), framework=analysis.framework.value)

            result.stage = BuildStage.VALIDATING_REQUIREMENTS
            requirement_errors = validate_requirements(analysis)
            if requirement_errors:
                result.abort(*requirement_errors)
                reporter.report(100, "Build validation failed - missing requirements")
                return result

            result.stage = BuildStage.SYNTHESIZING_SCAFFOLD
            created = await asyncio.to_thread(self.synthesizer.synthesize, project_path, analysis)
            for path in created:
                result.add_log(f"Created {path.relative_to(project_path).as_posix()}")
            reporter.report(30, "Project setup completed...")

            result.stage = BuildStage.VALIDATING_STRUCTURE
            structure_errors = validate_structure(project_path, analysis.framework)
            if structure_errors:
                result.abort("Project structure validation failed after setup", *structure_errors)
                reporter.report(100, "Project setup validation failed")
                return result

            result.stage = BuildStage.PACKAGING
            reporter.report(70, "Packaging APK file...")
            packaged = await asyncio.to_thread(self.assembler.assemble, project_path, analysis)
            for warning in packaged.warnings:
                result.add_log(f"Warning: {warning}")

            apk_path = packaged.data
            if apk_path is None:
                raise RuntimeError(packaged.error or "assembler returned no archive")
            result.complete(apk_path, apk_path.stat().st_size)

            result.add_log("APK package created successfully")
            result.add_log(f"Framework: {analysis.framework.value}")
            result.add_log(f"Package size: {result.apk_size_mb:.1f} MB")
            result.add_log(f"Files included: {analysis.project_stats.total_files} files")
            result.add_log(f"Build target: Android API {analysis.build_config.target_sdk}")

            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.info(
                "Build completed",
                apk_path=str(apk_path),
                apk_size=result.apk_size,
                fallback=packaged.metadata.get("fallback", False),
                duration_ms=duration_ms,
            )
            reporter.report(100, "APK build completed successfully!")

        except Exception as e:
            logger.error("Build failed", project_path=str(project_path), stage=result.stage.value, error=str(e))
            result.abort(f"Build failed: {e}")
            reporter.report(100, "Build process failed")

        return result
