"""
Project Analysis Service.

Walks a project tree, classifies its framework and runs the matching config
extractor, producing a fresh ``Analysis`` snapshot on every call.
"""

from __future__ import annotations

import asyncio
import time
from pathlib import Path

from ...core.config import Config, get_config
from ...core.logging import get_logger
from ...models.analysis import (
    Analysis,
    Classification,
    Framework,
    ProjectStats,
    default_build_config,
)
from ..classifier import classify, normalize
from ..extraction import get_extractor
from ..scanner import list_project_files

logger = get_logger(__name__)


class ProjectAnalyzer:
    """Service for analyzing extracted mobile project trees.

    This service:
    1. Lists the project's files
    2. Classifies the framework, language and project type
    3. Runs the framework's config extractor
    4. Assembles an immutable Analysis record

    Instances hold configuration only, so one analyzer can serve any number
    of projects concurrently.
    """

    def __init__(self, config: Config | None = None) -> None:
        """Initialize the analyzer.

        Args:
            config: Optional configuration. Defaults to the cached global config.
        """
        self.config = config or get_config()

    async def analyze(self, project_path: Path) -> Analysis:
        """Analyze a project tree.

        Args:
            project_path: Root directory of the extracted project.

        Returns:
            Analysis: never raises; failures are reported through ``errors``.
        """
        return await asyncio.to_thread(self.analyze_tree, project_path)

    def analyze_tree(self, project_path: Path) -> Analysis:
        """Synchronous body of :meth:`analyze`."""
        start_time = time.perf_counter()
        classification = Classification(framework=Framework.GENERIC_MOBILE)
        total_files = 0

        try:
            logger.info("Starting project analysis", project_path=str(project_path))

            files = list_project_files(
                project_path,
                max_depth=self.config.scanner.max_depth,
                ignored_directories=self.config.scanner.ignored_directories,
            )
            total_files = len(files)

            classification = normalize(classify(files))
            extraction = get_extractor(classification.framework).extract(project_path, files)

            analysis = Analysis(
                framework=classification.framework,
                language=classification.language,
                project_type=classification.project_type,
                missing_files=tuple(extraction.missing_files),
                dependencies=tuple(extraction.dependencies),
                build_config=extraction.build_config,
                project_stats=ProjectStats(
                    total_files=total_files,
                    source_files=extraction.source_files,
                    dependencies=len(extraction.dependencies),
                    target_sdk=extraction.build_config.target_sdk if extraction.sdk_found else None,
                    min_sdk=extraction.build_config.min_sdk if extraction.sdk_found else None,
                ),
                errors=tuple(extraction.errors),
            )

            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.info(
                "Project analysis completed",
                framework=analysis.framework.value,
                language=analysis.language.value,
                total_files=total_files,
                missing=len(analysis.missing_files),
                diagnostics=len(analysis.errors),
                duration_ms=duration_ms,
            )
            return analysis

        except Exception as e:
            logger.error("Project analysis failed", project_path=str(project_path), error=str(e))
            framework = classification.framework
            return Analysis(
                framework=framework,
                language=classification.language,
                project_type=classification.project_type,
                build_config=default_build_config(framework),
                project_stats=ProjectStats(total_files=total_files),
                errors=(f"Analysis failed: {e}",),
            )
