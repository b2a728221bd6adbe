"""
End-to-end conversion flow.

Upload, analysis and build of one project archive, each step persisting the
project record and its build log through a ``ProjectStore``. The steps live
on ``ProjectConversion`` so they can be driven directly; the Prefect tasks
and flow below wrap them for orchestrated runs.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from prefect import flow, get_run_logger, task
from pydantic import BaseModel, Field

from ..core.config import Config, get_config
from ..core.exceptions import PipelineError
from ..core.logging import get_logger, project_context
from ..core.types import StageResult, StageStatus
from ..models.analysis import Analysis
from ..models.build import BuildResult
from ..models.project import ProjectRecord, ProjectStatus
from ..services.analysis import ProjectAnalyzer
from ..services.ingestion import IngestionService
from ..storage import LocalStorageBackend, ProjectStore
from .pipeline import ApkBuilder
from .progress import ProgressRecorder

logger = get_logger(__name__)


class ConversionResult(BaseModel):
    """Result of a complete conversion run."""

    project_id: str
    success: bool
    started_at: datetime
    completed_at: datetime

    project: ProjectRecord | None = None
    analysis: Analysis | None = None
    build_result: BuildResult | None = None
    stages: list[StageResult] = Field(default_factory=list)

    error: str | None = None
    failed_stage: str | None = None


class ProjectConversion:
    """Upload, analyze and build steps for stored projects."""

    def __init__(
        self,
        store: ProjectStore,
        config: Config | None = None,
        ingestion: IngestionService | None = None,
        analyzer: ProjectAnalyzer | None = None,
        builder: ApkBuilder | None = None,
    ) -> None:
        self.config = config or get_config()
        self.store = store
        self.ingestion = ingestion or IngestionService(self.config)
        self.analyzer = analyzer or ProjectAnalyzer(self.config)
        self.builder = builder or ApkBuilder(self.config)

    def project_path(self, project_id: str) -> Path:
        """Root of a project's extracted tree."""
        return self.ingestion.project_root(self.ingestion.project_directory(project_id))

    async def _require(self, project_id: str, stage: str) -> ProjectRecord:
        record = await self.store.get(project_id)
        if record is None:
            raise PipelineError(message="Project not found", stage=stage, project_id=project_id)
        return record

    async def upload(self, archive_path: Path, project_id: str | None = None) -> ProjectRecord:
        """Register an uploaded archive and extract it.

        Raises:
            ValidationError: The upload is not a ZIP archive.
            IngestionError: Extraction failed.
        """
        project_id = project_id or self.ingestion.new_project_id()
        with project_context(project_id, step="upload"):
            return await self._upload(archive_path, project_id)

    async def _upload(self, archive_path: Path, project_id: str) -> ProjectRecord:
        name = archive_path.name
        file_size = archive_path.stat().st_size if archive_path.is_file() else 0

        await self.store.save(
            ProjectRecord(
                project_id=project_id,
                name=name.removesuffix(".zip"),
                original_file_name=name,
                file_size=file_size,
                status=ProjectStatus.UPLOADED,
                progress=10,
            )
        )
        await self.store.add_log(project_id, f"Project uploaded: {name} ({file_size} bytes)")
        await self.store.add_log(project_id, "Extracting ZIP file...")

        try:
            ingested = await self.ingestion.ingest(archive_path, project_id)
        except Exception as e:
            await self.store.add_log(project_id, f"Upload failed: {e}", level="error")
            await self.store.update(project_id, status=ProjectStatus.ERROR, progress=0)
            raise

        await self.store.add_log(project_id, "ZIP file extracted successfully")
        return await self.store.update(
            project_id,
            status=ProjectStatus.EXTRACTED,
            progress=25,
            file_size=ingested.file_size,
        )

    async def analyze(self, project_id: str) -> Analysis:
        """Analyze a stored project and record the outcome."""
        with project_context(project_id, step="analyze"):
            return await self._analyze(project_id)

    async def _analyze(self, project_id: str) -> Analysis:
        await self._require(project_id, "analyze")
        await self.store.update(project_id, status=ProjectStatus.ANALYZING, progress=10)
        await self.store.add_log(project_id, "Starting project analysis...")

        analysis = await self.analyzer.analyze(self.project_path(project_id))

        await self.store.update(
            project_id,
            status=ProjectStatus.ANALYZED,
            progress=50,
            framework=analysis.framework,
            build_config=analysis.build_config,
            project_stats=analysis.project_stats,
        )
        await self.store.add_log(project_id, f"Analysis complete. Framework: {analysis.framework.value}")
        for error in analysis.errors:
            await self.store.add_log(project_id, error, level="warning")
        return analysis

    async def build(self, project_id: str) -> BuildResult:
        """Re-analyze and build a stored project, recording progress and results."""
        with project_context(project_id, step="build"):
            return await self._build(project_id)

    async def _build(self, project_id: str) -> BuildResult:
        await self._require(project_id, "build")
        await self.store.update(project_id, status=ProjectStatus.BUILDING, progress=60)
        await self.store.add_log(project_id, "Starting APK build...")

        project_path = self.project_path(project_id)
        analysis = await self.analyzer.analyze(project_path)

        recorder = ProgressRecorder()
        result = await self.builder.build(project_path, analysis, recorder)

        for _, message in recorder.events:
            await self.store.add_log(project_id, message)

        if result.success:
            await self.store.update(
                project_id,
                status=ProjectStatus.COMPLETED,
                progress=100,
                apk_path=str(result.apk_path),
                apk_size=result.apk_size,
            )
        else:
            await self.store.update(project_id, status=ProjectStatus.ERROR, progress=100)

        for line in result.logs:
            await self.store.add_log(project_id, line)
        for error in result.errors:
            await self.store.add_log(project_id, error, level="error")
        return result


def get_conversion() -> ProjectConversion:
    """Create a conversion backed by local record storage."""
    config = get_config()
    return ProjectConversion(ProjectStore(LocalStorageBackend(config.storage.base_path)), config)


@task(name="ingest_project", description="Validate and extract a project archive")
async def ingest_project(archive_path: Path, project_id: str) -> ProjectRecord:
    """Ingest an uploaded project archive."""
    run_logger = get_run_logger()
    run_logger.info(f"Ingesting archive: {archive_path}")
    record = await get_conversion().upload(archive_path, project_id)
    run_logger.info(f"Extracted project {record.project_id}")
    return record


@task(name="analyze_project", description="Classify a project and extract its build config")
async def analyze_project(project_id: str) -> Analysis:
    """Analyze an extracted project."""
    run_logger = get_run_logger()
    analysis = await get_conversion().analyze(project_id)
    run_logger.info(f"Framework: {analysis.framework.value}, missing files: {len(analysis.missing_files)}")
    return analysis


@task(name="build_project", description="Synthesize scaffolding and assemble the archive")
async def build_project(project_id: str) -> BuildResult:
    """Build an analyzed project."""
    run_logger = get_run_logger()
    result = await get_conversion().build(project_id)
    run_logger.info(f"Build {'succeeded' if result.success else 'failed'} at stage {result.stage.value}")
    return result


@flow(
    name="apkforge-convert",
    description="Upload, analyze and build a mobile project archive",
    version="1.0.0",
    retries=0,
)
async def convert_project_flow(archive_path: Path, project_id: str | None = None) -> ConversionResult:
    """Execute the complete conversion for one archive.

    Args:
        archive_path: Path to the uploaded ``.zip``.
        project_id: Optional identifier; generated when omitted.

    Returns:
        ConversionResult with the stored record, analysis, build result and
        per-stage report.
    """
    project_id = project_id or IngestionService.new_project_id()
    run_logger = get_run_logger()
    started_at = datetime.utcnow()
    stages: list[StageResult] = []
    analysis: Analysis | None = None
    build_result: BuildResult | None = None

    run_logger.info(f"Starting conversion. Project ID: {project_id}")

    stage = StageResult(stage_name="ingest", status=StageStatus.RUNNING)
    stages.append(stage)
    try:
        await ingest_project(archive_path, project_id)
        stage.mark_completed()

        stage = StageResult(stage_name="analyze", status=StageStatus.RUNNING)
        stages.append(stage)
        analysis = await analyze_project(project_id)
        stage.mark_completed(framework=analysis.framework.value, diagnostics=len(analysis.errors))

        stage = StageResult(stage_name="build", status=StageStatus.RUNNING)
        stages.append(stage)
        build_result = await build_project(project_id)
        if build_result.success:
            stage.mark_completed(apk_size=build_result.apk_size)
        else:
            stage.mark_failed("; ".join(build_result.errors))

        success = build_result.success
        error = None if success else stage.error_message
        failed_stage = None if success else stage.stage_name

    except Exception as e:
        run_logger.error(f"Conversion failed: {e}")
        logger.error("Conversion failed", project_id=project_id, stage=stage.stage_name, error=str(e))
        stage.mark_failed(str(e))
        success, error, failed_stage = False, str(e), stage.stage_name

    record = await get_conversion().store.get(project_id)
    return ConversionResult(
        project_id=project_id,
        success=success,
        started_at=started_at,
        completed_at=datetime.utcnow(),
        project=record,
        analysis=analysis,
        build_result=build_result,
        stages=stages,
        error=error,
        failed_stage=failed_stage,
    )
