"""
Scaffolding Synthesis Service.

Materializes every required-but-absent file of an analysis with a canonical
template chosen by file name. Re-running against the same missing-file set
rewrites identical content.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path, PurePosixPath

from ...core.logging import get_logger
from ...models.analysis import Analysis
from . import templates

logger = get_logger(__name__)

DIRECTORY_PLACEHOLDER = ".gitkeep"

Renderer = Callable[[Analysis], str]

TEMPLATES: dict[str, Renderer] = {
    "AndroidManifest.xml": lambda a: templates.manifest_for(a.build_config, a.framework),
    "package.json": lambda a: templates.package_json(a.build_config),
    "config.xml": lambda a: templates.config_xml(a.build_config, a.framework),
    "pubspec.yaml": lambda a: templates.pubspec_yaml(a.build_config),
    "main.dart": lambda a: templates.main_dart(a.build_config),
    "index.html": lambda a: templates.index_html(a.build_config),
}


def render_template(relative_path: str, analysis: Analysis) -> str | None:
    """Render the template for a checklist path, or None when no template matches.

    Gradle descriptors pick the module-level body when the path names an
    ``app/`` module and the top-level body otherwise.
    """
    path = relative_path.replace("\\", "/")
    name = PurePosixPath(path).name
    if name.startswith("build.gradle"):
        if "app/build.gradle" in path:
            return templates.app_build_gradle(analysis.build_config, analysis.framework)
        return templates.project_build_gradle()
    renderer = TEMPLATES.get(name)
    return renderer(analysis) if renderer else None


class ScaffoldingSynthesizer:
    """Writes placeholder configuration files into a project tree."""

    def synthesize(self, project_path: Path, analysis: Analysis) -> list[Path]:
        """Create every file listed in ``analysis.missing_files``.

        Args:
            project_path: Project root directory.
            analysis: Analysis whose missing files and build config drive the templates.

        Returns:
            list[Path]: Files written, in missing-file order.
        """
        written: list[Path] = []

        for missing in analysis.missing_files:
            target = project_path / missing

            if not PurePosixPath(missing).suffix:
                # Extension-less checklist entries name directories
                target.mkdir(parents=True, exist_ok=True)
                placeholder = target / DIRECTORY_PLACEHOLDER
                placeholder.write_text("", encoding="utf-8")
                written.append(placeholder)
                logger.info("Created scaffold directory", path=missing)
                continue

            content = render_template(missing, analysis)
            if content is None:
                logger.warning("No template for missing file", path=missing)
                continue

            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
            written.append(target)
            logger.info("Created scaffold file", path=missing, framework=analysis.framework.value)

        return written
