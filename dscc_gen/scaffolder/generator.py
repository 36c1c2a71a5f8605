"""Main scaffolding orchestrator.

Takes a resolved ``VizConfig`` or ``ConnectorConfig`` and materializes the
matching template tree into ``<base_path>/<project_name>/``.
"""

from __future__ import annotations

import asyncio
import shlex
import shutil
from pathlib import Path
from typing import Any

from ..config import ConnectorConfig, ProjectChoice, VizConfig
from ..errors import CommandError, ScaffoldError
from ..utils import assert_never, run_command
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Viz build file names (written into package.json config)
# ---------------------------------------------------------------------------

VIZ_FILES: dict[str, str] = {
    "js_file": "index.js",
    "json_file": "index.json",
    "css_file": "index.css",
    "manifest_file": "manifest.json",
}


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Materializes a project directory from a resolved configuration.

    Viz projects get a webpack build script, a manifest with bucket and
    dev-mode placeholders, and a starter visualization.  Connector projects
    get an Apps Script manifest, connector entry points, and the auth
    implementation for the chosen auth type.
    """

    def __init__(
        self,
        config: VizConfig | ConnectorConfig,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()

    # -- Public API --------------------------------------------------------

    async def generate(self) -> Path:
        """Generate the project directory.

        Returns:
            Path to the generated project root.

        Raises:
            ScaffoldError: The target directory already exists.
        """
        project_root = self.config.project_root
        if await asyncio.to_thread(project_root.exists):
            raise ScaffoldError(f"The directory {project_root} already exists.")

        await asyncio.to_thread(project_root.mkdir, parents=True)
        context = self._build_context()

        try:
            if isinstance(self.config, VizConfig):
                await self._render_viz(project_root, context)
            elif isinstance(self.config, ConnectorConfig):
                await self._render_connector(project_root, context)
            else:
                assert_never(self.config)
        except Exception:
            await asyncio.to_thread(shutil.rmtree, project_root, True)
            raise

        return project_root

    async def install_dependencies(self, project_root: Path, timeout: int = 600) -> None:
        """Install the generated project's npm dependencies.

        Raises:
            CommandError: The package manager exited unsuccessfully.
        """
        tool = self.config.build_tool
        returncode, _, stderr = await run_command(
            [tool, "install"], cwd=project_root, timeout=timeout
        )
        if returncode != 0:
            raise CommandError(
                f"{tool} install failed in {project_root}: {stderr}",
                returncode=returncode,
                stderr=stderr,
            )

    def next_steps(self) -> list[str]:
        """Commands the user is likely to run next, in order."""
        run = self.config.script_runner
        steps = [f"cd {shlex.quote(str(self.config.project_root))}"]
        choice = self.config.project_choice
        if choice is ProjectChoice.VIZ:
            steps += [f"{run} start", f"{run} build:dev", f"{run} push:dev"]
        elif choice is ProjectChoice.CONNECTOR:
            if not getattr(self.config, "script_id", None):
                steps.append(f"{run} create")
            steps += [f"{run} push", f"{run} open"]
        else:
            assert_never(choice)
        return steps

    # -- Context building --------------------------------------------------

    def _build_context(self) -> dict[str, Any]:
        """Build the Jinja2 template context from the project config."""
        config = self.config
        context: dict[str, Any] = {
            "project_name": config.project_name,
            "build_tool": config.build_tool,
            "run_prefix": config.script_runner,
        }
        if isinstance(config, VizConfig):
            context.update(VIZ_FILES)
            context["gcs_dev_bucket"] = config.gcs_dev_bucket
            context["gcs_prod_bucket"] = config.gcs_prod_bucket
        elif isinstance(config, ConnectorConfig):
            context.update(
                {
                    "auth_type": config.auth_type.value,
                    "script_id": config.script_id,
                    "manifest": {
                        "logo_url": config.manifest_logo_url,
                        "company": config.manifest_company,
                        "company_url": config.manifest_company_url,
                        "addon_url": config.manifest_addon_url,
                        "support_url": config.manifest_support_url,
                        "description": config.manifest_description,
                        "sources": [
                            source.strip()
                            for source in config.manifest_sources.split(",")
                            if source.strip()
                        ],
                    },
                }
            )
        return context

    # -- Rendering ---------------------------------------------------------

    async def _render_viz(self, root: Path, ctx: dict[str, Any]) -> None:
        await self.renderer.render_tree("viz", root, ctx)

    async def _render_connector(self, root: Path, ctx: dict[str, Any]) -> None:
        """Render the connector tree plus the auth file for the chosen type."""
        skip = ["auth/"]
        if not ctx.get("script_id"):
            skip.append("dot_clasp")
        await self.renderer.render_tree("connector", root, ctx, skip_patterns=skip)
        await self.renderer.render_to_file(
            f"connector/auth/{ctx['auth_type']}.js.j2",
            root / "src" / "auth.js",
            ctx,
        )
