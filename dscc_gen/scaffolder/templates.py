"""Jinja2 template rendering for project scaffolding.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``dscc_gen/scaffolder/templates/`` directory and renders them with
project-specific context data.  Supports single-file rendering and batch
tree rendering.
"""

from __future__ import annotations

import asyncio
import re
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

# Template files cannot be dotfiles inside the package, so ``dot_gitignore.j2``
# renders to ``.gitignore``.
_DOTFILE_PREFIX = "dot_"

# npm package name used when a project name has no letters or digits.
FALLBACK_PACKAGE_NAME = "dscc-project"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for project scaffolding.

    The renderer discovers ``.j2`` template files under a configurable
    template directory.  Templates are rendered with a context dictionary that
    contains the resolved project configuration.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self.env.filters["slugify"] = _slugify_filter

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"viz/src/index.js.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    # -- File-based rendering (async) --------------------------------------

    async def render_to_file(
        self,
        template_path: str,
        output_path: str | Path,
        context: dict[str, Any],
    ) -> Path:
        """Render a template and write the result to *output_path*.

        Parent directories are created automatically.
        """
        content = self.render(template_path, context)
        out = Path(output_path)
        await asyncio.to_thread(_write_file, out, content)
        return out

    async def render_tree(
        self,
        template_prefix: str,
        output_dir: str | Path,
        context: dict[str, Any],
        *,
        skip_patterns: list[str] | None = None,
    ) -> list[Path]:
        """Render every ``*.j2`` file under *template_prefix* to *output_dir*.

        The directory structure is preserved: ``viz/src/index.js.j2`` rendered
        with ``template_prefix="viz"`` and ``output_dir="/tmp/my_viz"`` writes
        ``/tmp/my_viz/src/index.js``.

        Args:
            template_prefix: Subdirectory inside the template root to scan.
            output_dir: Target directory where rendered files are written.
            context: Template context variables.
            skip_patterns: Optional list of path substrings to skip (e.g.
                ``["auth/"]`` for templates rendered separately).

        Returns:
            List of written file paths.
        """
        skip_patterns = skip_patterns or []
        written: list[Path] = []
        out_base = Path(output_dir)
        strip = len(template_prefix.rstrip("/")) + 1

        for template_key in self.list_templates(template_prefix):
            rel_str = template_key[strip:]

            if any(pat in rel_str for pat in skip_patterns):
                continue

            output_file = out_base / output_name(rel_str)
            path = await self.render_to_file(template_key, output_file, context)
            written.append(path)

        return written

    # -- Utility -----------------------------------------------------------

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return a sorted list of all ``.j2`` template paths under *prefix*.

        Paths are relative to the template root directory.
        """
        search_dir = self.template_dir / prefix if prefix else self.template_dir
        if not search_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()
            for p in search_dir.rglob("*.j2")
        )


def output_name(template_rel_path: str) -> str:
    """Map a template's relative path to the path of the file it renders.

    Examples::

        output_name("src/index.js.j2") -> "src/index.js"
        output_name("dot_gitignore.j2") -> ".gitignore"
    """
    parts = template_rel_path.split("/")
    name = parts[-1]
    if name.endswith(".j2"):
        name = name[: -len(".j2")]
    if name.startswith(_DOTFILE_PREFIX):
        name = "." + name[len(_DOTFILE_PREFIX):]
    return "/".join([*parts[:-1], name])


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _slugify_filter(value: str) -> str:
    """Convert a string to an npm-safe package name.

    Names made only of dashes and underscores have no usable characters and
    fall back to ``FALLBACK_PACKAGE_NAME``.
    """
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower().strip()).strip("-")
    return slug or FALLBACK_PACKAGE_NAME


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
