"""Shared pytest fixtures for the dscc-gen test suite.

Provides reusable fixtures for:
- Settings rooted at a temporary base path
- A scripted prompter that answers questions without a terminal
- Patched gsutil presence and bucket checks
- Resolved viz and connector configurations
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from dscc_gen.config import AuthType, ConnectorConfig, Settings, VizConfig
from dscc_gen.questions import Question


# ---------------------------------------------------------------------------
# Prompting
# ---------------------------------------------------------------------------


class ScriptedPrompter:
    """Answers questions from a per-field queue and records what was asked."""

    def __init__(self, answers: dict[str, list[str]] | None = None) -> None:
        self.answers = {name: list(queue) for name, queue in (answers or {}).items()}
        self.asked: list[Question] = []
        self.rejections: list[tuple[str, str]] = []

    async def ask(self, question: Question) -> str:
        self.asked.append(question)
        queue = self.answers.get(question.name)
        if not queue:
            raise AssertionError(f"Unexpected question: {question.name}")
        return queue.pop(0)

    def reject(self, question: Question, message: str) -> None:
        self.rejections.append((question.name, message))

    @property
    def asked_names(self) -> list[str]:
        return [question.name for question in self.asked]


@pytest.fixture
def make_prompter():
    """Factory for :class:`ScriptedPrompter` instances."""
    return ScriptedPrompter


# ---------------------------------------------------------------------------
# Settings & paths
# ---------------------------------------------------------------------------


@pytest.fixture
def base_path(tmp_path: Path) -> Path:
    """Empty directory that projects are generated into."""
    root = tmp_path / "workspace"
    root.mkdir()
    yield root


@pytest.fixture
def settings(base_path: Path) -> Settings:
    return Settings(base_path=base_path, gsutil_command="gsutil", command_timeout=5)


# ---------------------------------------------------------------------------
# External tools
# ---------------------------------------------------------------------------


@pytest.fixture
def gsutil_ok():
    """gsutil is installed and every bucket is accessible.

    Yields the mock standing in for ``run_command`` so tests can inspect the
    gsutil invocations.
    """
    with patch("dscc_gen.validation.command_exists", return_value=True), patch(
        "dscc_gen.validation.run_command",
        new_callable=AsyncMock,
        return_value=(0, "gs://bucket/", ""),
    ) as run:
        yield run


@pytest.fixture
def gsutil_missing():
    with patch("dscc_gen.validation.command_exists", return_value=False):
        yield


# ---------------------------------------------------------------------------
# Resolved configurations
# ---------------------------------------------------------------------------


@pytest.fixture
def viz_config(base_path: Path) -> VizConfig:
    return VizConfig(
        project_name="happy_path_viz",
        dev_bucket="test/dscc-gen-test-dev",
        prod_bucket="test/dscc-gen-test-prod",
        use_alternate_build_tool=False,
        base_path=base_path,
    )


@pytest.fixture
def connector_config(base_path: Path) -> ConnectorConfig:
    return ConnectorConfig(
        project_name="my_connector",
        base_path=base_path,
        manifest_logo_url="logoUrl",
        manifest_company="manifestCompany",
        manifest_company_url="companyUrl",
        manifest_addon_url="addonUrl",
        manifest_support_url="supportUrl",
        manifest_description="description",
        manifest_sources="",
        auth_type=AuthType.NONE,
    )
