"""dscc-gen configuration.

Typed records for the two project kinds (viz and connector), the defaults
each kind starts from, and the ambient ``Settings`` for the tool itself.
All models use Pydantic v2 so they are validated at construction time.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

PROJECT_NAME_PATTERN = r"^[-_A-Za-z0-9]+$"
BUCKET_PREFIX = "gs://"


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ProjectChoice(str, Enum):
    """Kind of project to generate."""
    VIZ = "viz"
    CONNECTOR = "connector"


class AuthType(str, Enum):
    """How users of a generated connector authenticate to its service."""
    NONE = "NONE"
    OAUTH2 = "OAUTH2"
    KEY = "KEY"
    USER_PASS = "USER_PASS"
    USER_TOKEN = "USER_TOKEN"


# ---------------------------------------------------------------------------
# Project records
# ---------------------------------------------------------------------------

class CommonConfig(BaseModel):
    """Fields shared by every project kind."""

    use_alternate_build_tool: bool = Field(
        default=False, description="Use yarn instead of npm"
    )
    project_name: str = Field(..., pattern=PROJECT_NAME_PATTERN)
    project_choice: ProjectChoice
    base_path: Path = Field(default_factory=Path.cwd)

    @property
    def project_root(self) -> Path:
        """Directory the project will be generated into."""
        return self.base_path / self.project_name

    @property
    def build_tool(self) -> str:
        """Package manager the generated project uses."""
        return "yarn" if self.use_alternate_build_tool else "npm"

    @property
    def script_runner(self) -> str:
        """Prefix for running a package.json script."""
        return f"{self.build_tool} run"

    def to_dict(self) -> dict[str, Any]:
        """Return the record as a plain dict without absent (``None``) fields."""
        return self.model_dump(mode="json", exclude_none=True)


class VizConfig(CommonConfig):
    """A Community Visualization project."""

    project_choice: ProjectChoice = ProjectChoice.VIZ
    dev_bucket: str
    prod_bucket: str

    @property
    def gcs_dev_bucket(self) -> str:
        return add_bucket_prefix(self.dev_bucket)

    @property
    def gcs_prod_bucket(self) -> str:
        return add_bucket_prefix(self.prod_bucket)


class ConnectorConfig(CommonConfig):
    """A Community Connector project."""

    project_choice: ProjectChoice = ProjectChoice.CONNECTOR
    manifest_logo_url: str
    manifest_company: str
    manifest_company_url: str
    manifest_addon_url: str
    manifest_support_url: str
    manifest_description: str
    manifest_sources: str
    auth_type: AuthType
    script_id: Optional[str] = None


# Fields a viz project never asks for.  Empty, but kept so both kinds are
# resolved the same way.
VIZ_DEFAULTS: dict[str, Any] = {}

CONNECTOR_DEFAULTS: dict[str, Any] = {
    "manifest_logo_url": "logoUrl",
    "manifest_company": "manifestCompany",
    "manifest_company_url": "companyUrl",
    "manifest_addon_url": "addonUrl",
    "manifest_support_url": "supportUrl",
    "manifest_description": "description",
    "manifest_sources": "",
    "auth_type": AuthType.NONE,
}


def add_bucket_prefix(bucket: str) -> str:
    """Return *bucket* as a ``gs://`` URL.

    Examples::

        add_bucket_prefix("my-bucket/viz") -> "gs://my-bucket/viz"
        add_bucket_prefix("gs://my-bucket") -> "gs://my-bucket"
    """
    if bucket.startswith(BUCKET_PREFIX):
        return bucket
    return f"{BUCKET_PREFIX}{bucket}"


# ---------------------------------------------------------------------------
# Tool settings
# ---------------------------------------------------------------------------

class Settings(BaseModel):
    """Ambient settings for the dscc-gen tool itself."""

    base_path: Path = Field(default_factory=Path.cwd)
    gsutil_command: str = Field(default="gsutil")
    command_timeout: int = Field(
        default=120, ge=1, description="Timeout for external commands in seconds"
    )
    install_timeout: int = Field(
        default=600, ge=1, description="Timeout for the dependency install in seconds"
    )

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            DSCC_GEN_BASE_PATH, DSCC_GEN_GSUTIL, DSCC_GEN_COMMAND_TIMEOUT,
            DSCC_GEN_INSTALL_TIMEOUT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("DSCC_GEN_BASE_PATH"):
            kwargs["base_path"] = Path(os.environ["DSCC_GEN_BASE_PATH"])
        if os.environ.get("DSCC_GEN_GSUTIL"):
            kwargs["gsutil_command"] = os.environ["DSCC_GEN_GSUTIL"]
        if os.environ.get("DSCC_GEN_COMMAND_TIMEOUT"):
            kwargs["command_timeout"] = int(os.environ["DSCC_GEN_COMMAND_TIMEOUT"])
        if os.environ.get("DSCC_GEN_INSTALL_TIMEOUT"):
            kwargs["install_timeout"] = int(os.environ["DSCC_GEN_INSTALL_TIMEOUT"])
        return cls(**kwargs)
