"""Field validators and tool preconditions.

Every validator is an async callable that takes the candidate value and
returns ``True`` when it is acceptable, or a message explaining why not.
"""

from __future__ import annotations

import asyncio
import re
from collections.abc import Awaitable, Callable
from pathlib import Path

from .config import PROJECT_NAME_PATTERN, Settings, add_bucket_prefix
from .errors import PreconditionError
from .utils import command_exists, run_command

Validator = Callable[[str], Awaitable["bool | str"]]

_PROJECT_NAME_RE = re.compile(PROJECT_NAME_PATTERN)

GSUTIL_INSTALL_URL = "https://cloud.google.com/storage/docs/gsutil_install"


# ---------------------------------------------------------------------------
# Project name
# ---------------------------------------------------------------------------


async def validate_project_name(name: str, base_path: Path) -> bool | str:
    """Check that *name* is a legal, unused directory name under *base_path*."""
    if not _PROJECT_NAME_RE.fullmatch(name):
        return "Name may only include letters, numbers, dashes, and underscores."
    if await asyncio.to_thread((Path(base_path) / name).exists):
        return f"The directory {name} already exists."
    return True


def project_name_validator(base_path: Path) -> Validator:
    """Bind :func:`validate_project_name` to a base path."""

    async def _validate(name: str) -> bool | str:
        return await validate_project_name(name, base_path)

    return _validate


# ---------------------------------------------------------------------------
# Storage buckets
# ---------------------------------------------------------------------------


async def has_bucket_permissions(
    bucket: str,
    gsutil: str = "gsutil",
    timeout: int = 120,
) -> bool | str:
    """Check that the current gcloud account can list *bucket*.

    Args:
        bucket: Bucket path, with or without the ``gs://`` prefix.
        gsutil: Name or path of the gsutil executable.
        timeout: Seconds to wait for gsutil.
    """
    url = add_bucket_prefix(bucket)
    returncode, _, _ = await run_command([gsutil, "ls", url], timeout=timeout)
    if returncode == 0:
        return True
    return f"You do not have access to {url}, or it does not exist."


def bucket_validator(settings: Settings) -> Validator:
    """Bind :func:`has_bucket_permissions` to the configured gsutil."""

    async def _validate(bucket: str) -> bool | str:
        return await has_bucket_permissions(
            bucket,
            gsutil=settings.gsutil_command,
            timeout=settings.command_timeout,
        )

    return _validate


# ---------------------------------------------------------------------------
# Preconditions
# ---------------------------------------------------------------------------


async def check_gsutil_installed(gsutil: str = "gsutil") -> None:
    """Raise :class:`PreconditionError` unless gsutil is on ``PATH``."""
    if not await asyncio.to_thread(command_exists, gsutil):
        raise PreconditionError(
            f"{gsutil} is required to create a viz project but was not found. "
            f"Install it from {GSUTIL_INSTALL_URL}"
        )
