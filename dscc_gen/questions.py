"""Interactive question sets for each project kind.

A question set is an ordered list of :class:`Question` objects.  Every kind
starts with the common questions and appends its own.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .config import AuthType, ProjectChoice, Settings, add_bucket_prefix
from .utils import assert_never
from .validation import Validator, bucket_validator, project_name_validator


class InputKind(str, Enum):
    """How a question collects its answer."""
    TEXT = "input"
    LIST = "list"


@dataclass(frozen=True)
class Choice:
    """One entry of a single-choice list."""

    label: str
    value: str


@dataclass
class Question:
    """A single prompt bound to a configuration field."""

    name: str
    kind: InputKind
    message: str
    transformer: Callable[[str], str] | None = None
    validate: Validator | None = None
    choices: list[Choice] = field(default_factory=list)

    async def check(self, value: str) -> bool | str:
        """Run the validator, treating a question without one as always valid."""
        if self.validate is None:
            return True
        return await self.validate(value)


# ---------------------------------------------------------------------------
# Auth type choices
# ---------------------------------------------------------------------------


def get_auth_help_text(auth_type: AuthType) -> str:
    if auth_type is AuthType.NONE:
        return "No authentication required."
    if auth_type is AuthType.KEY:
        return "Key or Token"
    if auth_type is AuthType.OAUTH2:
        return "Standard OAUTH2"
    if auth_type is AuthType.USER_PASS:
        return "Username & Password"
    if auth_type is AuthType.USER_TOKEN:
        return "Username & Token"
    assert_never(auth_type)


def auth_type_choices() -> list[Choice]:
    """One choice per ``AuthType``, in declaration order, with aligned help text."""
    longest = max(len(auth.value) for auth in AuthType)
    return [
        Choice(
            label=f"{auth.value.ljust(longest)} - {get_auth_help_text(auth)}",
            value=auth.value,
        )
        for auth in AuthType
    ]


# ---------------------------------------------------------------------------
# Question sets
# ---------------------------------------------------------------------------


def common_questions(base_path: Path) -> list[Question]:
    return [
        Question(
            name="project_name",
            kind=InputKind.TEXT,
            message="Project name",
            validate=project_name_validator(base_path),
        ),
    ]


def viz_questions(base_path: Path, settings: Settings) -> list[Question]:
    check_bucket = bucket_validator(settings)
    return common_questions(base_path) + [
        Question(
            name="dev_bucket",
            kind=InputKind.TEXT,
            message="What is your dev bucket?",
            transformer=add_bucket_prefix,
            validate=check_bucket,
        ),
        Question(
            name="prod_bucket",
            kind=InputKind.TEXT,
            message="What is your prod bucket?",
            transformer=add_bucket_prefix,
            validate=check_bucket,
        ),
    ]


def connector_questions(base_path: Path) -> list[Question]:
    return common_questions(base_path) + [
        Question(
            name="auth_type",
            kind=InputKind.LIST,
            message="How will users authenticate to your service?",
            choices=auth_type_choices(),
        ),
    ]


def questions_for(
    choice: ProjectChoice, base_path: Path, settings: Settings
) -> list[Question]:
    """Return the ordered question set for *choice*."""
    if choice is ProjectChoice.VIZ:
        return viz_questions(base_path, settings)
    if choice is ProjectChoice.CONNECTOR:
        return connector_questions(base_path)
    assert_never(choice)
