"""Configuration resolution.

Turns the partial record parsed from the command line into a complete,
validated ``VizConfig`` or ``ConnectorConfig``:

1. Values supplied on the command line are validated concurrently.  Any
   rejection aborts the run with :class:`ValidationRejected`.
2. Every question whose field was not supplied is asked interactively and
   re-asked until its validator accepts the answer.
3. Remaining fields come from the per-kind defaults.

Precedence is command line > interactive answer > default, and fields that
end up ``None`` are dropped from the result.
"""

from __future__ import annotations

import asyncio
import signal
import threading
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Protocol

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt

from . import utils
from .config import (
    CONNECTOR_DEFAULTS,
    VIZ_DEFAULTS,
    ConnectorConfig,
    ProjectChoice,
    Settings,
    VizConfig,
)
from .errors import ValidationRejected
from .questions import InputKind, Question, connector_questions, viz_questions
from .utils import assert_never
from .validation import check_gsutil_installed


# ---------------------------------------------------------------------------
# Prompting
# ---------------------------------------------------------------------------


class Prompter(Protocol):
    """Line-oriented source of answers for interactive questions."""

    async def ask(self, question: Question) -> str: ...

    def reject(self, question: Question, message: str) -> None: ...


@contextmanager
def _interruptible() -> Iterator[None]:
    """Let Ctrl-C raise ``KeyboardInterrupt`` while a prompt is blocking.

    ``asyncio.run`` replaces the SIGINT handler with one that only cancels
    the main task, and a blocked ``input()`` call never sees that.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return
    previous = signal.signal(signal.SIGINT, signal.default_int_handler)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


class RichPrompter:
    """Asks questions on the terminal using ``rich.prompt``.

    Prompts block the event loop thread.  Questions are asked one at a time,
    so nothing else is waiting on the loop meanwhile.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or utils.console

    async def ask(self, question: Question) -> str:
        with _interruptible():
            if question.kind is InputKind.LIST:
                return self._ask_choice(question)
            return self._ask_text(question)

    def reject(self, question: Question, message: str) -> None:
        self.console.print(f"[bold red]>>[/bold red] {escape(message)}")

    def _ask_text(self, question: Question) -> str:
        answer = Prompt.ask(f"[bold]{escape(question.message)}[/bold]", console=self.console)
        answer = (answer or "").strip()
        if question.transformer is not None and answer:
            self.console.print(f"  [dim]{escape(question.transformer(answer))}[/dim]")
        return answer

    def _ask_choice(self, question: Question) -> str:
        self.console.print(f"[bold]{escape(question.message)}[/bold]")
        for idx, choice in enumerate(question.choices, start=1):
            self.console.print(f"  {idx}) {escape(choice.label)}")
        picked = Prompt.ask(
            "Select",
            choices=[str(idx) for idx in range(1, len(question.choices) + 1)],
            default="1",
            console=self.console,
        )
        return question.choices[int(picked) - 1].value


# ---------------------------------------------------------------------------
# Generic resolution
# ---------------------------------------------------------------------------


def is_supplied(value: Any) -> bool:
    """Return ``True`` for a concrete value.

    ``None`` and empty or whitespace-only strings count as absent, so the
    matching question is asked interactively.
    """
    if value is None:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    return True


async def _validate_supplied(
    supplied: Mapping[str, Any], questions: list[Question]
) -> None:
    by_name = {question.name: question for question in questions}
    pending = [
        (name, by_name[name])
        for name in supplied
        if name in by_name and by_name[name].validate is not None
    ]
    verdicts = await asyncio.gather(
        *(question.check(str(supplied[name])) for name, question in pending)
    )
    for (name, _), verdict in zip(pending, verdicts):
        if verdict is not True:
            message = verdict if isinstance(verdict, str) else f"Invalid value for {name}."
            raise ValidationRejected(name, message)


async def _ask_until_valid(question: Question, prompter: Prompter) -> str:
    while True:
        answer = await prompter.ask(question)
        if not is_supplied(answer):
            prompter.reject(question, "A value is required.")
            continue
        verdict = await question.check(answer)
        if verdict is True:
            return answer
        message = verdict if isinstance(verdict, str) else f"Invalid value for {question.name}."
        prompter.reject(question, message)


async def resolve(
    cli_args: Mapping[str, Any],
    questions: list[Question],
    defaults: Mapping[str, Any],
    prompter: Prompter,
) -> dict[str, Any]:
    """Merge command-line values, interactive answers and defaults.

    Args:
        cli_args: Partial record parsed from the command line.
        questions: Ordered question set for the project kind.
        defaults: Values for fields that are never asked.
        prompter: Source of interactive answers.

    Returns:
        The merged record with every ``None`` field removed.

    Raises:
        ValidationRejected: A command-line value failed its validator.
    """
    supplied = {key: value for key, value in cli_args.items() if is_supplied(value)}
    await _validate_supplied(supplied, questions)

    answers: dict[str, Any] = {}
    for question in questions:
        if question.name in supplied:
            continue
        answers[question.name] = await _ask_until_valid(question, prompter)

    resolved: dict[str, Any] = {}
    for key in dict.fromkeys([*defaults, *answers, *cli_args]):
        if key in supplied:
            value = supplied[key]
        elif key in answers:
            value = answers[key]
        else:
            value = defaults.get(key)
        if value is not None:
            resolved[key] = value
    return resolved


# ---------------------------------------------------------------------------
# Per-kind resolution
# ---------------------------------------------------------------------------


async def with_missing(
    cli_args: Mapping[str, Any],
    settings: Settings,
    prompter: Prompter | None = None,
) -> VizConfig | ConnectorConfig:
    """Resolve a complete configuration for the kind named in *cli_args*.

    Viz projects require gsutil, so its presence is checked before any
    question is asked.
    """
    prompter = prompter or RichPrompter()
    choice = ProjectChoice(cli_args["project_choice"])
    base_path = Path(cli_args.get("base_path") or settings.base_path)
    args = {**cli_args, "project_choice": choice, "base_path": base_path}

    if choice is ProjectChoice.VIZ:
        await check_gsutil_installed(settings.gsutil_command)
        resolved = await resolve(
            args, viz_questions(base_path, settings), VIZ_DEFAULTS, prompter
        )
        return VizConfig(**resolved)
    if choice is ProjectChoice.CONNECTOR:
        resolved = await resolve(
            args, connector_questions(base_path), CONNECTOR_DEFAULTS, prompter
        )
        return ConnectorConfig(**resolved)
    assert_never(choice)
