"""Unit tests for utility functions (dscc_gen.utils).

Tests cover:
- run_command (success, failure, missing executable, timeout, cwd, captured streams)
- command_exists
- assert_never
- Rich output helpers
"""

from __future__ import annotations

import sys

import pytest

from dscc_gen.utils import (
    assert_never,
    command_exists,
    print_error,
    print_header,
    print_panel,
    print_success,
    print_summary_table,
    print_warning,
    run_command,
)


# ---------------------------------------------------------------------------
# run_command
# ---------------------------------------------------------------------------


class TestRunCommand:
    @pytest.mark.unit
    async def test_successful_command_list(self):
        returncode, stdout, stderr = await run_command(
            [sys.executable, "-c", "print('hello')"]
        )
        assert returncode == 0
        assert stdout == "hello"
        assert stderr == ""

    @pytest.mark.unit
    async def test_failing_command(self):
        returncode, _, stderr = await run_command(
            [sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(3)"]
        )
        assert returncode == 3
        assert stderr == "boom"

    @pytest.mark.unit
    async def test_missing_executable(self):
        returncode, stdout, stderr = await run_command(["definitely-not-a-command-dscc"])
        assert returncode == 127
        assert stdout == ""
        assert "definitely-not-a-command-dscc" in stderr

    @pytest.mark.unit
    async def test_timeout(self):
        returncode, _, stderr = await run_command(
            [sys.executable, "-c", "import time; time.sleep(5)"], timeout=1
        )
        assert returncode == -1
        assert "timed out" in stderr

    @pytest.mark.unit
    async def test_cwd(self, tmp_path):
        _, stdout, _ = await run_command(
            [sys.executable, "-c", "import os; print(os.getcwd())"], cwd=tmp_path
        )
        assert stdout == str(tmp_path.resolve())

    @pytest.mark.unit
    async def test_streams_are_captured_separately(self):
        returncode, stdout, stderr = await run_command(
            [
                sys.executable,
                "-c",
                "import sys; print('out'); sys.stderr.write('err\\n')",
            ]
        )
        assert (returncode, stdout, stderr) == (0, "out", "err")


# ---------------------------------------------------------------------------
# command_exists
# ---------------------------------------------------------------------------


class TestCommandExists:
    @pytest.mark.unit
    def test_python_exists(self):
        assert command_exists(sys.executable)

    @pytest.mark.unit
    def test_missing_command(self):
        assert not command_exists("definitely-not-a-command-dscc")


# ---------------------------------------------------------------------------
# assert_never
# ---------------------------------------------------------------------------


class TestAssertNever:
    @pytest.mark.unit
    def test_raises_assertion_error(self):
        with pytest.raises(AssertionError, match="BOGUS"):
            assert_never("BOGUS")


# ---------------------------------------------------------------------------
# Rich output
# ---------------------------------------------------------------------------


class TestOutputHelpers:
    @pytest.mark.unit
    def test_messages(self, capsys):
        print_success("all good")
        print_error("went wrong")
        print_warning("careful")
        out = capsys.readouterr().out
        assert "all good" in out
        assert "went wrong" in out
        assert "careful" in out

    @pytest.mark.unit
    def test_markup_in_message_is_escaped(self, capsys):
        print_error("value [bold]x[/bold]")
        assert "[bold]x[/bold]" in capsys.readouterr().out

    @pytest.mark.unit
    def test_summary_table(self, capsys):
        print_summary_table({"project_name": "my_viz"}, title="Config")
        out = capsys.readouterr().out
        assert "Config" in out
        assert "my_viz" in out

    @pytest.mark.unit
    def test_header_and_panel(self, capsys):
        print_header("New viz project")
        print_panel("npm run start", title="Next steps")
        out = capsys.readouterr().out
        assert "New viz project" in out
        assert "npm run start" in out
