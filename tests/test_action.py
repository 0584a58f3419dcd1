"""Tests for the action invoker."""

import asyncio
import sys

import pytest

from playgate.action import ActionInvoker


def _run(invoker: ActionInvoker) -> tuple[bool, str]:
    return asyncio.run(invoker.invoke())


class TestActionInvoker:
    def test_success(self):
        invoker = ActionInvoker([sys.executable, "-c", "print('toggled')"])
        assert _run(invoker) == (True, "toggled")

    def test_nonzero_exit_reports_stderr(self):
        invoker = ActionInvoker(
            [sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(3)"]
        )
        assert _run(invoker) == (False, "boom")

    def test_nonzero_exit_without_stderr(self):
        invoker = ActionInvoker([sys.executable, "-c", "raise SystemExit(2)"])
        assert _run(invoker) == (False, "exit status 2")

    def test_missing_binary(self):
        invoker = ActionInvoker(["/nonexistent/playgate-action"])
        succeeded, diagnostic = _run(invoker)
        assert succeeded is False
        assert "failed to start" in diagnostic

    def test_timeout_kills_process(self):
        invoker = ActionInvoker(
            [sys.executable, "-c", "import time; time.sleep(10)"], timeout=0.5
        )
        succeeded, diagnostic = _run(invoker)
        assert succeeded is False
        assert "timed out" in diagnostic

    def test_empty_command_rejected(self):
        with pytest.raises(ValueError):
            ActionInvoker([])
