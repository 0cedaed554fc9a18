"""Tests for the command line demo harness."""
from __future__ import annotations

import logging

from arena_sandbox import sandbox_demo
from arena_sandbox.errors import GenerationError


def test_parser_defaults():
    parsed = sandbox_demo.create_parser().parse_args([])
    assert parsed.seed is None
    assert parsed.attempts == 5
    assert parsed.config_dir is None
    assert not parsed.verbose


def test_run_logs_summary(caplog):
    with caplog.at_level(logging.INFO, logger="arena_sandbox.sandbox_demo"):
        assert sandbox_demo.run(["--seed", "42"]) == 0
    messages = [record.getMessage() for record in caplog.records]
    assert "seed: 42" in messages
    assert any(message.startswith("polylines: wall=6") for message in messages)


def test_run_reports_failure(monkeypatch):
    def failing(seed, attempts, settings):
        raise GenerationError("no luck")

    monkeypatch.setattr(sandbox_demo, "generate_layout_with_retries", failing)
    assert sandbox_demo.run(["--seed", "1", "--attempts", "2"]) == 1
