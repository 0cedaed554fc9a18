"""Tests for seed resolution."""
from __future__ import annotations

import pytest

from arena_sandbox.config import DEFAULT_SEED, LayoutSeed, resolve_seed


def test_default_seed_without_environment(monkeypatch):
    monkeypatch.delenv("ARENA_SEED", raising=False)
    assert resolve_seed() == DEFAULT_SEED


def test_environment_seed_is_used(monkeypatch):
    monkeypatch.setenv("ARENA_SEED", "1337")
    assert resolve_seed() == 1337


def test_explicit_seed_wins(monkeypatch):
    monkeypatch.setenv("ARENA_SEED", "1337")
    assert resolve_seed(7) == 7


def test_custom_prefix(monkeypatch):
    monkeypatch.setenv("DEMO_SEED", "-5")
    assert resolve_seed(env_prefix="DEMO") == -5


def test_invalid_environment_seed(monkeypatch):
    monkeypatch.setenv("ARENA_SEED", "forty-two")
    with pytest.raises(ValueError):
        resolve_seed()


def test_from_mapping():
    assert LayoutSeed.from_mapping({"seed": "9"}).seed == 9
    assert LayoutSeed.from_mapping(None).seed == DEFAULT_SEED
