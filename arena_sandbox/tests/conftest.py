"""Pytest configuration for arena sandbox tests."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# //1.- Ensure repository root is available on the Python path for package imports.
ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from arena_sandbox.context import GeneratorContext  # noqa: E402
from arena_sandbox.settings import load_layout_settings  # noqa: E402


# //2.- Share the bundled settings across tests.
@pytest.fixture(scope="session")
def settings():
    return load_layout_settings()


# //3.- Provide a freshly seeded context whose noise field is ready to sample.
@pytest.fixture
def ctx(settings):
    context = GeneratorContext(1234, settings)
    context.reseed_noise()
    return context


# //4.- Generate the first usable layout from seed 42 once; it is the slowest fixture.
@pytest.fixture(scope="session")
def layout_42(settings):
    from arena_sandbox.layout import generate_layout_with_retries

    return generate_layout_with_retries(42, settings=settings)
