# tests/conftest.py
"""Shared test fixtures and helpers.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

import logging
import os
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog
from hypothesis import Phase, Verbosity, settings

from git_assets.core.store import Store

# Exact contents and reference text of the original command-line tests
TEST_CONTENTS = b"this is a test\nand a second line"
TEST_CONTENTS_HASH = "fbbeac4b21cc086bfd7ed8b9c7b99e014e436b8bb0069114054ca374e8e69b26"
TEST_CONTENTS_REF = b"git-assets v1\n" + TEST_CONTENTS_HASH.encode("ascii")


@pytest.fixture
def store(tmp_path: Path) -> Store:
    """A freshly created store under a temporary directory."""
    return Store.open_or_create(tmp_path / "store")


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    """Undo logging configuration done by CLI invocations.

    configure_logging() replaces root handlers with one bound to the stream
    that was stderr at the time; under CliRunner that stream is closed once
    the invocation returns.
    """
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()


# =============================================================================
# Hypothesis Configuration
# =============================================================================

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (filesystem timing varies)
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))
