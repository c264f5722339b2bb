"""Shared fixtures for the copyown test suite."""

from __future__ import annotations

import pytest

from copyown.config import Aliases, Config


@pytest.fixture
def config() -> Config:
    """Configuration as written by ``init`` for a default Next.js project."""
    return Config(
        model="copy-own",
        tsx=True,
        src_dir=False,
        aliases=Aliases(components="@/components/ui", lib="@/lib/microbuild"),
        installed_lib=(),
        installed_components=(),
    )
