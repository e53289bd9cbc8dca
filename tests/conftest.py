from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.docs_builder import DocsBuilder


@pytest.fixture
def docs_builder(tmp_path: Path) -> DocsBuilder:
    """Provide a documentation tree rooted at the pytest tmp_path."""
    return DocsBuilder(tmp_path)
