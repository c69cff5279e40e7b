from __future__ import annotations

from pathlib import Path

import pytest

from autoipc.parser import SpecsExtractor
from tests._fixtures.project_builder import ProjectBuilder


@pytest.fixture
def project_builder(tmp_path: Path) -> ProjectBuilder:
    """Provide a reusable Electron project builder rooted at the pytest tmp_path."""
    return ProjectBuilder(tmp_path)


@pytest.fixture(scope="session")
def extractor() -> SpecsExtractor:
    return SpecsExtractor()
