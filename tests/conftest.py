"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from typesel.selector.goparser import GoSourceParser


@pytest.fixture(scope="session")
def go_parser() -> GoSourceParser:
    """One tree-sitter parser shared across tests."""
    return GoSourceParser()


@pytest.fixture
def go_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a temporary Go module rooted at tmp_path."""
    monkeypatch.delenv("GO111MODULE", raising=False)
    (tmp_path / "go.mod").write_text(
        "module example.com/shop\n\ngo 1.21\n", encoding="utf-8"
    )
    return tmp_path
