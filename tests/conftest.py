from __future__ import annotations

from pathlib import Path

import pytest

from wrapper_gen import SymbolTree

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def symbols_path() -> Path:
    return FIXTURES / "led_symbols.txt"


@pytest.fixture
def tree(symbols_path: Path) -> SymbolTree:
    return SymbolTree.load(str(symbols_path))
