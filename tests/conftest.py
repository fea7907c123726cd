from __future__ import annotations

import sys
from pathlib import Path

import pytest

BASE_DIR = Path(__file__).resolve().parent.parent
SRC_DIR = (BASE_DIR / "src").resolve()

if str(BASE_DIR) not in sys.path:
    sys.path.append(str(BASE_DIR))
if str(SRC_DIR) not in sys.path:
    sys.path.append(str(SRC_DIR))


@pytest.fixture(scope="session")
def grammar_parser():
    """One Lark LALR parser shared by every test that needs the grammar."""
    from calctree.parse_auto import build_parser

    return build_parser()
