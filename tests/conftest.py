import sys
from collections.abc import Callable
from pathlib import Path

import pytest


def _add_src_to_path() -> None:
    root = Path(__file__).resolve().parents[1]
    src_path = root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


_add_src_to_path()


@pytest.fixture
def write_file() -> Callable[[Path, str], Path]:
    def _write(path: Path, content: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
