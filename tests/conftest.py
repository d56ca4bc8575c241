import sys
from pathlib import Path

import pytest


def _add_src_to_path() -> None:
    root = Path(__file__).resolve().parents[1]
    src_path = root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


_add_src_to_path()


@pytest.fixture(autouse=True)
def _isolate_perl5lib(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's PERL5LIB out of module resolution."""
    monkeypatch.delenv("PERL5LIB", raising=False)
