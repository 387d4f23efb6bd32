from collections.abc import Callable
from pathlib import Path

import pytest

from specflow.spec import SpecUpdate


@pytest.fixture
def make_update(tmp_path: Path) -> Callable[..., SpecUpdate]:
    """Write a delta spec (and optionally a main spec) and describe the update."""

    def _make(capability: str, delta: str, main: str | None = None) -> SpecUpdate:
        source = tmp_path / "change" / "specs" / capability / "spec.md"
        source.parent.mkdir(parents=True, exist_ok=True)
        _ = source.write_text(delta, encoding="utf-8")
        target = tmp_path / "specs" / capability / "spec.md"
        if main is not None:
            target.parent.mkdir(parents=True, exist_ok=True)
            _ = target.write_text(main, encoding="utf-8")
        return SpecUpdate(
            capability=capability,
            source=source,
            target=target,
            target_existed=main is not None,
        )

    return _make
