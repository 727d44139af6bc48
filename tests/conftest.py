"""Shared test fixtures."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Callable

import pytest

from ossify.backends._local import LocalBackend

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ossify._events import TransferEvent


@pytest.fixture
def local_backend() -> Iterator[LocalBackend]:
    """A LocalBackend rooted in a fresh temporary directory."""
    with tempfile.TemporaryDirectory() as tmp:
        yield LocalBackend(root=tmp)


@pytest.fixture
def workdir() -> Iterator[Path]:
    """A scratch local directory, separate from any backend root."""
    with tempfile.TemporaryDirectory() as tmp:
        yield Path(tmp)


@pytest.fixture
def events() -> list[TransferEvent]:
    return []


@pytest.fixture
def sink(events: list[TransferEvent]) -> Callable[[TransferEvent], None]:
    """Event sink recording into ``events``."""
    return events.append


@pytest.fixture
def make_tree() -> Callable[[Path, dict[str, bytes]], Path]:
    """Create files (and their parents) under a root from ``{relpath: content}``."""

    def _make(root: Path, files: dict[str, bytes]) -> Path:
        root.mkdir(parents=True, exist_ok=True)
        for rel, content in files.items():
            target = root / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        return root

    return _make
