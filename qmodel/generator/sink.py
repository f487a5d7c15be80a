"""Destinations for rendered query classes."""

import os
import tempfile
import threading
from pathlib import Path
from typing import Protocol


class SinkWriteError(RuntimeError):
    """Raised when rendered source cannot be stored."""


class SourceSink(Protocol):
    """Stores the rendered source of one query class per qualified name."""

    def write(self, qualified_name: str, text: str) -> None: ...


class DirectorySink:
    """Writes ``pkg.sub.QName`` to ``<root>/pkg/sub/QName.py``.

    Package directories get an empty ``__init__.py`` so the generated modules
    are importable. Each file is written to a temporary file first and moved
    into place, so a failed write leaves no partial module behind.
    """

    def __init__(self, root: str | Path, init_files: bool = True) -> None:
        self.root = Path(root)
        self.init_files = init_files
        self._lock = threading.Lock()

    def path_for(self, qualified_name: str) -> Path:
        *package, name = qualified_name.split(".")
        return self.root.joinpath(*package, f"{name}.py")

    def _ensure_package(self, path: Path) -> None:
        with self._lock:
            path.parent.mkdir(parents=True, exist_ok=True)
            if not self.init_files:
                return
            directory = path.parent
            while directory != self.root and self.root in directory.parents:
                init = directory / "__init__.py"
                if not init.exists():
                    init.touch()
                directory = directory.parent

    def write(self, qualified_name: str, text: str) -> None:
        path = self.path_for(qualified_name)
        tmp_name = None
        try:
            self._ensure_package(path)
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=path.parent, suffix=".tmp", delete=False
            ) as f:
                tmp_name = f.name
                f.write(text)
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise SinkWriteError(f"Cannot write {qualified_name} to {path}: {e}") from e


class MemorySink:
    """Keeps rendered sources in memory, keyed by qualified name."""

    def __init__(self) -> None:
        self.sources: dict[str, str] = {}
        self._lock = threading.Lock()

    def write(self, qualified_name: str, text: str) -> None:
        with self._lock:
            self.sources[qualified_name] = text
