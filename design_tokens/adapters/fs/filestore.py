import os
import tempfile
from collections.abc import Mapping
from pathlib import Path


class FileSystemStore:
    """Writes generated artifacts beneath a single output directory."""

    def __init__(self, base_path: str):
        self.base_path = Path(base_path).resolve()

    def _safe_path(self, path: str) -> Path:
        # Prevent traversal
        target = (self.base_path / path).resolve()
        if not target.is_relative_to(self.base_path):
            raise ValueError(f"Path traversal attempt detected: {path}")
        return target

    def _stage(self, target: Path, text: str) -> str:
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=".tmp.", dir=target.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
            # mkstemp creates owner-only files
            os.chmod(tmp, 0o644)
        except BaseException:
            os.unlink(tmp)
            raise
        return tmp

    def write_text(self, name: str, text: str) -> Path:
        """Write text (UTF-8) and return the absolute path written."""
        return self.write_all({name: text})[name]

    def write_all(self, files: Mapping[str, str]) -> dict[str, Path]:
        """
        Write several files as one batch.

        Every file is staged to a temporary sibling first; targets are only
        replaced once all of them staged, so a failed write leaves the
        previous artifacts in place.
        """
        targets = {name: self._safe_path(name) for name in files}
        staged: dict[str, str] = {}
        try:
            for name, text in files.items():
                staged[name] = self._stage(targets[name], text)
        except BaseException:
            for tmp in staged.values():
                os.unlink(tmp)
            raise

        for name, tmp in staged.items():
            os.replace(tmp, targets[name])
        return targets

    def read_text(self, name: str) -> str:
        """Read back an artifact. Raises FileNotFoundError."""
        target = self._safe_path(name)
        if not target.exists():
            raise FileNotFoundError(f"File not found: {name}")
        with open(target, encoding="utf-8") as f:
            return f.read()
