"""Named references (branches, tags) and the HEAD pointer."""

from __future__ import annotations

from pathlib import Path

from motor.utils import MotorError

_ENCODING = "utf-8"
_ERRORS = "surrogateescape"
_SYMBOLIC = "ref:"
_BRANCH_PREFIX = "ref: refs/heads/"


class RefNotFoundError(MotorError):
    """Raised when a reference does not exist."""


def _first_line(path: Path) -> str:
    with open(path, encoding=_ENCODING, errors=_ERRORS, newline="") as handle:
        return handle.read().split("\n", 1)[0]


def _write(path: Path, text: str) -> None:
    with open(path, "w", encoding=_ENCODING, errors=_ERRORS, newline="") as handle:
        handle.write(text)


class References:
    """References stored as small files under a repository directory."""

    def __init__(self, refs_dir: str | Path) -> None:
        self.refs_dir = Path(refs_dir)

    def _ref_path(self, ref_name: str) -> Path:
        return self.refs_dir / ref_name

    def update(self, ref_name: str, hash_value: str) -> None:
        """Point ``ref_name`` at ``hash_value``, creating directories as needed."""
        path = self._ref_path(ref_name)
        path.parent.mkdir(parents=True, exist_ok=True)
        _write(path, hash_value)

    def read(self, ref_name: str) -> str:
        """Return the hash ``ref_name`` resolves to, following symbolic refs."""
        path = self._ref_path(ref_name)
        if not path.exists():
            raise RefNotFoundError(f"Reference not found: {ref_name}")
        content = _first_line(path)
        if not content:
            raise MotorError(f"Empty reference: {ref_name}")
        if content.startswith(_SYMBOLIC):
            target = content[len(_SYMBOLIC) + 1 :]
            if not target:
                raise MotorError(f"Invalid symbolic reference: {ref_name}")
            return self.read(target)
        return content

    def remove(self, ref_name: str) -> None:
        """Delete ``ref_name`` if it exists."""
        self._ref_path(ref_name).unlink(missing_ok=True)

    def list(self, prefix: str = "") -> list[str]:
        """Return the names of all references under ``prefix``, prefix removed, sorted."""
        base = self.refs_dir / prefix
        if not base.exists():
            return []
        names = []
        for path in base.rglob("*"):
            if not path.is_file():
                continue
            relative = path.relative_to(self.refs_dir).as_posix()
            if prefix and not relative.startswith(prefix):
                continue
            names.append(relative[len(prefix) :])
        return sorted(names)

    def current_branch(self) -> str | None:
        """Return the branch HEAD points to, or None when HEAD is detached or missing."""
        head = self.refs_dir / "HEAD"
        if not head.exists():
            return None
        content = _first_line(head)
        if content.startswith(_BRANCH_PREFIX):
            return content[len(_BRANCH_PREFIX) :]
        return None

    def set_head(self, ref_path: str) -> None:
        """Make HEAD a symbolic reference to ``ref_path``."""
        _write(self.refs_dir / "HEAD", f"ref: {ref_path}")

    def set_detached_head(self, commit_hash: str) -> None:
        """Point HEAD straight at ``commit_hash``."""
        _write(self.refs_dir / "HEAD", commit_hash)