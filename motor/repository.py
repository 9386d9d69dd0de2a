"""A repository on disk: object store, references, index and working tree."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from motor.index import Index, IndexEntry
from motor.objects import (
    Blob,
    Commit,
    MotorObject,
    Tag,
    Tree,
    TreeEntry,
    deserialize_object,
    string_to_type,
    type_to_string,
)
from motor.reference import References
from motor.utils import MotorError, compress_data, decompress_data

log = logging.getLogger(__name__)

MOTOR_DIR_NAME = ".motor"
_HEADS = "refs/heads/"
_TAGS = "refs/tags/"
_DIRECTORY_MODE = 0o040000


def _head_line(head: Path) -> str:
    with open(head, encoding="utf-8", errors="surrogateescape", newline="") as handle:
        return handle.read().split("\n", 1)[0]


def find_repository(start: str | Path | None = None) -> Repository:
    """Return the repository containing ``start`` (the current directory by default)."""
    original = Path(start if start is not None else Path.cwd()).absolute()
    for candidate in (original, *original.parents):
        if (candidate / MOTOR_DIR_NAME).exists():
            return Repository(candidate)
    raise MotorError(f"No motor repository found (or any parent directory): {original}")


class Repository:
    """A working directory together with its ``.motor`` store."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).absolute()
        self.motor_dir = self.path / MOTOR_DIR_NAME
        if not self.motor_dir.is_dir():
            raise MotorError(f"Not a valid motor repository: {path}")

    @classmethod
    def init(cls, path: str | Path) -> Repository:
        """Create (or reinitialise) a repository at ``path``."""
        repo_path = Path(path).absolute()
        if not repo_path.exists():
            repo_path.mkdir(parents=True)
        elif not repo_path.is_dir():
            raise MotorError(f"Path exists but is not a directory: {repo_path}")

        motor_dir = repo_path / MOTOR_DIR_NAME
        for sub in ("", "objects", "refs", "refs/heads", "refs/tags"):
            (motor_dir / sub).mkdir(exist_ok=True)
        (motor_dir / "HEAD").write_text("ref: refs/heads/master", encoding="utf-8")
        (motor_dir / "index").write_bytes(b"")
        return cls(path)

    # -- helpers -----------------------------------------------------------

    @property
    def _refs(self) -> References:
        return References(self.motor_dir)

    def _index(self) -> Index:
        index = Index(self.motor_dir / "index")
        index.load()
        return index

    def _object_path(self, hash_value: str) -> Path:
        return self.motor_dir / "objects" / hash_value[:2] / hash_value[2:]

    # -- objects -----------------------------------------------------------

    def write_object(self, obj: MotorObject) -> str:
        """Store ``obj`` unless it is already present and return its id."""
        data = obj.serialize()
        hash_value = obj.object_id()
        path = self._object_path(hash_value)
        if not path.exists():
            header = f"{type_to_string(obj.object_type)} {len(data)}".encode("ascii")
            compressed = compress_data(header + b"\0" + data)
            log.debug(
                "writing object %s: header=%r data=%d compressed=%d",
                hash_value, header, len(data), len(compressed),
            )
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(compressed)
        return hash_value

    def read_object(self, hash_value: str) -> MotorObject:
        """Load the object with id ``hash_value``."""
        path = self._object_path(hash_value)
        if not path.exists():
            raise MotorError(f"Object not found: {hash_value}")
        try:
            compressed = path.read_bytes()
        except OSError as exc:
            raise MotorError(f"Failed to open object file: {hash_value}") from exc

        raw = decompress_data(compressed)
        log.debug("reading object %s: compressed=%d raw=%d", hash_value, len(compressed), len(raw))
        header, sep, data = raw.partition(b"\0")
        if not sep:
            raise MotorError("Invalid object format")
        type_name, sep, _size = header.partition(b" ")
        if not sep:
            raise MotorError("Invalid object header format")
        object_type = string_to_type(type_name.decode("utf-8", "surrogateescape"))
        return deserialize_object(data, object_type)

    # -- references --------------------------------------------------------

    def update_ref(self, ref_name: str, hash_value: str) -> None:
        self._refs.update(ref_name, hash_value)

    def read_ref(self, ref_name: str) -> str:
        return self._refs.read(ref_name)

    def all_refs(self) -> list[str]:
        """Every file stored under the repository directory, as reference names."""
        return self._refs.list()

    def _require_commit(self, commit_hash: str) -> Commit:
        obj = self.read_object(commit_hash)
        if not isinstance(obj, Commit):
            raise MotorError(f"Not a commit object: {commit_hash}")
        return obj

    def create_branch(self, name: str, commit_hash: str) -> None:
        self._require_commit(commit_hash)
        self.update_ref(_HEADS + name, commit_hash)

    def delete_branch(self, name: str) -> None:
        if self.current_branch() == name:
            raise MotorError("Cannot delete the current branch")
        ref_path = self.motor_dir / (_HEADS + name)
        if not ref_path.exists():
            raise MotorError(f"Branch not found: {name}")
        ref_path.unlink()

    def list_branches(self) -> list[str]:
        return self._refs.list(_HEADS)

    def current_branch(self) -> str | None:
        return self._refs.current_branch()

    def head_commit(self) -> str:
        """Return the commit HEAD points at, directly or through its branch."""
        branch = self.current_branch()
        if branch:
            return self.read_ref(_HEADS + branch)
        return _head_line(self.motor_dir / "HEAD")

    def create_tag(self, name: str, commit_hash: str, message: str = "") -> None:
        """Tag a commit; a message makes an annotated tag object."""
        self._require_commit(commit_hash)
        if not message:
            self.update_ref(_TAGS + name, commit_hash)
        else:
            tag_hash = self.write_object(Tag(name, commit_hash, message))
            self.update_ref(_TAGS + name, tag_hash)

    def delete_tag(self, name: str) -> None:
        ref_path = self.motor_dir / (_TAGS + name)
        if not ref_path.exists():
            raise MotorError(f"Tag not found: {name}")
        ref_path.unlink()

    def list_tags(self) -> list[str]:
        return self._refs.list(_TAGS)

    # -- commits -----------------------------------------------------------

    def _write_tree(self) -> str:
        tree = Tree()
        for entry in self._index():
            tree.add_entry(TreeEntry(Path(entry.path).name, entry.hash, entry.mode))
        return self.write_object(tree)

    def commit(self, message: str) -> str:
        """Record the index as a new commit on the current branch."""
        commit = Commit(self._write_tree(), message)
        branch = self.current_branch()
        if branch:
            try:
                commit.parent = self.read_ref(_HEADS + branch)
            except MotorError:
                pass
        commit_hash = self.write_object(commit)
        if branch:
            self.update_ref(_HEADS + branch, commit_hash)
        return commit_hash

    def commit_history(self, start_commit: str) -> list[str]:
        """Commit ids from ``start_commit`` back along first parents."""
        history: list[str] = []
        current = start_commit
        while current:
            history.append(current)
            try:
                obj = self.read_object(current)
            except (MotorError, OSError, ValueError):
                break
            if not isinstance(obj, Commit):
                break
            current = obj.parent
        return history

    # -- working tree ------------------------------------------------------

    def _read_tree_to_workdir(self, tree_hash: str, path: Path) -> None:
        tree = self.read_object(tree_hash)
        if not isinstance(tree, Tree):
            raise MotorError(f"Not a tree object: {tree_hash}")
        path.mkdir(parents=True, exist_ok=True)
        for entry in tree.entries:
            entry_path = path / entry.name
            if entry.mode & _DIRECTORY_MODE:
                self._read_tree_to_workdir(entry.hash, entry_path)
                continue
            blob = self.read_object(entry.hash)
            if not isinstance(blob, Blob):
                raise MotorError(f"Not a blob object: {entry.hash}")
            entry_path.write_bytes(blob.content)
            os.chmod(entry_path, entry.mode)

    def checkout(self, commit_hash: str) -> None:
        """Replace the working tree with the commit's and detach HEAD there."""
        commit = self._require_commit(commit_hash)
        for child in self.path.iterdir():
            if child.name == MOTOR_DIR_NAME:
                continue
            if child.is_dir() and not child.is_symlink():
                shutil.rmtree(child)
            else:
                child.unlink()
        self._read_tree_to_workdir(commit.tree_hash, self.path)
        self._refs.set_detached_head(commit_hash)

    def checkout_branch(self, branch_name: str) -> None:
        """Check out the tip of ``branch_name`` and attach HEAD to it."""
        ref_path = _HEADS + branch_name
        try:
            self.checkout(self.read_ref(ref_path))
            self._refs.set_head(ref_path)
        except (MotorError, OSError) as exc:
            raise MotorError(f"Branch not found: {branch_name}") from exc

    # -- index -------------------------------------------------------------

    def _stage_file(self, index: Index, rel_path: str, full_path: Path) -> None:
        hash_value = self.write_object(Blob(full_path.read_bytes()))
        info = full_path.stat()
        mode = info.st_mode & 0o777
        entry = index.find(rel_path)
        if entry is not None:
            entry.hash = hash_value
            entry.mode = mode
            entry.mtime = int(info.st_mtime)
        else:
            index.add(IndexEntry(rel_path, hash_value, mode))

    def add(self, path: str) -> None:
        """Stage a file, or every file below a directory."""
        full_path = self.path / path
        if not full_path.exists():
            raise MotorError(f"Path does not exist: {path}")
        index = self._index()
        if full_path.is_file():
            self._stage_file(index, path, full_path)
        elif full_path.is_dir():
            for file_path in sorted(full_path.rglob("*")):
                if not file_path.is_file():
                    continue
                rel = file_path.relative_to(self.path)
                if rel.parts and rel.parts[0] == MOTOR_DIR_NAME:
                    continue
                self._stage_file(index, rel.as_posix(), file_path)
        index.save()

    def remove(self, path: str) -> None:
        """Unstage ``path`` and everything below it."""
        index = self._index()
        index.remove(path)
        index.save()

    def index_entries(self) -> dict[str, str]:
        """Staged paths mapped to their blob ids."""
        return {entry.path: entry.hash for entry in self._index()}