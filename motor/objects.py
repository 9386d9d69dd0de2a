"""Stored object kinds: blobs, trees, commits and tags."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

from motor.utils import MotorError, binary_to_hex, hash_sha1, hex_to_binary

DEFAULT_SIGNATURE = "Motor <motor@example.com>"
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


class ObjectType(Enum):
    BLOB = "blob"
    TREE = "tree"
    COMMIT = "commit"
    TAG = "tag"


def type_to_string(object_type: ObjectType) -> str:
    """Return the on-disk name of an object type."""
    return object_type.value


def string_to_type(type_str: str) -> ObjectType:
    """Parse an on-disk object type name."""
    try:
        return ObjectType(type_str)
    except ValueError:
        raise MotorError(f"Unknown object type: {type_str}") from None


def _encode(text: str) -> bytes:
    return text.encode(_ENCODING, _ERRORS)


def _decode(data: bytes) -> str:
    return data.decode(_ENCODING, _ERRORS)


def _now() -> int:
    return int(time.time())


def _split_signature(value: str) -> tuple[str, int | None]:
    """Split ``"name <mail> stamp tz"`` into the identity and the timestamp."""
    head, sep, _tz = value.rpartition(" ")
    if not sep:
        return value, None
    identity, sep, stamp = head.rpartition(" ")
    if not sep:
        return value, None
    try:
        return identity, int(stamp)
    except ValueError:
        return identity, None


def _header_and_message(data: bytes):
    """Yield header lines, then return the first message line."""
    lines = iter(_decode(data).split("\n"))
    headers = []
    message = ""
    for line in lines:
        if not line:
            message = next(lines, "")
            break
        headers.append(line)
    return headers, message


class MotorObject(ABC):
    """Base of every stored object."""

    object_type: ClassVar[ObjectType]

    @abstractmethod
    def serialize(self) -> bytes:
        """Return the object's body as stored."""

    def object_id(self) -> str:
        """Return the SHA-1 id of the object."""
        return hash_sha1(_encode(type_to_string(self.object_type)) + b" " + self.serialize())


@dataclass
class Blob(MotorObject):
    content: bytes = b""

    object_type: ClassVar[ObjectType] = ObjectType.BLOB

    def serialize(self) -> bytes:
        return self.content

    @classmethod
    def deserialize(cls, data: bytes) -> Blob:
        return cls(bytes(data))


@dataclass
class TreeEntry:
    name: str
    hash: str
    mode: int


@dataclass
class Tree(MotorObject):
    entries: list[TreeEntry] = field(default_factory=list)

    object_type: ClassVar[ObjectType] = ObjectType.TREE

    def add_entry(self, entry: TreeEntry) -> None:
        self.entries.append(entry)

    def serialize(self) -> bytes:
        ordered = sorted(self.entries, key=lambda entry: entry.name)
        return b"".join(
            _encode(f"{entry.mode:o} {entry.name}") + b"\0" + hex_to_binary(entry.hash)
            for entry in ordered
        )

    @classmethod
    def deserialize(cls, data: bytes) -> Tree:
        tree = cls()
        pos = 0
        while pos < len(data):
            space = data.find(b" ", pos)
            if space == -1:
                break
            mode = int(_decode(data[pos:space]), 8)
            nul = data.find(b"\0", space + 1)
            if nul == -1:
                break
            name = _decode(data[space + 1 : nul])
            if nul + 21 > len(data):
                break
            digest = binary_to_hex(data[nul + 1 : nul + 21])
            tree.add_entry(TreeEntry(name, digest, mode))
            pos = nul + 21
        return tree


@dataclass
class Commit(MotorObject):
    tree_hash: str
    message: str
    parent: str = ""
    author: str = DEFAULT_SIGNATURE
    committer: str = DEFAULT_SIGNATURE
    timestamp: int = field(default_factory=_now)

    object_type: ClassVar[ObjectType] = ObjectType.COMMIT

    def serialize(self) -> bytes:
        lines = [f"tree {self.tree_hash}\n"]
        if self.parent:
            lines.append(f"parent {self.parent}\n")
        lines.append(f"author {self.author} {self.timestamp} +0000\n")
        lines.append(f"committer {self.committer} {self.timestamp} +0000\n")
        lines.append(f"\n{self.message}\n")
        return _encode("".join(lines))

    @classmethod
    def deserialize(cls, data: bytes) -> Commit:
        headers, message = _header_and_message(data)
        tree_hash = ""
        parent = ""
        author = DEFAULT_SIGNATURE
        committer = DEFAULT_SIGNATURE
        timestamp = 0
        for line in headers:
            if line.startswith("tree "):
                tree_hash = line[5:]
            elif line.startswith("parent "):
                parent = line[7:]
            elif line.startswith("author "):
                author, stamp = _split_signature(line[7:])
                if stamp is not None:
                    timestamp = stamp
            elif line.startswith("committer "):
                committer, _ = _split_signature(line[10:])
        if not tree_hash:
            raise MotorError("Invalid commit format: missing tree hash")
        return cls(
            tree_hash=tree_hash,
            message=message,
            parent=parent,
            author=author,
            committer=committer,
            timestamp=timestamp,
        )


@dataclass
class Tag(MotorObject):
    name: str
    object_hash: str
    message: str = ""
    tagger: str = DEFAULT_SIGNATURE
    timestamp: int = field(default_factory=_now)

    object_type: ClassVar[ObjectType] = ObjectType.TAG

    def serialize(self) -> bytes:
        text = (
            f"object {self.object_hash}\n"
            "type commit\n"
            f"tag {self.name}\n"
            f"tagger {self.tagger} {self.timestamp} +0000\n"
        )
        if self.message:
            text += f"\n{self.message}\n"
        return _encode(text)

    @classmethod
    def deserialize(cls, data: bytes) -> Tag:
        headers, message = _header_and_message(data)
        object_hash = ""
        name = ""
        tagger = DEFAULT_SIGNATURE
        timestamp = 0
        for line in headers:
            if line.startswith("object "):
                object_hash = line[7:]
            elif line.startswith("tag "):
                name = line[4:]
            elif line.startswith("tagger "):
                tagger, stamp = _split_signature(line[7:])
                if stamp is not None:
                    timestamp = stamp
        if not object_hash or not name:
            raise MotorError("Invalid tag format")
        return cls(
            name=name,
            object_hash=object_hash,
            message=message,
            tagger=tagger,
            timestamp=timestamp,
        )


_KINDS: dict[ObjectType, type[MotorObject]] = {
    ObjectType.BLOB: Blob,
    ObjectType.TREE: Tree,
    ObjectType.COMMIT: Commit,
    ObjectType.TAG: Tag,
}


def deserialize_object(data: bytes, object_type: ObjectType) -> MotorObject:
    """Build the object of ``object_type`` from its stored body."""
    try:
        kind = _KINDS[object_type]
    except KeyError:
        raise MotorError("Unknown object type for deserialization") from None
    return kind.deserialize(data)