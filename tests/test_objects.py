import pytest

from motor.objects import (
    Blob,
    Commit,
    ObjectType,
    Tag,
    Tree,
    TreeEntry,
    deserialize_object,
    string_to_type,
    type_to_string,
)
from motor.utils import MotorError, hash_sha1

HASH_A = "ab" * 20
HASH_B = "cd" * 20
HASH_C = "0123456789" * 4


@pytest.mark.parametrize("kind", list(ObjectType))
def test_type_name_round_trip(kind):
    assert string_to_type(type_to_string(kind)) is kind


def test_type_names():
    assert type_to_string(ObjectType.COMMIT) == "commit"
    assert string_to_type("blob") is ObjectType.BLOB


def test_unknown_type_raises():
    with pytest.raises(MotorError):
        string_to_type("widget")


def test_blob_round_trip_and_id():
    blob = Blob(b"hello\x00world")
    assert blob.serialize() == b"hello\x00world"
    assert Blob.deserialize(blob.serialize()) == blob
    assert blob.object_id() == hash_sha1(b"blob hello\x00world")


def test_tree_serialize_single_entry():
    tree = Tree()
    tree.add_entry(TreeEntry("f", HASH_A, 0o100644))
    data = tree.serialize()
    assert data.startswith(b"100644 f\x00")
    assert len(data) == len(b"100644 f\x00") + 20


def test_tree_round_trip_sorted():
    tree = Tree()
    tree.add_entry(TreeEntry("zeta.txt", HASH_A, 0o644))
    tree.add_entry(TreeEntry("alpha.txt", HASH_B, 0o755))
    tree.add_entry(TreeEntry("mid", HASH_C, 0o40000))
    parsed = Tree.deserialize(tree.serialize())
    assert [e.name for e in parsed.entries] == ["alpha.txt", "mid", "zeta.txt"]
    assert parsed.entries[0] == TreeEntry("alpha.txt", HASH_B, 0o755)
    assert parsed.entries[1].mode == 0o40000
    assert parsed.entries[2].hash == HASH_A


def test_tree_id_independent_of_insertion_order():
    first = Tree([TreeEntry("a", HASH_A, 0o644), TreeEntry("b", HASH_B, 0o644)])
    second = Tree([TreeEntry("b", HASH_B, 0o644), TreeEntry("a", HASH_A, 0o644)])
    assert first.object_id() == second.object_id()


def test_tree_deserialize_stops_on_truncated_entry():
    tree = Tree([TreeEntry("a", HASH_A, 0o644), TreeEntry("b", HASH_B, 0o644)])
    parsed = Tree.deserialize(tree.serialize()[:-5])
    assert parsed.entries == [TreeEntry("a", HASH_A, 0o644)]


def test_commit_serialized_text():
    commit = Commit(HASH_A, "msg", timestamp=0)
    expected = (
        b"tree " + HASH_A.encode() + b"\n"
        b"author Motor <motor@example.com> 0 +0000\n"
        b"committer Motor <motor@example.com> 0 +0000\n"
        b"\nmsg\n"
    )
    assert commit.serialize() == expected


def test_commit_round_trip():
    commit = Commit(HASH_A, "first change", parent=HASH_B, timestamp=1234)
    parsed = Commit.deserialize(commit.serialize())
    assert parsed.tree_hash == HASH_A
    assert parsed.parent == HASH_B
    assert parsed.message == "first change"
    assert parsed.timestamp == 1234
    assert parsed.author == commit.author
    assert parsed.object_id() == commit.object_id()


def test_commit_without_parent():
    parsed = Commit.deserialize(Commit(HASH_A, "root", timestamp=5).serialize())
    assert parsed.parent == ""
    assert b"parent" not in Commit(HASH_A, "root").serialize()


def test_commit_message_keeps_first_line_only():
    parsed = Commit.deserialize(Commit(HASH_A, "line one\nline two", timestamp=1).serialize())
    assert parsed.message == "line one"


def test_commit_parent_changes_id():
    commit = Commit(HASH_A, "m", timestamp=7)
    before = commit.object_id()
    commit.parent = HASH_B
    assert commit.object_id() != before
    assert commit.object_id() == hash_sha1(b"commit " + commit.serialize())


def test_commit_missing_tree_raises():
    with pytest.raises(MotorError):
        Commit.deserialize(b"author A 1 +0000\n\nmsg\n")


def test_tag_round_trip():
    tag = Tag("v1.0", HASH_A, "release", timestamp=99)
    data = tag.serialize()
    assert b"type commit\n" in data
    parsed = Tag.deserialize(data)
    assert parsed.name == "v1.0"
    assert parsed.object_hash == HASH_A
    assert parsed.message == "release"
    assert parsed.timestamp == 99


def test_tag_without_message_has_no_body():
    data = Tag("light", HASH_A, "", timestamp=3).serialize()
    assert not data.endswith(b"\n\n")
    assert b"\n\n" not in data
    assert Tag.deserialize(data).message == ""


def test_tag_invalid_raises():
    with pytest.raises(MotorError):
        Tag.deserialize(b"object " + HASH_A.encode() + b"\n")


def test_deserialize_object_dispatch():
    commit = Commit(HASH_A, "x", timestamp=1)
    obj = deserialize_object(commit.serialize(), ObjectType.COMMIT)
    assert isinstance(obj, Commit)
    assert obj.tree_hash == HASH_A
    blob = deserialize_object(b"data", ObjectType.BLOB)
    assert blob == Blob(b"data")
    assert blob.object_type is ObjectType.BLOB