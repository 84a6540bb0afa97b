from crcdiff.diff import compare_manifests, diff
from crcdiff.manifest import create_manifest
from crcdiff.models import ChangeKind, ChangeRecord


def test_identical_mappings_are_equal():
    mapping = {"a": 1, "b": -2, "c": 3}

    result = diff(mapping, dict(mapping))

    assert result.are_equal
    assert result.changes == ()
    assert diff({}, {}).are_equal


def test_changes_are_classified_and_ordered():
    old = {"keep": 1, "edit": 2, "gone-b": 3, "gone-a": 4}
    new = {"keep": 1, "edit": 20, "zz-new": 5, "aa-new": 6}

    result = diff(old, new)

    assert result.changes == (
        ChangeRecord("aa-new", ChangeKind.ADDED),
        ChangeRecord("edit", ChangeKind.CHANGED),
        ChangeRecord("zz-new", ChangeKind.ADDED),
        ChangeRecord("gone-a", ChangeKind.DELETED),
        ChangeRecord("gone-b", ChangeKind.DELETED),
    )
    assert not result.are_equal
    assert (result.old_count, result.new_count) == (4, 4)


def test_swapping_sides_swaps_added_and_deleted():
    a = {"shared": 1, "changed": 2, "only-a": 3}
    b = {"shared": 1, "changed": 5, "only-b": 4}

    forward = diff(a, b)
    backward = diff(b, a)

    assert {c.path for c in forward.changes} == {c.path for c in backward.changes}
    assert forward.paths(ChangeKind.ADDED) == backward.paths(ChangeKind.DELETED) == ["only-b"]
    assert forward.paths(ChangeKind.DELETED) == backward.paths(ChangeKind.ADDED) == ["only-a"]
    assert forward.paths(ChangeKind.CHANGED) == backward.paths(ChangeKind.CHANGED) == ["changed"]


def test_checksum_is_the_only_change_signal():
    assert diff({"a": 0}, {"a": 0}).are_equal
    assert diff({"a": -1}, {"a": 4294967295 - 2**32}).are_equal
    assert diff({"a": 1}, {"a": -1}).paths(ChangeKind.CHANGED) == ["a"]


def test_modified_file_is_reported_as_changed(tmp_path):
    root = tmp_path / "tree"
    root.mkdir()
    (root / "a.txt").write_bytes(b"hello")
    (root / "b.txt").write_bytes(b"world")
    first, _ = create_manifest(root)
    snapshot = tmp_path / "before.txt"
    snapshot.write_bytes(first.read_bytes())

    (root / "a.txt").write_bytes(b"HELLO")
    create_manifest(root)

    comparison = compare_manifests(snapshot, root)

    assert comparison.result.changes == (ChangeRecord(str(root / "a.txt"), ChangeKind.CHANGED),)
    assert comparison.parse_errors == 0


def test_extra_file_in_new_tree_is_added(tmp_path):
    old_root = tmp_path / "old"
    new_root = tmp_path / "new"
    for root in (old_root, new_root):
        root.mkdir()
        (root / "a.txt").write_bytes(b"hello")
        (root / "b.txt").write_bytes(b"world")
    (new_root / "c.txt").write_bytes(b"extra")
    create_manifest(old_root, relative_paths=True)
    create_manifest(new_root, relative_paths=True)

    result = compare_manifests(old_root, new_root).result

    assert result.changes == (ChangeRecord("c.txt", ChangeKind.ADDED),)
