"""Tests for VersionEngine over in-memory stores."""

import pytest

from gvt.core.engine import ADD_MESSAGE, COMMIT_MESSAGE, DETACH_MESSAGE, INIT_MESSAGE
from gvt.core.errors import (
    AlreadyInitializedError,
    FileNotFoundInTreeError,
    InvalidVersionError,
    StorageError,
    UninitializedError,
    UsageError,
)


@pytest.fixture
def initialized(engine):
    engine.init()
    return engine


class TestInit:
    def test_creates_version_zero(self, engine):
        result = engine.init()

        assert result.status == 0
        assert result.message == "Current directory initialized successfully."
        assert engine.ledger.list_versions() == [0]
        record = engine.ledger.read_version(0)
        assert record.message == INIT_MESSAGE
        assert record.files == ()
        assert engine.pointers.load().last == 0
        assert engine.pointers.load().active == 0

    def test_twice_fails(self, initialized):
        with pytest.raises(AlreadyInitializedError) as exc:
            initialized.init()
        assert exc.value.status == 10

    def test_commands_require_init(self, engine):
        with pytest.raises(UninitializedError) as exc:
            engine.history()
        assert exc.value.status == -2


class TestAdd:
    def test_add_creates_version(self, initialized, memory_tree):
        memory_tree.files["a.txt"] = b"A"

        result = initialized.add("a.txt")

        assert result.status == 0
        assert result.message == "File added successfully. File: a.txt"
        assert initialized.pointers.load().last == 1
        record = initialized.ledger.read_version(1)
        assert record.files == ("a.txt",)
        assert record.message == ADD_MESSAGE
        assert initialized.objects.get(1, "a.txt") == b"A"

    def test_add_uses_user_message(self, initialized, memory_tree):
        memory_tree.files["a.txt"] = b"A"

        initialized.add("a.txt", "first file")

        assert initialized.ledger.read_version(1).message == "first file"

    def test_add_copies_forward_previous_files(self, initialized, memory_tree):
        memory_tree.files.update({"a.txt": b"A", "b.txt": b"B"})
        initialized.add("a.txt")
        memory_tree.files["a.txt"] = b"changed in tree only"

        initialized.add("b.txt")

        assert initialized.objects.names(2) == {"a.txt", "b.txt"}
        assert initialized.objects.get(2, "a.txt") == b"A"
        assert initialized.ledger.read_version(2).files == ("a.txt", "b.txt")

    def test_add_already_tracked_is_noop(self, initialized, memory_tree):
        memory_tree.files["a.txt"] = b"A"
        initialized.add("a.txt")

        result = initialized.add("a.txt")

        assert result.status == 0
        assert result.message == "File already added. File: a.txt"
        assert initialized.ledger.list_versions() == [0, 1]

    def test_add_without_file(self, initialized):
        with pytest.raises(UsageError) as exc:
            initialized.add(None)
        assert exc.value.status == 20
        assert exc.value.message == "Please specify file to add."

    def test_add_missing_file(self, initialized):
        with pytest.raises(FileNotFoundInTreeError) as exc:
            initialized.add("nope.txt")
        assert exc.value.status == 21
        assert exc.value.message == "File not found. File: nope.txt"
        assert initialized.ledger.list_versions() == [0]

    @pytest.mark.parametrize("name", ["../outside.txt", "/etc/passwd", ".gvt/meta.json"])
    def test_add_rejects_names_outside_tree(self, initialized, memory_tree, name):
        memory_tree.files[name] = b"x"

        with pytest.raises(FileNotFoundInTreeError):
            initialized.add(name)

    def test_add_read_failure_is_storage_error(self, initialized, memory_tree):
        memory_tree.files["a.txt"] = b"A"
        memory_tree.fail_reads = True

        with pytest.raises(StorageError) as exc:
            initialized.add("a.txt")

        assert exc.value.status == 22
        assert exc.value.message == "File cannot be added. See ERR for details. File: a.txt"
        assert initialized.pointers.load().last == 0


class TestDetach:
    def test_detach_removes_from_file_set(self, initialized, memory_tree):
        memory_tree.files.update({"a.txt": b"A", "b.txt": b"B"})
        initialized.add("a.txt")
        initialized.add("b.txt")

        result = initialized.detach("a.txt")

        assert result.message == "File detached successfully. File: a.txt"
        record = initialized.ledger.read_version(3)
        assert record.files == ("b.txt",)
        assert record.message == DETACH_MESSAGE
        assert initialized.objects.names(3) == {"b.txt"}
        # working file is untouched
        assert memory_tree.files["a.txt"] == b"A"

    def test_detach_untracked_is_noop(self, initialized):
        result = initialized.detach("x.txt")

        assert result.status == 0
        assert result.message == "File is not added to gvt. File: x.txt"
        assert initialized.ledger.list_versions() == [0]

    def test_detach_without_file(self, initialized):
        with pytest.raises(UsageError) as exc:
            initialized.detach(None)
        assert exc.value.status == 30

    def test_readd_after_detach(self, initialized, memory_tree):
        memory_tree.files["a.txt"] = b"A"
        initialized.add("a.txt")
        initialized.detach("a.txt")
        memory_tree.files["a.txt"] = b"A2"

        initialized.add("a.txt")

        assert initialized.ledger.read_version(3).files == ("a.txt",)
        assert initialized.objects.get(3, "a.txt") == b"A2"


class TestCommit:
    def test_commit_overwrites_object(self, initialized, memory_tree):
        memory_tree.files.update({"a.txt": b"A", "b.txt": b"B"})
        initialized.add("a.txt")
        initialized.add("b.txt")
        memory_tree.files["a.txt"] = b"A2"

        result = initialized.commit("a.txt", "update")

        assert result.message == "File committed successfully. File: a.txt"
        record = initialized.ledger.read_version(3)
        assert record.files == ("a.txt", "b.txt")
        assert record.message == "update"
        assert initialized.objects.get(3, "a.txt") == b"A2"
        assert initialized.objects.get(3, "b.txt") == b"B"
        assert initialized.objects.get(2, "a.txt") == b"A"

    def test_commit_unchanged_still_creates_version(self, initialized, memory_tree):
        memory_tree.files["a.txt"] = b"A"
        initialized.add("a.txt")

        initialized.commit("a.txt")

        assert initialized.ledger.list_versions() == [0, 1, 2]
        assert initialized.ledger.read_version(2).message == COMMIT_MESSAGE

    def test_commit_untracked_is_noop(self, initialized, memory_tree):
        memory_tree.files["a.txt"] = b"A"

        result = initialized.commit("a.txt")

        assert result.status == 0
        assert result.message == "File is not added to gvt. File: a.txt"
        assert initialized.ledger.list_versions() == [0]

    def test_commit_missing_file(self, initialized):
        with pytest.raises(FileNotFoundInTreeError) as exc:
            initialized.commit("a.txt")
        assert exc.value.status == 51

    def test_commit_without_file(self, initialized):
        with pytest.raises(UsageError) as exc:
            initialized.commit("")
        assert exc.value.status == 50


class TestCheckout:
    def test_checkout_restores_content(self, initialized, memory_tree):
        memory_tree.files["a.txt"] = b"A"
        initialized.add("a.txt")
        memory_tree.files["a.txt"] = b"B"
        initialized.commit("a.txt")

        result = initialized.checkout("1")

        assert result.message == "Checkout successful for version: 1"
        assert memory_tree.files["a.txt"] == b"A"
        pointers = initialized.pointers.load()
        assert pointers.active == 1
        assert pointers.last == 2

    def test_checkout_is_idempotent(self, initialized, memory_tree):
        memory_tree.files.update({"a.txt": b"A", "b.txt": b"B"})
        initialized.add("a.txt")
        initialized.add("b.txt")

        initialized.checkout(2)
        first = dict(memory_tree.files)
        initialized.checkout(2)

        assert memory_tree.files == first

    def test_checkout_zero_and_back_restores_bytes(self, initialized, memory_tree):
        memory_tree.files["a.txt"] = b"\x00\xffbinary"
        initialized.add("a.txt")
        memory_tree.files["a.txt"] = b"scribbled"

        initialized.checkout(0)
        assert memory_tree.files["a.txt"] == b"scribbled"
        initialized.checkout(1)

        assert memory_tree.files["a.txt"] == b"\x00\xffbinary"

    def test_checkout_skips_missing_objects(self, initialized, memory_tree):
        memory_tree.files.update({"a.txt": b"A", "b.txt": b"B"})
        initialized.add("a.txt")
        initialized.add("b.txt")
        del initialized.objects.objects[(2, "a.txt")]
        memory_tree.files.update({"a.txt": b"x", "b.txt": b"y"})

        result = initialized.checkout(2)

        assert result.status == 0
        assert memory_tree.files == {"a.txt": b"x", "b.txt": b"B"}

    @pytest.mark.parametrize("operand", ["99", "abc", "-1", "1.5", None])
    def test_checkout_invalid(self, initialized, operand):
        with pytest.raises(InvalidVersionError) as exc:
            initialized.checkout(operand)
        assert exc.value.status == 60
        expected = "" if operand is None else operand
        assert exc.value.message == f"Invalid version number: {expected}"
        assert initialized.pointers.load().active == 0


class TestHistoryAndVersion:
    @pytest.fixture
    def three_versions(self, initialized, memory_tree):
        memory_tree.files["a.txt"] = b"A"
        initialized.add("a.txt", "add a\nwith details")
        initialized.commit("a.txt", "second")
        return initialized

    def test_history_newest_first(self, three_versions):
        result = three_versions.history()

        assert result.message == "2: second\n1: add a\n0: GVT initialized."

    @pytest.mark.parametrize("limit,expected", [
        (1, "2: second"),
        (2, "2: second\n1: add a"),
        (10, "2: second\n1: add a\n0: GVT initialized."),
        (0, "2: second\n1: add a\n0: GVT initialized."),
        (-3, "2: second\n1: add a\n0: GVT initialized."),
    ])
    def test_history_limit(self, three_versions, limit, expected):
        assert three_versions.history(limit).message == expected

    def test_history_default_limit(self, three_versions):
        three_versions.default_history_limit = 2

        assert three_versions.history().message == "2: second\n1: add a"
        assert three_versions.history(0).message.count("\n") == 2

    def test_history_empty_message(self, three_versions):
        three_versions.ledger.write_version(3, "", ["a.txt"])
        three_versions.pointers.store(three_versions.pointers.load().advance(3))

        assert three_versions.history(1).message == "3: "

    def test_history_hides_unpublished_records(self, three_versions):
        three_versions.ledger.write_version(3, "orphan", [])

        assert not three_versions.history().message.startswith("3:")

    def test_version_defaults_to_active(self, three_versions):
        assert three_versions.version().message == "Version: 2\nsecond"

        three_versions.checkout(1)

        assert three_versions.version().message == "Version: 1\nadd a\nwith details"

    def test_version_explicit(self, three_versions):
        assert three_versions.version("0").message == "Version: 0\nGVT initialized."

    @pytest.mark.parametrize("operand", ["7", "x"])
    def test_version_invalid(self, three_versions, operand):
        with pytest.raises(InvalidVersionError) as exc:
            three_versions.version(operand)
        assert exc.value.status == 60
        assert exc.value.message == f"Invalid version number: {operand}"


class TestChainProperties:
    def test_versions_contiguous_and_file_sets_inherited(self, initialized, memory_tree):
        memory_tree.files.update({"a.txt": b"A", "b.txt": b"B", "c.txt": b"C"})
        steps = [
            ("add", "a.txt"),
            ("add", "b.txt"),
            ("commit", "a.txt"),
            ("detach", "a.txt"),
            ("add", "c.txt"),
            ("checkout", "2"),
            ("commit", "b.txt"),
        ]

        for command, operand in steps:
            before = initialized.pointers.load()
            before_files = set(initialized.ledger.read_version(before.last).files)
            getattr(initialized, command)(operand)
            after = initialized.pointers.load()
            after_files = set(initialized.ledger.read_version(after.last).files)

            if command == "checkout":
                assert after.last == before.last
                continue
            assert after.last == before.last + 1
            if command == "add":
                assert after_files == before_files | {operand}
            elif command == "detach":
                assert after_files == before_files - {operand}
            else:
                assert after_files == before_files

        assert initialized.ledger.list_versions() == list(range(7))

    def test_mutations_move_active_with_last(self, initialized, memory_tree):
        memory_tree.files["a.txt"] = b"A"
        initialized.add("a.txt")
        initialized.checkout(0)

        initialized.commit("a.txt")

        pointers = initialized.pointers.load()
        assert pointers.last == 2
        assert pointers.active == 2
