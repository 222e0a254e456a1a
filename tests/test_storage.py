import pytest

from budget_core.exceptions import StorageUnavailableError
from budget_core.storage import LedgerFileStorage


def test_write_then_read(tmp_path):
    storage = LedgerFileStorage(tmp_path)

    path = storage.write("budget.txt", "line one\nline two")

    assert path == tmp_path / "budget.txt"
    assert storage.read("budget.txt") == "line one\nline two"
    assert not (tmp_path / "budget.txt.tmp").exists()


def test_write_overwrites_existing_file(tmp_path):
    storage = LedgerFileStorage(tmp_path)
    storage.write("budget.txt", "old contents that are longer")

    storage.write("budget.txt", "new")

    assert (tmp_path / "budget.txt").read_text(encoding="utf-8") == "new"


def test_write_creates_parent_directories(tmp_path):
    storage = LedgerFileStorage(tmp_path)

    storage.write("nested/dir/budget.txt", "x")

    assert (tmp_path / "nested" / "dir" / "budget.txt").exists()


def test_read_missing_file(tmp_path):
    with pytest.raises(StorageUnavailableError):
        LedgerFileStorage(tmp_path).read("missing.txt")


def test_read_directory(tmp_path):
    (tmp_path / "folder").mkdir()

    with pytest.raises(StorageUnavailableError):
        LedgerFileStorage(tmp_path).read("folder")


def test_write_below_a_file_fails(tmp_path):
    (tmp_path / "blocker").write_text("", encoding="utf-8")

    with pytest.raises(StorageUnavailableError):
        LedgerFileStorage(tmp_path).write("blocker/budget.txt", "x")


def test_absolute_paths_ignore_base(tmp_path):
    storage = LedgerFileStorage(tmp_path / "elsewhere")
    target = tmp_path / "absolute.txt"

    storage.write(target, "abs")

    assert storage.read(target) == "abs"
