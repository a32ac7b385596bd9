# tests/utils/test_files.py
from mathnotes.utils.files import write_file_atomic, delete_file, list_files_with_prefix


def test_write_file_atomic(temp_storage_dir):
    """Test writing a file and overwriting it"""
    target = temp_storage_dir / "nested" / "blob.bin"

    write_file_atomic(target, b"first")
    write_file_atomic(target, b"second")

    assert target.read_bytes() == b"second"
    assert [p.name for p in target.parent.iterdir()] == ["blob.bin"]


def test_delete_file(temp_storage_dir):
    target = temp_storage_dir / "gone.bin"
    target.write_bytes(b"x")

    assert delete_file(target) is True
    assert not target.exists()
    assert delete_file(target) is False


def test_list_files_with_prefix(temp_storage_dir):
    directory = temp_storage_dir / "pages"
    for name in ["k_page_1", "k_page_0", "other_page_0"]:
        (directory / name).write_bytes(b"x")
    (directory / "k_page_dir").mkdir()

    assert [p.name for p in list_files_with_prefix(directory, "k_page_")] == ["k_page_0", "k_page_1"]
    assert list_files_with_prefix(temp_storage_dir / "missing", "k") == []

