import pytest

from ragassist.files import chunk_file_content, find_project_files


def _numbered(count):
    return [f"line{i}" for i in range(count)]


def test_empty_content_has_no_chunks():
    assert chunk_file_content("", 40, 5) == []


def test_only_blank_lines_has_no_chunks():
    assert chunk_file_content("\n\n\r\n", 40, 5) == []


def test_short_content_is_one_chunk_without_blank_lines():
    assert chunk_file_content("a\n\nb\r\nc\rd\n", 40, 5) == ["a\nb\nc\nd"]


def test_chunks_overlap_and_cover_all_lines():
    lines = _numbered(100)
    chunks = [chunk.split("\n") for chunk in chunk_file_content("\n".join(lines), 40, 5)]
    assert chunks[0][0] == lines[0]
    assert chunks[-1][-1] == lines[-1]
    assert all(len(chunk) <= 40 for chunk in chunks)
    for previous, current in zip(chunks, chunks[1:]):
        assert current[:5] == previous[-5:]
    covered = {line for chunk in chunks for line in chunk}
    assert covered == set(lines)


def test_no_overlap_partitions_lines():
    lines = _numbered(25)
    chunks = chunk_file_content("\n".join(lines), 10, 0)
    assert "\n".join(chunks).split("\n") == lines


def test_full_overlap_advances_one_line():
    lines = _numbered(6)
    chunks = chunk_file_content("\n".join(lines), 3, 3)
    assert len(chunks) == len(lines)
    assert [chunk.split("\n")[0] for chunk in chunks] == lines


def test_overlap_larger_than_chunk_raises():
    with pytest.raises(ValueError):
        chunk_file_content("a\nb", 2, 5)


def test_find_files_in_extension_order(tmp_path):
    (tmp_path / "sub").mkdir()
    (tmp_path / "a.h").write_text("x")
    (tmp_path / "sub" / "b.h").write_text("x")
    (tmp_path / "sub" / "c.cpp").write_text("x")
    (tmp_path / "notes.txt").write_text("x")
    (tmp_path / "folder.h").mkdir()

    found = find_project_files(tmp_path, ["*.h", "*.cpp"])
    assert found == [
        str(tmp_path / "a.h"),
        str(tmp_path / "sub" / "b.h"),
        str(tmp_path / "sub" / "c.cpp"),
    ]


def test_find_files_without_matches(tmp_path):
    (tmp_path / "readme.md").write_text("x")
    assert find_project_files(tmp_path, ["*.cpp"]) == []


def test_find_files_empty_root_or_extensions(tmp_path):
    (tmp_path / "a.h").write_text("x")
    assert find_project_files("", ["*.h"]) == []
    assert find_project_files(tmp_path, []) == []


def test_find_files_missing_directory(tmp_path):
    assert find_project_files(tmp_path / "absent", ["*.h"]) == []