import pytest

from crcdiff.errors import MalformedLineError, ManifestMissingError, PathNotFoundError
from crcdiff.manifest import parse_manifest_line, parse_manifest_lines, read_manifest, resolve_manifest_path


def test_split_on_last_space_keeps_spaces_in_paths():
    entry = parse_manifest_line("/data/my report 2024.pdf -12345")

    assert entry.path == "/data/my report 2024.pdf"
    assert entry.checksum == -12345


@pytest.mark.parametrize(
    "line, reason",
    [
        ("no-separator-here", "missing separator"),
        ("a.txt abc", "invalid checksum"),
        ("a.txt 12abc", "invalid checksum"),
        ("a.txt ", "invalid checksum"),
        ("a.txt 2147483648", "invalid checksum"),
        ("a.txt -2147483649", "invalid checksum"),
    ],
)
def test_malformed_lines_raise_with_reason(line, reason):
    with pytest.raises(MalformedLineError) as excinfo:
        parse_manifest_line(line)

    assert excinfo.value.reason == reason


def test_malformed_lines_are_counted_and_parsing_continues():
    result = parse_manifest_lines(
        [
            "a.txt 1\n",
            "garbage\n",
            "\n",
            "b.txt notanumber\n",
            "c.txt -3\n",
        ]
    )

    assert result.entries == {"a.txt": 1, "c.txt": -3}
    assert result.valid_lines == 2
    assert result.error_count == 2
    assert [(bad.line_number, bad.reason) for bad in result.malformed] == [
        (2, "missing separator"),
        (4, "invalid checksum"),
    ]


def test_blank_lines_are_not_errors():
    result = parse_manifest_lines(["\n", "", "\r\n", "a.txt 5\r\n"])

    assert result.entries == {"a.txt": 5}
    assert result.error_count == 0


def test_whitespace_only_line_is_malformed_not_blank():
    result = parse_manifest_lines(["a.txt 5\n", "   \n"])

    assert result.entries == {"a.txt": 5}
    assert [(bad.line_number, bad.reason) for bad in result.malformed] == [(2, "invalid checksum")]


def test_duplicate_paths_last_line_wins():
    result = parse_manifest_lines(["a.txt 1", "b.txt 2", "a.txt 3"])

    assert result.entries == {"a.txt": 3, "b.txt": 2}


def test_folder_location_resolves_to_its_manifest(tmp_path):
    (tmp_path / "checksum.txt").write_text("x 1\n", encoding="utf-8")

    assert resolve_manifest_path(tmp_path) == tmp_path / "checksum.txt"
    assert read_manifest(tmp_path).entries == {"x": 1}


def test_manifest_file_can_be_given_directly(tmp_path):
    manifest = tmp_path / "snapshot.txt"
    manifest.write_text("x 1\ny 2\n", encoding="utf-8")

    result = read_manifest(manifest)

    assert result.entries == {"x": 1, "y": 2}
    assert result.source == str(manifest)


def test_folder_without_manifest(tmp_path):
    with pytest.raises(ManifestMissingError) as excinfo:
        read_manifest(tmp_path)

    assert excinfo.value.kind == "manifest-missing"
    assert "checksum.txt" in str(excinfo.value)


def test_missing_location(tmp_path):
    with pytest.raises(PathNotFoundError):
        read_manifest(tmp_path / "nope")


def test_custom_manifest_name(tmp_path):
    (tmp_path / "sums.txt").write_text("x 7\n", encoding="utf-8")

    assert read_manifest(tmp_path, manifest_name="sums.txt").entries == {"x": 7}
    with pytest.raises(ManifestMissingError):
        read_manifest(tmp_path)
