import pytest

from crcdiff.config import parse_exclude_patterns, resolve_crc_backend, resolve_manifest_name


def test_exclude_patterns_are_trimmed_and_empty_tokens_dropped():
    assert parse_exclude_patterns(" .git ,\tnode_modules\t,, build ") == [".git", "node_modules", "build"]


def test_blank_exclude_input_means_no_patterns():
    assert parse_exclude_patterns("") == []
    assert parse_exclude_patterns(" , ") == []


def test_crc_backend_defaults_to_zlib(monkeypatch):
    monkeypatch.delenv("CRCDIFF_CRC_BACKEND", raising=False)
    assert resolve_crc_backend() == "zlib"
    assert resolve_crc_backend("TABLE") == "table"


def test_unknown_crc_backend_is_rejected():
    with pytest.raises(ValueError):
        resolve_crc_backend("crc64")


def test_manifest_name_from_environment(monkeypatch):
    monkeypatch.setenv("CRCDIFF_MANIFEST_NAME", "sums.txt")
    assert resolve_manifest_name() == "sums.txt"
    assert resolve_manifest_name("other.txt") == "other.txt"


@pytest.mark.parametrize("name", ["sub/checksum.txt", "..", "a\\b.txt", "   "])
def test_manifest_name_must_be_a_plain_file_name(name):
    with pytest.raises(ValueError):
        resolve_manifest_name(name)
