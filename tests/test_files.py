import pathlib

import pytest

from flatini import files
from flatini.exceptions import DestinationUnwritable, MissingSeparator, SourceUnavailable

SECTIONS = {
    "声": {"あ": "a", "い": "i", "う": "u"},
    "設定": {"名前": "テスト", "説明": "これはテストの設定ファイルです。"},
}
ENCODINGS = ["shift_jis", "utf_8"]


def write_sections(path: pathlib.Path, encoding: str):
    with path.open("w", encoding=encoding) as f:
        for name, properties in SECTIONS.items():
            print(f"[{name}]", file=f)
            for key, value in properties.items():
                print(f"{key}={value}", file=f)


def test_read(tmp_path: pathlib.Path):
    path = tmp_path / "test.ini"
    write_sections(path, "utf_8")

    assert files.read(path) == SECTIONS


@pytest.mark.parametrize("encoding", ENCODINGS)
def test_read_given_encoding(tmp_path: pathlib.Path, encoding: str):
    path = tmp_path / f"test_{encoding}.ini"
    write_sections(path, encoding)

    assert files.read(path, encoding=encoding) == SECTIONS


def test_read_empty(tmp_path: pathlib.Path):
    path = tmp_path / "empty.ini"
    path.touch()

    assert files.read(path) == {}


def test_read_missing(tmp_path: pathlib.Path):
    with pytest.raises(SourceUnavailable) as excinfo:
        files.read(tmp_path / "missing.ini")

    assert isinstance(excinfo.value.__cause__, FileNotFoundError)


def test_read_undecodable(tmp_path: pathlib.Path):
    path = tmp_path / "bad.ini"
    path.write_bytes(b"[s]\nkey = \xff\xfe\xfa\n")

    with pytest.raises(SourceUnavailable):
        files.read(path, encoding="utf-8")


def test_read_parse_error(tmp_path: pathlib.Path):
    path = tmp_path / "broken.ini"
    path.write_text("[s]\nbroken\n", encoding="utf-8")

    with pytest.raises(MissingSeparator):
        files.read(path)


def test_write(tmp_path: pathlib.Path):
    path = tmp_path / "out.ini"
    files.write(SECTIONS, path)

    assert files.read(path, encoding="utf-8") == SECTIONS


def test_write_unwritable(tmp_path: pathlib.Path):
    with pytest.raises(DestinationUnwritable):
        files.write(SECTIONS, tmp_path / "missing" / "out.ini")


def test_detect_encoding():
    assert files.detect_encoding([]) is None
    assert files.detect_encoding([b""]) is None
    assert files.detect_encoding([str(SECTIONS).encode("utf-8")]) == "utf-8"


def test_resolve_encoding(tmp_path: pathlib.Path):
    path = tmp_path / "test.ini"

    path.write_text("[s]\nkey = value\n", encoding="ascii")
    assert files.resolve_encoding(path) == "utf-8"
    assert files.resolve_encoding(path, "latin_1") == "latin_1"

    path.write_bytes(b"")
    assert files.resolve_encoding(path) == "utf-8"


def test_resolve_encoding_missing(tmp_path: pathlib.Path):
    with pytest.raises(SourceUnavailable):
        files.resolve_encoding(tmp_path / "missing.ini")
