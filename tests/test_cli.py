import logging

import pytest

from bencoding import ByteString, Dictionary, Integer, List, decode
from bencoding._pretty import format_value
from bencoding.cli import EXIT_ERROR, EXIT_MISMATCH, EXIT_OK, main


@pytest.fixture
def write(tmp_path):
    def _write(data: bytes):
        path = tmp_path / "sample.torrent"
        path.write_bytes(data)
        return path

    return _write


def test_round_trip_ok(write, capsys, caplog):
    path = write(b"d3:cow3:moo4:spaml1:a1:bee")
    with caplog.at_level(logging.INFO, logger="bencoding.cli"):
        assert main([str(path)]) == EXIT_OK
    out = capsys.readouterr().out
    assert "'cow': 'moo'" in out
    assert "round trip OK" in caplog.text


def test_show_encoded(write, capsys):
    path = write(b"li1ee")
    assert main([str(path), "--show-encoded"]) == EXIT_OK
    assert "b'li1ee'" in capsys.readouterr().out


def test_non_canonical(write, caplog):
    path = write(b"d4:spam4:eggs3:cow3:mooe")
    assert main([str(path)]) == EXIT_MISMATCH
    assert "not in canonical form" in caplog.text


def test_non_canonical_without_verify(write):
    path = write(b"d4:spam4:eggs3:cow3:mooe")
    assert main([str(path), "--no-verify"]) == EXIT_OK


def test_invalid_input(write, caplog):
    path = write(b"i03e")
    assert main([str(path)]) == EXIT_ERROR
    assert "invalid integer" in caplog.text


def test_missing_file(tmp_path):
    assert main([str(tmp_path / "nope.torrent")]) == EXIT_ERROR


def test_strict_keys(write):
    path = write(b"d1:ai1e1:ai2ee")
    assert main([str(path), "--no-verify"]) == EXIT_OK
    assert main([str(path), "--strict-keys"]) == EXIT_ERROR


def test_max_depth(write):
    path = write(b"llee")
    assert main([str(path), "--max-depth", "2"]) == EXIT_OK
    assert main([str(path), "--max-depth", "1"]) == EXIT_ERROR


def test_format_value():
    text = format_value(decode(b"d3:cow3:moo4:spaml1:a1:bee"))
    assert text == "{\n  'cow': 'moo'\n  'spam': [\n    'a'\n    'b'\n  ]\n}"


def test_format_value_scalars():
    assert format_value(Integer(-3)) == "-3"
    assert format_value(List()) == "[]"
    assert format_value(Dictionary()) == "{}"
    assert format_value(ByteString(b"\x00" * 20)) == "<20 bytes: " + "00" * 16 + "...>"
    assert format_value(ByteString(b"\xff\xfe")) == "<2 bytes: fffe>"
