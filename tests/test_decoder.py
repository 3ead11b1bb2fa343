import codecs

import pytest

from bookpack import OpenError, TextDecoder, UnreadableTextError, decode, load_text


def test_ascii_decodes_as_utf8():
    result = decode(b"Plain old ASCII text.\n")

    assert result.encoding == "utf-8"
    assert result.text == "Plain old ASCII text.\n"


def test_utf8_multibyte():
    result = decode("第一章 出発".encode("utf-8"))

    assert result.encoding == "utf-8"
    assert result.text == "第一章 出発"


def test_utf16_with_bom():
    result = decode("héllo wörld".encode("utf-16"))

    assert result.encoding == "utf-16"
    assert result.text == "héllo wörld"


def test_utf32_with_bom():
    data = codecs.BOM_UTF32_LE + "hi".encode("utf-32-le")
    result = decode(data)

    assert result.encoding == "utf-32"
    assert result.text == "hi"


def test_latin1_fallback_for_even_length_input_without_bom():
    result = decode(b"caf\xe9s!")

    assert result.encoding == "latin-1"
    assert result.text == "cafés!"


def test_utf16_without_bom_is_not_detected():
    data = "第一章".encode("utf-16-le")

    result = decode(data)

    assert result.encoding == "latin-1"
    assert result.text == data.decode("latin-1")


def test_custom_candidates_reach_shift_jis():
    decoder = TextDecoder(candidates=("utf-8", "shift_jis"))
    result = decoder.decode("日本語".encode("shift_jis"))

    assert result.encoding == "shift_jis"
    assert result.text == "日本語"


def test_all_candidates_failing_raises():
    decoder = TextDecoder(candidates=("utf-8", "ascii"))

    with pytest.raises(UnreadableTextError):
        decoder.decode(b"\xff\xfe\xfd")


def test_load_text(tmp_path):
    path = tmp_path / "book.txt"
    path.write_bytes("作者：某人\n".encode("utf-8"))

    result = load_text(path)

    assert result.text == "作者：某人\n"
    assert result.encoding == "utf-8"


def test_load_text_missing_file(tmp_path):
    with pytest.raises(OpenError):
        load_text(tmp_path / "missing.txt")
