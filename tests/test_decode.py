import logging

import pytest

from respool import StringPool, StringWindowError
from respool.chunks import StringEncoding

WORDS = ["", "a", "hello", "Hello, World!", "res/layout/main.xml"]


def test_ascii_strings_decode_back(make_chunk):
    pool = StringPool.from_bytes(make_chunk(WORDS))
    assert pool.count() == len(WORDS)
    for i, word in enumerate(WORDS):
        assert pool.string(i) == word


@pytest.mark.parametrize("index", [-1, -100, 5, 6, 1000])
def test_out_of_range_is_none(make_chunk, index):
    pool = StringPool.from_bytes(make_chunk(WORDS))
    assert pool.string(index) is None
    assert pool.styled_string(index) is None
    assert pool.html(index) is None


def test_empty_pool(make_chunk):
    pool = StringPool.from_bytes(make_chunk([]))
    assert pool.count() == 0
    assert pool.string(0) is None
    assert list(pool.iter_strings()) == []


def test_utf8_matches_utf16(make_chunk):
    words = WORDS + ["héllo wörld", "日本語", "x" * 200]
    utf16 = StringPool.from_bytes(make_chunk(words))
    utf8 = StringPool.from_bytes(make_chunk(words, utf8=True))
    assert utf8.is_utf8
    for i in range(len(words)):
        assert utf8.string(i) == utf16.string(i) == words[i]


def test_utf8_two_byte_length(make_chunk):
    text = "y" * 0x1234
    pool = StringPool.from_bytes(make_chunk(["short", text], utf8=True))
    assert pool.string(1) == text


def test_non_bmp_utf16(make_chunk):
    pool = StringPool.from_bytes(make_chunk(["emoji \U0001F600"]))
    assert pool.string(0) == "emoji \U0001F600"


def test_styled_string_is_raw(overlap_chunk):
    pool = StringPool.from_bytes(overlap_chunk)
    assert pool.styled_string(2) == pool.string(2) == "abcdefg"


def test_iter_strings(make_chunk):
    pool = StringPool.from_bytes(make_chunk(["a", "b"]))
    assert list(pool.iter_strings()) == [(0, "a"), (1, "b")]


def test_invalid_utf8_is_reported(make_chunk, caplog):
    reports = []
    pool = StringPool.from_bytes(
        make_chunk(["ok", b"\xff\xfe", "fine"], utf8=True),
        reporter=lambda index, err: reports.append((index, err)),
    )
    with caplog.at_level(logging.WARNING, logger="respool.pool"):
        assert pool.string(1) is None
    assert pool.string(0) == "ok"
    assert pool.string(2) == "fine"
    assert len(reports) == 1
    assert reports[0][0] == 1
    assert isinstance(reports[0][1], UnicodeDecodeError)
    assert "Failed to decode string 1" in caplog.text


def test_lone_surrogate_utf16(make_chunk):
    reports = []
    pool = StringPool.from_bytes(
        make_chunk([b"\x00\xd8", "after"]),
        reporter=lambda index, err: reports.append(index),
    )
    assert pool.string(0) is None
    assert pool.html(0) is None
    assert pool.string(1) == "after"
    assert reports == [0, 0]


def test_offset_past_string_data():
    reports = []
    pool = StringPool(
        string_offsets=(0, 400),
        string_bytes=b"\x01\x00a\x00",
        reporter=lambda index, err: reports.append((index, err)),
    )
    assert pool.string(0) == "a"
    assert pool.string(1) is None
    assert reports[0][0] == 1
    assert isinstance(reports[0][1], StringWindowError)


def test_length_runs_past_string_data():
    pool = StringPool(string_offsets=(0,), string_bytes=b"\x05\x00a\x00")
    assert pool.string(0) is None


def test_utf8_varint_past_end():
    pool = StringPool(
        string_offsets=(3,),
        string_bytes=b"\x00\x00\x00\x81",
        encoding=StringEncoding.UTF8,
    )
    assert pool.string(0) is None


def test_pool_is_frozen(make_chunk):
    pool = StringPool.from_bytes(make_chunk(["a"]))
    with pytest.raises(AttributeError):
        pool.string_bytes = b""
