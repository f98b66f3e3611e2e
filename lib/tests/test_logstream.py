from __future__ import annotations

import struct

from portainer_client import logstream


def _frame(stream: int, payload: bytes, *, size: int | None = None) -> bytes:
    declared = len(payload) if size is None else size
    return bytes([stream, 0, 0, 0]) + struct.pack(">I", declared) + payload


def test_demux_empty_buffer() -> None:
    assert logstream.demux(b"") == ""


def test_demux_interleaves_streams_in_wire_order() -> None:
    data = _frame(logstream.STDOUT, b"hello ") + _frame(logstream.STDERR, b"world")

    assert logstream.demux(data) == "hello world"


def test_demux_tty_payload_is_returned_verbatim() -> None:
    text = "2024-01-01 started\nlistening on :80\n"

    assert logstream.demux(text.encode("utf-8")) == text


def test_demux_high_first_byte_skips_frame_parsing() -> None:
    # would be a 4-byte frame if it were parsed as a header
    data = b"\xff\x00\x00\x00\x00\x00\x00\x04abcd"

    out = logstream.demux(data)

    assert out.endswith("abcd")
    assert len(out) == len(data)


def test_demux_truncated_final_frame_keeps_remaining_bytes() -> None:
    data = _frame(logstream.STDOUT, b"complete\n") + _frame(logstream.STDERR, b"partial", size=100)

    assert logstream.demux(data) == "complete\npartial"


def test_demux_skips_zero_length_frames() -> None:
    data = _frame(logstream.STDOUT, b"") + _frame(logstream.STDOUT, b"after")

    assert logstream.demux(data) == "after"


def test_demux_drops_trailing_partial_header() -> None:
    data = _frame(logstream.STDOUT, b"line\n") + b"\x01\x00\x00"

    assert logstream.demux(data) == "line\n"


def test_demux_decodes_multibyte_utf8_per_frame() -> None:
    data = _frame(logstream.STDOUT, "привет ".encode("utf-8")) + _frame(logstream.STDERR, "мир".encode("utf-8"))

    assert logstream.demux(data) == "привет мир"


def test_iter_frames_reports_stream_tags() -> None:
    data = _frame(logstream.STDIN, b"in") + _frame(logstream.STDOUT, b"out") + _frame(logstream.STDERR, b"err")

    assert list(logstream.iter_frames(data)) == [
        (logstream.STDIN, b"in"),
        (logstream.STDOUT, b"out"),
        (logstream.STDERR, b"err"),
    ]


def test_is_multiplexed() -> None:
    assert logstream.is_multiplexed(b"\x02rest") is True
    assert logstream.is_multiplexed(b"plain") is False
    assert logstream.is_multiplexed(b"") is False
