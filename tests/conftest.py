import io
import struct

import pytest

from wav_to_c.decoder import KSDATAFORMAT_GUID_TAIL, WAVE_FORMAT_EXTENSIBLE


def encode_samples(samples, width):
    """Pack container values little-endian; 1-byte samples get the 128 offset."""
    if width == 1:
        return bytes((v + 128) & 0xFF for v in samples)
    return b"".join(int(v).to_bytes(width, "little", signed=True) for v in samples)


def chunk(chunk_id, body, size=None):
    size = len(body) if size is None else size
    pad = b"\x00" if len(body) % 2 else b""
    return struct.pack("<4sI", chunk_id, size) + body + pad


def build_wav(
    samples=(),
    *,
    channels=1,
    bits=16,
    rate=8000,
    tag=1,
    container=None,
    block_align=None,
    extensible_tag=None,
    valid_bits=None,
    extra_chunks=(),
    data=None,
    data_size=None,
    fmt_body=None,
    include_fmt=True,
    include_data=True,
    data_first=False,
):
    width = container or (bits + 7) // 8
    if block_align is None:
        block_align = width * channels
    if fmt_body is None:
        fmt_tag = WAVE_FORMAT_EXTENSIBLE if extensible_tag is not None else tag
        fmt_body = struct.pack(
            "<HHIIHH", fmt_tag, channels, rate, rate * block_align, block_align, bits
        )
        if extensible_tag is not None:
            fmt_body += struct.pack(
                "<HHIH14s",
                22,
                valid_bits if valid_bits is not None else bits,
                0x3 if channels == 2 else 0x4,
                extensible_tag,
                KSDATAFORMAT_GUID_TAIL,
            )
    if data is None:
        data = encode_samples(samples, width)

    chunks = list(extra_chunks)
    fmt_chunk = chunk(b"fmt ", fmt_body) if include_fmt else b""
    data_chunk = chunk(b"data", data, data_size) if include_data else b""
    if data_first:
        chunks += [data_chunk, fmt_chunk]
    else:
        chunks += [fmt_chunk, data_chunk]
    body = b"WAVE" + b"".join(chunks)
    return b"RIFF" + struct.pack("<I", len(body)) + body


@pytest.fixture
def make_wav():
    """Return a factory building WAV bytes in memory."""
    return build_wav


@pytest.fixture
def wav_stream():
    def _stream(*args, **kwargs):
        return io.BytesIO(build_wav(*args, **kwargs))

    return _stream


@pytest.fixture
def wav_file(tmp_path):
    def _write(*args, name="sound.wav", **kwargs):
        path = tmp_path / name
        path.write_bytes(build_wav(*args, **kwargs))
        return path

    return _write
