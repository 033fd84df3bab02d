import io

import pytest

from wav_to_c.convert import convert, default_array_name
from wav_to_c.errors import (
    SampleCountExceeded,
    UnsupportedBitDepth,
    UnsupportedEncoding,
)
from wav_to_c.serializer import NumericBase, SerializationOptions

OPTIONS = SerializationOptions(array_name="sound", emit_comment=False)


def test_mono_8bit_scenario(wav_stream):
    fmt, out = convert(wav_stream([10, -5], bits=8), OPTIONS)
    assert fmt.bits_per_sample == 8
    assert out.body == (
        "#define SOUND_SAMPLE_NO 2\n\nconst int8_t sound[] = {\n\t 10, -5,\n};"
    )


def test_stereo_16bit_scenario(wav_stream):
    _, out = convert(wav_stream([100, 200], channels=2, bits=16), OPTIONS)
    assert "#define SOUND_SAMPLE_NO 1\n" in out.body
    assert "\t 150,\n" in out.body


@pytest.mark.parametrize("frames", [0, 1, 8, 13, 64])
def test_literal_count_matches_frames(wav_stream, frames):
    _, out = convert(wav_stream(list(range(frames)), bits=16), OPTIONS)
    assert out.body.split("= {", 1)[1].count(",") == frames
    assert f"#define SOUND_SAMPLE_NO {frames}\n" in out.body


def test_hex_scenario(wav_stream):
    options = SerializationOptions(array_name="s", emit_comment=False, numeric_base=NumericBase.HEX)
    _, out = convert(wav_stream([-1], bits=16), options)
    assert "\t 0xffff,\n" in out.body


def test_strictness_limit(wav_stream):
    with pytest.raises(UnsupportedBitDepth) as exc:
        convert(wav_stream([1], bits=24), OPTIONS, max_bits_per_sample=16)
    assert exc.value.limit == 16
    assert exc.value.bits_per_sample == 24


def test_strictness_allows_narrower(wav_stream):
    _, out = convert(wav_stream([1], bits=16), OPTIONS, max_bits_per_sample=16)
    assert "int16_t" in out.body


def test_float_reports_encoding_not_depth(wav_stream):
    with pytest.raises(UnsupportedEncoding):
        convert(wav_stream(data=b"\x00" * 4, bits=32, tag=3), OPTIONS, max_bits_per_sample=16)


def test_bound_applies_to_downmixed_frames(wav_stream):
    options = SerializationOptions(array_name="s", max_samples=2)
    # four stereo samples are two frames
    convert(wav_stream([1, 2, 3, 4], channels=2, bits=16), options)
    with pytest.raises(SampleCountExceeded):
        convert(wav_stream([1, 2, 3, 4, 5, 6], channels=2, bits=16), options)


@pytest.mark.parametrize(
    "path, expected",
    [
        ("sounds/Beep.WAV", "beep"),
        ("Door Bell.wav", "door bell"),
        ("/tmp/MONO_8BIT.wav", "mono_8bit"),
    ],
)
def test_default_array_name(path, expected):
    assert default_array_name(path) == expected
