"""Tests for PCM decoding and WAV packaging."""

from __future__ import annotations

import base64
import struct

import pytest

from services.audio_codec import (
    WAV_HEADER_SIZE,
    build_wav,
    decode,
    parse_wav_header,
    pcm_to_float,
)
from services.errors import MalformedAudioError


def _pcm(*samples: int) -> bytes:
    return struct.pack(f"<{len(samples)}h", *samples)


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


# ---------------------------------------------------------------
# decode
# ---------------------------------------------------------------

def test_decode_two_zero_samples() -> None:
    buffer = decode(_b64(b"\x00\x00\x00\x00"), 24000, 1)

    assert buffer.sample_rate == 24000
    assert buffer.channel_count == 1
    assert buffer.channels[0].tolist() == [0.0, 0.0]


def test_decode_uses_asymmetric_divisor() -> None:
    buffer = decode(_b64(_pcm(-32768, 32767, 16384)), 24000, 1)
    samples = buffer.channels[0].tolist()

    assert samples[0] == -1.0
    assert samples[1] == pytest.approx(32767 / 32768.0)
    assert samples[1] < 1.0
    assert samples[2] == 0.5


def test_decode_deinterleaves_channels() -> None:
    buffer = decode(_b64(_pcm(100, -100, 200, -200, 300, -300)), 16000, 2)

    assert buffer.channel_count == 2
    assert buffer.frame_count == 3
    assert buffer.channels[0].tolist() == pytest.approx([100 / 32768.0, 200 / 32768.0, 300 / 32768.0])
    assert buffer.channels[1].tolist() == pytest.approx([-100 / 32768.0, -200 / 32768.0, -300 / 32768.0])


@pytest.mark.parametrize("channels, n_samples", [(1, 0), (1, 7), (2, 10), (3, 9)])
def test_frame_count_and_range(channels: int, n_samples: int) -> None:
    samples = [((i * 7919) % 65536) - 32768 for i in range(n_samples)]
    payload = _pcm(*samples)

    buffer = pcm_to_float(payload, 24000, channels)

    assert buffer.frame_count == len(payload) // 2 // channels
    for channel in buffer.channels:
        assert all(-1.0 <= s < 1.0 for s in channel.tolist())


def test_decode_is_deterministic() -> None:
    payload = _b64(_pcm(1, -2, 3, -4, 32767, -32768))

    first = decode(payload, 24000, 1)
    second = decode(payload, 24000, 1)

    assert first.channels[0].tolist() == second.channels[0].tolist()


def test_decode_rejects_odd_byte_length() -> None:
    with pytest.raises(MalformedAudioError):
        decode(_b64(b"\x00\x00\x00"), 24000, 1)


def test_decode_rejects_partial_stereo_frame() -> None:
    with pytest.raises(MalformedAudioError):
        decode(_b64(_pcm(1, 2, 3)), 24000, 2)


def test_decode_rejects_invalid_base64() -> None:
    with pytest.raises(MalformedAudioError):
        decode("not base64!!", 24000, 1)


# ---------------------------------------------------------------
# build_wav / parse_wav_header
# ---------------------------------------------------------------

def test_build_wav_layout_for_default_service_audio() -> None:
    pcm = _pcm(0, 1, -1, 2)
    wav = build_wav(pcm)

    assert len(wav) == WAV_HEADER_SIZE + len(pcm)
    assert wav[0:4] == b"RIFF"
    assert wav[8:12] == b"WAVE"
    assert wav[12:16] == b"fmt "
    assert wav[36:40] == b"data"
    assert struct.unpack_from("<I", wav, 4)[0] == 36 + len(pcm)
    assert struct.unpack_from("<I", wav, 16)[0] == 16
    assert struct.unpack_from("<H", wav, 20)[0] == 1
    assert struct.unpack_from("<H", wav, 22)[0] == 1
    assert struct.unpack_from("<I", wav, 24)[0] == 24000
    assert struct.unpack_from("<I", wav, 28)[0] == 48000
    assert struct.unpack_from("<H", wav, 32)[0] == 2
    assert struct.unpack_from("<H", wav, 34)[0] == 16
    assert struct.unpack_from("<I", wav, 40)[0] == len(pcm)
    assert wav[WAV_HEADER_SIZE:] == pcm


def test_build_wav_keeps_odd_length_data_verbatim() -> None:
    pcm = b"\x01\x02\x03"
    wav = build_wav(pcm)

    assert len(wav) == 47
    assert wav[WAV_HEADER_SIZE:] == pcm


def test_build_wav_empty_data_is_header_only() -> None:
    wav = build_wav(b"")

    assert len(wav) == WAV_HEADER_SIZE
    assert parse_wav_header(wav).data_length == 0


def test_header_round_trip() -> None:
    pcm = b"\x00" * 1200
    header = parse_wav_header(build_wav(pcm, sample_rate=44100, channel_count=2, bits_per_sample=16))

    assert header.sample_rate == 44100
    assert header.channel_count == 2
    assert header.bits_per_sample == 16
    assert header.data_length == 1200
    assert header.chunk_size == 36 + 1200
    assert header.byte_rate == 44100 * 2 * 2
    assert header.block_align == 4
    assert header.audio_format == 1


@pytest.mark.parametrize(
    "kwargs",
    [
        {"sample_rate": 0},
        {"channel_count": -1},
        {"bits_per_sample": 12},
        {"sample_rate": 24000.5},
    ],
)
def test_build_wav_rejects_invalid_fields(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        build_wav(b"\x00\x00", **kwargs)


def test_parse_rejects_non_wav() -> None:
    with pytest.raises(MalformedAudioError):
        parse_wav_header(b"\x00" * 44)
    with pytest.raises(MalformedAudioError):
        parse_wav_header(b"RIFF")
