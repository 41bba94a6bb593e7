"""
Audio Codec - raw PCM decoding and WAV packaging.

The speech service returns base64 encoded little-endian 16-bit PCM.
This module turns that payload into float samples for playback, or
wraps the raw bytes in a 44-byte RIFF/WAVE header for download.

Pure Python + numpy, no Streamlit dependencies.
"""

import base64
import binascii
import struct

import numpy as np

from models.audio import FloatAudioBuffer, WavHeader
from services.errors import MalformedAudioError

DEFAULT_SAMPLE_RATE = 24000
DEFAULT_CHANNELS = 1
DEFAULT_BITS_PER_SAMPLE = 16

WAV_HEADER_SIZE = 44
# RIFF chunk size counts everything after the first 8 bytes
RIFF_OVERHEAD = 36
_UINT32_MAX = 0xFFFFFFFF

# "<4sI4s4sIHHIIHH4sI": RIFF, size, WAVE, fmt , 16, format, channels,
# rate, byte rate, block align, bits, data, data length
_HEADER_STRUCT = struct.Struct("<4sI4s4sIHHIIHH4sI")


def decode_base64(payload: str) -> bytes:
    """Decode a base64 payload, rejecting anything that is not base64."""
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedAudioError(f"Audio payload is not valid base64: {e}") from e


def validate_frames(pcm_bytes: bytes, channel_count: int):
    """Reject PCM that is not a whole number of 16-bit frames."""
    if channel_count < 1:
        raise MalformedAudioError(f"Invalid channel count: {channel_count}")

    frame_size = 2 * channel_count
    if len(pcm_bytes) % frame_size:
        raise MalformedAudioError(
            f"PCM length {len(pcm_bytes)} is not a multiple of {frame_size} bytes"
        )


def pcm_to_float(pcm_bytes: bytes, sample_rate: int, channel_count: int) -> FloatAudioBuffer:
    """
    Convert interleaved 16-bit PCM bytes to per-channel float samples.

    Each sample is divided by 32768, so -32768 maps to -1.0 and +32767
    maps to 0.99997 (never exactly 1.0).

    Raises:
        MalformedAudioError: if the byte length is not a whole number of frames
    """
    validate_frames(pcm_bytes, channel_count)
    samples = np.frombuffer(pcm_bytes, dtype="<i2")
    frames = samples.reshape(-1, channel_count)
    channels = [
        (frames[:, c].astype(np.float32) / np.float32(32768.0))
        for c in range(channel_count)
    ]
    return FloatAudioBuffer(sample_rate=sample_rate, channels=channels)


def decode(base64_payload: str, sample_rate: int = DEFAULT_SAMPLE_RATE,
           channel_count: int = DEFAULT_CHANNELS) -> FloatAudioBuffer:
    """Decode a base64 PCM payload into a playable float buffer."""
    return pcm_to_float(decode_base64(base64_payload), sample_rate, channel_count)


def build_wav(
    pcm_bytes: bytes,
    sample_rate: int = DEFAULT_SAMPLE_RATE,
    channel_count: int = DEFAULT_CHANNELS,
    bits_per_sample: int = DEFAULT_BITS_PER_SAMPLE,
) -> bytes:
    """
    Wrap raw PCM bytes in a canonical 44-byte WAV header.

    The PCM data is copied verbatim after the header.

    Raises:
        ValueError: if a header field cannot be represented
    """
    data_length = len(pcm_bytes)
    for name, value in (
        ("sample_rate", sample_rate),
        ("channel_count", channel_count),
        ("bits_per_sample", bits_per_sample),
    ):
        if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
            raise ValueError(f"{name} must be a positive integer, got {value!r}")
    if bits_per_sample % 8:
        raise ValueError(f"bits_per_sample must be a multiple of 8, got {bits_per_sample}")
    if data_length > _UINT32_MAX - RIFF_OVERHEAD:
        raise ValueError(f"PCM data too large for a WAV file: {data_length} bytes")

    bytes_per_sample = bits_per_sample // 8
    block_align = channel_count * bytes_per_sample
    byte_rate = sample_rate * block_align

    header = _HEADER_STRUCT.pack(
        b"RIFF",
        RIFF_OVERHEAD + data_length,
        b"WAVE",
        b"fmt ",
        16,
        1,
        channel_count,
        sample_rate,
        byte_rate,
        block_align,
        bits_per_sample,
        b"data",
        data_length,
    )
    return header + bytes(pcm_bytes)


def parse_wav_header(wav_bytes: bytes) -> WavHeader:
    """Read back the fields of a canonical WAV header."""
    if len(wav_bytes) < WAV_HEADER_SIZE:
        raise MalformedAudioError("WAV data is shorter than its header")

    (riff, chunk_size, wave, fmt, fmt_size, audio_format, channel_count,
     sample_rate, byte_rate, block_align, bits_per_sample, data,
     data_length) = _HEADER_STRUCT.unpack_from(wav_bytes)

    if riff != b"RIFF" or wave != b"WAVE" or fmt != b"fmt " or data != b"data" or fmt_size != 16:
        raise MalformedAudioError("Not a canonical PCM WAV header")

    return WavHeader(
        sample_rate=sample_rate,
        channel_count=channel_count,
        bits_per_sample=bits_per_sample,
        data_length=data_length,
        chunk_size=chunk_size,
        byte_rate=byte_rate,
        block_align=block_align,
        audio_format=audio_format,
    )
