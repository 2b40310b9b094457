"""Binary (.dat) waveform data codec.

File layout (little-endian, no padding):

    +--------+------+-------------------+---------------------------+
    | Offset | Size | Field             | Type                      |
    +--------+------+-------------------+---------------------------+
    | 0      | 4    | version           | int32, always 1           |
    | 4      | 4    | flags             | uint32, bit 0 = 8-bit     |
    | 8      | 4    | sample_rate       | int32                     |
    | 12     | 4    | samples_per_pixel | int32                     |
    | 16     | 4    | pair_count        | uint32                    |
    +--------+------+-------------------+---------------------------+
    | 20     | ...  | min0, max0, min1, max1, ... (int8 or int16)   |
    +--------+------+-----------------------------------------------+
"""

import struct
from pathlib import Path
from typing import BinaryIO

import numpy as np

from audiowaveform.format.types import FORMAT_VERSION, BinaryHeader, SampleWidth
from audiowaveform.format.validation import (
    InvalidConfigError,
    TruncatedHeaderError,
    UnsupportedVersionError,
    ValidationResult,
    WaveformFileError,
    validate_header,
)
from audiowaveform.model import WaveformData

HEADER_FORMAT = "<iIiiI"
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)

INT32_MIN, INT32_MAX = -(2**31), 2**31 - 1
UINT32_MAX = 2**32 - 1

# (field, lowest, highest) in header order
HEADER_FIELD_RANGES = (
    ("version", INT32_MIN, INT32_MAX),
    ("flags", 0, UINT32_MAX),
    ("sample_rate", INT32_MIN, INT32_MAX),
    ("samples_per_pixel", INT32_MIN, INT32_MAX),
    ("pair_count", 0, UINT32_MAX),
)


def encode_header(header: BinaryHeader) -> bytes:
    """Pack a header into its 20-byte on-disk form.

    Raises:
        InvalidConfigError: If a field does not fit its 32-bit slot.
    """
    values = []
    for field, lowest, highest in HEADER_FIELD_RANGES:
        value = getattr(header, field)
        if not isinstance(value, int) or isinstance(value, bool) or not lowest <= value <= highest:
            raise InvalidConfigError(field, value)
        values.append(value)

    return struct.pack(HEADER_FORMAT, *values)


def decode_header(data: bytes) -> BinaryHeader:
    """Unpack the header from the start of a binary buffer.

    The header fields are returned as stored; no range checks are applied.

    Raises:
        TruncatedHeaderError: If fewer than 20 bytes are available.
    """
    if len(data) < HEADER_SIZE:
        raise TruncatedHeaderError(len(data))

    version, flags, sample_rate, samples_per_pixel, pair_count = struct.unpack(
        HEADER_FORMAT, data[:HEADER_SIZE]
    )
    return BinaryHeader(
        version=version,
        flags=flags,
        sample_rate=sample_rate,
        samples_per_pixel=samples_per_pixel,
        pair_count=pair_count,
    )


def to_binary(waveform: WaveformData) -> bytes:
    """Encode a waveform as binary data.

    Values are stored as signed integers of the waveform's bit width. Values
    outside that range wrap around (two's complement truncation).

    Returns:
        Exactly ``20 + pair_count * 2 * (bits // 8)`` bytes.
    """
    width = SampleWidth(waveform.bits)
    header = BinaryHeader(
        version=FORMAT_VERSION,
        flags=width.to_flags(),
        sample_rate=waveform.sample_rate,
        samples_per_pixel=waveform.samples_per_pixel,
        pair_count=waveform.pair_count(),
    )
    return encode_header(header) + _pack_samples(waveform.data, width)


def from_binary(data: bytes) -> WaveformData:
    """Decode a waveform from binary data.

    Short or missing sample data is tolerated: if fewer sample bytes follow
    the header than it declares, the waveform is returned with no pairs.
    Bytes after the declared sample data are ignored.

    Raises:
        TruncatedHeaderError: If the data is shorter than the header.
        UnsupportedVersionError: If the version is not 1.
        InvalidConfigError: If sample_rate or samples_per_pixel is not > 0.
    """
    header = decode_header(data)

    if header.version != FORMAT_VERSION:
        raise UnsupportedVersionError(header.version)

    width = header.sample_width
    waveform = WaveformData(
        sample_rate=header.sample_rate,
        samples_per_pixel=header.samples_per_pixel,
        bits=width,
    )

    sample_data = data[HEADER_SIZE:]
    if len(sample_data) < header.data_size:
        return waveform

    values = _unpack_samples(sample_data[: header.data_size], width)
    for min_sample, max_sample in zip(values[0::2], values[1::2]):
        waveform.append(min_sample, max_sample)
    return waveform


def inspect_binary(data: bytes) -> ValidationResult:
    """Check binary data for every problem at once, without raising.

    Args:
        data: The complete contents of a binary waveform data file.

    Returns:
        ValidationResult with errors for conditions that make decoding fail
        and warnings for conditions the decoder tolerates.
    """
    try:
        header = decode_header(data)
    except TruncatedHeaderError as e:
        return ValidationResult.failure(
            [f"{e}: {e.size} bytes, expected at least {HEADER_SIZE}"]
        )
    return validate_header(header, len(data) - HEADER_SIZE)


def read_binary(stream: BinaryIO) -> WaveformData:
    """Decode a waveform from a readable binary stream.

    The stream is read to the end in a single call.
    """
    return from_binary(stream.read())


def write_binary(waveform: WaveformData, stream: BinaryIO) -> None:
    """Encode a waveform and write it to a binary stream in a single call."""
    stream.write(to_binary(waveform))


def load_binary(path: Path | str) -> WaveformData:
    """Load a waveform from a binary (.dat) file.

    Raises:
        WaveformFileError: If the file cannot be opened.
        TruncatedHeaderError, UnsupportedVersionError, InvalidConfigError:
            If the file contents cannot be decoded.
    """
    path = Path(path)

    try:
        f = open(path, "rb")
    except FileNotFoundError as e:
        raise WaveformFileError(f"File not found: {path}") from e
    except OSError as e:
        raise WaveformFileError(f"Cannot open file: {path}") from e

    with f:
        return read_binary(f)


def save_binary(waveform: WaveformData, path: Path | str) -> None:
    """Write a waveform to a binary (.dat) file, creating parent directories."""
    path = Path(path)
    data = to_binary(waveform)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)


def _pack_samples(values: tuple[int, ...], width: SampleWidth) -> bytes:
    # int64 -> int8/int16 astype wraps modulo 2**bits
    samples = np.asarray(values, dtype=np.int64).astype(width.dtype)
    return samples.tobytes()


def _unpack_samples(data: bytes, width: SampleWidth) -> list[int]:
    return np.frombuffer(data, dtype=width.dtype).tolist()
