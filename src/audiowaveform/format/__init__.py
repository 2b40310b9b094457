"""Waveform data serialization module.

This module provides functionality for reading and writing waveform data in
the binary (.dat) format and the JSON format.

Format Overview
---------------
The binary format is a fixed header followed by packed sample values:

    +----------------------------------------+
    | Header (20 bytes, little-endian)       |
    |   - version (always 1)                 |
    |   - flags (bit 0 = 8-bit samples)      |
    |   - sample rate                        |
    |   - samples per pixel                  |
    |   - number of min/max pairs            |
    +----------------------------------------+
    | Sample data                            |
    |   - int8 or int16 per value            |
    |   - min0, max0, min1, max1, ...        |
    +----------------------------------------+

The JSON format carries the same fields as an object, with the values as a
flat ``data`` list and an optional ``start_time``.

Example Usage
-------------
>>> from audiowaveform.format import load_binary, save_json
>>> waveform = load_binary("track.dat")
>>> save_json(waveform, "track.json")
"""

from audiowaveform.format.binary import (
    HEADER_SIZE,
    decode_header,
    encode_header,
    from_binary,
    inspect_binary,
    load_binary,
    read_binary,
    save_binary,
    to_binary,
    write_binary,
)
from audiowaveform.format.text import (
    from_json,
    from_object,
    load_json,
    save_json,
    to_json,
    to_object,
    write_json,
)
from audiowaveform.format.types import BinaryHeader, SampleWidth
from audiowaveform.format.validation import (
    IndexOutOfRangeError,
    InvalidConfigError,
    TruncatedHeaderError,
    UnsupportedVersionError,
    ValidationResult,
    WaveformDataError,
    WaveformFileError,
)

__all__ = [
    # Types
    "BinaryHeader",
    "SampleWidth",
    # Binary
    "HEADER_SIZE",
    "encode_header",
    "decode_header",
    "to_binary",
    "from_binary",
    "read_binary",
    "write_binary",
    "load_binary",
    "save_binary",
    "inspect_binary",
    # Text
    "to_object",
    "to_json",
    "from_object",
    "from_json",
    "write_json",
    "load_json",
    "save_json",
    # Errors
    "WaveformDataError",
    "InvalidConfigError",
    "UnsupportedVersionError",
    "TruncatedHeaderError",
    "IndexOutOfRangeError",
    "WaveformFileError",
    "ValidationResult",
]
