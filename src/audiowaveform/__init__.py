"""audiowaveform - Audio waveform envelope data.

This package stores downsampled audio waveforms: one minimum/maximum
amplitude pair per block of ``samples_per_pixel`` audio samples, compact
enough to render a waveform display.

Serialization
-------------
The format submodule reads and writes the binary (.dat) format and the JSON
format.

Example Usage
-------------
>>> from audiowaveform import WaveformData, to_binary, to_json
>>>
>>> waveform = WaveformData(sample_rate=44100, samples_per_pixel=512, bits=16)
>>> _ = waveform.append(-99, 101).append(-49, 51)
>>>
>>> len(to_binary(waveform))
28
>>> to_json(waveform)
'{"sample_rate": 44100, "bits": 16, "samples_per_pixel": 512, "length": 2, "data": [-99, 101, -49, 51]}'
"""

# The format package must be imported before the model it serializes
from audiowaveform.format import (
    IndexOutOfRangeError,
    InvalidConfigError,
    TruncatedHeaderError,
    UnsupportedVersionError,
    WaveformDataError,
    WaveformFileError,
    from_binary,
    from_json,
    load_binary,
    load_json,
    save_binary,
    save_json,
    to_binary,
    to_json,
    to_object,
)
from audiowaveform.model import WaveformData

__version__ = "0.1.0"

__all__ = [
    # Model
    "WaveformData",
    # Binary
    "to_binary",
    "from_binary",
    "load_binary",
    "save_binary",
    # Text
    "to_object",
    "to_json",
    "from_json",
    "load_json",
    "save_json",
    # Errors
    "WaveformDataError",
    "InvalidConfigError",
    "UnsupportedVersionError",
    "TruncatedHeaderError",
    "IndexOutOfRangeError",
    "WaveformFileError",
]
