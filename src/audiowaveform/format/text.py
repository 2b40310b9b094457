"""JSON waveform data codec.

The JSON form is an object with the keys ``sample_rate``, ``bits``,
``samples_per_pixel``, ``length`` (number of pairs) and ``data`` (all values,
interleaved as min0, max0, min1, max1, ...). ``start_time`` is present only
when the waveform has one.
"""

import json
from pathlib import Path
from typing import Any, TextIO

from audiowaveform.format.validation import InvalidConfigError, WaveformFileError
from audiowaveform.model import WaveformData
from audiowaveform.types import WaveformObject

REQUIRED_KEYS = ("sample_rate", "samples_per_pixel", "bits", "data")


def to_object(waveform: WaveformData) -> WaveformObject:
    """Convert a waveform to a JSON-compatible dict."""
    obj: WaveformObject = {
        "sample_rate": waveform.sample_rate,
        "bits": waveform.bits,
        "samples_per_pixel": waveform.samples_per_pixel,
        "length": waveform.pair_count(),
        "data": list(waveform.data),
    }

    if waveform.start_time is not None:
        obj["start_time"] = waveform.start_time

    return obj


def to_json(waveform: WaveformData, *, indent: int | None = None) -> str:
    """Render a waveform as JSON text."""
    return json.dumps(to_object(waveform), indent=indent)


def from_object(obj: dict[str, Any]) -> WaveformData:
    """Create a waveform from a JSON-compatible dict.

    Applies the same field validation as construction and binary decoding.

    Raises:
        InvalidConfigError: If a required key is missing, a field is out of
            range, ``data`` is not a list of integers of even length, or
            ``length`` disagrees with ``data``.
    """
    if not isinstance(obj, dict):
        raise InvalidConfigError("json", type(obj).__name__)

    for key in REQUIRED_KEYS:
        if key not in obj:
            raise InvalidConfigError(key, None)

    waveform = WaveformData(
        sample_rate=obj["sample_rate"],
        samples_per_pixel=obj["samples_per_pixel"],
        bits=obj["bits"],
        start_time=obj.get("start_time"),
    )

    data = obj["data"]
    if not isinstance(data, list) or len(data) % 2:
        raise InvalidConfigError("data", _describe(data))
    if not all(isinstance(v, int) and not isinstance(v, bool) for v in data):
        raise InvalidConfigError("data", "non-integer value")

    length = obj.get("length", len(data) // 2)
    if length != len(data) // 2:
        raise InvalidConfigError("length", length)

    for min_sample, max_sample in zip(data[0::2], data[1::2]):
        waveform.append(min_sample, max_sample)
    return waveform


def from_json(text: str | bytes) -> WaveformData:
    """Create a waveform from JSON text.

    Raises:
        InvalidConfigError: If the text is not valid JSON, bytes are not a
            valid Unicode encoding, or the object fails validation.
    """
    try:
        obj = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidConfigError("json", e.msg) from e
    except UnicodeDecodeError as e:
        raise InvalidConfigError("json", e.reason) from e
    return from_object(obj)


def write_json(waveform: WaveformData, stream: TextIO, *, indent: int | None = None) -> None:
    """Render a waveform as JSON and write it to a text stream in a single call."""
    stream.write(to_json(waveform, indent=indent))


def load_json(path: Path | str) -> WaveformData:
    """Load a waveform from a JSON file.

    Raises:
        WaveformFileError: If the file cannot be opened.
        InvalidConfigError: If the contents are not valid JSON or fail
            validation.
    """
    path = Path(path)

    try:
        data = path.read_bytes()
    except FileNotFoundError as e:
        raise WaveformFileError(f"File not found: {path}") from e
    except OSError as e:
        raise WaveformFileError(f"Cannot open file: {path}") from e

    return from_json(data)


def save_json(waveform: WaveformData, path: Path | str, *, indent: int | None = None) -> None:
    """Write a waveform to a JSON file, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(to_json(waveform, indent=indent), encoding="utf-8")


def _describe(data: object) -> str:
    if isinstance(data, list):
        return f"odd number of values ({len(data)})"
    return type(data).__name__
