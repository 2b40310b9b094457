"""Validation functions and errors for waveform data.

This module provides the exception hierarchy raised by the model and codecs,
the field validators shared by construction, mutation and decoding, and a
non-raising header check used to report every problem in a file at once.
"""

import math
from dataclasses import dataclass

from audiowaveform.format.types import FORMAT_VERSION, BinaryHeader, SampleWidth


class WaveformDataError(Exception):
    """Base class for waveform data errors."""


class InvalidConfigError(WaveformDataError, ValueError):
    """A configuration field was given a value outside its allowed range."""

    def __init__(self, field: str, value: object) -> None:
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field.replace('_', ' ')}: {value!r}")


class UnsupportedVersionError(WaveformDataError):
    """Binary data declares a format version other than 1."""

    def __init__(self, found: int) -> None:
        self.found = found
        super().__init__(f"Cannot load data file version: {found}")


class TruncatedHeaderError(WaveformDataError):
    """Binary data is too short to hold the 20-byte header."""

    def __init__(self, size: int) -> None:
        self.size = size
        super().__init__("Failed to read file header")


class IndexOutOfRangeError(WaveformDataError, IndexError):
    """A pair index is outside the stored pair sequence."""

    def __init__(self, index: int, size: int) -> None:
        self.index = index
        self.size = size
        super().__init__(f"Pair index {index} out of range for {size} pairs")


class WaveformFileError(WaveformDataError):
    """A waveform data file could not be opened."""


@dataclass
class ValidationResult:
    """Result of validation with optional warnings."""

    valid: bool
    errors: list[str]
    warnings: list[str]

    @classmethod
    def success(cls, warnings: list[str] | None = None) -> "ValidationResult":
        """Create a successful validation result."""
        return cls(valid=True, errors=[], warnings=warnings or [])

    @classmethod
    def failure(cls, errors: list[str], warnings: list[str] | None = None) -> "ValidationResult":
        """Create a failed validation result."""
        return cls(valid=False, errors=errors, warnings=warnings or [])


def validate_sample_rate(sample_rate: int) -> int:
    if not _is_positive_integer(sample_rate):
        raise InvalidConfigError("sample_rate", sample_rate)
    return sample_rate


def validate_samples_per_pixel(samples_per_pixel: int) -> int:
    if not _is_positive_integer(samples_per_pixel):
        raise InvalidConfigError("samples_per_pixel", samples_per_pixel)
    return samples_per_pixel


def validate_bits(bits: int) -> int:
    """Check that bits is 8 or 16."""
    if not isinstance(bits, int) or isinstance(bits, bool) or bits not in tuple(SampleWidth):
        raise InvalidConfigError("bits", bits)
    return int(bits)


def validate_start_time(start_time: float | None) -> float | None:
    """Check that start_time is unset or a finite, non-negative number of seconds."""
    if start_time is None:
        return None
    if (
        isinstance(start_time, bool)
        or not isinstance(start_time, (int, float))
        or not math.isfinite(start_time)
        or start_time < 0
    ):
        raise InvalidConfigError("start_time", start_time)
    return start_time


def validate_header(header: BinaryHeader, sample_bytes: int) -> ValidationResult:
    """Validate a decoded binary header against the bytes that follow it.

    Errors are the conditions that make decoding fail:
    - version != 1
    - sample_rate <= 0
    - samples_per_pixel <= 0

    Warnings are conditions the decoder tolerates:
    - reserved flag bits set
    - fewer sample bytes than declared (pairs decode as empty)
    - trailing bytes after the declared sample data

    Args:
        header: The decoded header.
        sample_bytes: Number of bytes available after the header.

    Returns:
        ValidationResult with errors and warnings.
    """
    errors: list[str] = []
    warnings: list[str] = []

    if header.version != FORMAT_VERSION:
        errors.append(f"version must be {FORMAT_VERSION}, got {header.version}")
        return ValidationResult.failure(errors, warnings)

    if header.sample_rate <= 0:
        errors.append(f"sample_rate must be > 0, got {header.sample_rate}")

    if header.samples_per_pixel <= 0:
        errors.append(f"samples_per_pixel must be > 0, got {header.samples_per_pixel}")

    if header.reserved_flags:
        warnings.append(f"reserved flag bits set: {header.reserved_flags:#010x}")

    expected = header.data_size
    if sample_bytes < expected:
        warnings.append(
            f"header declares {header.pair_count} pairs ({expected} bytes), "
            f"but only {sample_bytes} bytes of sample data follow; pairs will be empty"
        )
    elif sample_bytes > expected:
        warnings.append(f"{sample_bytes - expected} trailing bytes after sample data")

    if errors:
        return ValidationResult.failure(errors, warnings)
    return ValidationResult.success(warnings)


def _is_positive_integer(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0
