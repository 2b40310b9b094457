"""Python types for the waveform data binary header.

These types give a Pythonic view of the raw header fields, with conversion
to/from the on-disk flag bits and numpy sample dtypes.
"""

from dataclasses import dataclass
from enum import IntEnum

import numpy as np

FLAG_8_BIT = 0x1
"""Header flag bit 0: set for 8-bit samples, clear for 16-bit samples."""

FORMAT_VERSION = 1
"""The only binary format version this package reads and writes."""


class SampleWidth(IntEnum):
    """Resolution of each stored min/max value, in bits."""

    EIGHT_BIT = 8
    """Signed 8-bit samples in [-128, 127]."""

    SIXTEEN_BIT = 16
    """Signed 16-bit samples in [-32768, 32767]."""

    @classmethod
    def from_flags(cls, flags: int) -> "SampleWidth":
        """Resolve the sample width from header flags, ignoring reserved bits."""
        if flags & FLAG_8_BIT:
            return cls.EIGHT_BIT
        return cls.SIXTEEN_BIT

    def to_flags(self) -> int:
        """Convert to the header flags value."""
        return FLAG_8_BIT if self == SampleWidth.EIGHT_BIT else 0

    @property
    def bytes_per_sample(self) -> int:
        return self.value // 8

    @property
    def dtype(self) -> np.dtype:
        """Little-endian signed numpy dtype for this width."""
        return np.dtype("<i1") if self == SampleWidth.EIGHT_BIT else np.dtype("<i2")

    @property
    def min_value(self) -> int:
        return -(1 << (self.value - 1))

    @property
    def max_value(self) -> int:
        return (1 << (self.value - 1)) - 1

    @property
    def display_name(self) -> str:
        """Human-readable name for this width."""
        return f"{self.value}-bit"


@dataclass(frozen=True)
class BinaryHeader:
    """The fixed 20-byte header at the start of a binary waveform data file."""

    version: int
    """Format version, must be 1."""

    flags: int
    """Bitmask; only bit 0 (8-bit samples) is meaningful."""

    sample_rate: int
    """Audio sample rate in Hz, as stored (not yet validated)."""

    samples_per_pixel: int
    """Audio samples per min/max pair, as stored (not yet validated)."""

    pair_count: int
    """Number of min/max pairs declared to follow the header."""

    @property
    def sample_width(self) -> SampleWidth:
        return SampleWidth.from_flags(self.flags)

    @property
    def reserved_flags(self) -> int:
        """Flag bits other than the 8-bit indicator."""
        return self.flags & ~FLAG_8_BIT

    @property
    def data_size(self) -> int:
        """Number of sample bytes the header declares."""
        return self.pair_count * 2 * self.sample_width.bytes_per_sample
