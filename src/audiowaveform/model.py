"""In-memory waveform envelope data.

A WaveformData holds one (min, max) amplitude pair for every block of
``samples_per_pixel`` source audio samples, together with the configuration
needed to interpret and serialize those pairs.
"""

from collections.abc import Iterable, Iterator

from audiowaveform.format.validation import (
    IndexOutOfRangeError,
    validate_bits,
    validate_sample_rate,
    validate_samples_per_pixel,
    validate_start_time,
)
from audiowaveform.types import SamplePair


class WaveformData:
    """Waveform min/max pairs plus sample rate, scale and resolution.

    Every configuration field is validated on assignment, so an instance can
    never hold an invalid configuration. A failed assignment raises
    InvalidConfigError and leaves the previous value in place.

    Example:
        >>> wf = WaveformData(sample_rate=44100, samples_per_pixel=512, bits=16)
        >>> _ = wf.append(-99, 101).append(-49, 51)
        >>> wf.pair_count()
        2
    """

    def __init__(
        self,
        sample_rate: int,
        samples_per_pixel: int,
        bits: int,
        start_time: float | None = None,
    ) -> None:
        """Create an empty waveform.

        Args:
            sample_rate: Audio sample rate in Hz. Must be > 0.
            samples_per_pixel: Audio samples per min/max pair. Must be > 0.
            bits: Resolution of stored values, 8 or 16.
            start_time: Start time in seconds, or None if not set.

        Raises:
            InvalidConfigError: If any field is out of range.
        """
        self._sample_rate = validate_sample_rate(sample_rate)
        self._samples_per_pixel = validate_samples_per_pixel(samples_per_pixel)
        self._bits = validate_bits(bits)
        self._start_time = validate_start_time(start_time)
        self._data: list[int] = []

    @classmethod
    def from_pairs(
        cls,
        pairs: Iterable[SamplePair],
        *,
        sample_rate: int,
        samples_per_pixel: int,
        bits: int,
        start_time: float | None = None,
    ) -> "WaveformData":
        """Create a waveform populated with the given (min, max) pairs."""
        waveform = cls(sample_rate, samples_per_pixel, bits, start_time)
        for min_sample, max_sample in pairs:
            waveform.append(min_sample, max_sample)
        return waveform

    @property
    def sample_rate(self) -> int:
        """Audio sample rate, in Hz."""
        return self._sample_rate

    @sample_rate.setter
    def sample_rate(self, sample_rate: int) -> None:
        self._sample_rate = validate_sample_rate(sample_rate)

    @property
    def samples_per_pixel(self) -> int:
        """Number of audio samples per min/max pair."""
        return self._samples_per_pixel

    @samples_per_pixel.setter
    def samples_per_pixel(self, samples_per_pixel: int) -> None:
        self._samples_per_pixel = validate_samples_per_pixel(samples_per_pixel)

    @property
    def bits(self) -> int:
        """Resolution of the stored values, 8 or 16."""
        return self._bits

    @bits.setter
    def bits(self, bits: int) -> None:
        self._bits = validate_bits(bits)

    @property
    def start_time(self) -> float | None:
        """Start time in seconds, or None if not set."""
        return self._start_time

    @start_time.setter
    def start_time(self, start_time: float | None) -> None:
        self._start_time = validate_start_time(start_time)

    def append(self, min_sample: int, max_sample: int) -> "WaveformData":
        """Append a min/max pair.

        Values are not range checked here; values that do not fit in ``bits``
        wrap around when encoded to binary.

        Returns:
            This waveform, so calls can be chained.
        """
        self._data.append(min_sample)
        self._data.append(max_sample)
        return self

    def pair_count(self) -> int:
        """Number of min/max pairs."""
        return len(self._data) // 2

    @property
    def size(self) -> int:
        return self.pair_count()

    def __len__(self) -> int:
        return self.pair_count()

    def min_at(self, index: int) -> int:
        """Minimum value of the pair at ``index``."""
        return self._data[2 * self._check_index(index)]

    def max_at(self, index: int) -> int:
        """Maximum value of the pair at ``index``."""
        return self._data[2 * self._check_index(index) + 1]

    def pairs(self) -> Iterator[SamplePair]:
        """Iterate over (min, max) pairs in time order."""
        values = iter(self._data)
        return zip(values, values)

    @property
    def data(self) -> tuple[int, ...]:
        """All values, interleaved as min0, max0, min1, max1, ..."""
        return tuple(self._data)

    @property
    def duration(self) -> float:
        """Length of the source audio covered by the pairs, in seconds."""
        return self.pair_count() * self._samples_per_pixel / self._sample_rate

    def _check_index(self, index: int) -> int:
        size = self.pair_count()
        if not 0 <= index < size:
            raise IndexOutOfRangeError(index, size)
        return index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WaveformData):
            return NotImplemented
        return (
            self._sample_rate == other._sample_rate
            and self._samples_per_pixel == other._samples_per_pixel
            and self._bits == other._bits
            and self._start_time == other._start_time
            and self._data == other._data
        )

    def __repr__(self) -> str:
        return (
            f"WaveformData(sample_rate={self._sample_rate}, "
            f"samples_per_pixel={self._samples_per_pixel}, bits={self._bits}, "
            f"start_time={self._start_time}, pairs={self.pair_count()})"
        )
