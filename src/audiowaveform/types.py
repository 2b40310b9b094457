from typing import Any, Literal, TypeAlias

BitDepth = Literal[8, 16]

SamplePair: TypeAlias = tuple[int, int]
WaveformObject: TypeAlias = dict[str, Any]
