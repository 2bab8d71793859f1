from typing import Union, Tuple
from os import PathLike
from pathlib import Path

SomeSortOfPath = Union[str, PathLike, Path]
Number = Union[int, float]
Size = Tuple[int, int]
OptionalDimension = Union[int, None]


class AsciiFramesException(Exception):
    pass


class InvalidDimensions(AsciiFramesException):
    """A zero-area source or a non-positive target size reached the resampler."""
    pass


class ConfigurationError(AsciiFramesException):
    """Rejected render configuration, such as an empty glyph ramp."""
    pass


class FrameSourceException(AsciiFramesException):
    pass
