from __future__ import annotations
from typing import TYPE_CHECKING, Iterable, Iterator, List, Tuple
from math import floor, sqrt
from PIL import Image
from loguru import logger
from .typealiases import Size, InvalidDimensions, ConfigurationError

if TYPE_CHECKING:
    from .config import RenderConfig


__all__ = [
    'GlyphRamp', 'CharacterGrid', 'FramePipeline', 'render', 'fit_dimensions', 'resample', 'reduce_luminance',
    'normalize_contrast', 'extract_edges', 'map_glyphs', 'DEFAULT_CHARS']


DEFAULT_CHARS = " .'-=+*%#"

SOBEL_X = ((-1, 0, 1),
           (-2, 0, 2),
           (-1, 0, 1))
SOBEL_Y = ((-1, -2, -1),
           (0, 0, 0),
           (1, 2, 1))


def _round(value: float) -> int:
    """Round half up, unlike ``round()``."""
    return int(floor(value + 0.5))


def _clamp(value: int) -> int:
    return 0 if value < 0 else 255 if value > 255 else value


def _raster(mode: str, size: Size, data: bytes) -> Image.Image:
    if not size[0] or not size[1]:
        return Image.new(mode, size)
    return Image.frombytes(mode, size, bytes(data))


class GlyphRamp:
    """An ordered, non-empty run of characters going from the darkest to the lightest glyph.

        >>> ramp = GlyphRamp(' .:-=+*#%@')
        >>> ramp.glyph(0), ramp.glyph(255)
        (' ', '@')
    """

    def __init__(self, chars: str, reverse: bool = False) -> None:
        """**Initialize the GlyphRamp class.**

        :param chars: The characters of the ramp, dimmest first.
        :param reverse: Whether to reverse the chars order, in case it's dark text on light background.
            Defaults to False.
        :return: ``None``.
        """
        if not chars:
            raise ConfigurationError('The glyph ramp needs at least one character.')
        self._chars = chars[::-1] if reverse else chars

    @property
    def chars(self) -> str:
        return self._chars

    def __len__(self) -> int:
        return len(self._chars)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GlyphRamp):
            return NotImplemented
        return self._chars == other._chars

    def __repr__(self) -> str:
        return f'GlyphRamp({self._chars!r})'

    def index(self, intensity: int) -> int:
        """Quantize an intensity (0-255) into a position of the ramp."""
        index = intensity * len(self._chars) // 256
        return max(0, min(index, len(self._chars) - 1))

    def glyph(self, intensity: int) -> str:
        return self._chars[self.index(intensity)]


class CharacterGrid:
    """Rows of glyphs ready to be written to a text surface as they are."""

    def __init__(self, rows: Iterable[str]) -> None:
        self.rows: Tuple[str, ...] = tuple(rows)
        if len({len(row) for row in self.rows}) > 1:
            raise InvalidDimensions('All rows of a character grid must have the same length.')

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    @property
    def height(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[str]:
        return iter(self.rows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CharacterGrid):
            return NotImplemented
        return self.rows == other.rows

    def __str__(self) -> str:
        return '\n'.join(self.rows)

    def __repr__(self) -> str:
        return f'CharacterGrid({self.width}x{self.height})'


def fit_dimensions(src_width: int, src_height: int, max_width: int, max_height: int) -> Size:
    """Find the biggest size with the source aspect ratio that fits inside ``max_width`` x ``max_height``.

    Width is filled first. When the resulting height overflows, height is pinned instead and the width
    is derived from it. Both values are rounded half up and never drop below 1.

        >>> fit_dimensions(200, 100, 80, 30)
        (60, 30)

    :param src_width: The width of the source frame.
    :param src_height: The height of the source frame.
    :param max_width: The available width, usually the terminal columns.
    :param max_height: The available height, usually the terminal lines.
    :return: The target width and height.
    """
    if src_width <= 0 or src_height <= 0:
        raise InvalidDimensions(f'Cannot fit a {src_width}x{src_height} frame.')
    if max_width <= 0 or max_height <= 0:
        raise InvalidDimensions(f'Cannot fit a frame inside a {max_width}x{max_height} grid.')
    ratio = src_width / src_height
    width = max_width
    height = _round(width / ratio)
    if height > max_height:
        height = max_height
        width = _round(height * ratio)
    return max(1, width), max(1, height)


def resample(frame: Image.Image, width: int, height: int) -> Image.Image:
    """Nearest-neighbor scale ``frame`` to exactly ``width`` x ``height``. Destination pixel (x, y) copies the
    source pixel at (x * src_width // width, y * src_height // height). No interpolation is done.

    :param frame: The color raster. Frames in other modes are converted to RGB first.
    :param width: The target width.
    :param height: The target height.
    :return: A new RGB image.
    """
    src_width, src_height = frame.size
    if not src_width or not src_height:
        raise InvalidDimensions(f'Cannot resample a {src_width}x{src_height} frame.')
    if width <= 0 or height <= 0:
        raise InvalidDimensions(f'Cannot resample to {width}x{height}.')
    if frame.mode != 'RGB':
        frame = frame.convert('RGB')

    src = frame.tobytes()
    columns = [(x * src_width // width) * 3 for x in range(width)]
    out = bytearray(width * height * 3)
    k = 0
    for y in range(height):
        row = (y * src_height // height) * src_width * 3
        for column in columns:
            i = row + column
            out[k:k + 3] = src[i:i + 3]
            k += 3
    return _raster('RGB', (width, height), out)


def reduce_luminance(frame: Image.Image) -> Image.Image:
    """Convert a color raster to intensity with the 0.299 / 0.587 / 0.114 luma weights."""
    if frame.mode != 'RGB':
        frame = frame.convert('RGB')
    data = frame.tobytes()
    out = bytes(
        _clamp(_round(0.299 * data[i] + 0.587 * data[i + 1] + 0.114 * data[i + 2]))
        for i in range(0, len(data), 3))
    return _raster('L', frame.size, out)


def normalize_contrast(gray: Image.Image) -> Image.Image:
    """Histogram-stretch an intensity raster so its darkest pixel becomes 0 and its brightest 255.

    A flat raster (every pixel equal) cannot be stretched, so it comes back with the same value everywhere.
    """
    data = gray.tobytes()
    if not data:
        return gray.copy()
    low, high = min(data), max(data)
    if low == high:
        return Image.new('L', gray.size, low)
    span = high - low
    out = bytes(_clamp(_round((value - low) * 255 / span)) for value in data)
    return _raster('L', gray.size, out)


def _convolve(data: bytes, width: int, x: int, y: int, kernel: Tuple[Tuple[int, ...], ...]) -> int:
    resp = 0
    for ky in range(3):
        row = (y + ky - 1) * width
        for kx in range(3):
            weight = kernel[ky][kx]
            if weight:
                resp += weight * data[row + x + kx - 1]
    return resp


def extract_edges(gray: Image.Image) -> Image.Image:
    """Sobel edge strength of an intensity raster, scaled so the strongest edge of this raster is 255.

    The 1-pixel border is never computed and stays 0. If no interior pixel has a gradient, the whole
    result is 0.

    :param gray: The contrast-normalized intensity raster.
    :return: A new ``L`` image of the same size.
    """
    width, height = gray.size
    data = gray.tobytes()
    magnitudes: List[float] = [0.0] * (width * height)
    max_magnitude = 0.0

    for y in range(1, height - 1):
        for x in range(1, width - 1):
            gx = _convolve(data, width, x, y, SOBEL_X)
            gy = _convolve(data, width, x, y, SOBEL_Y)
            magnitude = sqrt(gx * gx + gy * gy)
            magnitudes[y * width + x] = magnitude
            if magnitude > max_magnitude:
                max_magnitude = magnitude

    if max_magnitude == 0:
        return Image.new('L', gray.size, 0)

    out = bytearray(width * height)
    for y in range(1, height - 1):
        for x in range(1, width - 1):
            i = y * width + x
            out[i] = _clamp(_round(magnitudes[i] / max_magnitude * 255))
    return _raster('L', gray.size, out)


def map_glyphs(gray: Image.Image, ramp: GlyphRamp) -> CharacterGrid:
    """Turn every pixel of an intensity raster into its glyph of ``ramp``."""
    width, height = gray.size
    data = gray.tobytes()
    table = [ramp.glyph(value) for value in range(256)]
    return CharacterGrid(
        ''.join(table[value] for value in data[y * width:(y + 1) * width]) for y in range(height))


class FramePipeline:
    """Runs every frame through resample, luminance, contrast, edges (optional) and glyph mapping.

    Each stage gets a new raster from the previous one and nothing is kept between frames.

        >>> pipeline = FramePipeline(GlyphRamp(DEFAULT_CHARS))
        >>> grid = pipeline.render(Image.open('foo.png'), 80, 24)
        >>> print(grid)
    """

    def __init__(self, ramp: GlyphRamp, edge_detection: bool = True) -> None:
        """**Initialize the FramePipeline class.**

        :param ramp: The glyph ramp used to map intensities to characters.
        :param edge_detection: Whether to run the Sobel edge stage before mapping. Defaults to True.
        :return: ``None``.
        """
        self.ramp = ramp
        self.edge_detection = edge_detection

    @classmethod
    def from_config(cls, config: RenderConfig) -> FramePipeline:
        return cls(config.ramp(), config.edge_detection)

    def render(self, frame: Image.Image, target_width: int, target_height: int) -> CharacterGrid:
        """Render one frame so it fits inside ``target_width`` x ``target_height`` characters.

        :param frame: The color raster.
        :param target_width: The available columns.
        :param target_height: The available lines.
        :return: The character grid.
        """
        width, height = fit_dimensions(*frame.size, target_width, target_height)
        logger.debug('Rendering {}x{} frame at {}x{}.', *frame.size, width, height)
        gray = normalize_contrast(reduce_luminance(resample(frame, width, height)))
        if self.edge_detection:
            gray = extract_edges(gray)
        return map_glyphs(gray, self.ramp)

    def run(
            self, frames: Iterable[Image.Image], target_width: int, target_height: int,
            skip_invalid: bool = False) -> Iterator[CharacterGrid]:
        """Lazily render ``frames`` in order, one grid per frame.

        :param frames: Any iterable of frames. Only one frame is pulled at a time.
        :param target_width: The available columns.
        :param target_height: The available lines.
        :param skip_invalid: Set to True to log and skip frames with invalid dimensions instead of raising.
            Defaults to False.
        :return: An iterator of character grids.
        """
        for number, frame in enumerate(frames, 1):
            try:
                grid = self.render(frame, target_width, target_height)
            except InvalidDimensions as e:
                if not skip_invalid:
                    raise
                logger.warning('Skipping frame {}: {}', number, e)
                continue
            yield grid


def render(
        frame: Image.Image, target_width: int, target_height: int, ramp: GlyphRamp,
        edge_detection: bool = True) -> CharacterGrid:
    """Render a single frame. Shortcut for ``FramePipeline(ramp, edge_detection).render(...)``."""
    return FramePipeline(ramp, edge_detection).render(frame, target_width, target_height)
