from pathlib import Path
from PIL import Image, UnidentifiedImageError
from loguru import logger
from ..core import FramePipeline, DEFAULT_CHARS
from ..config import RenderConfig
from .. import utils
from ..typealiases import SomeSortOfPath, OptionalDimension, FrameSourceException


__all__ = ['load', 'asciify']


def load(path: SomeSortOfPath) -> Image.Image:
    """Decode a still image into an RGB raster.

    :param path: The path to the image file.
    :return: The decoded RGB image.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f'The file path \'{path}\' does not exist.')
    try:
        with Image.open(path) as img:
            return img.convert('RGB')
    except (UnidentifiedImageError, OSError) as e:
        raise FrameSourceException(f'\'{path}\' is not a supported image.') from e


def asciify(
        path: SomeSortOfPath, width: OptionalDimension = None, height: OptionalDimension = None,
        chars: str = DEFAULT_CHARS, reverse_chars: bool = False, edge_detection: bool = True,
        save_txt: bool = False) -> str:

    """**Convert an image to ascii art sized to fit the terminal.**

        >>> asciify('foo.png')
        [Returns the ascii art string, as big as the terminal allows]

        >>> asciify('foo.png', width=120, height=40, save_txt=True)
        [Fits the art inside 120x40 characters, saves it in foo.txt and returns it.]

    :param path: The path to the image file.
    :param width: The available number of characters in the horizontal axis. Defaults to the terminal columns.
    :param height: The available number of lines. Defaults to the terminal lines.
    :param chars: The string of characters to be used in the ascii art. Any length is accepted, but the characters
        should be in darkest to lightest order. Defaults to `` .'-=+*%#``.
    :param reverse_chars: Whether to reverse the chars order, in case it's dark text on light background.
        Defaults to False.
    :param edge_detection: Whether to draw the edges of the image instead of its brightness. Defaults to True.
    :param save_txt: Whether to save the ascii art in a text file. Will be saved in the same directory as the input
        image. Defaults to False.
    :return: The ascii art as a string.
    """

    config = RenderConfig.create(
        chars=chars, reverse_chars=reverse_chars, edge_detection=edge_detection, width=width, height=height)
    width, height = config.width, config.height
    if width is None or height is None:
        columns, lines = utils.terminal_size()
        width, height = width or columns, height or lines
    frame = load(path)

    grid = FramePipeline.from_config(config).render(frame, width, height)
    resp = str(grid)

    if save_txt:
        txt_path = utils.safe_path(path, ext='txt', as_path_obj=True)
        txt_path.write_text(resp + '\n')
        logger.info('Saved {}x{} ascii art to {}.', grid.width, grid.height, txt_path)

    return resp
