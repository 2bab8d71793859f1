from typing import Callable, Iterator, List, Optional, TextIO
from pathlib import Path
from time import perf_counter, sleep
import sys
from PIL import Image
from loguru import logger
from ..core import FramePipeline, DEFAULT_CHARS
from ..config import RenderConfig
from ..image import load
from .. import utils
from ..typealiases import SomeSortOfPath, Number, OptionalDimension, FrameSourceException


__all__ = ['FrameSequence', 'play', 'asciify']


FRAME_SEPARATOR = '\f\n'


class FrameSequence:
    """The frames of a still image (one frame) or of a directory of frame images (sorted by filename).

    Frames are decoded one at a time while iterating, and iterating again starts over from the first frame.
    Subdirectories and files that are not images are skipped.

        >>> for frame in FrameSequence('frames/'):
        ...     frame.size
        (640, 360)
        (640, 360)
    """

    def __init__(self, path: SomeSortOfPath) -> None:
        self.path = Path(path)
        if not self.path.exists():
            raise FileNotFoundError(f'The file path \'{self.path}\' does not exist.')
        self.is_directory = self.path.is_dir()

    def files(self) -> List[Path]:
        """The candidate frame files, in playback order."""
        if not self.is_directory:
            return [self.path]
        return sorted(p for p in self.path.iterdir() if not p.is_dir())

    def __len__(self) -> int:
        return len(self.files())

    def __iter__(self) -> Iterator[Image.Image]:
        return self.frames()

    def frames(self, progress: Optional[Callable[[int, int], None]] = None) -> Iterator[Image.Image]:
        """Decode the frames one at a time.

        :param progress: Called with (files done, total files) after every candidate file, decoded or skipped.
        :return: An iterator of RGB images.
        """
        files = self.files()
        decoded = 0
        for k, path in enumerate(files, 1):
            try:
                frame = load(path)
            except FrameSourceException:
                if not self.is_directory:
                    raise
                logger.warning('Skipping {}: not a supported image.', path.name)
                frame = None
            if progress is not None:
                progress(k, len(files))
            if frame is None:
                continue
            decoded += 1
            yield frame
        if not decoded:
            raise FrameSourceException(f'No frames could be decoded from \'{self.path}\'.')


def play(
        path: SomeSortOfPath, fps: Number = 50, width: OptionalDimension = None, height: OptionalDimension = None,
        chars: str = DEFAULT_CHARS, reverse_chars: bool = False, edge_detection: bool = True,
        stream: Optional[TextIO] = None, sleeper: Callable[[float], None] = sleep) -> int:

    """**Play an image or a directory of frames as ascii art in the terminal.**

    Every frame clears the screen, gets drawn and then waits for the rest of its frame interval. Press
    Ctrl-C to stop playback.

        >>> play('frames/')
        [Plays every frame in the directory at 50 FPS]

        >>> play('frames/', fps=24, edge_detection=False)
        [Plays at 24 FPS, drawing brightness instead of edges]

    :param path: The path to an image file or to a directory of frame images.
    :param fps: The playback rate. Defaults to 50.
    :param width: The available number of characters in the horizontal axis. Defaults to the terminal columns.
    :param height: The available number of lines. Defaults to the terminal lines.
    :param chars: The string of characters to be used in the ascii art, in darkest to lightest order.
        Defaults to `` .'-=+*%#``.
    :param reverse_chars: Whether to reverse the chars order, in case it's dark text on light background.
        Defaults to False.
    :param edge_detection: Whether to draw the edges of the frames instead of their brightness. Defaults to True.
    :param stream: Where to write the frames. Defaults to stdout.
    :param sleeper: The function used to wait between frames. Defaults to ``time.sleep``.
    :return: The number of frames shown.
    """

    config = RenderConfig.create(
        chars=chars, reverse_chars=reverse_chars, edge_detection=edge_detection, fps=fps, width=width, height=height)
    stream = stream or sys.stdout
    columns, lines = utils.terminal_size()
    # Leave the last line free so printing the frame does not scroll the screen.
    target = (config.width or columns, config.height or max(1, lines - 1))
    interval = 1.0 / config.fps

    sequence = FrameSequence(path)
    pipeline = FramePipeline.from_config(config)
    logger.info('Playing {} at {} FPS inside {}x{} characters.', sequence.path, config.fps, *target)

    shown = 0
    last = perf_counter()
    try:
        for grid in pipeline.run(sequence, *target, skip_invalid=True):
            utils.clear_screen(stream)
            stream.write(str(grid) + '\n')
            stream.flush()
            shown += 1
            remaining = interval - (perf_counter() - last)
            if remaining > 0:
                sleeper(remaining)
            last = perf_counter()
    except KeyboardInterrupt:
        logger.info('Playback stopped by user.')
    logger.info('Played {} frames.', shown)
    return shown


def asciify(
        path: SomeSortOfPath, width: int = 100, height: int = 40, chars: str = DEFAULT_CHARS,
        reverse_chars: bool = False, edge_detection: bool = True, out_path: Optional[SomeSortOfPath] = None,
        quiet: bool = False) -> str:

    """**Convert a directory of frames to ascii art and save every frame in one text file.**

    Frames are separated by a form feed line, so a pager or a player can split them again.

        >>> asciify('frames/')
        [Saves frames.txt next to the directory and returns its path]

    :param path: The path to an image file or to a directory of frame images.
    :param width: The available number of characters in the horizontal axis. Defaults to 100.
    :param height: The available number of lines. Defaults to 40.
    :param chars: The string of characters to be used in the ascii art, in darkest to lightest order.
        Defaults to `` .'-=+*%#``.
    :param reverse_chars: Whether to reverse the chars order, in case it's dark text on light background.
        Defaults to False.
    :param edge_detection: Whether to draw the edges of the frames instead of their brightness. Defaults to True.
    :param out_path: The output path. Defaults to a txt file next to the input.
    :param quiet: Set to True to avoid printing progress to the console. Defaults to False.
    :return: The output path.
    """

    _print = utils.conditional_print(quiet)
    config = RenderConfig.create(
        chars=chars, reverse_chars=reverse_chars, edge_detection=edge_detection, width=width, height=height)

    sequence = FrameSequence(path)
    if out_path is None:
        out_path = utils.safe_path(sequence.path.parent / f'{sequence.path.stem}.txt')
    pipeline = FramePipeline.from_config(config)

    def progress(current: int, total: int) -> None:
        _print('\r', end='')
        _print('Processing frames ' + utils.progress_bar(current, total), end='')

    grids = pipeline.run(sequence.frames(progress), config.width, config.height, skip_invalid=True)
    # The output file is only created once there is a frame to put in it.
    first = next(grids, None)
    if first is None:
        _print()
        raise FrameSourceException(f'No frames of \'{sequence.path}\' could be rendered.')

    written = 1
    with open(out_path, 'w', encoding='utf-8') as f:
        f.write(str(first) + '\n')
        for grid in grids:
            f.write(FRAME_SEPARATOR)
            f.write(str(grid) + '\n')
            written += 1
    _print()

    logger.info('Saved {} frames to {}.', written, out_path)
    return str(out_path)
