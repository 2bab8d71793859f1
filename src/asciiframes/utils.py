from typing import Any, Union, Callable, Optional, TextIO
import shutil
import sys
from pathlib import Path
from .typealiases import SomeSortOfPath, Size

CLEAR_SCREEN = '\033[H\033[2J'


def conditional_print(quiet: bool) -> Callable:
    """Return a conditional print function."""
    def _print(*values: Any, end: str = '\n'):
        if not quiet:
            print(*values, end=end, flush=True)
    return _print


def terminal_size(fallback: Size = (80, 24)) -> Size:
    """Columns and lines of the terminal attached to stdout, or ``fallback`` when there is none."""
    size = shutil.get_terminal_size(fallback)
    return size.columns, size.lines


def clear_screen(stream: Optional[TextIO] = None) -> None:
    """Move the cursor home and clear the terminal with ANSI escapes."""
    stream = stream or sys.stdout
    stream.write(CLEAR_SCREEN)


def progress_bar(current: int, total: int, width: int = 40) -> str:
    """Text progress bar such as ``[=====     ] 5/10``."""
    filled = int(width * current / total) if total else width
    filled = max(0, min(filled, width))
    return '[' + '=' * filled + ' ' * (width - filled) + f'] {current}/{total}'


def safe_path(path: SomeSortOfPath, ext: str = None, as_path_obj: bool = False) -> Union[str, Path]:
    """Return whatever path is available by incrementing a suffix number in the filename. If the
    passed input path doesn't exist, return it with the requested extension."""
    if not isinstance(path, Path):
        path = Path(path)
    if ext is None:
        ext = path.suffix[1:]
    else:
        path = path.with_suffix(f'.{ext}')
    if not path.exists():
        return path if as_path_obj else str(path)

    index = -1
    parent = path.parent
    stem = path.stem
    while -index <= len(stem) and stem[index].isdigit():
        index -= 1

    try:
        k = int(stem[index + 1:]) + 1
        stem = stem[:index + 1]
    except ValueError:
        k = 2

    while (parent / f'{stem}{k}.{ext}').exists():
        k += 1

    resp = parent / f'{stem}{k}.{ext}'
    return resp if as_path_obj else str(resp)
