from typing import List, Optional
import argparse
import sys
from pathlib import Path
from . import image, video, utils
from .core import DEFAULT_CHARS
from .typealiases import AsciiFramesException


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog='asciiframes', description='Render an image or play a directory of frames as ASCII art.')
    p.add_argument('path', help='Image file, or directory of frame images played in filename order')
    p.add_argument('--width', type=int, default=None, help='Available columns (default: terminal width)')
    p.add_argument('--height', type=int, default=None, help='Available lines (default: terminal height)')
    p.add_argument('--chars', default=DEFAULT_CHARS, help='Characters from dark to light')
    p.add_argument('--reverse-chars', action='store_true', help='Reverse the characters, for light backgrounds')
    p.add_argument('--no-edges', action='store_true', help='Map brightness instead of Sobel edges')
    p.add_argument('--fps', type=float, default=50.0, help='Playback rate for frame directories')
    p.add_argument(
        '--save-txt', action='store_true', help='Save the ascii art to a txt instead of printing or playing it')
    p.add_argument('--quiet', action='store_true', help='Do not print progress')
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    path = Path(args.path)
    options = dict(
        width=args.width, height=args.height, chars=args.chars, reverse_chars=args.reverse_chars,
        edge_detection=not args.no_edges)
    try:
        if path.is_dir():
            if args.save_txt:
                columns, lines = utils.terminal_size()
                options['width'] = columns if args.width is None else args.width
                options['height'] = lines if args.height is None else args.height
                out_path = video.asciify(path, quiet=args.quiet, **options)
                if not args.quiet:
                    print(f'Saved {out_path}')
            else:
                video.play(path, fps=args.fps, **options)
        else:
            print(image.asciify(path, save_txt=args.save_txt, **options))
    except (FileNotFoundError, AsciiFramesException) as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
