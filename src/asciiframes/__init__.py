"""
:Version: 0.1.0

asciiframes
===========

Render images and frame sequences as ASCII art that fits the terminal.

`asciiframes` turns a still **image** or a directory of **frames** into character art. Every frame is resampled
to fit the available character grid, reduced to grayscale, contrast-stretched, optionally passed through a
**Sobel edge** filter, and finally mapped to a ramp of characters going from dark to light.

Basic Usage
-----------

Use the corresponding function depending on your use case:

- ``image.asciify()`` converts an image to ascii art. The art is returned as a string and optionally saved in
  a txt.

- ``video.play()`` plays an image or a directory of frames in the terminal at a fixed frame rate.

- ``video.asciify()`` converts a directory of frames to a single txt with one ascii art frame after the other.

All three have the **path** of the input as the first argument. The rest of the arguments all have
**default values**. Something along these lines is enough to get you started:

    >>> import asciiframes as af
    >>> print(af.image.asciify('foo.png'))

For finer control, build a ``FramePipeline`` and feed it Pillow images directly:

    >>> pipeline = af.FramePipeline(af.GlyphRamp(' .:-=+*#%@'), edge_detection=False)
    >>> print(pipeline.render(Image.open('foo.png'), 80, 24))

The size of the art is the biggest one that keeps the aspect ratio of the input and still fits inside
``width`` x ``height`` characters. Both default to the size of the terminal.

Lastly, if you decide to work with **dark text** on a **light background**, remember to set ``reverse_chars``
to ``True`` in order to correct the pixel-to-ASCII mapping.
"""

from . import image, video
from .core import *
from .config import RenderConfig
from .typealiases import AsciiFramesException, InvalidDimensions, ConfigurationError, FrameSourceException


__version__ = '0.1.0'
