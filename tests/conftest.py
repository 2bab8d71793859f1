import pytest
from PIL import Image


@pytest.fixture
def frames_dir(tmp_path):
    """A directory with two frames (saved out of order), a text file and a subdirectory."""
    folder = tmp_path / 'frames'
    folder.mkdir()
    Image.new('RGB', (8, 4), (255, 255, 255)).save(folder / 'frame2.png')
    frame = Image.new('RGB', (4, 4))
    frame.paste((255, 255, 255), (2, 0, 4, 4))
    frame.save(folder / 'frame1.png')
    (folder / 'notes.txt').write_text('not a frame')
    (folder / 'nested').mkdir()
    return folder


@pytest.fixture
def image_path(tmp_path):
    path = tmp_path / 'foo.png'
    img = Image.new('RGB', (20, 10))
    img.paste((255, 255, 255), (10, 0, 20, 10))
    img.save(path)
    return path
