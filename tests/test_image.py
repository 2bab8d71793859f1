import pytest
from PIL import Image

from asciiframes import image
from asciiframes.typealiases import FrameSourceException


def test_load_converts_to_rgb(tmp_path):
    path = tmp_path / 'gray.png'
    Image.new('L', (3, 2), 40).save(path)
    frame = image.load(path)
    assert frame.mode == 'RGB'
    assert frame.size == (3, 2)


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        image.load(tmp_path / 'missing.png')


def test_load_rejects_non_images(tmp_path):
    path = tmp_path / 'notes.txt'
    path.write_text('hello')
    with pytest.raises(FrameSourceException):
        image.load(path)


def test_asciify_fits_requested_size(image_path):
    art = image.asciify(image_path, width=10, height=8)
    lines = art.split('\n')
    assert len(lines) == 5
    assert all(len(line) == 10 for line in lines)


def test_asciify_without_edges(image_path):
    art = image.asciify(image_path, width=4, height=4, chars='.#', edge_detection=False)
    assert art == '..##\n..##'


def test_asciify_reverse_chars(image_path):
    art = image.asciify(image_path, width=4, height=4, chars='.#', reverse_chars=True, edge_detection=False)
    assert art == '##..\n##..'


def test_asciify_save_txt(image_path):
    art = image.asciify(image_path, width=10, height=5, save_txt=True)
    txt_path = image_path.with_suffix('.txt')
    assert txt_path.read_text() == art + '\n'

    image.asciify(image_path, width=10, height=5, save_txt=True)
    assert (image_path.parent / 'foo2.txt').exists()


def test_asciify_with_full_size_does_not_query_terminal(image_path, monkeypatch):
    def terminal_size():
        raise AssertionError('terminal queried')

    monkeypatch.setattr(image.image.utils, 'terminal_size', terminal_size)
    assert len(image.asciify(image_path, width=10, height=8).split('\n')) == 5


def test_asciify_fills_missing_size_from_terminal(image_path, monkeypatch):
    monkeypatch.setattr(image.image.utils, 'terminal_size', lambda: (6, 50))
    lines = image.asciify(image_path, width=None, height=2).split('\n')
    assert (len(lines[0]), len(lines)) == (4, 2)
