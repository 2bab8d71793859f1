import io

from asciiframes import utils


def test_progress_bar():
    assert utils.progress_bar(5, 10, 10) == '[=====     ] 5/10'
    assert utils.progress_bar(10, 10, 4) == '[====] 10/10'
    assert utils.progress_bar(0, 0, 4) == '[====] 0/0'


def test_clear_screen_writes_ansi_escape():
    stream = io.StringIO()
    utils.clear_screen(stream)
    assert stream.getvalue() == '\033[H\033[2J'


def test_terminal_size_falls_back(monkeypatch):
    monkeypatch.setenv('COLUMNS', '123')
    monkeypatch.setenv('LINES', '45')
    assert utils.terminal_size() == (123, 45)


def test_conditional_print(capsys):
    utils.conditional_print(True)('hidden')
    utils.conditional_print(False)('shown')
    assert capsys.readouterr().out == 'shown\n'


def test_safe_path_increments_suffix(tmp_path):
    path = tmp_path / 'art.txt'
    assert utils.safe_path(path) == str(path)
    path.write_text('')
    assert utils.safe_path(path) == str(tmp_path / 'art2.txt')
    (tmp_path / 'art2.txt').write_text('')
    assert utils.safe_path(tmp_path / 'art2.txt', as_path_obj=True) == tmp_path / 'art3.txt'


def test_safe_path_changes_extension(tmp_path):
    assert utils.safe_path(tmp_path / 'foo.png', ext='txt') == str(tmp_path / 'foo.txt')
