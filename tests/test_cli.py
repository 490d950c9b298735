import pytest

import generate_chords
from chord_framework.reserved_chords import load_reserved_chords


@pytest.fixture(autouse=True)
def isolated_cli(tmp_path, monkeypatch):
    """Run without a config file and leave pytest's log capture alone."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(generate_chords, 'setup_logging', lambda quiet=False, verbose=False: None)


def test_csv_to_stdout(capsys):
    assert generate_chords.main(['--words', 'cat, act', '--csv', '--quiet']) == 0
    assert capsys.readouterr().out == 'a + c + d,cat\na + c + r,act\n'


def test_table_to_stdout(capsys):
    assert generate_chords.main(['--words', 'cat, act', '--quiet', '--show-failures']) == 0
    out = capsys.readouterr().out
    assert 'a + c + d' in out
    assert 'Chords assigned: 2' in out


def test_words_file_and_output_file(tmp_path):
    words = tmp_path / 'words.txt'
    words.write_text('cat\nact\ndog\n', encoding='utf-8')
    output = tmp_path / 'out' / 'chords.csv'

    code = generate_chords.main(['--words-file', str(words), '--csv',
                                 '--output-file', str(output), '--quiet'])
    assert code == 0
    reserved, skipped = load_reserved_chords(str(output))
    assert list(reserved) == ['cat', 'act', 'dog']
    assert skipped == 0


def test_reserved_file_is_avoided(tmp_path, capsys):
    library = tmp_path / 'library.csv'
    library.write_text('a + c + d,cat\n', encoding='utf-8')
    code = generate_chords.main(['--words', 'cat', '--reserved-file', str(library),
                                 '--csv', '--quiet'])
    assert code == 0
    line = capsys.readouterr().out.strip()
    assert line.endswith(',cat')
    assert line != 'a + c + d,cat'


def test_generation_flags(capsys):
    code = generate_chords.main(['--words', 'cat, act', '--no-mirror', '--no-alt',
                                 '--csv', '--quiet'])
    assert code == 0
    assert capsys.readouterr().out.strip() == ''


def test_no_words(capsys):
    assert generate_chords.main(['--words', ' , ', '--quiet']) == 1
    assert 'No words provided' in capsys.readouterr().err


def test_missing_words_file(tmp_path, capsys):
    assert generate_chords.main(['--words-file', str(tmp_path / 'nope.txt'), '--quiet']) == 1
    assert 'Word file not found' in capsys.readouterr().err


def test_invalid_lengths(capsys):
    assert generate_chords.main(['--words', 'cat', '--min-length', '5',
                                 '--max-length', '3', '--quiet']) == 1
    assert 'max_chord_length' in capsys.readouterr().err


@pytest.mark.parametrize('argv', [
    [],
    ['--words', 'cat', '--words-file', 'words.txt'],
    ['--words', 'cat', '--quiet', '--verbose'],
])
def test_argument_errors_exit(argv):
    with pytest.raises(SystemExit) as excinfo:
        generate_chords.main(argv)
    assert excinfo.value.code == 2


def test_export_dir(tmp_path, capsys):
    code = generate_chords.main(['--words', 'cat, act', '--quiet',
                                 '--export-dir', str(tmp_path / 'export')])
    assert code == 0
    assert (tmp_path / 'export' / 'chords.csv').exists()
    assert (tmp_path / 'export' / 'chord_table.csv').exists()


def test_cli_defaults_come_from_chosen_config(tmp_path, capsys):
    settings = tmp_path / 'settings' / 'chords.yaml'
    settings.parent.mkdir()
    settings.write_text('cli:\n  output_format: csv\n', encoding='utf-8')

    code = generate_chords.main(['--words', 'cat, act', '--quiet', '--config', str(settings)])
    assert code == 0
    assert capsys.readouterr().out == 'a + c + d,cat\na + c + r,act\n'


def test_unreadable_reserved_file_is_reported(tmp_path, capsys):
    library = tmp_path / 'library.xml'
    library.write_text('<chords/>', encoding='utf-8')
    code = generate_chords.main(['--words', 'cat', '--reserved-file', str(library), '--quiet'])
    assert code == 1
    assert 'Reserved chord error' in capsys.readouterr().err


def test_main_keeps_its_name():
    assert generate_chords.main.__name__ == 'main'
    assert generate_chords.main.__doc__ == "Main entry point for chord generation."
