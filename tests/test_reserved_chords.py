import json

import pytest

from chord_framework.action_codes import (ACTION_CODES, decode_chord_input,
                                          decode_chord_output)
from chord_framework.chord_types import ReservedChordError
from chord_framework.reserved_chords import (load_reserved_chords, load_word_list,
                                             parse_chord_lines, parse_reserved_records)


def test_action_code_table():
    assert ACTION_CODES[97] == 'a'
    assert ACTION_CODES[32] == ' '
    assert ACTION_CODES[127] == 'DEL'
    assert ACTION_CODES[233] == 'é'
    assert ACTION_CODES[260] == 'a'
    assert ACTION_CODES[285] == 'z'
    assert ACTION_CODES[295] == '0'
    assert ACTION_CODES[536] == 'DUP'
    assert 129 not in ACTION_CODES


def test_decode_chord_input():
    assert decode_chord_input([0, 0, 101, 116]) == ['e', 't']
    # Same key through two codes, unknown code, empty entry
    assert decode_chord_input([97, 260, 129, 157, 536]) == ['a', 'DUP']


def test_decode_chord_output():
    assert decode_chord_output([104, 105, 32]) == 'hi '
    assert decode_chord_output([129]) == ''


def test_parse_reserved_records():
    records = [
        [[101, 116], [97, 116]],
        [[104, 101, 0], [116, 104, 101], 'extra'],
        [[97, 116]],
        [[], [97]],
        [[97], [129]],
        None,
    ]
    reserved, skipped = parse_reserved_records(records)
    assert skipped == 4
    assert len(reserved) == 2
    assert reserved['at'].keys == ('e', 't')
    assert reserved['the'].keys == ('e', 'h')
    assert reserved.has_chord(['t', 'e'])


def test_parse_chord_lines():
    lines = ['a + c + d,cat', ', + e,comma', 'badline', ',orphan', '', 'SPACE + e + t,the ']
    reserved, skipped = parse_chord_lines(lines)
    assert skipped == 2
    assert reserved['cat'].keys == ('a', 'c', 'd')
    assert reserved['comma'].keys == (',', 'e')
    assert reserved['the'].keys == ('SPACE', 'e', 't')


def test_later_entry_replaces_earlier_for_same_word():
    reserved, _ = parse_chord_lines(['a + c,cat', 'c + d,cat'])
    assert len(reserved) == 1
    assert reserved['cat'].keys == ('c', 'd')
    assert not reserved.has_chord(['a', 'c'])


def test_load_json_library(tmp_path):
    path = tmp_path / 'library.json'
    path.write_text(json.dumps({'chords': [[[101, 116], [97, 116]], [[1]]]}), encoding='utf-8')
    reserved, skipped = load_reserved_chords(str(path))
    assert len(reserved) == 1
    assert skipped == 1


def test_load_json_library_errors(tmp_path):
    broken = tmp_path / 'broken.json'
    broken.write_text('{not json', encoding='utf-8')
    with pytest.raises(ReservedChordError):
        load_reserved_chords(str(broken))

    no_chords = tmp_path / 'empty.json'
    no_chords.write_text('{"layout": []}', encoding='utf-8')
    with pytest.raises(ReservedChordError):
        load_reserved_chords(str(no_chords))


def test_load_chord_file(tmp_path):
    path = tmp_path / 'chords.txt'
    path.write_text('a + c + d,cat\na + c + r,act\n', encoding='utf-8')
    reserved, skipped = load_reserved_chords(str(path))
    assert list(reserved) == ['cat', 'act']
    assert skipped == 0


def test_load_reserved_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_reserved_chords(str(tmp_path / 'missing.json'))

    other = tmp_path / 'chords.xml'
    other.write_text('<chords/>', encoding='utf-8')
    with pytest.raises(ReservedChordError):
        load_reserved_chords(str(other))


def test_load_word_list_text(tmp_path):
    path = tmp_path / 'words.txt'
    path.write_text('the\nquick\r\n\nbrown\n', encoding='utf-8')
    assert load_word_list(str(path)) == ['the', 'quick', 'brown']


def test_load_word_list_csv(tmp_path):
    path = tmp_path / 'words.csv'
    path.write_text('rank,word\n1,the\n2,of\n3,\n', encoding='utf-8')
    assert load_word_list(str(path)) == ['the', 'of']


def test_load_word_list_csv_without_word_column(tmp_path):
    path = tmp_path / 'words.csv'
    path.write_text('rank,count\n1,10\n', encoding='utf-8')
    with pytest.raises(ValueError, match="Could not find word column"):
        load_word_list(str(path))


def test_load_word_list_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_word_list(str(tmp_path / 'nope.txt'))
