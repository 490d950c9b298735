#!/usr/bin/env python3
"""
Data utilities for chord generation.

Common functions for loading word lists and reserved chord libraries.
Reserved chords come either from a device chord library (JSON with numeric
action codes) or from a chord file previously exported by this tool.
"""

import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import pandas as pd

from chord_framework.action_codes import decode_chord_input, decode_chord_output
from chord_framework.chord_types import ReservedChordError, ReservedChordSet
from chord_framework.text_utils import split_word_lines

logger = logging.getLogger(__name__)

CHORD_KEY_SEPARATOR = ' + '


def parse_reserved_records(records: Iterable) -> Tuple[ReservedChordSet, int]:
    """
    Build a reserved chord set from device library records.

    Each record is a pair ``[input_codes, output_codes]``. Records with
    fewer than two elements, undecodable codes, an empty decoded chord or
    an empty decoded output are skipped.

    Args:
        records: Sequence of (input codes, output codes) pairs

    Returns:
        Tuple of (reserved chord set, number of skipped records)
    """
    reserved = ReservedChordSet()
    skipped = 0

    for record in records:
        if not isinstance(record, (list, tuple)) or len(record) < 2:
            skipped += 1
            continue

        input_codes, output_codes = record[0], record[1]
        try:
            keys = decode_chord_input(input_codes)
            output = decode_chord_output(output_codes)
        except (TypeError, ValueError) as e:
            logger.debug(f"Skipping reserved chord record {record!r}: {e}")
            skipped += 1
            continue

        if not keys or not output:
            skipped += 1
            continue

        reserved.add(output, keys)

    return reserved, skipped


def parse_chord_lines(lines: Iterable[str],
                      separator: str = CHORD_KEY_SEPARATOR) -> Tuple[ReservedChordSet, int]:
    """
    Build a reserved chord set from exported chord file lines.

    Each line reads ``<key1> + <key2> + ...,<word>``. The word follows the
    last comma, so the comma key itself may appear in the chord.

    Args:
        lines: Lines of an exported chord file
        separator: Separator between chord keys

    Returns:
        Tuple of (reserved chord set, number of skipped lines)
    """
    reserved = ReservedChordSet()
    skipped = 0

    for line in lines:
        line = line.strip()
        if not line:
            continue

        chord_part, comma, word = line.rpartition(',')
        word = word.strip()
        keys = [key.strip() for key in chord_part.strip().split(separator)]
        keys = [key for key in keys if key]

        if not comma or not word or not keys:
            skipped += 1
            continue

        reserved.add(word, keys)

    return reserved, skipped


def load_reserved_chords(filepath: str) -> Tuple[ReservedChordSet, int]:
    """
    Load reserved chords from a device library or an exported chord file.

    Args:
        filepath: Path to a ``.json`` chord library or a ``.csv``/``.txt`` chord file

    Returns:
        Tuple of (reserved chord set, number of skipped entries)

    Raises:
        FileNotFoundError: If the file doesn't exist
        ReservedChordError: If the file cannot be parsed at all
    """
    file_path = Path(filepath)

    if not file_path.exists():
        raise FileNotFoundError(f"Reserved chord file not found: {filepath}")

    with open(file_path, 'r', encoding='utf-8') as f:
        content = f.read()

    if file_path.suffix.lower() == '.json':
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ReservedChordError(f"Error parsing chord library {filepath}: {e}")

        if not isinstance(data, dict) or not isinstance(data.get('chords'), list):
            raise ReservedChordError(f"Chord library {filepath} has no 'chords' list")

        reserved, skipped = parse_reserved_records(data['chords'])
    elif file_path.suffix.lower() in ['.csv', '.txt']:
        reserved, skipped = parse_chord_lines(content.splitlines())
    else:
        raise ReservedChordError(f"Unsupported reserved chord file format: {file_path.suffix}")

    logger.info(f"Loaded {len(reserved)} reserved chords from {filepath} ({skipped} skipped)")
    return reserved, skipped


def load_word_list(filepath: str, word_col: Optional[str] = None) -> List[str]:
    """
    Load raw words from a text or CSV file.

    Plain text files hold one word per line. CSV files must have a word
    column, detected automatically unless ``word_col`` is given.

    Args:
        filepath: Path to the word file
        word_col: Name of the word column for CSV files (auto-detected if None)

    Returns:
        Raw words in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If no word column can be found in a CSV file
    """
    file_path = Path(filepath)

    if not file_path.exists():
        raise FileNotFoundError(f"Word file not found: {filepath}")

    if file_path.suffix.lower() != '.csv':
        with open(file_path, 'r', encoding='utf-8') as f:
            return split_word_lines(f.read())

    df = pd.read_csv(filepath, dtype=str, keep_default_na=False)
    columns = list(df.columns)

    # Auto-detect word column
    if word_col is None:
        word_candidates = ['word', 'words', 'text', 'item']
        for candidate in word_candidates:
            if candidate in columns:
                word_col = candidate
                break

        if word_col is None:
            raise ValueError(
                f"Could not find word column in {filepath}. "
                f"Available columns: {columns}. "
                f"Expected one of: {word_candidates}"
            )
    elif word_col not in columns:
        raise ValueError(f"Column '{word_col}' not found in {filepath}. Available columns: {columns}")

    return [word for word in df[word_col].tolist() if word.strip()]
