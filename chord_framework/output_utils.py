#!/usr/bin/env python3
"""
Output utilities for chord generation.

Common functions for formatting and writing generation results as a
(word, chord) table or as a delimited chord file.
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from chord_framework.chord_types import Chord, GenerationResult

DEFAULT_SEPARATOR = ' + '


def format_chord(chord: Chord, separator: str = DEFAULT_SEPARATOR) -> str:
    """Render a chord as its sorted keys joined by ``separator``."""
    return chord.join(separator)


def chords_to_dataframe(assignments: Dict[str, Chord],
                        separator: str = DEFAULT_SEPARATOR) -> pd.DataFrame:
    """
    Convert assignments to a two-column table.

    Args:
        assignments: Word -> chord mapping
        separator: Separator between chord keys

    Returns:
        DataFrame with ``word`` and ``chord`` columns in assignment order
    """
    rows = [{'word': word, 'chord': format_chord(chord, separator)}
            for word, chord in assignments.items()]
    return pd.DataFrame(rows, columns=['word', 'chord'])


def format_chord_lines(assignments: Dict[str, Chord],
                       separator: str = DEFAULT_SEPARATOR) -> List[str]:
    """
    Format assignments as delimited chord file records.

    Returns:
        One ``<key1> + <key2> + ...,<word>`` line per assignment
    """
    return [f"{format_chord(chord, separator)},{word}" for word, chord in assignments.items()]


def format_csv_output(result: GenerationResult,
                      config: Optional[Dict[str, Any]] = None) -> str:
    """
    Format a generation result as delimited chord file content.

    Args:
        result: GenerationResult to format
        config: Output format configuration (``separator``)

    Returns:
        Newline-joined chord records
    """
    if config is None:
        config = {}
    separator = config.get('separator', DEFAULT_SEPARATOR)
    return '\n'.join(format_chord_lines(result.assignments, separator))


def format_table_output(result: GenerationResult,
                        config: Optional[Dict[str, Any]] = None) -> str:
    """
    Format a generation result as a human-readable table.

    Args:
        result: GenerationResult to format
        config: Output format configuration (``separator``, ``show_failures``,
            ``show_summary``)

    Returns:
        Formatted table string
    """
    if config is None:
        config = {}

    separator = config.get('separator', DEFAULT_SEPARATOR)
    show_failures = config.get('show_failures', False)
    show_summary = config.get('show_summary', True)

    lines = []

    df = chords_to_dataframe(result.assignments, separator)
    if df.empty:
        lines.append("No chords assigned.")
    else:
        df.columns = ['Word', 'Chord']
        lines.append(df.to_string(index=False, justify='left'))

    if show_failures and result.failed_words:
        lines.append("")
        lines.append(f"Words without a chord ({len(result.failed_words)}):")
        for word in result.failed_words:
            lines.append(f"  {word}")

    if show_failures and result.skipped_words:
        lines.append("")
        lines.append(f"Words without usable keys ({len(result.skipped_words)}):")
        for word in result.skipped_words:
            lines.append(f"  {word}")

    if show_summary:
        lines.append("")
        lines.append(result.summary())

    return '\n'.join(lines)


def write_chord_file(assignments: Dict[str, Chord], filepath: str,
                     separator: str = DEFAULT_SEPARATOR) -> None:
    """
    Write assignments as a delimited chord file (e.g. ``chords.csv``).

    The file can be loaded back as reserved chords.
    """
    lines = format_chord_lines(assignments, separator)
    with open(filepath, 'w', encoding='utf-8') as f:
        f.write('\n'.join(lines))
        if lines:
            f.write('\n')


def write_chord_table(assignments: Dict[str, Chord], filepath: str,
                      separator: str = DEFAULT_SEPARATOR) -> None:
    """Write assignments as a CSV table with ``word`` and ``chord`` columns."""
    chords_to_dataframe(assignments, separator).to_csv(filepath, index=False)


def print_results(result: GenerationResult,
                  output_format: str = "table",
                  config: Optional[Dict[str, Any]] = None,
                  file=None) -> None:
    """
    Print generation results in the specified format.

    Args:
        result: GenerationResult to print
        output_format: Format type ('table', 'csv')
        config: Output format configuration
        file: File object to write to (defaults to stdout)
    """
    if file is None:
        file = sys.stdout

    if output_format == "csv":
        output = format_csv_output(result, config)
    elif output_format == "table":
        output = format_table_output(result, config)
    else:
        raise ValueError(f"Unknown output format: {output_format}")

    print(output, file=file)


def save_results(result: GenerationResult, filepath: str,
                 output_format: str = "csv",
                 config: Optional[Dict[str, Any]] = None) -> Path:
    """
    Save generation results to a file.

    ``csv`` writes the delimited chord file, ``table`` writes a word/chord
    CSV table.

    Returns:
        Path of the written file
    """
    if config is None:
        config = {}
    separator = config.get('separator', DEFAULT_SEPARATOR)

    output_path = Path(filepath)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    if output_format == "csv":
        write_chord_file(result.assignments, str(output_path), separator)
    elif output_format == "table":
        write_chord_table(result.assignments, str(output_path), separator)
    else:
        raise ValueError(f"Unknown output format: {output_format}")

    return output_path


def export_results(result: GenerationResult, output_dir: str,
                   separator: str = DEFAULT_SEPARATOR) -> Dict[str, Path]:
    """
    Write both export forms of a result into a directory.

    Args:
        result: GenerationResult to export
        output_dir: Directory to write into (created if needed)
        separator: Separator between chord keys

    Returns:
        Mapping of export form ('chords', 'table') to written path
    """
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)

    paths = {
        'chords': directory / 'chords.csv',
        'table': directory / 'chord_table.csv',
    }
    write_chord_file(result.assignments, str(paths['chords']), separator)
    write_chord_table(result.assignments, str(paths['table']), separator)
    return paths
