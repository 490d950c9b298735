#!/usr/bin/env python3
"""
Text utilities for chord generation.

Common functions for splitting raw word input, normalizing a vocabulary,
and extracting the keys of a word that exist on the keyboard.
"""

from typing import Iterable, List, Tuple

from chord_framework.keyboard_model import KeyboardModel


def split_word_input(text: str, separator: str = ',') -> List[str]:
    """
    Split a comma-separated word string into trimmed entries.

    Args:
        text: Raw input such as "the, quick, brown"
        separator: Entry separator

    Returns:
        Entries with surrounding whitespace removed (empty entries dropped)
    """
    if not text:
        return []
    return [entry.strip() for entry in text.split(separator) if entry.strip()]


def split_word_lines(text: str) -> List[str]:
    """Split newline-separated word file content into trimmed entries."""
    return [line.strip() for line in text.splitlines() if line.strip()]


def normalize_vocabulary(words: Iterable[str], min_word_length: int = 2) -> List[str]:
    """
    Normalize raw word tokens into the processing order of a run.

    Words are lower-cased, stripped and deduplicated keeping the first
    occurrence, then words shorter than ``min_word_length`` are dropped.

    Args:
        words: Raw word tokens
        min_word_length: Minimum length of a word to keep

    Returns:
        Normalized words in first-occurrence order
    """
    unique = dict.fromkeys(word.strip().lower() for word in words)
    return [word for word in unique if len(word) >= min_word_length]


def extract_word_keys(word: str, keyboard: KeyboardModel,
                      use_duplicate_marker: bool = True) -> Tuple[str, ...]:
    """
    Get the keys a word can be chorded from.

    Spaces are ignored. When any other character repeats, including one
    without a key such as a hyphen, and the duplicate marker is enabled,
    the keyboard's duplicate marker key is appended. Characters without a
    key are then discarded and repeated keys are kept once.

    Args:
        word: Normalized word
        keyboard: Keyboard model defining the valid keys
        use_duplicate_marker: Append the duplicate marker for repeated letters

    Returns:
        Eligible keys in the order they first appear in the word
    """
    chars = [char for char in word if char != ' ']
    repeated = len(set(chars)) < len(chars)
    keys = [char for char in dict.fromkeys(chars) if keyboard.is_valid_key(char)]

    marker = keyboard.duplicate_marker
    if use_duplicate_marker and marker and repeated and marker not in keys:
        keys.append(marker)

    return tuple(keys)


def get_vocabulary_statistics(words: List[str], keyboard: KeyboardModel) -> dict:
    """
    Get coverage statistics for a normalized vocabulary.

    Args:
        words: Normalized words
        keyboard: Keyboard model defining the valid keys

    Returns:
        Dictionary with word counts and unmapped characters
    """
    unmapped = set()
    without_keys = 0
    for word in words:
        missing = {char for char in word if char != ' ' and not keyboard.is_valid_key(char)}
        unmapped.update(missing)
        if not extract_word_keys(word, keyboard, use_duplicate_marker=False):
            without_keys += 1

    return {
        'total_words': len(words),
        'words_without_keys': without_keys,
        'unmapped_characters': sorted(unmapped),
        'average_length': sum(len(word) for word in words) / len(words) if words else 0.0,
    }
