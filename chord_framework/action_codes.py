#!/usr/bin/env python3
"""
Device action codes used in exported chord libraries.

A chord library lists each chord as numeric action codes. This module holds
the fixed code -> character table and helpers to decode code lists. Codes
without an entry (or with an empty entry) decode to nothing.
"""

from typing import Dict, Iterable, List


# Printable ASCII
ACTION_CODES: Dict[int, str] = {code: chr(code) for code in range(32, 127)}
ACTION_CODES[127] = 'DEL'

# Windows-1252 range
ACTION_CODES.update({
    128: '€', 130: '‚', 131: 'ƒ', 132: '„', 133: '…', 134: '†', 135: '‡',
    136: 'ˆ', 137: '‰', 138: 'Š', 139: '‹', 140: 'Œ', 142: 'Ž',
    145: '‘', 146: '’', 147: '“', 148: '”', 149: '•', 150: '–', 151: '—',
    152: '˜', 153: '™', 154: 'š', 155: '›', 156: 'œ', 157: '', 158: 'ž', 159: 'Ÿ',
})

# Latin-1 supplement
ACTION_CODES.update({code: chr(code) for code in range(160, 256)})

# Keyboard scan actions: letters a-z, digits 1-9 then 0
ACTION_CODES.update({260 + i: letter for i, letter in enumerate('abcdefghijklmnopqrstuvwxyz')})
ACTION_CODES.update({286 + i: digit for i, digit in enumerate('1234567890')})

ACTION_CODES.update({
    299: '\t', 300: ' ', 301: '-', 302: '=', 303: '[', 304: ']', 305: '\\',
    306: '#', 307: ';', 308: '', 309: '`', 310: ',', 311: '.', 312: '/',
    461: ' ',
    536: 'DUP',
    544: ' ',
})


def decode_action_code(code) -> str:
    """
    Decode a single action code.

    Args:
        code: Numeric action code (int or numeric string)

    Returns:
        Decoded text, empty for unknown codes

    Raises:
        ValueError: If the code is not numeric
        TypeError: If the code has an unsupported type
    """
    return ACTION_CODES.get(int(code), '')


def decode_chord_input(codes: Iterable) -> List[str]:
    """
    Decode the input side of a library chord into key identifiers.

    Zero codes are padding and are ignored; codes that decode to nothing
    are dropped. Repeated keys are kept once.
    """
    keys = []
    for code in codes:
        if int(code) == 0:
            continue
        key = decode_action_code(code)
        if key and key not in keys:
            keys.append(key)
    return keys


def decode_chord_output(codes: Iterable) -> str:
    """Decode the output side of a library chord into its text."""
    return ''.join(decode_action_code(code) for code in codes)
