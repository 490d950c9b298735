#!/usr/bin/env python3
"""
Chord conflict validation.

Decides whether a candidate key-set can be pressed cleanly on the keyboard
and is still free, i.e. not taken by an assigned or reserved chord.
"""

from typing import Optional, Sequence

from chord_framework.chord_types import AssignmentTable, ReservedChordSet
from chord_framework.keyboard_model import KeyboardModel


class ConflictValidator:
    """
    Checks candidate chords against a keyboard model's rules.

    The validator holds no run state; the assignment table and reserved
    chords are passed to every call.
    """

    def __init__(self, keyboard: KeyboardModel):
        self.keyboard = keyboard

    def conflict_reason(self, candidate: Sequence[str],
                        assignments: Optional[AssignmentTable] = None,
                        reserved: Optional[ReservedChordSet] = None) -> Optional[str]:
        """
        Explain why a candidate cannot be used.

        Args:
            candidate: Keys of the candidate chord
            assignments: Chords assigned so far in this run
            reserved: Chords of a pre-existing library

        Returns:
            Description of the first failed check, or None if the candidate is valid
        """
        key_set = frozenset(candidate)
        if len(key_set) != len(candidate):
            return "duplicate keys"

        for rule in self.keyboard.pairwise_rules:
            if rule.is_violated_by(key_set):
                return f"finger conflict in {rule.name}"

        for rule in self.keyboard.wide_rules:
            if rule.is_violated_by(key_set):
                return f"more than {rule.limit} keys from {rule.name}"

        if key_set in self.keyboard.denylist:
            return "denylisted chord"

        if assignments is not None and assignments.has_chord(key_set):
            return f"already assigned to '{assignments.word_for(key_set)}'"

        if reserved is not None and reserved.has_chord(key_set):
            return "reserved chord"

        return None

    def is_valid(self, candidate: Sequence[str],
                 assignments: Optional[AssignmentTable] = None,
                 reserved: Optional[ReservedChordSet] = None) -> bool:
        """Check whether a candidate passes every rule and is not taken."""
        return self.conflict_reason(candidate, assignments, reserved) is None
