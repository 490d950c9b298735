#!/usr/bin/env python3
"""
Core data types for chord generation.

Provides the configuration value handed to the engine, the chord and
assignment containers it fills, and the result structure it returns.
"""

from dataclasses import dataclass, field, asdict
from typing import Dict, Any, Optional, List, Iterable, Iterator, Tuple, FrozenSet


class ChordConfigError(ValueError):
    """Raised for invalid generation settings or keyboard descriptions."""
    pass


class ReservedChordError(ValueError):
    """Raised when a reserved chord file cannot be read at all."""
    pass


@dataclass(frozen=True)
class Chord:
    """
    Unordered, duplicate-free set of keys pressed together.

    Keys are stored sorted so that two chords compare equal exactly when
    their key-sets are equal; the order itself carries no meaning.
    """

    keys: Tuple[str, ...]

    @classmethod
    def from_keys(cls, keys: Iterable[str]) -> 'Chord':
        return cls(tuple(sorted(set(keys))))

    @property
    def key_set(self) -> FrozenSet[str]:
        return frozenset(self.keys)

    def __len__(self) -> int:
        return len(self.keys)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys)

    def __contains__(self, key: str) -> bool:
        return key in self.keys

    def join(self, separator: str = ' + ') -> str:
        return separator.join(self.keys)

    def __str__(self) -> str:
        return self.join()


@dataclass(frozen=True)
class GenerationConfig:
    """
    Settings for one chord generation run.

    Validated on construction; an invalid combination never reaches the engine.
    """

    min_chord_length: int = 3
    max_chord_length: int = 6
    use_duplicate_marker: bool = True
    use_mirroring: bool = True
    use_modifier_augmentation: bool = True
    use_spatial_augmentation: bool = False
    min_word_length: int = 2

    def __post_init__(self):
        for name in ('min_chord_length', 'max_chord_length', 'min_word_length'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ChordConfigError(f"{name} must be an integer, got {value!r}")

        for name in ('use_duplicate_marker', 'use_mirroring',
                     'use_modifier_augmentation', 'use_spatial_augmentation'):
            if not isinstance(getattr(self, name), bool):
                raise ChordConfigError(f"{name} must be true or false, got {getattr(self, name)!r}")

        if self.min_chord_length < 1:
            raise ChordConfigError(
                f"min_chord_length must be >= 1, got {self.min_chord_length}"
            )
        if self.max_chord_length < self.min_chord_length:
            raise ChordConfigError(
                f"max_chord_length ({self.max_chord_length}) must be >= "
                f"min_chord_length ({self.min_chord_length})"
            )
        if self.min_word_length < 1:
            raise ChordConfigError(
                f"min_word_length must be >= 1, got {self.min_word_length}"
            )

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'GenerationConfig':
        """
        Create a configuration from a mapping, ignoring unknown keys.

        Raises:
            ChordConfigError: If a known setting has an invalid value
        """
        data = data or {}
        known = {name for name in cls.__dataclass_fields__}
        return cls(**{key: value for key, value in data.items() if key in known})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ReservedChordSet:
    """
    Chords from an existing library that a new run must not reuse.

    Maps output text to its chord. Loading the same word twice keeps the
    last chord seen for it.
    """

    def __init__(self, entries: Optional[Dict[str, Chord]] = None):
        self._chords: Dict[str, Chord] = {}
        self._index: Dict[FrozenSet[str], int] = {}
        for word, chord in (entries or {}).items():
            self.add(word, chord)

    def add(self, word: str, keys: Iterable[str]) -> Chord:
        chord = keys if isinstance(keys, Chord) else Chord.from_keys(keys)
        previous = self._chords.get(word)
        if previous is not None:
            self._release(previous.key_set)
        self._chords[word] = chord
        self._index[chord.key_set] = self._index.get(chord.key_set, 0) + 1
        return chord

    def _release(self, key_set: FrozenSet[str]) -> None:
        remaining = self._index[key_set] - 1
        if remaining:
            self._index[key_set] = remaining
        else:
            del self._index[key_set]

    def has_chord(self, keys: Iterable[str]) -> bool:
        return frozenset(keys) in self._index

    def items(self):
        return self._chords.items()

    def __getitem__(self, word: str) -> Chord:
        return self._chords[word]

    def __contains__(self, word: str) -> bool:
        return word in self._chords

    def __len__(self) -> int:
        return len(self._chords)

    def __iter__(self) -> Iterator[str]:
        return iter(self._chords)


class AssignmentTable:
    """
    Word -> chord assignments of one generation run.

    Grows monotonically: every word is assigned at most once, and no two
    words share a set-equal chord.
    """

    def __init__(self):
        self._chords: Dict[str, Chord] = {}
        self._index: Dict[FrozenSet[str], str] = {}

    def assign(self, word: str, keys: Iterable[str]) -> Chord:
        """
        Record a chord for a word.

        Raises:
            ValueError: If the word already has a chord or the chord is taken
        """
        chord = keys if isinstance(keys, Chord) else Chord.from_keys(keys)
        if word in self._chords:
            raise ValueError(f"Word '{word}' already has chord {self._chords[word]}")
        owner = self._index.get(chord.key_set)
        if owner is not None:
            raise ValueError(f"Chord {chord} is already assigned to '{owner}'")

        self._chords[word] = chord
        self._index[chord.key_set] = word
        return chord

    def has_chord(self, keys: Iterable[str]) -> bool:
        return frozenset(keys) in self._index

    def word_for(self, keys: Iterable[str]) -> Optional[str]:
        return self._index.get(frozenset(keys))

    def as_dict(self) -> Dict[str, Chord]:
        return dict(self._chords)

    def items(self):
        return self._chords.items()

    def __getitem__(self, word: str) -> Chord:
        return self._chords[word]

    def __contains__(self, word: str) -> bool:
        return word in self._chords

    def __len__(self) -> int:
        return len(self._chords)

    def __iter__(self) -> Iterator[str]:
        return iter(self._chords)


@dataclass(frozen=True)
class GenerationProgress:
    """Progress report emitted after each processed word."""

    processed: int
    total: int
    word: str
    chord: Optional[Chord] = None
    strategy: Optional[str] = None

    @property
    def fraction(self) -> float:
        return self.processed / self.total if self.total else 1.0

    @property
    def assigned(self) -> bool:
        return self.chord is not None


@dataclass
class GenerationResult:
    """
    Outcome of a chord generation run.

    Carries the assignment table along with the words that could not be
    handled, so a run never needs to raise for a single bad word.
    """

    assignments: Dict[str, Chord] = field(default_factory=dict)
    """Word -> chord, in processing order"""

    failed_words: List[str] = field(default_factory=list)
    """Words for which no strategy found a valid chord"""

    skipped_words: List[str] = field(default_factory=list)
    """Words with no key on the keyboard"""

    skipped_reserved_entries: int = 0
    """Malformed reserved chord records that were discarded"""

    reserved_count: int = 0
    total_words: int = 0
    processed_words: int = 0
    cancelled: bool = False

    strategy_counts: Dict[str, int] = field(default_factory=dict)
    """Number of words won by each strategy"""

    execution_time: float = 0.0
    config_used: Dict[str, Any] = field(default_factory=dict)

    @property
    def completed(self) -> bool:
        return not self.cancelled and self.processed_words == self.total_words

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert result to dictionary format.

        Returns:
            Dictionary with chords rendered as key lists, suitable for JSON export
        """
        return {
            'assignments': {word: list(chord.keys) for word, chord in self.assignments.items()},
            'failed_words': list(self.failed_words),
            'skipped_words': list(self.skipped_words),
            'skipped_reserved_entries': self.skipped_reserved_entries,
            'reserved_count': self.reserved_count,
            'total_words': self.total_words,
            'processed_words': self.processed_words,
            'cancelled': self.cancelled,
            'strategy_counts': dict(self.strategy_counts),
            'execution_time': self.execution_time,
        }

    def summary(self) -> str:
        """
        Get a brief summary string of the run.

        Returns:
            Human-readable summary
        """
        summary_lines = [
            f"Words processed: {self.processed_words}/{self.total_words}",
            f"Chords assigned: {len(self.assignments)}",
            f"Failed words: {len(self.failed_words)}",
        ]

        if self.skipped_words:
            summary_lines.append(f"Words without usable keys: {len(self.skipped_words)}")
        if self.reserved_count or self.skipped_reserved_entries:
            summary_lines.append(
                f"Reserved chords: {self.reserved_count} "
                f"({self.skipped_reserved_entries} malformed entries skipped)"
            )
        if self.strategy_counts:
            summary_lines.append("Strategies:")
            for name, count in self.strategy_counts.items():
                summary_lines.append(f"  {name}: {count}")
        if self.cancelled:
            summary_lines.append("Run was cancelled")
        if self.execution_time > 0:
            summary_lines.append(f"Execution time: {self.execution_time:.3f}s")

        return "\n".join(summary_lines)
