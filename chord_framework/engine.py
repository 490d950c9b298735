#!/usr/bin/env python3
"""
Chord assignment engine.

Assigns every word of a vocabulary a unique chord that satisfies the
keyboard's conflict rules. Words are processed one at a time in
first-occurrence order; for each word the enabled augmentation strategies
are tried in fixed order and the first valid candidate wins. Earlier words
therefore claim the smallest chords.

The engine is driven through :meth:`ChordAssignmentEngine.run`, an iterator
yielding one progress report per word. Between two reports the caller may do
other work or call :meth:`ChordAssignmentEngine.cancel`.

Usage:
    engine = ChordAssignmentEngine(GenerationConfig(min_chord_length=3))
    for progress in engine.run(words, reserved=records):
        print(f"{progress.fraction:.0%}")
    result = engine.result
"""

import logging
import time
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Iterator, Optional, Tuple, Union

from chord_framework.chord_types import (AssignmentTable, Chord, GenerationConfig,
                                         GenerationProgress, GenerationResult,
                                         ReservedChordSet)
from chord_framework.keyboard_model import KeyboardModel
from chord_framework.reserved_chords import load_reserved_chords, parse_reserved_records
from chord_framework.strategies import enabled_strategies
from chord_framework.text_utils import extract_word_keys, normalize_vocabulary
from chord_framework.validator import ConflictValidator

logger = logging.getLogger(__name__)

ReservedInput = Union[None, ReservedChordSet, str, Path, Iterable]


class GenerationState(Enum):
    IDLE = 'idle'
    LOADING_RESERVED = 'loading_reserved'
    RUNNING = 'running'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'
    FAILED = 'failed'


class ChordAssignmentEngine:
    """
    Generates chords for a vocabulary against a keyboard model.

    Each engine owns the assignment table of its current run; the keyboard
    model is read-only and may be shared between engines.
    """

    def __init__(self, config: Optional[Union[GenerationConfig, Dict[str, Any]]] = None,
                 keyboard: Optional[KeyboardModel] = None):
        """
        Initialize the engine.

        Args:
            config: Generation settings (a GenerationConfig or a mapping of its fields)
            keyboard: Keyboard model (CC1 layout if None)

        Raises:
            ChordConfigError: If the settings are invalid
        """
        if config is None:
            config = GenerationConfig()
        elif not isinstance(config, GenerationConfig):
            config = GenerationConfig.from_dict(config)

        self.config = config
        self.keyboard = keyboard or KeyboardModel.default()
        self.validator = ConflictValidator(self.keyboard)
        self.strategies = enabled_strategies(self.config)
        self.reset()

    def reset(self) -> None:
        """Discard the current run's state and return to idle."""
        self.state = GenerationState.IDLE
        self.assignments = AssignmentTable()
        self.reserved = ReservedChordSet()
        self.result: Optional[GenerationResult] = None
        self._cancel_requested = False
        self._discard_partial = False

    def cancel(self, discard_partial: bool = False) -> None:
        """
        Request cancellation of the running generation.

        Takes effect before the next word is processed.

        Args:
            discard_partial: Drop the chords assigned so far from the result
        """
        if self.state is not GenerationState.RUNNING:
            return
        self._cancel_requested = True
        self._discard_partial = discard_partial

    def load_reserved(self, reserved: ReservedInput) -> Tuple[ReservedChordSet, int]:
        """
        Turn any supported reserved chord input into a ReservedChordSet.

        Args:
            reserved: None, a ReservedChordSet, a path to a chord file,
                or an iterable of device library records

        Returns:
            Tuple of (reserved chord set, number of skipped malformed entries)
        """
        if reserved is None:
            return ReservedChordSet(), 0
        if isinstance(reserved, ReservedChordSet):
            return reserved, 0
        if isinstance(reserved, (str, Path)):
            return load_reserved_chords(str(reserved))
        return parse_reserved_records(reserved)

    def find_chord(self, word: str) -> Tuple[Optional[Chord], Optional[str]]:
        """
        Search a chord for a word without recording it.

        Args:
            word: Normalized word

        Returns:
            Tuple of (chord, winning strategy name), or (None, None) if no
            enabled strategy yields a valid chord
        """
        keys = extract_word_keys(word, self.keyboard, self.config.use_duplicate_marker)
        if not keys:
            return None, None

        for strategy in self.strategies:
            candidate = strategy.find_chord(keys, self.keyboard, self.validator, self.config,
                                            self.assignments, self.reserved)
            if candidate is not None:
                return Chord.from_keys(candidate), strategy.name

        return None, None

    def run(self, words: Iterable[str],
            reserved: ReservedInput = None) -> Iterator[GenerationProgress]:
        """
        Generate chords, yielding after every processed word.

        The final result is available as :attr:`result` once the iterator
        is exhausted, cancelled or closed.

        Args:
            words: Raw vocabulary tokens
            reserved: Optional reserved chords (see :meth:`load_reserved`)

        Yields:
            GenerationProgress for each processed word

        Raises:
            RuntimeError: If a run is already in progress on this engine
        """
        if self.state in (GenerationState.LOADING_RESERVED, GenerationState.RUNNING):
            raise RuntimeError("A chord generation run is already in progress")

        self.reset()
        start_time = time.time()

        self.state = GenerationState.LOADING_RESERVED
        try:
            self.reserved, skipped_reserved = self.load_reserved(reserved)
        except Exception:
            self.state = GenerationState.IDLE
            raise

        vocabulary = normalize_vocabulary(words, self.config.min_word_length)
        total = len(vocabulary)

        result = GenerationResult(
            total_words=total,
            skipped_reserved_entries=skipped_reserved,
            reserved_count=len(self.reserved),
            strategy_counts={strategy.name: 0 for strategy in self.strategies},
            config_used=self.config.to_dict(),
        )
        self.result = result
        self.state = GenerationState.RUNNING

        strategy_names = ', '.join(strategy.name for strategy in self.strategies)
        logger.info(f"Generating chords for {total} words "
                    f"({len(self.reserved)} reserved chords, strategies: {strategy_names})")

        failed = False
        try:
            for index, word in enumerate(vocabulary):
                if self._cancel_requested:
                    break

                chord, strategy = self._process_word(word, result)
                result.processed_words = index + 1

                yield GenerationProgress(processed=index + 1, total=total, word=word,
                                         chord=chord, strategy=strategy)
        except GeneratorExit:
            # Consumer stopped iterating
            self._cancel_requested = True
            raise
        except Exception:
            failed = True
            raise
        finally:
            self._finish(result, start_time, failed)

    def generate(self, words: Iterable[str], reserved: ReservedInput = None,
                 on_progress: Optional[Callable[[GenerationProgress], None]] = None) -> GenerationResult:
        """
        Run a generation to completion.

        Args:
            words: Raw vocabulary tokens
            reserved: Optional reserved chords
            on_progress: Called with each progress report

        Returns:
            GenerationResult of the run
        """
        for progress in self.run(words, reserved):
            if on_progress is not None:
                on_progress(progress)
        return self.result

    def _process_word(self, word: str, result: GenerationResult) -> Tuple[Optional[Chord], Optional[str]]:
        """Assign one word and record the outcome in the result."""
        if not extract_word_keys(word, self.keyboard, use_duplicate_marker=False):
            logger.debug(f"Skipping '{word}': no keys on this keyboard")
            result.skipped_words.append(word)
            return None, None

        chord, strategy = self.find_chord(word)
        if chord is None:
            logger.info(f"Could not generate chord for '{word}'")
            result.failed_words.append(word)
            return None, None

        self.assignments.assign(word, chord)
        result.strategy_counts[strategy] = result.strategy_counts.get(strategy, 0) + 1
        logger.debug(f"'{word}' -> {chord} ({strategy})")
        return chord, strategy

    def _finish(self, result: GenerationResult, start_time: float, failed: bool = False) -> None:
        """Finalize the result once the run ends, is cancelled or fails."""
        cancelled = self._cancel_requested and result.processed_words < result.total_words
        result.cancelled = cancelled

        if cancelled and self._discard_partial:
            result.assignments = {}
        else:
            result.assignments = self.assignments.as_dict()

        result.execution_time = time.time() - start_time
        if failed:
            self.state = GenerationState.FAILED
            logger.error(f"Chord generation failed after {result.processed_words}/"
                         f"{result.total_words} words")
            return

        self.state = GenerationState.CANCELLED if cancelled else GenerationState.COMPLETED

        if cancelled:
            logger.info(f"Chord generation cancelled after {result.processed_words}/"
                        f"{result.total_words} words")
        else:
            logger.info(f"Chord generation complete: {len(result.assignments)} assigned, "
                        f"{len(result.failed_words)} failed, {len(result.skipped_words)} skipped")


def generate_chords(words: Iterable[str],
                    config: Optional[Union[GenerationConfig, Dict[str, Any]]] = None,
                    reserved: ReservedInput = None,
                    keyboard: Optional[KeyboardModel] = None) -> GenerationResult:
    """
    Convenience function to run one complete chord generation.

    Args:
        words: Raw vocabulary tokens
        config: Generation settings
        reserved: Optional reserved chords
        keyboard: Keyboard model (CC1 layout if None)

    Returns:
        GenerationResult of the run
    """
    engine = ChordAssignmentEngine(config, keyboard)
    return engine.generate(words, reserved)
