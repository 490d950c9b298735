#!/usr/bin/env python3
"""
Augmentation strategies for chord search.

Each strategy expands a word's own keys into a larger candidate key
sequence; the engine tries the enabled strategies in a fixed order and keeps
the first valid chord found:

  1. plain     - the word's own keys only
  2. mirrored  - plus each key's mirror on the other hand
  3. modifier  - plus the modifier (alt) keys
  4. spatial   - plus each key's 3D sibling (off by default)
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

from chord_framework.chord_types import AssignmentTable, GenerationConfig, ReservedChordSet
from chord_framework.enumerator import enumerate_candidates
from chord_framework.keyboard_model import KeyboardModel
from chord_framework.validator import ConflictValidator


def _dedupe(keys) -> Tuple[str, ...]:
    """Drop repeated keys, keeping first occurrences in order."""
    return tuple(dict.fromkeys(keys))


class AugmentationStrategy(ABC):
    """
    Base class for candidate key expansion strategies.

    Subclasses set ``name`` and ``config_flag`` (the GenerationConfig field
    enabling the strategy, or None for always-on strategies) and implement
    :meth:`expand_keys`.
    """

    name: str = ''
    config_flag: Optional[str] = None

    def is_enabled(self, config: GenerationConfig) -> bool:
        if self.config_flag is None:
            return True
        return bool(getattr(config, self.config_flag))

    @abstractmethod
    def expand_keys(self, keys: Sequence[str], keyboard: KeyboardModel) -> Tuple[str, ...]:
        """
        Build the candidate key sequence for a word.

        Args:
            keys: The word's eligible keys, in word order
            keyboard: Keyboard model supplying mirrors, modifiers and variants

        Returns:
            Duplicate-free key sequence fed to the enumerator
        """
        pass

    def find_chord(self, keys: Sequence[str], keyboard: KeyboardModel,
                   validator: ConflictValidator, config: GenerationConfig,
                   assignments: AssignmentTable,
                   reserved: Optional[ReservedChordSet] = None) -> Optional[Tuple[str, ...]]:
        """
        Search this strategy's candidates for the first valid chord.

        Returns:
            The winning candidate's keys, or None when every candidate conflicts
        """
        expanded = self.expand_keys(keys, keyboard)
        for candidate in enumerate_candidates(expanded, config.min_chord_length,
                                              config.max_chord_length):
            if validator.is_valid(candidate, assignments, reserved):
                return candidate
        return None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class PlainStrategy(AugmentationStrategy):
    """Use the word's own keys verbatim."""

    name = 'plain'

    def expand_keys(self, keys, keyboard):
        return _dedupe(keys)


class MirroredStrategy(AugmentationStrategy):
    name = 'mirrored'
    config_flag = 'use_mirroring'

    def expand_keys(self, keys, keyboard):
        mirrors = [keyboard.mirror(key) for key in keys]
        return _dedupe(list(keys) + [key for key in mirrors if key])


class ModifierStrategy(AugmentationStrategy):
    name = 'modifier'
    config_flag = 'use_modifier_augmentation'

    def expand_keys(self, keys, keyboard):
        return _dedupe(list(keys) + list(keyboard.modifier_keys))


class SpatialStrategy(AugmentationStrategy):
    name = 'spatial'
    config_flag = 'use_spatial_augmentation'

    def expand_keys(self, keys, keyboard):
        variants = [keyboard.spatial_variant(key) for key in keys]
        return _dedupe(list(keys) + [key for key in variants if key])


# Search order is part of the output contract
STRATEGY_ORDER: Tuple[AugmentationStrategy, ...] = (
    PlainStrategy(),
    MirroredStrategy(),
    ModifierStrategy(),
    SpatialStrategy(),
)


def enabled_strategies(config: GenerationConfig) -> List[AugmentationStrategy]:
    """Get the strategies enabled by a configuration, in search order."""
    return [strategy for strategy in STRATEGY_ORDER if strategy.is_enabled(config)]


def get_strategy_names() -> List[str]:
    """Get the names of all strategies in search order."""
    return [strategy.name for strategy in STRATEGY_ORDER]
