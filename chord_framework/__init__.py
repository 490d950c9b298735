# chord_framework/__init__.py
"""
Chord Generation Framework

Assigns conflict-free chords to the words of a vocabulary for chorded keyboards.
"""

__version__ = "1.0.0"

# Import main classes for easy access
from .chord_types import (Chord, GenerationConfig, GenerationResult, ChordConfigError,
                          ReservedChordSet, AssignmentTable)
from .keyboard_model import KeyboardModel
from .engine import ChordAssignmentEngine, GenerationState, generate_chords
from .config_loader import ConfigLoader, load_generation_config

__all__ = [
    'Chord',
    'GenerationConfig',
    'GenerationResult',
    'ChordConfigError',
    'ReservedChordSet',
    'AssignmentTable',
    'KeyboardModel',
    'ChordAssignmentEngine',
    'GenerationState',
    'generate_chords',
    'ConfigLoader',
    'load_generation_config'
]
