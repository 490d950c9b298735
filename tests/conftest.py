import pytest

from chord_framework.chord_types import GenerationConfig
from chord_framework.keyboard_model import KeyboardModel
from chord_framework.validator import ConflictValidator


@pytest.fixture
def keyboard():
    return KeyboardModel.default()


@pytest.fixture
def validator(keyboard):
    return ConflictValidator(keyboard)


@pytest.fixture
def default_config():
    return GenerationConfig()


@pytest.fixture
def short_config():
    """Allow two-key chords."""
    return GenerationConfig(min_chord_length=2, max_chord_length=4)


@pytest.fixture
def cramped_keyboard():
    """Two letters sharing one finger, no mirrors, modifiers or escape keys."""
    return KeyboardModel.from_dict({
        'finger_groups': {'L': ['a', 'b'], 'R': ['c']},
        'pairwise_groups': {'L': ['a', 'b', 'L_3D'], 'R': ['c', 'R_3D']},
    })


SAMPLE_WORDS = [
    'the', 'of', 'and', 'to', 'in', 'is', 'you', 'that', 'it', 'he',
    'was', 'for', 'on', 'are', 'as', 'with', 'his', 'they', 'at', 'be',
    'this', 'have', 'from', 'or', 'one', 'had', 'by', 'word', 'but', 'not',
    'what', 'all', 'were', 'we', 'when', 'your', 'can', 'said', 'there', 'use',
    'an', 'each', 'which', 'she', 'do', 'how', 'their', 'if', 'will', 'up',
    'other', 'about', 'out', 'many', 'then', 'them', 'these', 'so', 'some', 'her',
    'would', 'make', 'like', 'him', 'into', 'time', 'has', 'look', 'two', 'more',
    'cat', 'act', 'tac', 'hello', 'see', 'seen', 'tree', 'street', 'letter', 'little',
]


@pytest.fixture
def sample_words():
    return list(SAMPLE_WORDS)
