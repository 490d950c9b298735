from chord_framework.chord_types import AssignmentTable, GenerationConfig
from chord_framework.strategies import (STRATEGY_ORDER, MirroredStrategy, ModifierStrategy,
                                        PlainStrategy, SpatialStrategy, enabled_strategies,
                                        get_strategy_names)
from chord_framework.validator import ConflictValidator


def test_fixed_order():
    assert get_strategy_names() == ['plain', 'mirrored', 'modifier', 'spatial']
    assert [type(strategy) for strategy in STRATEGY_ORDER] == [
        PlainStrategy, MirroredStrategy, ModifierStrategy, SpatialStrategy]


def test_enabled_strategies_follow_flags():
    assert [s.name for s in enabled_strategies(GenerationConfig())] == ['plain', 'mirrored', 'modifier']

    everything = GenerationConfig(use_spatial_augmentation=True)
    assert [s.name for s in enabled_strategies(everything)] == ['plain', 'mirrored', 'modifier', 'spatial']

    plain_only = GenerationConfig(use_mirroring=False, use_modifier_augmentation=False)
    assert [s.name for s in enabled_strategies(plain_only)] == ['plain']


def test_plain_expansion(keyboard):
    assert PlainStrategy().expand_keys(('c', 'a', 't'), keyboard) == ('c', 'a', 't')


def test_mirrored_expansion(keyboard):
    assert MirroredStrategy().expand_keys(('c', 'a', 't'), keyboard) == ('c', 'a', 't', 'd', 'r', 'e')
    # e and t mirror each other
    assert MirroredStrategy().expand_keys(('e', 't'), keyboard) == ('e', 't')
    # g has no mirror
    assert MirroredStrategy().expand_keys(('g', 'o'), keyboard) == ('g', 'o', 'n')


def test_modifier_expansion(keyboard):
    assert ModifierStrategy().expand_keys(('c', 'a', 't'), keyboard) == (
        'c', 'a', 't', 'LEFT_ALT', 'RIGHT_ALT')


def test_spatial_expansion(keyboard):
    assert SpatialStrategy().expand_keys(('c', 'a', 't'), keyboard) == (
        'c', 'a', 't', 'LH_THUMB_1_3D', 'RH_INDEX_3D')


def test_plain_fails_on_finger_conflict(keyboard, default_config):
    validator = ConflictValidator(keyboard)
    assert PlainStrategy().find_chord(('c', 'a', 't'), keyboard, validator,
                                      default_config, AssignmentTable()) is None


def test_mirrored_finds_first_valid_candidate(keyboard, default_config):
    validator = ConflictValidator(keyboard)
    chord = MirroredStrategy().find_chord(('c', 'a', 't'), keyboard, validator,
                                          default_config, AssignmentTable())
    assert chord == ('c', 'a', 'd')


def test_taken_candidate_is_skipped(keyboard, default_config):
    validator = ConflictValidator(keyboard)
    assignments = AssignmentTable()
    assignments.assign('cat', ['a', 'c', 'd'])
    chord = MirroredStrategy().find_chord(('a', 'c', 't'), keyboard, validator,
                                          default_config, assignments)
    assert chord == ('a', 'c', 'r')
