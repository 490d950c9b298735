from chord_framework.chord_types import AssignmentTable, ReservedChordSet


def test_valid_chord(validator):
    assert validator.is_valid(('c', 'a', 'd'))
    assert validator.conflict_reason(('c', 'a', 'd')) is None


def test_duplicate_keys(validator):
    assert validator.conflict_reason(('a', 'a', 'c')) == "duplicate keys"


def test_pairwise_conflict(validator):
    # a and t share the right index finger
    assert validator.conflict_reason(('c', 'a', 't')) == "finger conflict in RH_INDEX"


def test_merged_thumb_conflict(validator):
    # m and g sit on different left thumb zones that share one thumb
    assert not validator.is_valid(('m', 'g', 'e'))


def test_space_conflicts_with_both_index_fingers(validator):
    assert not validator.is_valid(('e', 'SPACE'))
    assert not validator.is_valid(('a', 'SPACE'))
    assert validator.is_valid(('SPACE', 'o'))


def test_wide_group_limit(validator):
    # a, n, y are on different fingers but form a wide group
    assert validator.conflict_reason(('a', 'n', 'y')) == "more than 2 keys from group_1"
    assert validator.is_valid(('a', 'n'))


def test_denylisted_chord(validator):
    assert validator.conflict_reason(('DUP', 'i')) == "denylisted chord"
    assert validator.is_valid(('DUP', 'i', 'e'))


def test_spatial_siblings_conflict_with_base_keys(validator):
    assert not validator.is_valid(('a', 'RH_INDEX_3D'))
    assert validator.is_valid(('e', 'RH_INDEX_3D', 'c'))
    assert validator.is_valid(('LH_THUMB_1_3D', 'e', 'a'))


def test_taken_by_assignment(validator):
    assignments = AssignmentTable()
    assignments.assign('cat', ['a', 'c', 'd'])
    assert not validator.is_valid(('d', 'c', 'a'), assignments)
    assert validator.conflict_reason(('c', 'a', 'd'), assignments) == "already assigned to 'cat'"
    assert validator.is_valid(('c', 'a', 'r'), assignments)


def test_taken_by_reserved(validator):
    reserved = ReservedChordSet()
    reserved.add('at', ['e', 't'])
    assert validator.conflict_reason(('t', 'e'), AssignmentTable(), reserved) == "reserved chord"


def test_rule_checks_precede_usage_checks(validator):
    assignments = AssignmentTable()
    assignments.assign('bad', ['a', 't'])
    assert validator.conflict_reason(('a', 't'), assignments) == "finger conflict in RH_INDEX"
