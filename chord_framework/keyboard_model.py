#!/usr/bin/env python3
"""
Keyboard model for chord generation.

Static description of a chorded keyboard: which key identifiers exist,
which finger (or thumb) zone owns each key, which keys mirror each other
across hands, and which key combinations may never appear together in a
chord. The default model describes the CharaChorder One (CC1) layout.

Nothing in a KeyboardModel changes after construction, so one instance can
be shared by any number of generation runs.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, FrozenSet, Iterable, Any

from chord_framework.chord_types import ChordConfigError


# Finger/thumb zones of the CC1, each owning the keys actuated by that zone.
# SPACE can be reached from both index fingers.
CC1_FINGER_GROUPS = {
    'LH_PINKY': ['LEFT_ALT'],
    'LH_RING_1': [',', 'u', "'"],
    'LH_MID_1': ['.', 'o', 'i'],
    'LH_INDEX': ['e', 'r', 'SPACE', 'BKSP'],
    'LH_THUMB_1': ['m', 'v', 'k', 'c'],
    'LH_THUMB_2': ['g', 'z', 'w'],
    'RH_THUMB_2': ['x', 'b', 'q', 'DUP'],
    'RH_THUMB_1': ['p', 'f', 'd', 'h'],
    'RH_INDEX': ['a', 't', 'SPACE', 'ENTER'],
    'RH_MID_1': ['l', 'n', 'j'],
    'RH_RING_1': ['y', 's', ';'],
    'RH_PINKY': ['RIGHT_ALT'],
}

# At most one member of each group may be pressed at once. Both thumb
# zones of a hand share one actuator.
CC1_PAIRWISE_GROUPS = {
    'LH_PINKY': ['LEFT_ALT', 'LH_PINKY_3D'],
    'LH_RING_1': [',', 'u', "'", 'LH_RING_1_3D'],
    'LH_MID_1': ['.', 'o', 'i', 'LH_MID_1_3D'],
    'LH_INDEX': ['e', 'r', 'LH_INDEX_3D', 'SPACE', 'BKSP'],
    'LH_THUMB': ['m', 'v', 'k', 'c', 'LH_THUMB_1_3D', 'g', 'z', 'w', 'LH_THUMB_2_3D'],
    'RH_THUMB': ['x', 'b', 'q', 'DUP', 'RH_THUMB_1_3D', 'p', 'f', 'd', 'h', 'RH_THUMB_2_3D'],
    'RH_INDEX': ['a', 't', 'RH_INDEX_3D', 'SPACE', 'ENTER'],
    'RH_MID_1': ['l', 'n', 'j', 'RH_MID_1_3D'],
    'RH_RING_1': ['y', 's', ';', 'RH_RING_1_3D'],
    'RH_PINKY': ['RIGHT_ALT', 'RH_PINKY_3D'],
}

# Cross-finger groups of which at most two members may be pressed at once
CC1_WIDE_GROUPS = {
    'group_1': ['a', 'n', 'y'],
    'group_2': ['r', 'o', "'"],
}

# Left-hand side of each mirror pair; None means the key has no mirror
CC1_MIRROR_PAIRS = {
    ',': ';',
    'u': 's',
    "'": 'y',
    '.': 'j',
    'o': 'n',
    'i': 'l',
    'e': 't',
    'SPACE': 'SPACE',
    'BKSP': 'ENTER',
    'r': 'a',
    'v': 'p',
    'm': 'h',
    'c': 'd',
    'k': 'f',
    'z': 'q',
    'w': 'b',
    'g': None,
    'x': None,
}

# Exact key-sets that trigger device functions
CC1_DENYLIST = {
    'impulse_chord': ['DUP', 'i'],
}

CC1_MODIFIER_KEYS = ('LEFT_ALT', 'RIGHT_ALT')
CC1_DUPLICATE_MARKER = 'DUP'

SPATIAL_SUFFIX = '_3D'


class ConflictKind(Enum):
    """Kinds of group-count rules a chord must satisfy."""
    PAIRWISE = 'pairwise'
    WIDE = 'wide'


@dataclass(frozen=True)
class ConflictRule:
    """At most ``limit`` members of ``members`` may appear in one chord."""
    name: str
    kind: ConflictKind
    members: FrozenSet[str]
    limit: int

    def count(self, keys: Iterable[str]) -> int:
        """Number of ``keys`` drawn from this rule's group."""
        return sum(1 for key in keys if key in self.members)

    def is_violated_by(self, keys: Iterable[str]) -> bool:
        return self.count(keys) > self.limit


@dataclass(frozen=True)
class KeyboardModel:
    """
    Immutable description of a chorded keyboard.

    Use :meth:`default` for the CC1 layout or :meth:`from_dict` to build a
    model from a configuration mapping.
    """

    finger_groups: Dict[str, Tuple[str, ...]]
    """Finger zone name -> keys owned by that zone (declaration order kept)"""

    conflict_rules: Tuple[ConflictRule, ...]
    """Pairwise rules first, then wide rules"""

    mirror_map: Dict[str, str]
    """Symmetric key -> mirror key mapping (fixed points allowed)"""

    denylist: Tuple[FrozenSet[str], ...] = ()
    """Exact key-sets that may never be assigned"""

    modifier_keys: Tuple[str, ...] = CC1_MODIFIER_KEYS
    duplicate_marker: Optional[str] = CC1_DUPLICATE_MARKER

    valid_keys: FrozenSet[str] = field(init=False)

    def __post_init__(self):
        keys = frozenset(key for group in self.finger_groups.values() for key in group)
        object.__setattr__(self, 'valid_keys', keys)

    @classmethod
    def default(cls) -> 'KeyboardModel':
        """Build the CC1 keyboard model."""
        return cls.from_dict({
            'finger_groups': CC1_FINGER_GROUPS,
            'pairwise_groups': CC1_PAIRWISE_GROUPS,
            'wide_groups': CC1_WIDE_GROUPS,
            'mirror_pairs': CC1_MIRROR_PAIRS,
            'denylist': CC1_DENYLIST,
            'modifier_keys': list(CC1_MODIFIER_KEYS),
            'duplicate_marker': CC1_DUPLICATE_MARKER,
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'KeyboardModel':
        """
        Build a keyboard model from a configuration mapping.

        Args:
            data: Mapping with ``finger_groups`` (required) and optional
                ``pairwise_groups``, ``wide_groups``, ``wide_group_limit``,
                ``mirror_pairs``, ``denylist``, ``modifier_keys`` and
                ``duplicate_marker`` entries

        Returns:
            KeyboardModel instance

        Raises:
            ChordConfigError: If the layout description is inconsistent
        """
        finger_groups = data.get('finger_groups')
        if not finger_groups:
            raise ChordConfigError("Keyboard model needs at least one finger group")

        groups = {name: tuple(keys) for name, keys in finger_groups.items()}
        valid_keys = {key for keys in groups.values() for key in keys}
        spatial_keys = {f"{name}{SPATIAL_SUFFIX}" for name in groups}
        # Rules may reference spatial siblings of any zone, including merged zones
        rule_keys = valid_keys | spatial_keys

        rules = []
        for name, members in (data.get('pairwise_groups') or {}).items():
            rules.append(_build_rule(name, ConflictKind.PAIRWISE, members, 1, rule_keys))

        wide_limit = int(data.get('wide_group_limit', 2))
        for name, members in (data.get('wide_groups') or {}).items():
            rules.append(_build_rule(name, ConflictKind.WIDE, members, wide_limit, rule_keys))

        mirror_map = _build_mirror_map(data.get('mirror_pairs') or {}, valid_keys)

        denylist = []
        for name, keys in (data.get('denylist') or {}).items():
            if not keys:
                raise ChordConfigError(f"Denylist entry '{name}' is empty")
            denylist.append(frozenset(keys))

        modifier_keys = tuple(data.get('modifier_keys') or ())
        unknown = [key for key in modifier_keys if key not in valid_keys]
        if unknown:
            raise ChordConfigError(f"Modifier keys not in any finger group: {unknown}")

        duplicate_marker = data.get('duplicate_marker')
        if duplicate_marker is not None and duplicate_marker not in valid_keys:
            raise ChordConfigError(
                f"Duplicate marker '{duplicate_marker}' is not in any finger group"
            )

        return cls(
            finger_groups=groups,
            conflict_rules=tuple(rules),
            mirror_map=mirror_map,
            denylist=tuple(denylist),
            modifier_keys=modifier_keys,
            duplicate_marker=duplicate_marker,
        )

    @property
    def pairwise_rules(self) -> List[ConflictRule]:
        return [rule for rule in self.conflict_rules if rule.kind is ConflictKind.PAIRWISE]

    @property
    def wide_rules(self) -> List[ConflictRule]:
        return [rule for rule in self.conflict_rules if rule.kind is ConflictKind.WIDE]

    def is_valid_key(self, key: str) -> bool:
        """Check whether a key identifier exists on this keyboard."""
        return key in self.valid_keys

    def owning_groups(self, key: str) -> List[str]:
        """
        Get the finger zones owning a key.

        Args:
            key: Key identifier

        Returns:
            Zone names in declaration order (empty for unknown keys).
            A spatial variant key is owned by its shadow zone only.
        """
        owners = [name for name, keys in self.finger_groups.items() if key in keys]
        if not owners and key.endswith(SPATIAL_SUFFIX):
            base = key[:-len(SPATIAL_SUFFIX)]
            if base in self.finger_groups:
                owners.append(key)
        return owners

    def mirror(self, key: str) -> Optional[str]:
        """Get the key performing the symmetric action on the other hand."""
        return self.mirror_map.get(key)

    def spatial_variant(self, key: str) -> Optional[str]:
        """Get the 3D sibling of a key: the shadow key of its first owning zone."""
        for name, keys in self.finger_groups.items():
            if key in keys:
                return f"{name}{SPATIAL_SUFFIX}"
        return None

    def is_denylisted(self, keys: Iterable[str]) -> bool:
        return frozenset(keys) in self.denylist


def _build_rule(name: str, kind: ConflictKind, members: Iterable[str],
                limit: int, known_keys: set) -> ConflictRule:
    """Create a conflict rule after checking its members exist."""
    member_set = frozenset(members)
    unknown = sorted(member_set - known_keys)
    if unknown:
        raise ChordConfigError(f"Conflict group '{name}' references unknown keys: {unknown}")
    if limit < 1:
        raise ChordConfigError(f"Conflict group '{name}' limit must be >= 1, got {limit}")
    return ConflictRule(name=name, kind=kind, members=member_set, limit=limit)


def _build_mirror_map(pairs: Dict[str, Optional[str]], valid_keys: set) -> Dict[str, str]:
    """
    Expand one-sided mirror pairs into a symmetric mapping.

    Args:
        pairs: Mapping of left key -> right key (None for keys without a mirror)
        valid_keys: All keys of the keyboard

    Returns:
        Mapping containing both directions of every pair

    Raises:
        ChordConfigError: If a key is mirrored to two different keys
    """
    mirror_map: Dict[str, str] = {}
    for left, right in pairs.items():
        if left not in valid_keys:
            raise ChordConfigError(f"Mirror key '{left}' is not in any finger group")
        if right is None:
            continue
        if right not in valid_keys:
            raise ChordConfigError(f"Mirror key '{right}' is not in any finger group")

        for source, target in ((left, right), (right, left)):
            existing = mirror_map.get(source)
            if existing is not None and existing != target:
                raise ChordConfigError(
                    f"Key '{source}' mirrors to both '{existing}' and '{target}'"
                )
            mirror_map[source] = target
    return mirror_map
