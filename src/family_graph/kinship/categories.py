"""Kinship categories and path classification.

A discovered path is a list of edge types walked from the querying person
to the target. Classification works on a normalized form of that path:

- every ``sibling`` hop becomes ``parent`` + ``child``
- a leading ``spouse`` hop is stripped and marks a relative of the spouse
- a trailing ``spouse`` hop is stripped and marks a spouse of a relative

The remaining hops are counted as ``ups`` (parent hops) and ``downs``
(child hops); the pair selects the blood category, which the spouse
markers then re-label as an in-law form.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from ..models import EdgeType


class KinshipCategory(str, Enum):
    """Abstract relationship classes, independent of gender."""
    SELF = "self"
    UNKNOWN = "unknown"
    SPOUSE = "spouse"

    # Direct line
    PARENT = "parent"
    GRANDPARENT = "grandparent"
    GREAT_GRANDPARENT = "great_grandparent"
    GREAT_GREAT_GRANDPARENT = "great_great_grandparent"
    ANCESTOR = "ancestor"
    CHILD = "child"
    GRANDCHILD = "grandchild"
    GREAT_GRANDCHILD = "great_grandchild"
    GREAT_GREAT_GRANDCHILD = "great_great_grandchild"
    DESCENDANT = "descendant"

    # Collateral
    SIBLING = "sibling"
    UNCLE_AUNT = "uncle_aunt"
    GREAT_UNCLE_AUNT = "great_uncle_aunt"
    GREAT_GREAT_UNCLE_AUNT = "great_great_uncle_aunt"
    NEPHEW_NIECE = "nephew_niece"
    GRAND_NEPHEW_NIECE = "grand_nephew_niece"
    GREAT_GRAND_NEPHEW_NIECE = "great_grand_nephew_niece"
    COUSIN = "cousin"
    SECOND_COUSIN = "second_cousin"
    THIRD_COUSIN = "third_cousin"
    DISTANT_COUSIN = "distant_cousin"
    COUSIN_REMOVED = "cousin_removed"
    DISTANT_RELATIVE = "distant_relative"

    # Relatives of the spouse
    PARENT_IN_LAW = "parent_in_law"
    GRANDPARENT_IN_LAW = "grandparent_in_law"
    SIBLING_IN_LAW = "sibling_in_law"
    STEP_CHILD = "step_child"
    SPOUSE_UNCLE_AUNT = "spouse_uncle_aunt"
    SPOUSE_NEPHEW_NIECE = "spouse_nephew_niece"
    SPOUSE_COUSIN = "spouse_cousin"
    SPOUSE_GRANDCHILD = "spouse_grandchild"
    SPOUSE_RELATIVE = "spouse_relative"

    # Spouses of relatives
    CHILD_SPOUSE = "child_spouse"
    SIBLING_SPOUSE = "sibling_spouse"
    GRANDCHILD_SPOUSE = "grandchild_spouse"
    NEPHEW_NIECE_SPOUSE = "nephew_niece_spouse"
    UNCLE_AUNT_SPOUSE = "uncle_aunt_spouse"
    COUSIN_SPOUSE = "cousin_spouse"
    PARENT_SPOUSE = "parent_spouse"  # step-parent
    SPOUSE_OF_RELATIVE = "spouse_of_relative"


_ANCESTORS = {
    1: KinshipCategory.PARENT,
    2: KinshipCategory.GRANDPARENT,
    3: KinshipCategory.GREAT_GRANDPARENT,
    4: KinshipCategory.GREAT_GREAT_GRANDPARENT,
}

_DESCENDANTS = {
    1: KinshipCategory.CHILD,
    2: KinshipCategory.GRANDCHILD,
    3: KinshipCategory.GREAT_GRANDCHILD,
    4: KinshipCategory.GREAT_GREAT_GRANDCHILD,
}

# Sibling of an ancestor (downs == 1), keyed by ups - 1
_AVUNCULAR = {
    1: KinshipCategory.UNCLE_AUNT,
    2: KinshipCategory.GREAT_UNCLE_AUNT,
    3: KinshipCategory.GREAT_GREAT_UNCLE_AUNT,
}

# Descendant of a sibling (ups == 1), keyed by downs - 1
_NEPOTIC = {
    1: KinshipCategory.NEPHEW_NIECE,
    2: KinshipCategory.GRAND_NEPHEW_NIECE,
    3: KinshipCategory.GREAT_GRAND_NEPHEW_NIECE,
}

# Keyed by cousin degree
_COUSINS = {
    1: KinshipCategory.COUSIN,
    2: KinshipCategory.SECOND_COUSIN,
    3: KinshipCategory.THIRD_COUSIN,
}

_VIA_SPOUSE = {
    KinshipCategory.PARENT: KinshipCategory.PARENT_IN_LAW,
    KinshipCategory.GRANDPARENT: KinshipCategory.GRANDPARENT_IN_LAW,
    KinshipCategory.SIBLING: KinshipCategory.SIBLING_IN_LAW,
    KinshipCategory.CHILD: KinshipCategory.STEP_CHILD,
    KinshipCategory.UNCLE_AUNT: KinshipCategory.SPOUSE_UNCLE_AUNT,
    KinshipCategory.NEPHEW_NIECE: KinshipCategory.SPOUSE_NEPHEW_NIECE,
    KinshipCategory.COUSIN: KinshipCategory.SPOUSE_COUSIN,
    KinshipCategory.GRANDCHILD: KinshipCategory.SPOUSE_GRANDCHILD,
}

_SPOUSE_OF = {
    KinshipCategory.CHILD: KinshipCategory.CHILD_SPOUSE,
    KinshipCategory.SIBLING: KinshipCategory.SIBLING_SPOUSE,
    KinshipCategory.GRANDCHILD: KinshipCategory.GRANDCHILD_SPOUSE,
    KinshipCategory.NEPHEW_NIECE: KinshipCategory.NEPHEW_NIECE_SPOUSE,
    KinshipCategory.UNCLE_AUNT: KinshipCategory.UNCLE_AUNT_SPOUSE,
    KinshipCategory.COUSIN: KinshipCategory.COUSIN_SPOUSE,
    KinshipCategory.PARENT: KinshipCategory.PARENT_SPOUSE,
}


@dataclass(frozen=True)
class NormalizedPath:
    """A path reduced to its blood core and spouse markers."""
    core: tuple[EdgeType, ...]
    via_spouse: bool = False
    spouse_of_relative: bool = False

    @property
    def ups(self) -> int:
        return sum(1 for edge in self.core if edge == EdgeType.PARENT)

    @property
    def downs(self) -> int:
        return sum(1 for edge in self.core if edge == EdgeType.CHILD)


@dataclass(frozen=True)
class Classification:
    """Category plus the counts that produced it."""
    category: KinshipCategory
    ups: int = 0
    downs: int = 0
    via_spouse: bool = False
    spouse_of_relative: bool = False
    cousin_degree: int | None = None
    removal: int | None = None


def normalize_path(path: Sequence[EdgeType]) -> NormalizedPath:
    """Expand sibling hops and strip the spouse hops at either end."""
    edges: list[EdgeType] = []
    for edge in path:
        if edge == EdgeType.SIBLING:
            edges.extend((EdgeType.PARENT, EdgeType.CHILD))
        else:
            edges.append(EdgeType(edge))

    via_spouse = bool(edges) and edges[0] == EdgeType.SPOUSE
    if via_spouse:
        edges = edges[1:]

    spouse_of_relative = bool(edges) and edges[-1] == EdgeType.SPOUSE
    if spouse_of_relative:
        edges = edges[:-1]

    return NormalizedPath(tuple(edges), via_spouse=via_spouse, spouse_of_relative=spouse_of_relative)


def classify_blood(ups: int, downs: int) -> tuple[KinshipCategory, int | None, int | None]:
    """Blood category for a path of ``ups`` parent hops and ``downs`` child hops.

    Returns:
        Tuple of (category, cousin degree, removal); the last two are only
        set for cousin categories.
    """
    if ups == 0 and downs == 0:
        return KinshipCategory.SELF, None, None
    if downs == 0:
        return _ANCESTORS.get(ups, KinshipCategory.ANCESTOR), None, None
    if ups == 0:
        return _DESCENDANTS.get(downs, KinshipCategory.DESCENDANT), None, None
    if ups == 1 and downs == 1:
        return KinshipCategory.SIBLING, None, None
    if downs == 1:
        return _AVUNCULAR.get(ups - 1, KinshipCategory.DISTANT_RELATIVE), None, None
    if ups == 1:
        return _NEPOTIC.get(downs - 1, KinshipCategory.DISTANT_RELATIVE), None, None

    # Both sides at least two hops deep: cousins of some degree
    degree = min(ups, downs) - 1
    if ups == downs:
        return _COUSINS.get(degree, KinshipCategory.DISTANT_COUSIN), degree, 0
    return KinshipCategory.COUSIN_REMOVED, degree, abs(ups - downs)


def classify_path(path: Sequence[EdgeType]) -> Classification:
    """Classify a raw BFS path into a kinship category."""
    if not path:
        return Classification(KinshipCategory.SELF)

    normalized = normalize_path(path)
    ups, downs = normalized.ups, normalized.downs
    markers = {
        "via_spouse": normalized.via_spouse,
        "spouse_of_relative": normalized.spouse_of_relative,
    }

    if normalized.via_spouse and normalized.spouse_of_relative:
        # Spouse of a spouse's relative: no named form
        return Classification(KinshipCategory.SPOUSE_OF_RELATIVE, ups, downs, **markers)

    if ups == 0 and downs == 0:
        # Only spouse hops (and any middle spouse hops) remain
        return Classification(KinshipCategory.SPOUSE, ups, downs, **markers)

    core, degree, removal = classify_blood(ups, downs)

    if normalized.via_spouse:
        category = _VIA_SPOUSE.get(core, KinshipCategory.SPOUSE_RELATIVE)
    elif normalized.spouse_of_relative:
        category = _SPOUSE_OF.get(core, KinshipCategory.SPOUSE_OF_RELATIVE)
    else:
        category = core

    return Classification(
        category,
        ups,
        downs,
        cousin_degree=degree,
        removal=removal,
        **markers,
    )
