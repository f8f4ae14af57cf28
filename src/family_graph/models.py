"""Person and relation records consumed by the engine, and its result types.

Persons and relations are owned by the surrounding application; the engine
only reads an in-memory snapshot of them. Relation types stay plain strings
on the record so that unknown types can flow through and be skipped later
instead of failing validation up front.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import InvalidRelationError
from .logging import get_logger

logger = get_logger(__name__)


class RelationType(str, Enum):
    """Relation types stored by the application."""
    PARENT_CHILD = "parent_child"  # person1 is the parent, person2 the child
    SPOUSE = "spouse"
    EX_SPOUSE = "ex_spouse"
    SIBLING = "sibling"


MARRIAGE_TYPES = frozenset({RelationType.SPOUSE.value, RelationType.EX_SPOUSE.value})


class EdgeType(str, Enum):
    """Typed adjacency edges, read as "neighbor is my <edge>"."""
    PARENT = "parent"
    CHILD = "child"
    SPOUSE = "spouse"
    SIBLING = "sibling"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    UNSPECIFIED = "unspecified"


class Person(BaseModel):
    """Read-only view of a person in one family tree."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(min_length=1)
    first_name: str = ""
    last_name: str | None = None
    middle_name: str | None = None
    gender: Gender = Gender.UNSPECIFIED

    # Coordinates stored after the user dragged the node by hand
    position_x: float | None = None
    position_y: float | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        # Numeric primary keys arrive unquoted from some exports
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("first_name", mode="before")
    @classmethod
    def _coerce_first_name(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("gender", mode="before")
    @classmethod
    def _coerce_gender(cls, value: Any) -> Gender:
        if isinstance(value, Gender):
            return value
        if isinstance(value, str):
            try:
                return Gender(value.strip().lower())
            except ValueError:
                return Gender.UNSPECIFIED
        return Gender.UNSPECIFIED

    @property
    def display_name(self) -> str:
        """Name as rendered on the tree node (first and last name)."""
        return f"{self.first_name} {self.last_name or ''}".strip()


class Relation(BaseModel):
    """A relation between two persons.

    For ``parent_child`` person1 is always the parent and person2 the child;
    every other type is unordered.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str | None = None
    person1_id: str = Field(min_length=1)
    person2_id: str = Field(min_length=1)
    relation_type: str = Field(min_length=1)
    marriage_date: str | None = None
    divorce_date: str | None = None

    @property
    def is_parent_child(self) -> bool:
        return self.relation_type == RelationType.PARENT_CHILD.value

    @property
    def is_marriage(self) -> bool:
        return self.relation_type in MARRIAGE_TYPES

    @property
    def is_sibling(self) -> bool:
        return self.relation_type == RelationType.SIBLING.value

    def involves(self, person_id: str) -> bool:
        return person_id in (self.person1_id, self.person2_id)

    def other(self, person_id: str) -> str:
        """The endpoint opposite ``person_id``."""
        return self.person2_id if self.person1_id == person_id else self.person1_id

    @classmethod
    def parent_child(cls, parent_id: str, child_id: str) -> Relation:
        return cls(person1_id=parent_id, person2_id=child_id, relation_type=RelationType.PARENT_CHILD.value)

    @classmethod
    def spouse(cls, person1_id: str, person2_id: str) -> Relation:
        return cls(person1_id=person1_id, person2_id=person2_id, relation_type=RelationType.SPOUSE.value)

    @classmethod
    def sibling(cls, person1_id: str, person2_id: str) -> Relation:
        return cls(person1_id=person1_id, person2_id=person2_id, relation_type=RelationType.SIBLING.value)


def _structural_problem(relation: Relation) -> str | None:
    # Instances built with model_construct() skip validation
    if not relation.person1_id or not relation.person2_id:
        return "missing endpoint id"
    if not relation.relation_type or not str(relation.relation_type).strip():
        return "empty relation type"
    return None


def coerce_relations(
    records: Iterable[Relation | Mapping[str, Any]],
) -> tuple[list[Relation], list[InvalidRelationError]]:
    """Validate relation records one by one.

    Returns:
        Tuple of (valid relations in input order, rejected records)
    """
    valid: list[Relation] = []
    rejected: list[InvalidRelationError] = []

    for index, record in enumerate(records):
        if isinstance(record, Relation):
            problem = _structural_problem(record)
            if problem:
                rejected.append(InvalidRelationError(problem, index=index, record=record))
            else:
                valid.append(record)
            continue

        if not isinstance(record, Mapping):
            rejected.append(InvalidRelationError("not a relation record", index=index, record=record))
            continue

        try:
            relation = Relation.model_validate(dict(record))
        except ValidationError as e:
            fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
            rejected.append(InvalidRelationError(f"invalid fields: {fields}", index=index, record=record))
            continue

        problem = _structural_problem(relation)
        if problem:
            rejected.append(InvalidRelationError(problem, index=index, record=record))
        else:
            valid.append(relation)

    return valid, rejected


def coerce_persons(records: Iterable[Person | Mapping[str, Any]]) -> list[Person]:
    """Validate person records, dropping unusable ones and repeated ids.

    A dropped record is logged with the fields that failed validation.
    """
    persons: list[Person] = []
    seen: set[str] = set()

    for index, record in enumerate(records):
        if isinstance(record, Person):
            person = record
        elif isinstance(record, Mapping):
            try:
                person = Person.model_validate(dict(record))
            except ValidationError as e:
                fields = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
                logger.warning("person_record_rejected", index=index, person_id=record.get("id"), fields=fields)
                continue
        else:
            logger.warning("person_record_rejected", index=index, reason="not a person record")
            continue

        if person.id in seen:
            continue
        seen.add(person.id)
        persons.append(person)

    return persons


@dataclass(frozen=True)
class LayoutPosition:
    """Diagram coordinates of one person (node center)."""
    person_id: str
    x: float
    y: float

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"person_id": self.person_id, "x": self.x, "y": self.y}
