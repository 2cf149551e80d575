"""Reconciliation engine: find Group A students that also appear in Group B."""

import logging
from typing import NamedTuple

from compliance import CONFLICT, ILLEGAL, MatchRecord, StudentRecord

log = logging.getLogger(__name__)


class IdKey(NamedTuple):
    """Grouping key: normalized id plus the id as first seen."""

    normalized: str
    original: str


def normalize_id(value: str) -> str:
    """Normalize a student id for case-insensitive lookup."""
    return value.upper()


def first_two_names(full_name: str) -> str:
    """Reduce a full name to its first two whitespace-separated tokens, lowercased.

    Punctuation and accents are kept as they are.
    """
    return ' '.join(str(full_name).split()[:2]).lower()


def classify(name_a: str, name_b: str) -> str:
    """Classify a matched id by comparing the first two names."""
    if first_two_names(name_a) == first_two_names(name_b):
        return ILLEGAL
    return CONFLICT


def group_by_id(students: list[StudentRecord]) -> dict[str, tuple[IdKey, list[StudentRecord]]]:
    """Group students by normalized id, keeping first-seen order."""
    groups: dict[str, tuple[IdKey, list[StudentRecord]]] = {}
    for student in students:
        key = IdKey(normalize_id(student.id), student.id)
        if key.normalized not in groups:
            groups[key.normalized] = (key, [])
        groups[key.normalized][1].append(student)
    return groups


def reconcile(
    roster_a: list[StudentRecord],
    roster_b: list[StudentRecord],
) -> list[MatchRecord]:
    """Match Group A students against Group B by id.

    Only ids present in both rosters are reported, in the order they were
    first seen in Group A. Ids only found in one roster are ignored.

    Args:
        roster_a: Students of the group under scrutiny.
        roster_b: Students of the other group.

    Returns:
        One MatchRecord per id found in both rosters.
    """
    groups_a = group_by_id(roster_a)
    groups_b = group_by_id(roster_b)

    matches: list[MatchRecord] = []
    for normalized, (key, students_a) in groups_a.items():
        entry_b = groups_b.get(normalized)
        if entry_b is None:
            continue
        students_b = entry_b[1]

        name_a = students_a[0].full_name
        name_b = students_b[0].full_name
        matches.append(MatchRecord(
            id=key.original,
            name_a=name_a,
            name_b=name_b,
            locations_a=[s.location for s in students_a],
            locations_b=[s.location for s in students_b],
            status=classify(name_a, name_b),
        ))

    log.info(
        "Reconciliation finished: %d ids in Group A, %d in Group B, %d in both",
        len(groups_a), len(groups_b), len(matches),
    )
    return matches
