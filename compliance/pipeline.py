"""Full compliance run: load both rosters, then reconcile them."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from compliance import CONFLICT, ILLEGAL, MatchRecord, MissingInput, StudentRecord
from compliance.reader import read_roster
from compliance.reconcile import reconcile

log = logging.getLogger(__name__)

GROUP_A = 'Group A'
GROUP_B = 'Group B'


@dataclass
class CheckResult:
    """Outcome of one compliance run."""

    roster_a: list[StudentRecord]
    roster_b: list[StudentRecord]
    matches: list[MatchRecord] = field(default_factory=list)

    @property
    def illegal_count(self) -> int:
        return sum(1 for m in self.matches if m.status == ILLEGAL)

    @property
    def conflict_count(self) -> int:
        return sum(1 for m in self.matches if m.status == CONFLICT)


def _require(label: str, path: Optional[Union[str, Path]]) -> Path:
    if path is None or not Path(path).is_file():
        raise MissingInput(label, path)
    return Path(path)


def load_rosters(
    path_a: Optional[Union[str, Path]],
    path_b: Optional[Union[str, Path]],
) -> tuple[list[StudentRecord], list[StudentRecord]]:
    """Read both roster files.

    Both inputs are checked before any parsing starts. The two files are
    parsed in parallel; if either fails, its error is raised.

    Raises:
        MissingInput: If a roster file is not given or does not exist.
        ParseError: If a roster file cannot be decoded.
    """
    path_a = _require(GROUP_A, path_a)
    path_b = _require(GROUP_B, path_b)

    with ThreadPoolExecutor(max_workers=2) as pool:
        future_a = pool.submit(read_roster, path_a)
        future_b = pool.submit(read_roster, path_b)
        return future_a.result(), future_b.result()


def check_compliance(
    path_a: Optional[Union[str, Path]],
    path_b: Optional[Union[str, Path]],
) -> CheckResult:
    """Load both rosters and report Group A students also found in Group B."""
    roster_a, roster_b = load_rosters(path_a, path_b)
    matches = reconcile(roster_a, roster_b)
    result = CheckResult(roster_a, roster_b, matches)
    log.info(
        "%d ILLEGAL, %d CONFLICT",
        result.illegal_count, result.conflict_count,
    )
    return result
