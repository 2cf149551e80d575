"""Tests for compliance.reconcile module."""

from compliance import CONFLICT, ILLEGAL, StudentRecord
from compliance.extractor import extract_students
from compliance.reconcile import classify, first_two_names, group_by_id, reconcile


def _student(**kwargs) -> StudentRecord:
    """Create a StudentRecord with defaults."""
    defaults = dict(
        id='S1', full_name='Ann Lee', source_sheet='Sheet1',
        source_file='roster.xlsx', row_number=2,
    )
    defaults.update(kwargs)
    return StudentRecord(**defaults)


class TestFirstTwoNames:
    """Tests for the name reduction used in classification."""

    def test_keeps_two_tokens(self):
        assert first_two_names('Jane Q Public') == 'jane q'

    def test_collapses_whitespace(self):
        assert first_two_names('  jane   public ') == 'jane public'

    def test_single_token(self):
        assert first_two_names('Madonna') == 'madonna'

    def test_empty(self):
        assert first_two_names('') == ''

    def test_punctuation_kept(self):
        assert first_two_names('jane q. other') == 'jane q.'

    def test_tabs_and_newlines(self):
        assert first_two_names('Ann\tLee\nSmith') == 'ann lee'


class TestClassify:
    """Tests for ILLEGAL / CONFLICT classification."""

    def test_middle_initial_with_punctuation_conflicts(self):
        assert classify('Jane Q Public', 'jane q. other') == CONFLICT

    def test_whitespace_and_case_illegal(self):
        assert classify('Jane Public', 'jane   public') == ILLEGAL

    def test_extra_tokens_ignored(self):
        assert classify('Ann Lee', 'ann lee smith') == ILLEGAL

    def test_single_token_vs_two_tokens(self):
        assert classify('Ann', 'Ann Lee') == CONFLICT

    def test_reordered_names_conflict(self):
        assert classify('Lee Ann', 'Ann Lee') == CONFLICT

    def test_accents_not_folded(self):
        assert classify('José Ruiz', 'Jose Ruiz') == CONFLICT


class TestGroupById:
    """Tests for case-insensitive grouping."""

    def test_groups_case_insensitively(self):
        groups = group_by_id([_student(id='ab1'), _student(id='AB1', row_number=5)])
        assert list(groups) == ['AB1']
        key, students = groups['AB1']
        assert key.original == 'ab1'
        assert [s.row_number for s in students] == [2, 5]

    def test_first_seen_order(self):
        groups = group_by_id([_student(id='B'), _student(id='A'), _student(id='b')])
        assert list(groups) == ['B', 'A']


class TestReconcile:
    """Tests for the reconciliation engine."""

    def test_end_to_end_single_match(self):
        roster_a = [_student(id='S1', full_name='Ann Lee', row_number=2)]
        roster_b = [_student(id='s1', full_name='ann lee smith', row_number=4)]
        [match] = reconcile(roster_a, roster_b)
        assert match.id == 'S1'
        assert match.name_a == 'Ann Lee'
        assert match.name_b == 'ann lee smith'
        assert match.locations_a == ['[Sheet1] Row 2']
        assert match.locations_b == ['[Sheet1] Row 4']
        assert match.status == ILLEGAL

    def test_conflict(self):
        roster_a = [_student(id='S1', full_name='Jane Q Public')]
        roster_b = [_student(id='S1', full_name='jane q. other')]
        assert reconcile(roster_a, roster_b)[0].status == CONFLICT

    def test_only_ids_in_both_reported(self):
        roster_a = [_student(id='A'), _student(id='B'), _student(id='C')]
        roster_b = [_student(id='c'), _student(id='D'), _student(id='a')]
        matches = reconcile(roster_a, roster_b)
        assert [m.id for m in matches] == ['A', 'C']

    def test_order_follows_group_a(self):
        roster_a = [_student(id='Z'), _student(id='M'), _student(id='A')]
        roster_b = [_student(id='A'), _student(id='M'), _student(id='Z')]
        assert [m.id for m in reconcile(roster_a, roster_b)] == ['Z', 'M', 'A']

    def test_duplicates_within_group_a(self):
        roster_a = [
            _student(id='X1', full_name='First Person', row_number=4),
            _student(id='Y1', row_number=6),
            _student(id='x1', full_name='Second Person', row_number=9),
        ]
        roster_b = [_student(id='X1', full_name='First Person')]
        [match] = reconcile(roster_a, roster_b)
        assert match.locations_a == ['[Sheet1] Row 4', '[Sheet1] Row 9']
        assert match.name_a == 'First Person'
        assert match.id == 'X1'

    def test_duplicates_within_group_b(self):
        roster_a = [_student(id='X1')]
        roster_b = [
            _student(id='x1', full_name='Ann Lee', source_sheet='Jan', row_number=3),
            _student(id='X1', full_name='Other Name', source_sheet='Feb', row_number=8),
        ]
        [match] = reconcile(roster_a, roster_b)
        assert match.name_b == 'Ann Lee'
        assert match.locations_b == ['[Jan] Row 3', '[Feb] Row 8']
        assert match.status == ILLEGAL

    def test_directional(self):
        roster_a = [_student(id='A')]
        roster_b = [_student(id='A'), _student(id='B')]
        assert len(reconcile(roster_a, roster_b)) == 1
        assert reconcile([], roster_b) == []
        assert reconcile(roster_a, []) == []

    def test_idempotent(self):
        roster_a = [_student(id=f'S{i % 7}', row_number=i) for i in range(20)]
        roster_b = [_student(id=f's{i % 5}', full_name='Bob Ray', row_number=i) for i in range(10)]
        assert reconcile(roster_a, roster_b) == reconcile(roster_a, roster_b)

    def test_every_reported_id_in_both_rosters(self):
        roster_a = [_student(id=i) for i in ('a1', 'B2', 'c3', 'D4')]
        roster_b = [_student(id=i) for i in ('A1', 'd4', 'E5')]
        ids_a = {s.id.upper() for s in roster_a}
        ids_b = {s.id.upper() for s in roster_b}
        for match in reconcile(roster_a, roster_b):
            assert match.id.upper() in ids_a & ids_b

    def test_inputs_not_mutated(self):
        roster_a = [_student(id='S1')]
        roster_b = [_student(id='S1')]
        before = (list(roster_a), list(roster_b))
        reconcile(roster_a, roster_b)
        assert (roster_a, roster_b) == before

    def test_name_taken_from_first_name_column(self):
        roster_a = extract_students(
            [['ID No', 'Name', 'Full Name'], ['S1', 'Ann Lee', 'Lee Ann']], 'A', 'cafe.xlsx',
        )
        roster_b = extract_students([['ID No', 'Name'], ['S1', 'Ann Lee']], 'B', 'bank.xlsx')
        [match] = reconcile(roster_a, roster_b)
        assert match.name_a == 'Ann Lee'
        assert match.status == ILLEGAL
