import pytest

from lanegraph.graph.lanes import LaneAllocator, assign_columns, known_parents
from lanegraph.graph.models import Commit
from lanegraph.graph.rows import index_rows


def history_columns(commits):
    return assign_columns(commits, known_parents(index_rows(commits)))


def test_index_rows_follows_input_order():
    commits = [Commit("c3", ["c2"]), Commit("c2", ["c1"]), Commit("c1")]
    assert index_rows(commits) == {"c3": 0, "c2": 1, "c1": 2}
    assert index_rows([]) == {}


def test_linear_history_stays_in_one_lane():
    # A <- B <- C, newest first
    commits = [Commit("A", ["B"]), Commit("B", ["C"]), Commit("C")]
    assert history_columns(commits) == {"A": 0, "B": 0, "C": 0}


def test_merge_keeps_primary_lane_and_opens_new_one():
    #   M
    #   |\
    #   P1 P2
    #   |/
    #   B
    commits = [
        Commit("M", ["P1", "P2"]),
        Commit("P1", ["B"]),
        Commit("P2", ["B"]),
        Commit("B"),
    ]
    columns = history_columns(commits)

    assert columns["M"] == 0
    assert columns["P1"] == 0
    assert columns["P2"] == 1
    assert columns["B"] == 0


def test_fork_puts_each_tip_in_its_own_lane():
    commits = [Commit("X", ["B"]), Commit("Y", ["B"]), Commit("Z", ["B"]), Commit("B")]
    columns = history_columns(commits)

    assert columns == {"X": 0, "Y": 1, "Z": 2, "B": 0}
    # Three branches are open at the row of Z
    assert len(set(columns.values())) >= 3


def test_secondary_parent_already_expected_is_not_booked_twice():
    commits = [Commit("T", ["B"]), Commit("M", ["A", "B"]), Commit("A"), Commit("B")]

    allocator = LaneAllocator()
    for commit in commits[:2]:
        allocator.place(commit.oid, commit.parents)

    assert allocator.slots == ["B", "A"]
    assert history_columns(commits) == {"T": 0, "M": 1, "A": 1, "B": 0}


def test_parent_outside_the_list_does_not_hold_a_lane():
    # "gone" was cut off by a shallow fetch
    commits = [Commit("A", ["gone"]), Commit("B")]
    assert history_columns(commits) == {"A": 0, "B": 0}


def test_freed_lane_is_reused_by_a_new_tip():
    commits = [Commit("A", ["B"]), Commit("B"), Commit("C", ["D"]), Commit("D")]
    columns = history_columns(commits)
    assert set(columns.values()) == {0}


def test_malformed_input_does_not_crash():
    duplicates = [Commit("A"), Commit("A")]
    assert history_columns(duplicates) == {"A": 0}

    cycle = [Commit("A", ["B"]), Commit("B", ["A"])]
    columns = history_columns(cycle)
    assert set(columns) == {"A", "B"}
    assert all(col >= 0 for col in columns.values())

    # Parent listed before its child
    backwards = [Commit("C"), Commit("B", ["C"]), Commit("A", ["B"])]
    columns = history_columns(backwards)
    assert set(columns) == {"A", "B", "C"}
    assert all(col >= 0 for col in columns.values())


def test_assignment_is_deterministic():
    commits = [
        Commit("M", ["P1", "P2"]),
        Commit("X", ["P2"]),
        Commit("P1", ["B"]),
        Commit("P2", ["B"]),
        Commit("B"),
    ]
    assert history_columns(commits) == history_columns(list(commits))


def test_empty_input():
    assert history_columns([]) == {}


def open_branch_bound(commits):
    """Lanes any layout needs, derived from parent/child fan-out alone."""
    rows = index_rows(commits)
    bound = 0

    # Distinct parents still waiting below each row boundary
    for row in range(len(commits)):
        pending = {
            parent
            for commit in commits[: row + 1]
            for parent in commit.parents
            if rows.get(parent, -1) > row
        }
        bound = max(bound, len(pending))

    # Children continuing a commit as their primary line each need a lane
    primary_children = {}
    for commit in commits:
        if commit.parents and commit.parents[0] in rows:
            primary_children[commit.parents[0]] = primary_children.get(commit.parents[0], 0) + 1
    return max([bound] + list(primary_children.values()))


@pytest.mark.parametrize("commits, expected_bound", [
    # linear
    ([Commit("A", ["B"]), Commit("B", ["C"]), Commit("C")], 1),
    # merge of a side branch
    ([Commit("M", ["P1", "P2"]), Commit("P1", ["R"]), Commit("P2", ["R"]), Commit("R")], 2),
    # three tips off one commit
    ([Commit("X", ["B"]), Commit("Y", ["B"]), Commit("Z", ["B"]), Commit("B")], 3),
    # two long parallel lines joined at the top
    ([
        Commit("M", ["A2", "B2"]),
        Commit("A2", ["A1"]),
        Commit("B2", ["B1"]),
        Commit("A1", ["R"]),
        Commit("B1", ["R"]),
        Commit("R"),
    ], 2),
    # merge source already expected by an earlier tip
    ([Commit("T", ["B"]), Commit("M", ["A", "B"]), Commit("A"), Commit("B")], 2),
    # octopus merge
    ([Commit("O", ["A", "B", "C"]), Commit("A", ["R"]), Commit("B", ["R"]), Commit("C", ["R"]), Commit("R")], 3),
])
def test_columns_cover_open_branches(commits, expected_bound):
    columns = history_columns(commits)

    assert set(columns) == {c.oid for c in commits}
    assert all(col >= 0 for col in columns.values())
    assert open_branch_bound(commits) == expected_bound
    assert len(set(columns.values())) >= expected_bound
