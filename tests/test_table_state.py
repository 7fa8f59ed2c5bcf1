import pytest

from ecole.tables import (
    STUDENT_COLUMNS,
    SortDirection,
    SortState,
    TableState,
    TogglePolicy,
    class_table,
    sort_records,
    student_table,
)
from ecole.tables.columns import sortable_keys
from ecole.tables.table_state import compare_values


def _students(count):
    return [
        {
            "id": f"s{index}",
            "lastName": f"Diallo{index:02d}",
            "firstName": "Moussa",
            "idNumber": f"B{index:07d}",
            "classId": "c1" if index % 2 else None,
            "parentId": None,
        }
        for index in range(count)
    ]


def test_search_resets_to_first_page_and_bounds_follow_filtered_total():
    rows = _students(22) + [
        {"id": "k1", "lastName": "Kouassi", "firstName": "Jean", "idNumber": "A1", "classId": "c1", "parentId": None},
        {"id": "k2", "lastName": "Kouamé", "firstName": "Awa", "idNumber": "A2", "classId": "c2", "parentId": "p1"},
        {"id": "k3", "lastName": "Koudou", "firstName": "Ali", "idNumber": "A3", "classId": None, "parentId": None},
    ]
    view = student_table(rows, items_per_page=10)
    view.on_page_change(3)

    view.search_term = "kou"

    assert view.current_page == 1
    assert view.total == 3
    assert view.page_count == 1
    assert view.page_from == 1
    assert view.page_to == 3
    assert [row["lastName"] for row in view.paginated] == ["Kouamé", "Kouassi", "Koudou"]


@pytest.mark.parametrize("count", [0, 1, 6, 7, 8, 20, 29])
def test_pages_concatenate_to_the_sorted_list(count):
    view = student_table(_students(count), items_per_page=7)

    pages = []
    for page in range(1, view.page_count + 1):
        view.on_page_change(page)
        assert len(view.paginated) <= 7
        pages.extend(view.paginated)

    assert pages == view.sorted_rows


@pytest.mark.parametrize(
    "change",
    [
        lambda view: setattr(view, "search_term", "x"),
        lambda view: setattr(view, "selected_class_ids", {"c1"}),
        lambda view: view.toggle_class("c1"),
        lambda view: view.set_toggle("without_parent", True),
        lambda view: view.reset_filters(),
    ],
)
def test_filter_changes_return_to_first_page(change):
    view = student_table(_students(30), items_per_page=5)
    view.on_page_change(4)

    change(view)

    assert view.current_page == 1


def test_sort_and_page_size_changes_keep_the_page():
    view = student_table(_students(30), items_per_page=5)
    view.on_page_change(2)

    view.sort = SortState("firstName", SortDirection.DESC)
    view.items_per_page = 3

    assert view.current_page == 2


def test_sort_is_stable_in_both_directions():
    rows = [
        {"id": 1, "lastName": "Koné"},
        {"id": 2, "lastName": "Bamba"},
        {"id": 3, "lastName": "Kone"},
        {"id": 4, "lastName": "Bamba"},
    ]

    ascending = sort_records(rows, SortState("lastName", SortDirection.ASC))
    descending = sort_records(rows, SortState("lastName", SortDirection.DESC))

    assert [row["id"] for row in ascending] == [2, 4, 3, 1]
    assert [row["id"] for row in descending] == [1, 3, 2, 4]


def test_accented_names_sort_with_their_base_letter():
    rows = [{"lastName": name} for name in ("Fabrice", "Éric", "Emile")]

    ordered = sort_records(rows, SortState("lastName"))

    assert [row["lastName"] for row in ordered] == ["Emile", "Éric", "Fabrice"]


def test_mixed_types_compare_equal():
    assert compare_values("a", 1) == 0
    assert compare_values(True, 2) == 0
    assert compare_values(2, 10) == -1


def test_toggle_policies():
    rows = [
        {"id": "a", "lastName": "Kouassi", "firstName": "Jean", "idNumber": "1", "classId": "c1", "parentId": None},
        {"id": "b", "lastName": "Kouamé", "firstName": "Awa", "idNumber": "2", "classId": "c1", "parentId": "p1"},
        {"id": "c", "lastName": "Diallo", "firstName": "Ali", "idNumber": "3", "classId": None, "parentId": None},
    ]
    restrict = student_table(rows)
    replace = student_table(rows, toggle_policy=TogglePolicy.REPLACE_SEARCH)
    for view in (restrict, replace):
        view.search_term = "kou"
        view.set_toggle("without_parent", True)

    assert [row["id"] for row in restrict.filtered] == ["a"]
    assert [row["id"] for row in replace.filtered] == ["a", "c"]

    replace.selected_class_ids = {"c1"}
    assert [row["id"] for row in replace.filtered] == ["a"]


def test_missing_class_matches_empty_selection_key():
    view = student_table(_students(4))

    view.toggle_class("")

    assert {row["id"] for row in view.filtered} == {"s0", "s2"}


def test_unknown_toggle_is_rejected():
    view = student_table([])

    with pytest.raises(KeyError):
        view.set_toggle("without_teacher", True)


def test_class_table_filters_on_name_and_main_teacher():
    rows = [
        {"id": "1", "name": "6ème B", "mainTeacherId": None},
        {"id": "2", "name": "6ème A", "mainTeacherId": "t1"},
        {"id": "3", "name": "5ème A", "mainTeacherId": None},
    ]
    view = class_table(rows)

    assert [row["id"] for row in view.sorted_rows] == ["3", "2", "1"]

    view.set_toggle("without_main_teacher", True)
    view.search_term = "6ème"
    assert [row["id"] for row in view.filtered] == ["1"]


def test_selection_is_by_identity():
    first, second = {"id": "x"}, {"id": "x"}
    view = student_table([first, second])

    view.select_row(first)
    assert view.state.is_selected(first)
    assert not view.state.is_selected(second)

    view.select_row(first)
    assert view.selected_rows == []


def test_page_size_must_be_positive():
    with pytest.raises(ValueError):
        TableState(items_per_page=10).items_per_page = 0


@pytest.mark.parametrize("size", [0, -5])
def test_explicit_non_positive_page_size_is_rejected(size):
    with pytest.raises(ValueError):
        TableState(items_per_page=size)
    with pytest.raises(ValueError):
        student_table([], items_per_page=size)


def test_default_page_size_comes_from_settings():
    assert TableState().items_per_page == 10


def test_student_columns_sortability():
    keys = sortable_keys(STUDENT_COLUMNS)

    assert "lastName" in keys
    assert "actions" not in keys
