import pytest
from hypothesis import given
from hypothesis import strategies as st

from hadrone.items import LayoutItem
from hadrone.validate import (
    DuplicateId,
    LayoutValidationError,
    MinMaxHeight,
    MinMaxWidth,
    NonPositiveSize,
    OutOfHorizontalBounds,
    Overlap,
    repair_layout,
    validate_layout,
)


def item(item_id, x, y, w, h, **kwargs):
    return LayoutItem(id=item_id, x=x, y=y, w=w, h=h, **kwargs)


def issues_of(layout, cols):
    with pytest.raises(LayoutValidationError) as exc:
        validate_layout(layout, cols)
    return exc.value.issues


def test_validate_layout_detects_duplicate_ids():
    layout = [item("dup", 0, 0, 2, 2), item("dup", 2, 0, 2, 2)]
    assert any(isinstance(i, DuplicateId) for i in issues_of(layout, 12))


def test_valid_layout_passes():
    layout = [item("a", 0, 0, 2, 2), item("b", 2, 0, 2, 2)]
    assert validate_layout(layout, 12) is None


def test_validate_reports_each_kind():
    layout = [
        item("z", 0, 0, 0, 1),
        item("o", 10, 5, 4, 1),
        item("mw", 0, 10, 1, 1, min_w=2),
        item("mh", 4, 10, 1, 5, max_h=3),
    ]
    issues = issues_of(layout, 12)
    assert NonPositiveSize("z", 0, 1) in issues
    assert OutOfHorizontalBounds("o", 10, 4, 12) in issues
    assert MinMaxWidth("mw", 1, 2, None) in issues
    assert MinMaxHeight("mh", 5, None, 3) in issues


def test_validate_reports_overlap_pairs_in_order():
    layout = [item("a", 0, 0, 2, 2), item("b", 1, 1, 2, 2)]
    assert issues_of(layout, 12) == [Overlap("a", "b")]


def test_repair_suffixes_duplicate_ids():
    layout = [item("a", 0, 0, 1, 1), item("a", 1, 0, 1, 1), item("a", 2, 0, 1, 1)]
    repair_layout(layout, 12)
    assert [it.id for it in layout] == ["a", "a-1", "a-2"]


def test_repair_clamps_into_grid_and_limits():
    layout = [item("a", -3, 0, 20, 0), item("b", 10, 0, 4, 1, min_w=3, max_h=2)]
    layout[1].h = 9
    repair_layout(layout, 6)
    a, b = layout
    assert (a.x, a.w, a.h) == (0, 6, 1)
    assert (b.x, b.w, b.h) == (2, 4, 2)


def test_repair_then_validate_has_no_item_issues():
    layout = [item("x", 9, 0, 8, 0), item("x", -1, 3, 2, 2)]
    repair_layout(layout, 6)
    validate_layout(layout, 6)
    assert [it.id for it in layout] == ["x", "x-1"]


items_strategy = st.lists(
    st.builds(
        lambda n, x, y, w, h: LayoutItem(id=f"i-{n}", x=x, y=y, w=w, h=h),
        st.integers(0, 65535),
        st.integers(0, 7),
        st.integers(0, 19),
        st.integers(1, 4),
        st.integers(1, 5),
    ),
    min_size=1,
    max_size=11,
)


@given(cols=st.integers(4, 15), items=items_strategy)
def test_repair_then_validate(cols, items):
    repair_layout(items, cols)
    try:
        validate_layout(items, cols)
        remaining = []
    except LayoutValidationError as exc:
        remaining = exc.issues
    assert all(isinstance(i, Overlap) for i in remaining)
    assert len({it.id for it in items}) == len(items)
    assert all(it.x >= 0 and it.x + it.w <= cols and it.w >= 1 for it in items)