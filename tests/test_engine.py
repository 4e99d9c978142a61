from hypothesis import given, strategies as st

from hadrone.collision import CollisionStrategy
from hadrone.engine import (
    CompactionType,
    FreePlacementCompactor,
    LayoutEngine,
    RisingTideCompactor,
    apply_aspect_and_clamp,
    compactor_for,
    layout_engine,
)
from hadrone.items import LayoutItem, ResizeHandle, collides


def item(item_id, x, y, w, h, **kwargs):
    return LayoutItem(id=item_id, x=x, y=y, w=w, h=h, **kwargs)


def by_id(layout, item_id):
    return next(it for it in layout if it.id == item_id)


def no_overlaps(layout):
    return not any(
        collides(a, b) for i, a in enumerate(layout) for b in layout[i + 1:]
    )


def test_rising_tide_stacks_vertically():
    layout = [item("a", 0, 5, 4, 2), item("b", 0, 0, 4, 2)]
    RisingTideCompactor().compact(layout, 12)
    a, b = by_id(layout, "a"), by_id(layout, "b")
    assert b.y == 0
    assert a.y == 2
    assert not collides(a, b)


def test_free_placement_pushes_second_item_down():
    layout = [item("a", 0, 0, 4, 4), item("b", 1, 1, 2, 2)]
    FreePlacementCompactor().compact(layout, 12)
    assert by_id(layout, "b").y == 4


def test_move_element_clamps_to_grid_width():
    engine = LayoutEngine.with_default_collision(RisingTideCompactor(), 6)
    layout = [item("w", 0, 0, 4, 1)]
    engine.move_element(layout, "w", 10, 0)
    assert by_id(layout, "w").x == 2


def test_static_item_does_not_move_in_compactor():
    layout = [item("s", 0, 3, 2, 1, is_static=True)]
    RisingTideCompactor().compact(layout, 12)
    assert layout[0].y == 3


def test_resize_element_applies_min_width():
    engine = LayoutEngine.with_default_collision(RisingTideCompactor(), 12)
    layout = [item("x", 0, 0, 4, 2, min_w=3)]
    engine.resize_element(layout, "x", 0, 0, 1, 2, ResizeHandle.EAST)
    assert by_id(layout, "x").w == 3


def test_aspect_ratio_enforced_on_resize():
    engine = LayoutEngine.with_default_collision(RisingTideCompactor(), 12)
    layout = [item("ar", 0, 0, 4, 2, aspect_ratio=2.0)]
    engine.resize_element(layout, "ar", 0, 0, 2, 2, ResizeHandle.EAST)
    it = by_id(layout, "ar")
    assert it.w == 2
    assert it.h == 1


def test_pushdown_then_no_overlaps_gravity():
    layout = [item("a", 0, 5, 3, 2), item("b", 0, 0, 3, 2)]
    engine = LayoutEngine.with_default_collision(RisingTideCompactor(), 12)
    engine.compact(layout)
    assert no_overlaps(layout)


def test_noop_collision_freeplacement_compact_clears_overlap():
    layout = [item("a", 0, 0, 4, 2), item("b", 1, 0, 2, 2)]
    engine = LayoutEngine(FreePlacementCompactor(), CollisionStrategy.NONE.build(), 12)
    engine.move_element(layout, "b", 1, 0)
    engine2 = LayoutEngine.with_default_collision(FreePlacementCompactor(), 12)
    engine2.compact(layout)
    assert no_overlaps(layout)


def test_move_static_item_is_ignored():
    engine = LayoutEngine.with_default_collision(RisingTideCompactor(), 12)
    layout = [item("s", 2, 0, 2, 1, is_static=True)]
    engine.move_element(layout, "s", 5, 0)
    assert by_id(layout, "s").x == 2


def test_move_not_draggable_is_ignored():
    engine = LayoutEngine.with_default_collision(RisingTideCompactor(), 12)
    layout = [item("d", 2, 0, 2, 1, is_draggable=False)]
    engine.move_element(layout, "d", 5, 0)
    assert by_id(layout, "d").x == 2


def test_resize_not_resizable_is_ignored():
    engine = LayoutEngine.with_default_collision(RisingTideCompactor(), 12)
    layout = [item("r", 0, 0, 2, 2, is_resizable=False)]
    engine.resize_element(layout, "r", 0, 0, 5, 5)
    assert (by_id(layout, "r").w, by_id(layout, "r").h) == (2, 2)


def test_move_unknown_id_leaves_layout():
    engine = LayoutEngine.with_default_collision(RisingTideCompactor(), 12)
    layout = [item("a", 3, 0, 2, 1)]
    engine.move_element(layout, "missing", 0, 0)
    assert layout == [item("a", 3, 0, 2, 1)]


def test_move_onto_other_item_keeps_layout_free_of_overlaps():
    engine = LayoutEngine.with_default_collision(RisingTideCompactor(), 12)
    layout = [item("a", 0, 0, 4, 2), item("b", 4, 0, 4, 2)]
    engine.move_element(layout, "b", 0, 0)
    assert no_overlaps(layout)
    assert by_id(layout, "b").x == 0


def test_resize_respects_max_height():
    engine = LayoutEngine.with_default_collision(RisingTideCompactor(), 12)
    layout = [item("m", 0, 0, 2, 2, max_h=3)]
    engine.resize_element(layout, "m", 0, 0, 2, 9, ResizeHandle.SOUTH)
    assert by_id(layout, "m").h == 3


def test_apply_aspect_prefers_width_without_handle():
    it = item("a", 0, 0, 6, 1, aspect_ratio=3.0)
    apply_aspect_and_clamp(it, 12, None)
    assert (it.w, it.h) == (6, 2)


def test_apply_aspect_height_led_handle():
    it = item("a", 0, 0, 4, 3, aspect_ratio=2.0)
    apply_aspect_and_clamp(it, 12, ResizeHandle.NORTH)
    assert (it.w, it.h) == (6, 3)


def test_apply_aspect_clamps_x_into_grid():
    it = item("a", 10, -2, 4, 1)
    result = apply_aspect_and_clamp(it, 12, None)
    assert result is it
    assert (it.x, it.y, it.w) == (8, 0, 4)


def test_apply_aspect_ignores_invalid_ratio():
    it = item("a", 0, 0, 4, 2, aspect_ratio=float("nan"))
    apply_aspect_and_clamp(it, 12, ResizeHandle.EAST)
    assert (it.w, it.h) == (4, 2)


def test_compactor_for_gravity_settles_items():
    layout = [item("a", 0, 7, 2, 2)]
    compactor_for(CompactionType.GRAVITY).compact(layout, 12)
    assert layout[0].y == 0


def test_compactor_for_free_placement_keeps_position():
    layout = [item("a", 0, 7, 2, 2)]
    compactor_for(CompactionType.FREE_PLACEMENT).compact(layout, 12)
    assert layout[0].y == 7


def test_layout_engine_free_placement_without_collision():
    engine = layout_engine(CompactionType.FREE_PLACEMENT, CollisionStrategy.NONE, 12)
    layout = [item("a", 0, 0, 4, 2), item("b", 6, 0, 2, 2)]
    engine.move_element(layout, "b", 1, 0)
    assert engine.cols == 12
    assert no_overlaps(layout)
    assert by_id(layout, "b").x == 1


@st.composite
def layouts(draw):
    cols = draw(st.integers(4, 15))
    count = draw(st.integers(1, 11))
    items = []
    for n in range(count):
        w = draw(st.integers(1, min(4, cols)))
        x = draw(st.integers(0, cols - w))
        y = draw(st.integers(0, 19))
        h = draw(st.integers(1, 5))
        items.append(item(f"i-{n}", x, y, w, h))
    return cols, items


@given(layouts())
def test_gravity_compaction_removes_overlaps(data):
    cols, items = data
    ids = sorted(it.id for it in items)
    RisingTideCompactor().compact(items, cols)
    assert no_overlaps(items)
    assert sorted(it.id for it in items) == ids


@given(layouts())
def test_free_placement_compaction_removes_overlaps(data):
    cols, items = data
    original = {it.id: it.y for it in items}
    FreePlacementCompactor().compact(items, cols)
    assert no_overlaps(items)
    assert all(it.y >= original[it.id] for it in items)