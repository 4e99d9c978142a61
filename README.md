# hadrone

A headless engine for draggable and resizable grid layouts such as
dashboards. It works out compaction, collision handling, drag and resize
sessions, keyboard nudges, responsive column scaling, validation, repair and
persistence. It also produces inline CSS strings for the container, the items
and their resize handles. Drawing them is left to whatever UI toolkit you use.

The package depends only on the standard library.

## Installation

```
pip install hadrone
```

## Modules

- `hadrone.items`: `LayoutItem`, `ResizeHandle`, `collides()` and
  `resize_handle_aria_label()`.
  - A `LayoutItem` has an `id` and a position `x`/`y` and size `w`/`h` in
    grid units.
  - It can also carry optional `min_w`/`max_w`/`min_h`/`max_h` limits, an
    `aspect_ratio` (width / height), the flags `is_static`, `is_draggable`
    and `is_resizable`, and a set of `resize_handles`. By default that set
    holds only the south-east handle.
  - `can_drag()` and `can_resize()` combine the flags.
  - `to_dict()` and `from_dict()` convert an item to and from plain data.
- `hadrone.collision`: `PushDownResolver` pushes overlapping non-static items
  below the moved item, recursively. `NoopCollisionResolver` leaves overlaps
  in place. `CollisionStrategy.PUSH_DOWN` / `.NONE` pick one of them with
  `build()`.
- `hadrone.engine`:
  - Compactors:
    - `RisingTideCompactor` applies gravity towards row 0 using a
      per-column waterline.
    - `FreePlacementCompactor` keeps the requested positions and bumps items
      down only to clear overlaps.
  - Static items are never moved by either compactor.
  - `LayoutEngine` runs `compact()`, `move_element()` and `resize_element()`.
    Moves and resizes are clamped to the grid and to the item's limits. Then
    collisions are resolved and the layout is compacted.
  - `apply_aspect_and_clamp()` enforces an item's aspect ratio.
  - `layout_engine()` and `compactor_for()` build engines from
    `CompactionType.GRAVITY` or `.FREE_PLACEMENT`.
- `hadrone.interaction`: `InteractionSession` follows a drag or resize
  (`InteractionType.DRAG` / `.RESIZE`) from the pointer's start position.
  - `update()` snaps the pointer delta to grid cells and applies it to a
    layout.
  - `get_visual_rect()` and `get_visual_delta()` give smooth pixel values
    for rendering.
- `hadrone.events`: `InteractionEvent` and `ConfigChangedEvent`, both
  subclasses of `LayoutEvent`, plus `InteractionPhase`. Each event has a
  tagged `to_dict()`.
- `hadrone.responsive`: `BreakpointSpec`, `select_breakpoint()` and
  `scale_layout_cols()`.
- `hadrone.validate`:
  - `validate_layout()` raises `LayoutValidationError` whose `issues` list
    holds `DuplicateId`, `NonPositiveSize`, `OutOfHorizontalBounds`,
    `MinMaxWidth`, `MinMaxHeight` and `Overlap` entries.
  - `repair_layout()` clamps items in place and renames repeated ids to
    `id-1`, `id-2`, and so on.
- `hadrone.storage`: persistence, breakpoint configuration and auto-save.
  See "Persistence" below.
- `hadrone.keyboard`:
  - `key_to_nudge()` maps the key names `ArrowLeft`, `ArrowRight`,
    `ArrowUp` and `ArrowDown` to a one-cell move.
  - `apply_keyboard_cell_nudge()` returns a moved and compacted copy of a
    layout.
  - `normalize_for_columns()` fits a copy of a layout to a column count.
- `hadrone.styles`:
  - `GridConfig` holds the grid settings.
  - `total_height()`, `container_style()` and `item_style()` compute sizes
    and inline CSS.
  - `visible_resize_handles()` returns which of an item's south-east, south
    and east handles to render, and `resize_handle_style()` their CSS.
- `hadrone.controller`: `GridController` and `start_session()`. See
  "Driving a UI" below.

## Example

```python
from hadrone.items import LayoutItem, ResizeHandle
from hadrone.engine import CompactionType, layout_engine
from hadrone.collision import CollisionStrategy
from hadrone.validate import LayoutValidationError, validate_layout, repair_layout

layout = [
    LayoutItem(id="a", x=0, y=5, w=4, h=2),
    LayoutItem(id="b", x=0, y=0, w=4, h=2),
]

engine = layout_engine(CompactionType.GRAVITY, CollisionStrategy.PUSH_DOWN, 12)
engine.compact(layout)             # "b" stays at y=0, "a" settles at y=2
engine.move_element(layout, "a", 6, 0)
engine.resize_element(layout, "b", 0, 0, 6, 3, ResizeHandle.SOUTH_EAST)

try:
    validate_layout(layout, 12)
except LayoutValidationError as err:
    print(err.issues)
    repair_layout(layout, 12)
```

## Responsive layouts

```python
from hadrone.responsive import BreakpointSpec, select_breakpoint, scale_layout_cols

breakpoints = [BreakpointSpec("sm", 0, 6), BreakpointSpec("lg", 1200, 12)]
bp = select_breakpoint(breakpoints, 800)   # the "sm" breakpoint
narrow = scale_layout_cols(layout, 12, bp.cols)
```

`scale_layout_cols()` returns copies with `x` and `w` scaled. It leaves `y`
and `h` as they are, so compact the result afterwards if needed.

## Persistence

`hadrone.storage` provides the following:

- `LayoutSnapshot(version, items, cols)` is the data that gets saved.
- `FileStorage(base_path)` writes each snapshot as pretty-printed
  `<key>.json` in a directory.
  - `load()` returns `None` for a missing key.
  - It raises `ValueError` for invalid content.
- `MemoryStorage(prefix)` keeps serialized copies in memory.
- `async debounce_save(storage, key, layout, cols, ms)` waits `ms`
  milliseconds and then saves a version 1 snapshot. Save errors are ignored.
- `BreakpointConfig` holds a breakpoint's name, column count, minimum width,
  margin and row height.
- `select_breakpoint_config()` picks a configuration for a given width.
  - If none applies, it falls back to the first configuration.
  - It raises `ValueError` for an empty list.

## Driving a UI

`GridController` keeps the state of an interactive grid. The layout is fitted
to the grid and compacted when the controller is created.

```python
from hadrone.controller import GridController
from hadrone.items import LayoutItem
from hadrone.styles import GridConfig

config = GridConfig(cols=12, row_height=50.0, margin=(10, 10))
ctrl = GridController(
    [LayoutItem(id="a", w=2, h=2)],
    config,
    on_layout_event=print,
    keyboard_cell_nudge=True,
    container_width=1200.0,
)

ctrl.start_drag("a", (0.0, 0.0))   # emits a START event
ctrl.pointer_move((200.0, 0.0))    # columns are 100 px wide: "a" moves to x=2
ctrl.pointer_up()                  # emits a STOP event
ctrl.key_down("a", "ArrowRight")   # nudges "a" one cell right
styles = ctrl.item_styles()        # {"a": "position: absolute; ..."}
```

The controller's methods behave as follows:

- `start_drag()` and `start_resize()` return the new session. They return
  `None` if the item is missing or may not be dragged or resized.
- `pointer_move()` returns whether the layout changed. It emits `UPDATE`
  events only if `emit_interaction_updates` is set.
- `pointer_up()` ends the interaction with `STOP`.
- `cancel()` ends it with `CANCEL`.
- `key_down()` handles arrow keys only if `keyboard_cell_nudge` is on and no
  pointer interaction is active.
- `set_container_width()` updates the width used for column sizes. It
  ignores widths that are not positive.
- `set_cols()` changes the column count and refits the layout when no
  interaction is active. It raises `ValueError` for fewer than one column.

## What this package does not do

- It renders nothing and has no UI components. It has no bindings to any UI
  framework.
- It does not listen to browser or window events and does not measure the
  container itself. You pass pointer positions, key names and the container
  width in.
- It does not animate items.
- It does not write to browser local storage. `MemoryStorage` is the only
  store that is not file-based.
- `GridController` emits only `InteractionEvent`s. `ConfigChangedEvent` is
  there for your own code to emit.

## Running the tests

```
pip install -e ".[test]"
pytest
```