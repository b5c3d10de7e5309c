"""Entry point for the BD2Hub interaction prototype.

Sets up the engine (ECS world, event bus, systems) inside an Arcade window
and draws just enough to watch the cursor, dock and notifications move.
Usage: ``python src/main.py [characters.json]``.
"""
import logging
import sys

import arcade
from arcade import Window, run, set_background_color, color

from hub.app import HubEngine
from hub.constants import DOCK_LABELS
from hub.data.loader import Dataset, load_dataset_file
from hub.events.bus import EVENT_CHARACTER_SELECTED, EVENT_DOCK_LEAVE, EVENT_MOUSE_LEAVE, EVENT_ROSTER_VIEW_CHANGED, EVENT_SCROLL
from hub.ui.registry import InteractiveRegion, InteractiveRegistry
from hub.utils.scroll_lock import DocumentScrollLock
from hub.utils.session_store import MemorySessionStore

DOCK_ICON_SIZE = 48
DOCK_GAP = 8
DOCK_BOTTOM = 24


class HubWindow(Window):
    def __init__(self, dataset: Dataset):
        super().__init__(1024, 700, "BD2Hub")
        self.set_update_rate(1/60)
        self.registry = InteractiveRegistry()
        self.scroll_lock = DocumentScrollLock()
        self.scroll_y = 0.0
        dock_icons = self._layout_dock()
        self.engine = HubEngine.from_dataset(
            dataset,
            registry=self.registry,
            session_store=MemorySessionStore(),
            scroll_host=self.scroll_lock,
            dock_icons=dock_icons,
            dock_row_bounds=(DOCK_BOTTOM, DOCK_BOTTOM + DOCK_ICON_SIZE),
        )
        self._layout_roster()
        self.engine.event_bus.subscribe(EVENT_ROSTER_VIEW_CHANGED, lambda sender, **payload: self._layout_roster())
        self.engine.start()
        set_background_color(color.BLACK)

    def _layout_dock(self):
        total = len(DOCK_LABELS) * DOCK_ICON_SIZE + (len(DOCK_LABELS) - 1) * DOCK_GAP
        left = (self.width - total) / 2
        icons = []
        for i, label in enumerate(DOCK_LABELS):
            x = left + i * (DOCK_ICON_SIZE + DOCK_GAP)
            self.registry.register(
                InteractiveRegion(element_id=f"dock-{i}", bounds=(x, DOCK_BOTTOM, DOCK_ICON_SIZE, DOCK_ICON_SIZE), aria_label=label)
            )
            icons.append((label, x + DOCK_ICON_SIZE / 2))
        return icons

    def _layout_roster(self):
        # Grid of pills for the current view; re-registered whenever filters change.
        for region in self.registry.regions():
            if region.element_id.startswith("char-"):
                self.registry.unregister(region.element_id)
        top = self.height - 80
        for i, entry in enumerate(self.engine.get_view().entries):
            col, row = i % 6, i // 6
            self.registry.register(
                InteractiveRegion(
                    element_id=f"char-{entry.id}",
                    bounds=(40 + col * 160, top - row * 40, 150, 32),
                    text=f"{entry.name}  {entry.costume_name}",
                )
            )

    def on_draw(self):
        self.clear()
        for region in self.registry.regions():
            left, bottom, w, h = region.bounds
            arcade.draw_lrbt_rectangle_outline(left, left + w, bottom, bottom + h, color.GRAY)
        for icon, scale in zip(self.engine.magnifier.icons(), self.engine.magnifier.scales()):
            arcade.draw_circle_filled(icon.center_x, DOCK_BOTTOM + DOCK_ICON_SIZE / 2, DOCK_ICON_SIZE / 2 * scale, color.DARK_SLATE_GRAY)
        for i, note in enumerate(self.engine.active_notifications()):
            arcade.draw_text(note.title, self.width - 320, 140 + i * 40, color.WHITE, 12)
        state = self.engine.get_pointer_state()
        arcade.draw_circle_filled(state.slow_x, state.slow_y, 22, (168, 85, 247, 60))
        arcade.draw_circle_filled(state.fast_x, state.fast_y, 5, color.WHITE if not state.hovering else color.VIOLET)
        if state.label:
            arcade.draw_text(state.label, state.fast_x + 12, state.fast_y + 16, color.WHITE, 11)
        session = self.engine.modal()
        if session is not None:
            arcade.draw_text(f"#{session.character_id} [{session.active_tab.value}]", 40, self.height / 2, color.WHITE, 16)

    def on_update(self, delta_time: float):
        self.engine.tick(delta_time)

    def on_mouse_motion(self, x: float, y: float, dx: float, dy: float):
        self.engine.pointer_move(x, y)

    def on_mouse_leave(self, x: float, y: float):
        self.engine.event_bus.emit(EVENT_MOUSE_LEAVE)
        self.engine.event_bus.emit(EVENT_DOCK_LEAVE)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        if self.engine.modal() is not None:
            self.engine.cancel("backdrop")
            return
        region = self.registry.element_at(x, y)
        if region is not None and region.element_id.startswith("char-"):
            self.engine.event_bus.emit(EVENT_CHARACTER_SELECTED, character_id=int(region.element_id[5:]))

    def on_mouse_scroll(self, x: int, y: int, scroll_x: int, scroll_y: int):
        if self.scroll_lock.overflow == DocumentScrollLock.LOCKED:
            return
        self.scroll_y = max(0.0, self.scroll_y - scroll_y * 24)
        self.engine.event_bus.emit(EVENT_SCROLL, scroll_y=self.scroll_y)

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == arcade.key.ESCAPE:
            self.engine.cancel("escape")

    def on_close(self):
        self.engine.teardown()
        super().on_close()


def main():
    logging.basicConfig(level=logging.INFO)
    dataset = load_dataset_file(sys.argv[1]) if len(sys.argv) > 1 else Dataset()
    HubWindow(dataset)
    run()

if __name__ == "__main__":
    main()
