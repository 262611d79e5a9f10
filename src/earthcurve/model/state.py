"""
Diagram State (Data Model)
==========================
This module defines the state of the running diagram and its undo history.

Why is this file needed?
------------------------
1. History: every user-visible value lives inside an entry of a navigation
   history, so Undo/Redo walks back and forth the way a browser's Back and
   Forward buttons do.
2. Decoupling: Views subscribe to stores; Controllers write to stores.

Classes:
    NavigationHistory: A stack of state dicts with a cursor.
    HistoryStore: A single keyed value stored inside the history entries.
    DiagramState: The stores used by the application.
"""
from __future__ import annotations

from typing import Any, Callable, Generic, Optional, TypeVar
import logging

from earthcurve.config import CONTROL_KEY, DEFAULT_CONTROL, MAX_HISTORY_ENTRIES, VIEW_KEY
from earthcurve.exceptions import MissingStateError
from earthcurve.model.geometry_primitives import AffineTransform

logger = logging.getLogger(__name__)

T = TypeVar("T")

State = dict[str, Any]
Notifier = Callable[[T], None]
Unsubscriber = Callable[[], None]
Updater = Callable[[T], T]
PopStateListener = Callable[[State], None]


class NavigationHistory:
    """
    An in-process navigation history.

    Holds a list of state entries and a cursor. ``push_state`` adds an entry
    after the cursor (dropping any forward entries), ``replace_state``
    overwrites the current one. Moving the cursor notifies the listeners
    with the state that became current.
    """

    def __init__(self, initial_state: Optional[State] = None, max_entries: Optional[int] = MAX_HISTORY_ENTRIES) -> None:
        self.max_entries = max_entries
        self._entries: list[State] = [dict(initial_state or {})]
        self._index: int = 0
        self._listeners: list[PopStateListener] = []

    @property
    def state(self) -> State:
        return self._entries[self._index]

    @property
    def index(self) -> int:
        return self._index

    def __len__(self) -> int:
        return len(self._entries)

    def push_state(self, state: State) -> None:
        # Pushing from the middle of history discards the forward entries
        del self._entries[self._index + 1:]
        self._entries.append(dict(state))
        self._index += 1

        if self.max_entries is not None and len(self._entries) > self.max_entries:
            self._entries.pop(0)
            self._index -= 1

        logger.debug(f"History push (index: {self._index}, total: {len(self._entries)})")

    def replace_state(self, state: State) -> None:
        self._entries[self._index] = dict(state)

    def can_go_back(self) -> bool:
        return self._index > 0

    def can_go_forward(self) -> bool:
        return self._index < len(self._entries) - 1

    def back(self) -> bool:
        return self.go(-1)

    def forward(self) -> bool:
        return self.go(1)

    def go(self, delta: int) -> bool:
        """
        Move the cursor by ``delta`` entries.

        Returns:
            False if the target lies outside the history (nothing happens),
            True otherwise.
        """
        target = self._index + delta
        if delta == 0 or not 0 <= target < len(self._entries):
            return False
        self._index = target
        logger.debug(f"History moved to index {self._index}")
        self._notify_listeners()
        return True

    def add_listener(self, callback: PopStateListener) -> None:
        self._listeners.append(callback)

    def remove_listener(self, callback: PopStateListener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify_listeners(self) -> None:
        state = self.state
        for callback in list(self._listeners):
            callback(state)


class HistoryStore(Generic[T]):
    """
    A store which uses ``history.state[key]`` as storage.

    ``set``/``update`` change the current history entry in place,
    ``push_set``/``push_update`` create a new entry.
    """

    def __init__(self, key: str, init_value: T, history: NavigationHistory) -> None:
        self.key = key
        self._history = history
        self._subscribers: list[Notifier[T]] = []

        if self._history.state.get(key) is None:
            self._history.replace_state(self._patch_state(init_value))

    @property
    def history(self) -> NavigationHistory:
        return self._history

    @property
    def value(self) -> Optional[T]:
        return self._history.state.get(self.key)

    def subscribe(self, notifier: Notifier[T]) -> Unsubscriber:
        """
        Register ``notifier``; it is called right away with the current value
        and again on every change.

        Returns:
            A function removing the subscription.
        """
        if not self._subscribers:
            self._history.add_listener(self._on_pop_state)
        self._subscribers.append(notifier)

        value = self.value
        if value is not None:
            notifier(value)

        def unsubscribe() -> None:
            if notifier in self._subscribers:
                self._subscribers.remove(notifier)
                if not self._subscribers:
                    self._history.remove_listener(self._on_pop_state)

        return unsubscribe

    def set(self, value: T) -> None:
        self._set(self._history.replace_state, value)

    def push_set(self, value: T) -> None:
        self._set(self._history.push_state, value)

    def update(self, fn: Updater[T]) -> None:
        self._update(self._history.replace_state, fn)

    def push_update(self, fn: Updater[T]) -> None:
        self._update(self._history.push_state, fn)

    def _patch_state(self, value: T) -> State:
        return {**self._history.state, self.key: value}

    def _set(self, write_state: Callable[[State], None], value: T) -> None:
        if value != self.value:
            write_state(self._patch_state(value))
            self._notify_subscribers(value)

    def _update(self, write_state: Callable[[State], None], fn: Updater[T]) -> None:
        value = self.value
        if value is None:
            raise MissingStateError(self.key)
        self._set(write_state, fn(value))

    def _notify_subscribers(self, value: T) -> None:
        for notify in list(self._subscribers):
            notify(value)

    def _on_pop_state(self, state: State) -> None:
        value = state.get(self.key)
        if value is not None:
            self._notify_subscribers(value)


ViewComponents = tuple[float, float, float, float, float, float]
IDENTITY_COMPONENTS: ViewComponents = AffineTransform.identity().components()


class DiagramState:
    """
    The stores backing the diagram.

    The view transform is stored as its six SVG components so history
    entries stay plain, comparable values.
    """

    def __init__(self, history: Optional[NavigationHistory] = None, control: float = DEFAULT_CONTROL) -> None:
        self.history = history if history is not None else NavigationHistory()
        self.control: HistoryStore[float] = HistoryStore(CONTROL_KEY, control, self.history)
        self.view: HistoryStore[ViewComponents] = HistoryStore(VIEW_KEY, IDENTITY_COMPONENTS, self.history)

    @property
    def view_transform(self) -> AffineTransform:
        components = self.view.value or IDENTITY_COMPONENTS
        return AffineTransform.from_components(*components)
