"""
Tests for NavigationHistory, HistoryStore and DiagramState.
"""
import pytest

from earthcurve.config import CONTROL_KEY, DEFAULT_CONTROL, VIEW_KEY
from earthcurve.exceptions import MissingStateError
from earthcurve.model.geometry_primitives import AffineTransform
from earthcurve.model.state import IDENTITY_COMPONENTS, DiagramState, HistoryStore, NavigationHistory


# ══════════════════════════════════════════════════════════════════════════
# NavigationHistory
# ══════════════════════════════════════════════════════════════════════════

class TestNavigationHistory:

    def test_starts_with_one_entry(self, history):
        assert len(history) == 1
        assert history.index == 0
        assert history.state == {}
        assert not history.can_go_back()
        assert not history.can_go_forward()

    def test_initial_state_is_copied(self):
        initial = {"x": 1}
        history = NavigationHistory(initial)
        initial["x"] = 2
        assert history.state == {"x": 1}

    def test_push_and_back(self, history):
        history.push_state({"x": 1})
        history.push_state({"x": 2})
        assert history.index == 2
        assert history.back()
        assert history.state == {"x": 1}
        assert history.can_go_forward()

    def test_push_discards_forward_entries(self, history):
        history.push_state({"x": 1})
        history.push_state({"x": 2})
        history.back()
        history.push_state({"x": 3})
        assert len(history) == 3
        assert not history.can_go_forward()
        assert history.state == {"x": 3}

    def test_replace_keeps_length(self, history):
        history.replace_state({"x": 1})
        assert len(history) == 1
        assert history.state == {"x": 1}

    def test_go_outside_range_does_nothing(self, history):
        calls = []
        history.add_listener(calls.append)
        assert not history.back()
        assert not history.forward()
        assert not history.go(0)
        assert calls == []

    def test_listeners_receive_new_state(self, history):
        calls = []
        history.add_listener(calls.append)
        history.push_state({"x": 1})
        # Pushing does not notify
        assert calls == []
        history.back()
        history.forward()
        assert calls == [{}, {"x": 1}]

    def test_removed_listener_is_not_called(self, history):
        calls = []
        history.add_listener(calls.append)
        history.remove_listener(calls.append)
        history.remove_listener(calls.append)
        history.push_state({"x": 1})
        history.back()
        assert calls == []

    def test_max_entries_drops_oldest(self):
        history = NavigationHistory({"x": 0}, max_entries=3)
        for i in range(1, 6):
            history.push_state({"x": i})
        assert len(history) == 3
        assert history.index == 2
        history.go(-2)
        assert history.state == {"x": 3}
        assert not history.can_go_back()

    def test_unbounded_history(self):
        history = NavigationHistory(max_entries=None)
        for i in range(500):
            history.push_state({"x": i})
        assert len(history) == 501


# ══════════════════════════════════════════════════════════════════════════
# HistoryStore
# ══════════════════════════════════════════════════════════════════════════

class TestHistoryStore:

    def test_init_value_written_when_missing(self, history):
        store = HistoryStore("k", 5, history)
        assert store.value == 5
        assert history.state == {"k": 5}
        assert len(history) == 1

    def test_existing_value_is_kept(self):
        history = NavigationHistory({"k": 7})
        store = HistoryStore("k", 5, history)
        assert store.value == 7

    def test_subscribe_calls_back_immediately(self, history):
        store = HistoryStore("k", 5, history)
        calls = []
        store.subscribe(calls.append)
        assert calls == [5]

    def test_set_replaces_current_entry(self, history):
        store = HistoryStore("k", 5, history)
        calls = []
        store.subscribe(calls.append)
        store.set(6)
        assert store.value == 6
        assert len(history) == 1
        assert calls == [5, 6]

    def test_push_set_adds_an_entry(self, history):
        store = HistoryStore("k", 5, history)
        store.push_set(6)
        assert len(history) == 2
        history.back()
        assert store.value == 5

    def test_unchanged_value_is_ignored(self, history):
        store = HistoryStore("k", 5, history)
        calls = []
        store.subscribe(calls.append)
        store.set(5)
        store.push_set(5)
        assert len(history) == 1
        assert calls == [5]

    def test_other_keys_survive_writes(self, history):
        a = HistoryStore("a", 1, history)
        b = HistoryStore("b", 2, history)
        a.push_set(10)
        b.set(20)
        assert history.state == {"a": 10, "b": 20}
        history.back()
        assert history.state == {"a": 1, "b": 2}

    def test_update_and_push_update(self, history):
        store = HistoryStore("k", 5, history)
        store.update(lambda v: v + 1)
        store.push_update(lambda v: v * 10)
        assert store.value == 60
        assert len(history) == 2

    def test_update_without_value_raises(self, history):
        store = HistoryStore("k", 5, history)
        history.replace_state({})
        with pytest.raises(MissingStateError) as excinfo:
            store.update(lambda v: v + 1)
        assert excinfo.value.key == "k"
        assert str(excinfo.value) == "No previous state to update for key 'k'"

    def test_back_and_forward_notify_subscribers(self, history):
        store = HistoryStore("k", 0, history)
        store.push_set(1)
        store.push_set(2)
        calls = []
        store.subscribe(calls.append)
        history.back()
        history.back()
        history.forward()
        assert calls == [2, 1, 0, 1]

    def test_pop_without_key_is_silent(self, history):
        history.push_state({})
        store = HistoryStore("k", 3, history)
        calls = []
        store.subscribe(calls.append)
        history.back()
        assert calls == [3]

    def test_unsubscribe_detaches_from_history(self, history):
        store = HistoryStore("k", 0, history)
        store.push_set(1)
        calls = []
        unsubscribe = store.subscribe(calls.append)
        unsubscribe()
        unsubscribe()
        history.back()
        store.set(9)
        assert calls == [1]
        assert history._listeners == []

    def test_listener_stays_while_any_subscriber_remains(self, history):
        store = HistoryStore("k", 0, history)
        store.push_set(1)
        first, second = [], []
        unsubscribe_first = store.subscribe(first.append)
        store.subscribe(second.append)
        unsubscribe_first()
        history.back()
        assert first == [1]
        assert second == [1, 0]


# ══════════════════════════════════════════════════════════════════════════
# DiagramState
# ══════════════════════════════════════════════════════════════════════════

class TestDiagramState:

    def test_defaults(self, diagram_state):
        assert diagram_state.control.value == DEFAULT_CONTROL
        assert diagram_state.view.value == IDENTITY_COMPONENTS
        assert diagram_state.view_transform.is_identity()
        assert set(diagram_state.history.state) == {CONTROL_KEY, VIEW_KEY}

    def test_stores_share_one_entry(self, diagram_state):
        diagram_state.control.push_set(0.25)
        transform = AffineTransform.translation(1.0, 2.0)
        diagram_state.view.set(transform.components())
        assert len(diagram_state.history) == 2
        assert diagram_state.view_transform == transform
        diagram_state.history.back()
        assert diagram_state.control.value == DEFAULT_CONTROL
        assert diagram_state.view_transform.is_identity()

    def test_creates_history_when_missing(self):
        state = DiagramState(control=-0.5)
        assert state.control.value == -0.5
        assert len(state.history) == 1
