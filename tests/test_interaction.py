"""
Interaction Controller Tests
============================
State transitions, click semantics and hit testing of the pointer state machine.
"""
import numpy as np
import pytest

from forcegraph.interaction.controller import DraggingNode, Idle, InteractionController, PanningCanvas


@pytest.fixture
def model(make_model):
    return make_model({"a": (100.0, 100.0), "b": (300.0, 100.0), "c": (200.0, 250.0)})


@pytest.fixture
def controller(model, viewport):
    return InteractionController(model, viewport, node_radius=25.0)


class Recorder:
    def __init__(self, signal):
        self.calls = []
        signal.connect(self.record)

    def record(self, *args):
        self.calls.append(args)


class TestHitTest:

    def test_center_hits(self, controller):
        assert controller.hit_test(100.0, 100.0) == "a"

    def test_just_outside_misses(self, controller):
        assert controller.hit_test(100.0 + 26.0, 100.0) is None

    def test_hit_test_in_world_space(self, controller, viewport):
        viewport.zoom(2.0)
        viewport.pan(-50.0, 30.0)
        sx, sy = viewport.world_to_screen(300.0, 100.0)
        assert controller.hit_test(sx, sy) == "b"
        # 40 px on screen is 20 world units at scale 2
        assert controller.hit_test(sx + 40.0, sy) == "b"
        assert controller.hit_test(sx + 60.0, sy) is None

    def test_empty_model(self, make_model, viewport):
        controller = InteractionController(make_model({}), viewport, node_radius=25.0)
        assert controller.hit_test(0.0, 0.0) is None


class TestDragging:

    def test_press_on_node_starts_drag_and_pins(self, controller, model):
        controller.pointer_down(100.0, 100.0)
        assert controller.state == DraggingNode("a", (100.0, 100.0))
        assert model.is_pinned("a")

    def test_drag_moves_only_that_node(self, controller, model):
        model.velocities[:] = np.array([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]])
        controller.pointer_down(100.0, 100.0)
        others_before = (model.positions[1:].copy(), model.velocities[1:].copy())

        controller.pointer_move(150.0, 170.0)

        assert model.get_node("a").position == (150.0, 170.0)
        assert (model.get_node("a").vx, model.get_node("a").vy) == (0.0, 0.0)
        assert np.array_equal(model.positions[1:], others_before[0])
        assert np.array_equal(model.velocities[1:], others_before[1])

    def test_drag_follows_pointer_in_world_space(self, controller, model, viewport):
        viewport.zoom(2.0)
        sx, sy = viewport.world_to_screen(100.0, 100.0)
        controller.pointer_down(sx, sy)
        controller.pointer_move(500.0, 500.0)
        assert model.get_node("a").position == pytest.approx(viewport.screen_to_world(500.0, 500.0))

    def test_release_returns_to_idle_and_unpins(self, controller, model):
        controller.pointer_down(100.0, 100.0)
        controller.pointer_move(180.0, 100.0)
        controller.pointer_up(180.0, 100.0)
        assert controller.state == Idle()
        assert not model.is_pinned("a")

    def test_drag_requests_redraw(self, controller):
        redraws = Recorder(controller.redraw_requested)
        controller.pointer_down(100.0, 100.0)
        controller.pointer_move(120.0, 100.0)
        assert len(redraws.calls) == 1


class TestPanning:

    def test_press_on_empty_canvas_pans(self, controller, viewport):
        viewport.pan(10.0, 20.0)
        controller.pointer_down(600.0, 500.0)
        assert controller.state == PanningCanvas((10.0, 20.0), (600.0, 500.0))

        controller.pointer_move(650.0, 480.0)
        assert viewport.offset == (60.0, 0.0)
        controller.pointer_move(590.0, 510.0)
        assert viewport.offset == (0.0, 30.0)

        controller.pointer_up(590.0, 510.0)
        assert controller.state == Idle()

    def test_panning_leaves_nodes_alone(self, controller, model):
        before = model.positions.copy()
        controller.pointer_down(600.0, 500.0)
        controller.pointer_move(700.0, 400.0)
        assert np.array_equal(model.positions, before)


class TestHover:

    def test_hover_redraws_only_on_change(self, controller):
        redraws = Recorder(controller.redraw_requested)

        controller.pointer_move(100.0, 100.0)
        controller.pointer_move(105.0, 102.0)
        assert controller.hovered_node_id == "a"
        assert len(redraws.calls) == 1

        controller.pointer_move(600.0, 500.0)
        assert controller.hovered_node_id is None
        assert len(redraws.calls) == 2

        controller.pointer_move(610.0, 500.0)
        assert len(redraws.calls) == 2

    def test_no_hover_update_while_dragging(self, controller):
        controller.pointer_down(100.0, 100.0)
        controller.pointer_move(300.0, 100.0)
        assert controller.hovered_node_id is None


class TestClicks:

    def test_single_click_selects(self, controller):
        selected = Recorder(controller.node_selected)
        double = Recorder(controller.node_double_clicked)

        controller.pointer_down(300.0, 100.0)
        controller.pointer_up(301.0, 101.0)

        assert controller.selected_node_id == "b"
        assert selected.calls == [("b",)]
        assert double.calls == []

    def test_double_click_only_fires_double(self, controller):
        controller.pointer_down(300.0, 100.0)
        controller.pointer_up(300.0, 100.0)
        selected = Recorder(controller.node_selected)
        double = Recorder(controller.node_double_clicked)

        controller.pointer_down(300.0, 100.0, click_count=2)
        controller.pointer_up(300.0, 100.0)

        assert double.calls == [("b",)]
        assert selected.calls == []

    def test_drag_is_not_a_click(self, controller):
        selected = Recorder(controller.node_selected)
        controller.pointer_down(300.0, 100.0)
        controller.pointer_move(340.0, 100.0)
        controller.pointer_up(340.0, 100.0)
        assert selected.calls == []
        assert controller.selected_node_id is None

    def test_click_on_empty_canvas_clears_selection(self, controller):
        changes = Recorder(controller.selection_changed)
        controller.pointer_down(100.0, 100.0)
        controller.pointer_up(100.0, 100.0)

        controller.pointer_down(600.0, 500.0)
        controller.pointer_up(600.0, 500.0)

        assert controller.selected_node_id is None
        assert changes.calls == [("a",), (None,)]

    def test_every_observer_is_notified(self, controller):
        first = Recorder(controller.node_selected)
        second = Recorder(controller.node_selected)

        controller.pointer_down(100.0, 100.0)
        controller.pointer_up(100.0, 100.0)

        assert first.calls == [("a",)]
        assert second.calls == [("a",)]


class TestWheel:

    def test_wheel_zooms_around_pointer(self, controller, viewport):
        before = viewport.screen_to_world(250.0, 120.0)
        controller.wheel(250.0, 120.0, 120)
        assert viewport.scale == pytest.approx(1.1)
        assert viewport.screen_to_world(250.0, 120.0) == pytest.approx(before)

        controller.wheel(250.0, 120.0, -120)
        assert viewport.scale == pytest.approx(0.99)

    def test_wheel_keeps_state(self, controller):
        controller.pointer_down(100.0, 100.0)
        controller.wheel(100.0, 100.0, 120)
        assert isinstance(controller.state, DraggingNode)


class TestReset:

    def test_reset_drops_gesture_and_selection(self, controller, model):
        controller.pointer_down(100.0, 100.0)
        controller.pointer_up(100.0, 100.0)
        controller.pointer_move(300.0, 100.0)
        controller.pointer_down(300.0, 100.0)

        controller.reset()

        assert controller.state == Idle()
        assert controller.selected_node_id is None
        assert controller.hovered_node_id is None
        assert not model.is_pinned("b")

    def test_reset_reports_hover_end(self, controller):
        hovers = Recorder(controller.hover_changed)
        controller.pointer_move(300.0, 100.0)

        controller.reset()
        controller.reset()

        assert hovers.calls == [("b",), (None,)]
