"""
Qt Host Tests
=============
The widget on the offscreen platform: timer cadence, painting and mouse input.
"""
import logging

import pytest
from PySide6.QtCore import QPoint, Qt
from PySide6.QtTest import QTest

from forcegraph.application import create_app
from forcegraph.logging_config import resolve_level, setup_logging
from forcegraph.main import MainWindow, demo_graph
from forcegraph.model.graph import NodeRecord
from forcegraph.view.graph_view import GraphView


@pytest.fixture
def view(qapp):
    view = GraphView()
    view.resize(640, 480)
    view.show()
    qapp.processEvents()
    yield view
    view.stop_layout()
    view.close()


class TestGraphView:

    def test_resize_reaches_the_viewport(self, view):
        assert (view.scene.viewport.width, view.scene.viewport.height) == (view.width(), view.height())

    def test_timer_runs_only_while_layout_runs(self, view):
        assert not view.is_layout_running()
        view.start_layout()
        assert view.is_layout_running()
        view.toggle_layout()
        assert not view.is_layout_running()

    def test_paints_a_graph(self, view):
        nodes, edges = demo_graph()
        view.set_graph_data(nodes, edges)
        view.highlight_node(nodes[0].id)
        pixmap = view.grab()
        assert not pixmap.isNull()
        assert pixmap.width() == view.width()

    def test_click_selects_node(self, view):
        view.scene.add_node(NodeRecord("a", "a"), 120.0, 90.0)
        received = []
        view.node_selected.connect(received.append)

        QTest.mouseClick(view, Qt.MouseButton.LeftButton, Qt.KeyboardModifier.NoModifier, QPoint(120, 90))

        assert received == ["a"]
        assert view.scene.controller.selected_node_id == "a"

    def test_drag_moves_node(self, view):
        node = view.scene.add_node(NodeRecord("a", "a"), 120.0, 90.0)

        view.scene.controller.pointer_down(120.0, 90.0)
        view.scene.controller.pointer_move(200.0, 150.0)
        view.scene.controller.pointer_up(200.0, 150.0)

        assert node.position == (200.0, 150.0)

    def test_view_commands(self, view):
        view.zoom_in()
        assert view.scene.viewport.scale == pytest.approx(1.2)
        view.reset_view()
        assert view.scene.viewport.scale == 1.0
        view.center_view()


class TestApplication:

    def test_create_app_reuses_instance(self, qapp):
        assert create_app() is qapp

    def test_main_window_hosts_the_view(self, qapp):
        window = MainWindow()
        nodes, edges = demo_graph()
        window.view.set_graph_data(nodes, edges)
        assert window.view.scene.node_count() == len(nodes)
        assert window.view.scene.edge_count() == len(edges)
        assert len(window.actions()) == 6
        window.close()

    def test_demo_graph_is_consistent(self):
        nodes, edges = demo_graph()
        ids = {node.id for node in nodes}
        assert len(ids) == len(nodes)
        assert all(edge.source_id in ids and edge.target_id in ids for edge in edges)


class TestLogging:

    def test_resolve_level(self, monkeypatch):
        assert resolve_level("debug") == logging.DEBUG
        assert resolve_level(logging.WARNING) == logging.WARNING
        monkeypatch.setenv("FORCEGRAPH_LOG_LEVEL", "ERROR")
        assert resolve_level(None) == logging.ERROR
        monkeypatch.setenv("FORCEGRAPH_LOG_LEVEL", "10")
        assert resolve_level(None) == logging.DEBUG
        assert resolve_level(" 30 ") == logging.WARNING
        with pytest.raises(ValueError):
            resolve_level("chatty")

    def test_setup_logging_is_idempotent(self, tmp_path):
        log_file = tmp_path / "viewer.log"
        setup_logging("info")
        setup_logging("info", log_file=str(log_file))

        logger = logging.getLogger("forcegraph")
        assert len(logger.handlers) == 2
        logging.getLogger("forcegraph.scene").info("hello")
        for handler in logger.handlers:
            handler.flush()
        assert "hello" in log_file.read_text(encoding="utf-8")

        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
