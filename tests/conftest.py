import os

import pytest

# Qt widgets are created without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication  # noqa: E402

from forcegraph.model.graph import GraphEdge, GraphModel, NodeRecord  # noqa: E402
from forcegraph.view.viewport import ViewportTransform  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


def _make_model(positions: dict[str, tuple[float, float]], edges: list[tuple[str, str]] = ()) -> GraphModel:
    """Model with nodes at fixed positions, in dict order."""
    model = GraphModel(seed=0)
    for node_id, (x, y) in positions.items():
        model.add_node(NodeRecord(node_id, node_id), x, y)
    for source, target in edges:
        model.add_edge(GraphEdge(source, target))
    return model


@pytest.fixture
def make_model():
    return _make_model


@pytest.fixture
def viewport() -> ViewportTransform:
    return ViewportTransform(800, 600)
