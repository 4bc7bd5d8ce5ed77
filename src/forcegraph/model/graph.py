"""
Graph Data Model
================
Holds the nodes and edges of the visualized dependency graph.

Node state lives in a flat arena: positions and velocities are (N, 2) numpy
arrays indexed by a stable integer handle, with a side ``id -> index`` table.
A simulation tick mutates these arrays in place. ``GraphNode`` objects handed
out by the model are thin handles that read and write the arena.

Classes:
    NodeCategory: Node kind, determines color and default priority.
    EdgeType: Edge kind, determines color and semantics.
    NodeRecord: Immutable ingestion record of a node.
    GraphEdge: Immutable directed edge between two node ids.
    GraphNode: Live handle to one node in a GraphModel.
    StaleNodeError: Raised when a handle outlives its node.
    GraphModel: The container.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Iterable, Iterator, Optional, TYPE_CHECKING

import numpy as np

from forcegraph.config import DEFAULT_CANVAS_HEIGHT, DEFAULT_CANVAS_WIDTH

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

Bounds = tuple[float, float, float, float]  # (x_min, x_max, y_min, y_max)


class NodeCategory(StrEnum):
    """Kind of configuration file a node represents."""
    CORE = "core"
    IMPORTANT = "important"
    NORMAL = "normal"
    CLIENT = "client"

    @property
    def color(self) -> str:
        return _CATEGORY_COLORS[self]

    @property
    def display_name(self) -> str:
        return _CATEGORY_NAMES[self]

    @property
    def default_priority(self) -> int:
        return _CATEGORY_PRIORITIES[self]

    @classmethod
    def from_priority(cls, priority: int) -> NodeCategory:
        """Map a server load priority (1-3, 0 = not a server file) to a category."""
        for category, value in _CATEGORY_PRIORITIES.items():
            if value == priority and value != 0:
                return category
        return cls.CLIENT


_CATEGORY_COLORS = {
    NodeCategory.CORE: "#e74c3c",
    NodeCategory.IMPORTANT: "#f39c12",
    NodeCategory.NORMAL: "#3498db",
    NodeCategory.CLIENT: "#2ecc71",
}
_CATEGORY_NAMES = {
    NodeCategory.CORE: "Core",
    NodeCategory.IMPORTANT: "Important",
    NodeCategory.NORMAL: "Normal",
    NodeCategory.CLIENT: "Client",
}
_CATEGORY_PRIORITIES = {
    NodeCategory.CORE: 1,
    NodeCategory.IMPORTANT: 2,
    NodeCategory.NORMAL: 3,
    NodeCategory.CLIENT: 0,
}


class EdgeType(StrEnum):
    """Direction semantics of an edge."""
    DEPENDS = "depends"  # source depends on target
    REFERENCED = "referenced"  # source is referenced by target

    @property
    def color(self) -> str:
        return _EDGE_COLORS[self]


_EDGE_COLORS = {
    EdgeType.DEPENDS: "#95a5a6",
    EdgeType.REFERENCED: "#9b59b6",
}


@dataclass(frozen=True)
class NodeRecord:
    """
    A node as delivered by the dependency scanner.

    When no category is given it is derived from the priority.
    """
    id: str
    label: str
    category: Optional[NodeCategory] = None
    priority: int = 0

    def __post_init__(self) -> None:
        if self.category is None:
            object.__setattr__(self, "category", NodeCategory.from_priority(self.priority))
        elif not isinstance(self.category, NodeCategory):
            object.__setattr__(self, "category", NodeCategory(self.category))


@dataclass(frozen=True)
class GraphEdge:
    """A directed edge. Endpoints are not required to exist."""
    source_id: str
    target_id: str
    type: EdgeType = field(default=EdgeType.DEPENDS)

    def __post_init__(self) -> None:
        if not isinstance(self.type, EdgeType):
            object.__setattr__(self, "type", EdgeType(self.type))


# Records handed in by the scanner use the same shape as the stored edges
EdgeRecord = GraphEdge


class StaleNodeError(LookupError):
    """A GraphNode was used after clear() or set_data() dropped its node."""


class GraphNode:
    """
    Live view of one node; reads and writes go straight to the model arena.

    A handle is tied to the model generation it was created in. Once
    ``clear()`` or ``set_data()`` starts a new generation the slots are
    reused by other nodes, so every arena access raises StaleNodeError.
    """
    __slots__ = ("_model", "_index", "_generation", "_id")

    def __init__(self, model: GraphModel, index: int) -> None:
        self._model = model
        self._index = index
        self._generation = model._generation
        self._id = model._records[index].id

    @property
    def index(self) -> int:
        if self.stale:
            raise StaleNodeError(f"Node '{self._id}' is no longer part of the graph.")
        return self._index

    @property
    def stale(self) -> bool:
        return self._generation != self._model._generation

    @property
    def id(self) -> str:
        return self._id

    @property
    def label(self) -> str:
        return self._model._records[self.index].label

    @property
    def category(self) -> NodeCategory:
        return self._model._records[self.index].category

    @property
    def priority(self) -> int:
        return self._model._records[self.index].priority

    @property
    def x(self) -> float:
        return float(self._model._positions[self.index, 0])

    @x.setter
    def x(self, value: float) -> None:
        self._model._positions[self.index, 0] = value

    @property
    def y(self) -> float:
        return float(self._model._positions[self.index, 1])

    @y.setter
    def y(self, value: float) -> None:
        self._model._positions[self.index, 1] = value

    @property
    def vx(self) -> float:
        return float(self._model._velocities[self.index, 0])

    @vx.setter
    def vx(self, value: float) -> None:
        self._model._velocities[self.index, 0] = value

    @property
    def vy(self) -> float:
        return float(self._model._velocities[self.index, 1])

    @vy.setter
    def vy(self, value: float) -> None:
        self._model._velocities[self.index, 1] = value

    @property
    def pinned(self) -> bool:
        return bool(self._model._pinned[self.index])

    @property
    def position(self) -> tuple[float, float]:
        return self.x, self.y

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GraphNode):
            return NotImplemented
        return self._model is other._model and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        if self.stale:
            return f"GraphNode(id={self._id!r}, stale)"
        return f"GraphNode(id={self._id!r}, x={self.x:.2f}, y={self.y:.2f})"


class GraphModel:
    """
    Container of the current nodes and edges.

    Nodes keep their integer handle for as long as they stay in the model;
    ``clear()`` and ``set_data()`` start over from handle 0.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = np.random.default_rng(seed)
        self._records: list[NodeRecord] = []
        self._index: dict[str, int] = {}
        self._positions: npt.NDArray[np.float64] = np.zeros((0, 2), dtype=np.float64)
        self._velocities: npt.NDArray[np.float64] = np.zeros((0, 2), dtype=np.float64)
        self._pinned: npt.NDArray[np.bool_] = np.zeros(0, dtype=bool)
        self._edges: list[GraphEdge] = []
        self._resolved_cache: Optional[npt.NDArray[np.int_]] = None
        # bumped whenever slots are handed out again from 0
        self._generation: int = 0

    # ------------------------------------------------------------------------------
    # Arena access
    # ------------------------------------------------------------------------------

    @property
    def positions(self) -> npt.NDArray[np.float64]:
        """(N, 2) world positions, mutable in place."""
        return self._positions

    @property
    def velocities(self) -> npt.NDArray[np.float64]:
        """(N, 2) velocities, mutable in place."""
        return self._velocities

    @property
    def pinned_mask(self) -> npt.NDArray[np.bool_]:
        return self._pinned

    # ------------------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------------------

    def set_data(
        self,
        nodes: Iterable[NodeRecord],
        edges: Iterable[GraphEdge],
        bounds: Optional[Bounds] = None,
    ) -> None:
        """
        Replace all nodes and edges.

        Every node gets a random position inside the inner 80% of ``bounds``
        and a zero velocity.

        Args:
            nodes: Node records. A repeated id replaces the earlier record.
            edges: Edges, endpoints are not validated.
            bounds: World rectangle (x_min, x_max, y_min, y_max) of the
                current viewport. Defaults to the default canvas extent.
        """
        self.clear()
        records: dict[str, NodeRecord] = {}
        for record in nodes:
            records[record.id] = record

        self._records = list(records.values())
        self._index = {record.id: i for i, record in enumerate(self._records)}
        n = len(self._records)
        self._positions = np.zeros((n, 2), dtype=np.float64)
        self._velocities = np.zeros((n, 2), dtype=np.float64)
        self._pinned = np.zeros(n, dtype=bool)
        self._edges = list(edges)
        self._resolved_cache = None

        if bounds is None:
            bounds = (0.0, float(DEFAULT_CANVAS_WIDTH), 0.0, float(DEFAULT_CANVAS_HEIGHT))
        self.randomize_positions(bounds)

        logger.info(f"Graph data set: {n} nodes, {len(self._edges)} edges.")

    def add_node(self, node: NodeRecord, x: float = 0.0, y: float = 0.0) -> GraphNode:
        """
        Append a node without touching existing positions.

        Re-adding a known id only replaces its label and category.
        """
        index = self._index.get(node.id)
        if index is not None:
            self._records[index] = node
            return GraphNode(self, index)

        index = len(self._records)
        self._records.append(node)
        self._index[node.id] = index
        self._positions = np.vstack([self._positions, [[x, y]]])
        self._velocities = np.vstack([self._velocities, [[0.0, 0.0]]])
        self._pinned = np.append(self._pinned, False)
        self._resolved_cache = None
        return GraphNode(self, index)

    def add_edge(self, edge: GraphEdge) -> None:
        self._edges.append(edge)
        self._resolved_cache = None

    def clear(self) -> None:
        self._generation += 1
        self._records = []
        self._index = {}
        self._positions = np.zeros((0, 2), dtype=np.float64)
        self._velocities = np.zeros((0, 2), dtype=np.float64)
        self._pinned = np.zeros(0, dtype=bool)
        self._edges = []
        self._resolved_cache = None

    def randomize_positions(self, bounds: Bounds) -> None:
        """Scatter all nodes uniformly in the inner 80% of ``bounds`` and stop them."""
        x_min, x_max, y_min, y_max = bounds
        width = x_max - x_min
        height = y_max - y_min
        n = len(self._records)
        self._positions[:, 0] = x_min + width * (0.1 + 0.8 * self._rng.random(n))
        self._positions[:, 1] = y_min + height * (0.1 + 0.8 * self._rng.random(n))
        self._velocities[:] = 0.0

    def set_position(self, node_id: str, x: float, y: float) -> None:
        """Move a node and stop it. Unknown ids are ignored."""
        index = self._index.get(node_id)
        if index is None:
            return
        self._positions[index, 0] = x
        self._positions[index, 1] = y
        self._velocities[index] = 0.0

    def pin(self, node_id: str) -> None:
        index = self._index.get(node_id)
        if index is not None:
            self._pinned[index] = True
            self._velocities[index] = 0.0

    def unpin(self, node_id: str) -> None:
        index = self._index.get(node_id)
        if index is not None:
            self._pinned[index] = False

    # ------------------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------------------

    def node_count(self) -> int:
        return len(self._records)

    def edge_count(self) -> int:
        return len(self._edges)

    def index_of(self, node_id: str) -> Optional[int]:
        return self._index.get(node_id)

    def get_node(self, node_id: str) -> Optional[GraphNode]:
        index = self._index.get(node_id)
        if index is None:
            return None
        return GraphNode(self, index)

    def is_pinned(self, node_id: str) -> bool:
        index = self._index.get(node_id)
        return index is not None and bool(self._pinned[index])

    def nodes(self) -> Iterator[GraphNode]:
        """Nodes in insertion order."""
        for index in range(len(self._records)):
            yield GraphNode(self, index)

    def node_ids(self) -> list[str]:
        return [record.id for record in self._records]

    def edges(self) -> list[GraphEdge]:
        return list(self._edges)

    def resolved_edges(self) -> npt.NDArray[np.int_]:
        """
        Index pairs of all edges whose endpoints both exist.

        Returns:
            (E, 2) array of (source_index, target_index), in edge order.
        """
        if self._resolved_cache is None:
            pairs = []
            for edge in self._edges:
                source = self._index.get(edge.source_id)
                target = self._index.get(edge.target_id)
                if source is not None and target is not None:
                    pairs.append((source, target))
            self._resolved_cache = np.array(pairs, dtype=np.int_).reshape(-1, 2)
        return self._resolved_cache

    def node_at(self, x: float, y: float, radius: float) -> Optional[str]:
        """
        Hit test in world coordinates.

        Returns:
            Id of the first node (insertion order) whose center lies within
            ``radius`` of (x, y), or None.
        """
        if not self._records:
            return None
        d2 = np.sum((self._positions - np.array([x, y])) ** 2, axis=1)
        hits = np.flatnonzero(d2 <= radius * radius)
        if hits.size == 0:
            return None
        return self._records[int(hits[0])].id

    def bounding_box(self) -> Optional[Bounds]:
        """Axis-aligned (x_min, x_max, y_min, y_max) of all node centers."""
        if not self._records:
            return None
        x_min, y_min = self._positions.min(axis=0)
        x_max, y_max = self._positions.max(axis=0)
        return float(x_min), float(x_max), float(y_min), float(y_max)

    def centroid(self) -> Optional[tuple[float, float]]:
        """Center of the bounding box of all node centers."""
        box = self.bounding_box()
        if box is None:
            return None
        x_min, x_max, y_min, y_max = box
        return (x_min + x_max) / 2.0, (y_min + y_max) / 2.0
