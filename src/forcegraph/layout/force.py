"""
Force-Directed Layout
=====================
Advances node positions by one discrete physics step.

Force model (per tick):
    1. Repulsion between every unordered node pair, inverse-square in the
       pair distance, with the distance clamped from below to
       ``min_distance``.
    2. Attraction along every resolved edge, a zero-rest-length spring:
       ``|F| = distance * attraction_strength``.
    3. Optional pull toward a center point (``center_strength``).
    4. Damped explicit integration of all unpinned nodes:
       ``v = (v + F) * damping``; ``p += v``.

The repulsion pass is O(n^2) in time and memory. That is fine for the tens to
a few hundred nodes of a dependency graph; bigger graphs would need a
Barnes-Hut style approximation.
"""
from __future__ import annotations

import logging
import math
from typing import Optional, TYPE_CHECKING

import numpy as np

from forcegraph.config import LARGE_GRAPH_WARNING, LayoutParameters

if TYPE_CHECKING:
    import numpy.typing as npt
    from forcegraph.model.graph import GraphModel

logger = logging.getLogger(__name__)

# Direction used to split exactly coincident nodes, spread per pair
GOLDEN_ANGLE: float = math.pi * (3.0 - math.sqrt(5.0))


class ForceLayoutEngine:
    """
    Physics simulation over a GraphModel.

    Args:
        model: The graph whose arena is mutated in place.
        parameters: Physics constants, defaults to LayoutParameters().
        center: World point the optional center force pulls toward.
    """

    def __init__(
        self,
        model: GraphModel,
        parameters: Optional[LayoutParameters] = None,
        center: tuple[float, float] = (0.0, 0.0),
    ) -> None:
        self.model = model
        self.parameters = parameters if parameters is not None else LayoutParameters()
        self.center = center
        self._warned_size = False

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def step(self) -> float:
        """
        Perform one simulation tick.

        Pinned nodes keep their position and get a zero velocity; they still
        push and pull the other nodes.

        Returns:
            Total movement of this tick (sum of |dx| + |dy| over all nodes).
        """
        model = self.model
        n = model.node_count()
        if n == 0:
            return 0.0
        if n > LARGE_GRAPH_WARNING and not self._warned_size:
            logger.warning(f"Laying out {n} nodes; the O(n^2) repulsion pass may be slow.")
            self._warned_size = True

        forces = self.compute_forces()
        positions = model.positions
        velocities = model.velocities
        free = ~model.pinned_mask

        velocities[free] = (velocities[free] + forces[free]) * self.parameters.damping

        max_speed = self.parameters.max_speed
        if max_speed is not None:
            speed = np.hypot(velocities[:, 0], velocities[:, 1])
            too_fast = free & (speed > max_speed)
            if too_fast.any():
                velocities[too_fast] *= (max_speed / speed[too_fast])[:, None]

        velocities[~free] = 0.0
        positions[free] += velocities[free]
        return float(np.abs(velocities[free]).sum())

    def run(self, max_iterations: int = 300, threshold: float = 0.5) -> int:
        """
        Step until the total movement drops below ``threshold``.

        Returns:
            Number of steps performed.
        """
        for iteration in range(1, max_iterations + 1):
            if self.step() < threshold:
                logger.debug(f"Layout converged after {iteration} steps.")
                return iteration
        logger.debug(f"Layout stopped at the iteration cap ({max_iterations}).")
        return max_iterations

    def compute_forces(self) -> npt.NDArray[np.float64]:
        """Accumulated force on every node for the current positions, shape (N, 2)."""
        positions = self.model.positions
        forces = np.zeros_like(positions)
        if len(positions) == 0:
            return forces

        if len(positions) > 1:
            forces += self._repulsion(positions)
        self._add_attraction(positions, forces)

        if self.parameters.center_strength > 0.0:
            forces += (np.asarray(self.center, dtype=np.float64) - positions) * self.parameters.center_strength

        return forces

    def force_on(self, node_id: str) -> Optional[tuple[float, float]]:
        """Pending force on one node, or None for an unknown id."""
        index = self.model.index_of(node_id)
        if index is None:
            return None
        fx, fy = self.compute_forces()[index]
        return float(fx), float(fy)

    def repulsion_between(self, node_id: str, other_id: str) -> Optional[tuple[float, float]]:
        """
        Repulsive force that ``node_id`` receives from ``other_id`` alone.

        Returns:
            The force vector, or None when either id is unknown.
        """
        i = self.model.index_of(node_id)
        j = self.model.index_of(other_id)
        if i is None or j is None:
            return None
        if i == j:
            return 0.0, 0.0
        fx, fy = self._repulsion(self.model.positions[[i, j]])[0]
        return float(fx), float(fy)

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _repulsion(self, positions: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
        """
        Pairwise inverse-square repulsion.

        Args:
            positions: (N, 2) node positions.

        Returns:
            (N, 2) sum of the repulsive forces on each node.
        """
        params = self.parameters
        n = len(positions)

        # delta[i, j] points from node j to node i
        delta = positions[:, None, :] - positions[None, :, :]
        dist = np.hypot(delta[..., 0], delta[..., 1])

        unit = np.zeros_like(delta)
        apart = dist > 0.0
        unit[apart] = delta[apart] / dist[apart][:, None]

        # Coincident pairs get an antisymmetric direction so they can separate
        coincident = ~apart
        coincident[np.diag_indices(n)] = False
        if coincident.any():
            i, j = np.nonzero(coincident)
            theta = GOLDEN_ANGLE * (i + j)
            sign = np.sign(j - i).astype(np.float64)
            unit[i, j, 0] = sign * np.cos(theta)
            unit[i, j, 1] = sign * np.sin(theta)

        clamped = np.maximum(dist, params.min_distance)
        magnitude = params.repulsion_strength / (clamped * clamped)
        magnitude[np.diag_indices(n)] = 0.0

        return np.einsum("ij,ijk->ik", magnitude, unit)

    def _add_attraction(self, positions: npt.NDArray[np.float64], forces: npt.NDArray[np.float64]) -> None:
        """Spring pull along every edge whose endpoints both exist."""
        pairs = self.model.resolved_edges()
        if pairs.size == 0:
            return
        sources = pairs[:, 0]
        targets = pairs[:, 1]
        # distance * strength along the unit vector is just strength * delta
        pull = self.parameters.attraction_strength * (positions[targets] - positions[sources])
        np.add.at(forces, sources, pull)
        np.add.at(forces, targets, -pull)
