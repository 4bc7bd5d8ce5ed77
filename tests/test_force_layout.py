"""
Force Layout Tests
==================
Physics of one tick: repulsion, attraction, integration, pinning.
"""
import math

import numpy as np
import pytest

from forcegraph.config import LayoutParameters
from forcegraph.layout.force import ForceLayoutEngine
from forcegraph.model.graph import GraphEdge, GraphModel, NodeRecord
from forcegraph.render.recording import RecordingSurface
from forcegraph.render.renderer import Renderer
from forcegraph.view.viewport import ViewportTransform


def distance(model: GraphModel, a: str, b: str) -> float:
    na, nb = model.get_node(a), model.get_node(b)
    return math.hypot(na.x - nb.x, na.y - nb.y)


class TestRepulsion:

    def test_closer_node_pushes_harder(self, make_model):
        model = make_model({"A": (0.0, 0.0), "B": (60.0, 0.0), "C": (0.0, 200.0)})
        engine = ForceLayoutEngine(model)

        from_b = engine.repulsion_between("A", "B")
        from_c = engine.repulsion_between("A", "C")

        assert math.hypot(*from_b) > math.hypot(*from_c)
        # pushed away from the source
        assert from_b[0] < 0.0
        assert from_c[1] < 0.0

    def test_inverse_square_magnitude(self, make_model):
        model = make_model({"A": (0.0, 0.0), "B": (100.0, 0.0)})
        engine = ForceLayoutEngine(model)
        fx, fy = engine.repulsion_between("A", "B")
        assert fx == pytest.approx(-5000.0 / 100.0 ** 2)
        assert fy == pytest.approx(0.0)

    def test_distance_clamped_to_minimum(self, make_model):
        model = make_model({"A": (0.0, 0.0), "B": (1.0, 0.0)})
        engine = ForceLayoutEngine(model)
        fx, _ = engine.repulsion_between("A", "B")
        assert fx == pytest.approx(-5000.0 / 50.0 ** 2)

    def test_equal_and_opposite(self, make_model):
        model = make_model({"A": (0.0, 0.0), "B": (70.0, 30.0)})
        forces = ForceLayoutEngine(model).compute_forces()
        np.testing.assert_allclose(forces[0], -forces[1])

    def test_coincident_nodes_are_pushed_apart(self, make_model):
        model = make_model({"A": (5.0, 5.0), "B": (5.0, 5.0), "C": (5.0, 5.0)})
        forces = ForceLayoutEngine(model).compute_forces()

        assert np.all(np.isfinite(forces))
        assert np.all(np.hypot(forces[:, 0], forces[:, 1]) > 0.0)
        np.testing.assert_allclose(forces.sum(axis=0), 0.0, atol=1e-12)

    def test_unknown_ids(self, make_model):
        engine = ForceLayoutEngine(make_model({"A": (0.0, 0.0)}))
        assert engine.repulsion_between("A", "nope") is None
        assert engine.force_on("nope") is None


class TestAttraction:

    def test_spring_proportional_to_distance(self, make_model):
        params = LayoutParameters(repulsion_strength=0.0)
        model = make_model({"A": (0.0, 0.0), "B": (200.0, 0.0)}, [("A", "B")])
        engine = ForceLayoutEngine(model, params)

        assert engine.force_on("A") == pytest.approx((2.0, 0.0))
        assert engine.force_on("B") == pytest.approx((-2.0, 0.0))

    def test_self_edge_has_no_effect(self, make_model):
        params = LayoutParameters(repulsion_strength=0.0)
        engine = ForceLayoutEngine(make_model({"A": (3.0, 4.0)}, [("A", "A")]), params)
        assert engine.force_on("A") == (0.0, 0.0)

    def test_parallel_edges_add_up(self, make_model):
        params = LayoutParameters(repulsion_strength=0.0)
        model = make_model({"A": (0.0, 0.0), "B": (100.0, 0.0)}, [("A", "B"), ("B", "A")])
        engine = ForceLayoutEngine(model, params)
        assert engine.force_on("A") == pytest.approx((2.0, 0.0))


class TestIntegration:

    def test_damped_velocity_update(self, make_model):
        model = make_model({"A": (0.0, 0.0), "B": (100.0, 0.0)})
        engine = ForceLayoutEngine(model)
        engine.step()

        # repulsion 0.5 each, damped by 0.9
        assert model.get_node("A").vx == pytest.approx(-0.45)
        assert model.get_node("A").x == pytest.approx(-0.45)
        assert model.get_node("B").x == pytest.approx(100.45)

    def test_step_returns_total_movement(self, make_model):
        engine = ForceLayoutEngine(make_model({"A": (0.0, 0.0), "B": (100.0, 0.0)}))
        assert engine.step() == pytest.approx(0.9)

    def test_empty_model(self):
        assert ForceLayoutEngine(GraphModel()).step() == 0.0

    def test_step_updates_the_arena_in_place(self, make_model):
        model = make_model({"A": (0.0, 0.0), "B": (100.0, 0.0), "C": (40.0, 90.0)}, [("A", "B")])
        positions, velocities = model.positions, model.velocities
        engine = ForceLayoutEngine(model)

        for _ in range(3):
            engine.step()

        assert model.positions is positions
        assert model.velocities is velocities
        assert model.get_node("A").x == positions[0, 0]

    def test_pinned_node_stays_but_still_pushes(self, make_model):
        model = make_model({"A": (0.0, 0.0), "B": (100.0, 0.0)})
        model.pin("A")
        model.velocities[0] = (3.0, 3.0)
        engine = ForceLayoutEngine(model)

        engine.step()

        assert model.get_node("A").position == (0.0, 0.0)
        assert (model.get_node("A").vx, model.get_node("A").vy) == (0.0, 0.0)
        assert model.get_node("B").x > 100.0

    def test_max_speed_caps_velocity(self, make_model):
        params = LayoutParameters(max_speed=0.1)
        model = make_model({"A": (0.0, 0.0), "B": (10.0, 0.0)})
        ForceLayoutEngine(model, params).step()
        speeds = np.hypot(model.velocities[:, 0], model.velocities[:, 1])
        assert np.all(speeds <= 0.1 + 1e-12)

    def test_center_force(self, make_model):
        params = LayoutParameters(center_strength=0.1)
        model = make_model({"A": (100.0, 0.0)})
        ForceLayoutEngine(model, params, center=(0.0, 0.0)).step()
        assert model.get_node("A").x < 100.0

    def test_run_stops_when_settled(self, make_model):
        model = make_model({"A": (0.0, 0.0), "B": (100.0, 0.0), "C": (50.0, 80.0)}, [("A", "B"), ("B", "C")])
        iterations = ForceLayoutEngine(model).run(max_iterations=1000, threshold=0.01)
        assert iterations < 1000


class TestScenarios:

    def test_two_coincident_connected_nodes_settle(self, make_model):
        model = make_model({"A": (0.0, 0.0), "B": (0.0, 0.0)}, [("A", "B")])
        engine = ForceLayoutEngine(model)

        distances = []
        for _ in range(200):
            engine.step()
            distances.append(distance(model, "A", "B"))

        assert distances[-1] > 0.0
        assert abs(distances[-1] - distances[-2]) < 1e-3
        # repulsion K/d^2 balances the spring k*d at d = (K/k)^(1/3)
        assert distances[-1] == pytest.approx((5000.0 / 0.01) ** (1.0 / 3.0), abs=0.1)

    def test_dangling_edge_is_ignored(self):
        nodes = [NodeRecord("A", "A"), NodeRecord("B", "B")]

        with_dangling = GraphModel(seed=3)
        with_dangling.set_data(nodes, [GraphEdge("A", "missing")])
        reference = GraphModel(seed=3)
        reference.set_data(nodes, [])
        np.testing.assert_array_equal(with_dangling.positions, reference.positions)

        ForceLayoutEngine(with_dangling).step()
        ForceLayoutEngine(reference).step()
        Renderer().draw(RecordingSurface(), with_dangling, ViewportTransform())

        np.testing.assert_array_equal(with_dangling.positions, reference.positions)


class TestParameters:

    @pytest.mark.parametrize("kwargs", [
        {"damping": 1.0},
        {"damping": 0.0},
        {"min_distance": 0.0},
        {"node_radius": -1.0},
        {"repulsion_strength": -5.0},
        {"max_speed": 0.0},
    ])
    def test_invalid_parameters(self, kwargs):
        with pytest.raises(ValueError):
            LayoutParameters(**kwargs)
