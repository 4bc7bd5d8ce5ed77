"""
Interactive force-directed graph viewer.

The core (model, layout, viewport, interaction, renderer) is driven by a host
through ``GraphScene.tick()`` and pointer events; ``GraphView`` is the Qt host.
"""
from forcegraph.config import LayoutParameters, RenderStyle
from forcegraph.model.graph import EdgeRecord, EdgeType, GraphEdge, GraphModel, GraphNode, NodeCategory, NodeRecord, StaleNodeError
from forcegraph.layout.force import ForceLayoutEngine
from forcegraph.view.viewport import ViewportTransform
from forcegraph.interaction.controller import InteractionController
from forcegraph.render.renderer import Renderer
from forcegraph.render.surface import FontSpec, RenderSurface
from forcegraph.render.recording import RecordingSurface
from forcegraph.scene import GraphScene

__all__ = [
    "EdgeRecord",
    "EdgeType",
    "FontSpec",
    "ForceLayoutEngine",
    "GraphEdge",
    "GraphModel",
    "GraphNode",
    "GraphScene",
    "InteractionController",
    "LayoutParameters",
    "NodeCategory",
    "NodeRecord",
    "RecordingSurface",
    "RenderStyle",
    "RenderSurface",
    "Renderer",
    "StaleNodeError",
    "ViewportTransform",
]
