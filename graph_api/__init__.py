"""
Graph Editor API — models and plugin contracts.
"""
from .types import ColorValidator, Point
from .models.node import Node
from .models.edge import Edge
from .models.graph import Graph
from .models.snapshot import Snapshot
from .plugins.base import RendererPlugin, GraphComparatorPlugin, RenderView

__all__ = [
    'ColorValidator',
    'Point',
    'Node',
    'Edge',
    'Graph',
    'Snapshot',
    'RendererPlugin',
    'GraphComparatorPlugin',
    'RenderView',
]
