from .node import Node
from .edge import Edge
from .graph import Graph
from .snapshot import Snapshot

__all__ = ['Node', 'Edge', 'Graph', 'Snapshot']
