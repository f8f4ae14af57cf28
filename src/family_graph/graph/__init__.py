"""Graph construction over family relation records.

Provides:
- Typed adjacency lists for path search (GraphBuilder)
- Ordered parent/child/spouse indexes for derivation and layout (FamilySnapshot)
"""
from .builder import FamilyGraph, GraphBuilder, Neighbor, build_graph
from .snapshot import FamilySnapshot

__all__ = [
    "FamilyGraph",
    "FamilySnapshot",
    "GraphBuilder",
    "Neighbor",
    "build_graph",
]
