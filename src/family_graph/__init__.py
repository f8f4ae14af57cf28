"""Family Graph - kinship, implied relations and tree layout for family trees.

Pure computations over an in-memory snapshot of persons and relations:
typed graph construction, derivation of relations that must exist, kinship
labels between any two persons, and a deterministic classic tree layout.
"""

__version__ = "0.1.0"

from .config import CONFIG, FamilyGraphConfig, KinshipConfig, LayoutConfig, load_config
from .derivation import ImpliedRelationDeriver, derive, handle_parent_child_created, handle_spouse_relation_created, request_sibling
from .exceptions import FamilyGraphError, InvalidRelationError
from .graph import FamilyGraph, FamilySnapshot, GraphBuilder, build_graph
from .kinship import KinshipCategory, KinshipResolver, KinshipResult, resolve
from .layout import LayoutStyle, TreeLayoutEngine, layout, merge_positions
from .models import EdgeType, Gender, LayoutPosition, Person, Relation, RelationType

__all__ = [
    "CONFIG",
    "EdgeType",
    "FamilyGraph",
    "FamilyGraphConfig",
    "FamilyGraphError",
    "FamilySnapshot",
    "Gender",
    "GraphBuilder",
    "ImpliedRelationDeriver",
    "InvalidRelationError",
    "KinshipCategory",
    "KinshipConfig",
    "KinshipResolver",
    "KinshipResult",
    "LayoutConfig",
    "LayoutPosition",
    "LayoutStyle",
    "Person",
    "Relation",
    "RelationType",
    "TreeLayoutEngine",
    "build_graph",
    "derive",
    "handle_parent_child_created",
    "handle_spouse_relation_created",
    "layout",
    "load_config",
    "merge_positions",
    "request_sibling",
    "resolve",
]
