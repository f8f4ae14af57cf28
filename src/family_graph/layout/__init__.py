"""Tree layout: generations and diagram coordinates."""

from .engine import LayoutStyle, TreeLayoutEngine, layout
from .overrides import merge_positions

__all__ = ["LayoutStyle", "TreeLayoutEngine", "layout", "merge_positions"]
