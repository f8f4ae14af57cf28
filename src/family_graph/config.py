"""Configuration for layout spacing and kinship search limits.

All tunables are centralized here with environment-based override support.

Environment Variables:
    FAMILY_GRAPH_MIN_NODE_WIDTH: Narrowest person node (default 150)
    FAMILY_GRAPH_MAX_NODE_WIDTH: Widest person node (default 300)
    FAMILY_GRAPH_CHAR_WIDTH: Width of one rendered name character (default 8)
    FAMILY_GRAPH_NODE_PADDING: Fixed node chrome added to the text width (default 88)
    FAMILY_GRAPH_DEFAULT_NODE_WIDTH: Width used for unknown persons (default 180)
    FAMILY_GRAPH_HORIZONTAL_GAP: Gap between sibling subtrees (default 100)
    FAMILY_GRAPH_VERTICAL_SPACING: Row height per generation (default 220)
    FAMILY_GRAPH_SPOUSE_GAP: Gap between spouse nodes (default 60)
    FAMILY_GRAPH_ROOT_GAP_FACTOR: Multiplier of the horizontal gap between root families (default 2)

    FAMILY_GRAPH_MAX_PATH_DEPTH: Longest kinship path searched (default 15)
    FAMILY_GRAPH_LOCALE: Label locale, "en" or "ru" (default "en")

Example:
    >>> from family_graph.config import CONFIG
    >>> CONFIG.layout.vertical_spacing
    220.0
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field


def _f(name: str, default: float) -> float:
    """Parse float from environment variable with fallback."""
    try:
        return float(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def _i(name: str, default: int) -> int:
    """Parse int from environment variable with fallback."""
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def _s(name: str, default: str) -> str:
    value = os.getenv(name, "").strip()
    return value or default


@dataclass(frozen=True)
class LayoutConfig:
    """Spacing constants for the classic tree layout."""

    min_node_width: float = 150.0
    max_node_width: float = 300.0
    char_width: float = 8.0
    node_padding: float = 88.0
    default_node_width: float = 180.0

    horizontal_gap: float = 100.0
    vertical_spacing: float = 220.0
    spouse_gap: float = 60.0
    root_gap_factor: float = 2.0

    @classmethod
    def from_env(cls) -> LayoutConfig:
        return cls(
            min_node_width=_f("FAMILY_GRAPH_MIN_NODE_WIDTH", 150.0),
            max_node_width=_f("FAMILY_GRAPH_MAX_NODE_WIDTH", 300.0),
            char_width=_f("FAMILY_GRAPH_CHAR_WIDTH", 8.0),
            node_padding=_f("FAMILY_GRAPH_NODE_PADDING", 88.0),
            default_node_width=_f("FAMILY_GRAPH_DEFAULT_NODE_WIDTH", 180.0),
            horizontal_gap=_f("FAMILY_GRAPH_HORIZONTAL_GAP", 100.0),
            vertical_spacing=_f("FAMILY_GRAPH_VERTICAL_SPACING", 220.0),
            spouse_gap=_f("FAMILY_GRAPH_SPOUSE_GAP", 60.0),
            root_gap_factor=_f("FAMILY_GRAPH_ROOT_GAP_FACTOR", 2.0),
        )

    def node_width_for(self, name: str) -> float:
        """Width of a person node rendering ``name``, clamped to the configured range."""
        text_width = len(name) * self.char_width
        return min(self.max_node_width, max(self.min_node_width, self.node_padding + text_width))


@dataclass(frozen=True)
class KinshipConfig:
    """Limits and presentation for kinship queries."""

    max_path_depth: int = 15
    locale: str = "en"

    @classmethod
    def from_env(cls) -> KinshipConfig:
        return cls(
            max_path_depth=_i("FAMILY_GRAPH_MAX_PATH_DEPTH", 15),
            locale=_s("FAMILY_GRAPH_LOCALE", "en"),
        )


@dataclass(frozen=True)
class FamilyGraphConfig:
    """Unified configuration container."""

    layout: LayoutConfig = field(default_factory=LayoutConfig)
    kinship: KinshipConfig = field(default_factory=KinshipConfig)


def load_config() -> FamilyGraphConfig:
    """Build configuration from the current environment."""
    return FamilyGraphConfig(layout=LayoutConfig.from_env(), kinship=KinshipConfig.from_env())


# Default config instance
CONFIG = FamilyGraphConfig()
