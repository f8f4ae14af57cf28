"""Kinship resolution between two persons of a family tree."""

from .categories import Classification, KinshipCategory, classify_blood, classify_path, normalize_path
from .labels import render_label, supported_locales
from .resolver import KinshipPath, KinshipResolver, KinshipResult, find_path, relationship_to_user, resolve

__all__ = [
    "Classification",
    "KinshipCategory",
    "KinshipPath",
    "KinshipResolver",
    "KinshipResult",
    "classify_blood",
    "classify_path",
    "find_path",
    "normalize_path",
    "relationship_to_user",
    "render_label",
    "resolve",
    "supported_locales",
]
