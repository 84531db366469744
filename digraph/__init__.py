"""Generic directed graphs with adjacency-list storage."""

from digraph.errors import (
    DigraphError,
    EdgeAlreadyExists,
    NoSuchEdge,
    NoSuchVertex,
    VertexAlreadyExists,
)
from digraph.graph import Digraph, reconstruct_path

__all__ = [
    "Digraph",
    "DigraphError",
    "EdgeAlreadyExists",
    "NoSuchEdge",
    "NoSuchVertex",
    "VertexAlreadyExists",
    "reconstruct_path",
]
