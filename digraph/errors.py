"""Exceptions raised by directed graphs."""

from typing import Hashable


class DigraphError(Exception):

    """Base class for misuse of a Digraph.

    Every error is a contract violation by the caller. None of them are
    transient, and the graph is left unchanged when one is raised.
    """


class NoSuchVertex(DigraphError):
    def __init__(self, vertex: Hashable):
        super().__init__(f"vertex {vertex!r} does not exist")
        self.vertex = vertex


class NoSuchEdge(DigraphError):
    def __init__(self, src: Hashable, dst: Hashable):
        super().__init__(f"edge {src!r} -> {dst!r} does not exist")
        self.src = src
        self.dst = dst


class VertexAlreadyExists(DigraphError):
    def __init__(self, vertex: Hashable):
        super().__init__(f"vertex {vertex!r} already exists")
        self.vertex = vertex


class EdgeAlreadyExists(DigraphError):
    def __init__(self, src: Hashable, dst: Hashable):
        super().__init__(f"edge {src!r} -> {dst!r} already exists")
        self.src = src
        self.dst = dst
