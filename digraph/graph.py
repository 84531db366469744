"""Generic directed graph structure."""

from __future__ import annotations

import copy
import heapq
import itertools
import logging
import math
import sys
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    Iterator,
    List,
    Mapping,
    Optional,
    Set,
    TextIO,
    Tuple,
    TypeVar,
    overload,
)

from digraph.errors import (
    EdgeAlreadyExists,
    NoSuchEdge,
    NoSuchVertex,
    VertexAlreadyExists,
)

VI = TypeVar("VI")
EI = TypeVar("EI")

Pair = Tuple[int, int]


class Edge(Generic[EI]):

    """An edge from src to dst carrying an item of type EI."""

    def __init__(self, src: int, dst: int, info: EI):
        self.src = src
        self.dst = dst
        self.info = info

    def __repr__(self) -> str:
        return f"Edge(src={self.src!r}, dst={self.dst!r}, info={self.info!r})"


class Vertex(Generic[VI, EI]):

    """A vertex carrying an item of type VI.

    Outgoing edges are keyed by destination in insertion order. The sources of
    incoming edges are indexed as well, so removing a vertex never has to scan
    the rest of the graph.
    """

    def __init__(self, info: VI):
        self.info = info
        self.outgoing: Dict[int, Edge[EI]] = {}
        self.incoming: Dict[int, None] = {}

    def __repr__(self) -> str:
        return f"Vertex(info={self.info!r}, outgoing={list(self.outgoing)!r})"


class Digraph(Generic[VI, EI]):

    """A directed graph stored as adjacency lists.

    Vertices are identified by integer-like keys chosen by the caller. They
    need not be contiguous or start at zero. Each vertex carries an item of
    type VI, and each edge carries an item of type EI. There is at most one
    edge per ordered pair of vertices.

    Digraphs behave like values. Copying one (with copy(), copy.copy, or
    copy.deepcopy) produces a fully independent graph, and the items returned
    by vertex_info and edge_info are copies that can be modified freely.

    All operations validate their arguments before mutating anything, so a
    call that raises a DigraphError leaves the graph unchanged.
    """

    def __init__(self):
        self.adjacency: Dict[int, Vertex[VI, EI]] = {}
        self.edge_order: Dict[Pair, Edge[EI]] = {}

    def __repr__(self) -> str:
        return f"Digraph(V={len(self.adjacency)}, E={len(self.edge_order)})"

    def __len__(self) -> int:
        return len(self.adjacency)

    def __contains__(self, vertex: object) -> bool:
        return vertex in self.adjacency

    def __iter__(self) -> Iterator[int]:
        """Iterate over vertices in insertion order."""
        return iter(list(self.adjacency))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Digraph):
            return NotImplemented
        if list(self.adjacency) != list(other.adjacency):
            return False
        if list(self.edge_order) != list(other.edge_order):
            return False
        for vertex, record in self.adjacency.items():
            if record.info != other.adjacency[vertex].info:
                return False
        for pair, edge in self.edge_order.items():
            if edge.info != other.edge_order[pair].info:
                return False
        return True

    def dump(self, out: Optional[TextIO] = None):
        """Dump a textual representation of this graph to out (default stdout)."""
        if out is None:
            out = sys.stdout
        for vertex, record in self.adjacency.items():
            print(f"{vertex} = {record.info!r}", file=out)
            for dst, edge in record.outgoing.items():
                print(f"    -> {dst} = {edge.info!r}", file=out)

    # Copying and moving

    def copy(self) -> Digraph[VI, EI]:
        """Return a deep copy of this graph."""
        return self._clone({})

    def __copy__(self) -> Digraph[VI, EI]:
        return self._clone({})

    def __deepcopy__(self, memo: Dict[int, Any]) -> Digraph[VI, EI]:
        return self._clone(memo)

    def _clone(self, memo: Dict[int, Any]) -> Digraph[VI, EI]:
        # Outgoing and incoming orders are both subsequences of edge_order, so
        # replaying edge_order reproduces all three.
        clone = type(self)()
        memo[id(self)] = clone
        for vertex, record in self.adjacency.items():
            clone.adjacency[vertex] = Vertex(copy.deepcopy(record.info, memo))
        for (src, dst), edge in self.edge_order.items():
            twin = Edge(src, dst, copy.deepcopy(edge.info, memo))
            clone.adjacency[src].outgoing[dst] = twin
            clone.adjacency[dst].incoming[src] = None
            clone.edge_order[(src, dst)] = twin
        return clone

    def assign(self, other: Digraph[VI, EI]) -> Digraph[VI, EI]:
        """Replace the contents of this graph with a deep copy of other."""
        if other is not self:
            clone = other.copy()
            self.adjacency = clone.adjacency
            self.edge_order = clone.edge_order
        return self

    def take(self, other: Digraph[VI, EI]) -> Digraph[VI, EI]:
        """Move the contents of other into this graph.

        Items are not copied. Afterwards other is empty and can still be used.
        """
        if other is not self:
            self.adjacency = other.adjacency
            self.edge_order = other.edge_order
            other.adjacency = {}
            other.edge_order = {}
        return self

    @classmethod
    def moved_from(cls, other: Digraph[VI, EI]) -> Digraph[VI, EI]:
        """Create a graph that takes over the contents of other."""
        return cls().take(other)

    def clear(self):
        """Remove all vertices and edges."""
        self.adjacency = {}
        self.edge_order = {}

    # Queries

    def _vertex(self, vertex: int) -> Vertex[VI, EI]:
        try:
            return self.adjacency[vertex]
        except KeyError:
            raise NoSuchVertex(vertex) from None

    def _edge(self, src: int, dst: int) -> Edge[EI]:
        outgoing = self._vertex(src).outgoing
        self._vertex(dst)
        try:
            return outgoing[dst]
        except KeyError:
            raise NoSuchEdge(src, dst) from None

    def vertices(self) -> List[int]:
        """Return all vertices in insertion order."""
        return list(self.adjacency)

    def edges(self, vertex: Optional[int] = None) -> List[Pair]:
        """Return (src, dst) pairs in insertion order.

        With no argument, returns every edge in the graph. Otherwise, returns
        only the edges outgoing from vertex.
        """
        if vertex is None:
            return list(self.edge_order)
        return [(vertex, dst) for dst in self._vertex(vertex).outgoing]

    def has_edge(self, src: int, dst: int) -> bool:
        return (src, dst) in self.edge_order

    def vertex_info(self, vertex: int) -> VI:
        """Return a copy of the item for vertex."""
        return copy.deepcopy(self._vertex(vertex).info)

    def edge_info(self, src: int, dst: int) -> EI:
        """Return a copy of the item for the edge from src to dst."""
        return copy.deepcopy(self._edge(src, dst).info)

    def vertex_count(self) -> int:
        return len(self.adjacency)

    @overload
    def edge_count(self) -> int:
        ...

    @overload
    def edge_count(self, vertex: int) -> int:
        ...

    def edge_count(self, vertex: Optional[int] = None) -> int:
        """Return the number of edges, or only those outgoing from vertex."""
        if vertex is None:
            return len(self.edge_order)
        return len(self._vertex(vertex).outgoing)

    # Mutation

    def add_vertex(self, vertex: int, info: VI):
        """Add a vertex with no edges after all existing vertices."""
        if vertex in self.adjacency:
            raise VertexAlreadyExists(vertex)
        self.adjacency[vertex] = Vertex(copy.deepcopy(info))
        logging.debug("added vertex %r", vertex)

    def add_edge(self, src: int, dst: int, info: EI):
        """Add an edge from src to dst after all existing edges."""
        record = self._vertex(src)
        self._vertex(dst)
        if dst in record.outgoing:
            raise EdgeAlreadyExists(src, dst)
        edge = Edge(src, dst, copy.deepcopy(info))
        record.outgoing[dst] = edge
        self.adjacency[dst].incoming[src] = None
        self.edge_order[(src, dst)] = edge
        logging.debug("added edge %r -> %r", src, dst)

    def remove_vertex(self, vertex: int):
        """Remove a vertex along with all its incoming and outgoing edges."""
        record = self._vertex(vertex)
        n_out, n_in = len(record.outgoing), len(record.incoming)
        for dst in record.outgoing:
            del self.adjacency[dst].incoming[vertex]
            del self.edge_order[(vertex, dst)]
        # A self-loop was already removed from record.incoming above.
        for src in record.incoming:
            del self.adjacency[src].outgoing[vertex]
            del self.edge_order[(src, vertex)]
        del self.adjacency[vertex]
        logging.debug(
            "removed vertex %r (%d out, %d in)",
            vertex,
            n_out,
            n_in,
        )

    def remove_edge(self, src: int, dst: int):
        """Remove the edge from src to dst."""
        self._edge(src, dst)
        del self.adjacency[src].outgoing[dst]
        del self.adjacency[dst].incoming[src]
        del self.edge_order[(src, dst)]
        logging.debug("removed edge %r -> %r", src, dst)

    # Algorithms

    def is_strongly_connected(self) -> bool:
        """Return True if every vertex is reachable from every other vertex.

        Runs a depth-first traversal from each vertex in turn and stops at the
        first one that fails to reach the whole graph. This is O(V * (V + E)),
        which is fine for the small graphs this is meant for. The empty graph
        counts as strongly connected.
        """
        for vertex in self.adjacency:
            remaining = set(self.adjacency)
            self._traverse(vertex, remaining)
            if remaining:
                logging.debug(
                    "%d vertices unreachable from %r", len(remaining), vertex
                )
                return False
        return True

    def _traverse(self, start: int, remaining: Set[int]):
        """Discard every vertex reachable from start from remaining.

        Only vertices still in remaining are explored, so each vertex is
        visited at most once. Uses an explicit stack of edge iterators to visit
        vertices in the same order as the recursive formulation.
        """
        remaining.discard(start)
        stack = [iter(self.adjacency[start].outgoing)]
        while stack:
            for dst in stack[-1]:
                if dst in remaining:
                    remaining.discard(dst)
                    stack.append(iter(self.adjacency[dst].outgoing))
                    break
            else:
                stack.pop()

    def find_shortest_paths(
        self, start: int, weight: Callable[[EI], float]
    ) -> Dict[int, int]:
        """Find shortest paths from start using Dijkstra's algorithm.

        The weight function maps an edge item to a nonnegative weight. It is
        the only way the algorithm looks at edge items, and it must not modify
        them. Negative weights give undefined results.

        Returns a dict mapping every vertex to its predecessor on a shortest
        path from start. The start vertex and vertices that cannot be reached
        map to themselves (use reconstruct_path to tell them apart). Among
        paths of equal length, the one found first wins.
        """
        self._vertex(start)
        predecessors = {vertex: vertex for vertex in self.adjacency}
        distances = {vertex: math.inf for vertex in self.adjacency}
        distances[start] = 0.0
        visited: Set[int] = set()
        # The counter breaks ties so that vertices are never compared.
        counter = itertools.count()
        queue = [(0.0, next(counter), start)]
        while queue:
            _, _, vertex = heapq.heappop(queue)
            if vertex in visited:
                continue
            visited.add(vertex)
            for dst, edge in self.adjacency[vertex].outgoing.items():
                distance = distances[vertex] + weight(edge.info)
                if distance < distances[dst]:
                    distances[dst] = distance
                    predecessors[dst] = vertex
                    heapq.heappush(queue, (distance, next(counter), dst))
        logging.debug(
            "reached %d of %d vertices from %r",
            len(visited),
            len(self.adjacency),
            start,
        )
        return predecessors


def reconstruct_path(
    predecessors: Mapping[int, int], start: int, target: int
) -> Optional[List[int]]:
    """Return the path from start to target encoded in predecessors.

    The predecessors mapping is the result of Digraph.find_shortest_paths for
    start. Returns None if target was not reached. Raises KeyError if target
    is not in the mapping.
    """
    if target not in predecessors:
        raise KeyError(target)
    path = [target]
    while path[-1] != start:
        prev = predecessors[path[-1]]
        if prev == path[-1]:
            return None
        path.append(prev)
    path.reverse()
    return path
