"""Tests for strong connectivity and shortest paths."""

import sys

import pytest

from digraph.errors import NoSuchVertex
from digraph.graph import Digraph, reconstruct_path


def identity(x: float) -> float:
    return x


def chain(n: int, closed: bool) -> Digraph[None, float]:
    g: Digraph[None, float] = Digraph()
    for v in range(n):
        g.add_vertex(v, None)
    for v in range(n - 1):
        g.add_edge(v, v + 1, 1.0)
    if closed:
        g.add_edge(n - 1, 0, 1.0)
    return g


def test_empty_graph_is_strongly_connected():
    g = Digraph()
    assert g.is_strongly_connected()
    assert g.vertex_count() == 0
    assert g.edge_count() == 0


def test_single_vertex_is_strongly_connected():
    g = Digraph()
    g.add_vertex(42, None)
    assert g.is_strongly_connected()


def test_cycle_is_strongly_connected(cycle):
    assert cycle.is_strongly_connected()


def test_broken_cycle_is_not_strongly_connected(cycle):
    cycle.remove_edge(3, 1)
    assert not cycle.is_strongly_connected()


def test_isolated_vertex_breaks_connectivity(cycle):
    cycle.add_vertex(4, "v4")
    assert not cycle.is_strongly_connected()


def test_last_vertex_unreachable_from_others():
    # Every vertex reaches 1, but only 0 reaches 0.
    g = Digraph()
    for v in (0, 1, 2):
        g.add_vertex(v, None)
    g.add_edge(0, 1, None)
    g.add_edge(1, 2, None)
    g.add_edge(2, 1, None)
    assert not g.is_strongly_connected()
    g.add_edge(2, 0, None)
    assert g.is_strongly_connected()


def test_branching_strongly_connected():
    g = Digraph()
    for v in "abcde":
        g.add_vertex(ord(v), v)
    for src, dst in ["ab", "ac", "bd", "cd", "de", "ea"]:
        g.add_edge(ord(src), ord(dst), None)
    assert g.is_strongly_connected()
    g.remove_edge(ord("e"), ord("a"))
    g.add_edge(ord("e"), ord("b"), None)
    assert not g.is_strongly_connected()


def test_deep_cycle_does_not_hit_recursion_limit():
    n = sys.getrecursionlimit() + 10
    assert chain(n, closed=True).is_strongly_connected()
    assert not chain(n, closed=False).is_strongly_connected()


def test_shortest_paths(weighted):
    assert weighted.find_shortest_paths(1, identity) == {1: 1, 2: 1, 3: 2}


def test_shortest_paths_direct_edge_wins(weighted):
    weighted.remove_edge(1, 3)
    weighted.add_edge(1, 3, 2.5)
    assert weighted.find_shortest_paths(1, identity) == {1: 1, 2: 1, 3: 1}


def test_shortest_paths_unreached_vertices_map_to_themselves(weighted):
    weighted.add_vertex(4, "v4")
    weighted.add_edge(4, 1, 1.0)
    result = weighted.find_shortest_paths(2, identity)
    assert result == {1: 1, 2: 2, 3: 2, 4: 4}
    assert list(result) == [1, 2, 3, 4]


def test_shortest_paths_uses_weight_function():
    g: Digraph[str, dict] = Digraph()
    for v in (1, 2, 3):
        g.add_vertex(v, str(v))
    g.add_edge(1, 2, {"miles": 10, "mph": 60})
    g.add_edge(2, 3, {"miles": 10, "mph": 60})
    g.add_edge(1, 3, {"miles": 15, "mph": 20})
    by_distance = g.find_shortest_paths(1, lambda e: e["miles"])
    by_time = g.find_shortest_paths(1, lambda e: e["miles"] / e["mph"])
    assert by_distance[3] == 1
    assert by_time[3] == 2


def test_shortest_paths_needs_strictly_shorter_path():
    # Both routes to 4 cost 2; the first one found is kept.
    g = Digraph()
    for v in (1, 2, 3, 4):
        g.add_vertex(v, None)
    g.add_edge(1, 2, 1.0)
    g.add_edge(1, 3, 1.0)
    g.add_edge(2, 4, 1.0)
    g.add_edge(3, 4, 1.0)
    assert g.find_shortest_paths(1, identity)[4] == 2


def test_shortest_paths_zero_weights():
    g = chain(4, closed=True)
    result = g.find_shortest_paths(0, lambda _: 0.0)
    assert result == {0: 0, 1: 0, 2: 1, 3: 2}


def test_shortest_paths_missing_start(weighted):
    with pytest.raises(NoSuchVertex):
        weighted.find_shortest_paths(9, identity)


def test_shortest_paths_does_not_modify_graph(weighted):
    before = weighted.copy()
    weighted.find_shortest_paths(1, identity)
    assert weighted == before


def test_reconstruct_path(weighted):
    weighted.add_vertex(4, "v4")
    predecessors = weighted.find_shortest_paths(1, identity)
    assert reconstruct_path(predecessors, 1, 3) == [1, 2, 3]
    assert reconstruct_path(predecessors, 1, 2) == [1, 2]
    assert reconstruct_path(predecessors, 1, 1) == [1]
    assert reconstruct_path(predecessors, 1, 4) is None
    with pytest.raises(KeyError):
        reconstruct_path(predecessors, 1, 5)
