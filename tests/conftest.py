"""Shared pytest fixtures for digraph tests."""

import logging
from pathlib import Path

import pytest

from digraph.graph import Digraph

ROADS_YML = """\
vertices:
  0: Irvine
  1: Tustin
  2: Costa Mesa
  3: Anaheim
  7: Catalina
edges:
  - {from: 0, to: 1, miles: 4, mph: 40}
  - {from: 1, to: 0, miles: 4, mph: 40}
  - {from: 1, to: 3, miles: 9, mph: 20}
  - {from: 0, to: 2, miles: 6, mph: 30}
  - {from: 2, to: 3, miles: 10, mph: 60}
  - {from: 3, to: 0, miles: 15, mph: 60}
weight: miles
"""


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handlers and levels installed by setup_logging."""
    logger = logging.getLogger()
    handlers = list(logger.handlers)
    level = logger.level
    yield
    logger.handlers = handlers
    logger.setLevel(level)


@pytest.fixture
def cycle() -> Digraph[str, float]:
    """Vertices 1, 2, 3 joined by the cycle 1 -> 2 -> 3 -> 1."""
    g: Digraph[str, float] = Digraph()
    for v in (1, 2, 3):
        g.add_vertex(v, f"v{v}")
    g.add_edge(1, 2, 1.0)
    g.add_edge(2, 3, 1.0)
    g.add_edge(3, 1, 1.0)
    return g


@pytest.fixture
def weighted() -> Digraph[str, float]:
    """Edges 1 -> 2 (1), 2 -> 3 (2), 1 -> 3 (5)."""
    g: Digraph[str, float] = Digraph()
    for v in (1, 2, 3):
        g.add_vertex(v, f"v{v}")
    g.add_edge(1, 2, 1.0)
    g.add_edge(2, 3, 2.0)
    g.add_edge(1, 3, 5.0)
    return g


@pytest.fixture
def roads_file(tmp_path: Path) -> Path:
    path = tmp_path / "roads.yml"
    path.write_text(ROADS_YML)
    return path
