"""Configuration file parser."""

import logging
from abc import ABC, abstractmethod
from io import StringIO
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, TextIO, Type, TypeVar

import yaml

from digraph.graph import Digraph

T = TypeVar("T", bound="Config")

EdgeItem = Dict[str, Any]


class WeightError(ValueError):
    """An edge item cannot be weighed."""


class Config(ABC):

    """Abstract base class for YAML configuration.

    Subclasses should override abstract properties "required" and "optional".

    Example usage:

        # Assuming MyConfig is a subclass of Config:
        cfg = MyConfig.load(Path("/path/to/config.yml"))
        cfg.validate()

    Note that the creator must call validate(). They can optionally pass extra
    defaults as keyword arguments. This is useful if the default is
    context-dependent (static defaults can go in the required/optional dicts).
    """

    def __init__(self, path: Path, data: Mapping[str, Any]):
        self.path = path
        self.data = data

    def __repr__(self) -> str:
        name = self.__class__.__name__
        return f"{name}(path={self.path!r}, data={self.data!r})"

    @property
    @abstractmethod
    def required(self) -> Dict[str, Any]:
        """Required configuration keys and their defaults."""

    @property
    @abstractmethod
    def optional(self) -> Dict[str, Any]:
        """Optional configuration keys and their defaults."""

    def validate(self, **defaults: Any):
        """Validate the loaded configuration.

        This must be called manually after creating an instance.

        Extra defaults can be passed for keys as keyword arguments. They will
        override the defaults from the "required" and "optional" properties.
        """
        for key in self.required:
            if key not in self.data:
                logging.error("%s: missing %r", self.path, key)
        self.data = {**self.required, **self.optional, **defaults, **self.data}

    @classmethod
    def load(cls: Type[T], path: Path) -> T:
        """Load configuration from a file."""
        with open(path) as f:
            return cls.load_from(path, f)

    @classmethod
    def loads(cls: Type[T], path: Path, content: str) -> T:
        """Load configuration from a string."""
        return cls.load_from(path, StringIO(content))

    @classmethod
    def load_from(cls: Type[T], path: Path, content: TextIO) -> T:
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as ex:
            logging.error("cannot parse %s: %s", path, ex)
            data = {}
        if not isinstance(data, dict):
            logging.error("invalid YAML in %s: %s", path, type(data))
            data = {}
        return cls(path, data)

    def __getitem__(self, key: str) -> Any:
        """Get a configuration value."""
        return self.data[key]

    def get(self, key: str) -> Optional[Any]:
        """Get a configuration value, or None if it does not exist."""
        return self.data.get(key)


class GraphConfig(Config):

    """Description of a graph to inspect with the dg command.

    The "vertices" key maps vertex numbers to their items. Each entry under
    "edges" has "from" and "to" keys naming vertices; its remaining keys become
    the edge item. For example:

        vertices:
          0: Irvine
          1: Tustin
        edges:
          - {from: 0, to: 1, miles: 4.2, mph: 55}
        weight: miles/mph

    The "weight" key says how to weigh edges for shortest paths. It is either
    the name of an edge field, or two names separated by a slash to divide one
    field by the other.
    """

    required = {
        "vertices": {},
    }

    optional = {
        "edges": [],
        "weight": "weight",
    }

    def build(self) -> Digraph[Any, EdgeItem]:
        """Build the described graph.

        Malformed entries are logged as errors and skipped. Raises DigraphError
        for duplicate vertices or edges and for edges between unknown vertices.
        """
        graph: Digraph[Any, EdgeItem] = Digraph()
        vertices = self["vertices"]
        if not isinstance(vertices, dict):
            logging.error("%s: vertices must be a mapping", self.path)
            vertices = {}
        for vertex, info in vertices.items():
            graph.add_vertex(vertex, info)
        edges = self["edges"]
        if not isinstance(edges, list):
            logging.error("%s: edges must be a list", self.path)
            edges = []
        for i, entry in enumerate(edges):
            if not isinstance(entry, dict):
                logging.error("%s: edge #%d is not a mapping", self.path, i)
                continue
            missing = [key for key in ("from", "to") if key not in entry]
            if missing:
                logging.error("%s: edge #%d is missing %r", self.path, i, missing[0])
                continue
            item = {k: v for k, v in entry.items() if k not in ("from", "to")}
            graph.add_edge(entry["from"], entry["to"], item)
        logging.info(
            "loaded %d vertices and %d edges from %s",
            graph.vertex_count(),
            graph.edge_count(),
            self.path,
        )
        return graph

    def weight_function(
        self, expr: Optional[str] = None
    ) -> Callable[[EdgeItem], float]:
        """Return a function that weighs edge items.

        Uses expr if given, otherwise the "weight" key. Raises WeightError if
        the expression is not a string. The returned function raises KeyError
        for a missing field and WeightError for a field that is not a number or
        a zero divisor.
        """
        expr = expr or self["weight"]
        if not isinstance(expr, str):
            raise WeightError(f"weight must be a string, not {expr!r}")
        if "/" in expr:
            num, den = (part.strip() for part in expr.split("/", 1))

            def ratio(item: EdgeItem) -> float:
                divisor = number(item, den)
                if divisor == 0:
                    raise WeightError(f"edge field {den!r} is zero")
                return number(item, num) / divisor

            return ratio
        return lambda item: number(item, expr)


def field(item: EdgeItem, name: str) -> Any:
    """Get a field of an edge item, with a readable error if it is missing."""
    try:
        return item[name]
    except KeyError:
        raise KeyError(f"edge has no field {name!r}") from None


def number(item: EdgeItem, name: str) -> float:
    """Get a field of an edge item as a float."""
    value = field(item, name)
    try:
        return float(value)
    except (TypeError, ValueError):
        raise WeightError(f"edge field {name!r} is not a number: {value!r}") from None
