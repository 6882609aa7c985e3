"""A* pathfinding over a registry of connected nodes."""

from __future__ import annotations

import heapq
import itertools
import json
import math
from dataclasses import dataclass, field
from typing import Any

_FIELDS = ("unique_id", "x", "y", "z", "connected_nodes_id")


class NodesNotCorrectlyIndexed(Exception):
    """Raised when a node's unique id does not match its index."""

    def __init__(self, message: str = "Nodes were not correctly indexed"):
        super().__init__(message)


class NodeNotFound(Exception):
    """Raised when a node to remove does not exist."""

    def __init__(self, message: str = "Node was not found"):
        super().__init__(message)


class PathError(Exception):
    """Raised when no path can be produced between two nodes."""


def _uint(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"field `{name}` must be a non-negative integer, got {value!r}")
    return value


@dataclass
class Node:
    """A graph node placed at (x, y, z), linked to other nodes by id."""

    unique_id: int
    x: int
    y: int
    z: int
    connected_nodes_id: list[int] = field(default_factory=list)

    @classmethod
    def _from_json_value(cls, obj: Any) -> Node:
        if not isinstance(obj, dict):
            raise ValueError("a node must be a JSON object")
        missing = [name for name in _FIELDS if name not in obj]
        if missing:
            raise ValueError(f"missing field `{missing[0]}`")
        links = obj["connected_nodes_id"]
        if not isinstance(links, list):
            raise ValueError("field `connected_nodes_id` must be a list")
        return cls(
            unique_id=_uint(obj["unique_id"], "unique_id"),
            x=_uint(obj["x"], "x"),
            y=_uint(obj["y"], "y"),
            z=_uint(obj["z"], "z"),
            connected_nodes_id=[_uint(link, "connected_nodes_id") for link in links],
        )

    def distance(self, other: Node) -> int:
        """Integer square root of the squared planar distance to other."""
        return math.isqrt((self.x - other.x) ** 2 + (self.y - other.y) ** 2)


def _parse_id(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"invalid node id: {value!r}")
    number = int(value)
    if number < 0:
        raise ValueError(f"invalid node id: {value!r}")
    return number


class NodeGraph:
    """Nodes indexed by their unique id; removed nodes leave an empty slot."""

    def __init__(self):
        self._nodes: list[Node | None] = []

    def __len__(self) -> int:
        return len(self._nodes)

    def __getitem__(self, index: int) -> Node | None:
        return self._nodes[index]

    def _get(self, node_id: int) -> Node | None:
        if 0 <= node_id < len(self._nodes):
            return self._nodes[node_id]
        return None

    def register_nodes(self, json_text: str) -> None:
        """Append a JSON list of nodes whose ids match their list positions."""
        data = json.loads(json_text)
        if not isinstance(data, list):
            raise ValueError("expected a JSON list of nodes")
        nodes = [Node._from_json_value(item) for item in data]
        if any(position != node.unique_id for position, node in enumerate(nodes)):
            raise NodesNotCorrectlyIndexed()
        self._nodes.extend(nodes)

    def add_node(self, json_text: str) -> None:
        """Append one node, linking existing neighbours back to it."""
        node = Node._from_json_value(json.loads(json_text))
        if node.unique_id != len(self._nodes):
            raise NodesNotCorrectlyIndexed()
        for link in node.connected_nodes_id:
            neighbour = self._get(link)
            if neighbour is not None:
                neighbour.connected_nodes_id.append(node.unique_id)
        self._nodes.append(node)

    def remove_node(self, unique_id) -> None:
        """Empty the node's slot and drop every link pointing at it."""
        node_id = _parse_id(unique_id)
        node = self._get(node_id)
        if node is None:
            raise NodeNotFound()
        for link in node.connected_nodes_id:
            neighbour = self._get(link)
            if neighbour is not None:
                neighbour.connected_nodes_id = [
                    other for other in neighbour.connected_nodes_id if other != node.unique_id
                ]
        self._nodes[node_id] = None

    def _successors(self, node: Node):
        for link in node.connected_nodes_id:
            neighbour = self._get(link)
            if neighbour is not None:
                yield neighbour, node.distance(neighbour)

    def generate_path(self, start_id, goal_id) -> list[int]:
        """Shortest path of node ids, listed from the goal back to the start."""
        start = self._get(_parse_id(start_id))
        if start is None:
            raise PathError("Starting node not found")
        goal = self._get(_parse_id(goal_id))
        if goal is None:
            raise PathError("Goal node not found")
        if goal.z != start.z:
            raise PathError("No path found")

        tie = itertools.count()
        best = {start.unique_id: 0}
        parents: dict[int, int | None] = {start.unique_id: None}
        heap = [(start.distance(goal), 0, next(tie), start)]
        while heap:
            _, cost, _, node = heapq.heappop(heap)
            if cost > best[node.unique_id]:
                continue
            if node.distance(goal) == 0:
                path = []
                current: int | None = node.unique_id
                while current is not None:
                    path.append(current)
                    current = parents[current]
                return path
            for neighbour, step in self._successors(node):
                new_cost = cost + step
                if new_cost < best.get(neighbour.unique_id, math.inf):
                    best[neighbour.unique_id] = new_cost
                    parents[neighbour.unique_id] = node.unique_id
                    heapq.heappush(
                        heap,
                        (new_cost + neighbour.distance(goal), new_cost, next(tie), neighbour),
                    )
        raise PathError("No path found")