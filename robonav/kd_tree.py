"""k-d trees for nearest-neighbour search over fixed-dimension vectors."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")
Vector = tuple[float, ...]

_MASK64 = (1 << 64) - 1
_GOLDEN = 0x9E3779B9


def hash_vector(values: Iterable[float]) -> int:
    """Combine the element hashes of a vector into one 64-bit hash."""
    seed = 0
    for value in values:
        element = hash(float(value)) & _MASK64
        seed ^= (element + _GOLDEN + ((seed << 6) & _MASK64) + (seed >> 2)) & _MASK64
    return seed


def _as_vector(values: Iterable[float]) -> Vector:
    return tuple(float(v) for v in values)


@dataclass(slots=True)
class _Node:
    point: Vector
    data: Any
    axis: int
    left: _Node | None
    right: _Node | None


def _build(items: list[tuple[Vector, Any]], depth: int, dim: int) -> _Node | None:
    if not items:
        return None
    axis = depth % dim
    ordered = sorted(items, key=lambda item: item[0][axis])
    mid = (len(ordered) - 1) // 2
    point, data = ordered[mid]
    return _Node(
        point,
        data,
        axis,
        _build(ordered[:mid], depth + 1, dim),
        _build(ordered[mid + 1 :], depth + 1, dim),
    )


def _nearest(root: _Node, query: Vector) -> _Node:
    best: _Node = root
    best_sq = sys.float_info.max
    found = False

    def visit(node: _Node) -> None:
        nonlocal best, best_sq, found
        sq_dist = sum((q - p) * (q - p) for q, p in zip(query, node.point))
        if sq_dist < best_sq:
            best, best_sq, found = node, sq_dist, True
        offset = query[node.axis] - node.point[node.axis]
        near, far = (node.left, node.right) if offset < 0 else (node.right, node.left)
        if near is not None:
            visit(near)
        if far is not None and offset * offset < best_sq:
            visit(far)

    visit(root)
    if not found:
        raise ValueError("no point is at a finite distance from the query")
    return best


def _prepare(items: Iterable[tuple[Iterable[float], Any]]) -> tuple[list[tuple[Vector, Any]], int]:
    prepared = [(_as_vector(point), data) for point, data in items]
    if not prepared:
        raise ValueError("a k-d tree needs at least one point")
    dim = len(prepared[0][0])
    if dim == 0:
        raise ValueError("points must have at least one dimension")
    if any(len(point) != dim for point, _ in prepared):
        raise ValueError("all points must have the same dimension")
    return prepared, dim


def _check_query(query: Iterable[float], dim: int) -> Vector:
    q = _as_vector(query)
    if len(q) != dim:
        raise ValueError(f"query has dimension {len(q)}, tree has {dim}")
    return q


class VectorTree:
    """k-d tree over points given as sequences of floats."""

    def __init__(self, points: Iterable[Sequence[float]]) -> None:
        prepared, self.dimension = _prepare((p, None) for p in points)
        self._size = len(prepared)
        self._root = _build(prepared, 1, self.dimension)

    def __len__(self) -> int:
        return self._size

    def nearest(self, query: Sequence[float]) -> Vector:
        """Return the stored point closest to ``query``."""
        assert self._root is not None
        return _nearest(self._root, _check_query(query, self.dimension)).point


class VectorDataTree(Generic[T]):
    """k-d tree over points that each carry a data value."""

    def __init__(self, items: Iterable[tuple[Sequence[float], T]]) -> None:
        prepared, self.dimension = _prepare(items)
        self._size = len(prepared)
        self._root = _build(prepared, 1, self.dimension)

    @classmethod
    def from_mapping(cls, mapping: Mapping[Sequence[float], T]) -> VectorDataTree[T]:
        """Build a tree from a mapping of point to data."""
        return cls(mapping.items())

    def __len__(self) -> int:
        return self._size

    def nearest(self, query: Sequence[float]) -> tuple[Vector, T]:
        """Return the closest stored point and its data."""
        assert self._root is not None
        node = _nearest(self._root, _check_query(query, self.dimension))
        return node.point, node.data