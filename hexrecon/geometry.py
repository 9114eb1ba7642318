"""Reconstruction of hexahedral cells from a cloud of constrained points."""

from __future__ import annotations

import math
from dataclasses import dataclass
from itertools import combinations
from typing import Dict, List, Sequence, Set, Tuple

Vector3 = Tuple[float, float, float]
AdjacencyGraph = Dict[int, Set[int]]
QuadFace = Tuple[int, int, int, int]
Hexahedron = Tuple[int, int, int, int, int, int, int, int]

_DIAGONAL_MARGIN = 1.01


@dataclass(frozen=True)
class MeshPoint:
    """A mesh vertex together with the number of neighbours it must have."""

    pos: Vector3
    required_neighbors: int

    def __post_init__(self) -> None:
        x, y, z = self.pos
        object.__setattr__(self, "pos", (float(x), float(y), float(z)))


def _sub(a: Vector3, b: Vector3) -> Vector3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _dot(a: Vector3, b: Vector3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _cross(a: Vector3, b: Vector3) -> Vector3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _length_sq(v: Vector3) -> float:
    return _dot(v, v)


def _in_range(points: Sequence[MeshPoint], index: int) -> bool:
    return 0 <= index < len(points)


def are_points_coplanar(
    points: Sequence[MeshPoint], face: Sequence[int], tolerance: float = 1e-3
) -> bool:
    """Return True if the four points of ``face`` lie in one plane."""
    if not all(_in_range(points, index) for index in face):
        return False
    p0, p1, p2, p3 = (points[index].pos for index in face)
    volume = _dot(_sub(p1, p0), _cross(_sub(p2, p0), _sub(p3, p0)))
    return abs(volume) < tolerance


def build_adjacency_graph(points: Sequence[MeshPoint]) -> AdjacencyGraph:
    """Connect every point to its ``required_neighbors`` nearest points."""
    graph: AdjacencyGraph = {}
    for i, point in enumerate(points):
        ranked = sorted(
            (math.dist(point.pos, other.pos), j)
            for j, other in enumerate(points)
            if j != i
        )
        count = max(point.required_neighbors, 0)
        graph[i] = {j for _, j in ranked[:count]}
    return graph


def _has_quad_diagonals(points: Sequence[MeshPoint], face: QuadFace) -> bool:
    p0, p1, p2, p3 = (points[index].pos for index in face)
    longest_edge = max(
        _length_sq(_sub(p0, p1)),
        _length_sq(_sub(p1, p2)),
        _length_sq(_sub(p2, p3)),
        _length_sq(_sub(p3, p0)),
    )
    threshold = longest_edge * _DIAGONAL_MARGIN
    return (
        _length_sq(_sub(p0, p2)) > threshold
        and _length_sq(_sub(p1, p3)) > threshold
    )


def find_valid_faces(
    points: Sequence[MeshPoint], adj_graph: AdjacencyGraph
) -> List[QuadFace]:
    """Find planar quadrilateral cycles in the graph whose diagonals exceed their edges."""
    faces: List[QuadFace] = []
    seen: Set[Tuple[int, ...]] = set()
    for p0 in range(len(points)):
        if p0 not in adj_graph:
            continue
        for p1, p3 in combinations(sorted(adj_graph[p0]), 2):
            if p1 not in adj_graph or p3 not in adj_graph:
                continue
            for p2 in sorted(adj_graph[p1]):
                if p2 == p0 or p2 not in adj_graph[p3]:
                    continue
                face: QuadFace = (p0, p1, p2, p3)
                if not are_points_coplanar(points, face):
                    continue
                if not _has_quad_diagonals(points, face):
                    continue
                key = tuple(sorted(face))
                if key in seen:
                    continue
                seen.add(key)
                faces.append(face)
    return faces


def build_hexahedra(
    valid_faces: Sequence[Sequence[int]], adj_graph: AdjacencyGraph
) -> List[Hexahedron]:
    """Pair disjoint faces joined by four one-to-one edges into hexahedra."""
    candidates: List[Hexahedron] = []
    for face1, face2 in combinations(valid_faces, 2):
        if set(face1) & set(face2):
            continue
        edges = [
            (a, b)
            for a in face1
            if a in adj_graph
            for b in face2
            if b in adj_graph[a]
        ]
        if len(edges) != 4:
            continue
        firsts = tuple(a for a, _ in edges)
        seconds = tuple(b for _, b in edges)
        if len(set(firsts)) != 4 or len(set(seconds)) != 4:
            continue
        candidates.append(firsts + seconds)

    hexahedra: List[Hexahedron] = []
    seen: Set[Tuple[int, ...]] = set()
    for hexahedron in candidates:
        key = tuple(sorted(hexahedron))
        if len(set(key)) != 8 or key in seen:
            continue
        seen.add(key)
        hexahedra.append(hexahedron)
    return hexahedra