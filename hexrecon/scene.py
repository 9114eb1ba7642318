"""Drawable state of a reconstruction: points, graph, faces and hexahedra."""

from __future__ import annotations

from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from hexrecon.camera import Camera
from hexrecon.geometry import AdjacencyGraph, MeshPoint, QuadFace, Vector3


class Layer(str, Enum):
    AXES = "axes"
    POINTS = "points"
    GRAPH = "graph"
    FACES = "faces"
    HEXAHEDRA = "hexahedra"


def hexahedron_faces(hexahedron: Sequence[int]) -> List[QuadFace]:
    """The six faces of a hexahedron, wound outward."""
    h = hexahedron
    return [
        (h[0], h[3], h[2], h[1]),
        (h[4], h[5], h[6], h[7]),
        (h[0], h[4], h[7], h[3]),
        (h[1], h[2], h[6], h[5]),
        (h[0], h[1], h[5], h[4]),
        (h[3], h[7], h[6], h[2]),
    ]


class Scene:
    """Holds what is drawn and turns it into coordinates for rendering."""

    def __init__(
        self,
        camera: Optional[Camera] = None,
        on_change: Optional[Callable[[], None]] = None,
    ) -> None:
        self.camera = camera if camera is not None else Camera()
        self.on_change = on_change
        self.points: List[MeshPoint] = []
        self.graph: AdjacencyGraph = {}
        self.faces: List[QuadFace] = []
        self.hexahedra: List[Tuple[int, ...]] = []

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()

    def set_points(self, points: Sequence[MeshPoint]) -> None:
        self.points = list(points)
        self._changed()

    def set_adjacency_graph(self, graph: AdjacencyGraph) -> None:
        self.graph = {key: set(value) for key, value in graph.items()}
        self._changed()

    def set_faces(self, faces: Sequence[Sequence[int]]) -> None:
        self.faces = [tuple(face) for face in faces]
        self._changed()

    def set_hexahedra(self, hexahedra: Sequence[Sequence[int]]) -> None:
        self.hexahedra = [tuple(h) for h in hexahedra]
        self._changed()

    def reset(self) -> None:
        """Clear everything that is drawn."""
        self.points = []
        self.graph = {}
        self.faces = []
        self.hexahedra = []
        self._changed()

    def _valid(self, index: int) -> bool:
        return 0 <= index < len(self.points)

    def point_positions(self) -> List[Vector3]:
        return [point.pos for point in self.points]

    def graph_segments(self) -> List[Tuple[Vector3, Vector3]]:
        """Line segments for every graph edge whose ends are known points."""
        segments = []
        for index in sorted(self.graph):
            if not self._valid(index):
                continue
            start = self.points[index].pos
            for neighbour in sorted(self.graph[index]):
                if self._valid(neighbour):
                    segments.append((start, self.points[neighbour].pos))
        return segments

    def face_polygons(self) -> List[List[Vector3]]:
        """Quads for the faces, stopping at the first face with an unknown point."""
        polygons = []
        for face in self.faces:
            if not all(self._valid(index) for index in face):
                break
            polygons.append([self.points[index].pos for index in face])
        return polygons

    def hexahedron_polygons(self) -> List[List[Vector3]]:
        """Quads for every hexahedron face whose corners are all known points."""
        polygons = []
        for hexahedron in self.hexahedra:
            for face in hexahedron_faces(hexahedron):
                if all(self._valid(index) for index in face):
                    polygons.append([self.points[index].pos for index in face])
        return polygons

    def visible_layers(self) -> Tuple[Layer, ...]:
        """Layers drawn; each one needs all the layers before it to be present."""
        layers = [Layer.AXES]
        for layer, data in (
            (Layer.POINTS, self.points),
            (Layer.GRAPH, self.graph),
            (Layer.FACES, self.faces),
            (Layer.HEXAHEDRA, self.hexahedra),
        ):
            if not data:
                break
            layers.append(layer)
        return tuple(layers)