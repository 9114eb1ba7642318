"""Step-by-step reconstruction session and its interactive 3D viewer."""

from __future__ import annotations

import argparse
import logging
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np

from hexrecon.geometry import (
    AdjacencyGraph,
    Hexahedron,
    MeshPoint,
    QuadFace,
    build_adjacency_graph,
    build_hexahedra,
    find_valid_faces,
)
from hexrecon.scene import Layer, Scene

log = logging.getLogger(__name__)

WINDOW_TITLE = "Hexahedral Mesh Reconstruction (3D Viewer)"
BACKGROUND = (0.1, 0.1, 0.2)
POINT_COLOR = (1.0, 1.0, 1.0)
GRAPH_COLOR = (0.5, 0.5, 0.6)
FACE_COLOR = (0.2, 0.5, 1.0, 0.3)
HEXAHEDRON_COLOR = (1.0, 0.3, 0.3, 0.5)
AXIS_LENGTH = 2.0
LABEL_DISTANCE = 2.2


class Step(str, Enum):
    """The reconstruction steps, in the order they must run."""

    BUILD_GRAPH = "Step 1: Build Adjacency Graph"
    FIND_FACES = "Step 2: Find Faces"
    BUILD_HEXAHEDRA = "Step 3: Build Hexahedra"


STEP_ORDER: Tuple[Step, ...] = (Step.BUILD_GRAPH, Step.FIND_FACES, Step.BUILD_HEXAHEDRA)
RESET_LABEL = "Reset / Load Points"


class StepOrderError(RuntimeError):
    """Raised when a step is run while it is not available."""


def default_points() -> List[MeshPoint]:
    """A 3x1x1 block of cubes stacked along z, with one slightly displaced corner."""
    layout = [
        # Bottom layer: corners of the whole block.
        ((-0.2, 0, 0), 3), ((1, 0, 0), 3), ((1, 1, 0), 3), ((0, 1, 0), 3),
        # First internal layer, shared by two cubes.
        ((0, 0, 1), 4), ((1, 0, 1), 4), ((1, 1, 1), 4), ((0, 1, 1), 4),
        # Second internal layer, shared by two cubes.
        ((0, 0, 2), 4), ((1, 0, 2), 4), ((1, 1, 2), 4), ((0, 1, 2), 4),
        # Top layer: corners of the whole block.
        ((0, 0, 3), 3), ((1, 0, 3), 3), ((1, 1, 3), 3), ((0, 1, 3), 3),
    ]
    return [MeshPoint(pos, required) for pos, required in layout]


class Session:
    """Runs the reconstruction one step at a time and keeps a scene in sync."""

    def __init__(
        self,
        points: Optional[Sequence[MeshPoint]] = None,
        scene: Optional[Scene] = None,
    ) -> None:
        self.points: List[MeshPoint] = list(points) if points is not None else default_points()
        self.scene = scene if scene is not None else Scene()
        self.graph: AdjacencyGraph = {}
        self.faces: List[QuadFace] = []
        self.hexahedra: List[Hexahedron] = []
        self._completed = 0
        self.reset()

    def _require(self, step: Step) -> None:
        if step not in self.available_steps():
            raise StepOrderError(f"{step.value!r} is not available now")

    def reset(self) -> None:
        """Drop all results and show the points alone."""
        self.graph = {}
        self.faces = []
        self.hexahedra = []
        self.scene.reset()
        self.scene.set_points(self.points)
        self._completed = 0
        log.info("--- System reset. Points loaded. ---")

    def build_graph(self) -> AdjacencyGraph:
        """Step 1: connect each point to its nearest neighbours."""
        self._require(Step.BUILD_GRAPH)
        log.info("--- Executing Step 1: Building Adjacency Graph ---")
        self.graph = build_adjacency_graph(self.points)
        self.scene.set_adjacency_graph(self.graph)
        self._completed = 1
        log.info("Adjacency graph built.")
        return self.graph

    def find_faces(self) -> List[QuadFace]:
        """Step 2: find the quadrilateral faces of the graph."""
        self._require(Step.FIND_FACES)
        log.info("--- Executing Step 2: Finding Faces ---")
        self.faces = find_valid_faces(self.points, self.graph)
        self.scene.set_faces(self.faces)
        self._completed = 2
        log.info("Found %d valid faces.", len(self.faces))
        return self.faces

    def build_hexahedra(self) -> List[Hexahedron]:
        """Step 3: pair faces into hexahedral cells."""
        self._require(Step.BUILD_HEXAHEDRA)
        log.info("--- Executing Step 3: Building Hexahedra ---")
        self.hexahedra = build_hexahedra(self.faces, self.graph)
        self.scene.set_hexahedra(self.hexahedra)
        self._completed = 3
        log.info("Reconstructed %d hexahedra.", len(self.hexahedra))
        return self.hexahedra

    def available_steps(self) -> Tuple[Step, ...]:
        """The steps that may run now: only the next one, or none when done."""
        return STEP_ORDER[self._completed:self._completed + 1]

    def _actions(self) -> Dict[Step, Callable[[], object]]:
        return {
            Step.BUILD_GRAPH: self.build_graph,
            Step.FIND_FACES: self.find_faces,
            Step.BUILD_HEXAHEDRA: self.build_hexahedra,
        }


def _draw_axes(axes) -> None:
    for direction, color, label in (
        ((1, 0, 0), "red", "X"),
        ((0, 1, 0), "green", "Y"),
        ((0, 0, 1), "blue", "Z"),
    ):
        end = [AXIS_LENGTH * c for c in direction]
        axes.plot([0, end[0]], [0, end[1]], [0, end[2]], color=color, linewidth=2)
        tip = [LABEL_DISTANCE * c for c in direction]
        axes.text(tip[0], tip[1], tip[2], label, color="white")


def _draw_segments(axes, segments, color) -> None:
    for start, end in segments:
        axes.plot(
            [start[0], end[0]], [start[1], end[1]], [start[2], end[2]],
            color=color, linewidth=1.0,
        )


def _draw_polygons(axes, polygons, rgba) -> None:
    color, alpha = rgba[:3], rgba[3]
    for polygon in polygons:
        corners = np.asarray(polygon, dtype=float)
        if corners.shape != (4, 3):
            continue
        # Lay the quad out as a 2x2 grid: (p0, p1) over (p3, p2).
        grid = np.array([[corners[0], corners[1]], [corners[3], corners[2]]])
        axes.plot_surface(
            grid[..., 0], grid[..., 1], grid[..., 2],
            color=color, alpha=alpha, shade=False, linewidth=0,
        )


def render(scene: Scene, axes) -> None:
    """Draw every visible layer of ``scene`` onto a 3D matplotlib axes."""
    axes.cla()
    axes.set_facecolor(BACKGROUND)
    axes.figure.set_facecolor(BACKGROUND)
    layers = scene.visible_layers()
    if Layer.AXES in layers:
        _draw_axes(axes)
    if Layer.POINTS in layers:
        xs, ys, zs = zip(*scene.point_positions())
        axes.scatter(xs, ys, zs, color=POINT_COLOR, s=40, depthshade=False)
    if Layer.GRAPH in layers:
        _draw_segments(axes, scene.graph_segments(), GRAPH_COLOR)
    if Layer.FACES in layers:
        _draw_polygons(axes, scene.face_polygons(), FACE_COLOR)
    if Layer.HEXAHEDRA in layers:
        _draw_polygons(axes, scene.hexahedron_polygons(), HEXAHEDRON_COLOR)


class _Viewer:
    """Window with the 3D view on the left and step buttons on the right."""

    _ENABLED = "0.85"
    _DISABLED = "0.45"

    def __init__(self, session: Session, pyplot) -> None:
        from matplotlib.widgets import Button

        self.session = session
        self.figure = pyplot.figure(figsize=(10.24, 7.68))
        manager = self.figure.canvas.manager
        if manager is not None:
            manager.set_window_title(WINDOW_TITLE)
        self.axes = self.figure.add_axes([0.0, 0.0, 0.76, 1.0], projection="3d")
        self.buttons: Dict[object, object] = {}
        labels = [RESET_LABEL] + [step.value for step in STEP_ORDER]
        keys: List[object] = [None] + list(STEP_ORDER)
        for row, (key, label) in enumerate(zip(keys, labels)):
            button_axes = self.figure.add_axes([0.77, 0.9 - row * 0.08, 0.22, 0.06])
            button = Button(button_axes, label)
            button.on_clicked(self._handler(key))
            self.buttons[key] = button
        self.refresh()

    def _handler(self, key):
        def clicked(_event) -> None:
            if key is None:
                self.session.reset()
            else:
                try:
                    self.session._actions()[key]()
                except StepOrderError as error:
                    log.info("%s", error)
            self.refresh()

        return clicked

    def refresh(self) -> None:
        render(self.session.scene, self.axes)
        available = self.session.available_steps()
        for key, button in self.buttons.items():
            color = self._ENABLED if key is None or key in available else self._DISABLED
            button.color = color
            button.hovercolor = color
            button.ax.set_facecolor(color)
        self.figure.canvas.draw_idle()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Open the viewer, or save a picture after running some steps."""
    parser = argparse.ArgumentParser(prog="hexrecon", description=WINDOW_TITLE)
    parser.add_argument(
        "--steps", type=int, choices=range(len(STEP_ORDER) + 1), default=0,
        help="number of reconstruction steps to run before showing",
    )
    parser.add_argument("--save", metavar="FILE", help="write the view to FILE instead of opening a window")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    session = Session()
    actions = session._actions()
    for step in STEP_ORDER[:args.steps]:
        actions[step]()

    if args.save:
        from matplotlib.figure import Figure

        figure = Figure(figsize=(10.24, 7.68))
        axes = figure.add_subplot(projection="3d")
        render(session.scene, axes)
        figure.savefig(args.save, facecolor=figure.get_facecolor())
        return 0

    import matplotlib.pyplot as pyplot

    viewer = _Viewer(session, pyplot)
    pyplot.show()
    return 0 if viewer else 1