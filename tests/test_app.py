import matplotlib

matplotlib.use("Agg")

import pytest
from matplotlib.figure import Figure

from hexrecon.app import (
    Session,
    Step,
    StepOrderError,
    default_points,
    main,
    render,
)
from hexrecon.geometry import MeshPoint
from hexrecon.scene import Layer, Scene


def _cube():
    corners = [
        (0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0),
        (0, 0, 1), (1, 0, 1), (1, 1, 1), (0, 1, 1),
    ]
    return [MeshPoint(c, 3) for c in corners]


def _axes():
    return Figure().add_subplot(projection="3d")


def test_default_points_layout():
    points = default_points()
    assert len(points) == 16
    assert points[0].pos == (-0.2, 0.0, 0.0)
    assert [p.required_neighbors for p in points] == [3] * 4 + [4] * 8 + [3] * 4
    assert [p.pos[2] for p in points[12:]] == [3.0] * 4


def test_new_session_shows_points_only():
    session = Session()
    assert session.available_steps() == (Step.BUILD_GRAPH,)
    assert session.scene.points == default_points()
    assert session.scene.visible_layers() == (Layer.AXES, Layer.POINTS)
    assert session.graph == {}


def test_steps_must_run_in_order():
    session = Session()
    with pytest.raises(StepOrderError):
        session.find_faces()
    with pytest.raises(StepOrderError):
        session.build_hexahedra()
    session.build_graph()
    assert session.available_steps() == (Step.FIND_FACES,)
    with pytest.raises(StepOrderError):
        session.build_graph()
    session.find_faces()
    assert session.available_steps() == (Step.BUILD_HEXAHEDRA,)
    session.build_hexahedra()
    assert session.available_steps() == ()
    with pytest.raises(StepOrderError):
        session.build_hexahedra()


def test_cube_reconstructs_single_hexahedron():
    session = Session(_cube())
    session.build_graph()
    faces = session.find_faces()
    hexahedra = session.build_hexahedra()
    assert len(faces) == 6
    assert len(hexahedra) == 1
    assert sorted(hexahedra[0]) == list(range(8))
    assert session.scene.hexahedra == [tuple(hexahedra[0])]


def test_default_run_invariants():
    session = Session()
    graph = session.build_graph()
    for index, point in enumerate(session.points):
        assert len(graph[index]) == point.required_neighbors
        assert index not in graph[index]
    faces = session.find_faces()
    assert all(len(set(face)) == 4 for face in faces)
    hexahedra = session.build_hexahedra()
    for hexahedron in hexahedra:
        assert len(set(hexahedron)) == 8
        assert all(0 <= i < 16 for i in hexahedron)
    assert session.scene.faces == [tuple(f) for f in faces]
    assert session.scene.graph == graph


def test_reset_clears_results():
    session = Session(_cube())
    session.build_graph()
    session.find_faces()
    session.build_hexahedra()
    session.reset()
    assert session.graph == {}
    assert session.faces == []
    assert session.hexahedra == []
    assert session.available_steps() == (Step.BUILD_GRAPH,)
    assert session.scene.visible_layers() == (Layer.AXES, Layer.POINTS)


def test_session_uses_given_scene_and_notifies():
    calls = []
    scene = Scene(on_change=lambda: calls.append(1))
    session = Session(_cube(), scene=scene)
    before = len(calls)
    session.build_graph()
    assert session.scene is scene
    assert len(calls) == before + 1


def test_render_points_only():
    axes = _axes()
    render(Session().scene, axes)
    assert len(axes.lines) == 3
    assert [t.get_text() for t in axes.texts] == ["X", "Y", "Z"]
    assert len(axes.collections) == 1


def test_render_all_layers():
    session = Session(_cube())
    session.build_graph()
    session.find_faces()
    session.build_hexahedra()
    axes = _axes()
    render(session.scene, axes)
    assert len(axes.collections) == 4
    render(session.scene, axes)
    assert len(axes.collections) == 4
    assert len(axes.lines) == 3


def test_render_empty_scene_draws_axes_only():
    axes = _axes()
    render(Scene(), axes)
    assert len(axes.lines) == 3
    assert len(axes.collections) == 0


def test_main_saves_png(tmp_path):
    target = tmp_path / "view.png"
    assert main(["--steps", "3", "--save", str(target)]) == 0
    assert target.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_main_rejects_too_many_steps(tmp_path):
    with pytest.raises(SystemExit):
        main(["--steps", "5", "--save", str(tmp_path / "x.png")])