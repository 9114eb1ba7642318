import numpy as np
import pytest

from hexrecon.camera import Camera


def test_projection_is_identity_before_resize():
    camera = Camera()
    assert np.allclose(camera.mvp(), camera.model_view())


def test_zero_size_keeps_identity_projection():
    camera = Camera()
    camera.resize(0, 0)
    assert np.allclose(camera.projection, np.identity(4))


def test_origin_projects_to_viewport_centre():
    camera = Camera(800, 600)
    assert camera.project((0.0, 0.0, 0.0)) == (400, 300)


def test_point_in_eye_plane_is_not_projected():
    camera = Camera(800, 600)
    assert camera.project((0.0, 0.0, 5.0)) == (-1, -1)


def test_positive_x_projects_right_of_centre():
    camera = Camera(800, 600)
    cx, cy = camera.project((0.0, 0.0, 0.0))
    x, y = camera.project((1.0, 0.0, 0.0))
    assert x > cx
    assert y == cy


def test_positive_y_projects_above_centre():
    camera = Camera(800, 600)
    cx, cy = camera.project((0.0, 0.0, 0.0))
    x, y = camera.project((0.0, 1.0, 0.0))
    assert y < cy
    assert x == cx


def test_wheel_zoom_factors():
    camera = Camera()
    camera.wheel(120)
    assert camera.zoom == pytest.approx(1.1)
    camera.wheel(-120)
    assert camera.zoom == pytest.approx(1.1 * 0.9)
    camera.wheel(0)
    assert camera.zoom == pytest.approx(1.1 * 0.9 * 0.9)


def test_zoom_scales_model_view():
    camera = Camera()
    camera.wheel(1)
    point = camera.model_view() @ np.array([1.0, 0.0, 0.0, 1.0])
    assert point[0] == pytest.approx(1.1)


def test_drag_without_left_button_does_not_rotate():
    camera = Camera()
    camera.press(0, 0)
    assert camera.drag(50, 30, left_button=False) is False
    assert np.allclose(camera.rotation, [1.0, 0.0, 0.0, 0.0])


def test_drag_tracks_last_position():
    camera = Camera()
    camera.press(0, 0)
    camera.drag(100, 0, left_button=False)
    camera.drag(100, 0, left_button=True)
    assert np.allclose(camera.rotation, [1.0, 0.0, 0.0, 0.0])


def test_horizontal_drag_rotates_about_y():
    camera = Camera()
    camera.press(0, 0)
    assert camera.drag(180, 0, left_button=True) is True
    point = camera.model_view() @ np.array([1.0, 0.0, 0.0, 1.0])
    assert point[0] == pytest.approx(0.0, abs=1e-9)
    assert point[1] == pytest.approx(0.0, abs=1e-9)
    assert point[2] == pytest.approx(-6.0)


def test_rotation_stays_orthonormal():
    camera = Camera()
    camera.press(0, 0)
    camera.drag(37, 11, left_button=True)
    camera.drag(-20, 70, left_button=True)
    rotation = camera.model_view()[:3, :3]
    assert np.allclose(rotation @ rotation.T, np.identity(3))
    assert np.linalg.norm(camera.rotation) == pytest.approx(1.0)