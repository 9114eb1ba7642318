"""Orbit camera: perspective projection, rotation by dragging, zoom by wheel."""

from __future__ import annotations

import math
from typing import Sequence, Tuple

import numpy as np

FIELD_OF_VIEW = 45.0
NEAR_PLANE = 0.1
FAR_PLANE = 100.0
VIEW_DISTANCE = 5.0
DRAG_DEGREES_PER_PIXEL = 0.5
ZOOM_IN = 1.1
ZOOM_OUT = 0.9


def _quaternion(axis: Sequence[float], angle_degrees: float) -> np.ndarray:
    vector = np.asarray(axis, dtype=float)
    vector = vector / np.linalg.norm(vector)
    half = math.radians(angle_degrees) / 2.0
    return np.concatenate(([math.cos(half)], math.sin(half) * vector))


def _quaternion_product(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    aw, ax, ay, az = a
    bw, bx, by, bz = b
    return np.array([
        aw * bw - ax * bx - ay * by - az * bz,
        aw * bx + ax * bw + ay * bz - az * by,
        aw * by - ax * bz + ay * bw + az * bx,
        aw * bz + ax * by - ay * bx + az * bw,
    ])


def _rotation_matrix(q: np.ndarray) -> np.ndarray:
    w, x, y, z = q
    matrix = np.identity(4)
    matrix[:3, :3] = [
        [1 - 2 * (y * y + z * z), 2 * (x * y - z * w), 2 * (x * z + y * w)],
        [2 * (x * y + z * w), 1 - 2 * (x * x + z * z), 2 * (y * z - x * w)],
        [2 * (x * z - y * w), 2 * (y * z + x * w), 1 - 2 * (x * x + y * y)],
    ]
    return matrix


def _perspective(fov_degrees: float, aspect: float, near: float, far: float) -> np.ndarray:
    half = math.radians(fov_degrees) / 2.0
    cotangent = math.cos(half) / math.sin(half)
    depth = far - near
    matrix = np.zeros((4, 4))
    matrix[0, 0] = cotangent / aspect
    matrix[1, 1] = cotangent
    matrix[2, 2] = -(near + far) / depth
    matrix[2, 3] = -(2.0 * near * far) / depth
    matrix[3, 2] = -1.0
    return matrix


class Camera:
    """Viewing transform for a scene seen from a fixed distance."""

    def __init__(self, width: int = 0, height: int = 0) -> None:
        self.width = 0
        self.height = 0
        self.projection = np.identity(4)
        self.view = np.identity(4)
        self.view[2, 3] = -VIEW_DISTANCE
        self.zoom = 1.0
        self.rotation = np.array([1.0, 0.0, 0.0, 0.0])
        self._last_pos = (0.0, 0.0)
        if width or height:
            self.resize(width, height)

    def resize(self, width: int, height: int) -> None:
        """Set the viewport size and rebuild the perspective projection."""
        self.width = width
        self.height = height
        self.projection = np.identity(4)
        aspect = width / (height if height else 1)
        if aspect != 0:
            self.projection = _perspective(FIELD_OF_VIEW, aspect, NEAR_PLANE, FAR_PLANE)

    def model_view(self) -> np.ndarray:
        """View matrix times the rotated and zoomed model matrix."""
        model = _rotation_matrix(self.rotation) @ np.diag([self.zoom, self.zoom, self.zoom, 1.0])
        return self.view @ model

    def mvp(self) -> np.ndarray:
        """Full model-view-projection matrix."""
        return self.projection @ self.model_view()

    def project(self, point: Sequence[float]) -> Tuple[int, int]:
        """Map a world point to window pixels; (-1, -1) when it cannot be projected."""
        clip = self.mvp() @ np.array([point[0], point[1], point[2], 1.0])
        w = clip[3]
        if w == 0.0:
            return (-1, -1)
        ndc = clip[:3] / w
        win_x = (ndc[0] * 0.5 + 0.5) * self.width
        win_y = (1.0 - (ndc[1] * 0.5 + 0.5)) * self.height
        return (int(win_x), int(win_y))

    def press(self, x: float, y: float) -> None:
        """Remember where a mouse button went down."""
        self._last_pos = (float(x), float(y))

    def drag(self, x: float, y: float, left_button: bool) -> bool:
        """Follow the mouse; rotate while the left button is held. Returns True if rotated."""
        dx = x - self._last_pos[0]
        dy = y - self._last_pos[1]
        rotated = False
        if left_button:
            about_y = _quaternion((0.0, 1.0, 0.0), DRAG_DEGREES_PER_PIXEL * dx)
            about_x = _quaternion((1.0, 0.0, 0.0), DRAG_DEGREES_PER_PIXEL * dy)
            self.rotation = _quaternion_product(
                _quaternion_product(about_y, about_x), self.rotation
            )
            rotated = True
        self._last_pos = (float(x), float(y))
        return rotated

    def wheel(self, delta: float) -> None:
        """Zoom in for a positive wheel delta, out otherwise."""
        self.zoom *= ZOOM_IN if delta > 0 else ZOOM_OUT