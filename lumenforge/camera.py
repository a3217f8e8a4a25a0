"""
Camera module for generating primary rays.

Models a thin lens:
- Perspective projection from a vertical field of view
- Depth of field (defocus blur) from a finite aperture
- Arbitrary positioning via look-at
"""

from __future__ import annotations
import math
from typing import Optional

import numpy as np

from .vec3 import Vec3, Point3
from .ray import Ray
from .sampling import thread_rng


class Camera:
    """A thin-lens perspective camera.

    Read-only after construction, so one instance can be shared by any
    number of render workers.

    Precondition: ``vup`` must not be parallel to the view direction and
    ``look_from`` must differ from ``look_at``. A degenerate basis is not
    detected here.
    """

    def __init__(
        self,
        look_from: Point3,
        look_at: Point3,
        vup: Vec3 = Vec3(0, 1, 0),
        vfov: float = 90.0,
        aspect_ratio: float = 16.0 / 9.0,
        aperture: float = 0.0,
        focus_dist: float = 1.0,
    ):
        """Create a camera.

        Args:
            look_from: Camera position (lens center) in world space
            look_at: Point the camera is looking at
            vup: World up vector (usually (0, 1, 0))
            vfov: Vertical field of view in degrees
            aspect_ratio: Width / Height ratio
            aperture: Lens diameter (0 = pinhole)
            focus_dist: Distance from the lens to the plane in perfect focus
        """
        theta = math.radians(vfov)
        h = math.tan(theta / 2)
        self.viewport_height = 2.0 * h
        self.viewport_width = aspect_ratio * self.viewport_height

        # Orthonormal camera basis
        self.w = (look_from - look_at).normalize()  # Points backward from camera
        self.u = vup.cross(self.w).normalize()       # Points right
        self.v = self.w.cross(self.u)                # Points up

        self.origin = look_from
        self.focus_dist = focus_dist
        self.horizontal = self.u * (focus_dist * self.viewport_width)
        self.vertical = self.v * (focus_dist * self.viewport_height)
        self.lower_left_corner = (
            self.origin
            - self.horizontal / 2
            - self.vertical / 2
            - self.w * focus_dist
        )

        self.lens_radius = aperture / 2

    def focus_point(self, s: float, t: float) -> Point3:
        """World point on the focus plane for screen coordinates (s, t)."""
        return self.lower_left_corner + self.horizontal * s + self.vertical * t

    def get_ray(self, s: float, t: float, rng: Optional[np.random.Generator] = None) -> Ray:
        """Generate a ray for the given coordinates on the image plane.

        Values outside [0, 1] extrapolate linearly across the viewport.

        Args:
            s: Horizontal coordinate (0 = left, 1 = right)
            t: Vertical coordinate (0 = bottom, 1 = top)
            rng: Random source for lens sampling; defaults to the calling
                thread's generator. Unused by a pinhole camera.

        Returns:
            A ray from a point on the lens through the focus-plane point.
            Its direction is not normalized.
        """
        if self.lens_radius > 0:
            if rng is None:
                rng = thread_rng()
            rd = Vec3.random_in_unit_disk(rng) * self.lens_radius
            offset = self.u * rd.x + self.v * rd.y
        else:
            offset = Vec3(0, 0, 0)

        direction = self.focus_point(s, t) - self.origin - offset
        return Ray(self.origin + offset, direction, 0.0)

    def __repr__(self) -> str:
        return f"Camera(origin={self.origin}, looking_at={self.focus_point(0.5, 0.5)})"
