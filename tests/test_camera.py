"""Tests for Camera class."""

import pytest
import math
import numpy as np
from lumenforge.vec3 import Vec3, Point3
from lumenforge.camera import Camera


def make_camera(**overrides):
    params = dict(
        look_from=Point3(0, 0, 0),
        look_at=Point3(0, 0, -1),
        vup=Vec3(0, 1, 0),
        vfov=90,
        aspect_ratio=1.0,
        aperture=0.0,
        focus_dist=1.0,
    )
    params.update(overrides)
    return Camera(**params)


class TestCameraCreation:
    """Test Camera construction."""

    def test_reference_configuration(self):
        cam = make_camera()

        assert cam.w == Vec3(0, 0, 1)
        assert cam.u == Vec3(1, 0, 0)
        assert cam.v == Vec3(0, 1, 0)
        assert cam.viewport_height == pytest.approx(2.0)
        assert cam.viewport_width == pytest.approx(2.0)
        assert cam.horizontal == Vec3(2, 0, 0)
        assert cam.vertical == Vec3(0, 2, 0)
        assert cam.lower_left_corner == Point3(-1, -1, -1)
        assert cam.lens_radius == 0.0

    def test_aspect_ratio_widens_viewport(self):
        cam = make_camera(aspect_ratio=16 / 9)
        assert cam.viewport_width == pytest.approx(cam.viewport_height * 16 / 9)

    def test_extent_scales_with_focus_distance(self):
        cam = make_camera(focus_dist=10.0)
        assert cam.horizontal.length() == pytest.approx(20.0)
        assert cam.vertical.length() == pytest.approx(20.0)
        assert cam.lower_left_corner == Point3(-10, -10, -10)

    def test_lens_radius_is_half_aperture(self):
        assert make_camera(aperture=0.5).lens_radius == 0.25

    @pytest.mark.parametrize("look_from, look_at, vup", [
        (Point3(0, 0, 0), Point3(0, 0, -1), Vec3(0, 1, 0)),
        (Point3(13, 2, 3), Point3(0, 0, 0), Vec3(0, 1, 0)),
        (Point3(-2, 2, 1), Point3(0, 0, -1), Vec3(0, 1, 0)),
        (Point3(0, 10, 0), Point3(0, 0, 0), Vec3(0, 0, -1)),
        (Point3(1, 2, 3), Point3(-4, 0.5, 7), Vec3(0.3, 1, -0.2)),
    ])
    def test_basis_is_orthonormal(self, look_from, look_at, vup):
        cam = make_camera(look_from=look_from, look_at=look_at, vup=vup, vfov=40)

        for axis in (cam.u, cam.v, cam.w):
            assert abs(axis.length() - 1.0) < 1e-9
        assert abs(cam.u.dot(cam.v)) < 1e-9
        assert abs(cam.v.dot(cam.w)) < 1e-9
        assert abs(cam.u.dot(cam.w)) < 1e-9

    def test_w_points_away_from_view_direction(self):
        cam = make_camera(look_from=Point3(5, 5, 5), look_at=Point3(0, 0, 0))
        view = (Point3(0, 0, 0) - Point3(5, 5, 5)).normalize()
        assert cam.w.dot(view) == pytest.approx(-1.0)


class TestPinholeRays:
    """Rays from a zero-aperture camera."""

    def test_center_ray(self):
        ray = make_camera().get_ray(0.5, 0.5)

        assert ray.origin == Point3(0, 0, 0)
        assert ray.direction.x == pytest.approx(0.0, abs=1e-12)
        assert ray.direction.y == pytest.approx(0.0, abs=1e-12)
        assert ray.direction.z == pytest.approx(-1.0)
        assert ray.time == 0.0

    def test_direction_is_not_normalized(self):
        ray = make_camera().get_ray(1, 1)
        assert ray.direction == Vec3(1, 1, -1)
        assert ray.direction.length() == pytest.approx(math.sqrt(3))

    def test_matches_closed_form(self):
        cam = make_camera(look_from=Point3(1, 2, 3), look_at=Point3(0, 0, 0), vfov=35,
                          aspect_ratio=1.5, focus_dist=4.0)
        s, t = 0.2, 0.9
        ray = cam.get_ray(s, t)
        expected = cam.lower_left_corner + cam.horizontal * s + cam.vertical * t - cam.origin
        assert ray.origin == cam.origin
        assert ray.direction == expected
        assert np.array_equal(ray.origin.to_array(), cam.origin.to_array())
        assert np.array_equal(ray.direction.to_array(), expected.to_array())

    def test_consumes_no_randomness(self, no_entropy):
        cam = make_camera(focus_dist=3.0)
        first = cam.get_ray(0.3, 0.7, no_entropy)
        second = cam.get_ray(0.3, 0.7, no_entropy)
        assert first.origin == second.origin
        assert first.direction == second.direction
        assert np.array_equal(first.origin.to_array(), second.origin.to_array())
        assert np.array_equal(first.direction.to_array(), second.direction.to_array())

    def test_coordinates_outside_unit_range_extrapolate(self):
        cam = make_camera()
        ray = cam.get_ray(1.5, -0.5)
        assert ray.direction == Vec3(2, -2, -1)

    def test_corner_rays(self):
        cam = make_camera()
        bl = cam.get_ray(0, 0)
        tr = cam.get_ray(1, 1)
        assert bl.direction.x < 0 and bl.direction.y < 0
        assert tr.direction.x > 0 and tr.direction.y > 0


class TestDepthOfField:
    """Thin-lens sampling."""

    def test_origins_vary_within_lens(self, rng):
        cam = make_camera(look_at=Point3(0, 0, -10), aperture=2.0, focus_dist=10.0)

        origins = [cam.get_ray(0.5, 0.5, rng).origin for _ in range(200)]

        xs = [o.x for o in origins]
        assert max(xs) - min(xs) > 0.1
        for o in origins:
            offset = o - cam.origin
            assert offset.length() < cam.lens_radius
            # Lens samples stay in the u-v plane
            assert abs(offset.dot(cam.w)) < 1e-12

    def test_rays_converge_on_focus_plane(self, rng):
        cam = make_camera(look_from=Point3(13, 2, 3), look_at=Point3(0, 0, 0), vfov=20,
                          aspect_ratio=16 / 9, aperture=0.5, focus_dist=10.0)
        s, t = 0.3, 0.6
        target = cam.focus_point(s, t)

        for _ in range(50):
            ray = cam.get_ray(s, t, rng)
            # Every ray travels focus_dist along -w to reach the focus plane
            assert ray.direction.dot(-cam.w) == pytest.approx(10.0)
            hit = ray.at(1.0)
            assert (hit - target).length() < 1e-9

    def test_uses_thread_generator_by_default(self):
        cam = make_camera(aperture=1.0)
        origins = {tuple(cam.get_ray(0.5, 0.5).origin) for _ in range(10)}
        assert len(origins) > 1


class TestFieldOfView:
    """Test Camera field of view."""

    def test_narrow_fov(self):
        ray_narrow = make_camera(vfov=20).get_ray(1, 1)
        ray_wide = make_camera(vfov=90).get_ray(1, 1)

        center = Vec3(0, 0, -1)
        assert (ray_narrow.direction.normalize().dot(center)
                > ray_wide.direction.normalize().dot(center))


class TestCameraPositioning:
    """Test various camera positions."""

    def test_looking_down(self):
        cam = make_camera(look_from=Point3(0, 10, 0), look_at=Point3(0, 0, 0), vup=Vec3(0, 0, -1))
        assert cam.get_ray(0.5, 0.5).direction.y < 0

    def test_angled_camera(self):
        cam = make_camera(look_from=Point3(5, 5, 5), look_at=Point3(0, 0, 0), vfov=60)
        ray = cam.get_ray(0.5, 0.5)
        target = (Point3(0, 0, 0) - cam.origin).normalize()
        assert ray.direction.normalize().dot(target) > 0.999
