"""
Surface scattering models.

Implements the closed set of materials the path tracer knows about:
- Lambertian diffuse
- Metal (specular reflection with fuzz)
- Dielectric (glass, water - Fresnel-weighted reflection/refraction)

A scatter call either returns a ScatterResult or None when the light
path is absorbed.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

import math
import numpy as np

from .vec3 import Vec3, Color
from .ray import Ray
from .sampling import thread_rng, random_double

if TYPE_CHECKING:
    from .shapes import HitRecord


@dataclass
class ScatterResult:
    """Result of a material scatter operation."""
    scattered_ray: Ray
    attenuation: Color
    is_specular: bool = False


def reflectance(cosine: float, ref_idx: float) -> float:
    """Schlick's approximation to the Fresnel reflectance.

    Args:
        cosine: Cosine of the angle between the incident ray and the normal
        ref_idx: Ratio of refractive indices across the interface

    Returns:
        Fraction of light reflected, r0 at normal incidence rising to 1
        at grazing angles.
    """
    r0 = (1 - ref_idx) / (1 + ref_idx)
    r0 = r0 * r0
    return r0 + (1 - r0) * pow(1 - cosine, 5)


class Material(ABC):
    """Abstract base class for materials.

    Instances are immutable and may be shared by every render worker.
    """

    @abstractmethod
    def scatter(
        self,
        ray_in: Ray,
        hit: HitRecord,
        rng: Optional[np.random.Generator] = None
    ) -> Optional[ScatterResult]:
        """Compute the scattered ray and attenuation.

        Args:
            ray_in: The incoming ray
            hit: Intersection data (point, normal against the ray, front_face)
            rng: Random source; defaults to the calling thread's generator

        Returns:
            ScatterResult if the ray scatters, None if absorbed
        """


class Lambertian(Material):
    """Diffuse material with Lambertian (ideal matte) scattering."""

    def __init__(self, albedo: Color):
        """Create a Lambertian material.

        Args:
            albedo: The base color (RGB, each component 0-1)
        """
        self.albedo = albedo

    def scatter(self, ray_in, hit, rng=None):
        if rng is None:
            rng = thread_rng()

        # normal + unit vector, not an exact cosine-weighted sample
        scatter_direction = hit.normal + Vec3.random_unit_vector(rng)

        # Catch degenerate scatter direction
        if scatter_direction.near_zero():
            scatter_direction = hit.normal

        return ScatterResult(
            scattered_ray=Ray(hit.point, scatter_direction, ray_in.time),
            attenuation=self.albedo,
            is_specular=False
        )

    def __repr__(self) -> str:
        return f"Lambertian(albedo={self.albedo})"


class Metal(Material):
    """Metallic material with specular reflection."""

    def __init__(self, albedo: Color, fuzz: float = 0.0):
        """Create a metal material.

        Args:
            albedo: The reflection color
            fuzz: Surface roughness, clamped to [0, 1] (0 = mirror)
        """
        self.albedo = albedo
        self.fuzz = max(0.0, min(fuzz, 1.0))

    def scatter(self, ray_in, hit, rng=None):
        direction = ray_in.direction.reflect(hit.normal)

        if self.fuzz > 0:
            if rng is None:
                rng = thread_rng()
            direction = direction + Vec3.random_in_unit_sphere(rng) * self.fuzz

        # Fuzz pushed the ray below the surface
        if direction.dot(hit.normal) <= 0:
            return None

        return ScatterResult(
            scattered_ray=Ray(hit.point, direction, ray_in.time),
            attenuation=self.albedo,
            is_specular=True
        )

    def __repr__(self) -> str:
        return f"Metal(albedo={self.albedo}, fuzz={self.fuzz})"


class Dielectric(Material):
    """Clear dielectric (glass-like) material.

    Assumes every interface separates the material from vacuum; nested
    dielectric volumes are not tracked.
    """

    def __init__(self, ir: float = 1.5):
        """Create a dielectric material.

        Args:
            ir: Index of refraction (1.0 = vacuum, 1.5 = glass, 2.4 = diamond)
        """
        self.ir = ir

    def refraction_ratio(self, front_face: bool) -> float:
        return 1.0 / self.ir if front_face else self.ir

    def scatter(self, ray_in, hit, rng=None):
        refraction_ratio = self.refraction_ratio(hit.front_face)

        unit_direction = ray_in.direction.normalize()
        cos_theta = min(-hit.normal.dot(unit_direction), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))

        cannot_refract = refraction_ratio * sin_theta > 1.0

        if cannot_refract:
            direction = unit_direction.reflect(hit.normal)
        else:
            if rng is None:
                rng = thread_rng()
            if reflectance(cos_theta, refraction_ratio) > random_double(rng):
                direction = unit_direction.reflect(hit.normal)
            else:
                direction = unit_direction.refract(hit.normal, refraction_ratio)

        return ScatterResult(
            scattered_ray=Ray(hit.point, direction, ray_in.time),
            attenuation=Color(1.0, 1.0, 1.0),
            is_specular=True
        )

    def __repr__(self) -> str:
        return f"Dielectric(ir={self.ir})"
