"""
Renderer module - the recursive path-tracing loop.

Implements:
- Depth-limited path tracing with attenuation products
- Per-pixel reproducible random streams
- LDR conversion and image output
"""

from __future__ import annotations
import logging
import time
from dataclasses import dataclass
from typing import Optional, Callable
import numpy as np

from .vec3 import Color
from .ray import Ray
from .camera import Camera
from .shapes import Hittable
from .sampling import pixel_rng

logger = logging.getLogger(__name__)


@dataclass
class RenderSettings:
    """Configuration for the renderer."""
    width: int = 400
    height: int = 225
    samples_per_pixel: int = 100
    max_depth: int = 50
    seed: int = 0
    gamma: float = 2.0
    use_sky_gradient: bool = True
    background_color: Color = None

    def __post_init__(self):
        if self.background_color is None:
            self.background_color = Color(0.0, 0.0, 0.0)

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


class Renderer:
    """Single-threaded path tracing renderer."""

    def __init__(self, settings: RenderSettings = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
        """
        self.settings = settings if settings else RenderSettings()
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def render(self, scene: Hittable, camera: Camera) -> np.ndarray:
        """Render the scene and return the image as a numpy array.

        Row 0 of the returned image is the top scanline.

        Args:
            scene: The scene to render (any Hittable)
            camera: The camera to render from

        Returns:
            HDR image as numpy array of shape (height, width, 3)
        """
        width = self.settings.width
        height = self.settings.height
        samples = self.settings.samples_per_pixel
        max_depth = self.settings.max_depth
        seed = self.settings.seed

        logger.info("Rendering %dx%d, %d spp, max depth %d, seed %d",
                    width, height, samples, max_depth, seed)
        start = time.perf_counter()

        image = np.zeros((height, width, 3), dtype=np.float64)
        # A single row or column still maps to s, t = 0
        s_scale = 1.0 / max(width - 1, 1)
        t_scale = 1.0 / max(height - 1, 1)

        for row in range(height):
            y = height - 1 - row
            for x in range(width):
                rng = pixel_rng(seed, x, y)
                pixel_color = Color(0, 0, 0)

                for _ in range(samples):
                    s = (x + rng.random()) * s_scale
                    t = (y + rng.random()) * t_scale
                    ray = camera.get_ray(s, t, rng)
                    pixel_color = pixel_color + self.ray_color(ray, scene, max_depth, rng)

                image[row, x] = pixel_color.to_array() / samples

            if self._progress_callback:
                self._progress_callback((row + 1) / height)

        logger.info("Render finished in %.2fs", time.perf_counter() - start)
        return image

    def ray_color(self, ray: Ray, scene: Hittable, depth: int, rng: np.random.Generator) -> Color:
        """Compute the radiance carried back along a ray.

        Args:
            ray: The ray to trace
            scene: The scene to trace against
            depth: Remaining bounces; the path contributes nothing at 0
            rng: Random source for this pixel

        Returns:
            The computed color for this ray
        """
        if depth <= 0:
            return Color(0, 0, 0)

        # t_min > 0 skips self-intersection at the previous hit point
        hit_record = scene.hit(ray, 0.001, float('inf'))

        if hit_record is None:
            if self.settings.use_sky_gradient:
                return self._sky_color(ray)
            return self.settings.background_color

        # Surfaces without a material absorb like any other terminated path
        if hit_record.material is None:
            return Color(0, 0, 0)

        scatter_result = hit_record.material.scatter(ray, hit_record, rng)
        if scatter_result is None:
            return Color(0, 0, 0)

        return scatter_result.attenuation * self.ray_color(
            scatter_result.scattered_ray, scene, depth - 1, rng
        )

    def _sky_color(self, ray: Ray) -> Color:
        """Blend white to sky blue by the ray's vertical direction."""
        unit_direction = ray.direction.normalize()
        t = 0.5 * (unit_direction.y + 1.0)
        return Color(1.0, 1.0, 1.0) * (1.0 - t) + Color(0.5, 0.7, 1.0) * t

    def to_ldr(self, hdr_image: np.ndarray) -> np.ndarray:
        """Convert HDR image to 8-bit LDR with gamma correction.

        Args:
            hdr_image: HDR image array (float64)

        Returns:
            LDR image as uint8 array
        """
        gamma = self.settings.gamma
        corrected = np.power(np.clip(hdr_image, 0, None), 1.0 / gamma)
        return np.clip(corrected * 256, 0, 255).astype(np.uint8)

    def save_image(self, image: np.ndarray, filename: str) -> None:
        """Save image to file.

        Args:
            image: Image array (HDR float or 8-bit)
            filename: Output filename (extension determines format)
        """
        from PIL import Image as PILImage

        if image.dtype in (np.float64, np.float32):
            image = self.to_ldr(image)

        PILImage.fromarray(image).save(filename)
        logger.info("Saved %s", filename)
