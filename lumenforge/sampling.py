"""
Random sources for lens and scatter sampling.

Every sampler in the renderer takes a ``numpy.random.Generator``. A generator
is never shared between threads: callers either pass their own (typically one
per pixel from :func:`pixel_rng`) or fall back to :func:`thread_rng`, which
hands out one lazily-created generator per thread.
"""

from __future__ import annotations
import threading
from typing import Optional

import numpy as np

_local = threading.local()


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create an independent generator, seeded from OS entropy when seed is None."""
    return np.random.default_rng(seed)


def pixel_rng(seed: int, x: int, y: int) -> np.random.Generator:
    """Create a reproducible generator for one pixel.

    The stream depends only on (seed, x, y), so a pixel renders identically
    no matter which worker or in which order it is processed.
    """
    return np.random.default_rng(np.random.SeedSequence([seed, x, y]))


def thread_rng() -> np.random.Generator:
    """Return the calling thread's private generator."""
    rng = getattr(_local, 'rng', None)
    if rng is None:
        rng = make_rng()
        _local.rng = rng
    return rng


def random_double(rng: np.random.Generator) -> float:
    """Uniform scalar in [0, 1)."""
    return float(rng.random())
