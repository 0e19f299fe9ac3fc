"""Gaussian hill curve used as the reference line for milestones."""

from __future__ import annotations

import math
from typing import List, Optional, Sequence

import numpy as np

from .model import HillOptions, Point


class HillCurve:
    """Maps a domain position to the curve height.

    Heights follow a Gaussian bump over the normalised position ``u``::

        v = exp(-0.5 * ((u - mean) / std_dev) ** 2)
        y = bottom_y - (bottom_y - top_y) * v

    Screen coordinates grow downwards, so the peak is the *smallest* ``y``.
    Positions outside ``[domain_start, domain_end]`` are not meaningful;
    callers clamp first.
    """

    def __init__(self, options: Optional[HillOptions] = None) -> None:
        self.options = options or HillOptions()
        self.options.validate()

    @property
    def amplitude(self) -> float:
        return self.options.bottom_y - self.options.top_y

    @property
    def peak_position(self) -> float:
        opts = self.options
        return opts.domain_start + opts.mean * opts.domain_width

    def height_at(self, position: float) -> float:
        opts = self.options
        u = (position - opts.domain_start) / opts.domain_width
        exponent = -0.5 * ((u - opts.mean) / opts.std_dev) ** 2
        return opts.bottom_y - self.amplitude * math.exp(exponent)

    def heights_at(self, positions: Sequence[float]) -> np.ndarray:
        opts = self.options
        u = (np.asarray(positions, dtype=float) - opts.domain_start) / opts.domain_width
        return opts.bottom_y - self.amplitude * np.exp(-0.5 * ((u - opts.mean) / opts.std_dev) ** 2)

    def sample_path(self, n: Optional[int] = None) -> List[Point]:
        """Return ``n + 1`` evenly spaced ``(position, height)`` points."""

        count = self.options.path_samples if n is None else int(n)
        if count < 1:
            raise ValueError("sample_path requires at least one interval")
        opts = self.options
        xs = np.linspace(opts.domain_start, opts.domain_end, count + 1)
        ys = self.heights_at(xs)
        return [(float(x), float(y)) for x, y in zip(xs, ys)]


__all__ = ["HillCurve"]
