# -*- coding: utf-8 -*-
"""
NDVI Gradient — breakpoint table and linear color interpolation.

A ``GradientTable`` maps scalar NDVI values in [-1, 1] to RGB colors by
linear interpolation between sorted breakpoints.  Tables are immutable
and validated once at construction, so lookups never fail.

Dependencies
------------
numpy

License
-------
MIT License
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

# Standard library
from bisect import bisect_right
from dataclasses import dataclass
from typing import Iterable, Tuple

# Third-party
import numpy as np

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class Breakpoint:
    """A single gradient anchor.

    Attributes
    ----------
    value : float
        NDVI value at which *color* applies exactly.
    color : Tuple[int, int, int]
        8-bit RGB color.
    """

    value: float
    color: RGB


class GradientTable:
    """Immutable sorted breakpoint table covering [-1, 1].

    Parameters
    ----------
    breakpoints : Iterable[Breakpoint or Tuple[float, Tuple[int, int, int]]]
        At least two anchors, strictly increasing by value, with the
        first pinned at -1.0 and the last at 1.0.

    Raises
    ------
    ValueError
        If the table is too short, unsorted, unpinned, or holds a
        channel outside [0, 255].
    """

    __slots__ = ("_points", "_values", "_colors")

    def __init__(self, breakpoints: Iterable) -> None:
        points = tuple(
            bp if isinstance(bp, Breakpoint)
            else Breakpoint(float(bp[0]), tuple(int(c) for c in bp[1]))
            for bp in breakpoints
        )
        if len(points) < 2:
            raise ValueError(
                f"gradient needs at least 2 breakpoints, got {len(points)}"
            )
        if points[0].value != -1.0 or points[-1].value != 1.0:
            raise ValueError(
                "gradient must start at -1.0 and end at 1.0, got "
                f"{points[0].value} .. {points[-1].value}"
            )
        for prev, cur in zip(points, points[1:]):
            if cur.value <= prev.value:
                raise ValueError(
                    "gradient breakpoints must be strictly increasing, "
                    f"got {prev.value} then {cur.value}"
                )
        for bp in points:
            if len(bp.color) != 3 or any(not 0 <= c <= 255 for c in bp.color):
                raise ValueError(f"invalid RGB color {bp.color!r}")

        self._points = points
        self._values = np.array([bp.value for bp in points], dtype=np.float64)
        self._colors = np.array([bp.color for bp in points], dtype=np.float64)

    @property
    def breakpoints(self) -> Tuple[Breakpoint, ...]:
        """Return the breakpoints in ascending order."""
        return self._points

    def __len__(self) -> int:
        return len(self._points)

    def __repr__(self) -> str:
        return f"GradientTable({list(self._points)!r})"

    def color_for(self, value: float) -> RGB:
        """Interpolate the color for a single NDVI value.

        Parameters
        ----------
        value : float
            Any finite value.  Values outside the table range clamp to
            the end colors.

        Returns
        -------
        Tuple[int, int, int]
            Channels truncated (not rounded) to 8 bits.
        """
        points = self._points
        if value <= points[0].value:
            return points[0].color
        if value >= points[-1].value:
            return points[-1].color

        i = bisect_right(self._values, value) - 1
        lo, hi = points[i], points[i + 1]
        t = (value - lo.value) / (hi.value - lo.value)
        return tuple(
            int(a + t * (b - a)) for a, b in zip(lo.color, hi.color)
        )

    def colors_for(self, values: np.ndarray) -> np.ndarray:
        """Vectorized ``color_for`` over an array of NDVI values.

        Parameters
        ----------
        values : np.ndarray
            1-D float array.

        Returns
        -------
        np.ndarray
            ``(N, 3)`` uint8 array, elementwise equal to ``color_for``.
        """
        values = np.asarray(values, dtype=np.float64)
        last = len(self._points) - 1

        # Clamping to the interior keeps i in [0, last - 1] and t in [0, 1].
        clipped = np.clip(values, self._values[0], self._values[-1])
        i = np.searchsorted(self._values, clipped, side="right") - 1
        np.clip(i, 0, last - 1, out=i)

        lo_v = self._values[i]
        t = (clipped - lo_v) / (self._values[i + 1] - lo_v)
        lo_c = self._colors[i]
        hi_c = self._colors[i + 1]
        rgb = lo_c + t[:, None] * (hi_c - lo_c)

        rgb[values <= self._values[0]] = self._colors[0]
        rgb[values >= self._values[-1]] = self._colors[-1]
        return rgb.astype(np.uint8)


#: Water blue through bare-soil red to dense-vegetation green.
DEFAULT_GRADIENT = GradientTable([
    Breakpoint(-1.0, (0, 0, 128)),
    Breakpoint(-0.2, (65, 105, 225)),
    Breakpoint(0.0, (255, 0, 0)),
    Breakpoint(0.5, (255, 255, 0)),
    Breakpoint(1.0, (0, 128, 0)),
])
