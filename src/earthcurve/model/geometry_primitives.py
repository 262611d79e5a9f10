"""
Geometric Primitives for the 2D diagram.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional, TYPE_CHECKING
import math

import numpy as np

from earthcurve.exceptions import SingularTransformError

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(frozen=True)
class Coordinate:
    """
    An immutable 2D point or vector.

    The same type is used for positions and for displacements; the
    arithmetic below does not distinguish between the two.
    """
    x: float
    y: float

    def __add__(self, other: Coordinate) -> Coordinate:
        return Coordinate(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Coordinate) -> Coordinate:
        return Coordinate(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Coordinate:
        return Coordinate(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Coordinate:
        if scalar == 0.0: raise ZeroDivisionError
        return Coordinate(self.x / scalar, self.y / scalar)

    def __neg__(self) -> Coordinate:
        return Coordinate(-self.x, -self.y)

    @property
    def squared_magnitude(self) -> float:
        return self.x * self.x + self.y * self.y

    @property
    def magnitude(self) -> float:
        return math.sqrt(self.squared_magnitude)

    @property
    def angle(self) -> float:
        """Polar angle in radians, in (-pi, pi]."""
        return math.atan2(self.y, self.x)

    def normalize(self) -> Coordinate:
        mag = self.magnitude
        if mag == 0.0: return Coordinate(0.0, 0.0)
        return self / mag

    def dot(self, other: Coordinate) -> float:
        return self.x * other.x + self.y * other.y

    def rotate(self, angle_rad: float) -> Coordinate:
        """Rotate about the origin, counter-clockwise for positive angles."""
        cos_a = math.cos(angle_rad)
        sin_a = math.sin(angle_rad)
        return Coordinate(
            cos_a * self.x - sin_a * self.y,
            sin_a * self.x + cos_a * self.y
        )

    def scale(self, amount: float) -> Coordinate:
        return Coordinate(self.x * amount, self.y * amount)

    def distance_to(self, other: Coordinate) -> float:
        return (self - other).magnitude

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y])

    def to_tuple(self) -> tuple[float, float]:
        return self.x, self.y

    @classmethod
    def from_array(cls, values: Iterable[float]) -> Coordinate:
        x, y = values
        return cls(float(x), float(y))


ORIGIN = Coordinate(0.0, 0.0)


class AffineTransform:
    """
    A 2D affine map stored as a 3x3 homogeneous matrix.

    The matrix layout follows SVG and DOMMatrix::

        | a  c  e |
        | b  d  f |
        | 0  0  1 |

    Transforms are immutable. ``t1 @ t2`` (or ``t1.multiply(t2)``) is the
    map that applies ``t2`` first and then ``t1``.
    """
    __slots__ = ("_matrix",)

    def __init__(self, matrix: Optional[npt.ArrayLike] = None) -> None:
        if matrix is None:
            m = np.identity(3)
        else:
            m = np.array(matrix, dtype=np.float64)
            if m.shape == (2, 3):
                m = np.vstack((m, [0.0, 0.0, 1.0]))
            if m.shape != (3, 3):
                raise ValueError(f"Expected a 3x3 or 2x3 matrix, got shape {m.shape}.")
        m.setflags(write=False)
        self._matrix = m

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def identity(cls) -> AffineTransform:
        return cls()

    @classmethod
    def translation(cls, dx: float, dy: float) -> AffineTransform:
        return cls([[1.0, 0.0, dx], [0.0, 1.0, dy], [0.0, 0.0, 1.0]])

    @classmethod
    def scaling(cls, factor: float) -> AffineTransform:
        """Uniform scaling about the origin."""
        return cls([[factor, 0.0, 0.0], [0.0, factor, 0.0], [0.0, 0.0, 1.0]])

    @classmethod
    def rotation(cls, angle_rad: float) -> AffineTransform:
        """Counter-clockwise rotation about the origin."""
        c = math.cos(angle_rad)
        s = math.sin(angle_rad)
        return cls([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])

    @classmethod
    def from_components(cls, a: float, b: float, c: float, d: float, e: float, f: float) -> AffineTransform:
        """Build from the six SVG ``matrix(a, b, c, d, e, f)`` components."""
        return cls([[a, c, e], [b, d, f], [0.0, 0.0, 1.0]])

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    @property
    def matrix(self) -> npt.NDArray[np.float64]:
        return self._matrix

    @property
    def a(self) -> float:
        return float(self._matrix[0, 0])

    @property
    def b(self) -> float:
        return float(self._matrix[1, 0])

    @property
    def c(self) -> float:
        return float(self._matrix[0, 1])

    @property
    def d(self) -> float:
        return float(self._matrix[1, 1])

    @property
    def e(self) -> float:
        return float(self._matrix[0, 2])

    @property
    def f(self) -> float:
        return float(self._matrix[1, 2])

    def components(self) -> tuple[float, float, float, float, float, float]:
        return self.a, self.b, self.c, self.d, self.e, self.f

    @property
    def determinant(self) -> float:
        return self.a * self.d - self.b * self.c

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------

    def multiply(self, other: AffineTransform) -> AffineTransform:
        """Post-multiply: the result applies ``other`` first, then ``self``."""
        return AffineTransform(self._matrix @ other._matrix)

    def __matmul__(self, other: AffineTransform) -> AffineTransform:
        if not isinstance(other, AffineTransform):
            return NotImplemented
        return self.multiply(other)

    def pre_multiply(self, other: AffineTransform) -> AffineTransform:
        """Pre-multiply: the result applies ``self`` first, then ``other``."""
        return AffineTransform(other._matrix @ self._matrix)

    def inverse(self) -> AffineTransform:
        det = self.determinant
        if abs(det) < 1e-300 or not math.isfinite(det):
            raise SingularTransformError(f"Cannot invert transform with determinant {det}.")
        return AffineTransform(np.linalg.inv(self._matrix))

    # ------------------------------------------------------------------
    # Application
    # ------------------------------------------------------------------

    def apply(self, coord: Coordinate) -> Coordinate:
        m = self._matrix
        return Coordinate(
            float(m[0, 0] * coord.x + m[0, 1] * coord.y + m[0, 2]),
            float(m[1, 0] * coord.x + m[1, 1] * coord.y + m[1, 2])
        )

    __call__ = apply

    def apply_many(self, points: npt.ArrayLike) -> npt.NDArray[np.float64]:
        """Transform an (N, 2) array of points."""
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        return pts @ self._matrix[:2, :2].T + self._matrix[:2, 2]

    # ------------------------------------------------------------------
    # Comparison / output
    # ------------------------------------------------------------------

    def allclose(self, other: AffineTransform, rtol: float = 1e-9, atol: float = 1e-9) -> bool:
        return bool(np.allclose(self._matrix, other._matrix, rtol=rtol, atol=atol))

    def is_identity(self, tol: float = 1e-12) -> bool:
        return self.allclose(AffineTransform(), rtol=0.0, atol=tol)

    def to_svg(self) -> str:
        return "matrix({:g},{:g},{:g},{:g},{:g},{:g})".format(*self.components())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AffineTransform):
            return NotImplemented
        return bool(np.array_equal(self._matrix, other._matrix))

    def __hash__(self) -> int:
        return hash(self.components())

    def __repr__(self) -> str:
        return "AffineTransform(a={:g}, b={:g}, c={:g}, d={:g}, e={:g}, f={:g})".format(*self.components())
