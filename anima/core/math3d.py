# anima/core/math3d.py
"""
Core math types for item transforms.

Matrix4 stores 16 floats in the row-vector layout of the CSS ``matrix3d()``
function: points are rows multiplied on the left, the basis vectors are the
first three rows and the translation sits in the last row (indices 12-14).
"""

from __future__ import annotations
import math
import re
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np

from .config import DEFAULT_CONFIG
from .errors import SingularMatrixError

Triple = Tuple[float, float, float]

# =============================================================================
# Vector Types
# =============================================================================

@dataclass
class Vector3:
    """3D vector used while building orientation bases."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vector3:
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __rmul__(self, scalar: float) -> Vector3:
        return self.__mul__(scalar)

    def dot(self, other: Vector3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector3) -> Vector3:
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalized(self) -> Vector3:
        ln = self.length()
        if ln == 0.0:
            return Vector3(0.0, 0.0, 0.0)
        return Vector3(self.x / ln, self.y / ln, self.z / ln)

    def to_tuple(self) -> Triple:
        return (self.x, self.y, self.z)

    @staticmethod
    def from_tuple(t: Sequence[float]) -> Vector3:
        return Vector3(float(t[0]), float(t[1]), float(t[2]))


# =============================================================================
# Matrix Types
# =============================================================================

_IDENTITY = (
    1.0, 0.0, 0.0, 0.0,
    0.0, 1.0, 0.0, 0.0,
    0.0, 0.0, 1.0, 0.0,
    0.0, 0.0, 0.0, 1.0
)

# Positions that must be zero for a matrix to be expressible as matrix(a..f)
_PLANAR_ZERO = (2, 3, 6, 7, 8, 9, 11, 14)

_STYLE_RE = re.compile(r'^\s*(matrix3d|matrix)\s*\(([^)]*)\)\s*$', re.IGNORECASE)


@dataclass(frozen=True)
class Decomposition:
    """Translation, Euler rotation (degrees) and scale of an affine matrix."""
    translate: Triple
    rotate: Triple
    scale: Triple


class Matrix4:
    """Immutable 4x4 matrix for item transforms."""

    __slots__ = ('m',)

    def __init__(self, values: Iterable[float] = None):
        if values is None:
            self.m = _IDENTITY
        else:
            values = tuple(float(v) for v in values)
            if len(values) != 16:
                raise ValueError(f"Matrix4 needs 16 values, got {len(values)}")
            self.m = values

    def __getitem__(self, idx: Tuple[int, int]) -> float:
        row, col = idx
        return self.m[row * 4 + col]

    def __matmul__(self, other: Matrix4) -> Matrix4:
        if isinstance(other, Matrix4):
            return Matrix4.multiply(self, other)
        raise TypeError(f"Cannot multiply Matrix4 by {type(other)}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix4):
            return NotImplemented
        return self.m == other.m

    def __hash__(self) -> int:
        return hash(self.m)

    def __repr__(self) -> str:
        return f"Matrix4({list(self.m)})"

    def is_close(self, other: Matrix4, tol: float = 1e-9) -> bool:
        return all(abs(a - b) <= tol for a, b in zip(self.m, other.m))

    def is_affine(self) -> bool:
        m = self.m
        return m[3] == 0.0 and m[7] == 0.0 and m[11] == 0.0 and m[15] == 1.0

    def is_2d(self) -> bool:
        m = self.m
        return all(m[i] == 0.0 for i in _PLANAR_ZERO) and m[10] == 1.0 and m[15] == 1.0

    def to_tuple(self) -> Tuple[float, ...]:
        return self.m

    def to_array(self, dtype=np.float64) -> np.ndarray:
        return np.array(self.m, dtype=dtype).reshape(4, 4)

    def transform_point(self, v: Sequence[float]) -> Triple:
        m = self.m
        x, y, z = v[0], v[1], v[2]
        w = x * m[3] + y * m[7] + z * m[11] + m[15]
        if w == 0.0:
            w = 1.0
        return (
            (x * m[0] + y * m[4] + z * m[8] + m[12]) / w,
            (x * m[1] + y * m[5] + z * m[9] + m[13]) / w,
            (x * m[2] + y * m[6] + z * m[10] + m[14]) / w
        )

    # -------------------------------------------------------------------------
    # Inverse
    # -------------------------------------------------------------------------

    def inverse(self, eps: float = DEFAULT_CONFIG.singular_epsilon) -> Matrix4:
        """
        Inverse of the matrix.

        Raises SingularMatrixError when |det| is within ``eps`` of zero
        relative to the product of the row lengths, so uniformly tiny scales
        still invert. Callers animating scale through 0 must guard before
        asking for an inverse.
        """
        if not self.is_affine():
            return self._inverse_general(eps)

        m = self.m
        a, b, c = m[0], m[1], m[2]
        d, e, f = m[4], m[5], m[6]
        g, h, i = m[8], m[9], m[10]

        c00 = e * i - f * h
        c01 = f * g - d * i
        c02 = d * h - e * g
        det = a * c00 + b * c01 + c * c02
        if abs(det) <= eps * _row_norms(m, 3):
            raise SingularMatrixError(f"matrix is not invertible (det={det})")

        inv_det = 1.0 / det
        r00, r01, r02 = c00 * inv_det, (c * h - b * i) * inv_det, (b * f - c * e) * inv_det
        r10, r11, r12 = c01 * inv_det, (a * i - c * g) * inv_det, (c * d - a * f) * inv_det
        r20, r21, r22 = c02 * inv_det, (b * g - a * h) * inv_det, (a * e - b * d) * inv_det

        tx, ty, tz = m[12], m[13], m[14]
        return Matrix4((
            r00, r01, r02, 0.0,
            r10, r11, r12, 0.0,
            r20, r21, r22, 0.0,
            -(tx * r00 + ty * r10 + tz * r20),
            -(tx * r01 + ty * r11 + tz * r21),
            -(tx * r02 + ty * r12 + tz * r22),
            1.0
        ))

    def _inverse_general(self, eps: float) -> Matrix4:
        m = self.m

        c00 = m[5]*m[10]*m[15] - m[5]*m[11]*m[14] - m[9]*m[6]*m[15] + m[9]*m[7]*m[14] + m[13]*m[6]*m[11] - m[13]*m[7]*m[10]
        c01 = -m[4]*m[10]*m[15] + m[4]*m[11]*m[14] + m[8]*m[6]*m[15] - m[8]*m[7]*m[14] - m[12]*m[6]*m[11] + m[12]*m[7]*m[10]
        c02 = m[4]*m[9]*m[15] - m[4]*m[11]*m[13] - m[8]*m[5]*m[15] + m[8]*m[7]*m[13] + m[12]*m[5]*m[11] - m[12]*m[7]*m[9]
        c03 = -m[4]*m[9]*m[14] + m[4]*m[10]*m[13] + m[8]*m[5]*m[14] - m[8]*m[6]*m[13] - m[12]*m[5]*m[10] + m[12]*m[6]*m[9]

        det = m[0]*c00 + m[1]*c01 + m[2]*c02 + m[3]*c03
        if abs(det) <= eps * _row_norms(m, 4):
            raise SingularMatrixError(f"matrix is not invertible (det={det})")

        inv_det = 1.0 / det

        c10 = -m[1]*m[10]*m[15] + m[1]*m[11]*m[14] + m[9]*m[2]*m[15] - m[9]*m[3]*m[14] - m[13]*m[2]*m[11] + m[13]*m[3]*m[10]
        c11 = m[0]*m[10]*m[15] - m[0]*m[11]*m[14] - m[8]*m[2]*m[15] + m[8]*m[3]*m[14] + m[12]*m[2]*m[11] - m[12]*m[3]*m[10]
        c12 = -m[0]*m[9]*m[15] + m[0]*m[11]*m[13] + m[8]*m[1]*m[15] - m[8]*m[3]*m[13] - m[12]*m[1]*m[11] + m[12]*m[3]*m[9]
        c13 = m[0]*m[9]*m[14] - m[0]*m[10]*m[13] - m[8]*m[1]*m[14] + m[8]*m[2]*m[13] + m[12]*m[1]*m[10] - m[12]*m[2]*m[9]

        c20 = m[1]*m[6]*m[15] - m[1]*m[7]*m[14] - m[5]*m[2]*m[15] + m[5]*m[3]*m[14] + m[13]*m[2]*m[7] - m[13]*m[3]*m[6]
        c21 = -m[0]*m[6]*m[15] + m[0]*m[7]*m[14] + m[4]*m[2]*m[15] - m[4]*m[3]*m[14] - m[12]*m[2]*m[7] + m[12]*m[3]*m[6]
        c22 = m[0]*m[5]*m[15] - m[0]*m[7]*m[13] - m[4]*m[1]*m[15] + m[4]*m[3]*m[13] + m[12]*m[1]*m[7] - m[12]*m[3]*m[5]
        c23 = -m[0]*m[5]*m[14] + m[0]*m[6]*m[13] + m[4]*m[1]*m[14] - m[4]*m[2]*m[13] - m[12]*m[1]*m[6] + m[12]*m[2]*m[5]

        c30 = -m[1]*m[6]*m[11] + m[1]*m[7]*m[10] + m[5]*m[2]*m[11] - m[5]*m[3]*m[10] - m[9]*m[2]*m[7] + m[9]*m[3]*m[6]
        c31 = m[0]*m[6]*m[11] - m[0]*m[7]*m[10] - m[4]*m[2]*m[11] + m[4]*m[3]*m[10] + m[8]*m[2]*m[7] - m[8]*m[3]*m[6]
        c32 = -m[0]*m[5]*m[11] + m[0]*m[7]*m[9] + m[4]*m[1]*m[11] - m[4]*m[3]*m[9] - m[8]*m[1]*m[7] + m[8]*m[3]*m[5]
        c33 = m[0]*m[5]*m[10] - m[0]*m[6]*m[9] - m[4]*m[1]*m[10] + m[4]*m[2]*m[9] + m[8]*m[1]*m[6] - m[8]*m[2]*m[5]

        return Matrix4((
            c00*inv_det, c10*inv_det, c20*inv_det, c30*inv_det,
            c01*inv_det, c11*inv_det, c21*inv_det, c31*inv_det,
            c02*inv_det, c12*inv_det, c22*inv_det, c32*inv_det,
            c03*inv_det, c13*inv_det, c23*inv_det, c33*inv_det
        ))

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @staticmethod
    def identity() -> Matrix4:
        return Matrix4()

    @staticmethod
    def multiply(*matrices: Matrix4) -> Matrix4:
        """multiply(a, b, c) == multiply(multiply(a, b), c)."""
        if not matrices:
            return Matrix4.identity()
        result = matrices[0]
        for other in matrices[1:]:
            if result.is_affine() and other.is_affine():
                result = Matrix4._mul_affine(result.m, other.m)
            else:
                result = Matrix4._mul_full(result.m, other.m)
        return result

    @staticmethod
    def _mul_affine(a: Tuple[float, ...], b: Tuple[float, ...]) -> Matrix4:
        return Matrix4((
            a[0]*b[0] + a[1]*b[4] + a[2]*b[8],
            a[0]*b[1] + a[1]*b[5] + a[2]*b[9],
            a[0]*b[2] + a[1]*b[6] + a[2]*b[10],
            0.0,
            a[4]*b[0] + a[5]*b[4] + a[6]*b[8],
            a[4]*b[1] + a[5]*b[5] + a[6]*b[9],
            a[4]*b[2] + a[5]*b[6] + a[6]*b[10],
            0.0,
            a[8]*b[0] + a[9]*b[4] + a[10]*b[8],
            a[8]*b[1] + a[9]*b[5] + a[10]*b[9],
            a[8]*b[2] + a[9]*b[6] + a[10]*b[10],
            0.0,
            a[12]*b[0] + a[13]*b[4] + a[14]*b[8] + b[12],
            a[12]*b[1] + a[13]*b[5] + a[14]*b[9] + b[13],
            a[12]*b[2] + a[13]*b[6] + a[14]*b[10] + b[14],
            1.0
        ))

    @staticmethod
    def _mul_full(a: Tuple[float, ...], b: Tuple[float, ...]) -> Matrix4:
        result = []
        for row in range(4):
            for col in range(4):
                result.append(sum(a[row * 4 + k] * b[k * 4 + col] for k in range(4)))
        return Matrix4(result)

    @staticmethod
    def translate(tx: float = None, ty: float = None, tz: float = None) -> Matrix4:
        tx = 0.0 if tx is None else tx
        ty = 0.0 if ty is None else ty
        tz = 0.0 if tz is None else tz
        if tx == 0 and ty == 0 and tz == 0:
            return Matrix4.identity()
        return Matrix4((
            1.0, 0.0, 0.0, 0.0,
            0.0, 1.0, 0.0, 0.0,
            0.0, 0.0, 1.0, 0.0,
            tx,  ty,  tz,  1.0
        ))

    @staticmethod
    def translate_x(t: float) -> Matrix4:
        return Matrix4.translate(t, 0.0, 0.0)

    @staticmethod
    def translate_y(t: float) -> Matrix4:
        return Matrix4.translate(0.0, t, 0.0)

    @staticmethod
    def translate_z(t: float) -> Matrix4:
        return Matrix4.translate(0.0, 0.0, t)

    @staticmethod
    def scale(sx: float = None, sy: float = None, sz: float = None) -> Matrix4:
        """
        Scale matrix. An omitted ``sy`` follows ``sx``, an omitted ``sx`` or
        ``sz`` is 1. Explicit zeros are real zeros.
        """
        if sx is None and sy is None and sz is None:
            return Matrix4.identity()
        sx = 1.0 if sx is None else sx
        sy = sx if sy is None else sy
        sz = 1.0 if sz is None else sz
        return Matrix4((
            sx,  0.0, 0.0, 0.0,
            0.0, sy,  0.0, 0.0,
            0.0, 0.0, sz,  0.0,
            0.0, 0.0, 0.0, 1.0
        ))

    @staticmethod
    def scale_x(s: float) -> Matrix4:
        return Matrix4.scale(s, 1.0, 1.0)

    @staticmethod
    def scale_y(s: float) -> Matrix4:
        return Matrix4.scale(1.0, s, 1.0)

    @staticmethod
    def scale_z(s: float) -> Matrix4:
        return Matrix4.scale(1.0, 1.0, s)

    @staticmethod
    def rotate(ax: float = None, ay: float = None, az: float = None) -> Matrix4:
        """Euler rotation, angles in degrees."""
        ax = 0.0 if ax is None else ax
        ay = 0.0 if ay is None else ay
        az = 0.0 if az is None else az
        if ax == 0 and ay == 0 and az == 0:
            return Matrix4.identity()

        ax, ay, az = math.radians(ax), math.radians(ay), math.radians(az)
        sx, cx = math.sin(ax), math.cos(ax)
        sy, cy = math.sin(ay), math.cos(ay)
        sz, cz = math.sin(az), math.cos(az)

        return Matrix4((
            cy * cz,  cx * sz + sx * sy * cz,  sx * sz - cx * sy * cz,  0.0,
            -cy * sz, cx * cz - sx * sy * sz,  sx * cz + cx * sy * sz,  0.0,
            sy,       -sx * cy,                cx * cy,                 0.0,
            0.0,      0.0,                     0.0,                     1.0
        ))

    @staticmethod
    def rotate_x(angle: float) -> Matrix4:
        a = math.radians(angle)
        s, c = math.sin(a), math.cos(a)
        return Matrix4((
            1.0, 0.0, 0.0, 0.0,
            0.0, c,   s,   0.0,
            0.0, -s,  c,   0.0,
            0.0, 0.0, 0.0, 1.0
        ))

    @staticmethod
    def rotate_y(angle: float) -> Matrix4:
        a = math.radians(angle)
        s, c = math.sin(a), math.cos(a)
        return Matrix4((
            c,   0.0, -s,  0.0,
            0.0, 1.0, 0.0, 0.0,
            s,   0.0, c,   0.0,
            0.0, 0.0, 0.0, 1.0
        ))

    @staticmethod
    def rotate_z(angle: float) -> Matrix4:
        a = math.radians(angle)
        s, c = math.sin(a), math.cos(a)
        return Matrix4((
            c,   s,   0.0, 0.0,
            -s,  c,   0.0, 0.0,
            0.0, 0.0, 1.0, 0.0,
            0.0, 0.0, 0.0, 1.0
        ))

    @staticmethod
    def rotate_axis(x: float, y: float, z: float, angle: float) -> Matrix4:
        """Rotation of ``angle`` degrees about (x, y, z). A zero axis means Z."""
        a = math.radians(angle)
        s, c = math.sin(a), math.cos(a)
        ln = math.sqrt(x * x + y * y + z * z)
        if ln == 0.0:
            x, y, z = 0.0, 0.0, 1.0
        elif ln != 1.0:
            x, y, z = x / ln, y / ln, z / ln

        xx, yy, zz = x * x, y * y, z * z
        t = 1.0 - c
        return Matrix4((
            xx + (1 - xx) * c,  x * y * t + z * s,  x * z * t - y * s,  0.0,
            x * y * t - z * s,  yy + (1 - yy) * c,  y * z * t + x * s,  0.0,
            x * z * t + y * s,  y * z * t - x * s,  zz + (1 - zz) * c,  0.0,
            0.0,                0.0,                0.0,                1.0
        ))

    @staticmethod
    def skew(ax: float = None, ay: float = None) -> Matrix4:
        ax = 0.0 if ax is None else ax
        ay = 0.0 if ay is None else ay
        if ax == 0 and ay == 0:
            return Matrix4.identity()
        return Matrix4((
            1.0,                       math.tan(math.radians(ay)), 0.0, 0.0,
            math.tan(math.radians(ax)), 1.0,                       0.0, 0.0,
            0.0,                       0.0,                        1.0, 0.0,
            0.0,                       0.0,                        0.0, 1.0
        ))

    @staticmethod
    def skew_x(angle: float) -> Matrix4:
        return Matrix4.skew(angle, 0.0)

    @staticmethod
    def skew_y(angle: float) -> Matrix4:
        return Matrix4.skew(0.0, angle)

    @staticmethod
    def perspective(distance: float) -> Matrix4:
        if distance == 0:
            raise ValueError("perspective distance must be non-zero")
        return Matrix4((
            1.0, 0.0, 0.0, 0.0,
            0.0, 1.0, 0.0, 0.0,
            0.0, 0.0, 1.0, -1.0 / distance,
            0.0, 0.0, 0.0, 1.0
        ))

    # -------------------------------------------------------------------------
    # TRS
    # -------------------------------------------------------------------------

    @staticmethod
    def compose(translate: Sequence[float], rotate: Sequence[float],
                scale: Sequence[float]) -> Matrix4:
        """Rotate, scale the rotated axes, then translate."""
        r = Matrix4.rotate(rotate[0], rotate[1], rotate[2]).m
        sx, sy, sz = scale[0], scale[1], scale[2]
        return Matrix4((
            r[0] * sx, r[1] * sx, r[2] * sx,  0.0,
            r[4] * sy, r[5] * sy, r[6] * sy,  0.0,
            r[8] * sz, r[9] * sz, r[10] * sz, 0.0,
            translate[0], translate[1], translate[2], 1.0
        ))

    @staticmethod
    def decompose(matrix: Matrix4,
                  gimbal_eps: float = DEFAULT_CONFIG.gimbal_epsilon) -> Decomposition:
        """
        Split an affine matrix into translate, Euler rotate (degrees) and scale.

        Mirrored bases come back with a negative x scale. At the poles
        (|m[8]| == 1) the X angle is pinned to 0 and Z absorbs the rest.
        """
        m = matrix.m
        rows = [Vector3(m[0], m[1], m[2]), Vector3(m[4], m[5], m[6]), Vector3(m[8], m[9], m[10])]
        scale = [row.length() for row in rows]
        if any(s == 0.0 for s in scale):
            raise SingularMatrixError("cannot decompose a matrix with a collapsed axis")

        if rows[0].dot(rows[1].cross(rows[2])) < 0:
            scale[0] = -scale[0]

        n0, n1, n2 = (row * (1.0 / s) for row, s in zip(rows, scale))

        sin_y = clamp(n2.x, -1.0, 1.0)
        if abs(sin_y) >= 1.0 - gimbal_eps:
            rx = 0.0
            ry = math.copysign(90.0, sin_y)
            rz = math.degrees(math.atan2(n0.y, n1.y))
        else:
            rx = math.degrees(math.atan2(-n2.y, n2.z))
            ry = math.degrees(math.asin(sin_y))
            rz = math.degrees(math.atan2(-n1.x, n0.x))

        return Decomposition(
            translate=(m[12], m[13], m[14]),
            rotate=(rx, ry, rz),
            scale=(scale[0], scale[1], scale[2])
        )

    @staticmethod
    def look_at(eye: Sequence[float], target: Sequence[float],
                up: Optional[Sequence[float]] = None,
                nudge: float = DEFAULT_CONFIG.look_at_nudge) -> Matrix4:
        """
        Orientation whose z axis points from ``target`` to ``eye``.

        Coincident points look down +Z; a zero ``up`` means +Y. When ``up``
        is parallel to the view direction, z is nudged off the axis.
        """
        up_v = Vector3(0.0, 1.0, 0.0) if up is None else Vector3.from_tuple(up)
        if up_v.length() == 0.0:
            up_v = Vector3(0.0, 1.0, 0.0)

        z = (Vector3.from_tuple(eye) - Vector3.from_tuple(target)).normalized()
        if z.length() == 0.0:
            z = Vector3(0.0, 0.0, 1.0)

        x = up_v.cross(z)
        if x.length() == 0.0:
            if abs(up_v.normalized().z) == 1.0:
                z = Vector3(z.x + nudge, z.y, z.z)
            else:
                z = Vector3(z.x, z.y, z.z + nudge)
            z = z.normalized()
            x = up_v.cross(z)

        x = x.normalized()
        y = z.cross(x)

        return Matrix4((
            x.x, x.y, x.z, 0.0,
            y.x, y.y, y.z, 0.0,
            z.x, z.y, z.z, 0.0,
            0.0, 0.0, 0.0, 1.0
        ))

    # -------------------------------------------------------------------------
    # Text codec
    # -------------------------------------------------------------------------

    @staticmethod
    def parse(text: str) -> Matrix4:
        """Read ``matrix3d(...)``, ``matrix(a, b, c, d, e, f)`` or ``none``."""
        if text.strip().lower() == 'none':
            return Matrix4.identity()

        match = _STYLE_RE.match(text)
        if not match:
            raise ValueError(f"not a matrix style value: {text!r}")

        try:
            values = [float(v) for v in match.group(2).split(',')]
        except ValueError as e:
            raise ValueError(f"bad number in {text!r}") from e

        kind = match.group(1).lower()
        if kind == 'matrix3d':
            if len(values) != 16:
                raise ValueError(f"matrix3d needs 16 values, got {len(values)}")
            return Matrix4(values)

        if len(values) != 6:
            raise ValueError(f"matrix needs 6 values, got {len(values)}")
        a, b, c, d, e, f = values
        return Matrix4((
            a,   b,   0.0, 0.0,
            c,   d,   0.0, 0.0,
            0.0, 0.0, 1.0, 0.0,
            e,   f,   0.0, 1.0
        ))

    @staticmethod
    def stringify(matrix: Matrix4, eps: float = DEFAULT_CONFIG.snap_epsilon) -> str:
        return 'matrix3d(' + ','.join(_format_number(v, eps) for v in matrix.m) + ')'

    @staticmethod
    def to_test_string(matrix: Matrix4, eps: float = DEFAULT_CONFIG.snap_epsilon) -> str:
        snapped = Matrix4(0.0 if abs(v) < eps else v for v in matrix.m)
        if not snapped.is_2d():
            return Matrix4.stringify(snapped, eps)
        m = snapped.m
        return 'matrix(' + ','.join(_format_number(m[i], eps) for i in (0, 1, 4, 5, 12, 13)) + ')'


def _row_norms(m: Tuple[float, ...], size: int) -> float:
    """Product of the first ``size`` row lengths, the largest |det| can be."""
    product = 1.0
    for row in range(size):
        start = row * 4
        product *= math.sqrt(sum(v * v for v in m[start:start + size]))
    return product


def _format_number(value: float, eps: float) -> str:
    if abs(value) < eps:
        return '0'
    if value.is_integer() and abs(value) < 1e15:
        return str(int(value))
    return repr(value)


# =============================================================================
# Utility Functions
# =============================================================================

def clamp(value: float, min_val: float, max_val: float) -> float:
    return max(min_val, min(value, max_val))

def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t
