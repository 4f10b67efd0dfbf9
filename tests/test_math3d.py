import math

import numpy as np
import pytest

from anima.core.errors import SingularMatrixError
from anima.core.math3d import Matrix4, Vector3


def _angles_close(a, b, tol=1e-6):
    return all(abs((x - y + 180.0) % 360.0 - 180.0) < tol for x, y in zip(a, b))


def test_vector_ops():
    a = Vector3(1.0, 0.0, 0.0)
    b = Vector3(0.0, 1.0, 0.0)
    assert a.cross(b) == Vector3(0.0, 0.0, 1.0)
    assert a.dot(b) == 0.0
    assert (a + b) * 2.0 == Vector3(2.0, 2.0, 0.0)
    assert Vector3(3.0, 4.0, 0.0).length() == 5.0
    assert Vector3().normalized() == Vector3()


def test_identity_constructors():
    assert Matrix4.translate() == Matrix4.identity()
    assert Matrix4.translate(0, 0, 0) == Matrix4.identity()
    assert Matrix4.rotate(0, 0, 0) == Matrix4.identity()
    assert Matrix4.scale() == Matrix4.identity()
    assert Matrix4.skew() == Matrix4.identity()


def test_scale_defaults():
    # omitted sy follows sx
    m = Matrix4.scale(2)
    assert (m[0, 0], m[1, 1], m[2, 2]) == (2.0, 2.0, 1.0)

    # explicit zero is a real zero
    m = Matrix4.scale(0, 1, 1)
    assert m[0, 0] == 0.0

    m = Matrix4.scale_y(3)
    assert (m[0, 0], m[1, 1], m[2, 2]) == (1.0, 3.0, 1.0)


def test_translate_layout():
    m = Matrix4.translate(10, 20, 30)
    assert m.to_tuple()[12:15] == (10.0, 20.0, 30.0)
    assert m.transform_point((1, 1, 1)) == (11.0, 21.0, 31.0)


def test_multiply_order():
    t = Matrix4.translate(10, 0, 0)
    s = Matrix4.scale(2, 2, 2)

    # scale first, then translate
    assert (s @ t).transform_point((1, 0, 0)) == (12.0, 0.0, 0.0)
    # translate first, then scale
    assert (t @ s).transform_point((1, 0, 0)) == (22.0, 0.0, 0.0)

    a, b, c = Matrix4.rotate_x(30), Matrix4.rotate_y(45), Matrix4.translate(1, 2, 3)
    assert Matrix4.multiply(a, b, c).is_close(Matrix4.multiply(Matrix4.multiply(a, b), c))


def test_multiply_keeps_perspective():
    p = Matrix4.perspective(100)
    m = Matrix4.multiply(Matrix4.translate(0, 0, 10), p)
    assert not m.is_affine()
    assert m[3, 3] == pytest.approx(0.9)

    expected = Matrix4.translate(0, 0, 10).to_array() @ p.to_array()
    assert np.allclose(m.to_array(), expected)


def test_perspective_zero_raises():
    with pytest.raises(ValueError):
        Matrix4.perspective(0)


def test_rotate_matches_axis_products():
    # z first, then y, then x
    composed = Matrix4.multiply(Matrix4.rotate_z(50), Matrix4.rotate_y(35), Matrix4.rotate_x(20))
    assert Matrix4.rotate(20, 35, 50).is_close(composed)


def test_rotate_axis():
    assert Matrix4.rotate_axis(0, 0, 1, 90).is_close(Matrix4.rotate_z(90))
    assert Matrix4.rotate_axis(0, 0, 5, 90).is_close(Matrix4.rotate_z(90))
    # zero axis falls back to Z
    assert Matrix4.rotate_axis(0, 0, 0, 45).is_close(Matrix4.rotate_z(45))


def test_compose_decompose_roundtrip():
    rng = np.random.default_rng(7)
    for _ in range(200):
        t = rng.uniform(-500, 500, 3)
        r = rng.uniform(-179, 179, 3)
        r[1] = rng.uniform(-89, 89)
        s = rng.uniform(0.1, 5, 3)

        d = Matrix4.decompose(Matrix4.compose(t, r, s))

        assert np.allclose(d.translate, t, atol=1e-9)
        assert np.allclose(d.scale, s, atol=1e-6)
        assert _angles_close(d.rotate, r)


def test_decompose_gimbal_lock():
    m = Matrix4.compose((1, 2, 3), (0, 90, 30), (1, 1, 1))
    d = Matrix4.decompose(m)

    assert not any(math.isnan(v) for v in d.rotate)
    assert d.rotate[0] == 0.0
    assert d.rotate[1] == 90.0
    assert Matrix4.compose(d.translate, d.rotate, d.scale).is_close(m)

    m = Matrix4.compose((0, 0, 0), (20, -90, 10), (2, 2, 2))
    d = Matrix4.decompose(m)
    assert d.rotate[1] == -90.0
    assert Matrix4.compose(d.translate, d.rotate, d.scale).is_close(m)


def test_decompose_mirrored():
    m = Matrix4.compose((0, 0, 0), (10, 20, 30), (-2, 1, 1))
    d = Matrix4.decompose(m)
    assert d.scale[0] == pytest.approx(-2.0)
    assert Matrix4.compose(d.translate, d.rotate, d.scale).is_close(m)


def test_decompose_collapsed_axis_raises():
    with pytest.raises(SingularMatrixError):
        Matrix4.decompose(Matrix4.scale(0, 1, 1))


def test_inverse():
    m = Matrix4.compose((5, -3, 8), (15, 25, 35), (2, 0.5, 3))
    assert Matrix4.multiply(m, m.inverse()).is_close(Matrix4.identity())
    assert Matrix4.multiply(m.inverse(), m).is_close(Matrix4.identity())


def test_inverse_with_perspective():
    m = Matrix4.multiply(Matrix4.rotate(10, 20, 30), Matrix4.perspective(400))
    assert Matrix4.multiply(m, m.inverse()).is_close(Matrix4.identity())
    assert np.allclose(m.inverse().to_array(), np.linalg.inv(m.to_array()))


def test_inverse_of_tiny_uniform_scale():
    m = Matrix4.compose((3, 4, 5), (0, 0, 0), (1e-5, 1e-5, 1e-5))
    inv = m.inverse()
    assert inv[0, 0] == pytest.approx(1e5)
    assert Matrix4.multiply(m, inv).is_close(Matrix4.identity())

    p = Matrix4.multiply(Matrix4.scale(1e-5, 1e-5, 1e-5), Matrix4.perspective(400))
    assert Matrix4.multiply(p, p.inverse()).is_close(Matrix4.identity())


def test_inverse_singular_raises():
    with pytest.raises(SingularMatrixError):
        Matrix4.scale(0, 0, 0).inverse()
    with pytest.raises(SingularMatrixError):
        Matrix4.scale(1, 0, 1).inverse()


def test_look_at_basis():
    m = Matrix4.look_at((0, 0, 10), (0, 0, 0))
    assert m.is_close(Matrix4.identity())

    m = Matrix4.look_at((10, 5, -3), (1, 2, 3), (0, 1, 0))
    rows = m.to_array()[:3, :3]
    assert np.allclose(rows @ rows.T, np.eye(3), atol=1e-9)
    assert np.linalg.det(rows) == pytest.approx(1.0)


def test_look_at_parallel_up():
    m = Matrix4.look_at((0, 10, 0), (0, 0, 0), (0, 1, 0))
    assert not any(math.isnan(v) for v in m.to_tuple())
    rows = m.to_array()[:3, :3]
    assert np.allclose(rows @ rows.T, np.eye(3), atol=1e-9)

    m = Matrix4.look_at((0, 0, 10), (0, 0, 0), (0, 0, 1))
    assert not any(math.isnan(v) for v in m.to_tuple())


def test_look_at_degenerate_inputs():
    # coincident points and a zero up vector
    m = Matrix4.look_at((1, 1, 1), (1, 1, 1), (0, 0, 0))
    assert m.is_close(Matrix4.identity())


def test_stringify_and_parse():
    m = Matrix4.translate(10, 20, 0)
    text = Matrix4.stringify(m)
    assert text == 'matrix3d(1,0,0,0,0,1,0,0,0,0,1,0,10,20,0,1)'
    assert Matrix4.parse(text) == m

    m = Matrix4.compose((1.5, -2.25, 3), (10, 20, 30), (1, 2, 3))
    assert Matrix4.parse(Matrix4.stringify(m)).is_close(m, 1e-9)


def test_stringify_snaps_tiny_values():
    text = Matrix4.stringify(Matrix4.rotate_z(90))
    assert text == 'matrix3d(0,1,0,0,-1,0,0,0,0,0,1,0,0,0,0,1)'


def test_parse_2d_and_none():
    m = Matrix4.parse('matrix(1, 0, 0, 1, 30, 40)')
    assert m == Matrix4.translate(30, 40, 0)
    assert Matrix4.parse('none') == Matrix4.identity()
    assert Matrix4.parse(' MATRIX3D(1,0,0,0,0,1,0,0,0,0,1,0,0,0,0,1) ') == Matrix4.identity()


def test_parse_rejects_bad_input():
    with pytest.raises(ValueError):
        Matrix4.parse('rotate(45deg)')
    with pytest.raises(ValueError):
        Matrix4.parse('matrix(1, 0, 0, 1)')
    with pytest.raises(ValueError):
        Matrix4.parse('matrix3d(1,0,0)')
    with pytest.raises(ValueError):
        Matrix4.parse('matrix(a, 0, 0, 1, 0, 0)')


def test_to_test_string():
    assert Matrix4.to_test_string(Matrix4.translate(30, 40, 0)) == 'matrix(1,0,0,1,30,40)'
    assert Matrix4.to_test_string(Matrix4.rotate_z(90)) == 'matrix(0,1,-1,0,0,0)'
    assert Matrix4.to_test_string(Matrix4.translate(0, 0, 5)).startswith('matrix3d(')


if __name__ == "__main__":
    test_vector_ops()
    test_identity_constructors()
    test_scale_defaults()
    test_multiply_order()
    test_compose_decompose_roundtrip()
    test_decompose_gimbal_lock()
    test_inverse()
    test_look_at_parallel_up()
    test_stringify_and_parse()
