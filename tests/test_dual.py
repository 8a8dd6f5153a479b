"""Dual number derivatives against jax automatic differentiation."""

# @author: Wildson Lima

import jax
import jax.numpy as jnp
import numpy as np
import pytest

from saftstate import dual
from saftstate.dual import (
    Dual,
    DualVec,
    first_derivative,
    gradient,
    hessian,
    lift,
    partial_gradient,
    partial_second_derivative,
    second_derivative,
    second_partial_derivative,
    third_derivative,
    third_partial_derivative,
)

jax.config.update("jax_enable_x64", True)


def scalar_fn(x, m):
    return m.exp(x) * m.sqrt(x) / (1.0 + x**2) + m.log(x) ** 3 - 2.0 / x


def vector_fn(x, m):
    return (x * x).sum() * m.exp(x[0]) + m.log(x[1]) * x[2] + x[0] / x[2]


def two_fn(x, y, m):
    return x * m.exp(x * y) + y**3 / x + m.sqrt(x + y)


def three_fn(x, y, z, m):
    return x * y * z + m.exp(x * y) * m.log(z) + x**2 * y**3 / z


@pytest.mark.parametrize("x", [0.3, 1.3, 4.0])
def test_scalar_derivatives(x):
    f = lambda x: scalar_fn(x, dual)  # noqa: E731
    g = lambda x: scalar_fn(x, jnp)  # noqa: E731
    d1 = jax.grad(g)
    d2 = jax.grad(d1)
    d3 = jax.grad(d2)

    f0, f1, f2, f3 = third_derivative(f, x)
    assert float(f0) == pytest.approx(float(g(x)), rel=1e-12)
    assert float(f1) == pytest.approx(float(d1(x)), rel=1e-10)
    assert float(f2) == pytest.approx(float(d2(x)), rel=1e-10)
    assert float(f3) == pytest.approx(float(d3(x)), rel=1e-10)

    # lower order drivers agree with the third order one
    assert float(first_derivative(f, x)[1]) == pytest.approx(float(f1), rel=1e-12)
    assert float(second_derivative(f, x)[2]) == pytest.approx(float(f2), rel=1e-12)


def test_gradient_and_hessian():
    x = np.array([0.7, 1.9, 2.5])
    f = lambda x: vector_fn(x, dual)  # noqa: E731
    g = lambda x: vector_fn(x, jnp)  # noqa: E731

    f0, grad = gradient(f, x)
    assert float(f0) == pytest.approx(float(g(jnp.asarray(x))), rel=1e-12)
    np.testing.assert_allclose(grad, jax.grad(g)(jnp.asarray(x)), rtol=1e-10)

    h0, h1, h2 = hessian(f, x)
    assert float(h0) == pytest.approx(float(f0), rel=1e-12)
    np.testing.assert_allclose(h1, grad, rtol=1e-12)
    np.testing.assert_allclose(h2, jax.hessian(g)(jnp.asarray(x)), rtol=1e-10)
    np.testing.assert_allclose(h2, h2.T, rtol=1e-12)


def test_second_partial_derivative():
    x, y = 0.8, 1.4
    f = lambda x, y: two_fn(x, y, dual)  # noqa: E731
    g = lambda x, y: two_fn(x, y, jnp)  # noqa: E731

    f0, f_x, f_y, f_xy = second_partial_derivative(f, x, y)
    assert float(f0) == pytest.approx(float(g(x, y)), rel=1e-12)
    assert float(f_x) == pytest.approx(float(jax.grad(g, 0)(x, y)), rel=1e-10)
    assert float(f_y) == pytest.approx(float(jax.grad(g, 1)(x, y)), rel=1e-10)
    assert float(f_xy) == pytest.approx(
        float(jax.grad(jax.grad(g, 0), 1)(x, y)), rel=1e-10
    )


def test_partial_second_derivative():
    x, y = 0.8, 1.4
    f = lambda x, y: two_fn(x, y, dual)  # noqa: E731
    g = lambda x, y: two_fn(x, y, jnp)  # noqa: E731
    g_yy = jax.grad(jax.grad(g, 1), 1)

    _, f_y, f_yy, f_x, f_xy, f_xyy = partial_second_derivative(f, x, y)
    assert float(f_y) == pytest.approx(float(jax.grad(g, 1)(x, y)), rel=1e-10)
    assert float(f_yy) == pytest.approx(float(g_yy(x, y)), rel=1e-10)
    assert float(f_x) == pytest.approx(float(jax.grad(g, 0)(x, y)), rel=1e-10)
    assert float(f_xy) == pytest.approx(
        float(jax.grad(jax.grad(g, 1), 0)(x, y)), rel=1e-10
    )
    assert float(f_xyy) == pytest.approx(float(jax.grad(g_yy, 0)(x, y)), rel=1e-10)


def test_partial_gradient():
    x = 1.1
    y = np.array([0.5, 2.0])
    f = lambda x, y: x**2 * (y * y).sum() + dual.exp(x * y[0]) * y[1]  # noqa: E731
    g = lambda x, y: x**2 * jnp.sum(y * y) + jnp.exp(x * y[0]) * y[1]  # noqa: E731

    f0, f_x, grad_y, grad_y_x = partial_gradient(f, x, y)
    yj = jnp.asarray(y)
    assert float(f0) == pytest.approx(float(g(x, yj)), rel=1e-12)
    assert float(f_x) == pytest.approx(float(jax.grad(g, 0)(x, yj)), rel=1e-10)
    np.testing.assert_allclose(grad_y, jax.grad(g, 1)(x, yj), rtol=1e-10)
    np.testing.assert_allclose(
        grad_y_x, jax.jacfwd(jax.grad(g, 1), 0)(x, yj), rtol=1e-10
    )


def test_third_partial_derivative():
    x, y, z = 0.6, 1.2, 1.7
    f = lambda x, y, z: three_fn(x, y, z, dual)  # noqa: E731
    g = lambda x, y, z: three_fn(x, y, z, jnp)  # noqa: E731

    out = third_partial_derivative(f, x, y, z)
    expected = [
        g(x, y, z),
        jax.grad(g, 0)(x, y, z),
        jax.grad(g, 1)(x, y, z),
        jax.grad(g, 2)(x, y, z),
        jax.grad(jax.grad(g, 0), 1)(x, y, z),
        jax.grad(jax.grad(g, 0), 2)(x, y, z),
        jax.grad(jax.grad(g, 1), 2)(x, y, z),
        jax.grad(jax.grad(jax.grad(g, 0), 1), 2)(x, y, z),
    ]
    for a, b in zip(out, expected):
        assert float(a) == pytest.approx(float(b), rel=1e-10)


def test_constant_has_no_derivative():
    _, d = first_derivative(lambda x: 3.0 + 0.0 * x, 2.0)
    assert float(d) == 0.0


def test_lift_embeds_constant():
    x = Dual(DualVec(np.array([1.0, 2.0]), np.eye(2)), DualVec(np.ones(2), np.zeros((2, 2))))
    c = lift(np.array([3.0, 4.0]), x)
    assert isinstance(c, Dual)
    assert isinstance(c.re, DualVec)
    np.testing.assert_array_equal(dual.value(c), [3.0, 4.0])
    np.testing.assert_array_equal(dual.value(c.eps), [0.0, 0.0])
    # mixed operations keep the structure of the deeper operand
    r = c * x
    assert r.depth == x.depth
    np.testing.assert_array_equal(dual.value(r.eps), [3.0, 4.0])


def test_numpy_array_defers_to_dual():
    x = Dual(np.array([1.0, 2.0]), np.array([1.0, 1.0]))
    r = np.array([2.0, 3.0]) * x
    assert isinstance(r, Dual)
    np.testing.assert_array_equal(r.eps, [2.0, 3.0])
