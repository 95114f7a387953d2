"""IEEE-754 scalar arithmetic kernels on top of JAX."""

from __future__ import annotations

import os
from typing import Callable, Final

import jax
from jax import lax
import jax.numpy as jnp

_ENABLE_X64: Final[bool] = os.environ.get("EXPRCALC_DISABLE_X64", "0") != "1"
_USE_JITTED_BASE_OPS: Final[bool] = os.environ.get("EXPRCALC_DISABLE_JITTED_BASE_OPS", "0") != "1"

if _ENABLE_X64:
    jax.config.update("jax_enable_x64", True)

NAN: Final[float] = float("nan")


def _as_array(value: float) -> jnp.ndarray:
    return jnp.asarray(value, dtype=float)


_BASE_UNARY_OPS: Final[dict[str, Callable[[jnp.ndarray], jnp.ndarray]]] = {
    "-": lambda x: lax.neg(x),
}

_BASE_BINARY_OPS: Final[dict[str, Callable[[jnp.ndarray, jnp.ndarray], jnp.ndarray]]] = {
    "+": lambda w, x: lax.add(w, x),
    "-": lambda w, x: lax.sub(w, x),
    "*": lambda w, x: lax.mul(w, x),
    "/": lambda w, x: lax.div(w, x),
    "**": lambda w, x: lax.pow(w, x),
}

_JITTED_UNARY_OPS: dict[str, Callable[[jnp.ndarray], jnp.ndarray]] = {}
_JITTED_BINARY_OPS: dict[str, Callable[[jnp.ndarray, jnp.ndarray], jnp.ndarray]] = {}


def _jitted_unary_kernel(op: str) -> Callable[[jnp.ndarray], jnp.ndarray]:
    fn = _JITTED_UNARY_OPS.get(op)
    if fn is None:
        fn = jax.jit(_BASE_UNARY_OPS[op])
        _JITTED_UNARY_OPS[op] = fn
    return fn


def _jitted_binary_kernel(op: str) -> Callable[[jnp.ndarray, jnp.ndarray], jnp.ndarray]:
    fn = _JITTED_BINARY_OPS.get(op)
    if fn is None:
        fn = jax.jit(_BASE_BINARY_OPS[op])
        _JITTED_BINARY_OPS[op] = fn
    return fn


def apply_unary(op: str, value: float) -> float:
    if op not in _BASE_UNARY_OPS:
        raise KeyError(f"Unsupported unary operator {op!r}")
    fn = _jitted_unary_kernel(op) if _USE_JITTED_BASE_OPS else _BASE_UNARY_OPS[op]
    return float(fn(_as_array(value)))


def apply_binary(op: str, left: float, right: float) -> float:
    """Combine two numbers; division by zero and bad powers give inf/nan, never raise."""
    if op not in _BASE_BINARY_OPS:
        raise KeyError(f"Unsupported binary operator {op!r}")
    fn = _jitted_binary_kernel(op) if _USE_JITTED_BASE_OPS else _BASE_BINARY_OPS[op]
    return float(fn(_as_array(left), _as_array(right)))


def negate(value: float) -> float:
    return apply_unary("-", value)


def add(left: float, right: float) -> float:
    return apply_binary("+", left, right)


def subtract(left: float, right: float) -> float:
    return apply_binary("-", left, right)


def multiply(left: float, right: float) -> float:
    return apply_binary("*", left, right)


def divide(left: float, right: float) -> float:
    return apply_binary("/", left, right)


def power(left: float, right: float) -> float:
    return apply_binary("**", left, right)
