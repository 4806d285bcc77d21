"""Arithmetic operations carried by expression nodes.

Operations are a closed set of frozen dataclasses. Each one refers to its
operands by their index in the owning graph, so an operation never holds a
node directly. Arithmetic is carried out in IEEE-754 single precision.
"""

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, slots=True)
class Add:
    lhs: int
    rhs: int


@dataclass(frozen=True, slots=True)
class AddVar:
    args: tuple[int, ...]


@dataclass(frozen=True, slots=True)
class Sub:
    lhs: int
    rhs: int


@dataclass(frozen=True, slots=True)
class Mul:
    lhs: int
    rhs: int


@dataclass(frozen=True, slots=True)
class Pow:
    base: int
    exponent: float


@dataclass(frozen=True, slots=True)
class Sin:
    arg: int


Operation = Add | AddVar | Sub | Mul | Pow | Sin


def operands(op: Operation) -> tuple[int, ...]:
    """Return the operand indices of an operation in declared order.

    The same index appears once per occurrence, so ``AddVar((a, a))``
    yields ``(a, a)``.
    """
    match op:
        case Add(lhs, rhs) | Sub(lhs, rhs) | Mul(lhs, rhs):
            return (lhs, rhs)
        case AddVar(args):
            return args
        case Pow(base, _):
            return (base,)
        case Sin(arg):
            return (arg,)
        case _:
            msg = f"Unknown operation type: {type(op)}"
            raise TypeError(msg)


def apply(op: Operation, values: Sequence[np.float32]) -> np.float32:
    """Combine already computed operand values according to ``op``.

    Args:
        op: The operation to apply.
        values: Operand values, aligned with ``operands(op)``.

    Returns:
        The result as a single precision float. Domain errors never raise:
        they produce NaN or infinity like any other float.

    """
    # Floating point faults are part of the result, not errors.
    with np.errstate(all="ignore"):
        match op:
            case Add():
                x, y = values
                return np.float32(x + y)
            case AddVar():
                total = np.float32(0.0)
                for value in values:
                    total = np.float32(total + value)
                return total
            case Sub():
                x, y = values
                return np.float32(x - y)
            case Mul():
                x, y = values
                return np.float32(x * y)
            case Pow(_, exponent):
                (x,) = values
                return np.float32(np.power(x, np.float32(exponent)))
            case Sin():
                (x,) = values
                return np.float32(np.sin(x))
            case _:
                msg = f"Unknown operation type: {type(op)}"
                raise TypeError(msg)


def symbol(op: Operation) -> str:
    """Short human readable name of an operation, e.g. ``"+"`` or ``"** 3"``."""
    match op:
        case Add():
            return "+"
        case AddVar(args):
            return f"sum[{len(args)}]"
        case Sub():
            return "-"
        case Mul():
            return "*"
        case Pow(_, exponent):
            return f"** {exponent:g}"
        case Sin():
            return "sin"
        case _:
            msg = f"Unknown operation type: {type(op)}"
            raise TypeError(msg)


def to_float32(value: float) -> np.float32:
    """Convert ``value`` to single precision; out of range values become infinite."""
    with np.errstate(over="ignore"):
        return np.float32(value)
