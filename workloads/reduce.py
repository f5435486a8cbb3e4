"""Reduce over a list with a curried reducer, called per step or adapted once."""

import functools
import operator
from typing import Any, Callable, Iterable


class Curried:
    """Two-argument function usable as f(a)(b); keeps the direct form for adapt()."""

    __slots__ = ("fn",)

    def __init__(self, fn: Callable[[Any, Any], Any]):
        self.fn = fn

    def __call__(self, a: Any) -> Callable[[Any], Any]:
        # a fresh partial application on every call
        return functools.partial(self.fn, a)

    def __repr__(self) -> str:
        return f"Curried({getattr(self.fn, '__name__', self.fn)!r})"


def curry2(fn: Callable[[Any, Any], Any]) -> Curried:
    return Curried(fn)


def adapt(f: Callable) -> Callable[[Any, Any], Any]:
    """Return a callable taking both arguments in one call."""
    if isinstance(f, Curried):
        return f.fn
    return lambda a, b: f(a)(b)


def reduce_std(f: Callable, e: Any, xs: Iterable) -> Any:
    """Left fold that applies the curried reducer one argument at a time."""
    for x in xs:
        e = f(e)(x)
    return e


def reduce_opt(f: Callable, e: Any, xs: Iterable) -> Any:
    """Left fold that adapts the reducer once, then binds both arguments per step."""
    g = adapt(f)
    for x in xs:
        e = g(e, x)
    return e


add = curry2(operator.add)
