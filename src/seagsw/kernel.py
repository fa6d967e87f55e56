"""
Numeric kernels evaluated by the dispatch layer.

A kernel is a set of pure functions, one per operation name.  Elementwise
functions map one tuple of physical values to one value; paired functions
map two adjacent tuples to a tuple of outputs.  Invalid physical domains
are reported as ``NaN``, never raised.

Two implementations are provided:

* :class:`GswKernel` - delegates to the TEOS-10 C library through the
  ``gsw`` package (GSW-Python).
* :class:`FunctionKernel` - built from plain Python callables; useful for
  testing the dispatch layer or plugging in alternative physics.
"""

from abc import ABC, abstractmethod
from typing import Callable, Dict, Mapping, Optional, Sequence, Tuple

import numpy as np
import gsw

from seagsw.errors import UnknownOperationError
from seagsw.operations import OPERATIONS


class Kernel(ABC):
    """Abstract base class for per-element numeric kernels"""

    @abstractmethod
    def supports(self, name: str) -> bool:
        """Return ``True`` if the kernel implements operation ``name``"""

    @abstractmethod
    def evaluate(self, name: str, *values: float) -> float:
        """Evaluate elementwise operation ``name`` for one element tuple"""

    def evaluate_pair(
        self,
        name: str,
        first: Tuple[float, ...],
        second: Tuple[float, ...],
    ) -> Tuple[float, ...]:
        """Evaluate paired operation ``name`` for two adjacent element tuples"""
        raise UnknownOperationError(f"Kernel has no paired operation: {name}")

    def evaluate_columns(self, name: str, columns: Sequence[np.ndarray]) -> np.ndarray:
        """
        Evaluate ``name`` for every index of the aligned ``columns``.

        The default calls :meth:`evaluate` once per index.  Subclasses may
        override it with a vectorised equivalent.
        """
        n = len(columns[0]) if columns else 0
        result = np.empty(n, dtype=float)
        for i in range(n):
            result[i] = self.evaluate(name, *(float(column[i]) for column in columns))
        return result

    def evaluate_pair_columns(
        self,
        name: str,
        columns: Sequence[np.ndarray],
        n_outputs: int,
    ) -> Tuple[np.ndarray, ...]:
        """
        Evaluate paired operation ``name`` for every adjacent index pair.

        Returns ``n_outputs`` arrays of length ``n - 1``.  The default calls
        :meth:`evaluate_pair` once per pair ``(i, i + 1)``.
        """
        n = len(columns[0]) if columns else 0
        m = max(n - 1, 0)
        results = tuple(np.empty(m, dtype=float) for _ in range(n_outputs))
        for i in range(m):
            first = tuple(float(column[i]) for column in columns)
            second = tuple(float(column[i + 1]) for column in columns)
            values = self.evaluate_pair(name, first, second)
            if len(values) != n_outputs:
                raise ValueError(
                    f"Kernel returned {len(values)} outputs for '{name}', expected {n_outputs}"
                )
            for out, value in zip(results, values):
                out[i] = value
        return results


class FunctionKernel(Kernel):
    """
    Kernel assembled from plain callables.

    Parameters
    ----------
    elementwise : mapping of str to callable
        ``name -> f(*values) -> float``.
    paired : mapping of str to callable, optional
        ``name -> f(first, second) -> tuple``, where ``first`` and
        ``second`` are the element tuples at indices ``i`` and ``i + 1``.

    Examples
    --------
    >>> kernel = FunctionKernel({"sigma0": lambda SA, CT: SA - CT})
    >>> kernel.evaluate("sigma0", 35.0, 10.0)
    25.0
    """

    def __init__(
        self,
        elementwise: Optional[Mapping[str, Callable[..., float]]] = None,
        paired: Optional[Mapping[str, Callable[..., Tuple[float, ...]]]] = None,
    ):
        self.elementwise: Dict[str, Callable[..., float]] = dict(elementwise or {})
        self.paired: Dict[str, Callable[..., Tuple[float, ...]]] = dict(paired or {})

    def supports(self, name: str) -> bool:
        return name in self.elementwise or name in self.paired

    def evaluate(self, name: str, *values: float) -> float:
        try:
            func = self.elementwise[name]
        except KeyError:
            raise UnknownOperationError(f"Kernel has no operation: {name}") from None
        return float(func(*values))

    def evaluate_pair(self, name, first, second):
        try:
            func = self.paired[name]
        except KeyError:
            raise UnknownOperationError(f"Kernel has no paired operation: {name}") from None
        return tuple(float(v) for v in func(first, second))


# Operation names whose gsw function is spelled differently
GSW_FUNCTION_NAMES = {
    "specvol_anom": "specvol_anom_standard",
}

LATITUDE_RANGE = (-90.0, 90.0)  # degrees N


class GswKernel(Kernel):
    """
    Kernel backed by the ``gsw`` package (GSW-Python).

    The gsw functions are numpy ufuncs or ufunc wrappers, so
    :meth:`evaluate_columns` hands over whole columns at once.  Since each
    element is computed independently this is equivalent to calling the
    scalar function once per index.

    Some gsw wrappers (``Nsquared`` among them) raise on a latitude
    outside [-90, 90].  Such latitudes are replaced by ``NaN`` before the
    call so that the affected outputs come back as ``NaN``.
    """

    def _function(self, name: str) -> Callable:
        func = getattr(gsw, GSW_FUNCTION_NAMES.get(name, name), None)
        if func is None:
            raise UnknownOperationError(f"gsw has no function for operation: {name}")
        return func

    def _arguments(self, name: str, columns: Sequence) -> list:
        arguments = list(columns)
        operation = OPERATIONS.get(name)
        if operation is None or "latitude" not in operation.parameters:
            return arguments
        i = operation.parameters.index("latitude")
        lat = np.asarray(arguments[i], dtype=float)
        low, high = LATITUDE_RANGE
        arguments[i] = np.where((lat < low) | (lat > high), np.nan, lat)
        return arguments

    def supports(self, name: str) -> bool:
        return hasattr(gsw, GSW_FUNCTION_NAMES.get(name, name))

    def evaluate(self, name: str, *values: float) -> float:
        result = self._function(name)(*self._arguments(name, values))
        return float(np.asarray(result, dtype=float))

    def evaluate_columns(self, name, columns):
        n = len(columns[0]) if columns else 0
        if n == 0:
            return np.empty(0, dtype=float)
        result = np.asarray(self._function(name)(*self._arguments(name, columns)), dtype=float)
        return np.broadcast_to(result, (n,)).copy()

    def evaluate_pair(self, name, first, second):
        columns = [np.array(values, dtype=float) for values in zip(first, second)]
        outputs = self._function(name)(*self._arguments(name, columns))
        return tuple(float(np.asarray(out, dtype=float)[0]) for out in outputs)

    def evaluate_pair_columns(self, name, columns, n_outputs):
        n = len(columns[0]) if columns else 0
        if n < 2:
            return tuple(np.empty(0, dtype=float) for _ in range(n_outputs))
        outputs = self._function(name)(*self._arguments(name, columns))
        if len(outputs) != n_outputs:
            raise ValueError(
                f"gsw returned {len(outputs)} outputs for '{name}', expected {n_outputs}"
            )
        return tuple(np.asarray(out, dtype=float).reshape(n - 1) for out in outputs)
