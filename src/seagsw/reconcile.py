"""
Argument reconciliation and coordinate grid expansion.

This module implements:
1. Cyclic recycling of secondary arguments to the primary length
2. Expansion of longitude/latitude axes onto a two-dimensional field

Recycling is loose: a shorter argument is repeated with
wrap-around whether or not its length divides the primary length, and a
longer one is cut down to the primary length.  Both cases are logged.
A strict mode that rejects them is available through
:class:`~seagsw.config.DispatchOptions`.
"""

import logging
from collections.abc import Mapping
from typing import Any, Dict, Iterator, Optional, Tuple

import numpy as np

from seagsw.errors import ArgumentLengthError
from seagsw.shape import ShapeDescriptor, describe, flatten

logger = logging.getLogger(__name__)


class ReconciledArguments(Mapping):
    """
    Read-only mapping of argument name to a flat column of length ``n``.

    Iteration follows the order in which the arguments were supplied, which
    is the positional order expected by the kernel.
    """

    def __init__(self, columns: Dict[str, np.ndarray], length: int):
        for name, column in columns.items():
            if column.shape != (length,):
                raise ValueError(
                    f"Column '{name}' has shape {column.shape}, expected ({length},)"
                )
            column.flags.writeable = False
        self._columns = dict(columns)
        self.length = length

    def __getitem__(self, name: str) -> np.ndarray:
        return self._columns[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._columns)

    def __len__(self) -> int:
        return len(self._columns)

    def __repr__(self) -> str:
        return f"ReconciledArguments(names={list(self._columns)}, length={self.length})"

    def columns(self) -> Tuple[np.ndarray, ...]:
        """Columns in positional order."""
        return tuple(self._columns.values())

    def row(self, i: int) -> Tuple[float, ...]:
        """Element tuple at index ``i``, in positional order."""
        return tuple(float(column[i]) for column in self._columns.values())


def recycle(
    values: np.ndarray,
    n: int,
    name: str = "argument",
    strict: bool = False,
) -> np.ndarray:
    """
    Recycle a flat array cyclically to exactly ``n`` elements.

    Element ``i`` of the result is ``values[i % len(values)]``.  A
    non-dividing length gives a partial final repetition, and a longer
    array is truncated to its first ``n`` elements.

    Parameters
    ----------
    values : ndarray
        One-dimensional input.
    n : int
        Target length.
    name : str
        Argument name, used in log and error messages.
    strict : bool, default ``False``
        Raise instead of recycling when ``values`` is empty, or when
        ``len(values)`` is larger than ``n`` or does not divide it.
        Length-one arrays are always accepted.

    Returns
    -------
    ndarray
        New array of shape ``(n,)``.

    Raises
    ------
    ArgumentLengthError
        In strict mode only, for an ambiguous length.

    Examples
    --------
    >>> recycle(np.array([1.0, 2.0]), 5)
    array([1., 2., 1., 2., 1.])
    """
    k = values.size
    if k == n:
        return values.copy()

    if k != 1:
        ambiguous = k == 0 or k > n or n % k != 0
        if strict and ambiguous:
            raise ArgumentLengthError(
                f"Argument '{name}' of length {k} cannot be recycled to length {n}"
            )
        if k == 0:
            logger.warning("Argument '%s' is empty, filled with NaN", name)
            return np.full(n, np.nan)
        if k > n:
            logger.warning(
                "Argument '%s' has length %d, truncated to primary length %d", name, k, n
            )
        elif ambiguous:
            logger.debug(
                "Argument '%s' length %d does not divide %d; partial repetition", name, k, n
            )

    return np.resize(values, n)


def expand_grid(
    shape: ShapeDescriptor,
    longitude: Any,
    latitude: Any,
) -> Tuple[Any, Any]:
    """
    Expand coordinate axes onto the grid of the primary argument.

    When the primary argument is a grid whose row count equals
    ``len(longitude)`` and whose column count equals ``len(latitude)``,
    the axes are replaced by their full outer product, longitude varying
    fastest::

        k = j * rows + i  ->  (longitude[i], latitude[j])

    In every other case both axes are returned unchanged and are later
    recycled like any other argument.

    Parameters
    ----------
    shape : ShapeDescriptor
        Shape of the primary argument.
    longitude, latitude : float or array_like
        Coordinate axes.

    Returns
    -------
    (longitude, latitude) : tuple
        Expanded flat arrays of length ``rows * cols``, or the inputs.

    Examples
    --------
    >>> shape = describe(np.zeros((3, 2)))
    >>> lon, lat = expand_grid(shape, [10, 20, 30], [-5, 5])
    >>> lon
    array([10., 20., 30., 10., 20., 30.])
    >>> lat
    array([-5., -5., -5.,  5.,  5.,  5.])
    """
    if not shape.is_grid:
        return longitude, latitude

    lon = flatten(longitude)
    lat = flatten(latitude)
    if lon.size != shape.rows or lat.size != shape.cols:
        logger.debug(
            "Axes of length %d/%d do not match %dx%d grid; recycling instead",
            lon.size, lat.size, shape.rows, shape.cols,
        )
        return longitude, latitude

    logger.debug("Expanding %d longitudes x %d latitudes onto grid", lon.size, lat.size)
    return np.tile(lon, lat.size), np.repeat(lat, lon.size)


def reconcile(
    arguments: Dict[str, Any],
    shape: Optional[ShapeDescriptor] = None,
    strict: bool = False,
) -> ReconciledArguments:
    """
    Align all arguments of a call to the length of the primary argument.

    The first entry of ``arguments`` is the primary argument.  Every other
    argument is flattened (column-major for grids) and recycled to the
    primary length with :func:`recycle`.

    Parameters
    ----------
    arguments : dict
        Ordered mapping of argument name to value.
    shape : ShapeDescriptor, optional
        Pre-computed descriptor of the primary argument.
    strict : bool, default ``False``
        Passed on to :func:`recycle`.

    Returns
    -------
    ReconciledArguments
    """
    if not arguments:
        raise ValueError("At least one argument is required")

    names = list(arguments)
    primary = arguments[names[0]]
    if shape is None:
        shape = describe(primary)
    n = shape.length

    columns = {names[0]: flatten(primary).copy()}
    for name in names[1:]:
        columns[name] = recycle(flatten(arguments[name]), n, name=name, strict=strict)

    return ReconciledArguments(columns, n)
