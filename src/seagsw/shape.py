"""
Shape classification of function arguments.

Every public operation inspects the shape of its primary (first) argument
exactly once.  The resulting :class:`ShapeDescriptor` is threaded through
reconciliation and reshaping so that no later stage needs to look at the
original argument again.

Grids are flattened column-major (``order="F"``): cell ``[i, j]`` of an
``rows x cols`` grid lands at flat index ``j * rows + i``.  This is the
same enumeration used when longitude/latitude axes are expanded, so a
grid and its expanded coordinates line up element by element.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

import numpy as np
import pandas as pd

from seagsw.constants import MAX_DIMENSIONS, STORAGE_ORDER, ShapeKind
from seagsw.errors import ShapeUnsupportedError


@dataclass(frozen=True)
class ShapeDescriptor:
    """
    Shape of the primary argument of an operation call.

    Parameters
    ----------
    kind : ShapeKind
        ``SCALAR``, ``SEQUENCE`` or ``GRID``.
    length : int
        Total number of elements; ``1`` for scalars.
    rows, cols : int
        Grid extents.  Sequences report ``(length, 1)`` and scalars
        ``(1, 1)`` so that ``rows * cols == length`` always holds.
    index, columns : pandas.Index, optional
        Labels of a pandas primary argument, restored on the output.
    """

    kind: ShapeKind
    length: int
    rows: int
    cols: int
    index: Optional[pd.Index] = field(default=None, compare=False, repr=False)
    columns: Optional[pd.Index] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        if self.rows * self.cols != self.length:
            raise ValueError(
                f"Grid extents {self.rows}x{self.cols} do not match length {self.length}"
            )

    @property
    def is_scalar(self) -> bool:
        return self.kind == ShapeKind.SCALAR

    @property
    def is_grid(self) -> bool:
        return self.kind == ShapeKind.GRID

    @property
    def is_pandas(self) -> bool:
        return self.index is not None


def as_array(value: Any) -> np.ndarray:
    """
    Convert an argument to a float64 ndarray, keeping its dimensionality.

    ``None`` and pandas missing values become ``NaN``.
    """
    if isinstance(value, (pd.Series, pd.DataFrame)):
        return value.to_numpy(dtype=float, na_value=np.nan)
    return np.asarray(value, dtype=float)


def flatten(value: Any) -> np.ndarray:
    """Return the elements of ``value`` as a 1-d array in storage order."""
    arr = as_array(value)
    if arr.ndim > MAX_DIMENSIONS:
        raise ShapeUnsupportedError(
            f"Arguments may have at most {MAX_DIMENSIONS} dimensions, got {arr.ndim}"
        )
    return np.ravel(arr, order=STORAGE_ORDER)


def describe(value: Any) -> ShapeDescriptor:
    """
    Build the :class:`ShapeDescriptor` of a primary argument.

    Parameters
    ----------
    value : float, sequence, ndarray, Series or DataFrame
        The primary argument of an operation.

    Returns
    -------
    ShapeDescriptor

    Raises
    ------
    ShapeUnsupportedError
        If ``value`` has more than two dimensions.

    Examples
    --------
    >>> describe(35.0).kind
    <ShapeKind.SCALAR: 0>
    >>> d = describe(np.zeros((3, 2)))
    >>> d.kind, d.rows, d.cols, d.length
    (<ShapeKind.GRID: 2>, 3, 2, 6)
    """
    arr = as_array(value)

    if arr.ndim == 0:
        return ShapeDescriptor(ShapeKind.SCALAR, 1, 1, 1)

    if arr.ndim == 1:
        index = value.index if isinstance(value, pd.Series) else None
        return ShapeDescriptor(ShapeKind.SEQUENCE, arr.size, arr.size, 1, index=index)

    if arr.ndim == 2:
        rows, cols = arr.shape
        if isinstance(value, pd.DataFrame):
            return ShapeDescriptor(
                ShapeKind.GRID, arr.size, rows, cols,
                index=value.index, columns=value.columns,
            )
        return ShapeDescriptor(ShapeKind.GRID, arr.size, rows, cols)

    raise ShapeUnsupportedError(
        f"Arguments may have at most {MAX_DIMENSIONS} dimensions, got {arr.ndim}"
    )
