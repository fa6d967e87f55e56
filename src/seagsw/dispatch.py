"""
Kernel dispatch and result reshaping.

:class:`KernelDispatcher` runs a kernel over reconciled argument columns,
either once per element or once per adjacent element pair.  The flat
results are given back the shape of the primary argument by
:func:`reshape_result`.

Kernel evaluations are independent of one another, so with more than one
worker the index range is cut into contiguous chunks that are evaluated
on a thread pool and written into disjoint slices of the result.
"""

import concurrent.futures
import logging
from typing import List, Optional, Tuple, Union

import numpy as np
import pandas as pd

from seagsw.config import DispatchOptions
from seagsw.constants import STORAGE_ORDER
from seagsw.errors import ShapeUnsupportedError, UnknownOperationError
from seagsw.kernel import Kernel
from seagsw.operations import Operation
from seagsw.reconcile import ReconciledArguments
from seagsw.shape import ShapeDescriptor

logger = logging.getLogger(__name__)


def check_pairable(operation: Operation, shape: ShapeDescriptor) -> None:
    """Raise :class:`ShapeUnsupportedError` if ``shape`` is a grid."""
    if shape.is_grid:
        raise ShapeUnsupportedError(
            f"{operation.name}() cannot handle a two-dimensional "
            f"{operation.parameters[0]} ({shape.rows}x{shape.cols})"
        )


def _chunk_bounds(n: int, workers: int) -> List[Tuple[int, int]]:
    """Split ``range(n)`` into at most ``workers`` contiguous ``(start, stop)`` chunks."""
    workers = max(1, min(workers, n))
    edges = np.linspace(0, n, workers + 1).astype(int)
    return [(int(a), int(b)) for a, b in zip(edges[:-1], edges[1:]) if b > a]


class KernelDispatcher:
    """
    Evaluate a :class:`~seagsw.kernel.Kernel` over reconciled arguments.

    Parameters
    ----------
    kernel : Kernel
        Numeric kernel providing the per-element functions.
    options : DispatchOptions, optional
        Dispatch options; only ``workers`` is used here.
    """

    def __init__(self, kernel: Kernel, options: Optional[DispatchOptions] = None):
        self.kernel = kernel
        self.options = options or DispatchOptions()

    def _check_supported(self, operation: Operation) -> None:
        if not self.kernel.supports(operation.name):
            raise UnknownOperationError(
                f"{type(self.kernel).__name__} has no operation: {operation.name}"
            )

    def elementwise(
        self,
        operation: Operation,
        arguments: ReconciledArguments,
    ) -> np.ndarray:
        """
        Evaluate an elementwise operation at every index.

        Returns
        -------
        ndarray
            Flat array of length ``arguments.length``.  ``NaN`` values
            produced by the kernel are returned as they are.
        """
        self._check_supported(operation)
        n = arguments.length
        columns = arguments.columns()
        chunks = _chunk_bounds(n, self.options.workers)
        logger.debug(
            "Dispatching %s over %d elements in %d chunk(s)", operation.name, n, len(chunks)
        )

        result = np.empty(n, dtype=float)
        if len(chunks) <= 1:
            if n:
                result[:] = self.kernel.evaluate_columns(operation.name, columns)
            return result

        def run(bounds: Tuple[int, int]) -> None:
            start, stop = bounds
            result[start:stop] = self.kernel.evaluate_columns(
                operation.name, [column[start:stop] for column in columns]
            )

        with concurrent.futures.ThreadPoolExecutor(max_workers=len(chunks)) as pool:
            for future in [pool.submit(run, bounds) for bounds in chunks]:
                future.result()
        return result

    def paired(
        self,
        operation: Operation,
        arguments: ReconciledArguments,
        shape: ShapeDescriptor,
    ) -> Tuple[np.ndarray, ...]:
        """
        Evaluate a paired operation for every adjacent index pair.

        Output ``i`` depends only on input indices ``i`` and ``i + 1``.

        Returns
        -------
        tuple of ndarray
            One flat array of length ``n - 1`` per output of the operation
            (empty when ``n < 2``).

        Raises
        ------
        ShapeUnsupportedError
            If the primary argument is a grid.  Nothing is evaluated.
        """
        check_pairable(operation, shape)
        self._check_supported(operation)

        n = arguments.length
        m = max(n - 1, 0)
        n_outputs = len(operation.outputs)
        columns = arguments.columns()
        chunks = _chunk_bounds(m, self.options.workers)
        logger.debug(
            "Dispatching %s over %d pairs in %d chunk(s)", operation.name, m, len(chunks)
        )

        results = tuple(np.empty(m, dtype=float) for _ in range(n_outputs))
        if len(chunks) <= 1:
            if m:
                values = self.kernel.evaluate_pair_columns(operation.name, columns, n_outputs)
                for out, value in zip(results, values):
                    out[:] = value
            return results

        def run(bounds: Tuple[int, int]) -> None:
            start, stop = bounds
            # pairs start..stop-1 need elements start..stop
            values = self.kernel.evaluate_pair_columns(
                operation.name, [column[start:stop + 1] for column in columns], n_outputs
            )
            for out, value in zip(results, values):
                out[start:stop] = value

        with concurrent.futures.ThreadPoolExecutor(max_workers=len(chunks)) as pool:
            for future in [pool.submit(run, bounds) for bounds in chunks]:
                future.result()
        return results


def reshape_result(
    flat: np.ndarray,
    shape: ShapeDescriptor,
    name: Optional[str] = None,
) -> Union[float, np.ndarray, pd.Series, pd.DataFrame]:
    """
    Give a flat elementwise result the shape of the primary argument.

    Parameters
    ----------
    flat : ndarray
        Flat result of length ``shape.length``.
    shape : ShapeDescriptor
        Descriptor of the primary argument.
    name : str, optional
        Name given to a pandas ``Series`` result.

    Returns
    -------
    float, ndarray, Series or DataFrame
        * scalar primary -> ``float``
        * sequence primary -> 1-d ndarray (``Series`` with the primary's
          index for pandas input)
        * grid primary -> ``rows x cols`` ndarray rebuilt column-major
          (``DataFrame`` with the primary's labels for pandas input)
    """
    if flat.size != shape.length:
        raise ValueError(f"Result has {flat.size} elements, expected {shape.length}")

    if shape.is_scalar:
        return float(flat[0])

    if shape.is_grid:
        grid = np.reshape(flat, (shape.rows, shape.cols), order=STORAGE_ORDER)
        if shape.is_pandas:
            return pd.DataFrame(grid, index=shape.index, columns=shape.columns)
        return grid

    if shape.is_pandas:
        return pd.Series(flat, index=shape.index, name=name)
    return flat
