"""
Dispatch configuration.

Options are passed explicitly to :class:`seagsw.properties.SeawaterProperties`;
nothing here is read from module-level state at call time.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class DispatchOptions:
    """
    Runtime options controlling argument recycling and kernel dispatch.

    Parameters
    ----------
    strict_recycling : bool, default ``False``
        When ``True``, a non-scalar secondary argument whose length is
        larger than the primary length, or does not divide it, raises
        :class:`~seagsw.errors.ArgumentLengthError`.  The permissive
        default recycles cyclically and truncates, logging the event.
    workers : int, default ``1``
        Number of threads used to evaluate the kernel.  Values above one
        split the element range into contiguous, index-disjoint chunks.

    Raises
    ------
    ValueError
        If ``workers`` is smaller than one.
    """

    strict_recycling: bool = False
    workers: int = 1

    def __post_init__(self):
        """Validate option values"""
        if int(self.workers) != self.workers or self.workers < 1:
            raise ValueError("workers must be a positive integer")
