"""
Input preparation for the risk-set sweep.

The sweep needs two stratum-grouped orderings and a chain-position flag
per row. Callers that already hold them pass them straight through;
otherwise these helpers derive them from the raw data.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pycoxsurv.survival._common import ChainPosition


def sort_orders(
    start: NDArray,
    stop: NDArray,
    strata: NDArray,
) -> tuple[NDArray, NDArray]:
    """Entry and exit orderings, grouped by stratum.

    Returns
    -------
    (sort1, sort2)
        sort1 ascends by start within stratum, sort2 by stop. Both list
        strata in ascending code order and are stable within ties.
    """
    sort1 = np.lexsort((start, strata)).astype(np.intp)
    sort2 = np.lexsort((stop, strata)).astype(np.intp)
    return sort1, sort2


def chain_positions(id, start: NDArray, stop: NDArray) -> NDArray:
    """Chain-position flag of each row, from subject identifiers.

    Rows of one subject are ordered by start. A row continues a chain when
    its start equals the previous row's stop; any gap starts a new chain.
    For one subject with rows (1,2] (2,3] (3,4] (5,8] the result is
    START, INTERIOR, END, BOTH.

    Returns
    -------
    NDArray
        (n,) integer ChainPosition codes in the original row order.
    """
    id = np.asarray(id).ravel()
    n = len(id)
    if n == 0:
        return np.zeros(0, dtype=np.intp)

    order = np.lexsort((start, id))
    id_o = id[order]
    same = id_o[1:] == id_o[:-1]
    joined = same & (stop[order][:-1] == start[order][1:])

    begins = np.ones(n, dtype=bool)
    ends = np.ones(n, dtype=bool)
    begins[1:] = ~joined
    ends[:-1] = ~joined

    flags = np.full(n, int(ChainPosition.INTERIOR), dtype=np.intp)
    flags[begins & ~ends] = ChainPosition.START
    flags[~begins & ends] = ChainPosition.END
    flags[begins & ends] = ChainPosition.BOTH

    position = np.empty(n, dtype=np.intp)
    position[order] = flags
    return position
