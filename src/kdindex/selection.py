# Copyright (C) 2018 DataStorm
#
# This file is part of KdIndex.
#
# KdIndex is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# KdIndex is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# A copy of the GNU General Public License is available in the LICENSE
# file or at <http://www.gnu.org/licenses/>.
'''
Median selection for tree construction.
'''


def select_median(items, key):
    """
    Partially sorts `items` in place around its median.

    After the call, the item at index ``len(items) // 2`` is the one a full
    sort by `key` would put there. Items before it have a key lower or equal
    to its key, items after it have a key greater or equal. Neither side is
    sorted.

    The selection is an iterative quickselect taking the middle of the
    current window as pivot. Its running time is linear on average, but
    inputs with many equal keys make it degrade toward quadratic time.

    Args:
        items (list): mutable sequence to partition.
        key (callable): maps an item to the value it is compared on.

    Returns:
        The median item.

    Raises:
        ValueError: if `items` is empty.
    """
    if not items:
        raise ValueError("Cannot select the median of an empty sequence.")
    keys = [key(item) for item in items]
    k = len(items) // 2
    lo = 0
    hi = len(items) - 1
    while lo < hi:
        pivot = keys[(lo + hi) // 2]
        r = lo
        w = hi
        # Move items not lower than the pivot to the high end of the window.
        while r < w:
            if keys[r] >= pivot:
                keys[r], keys[w] = keys[w], keys[r]
                items[r], items[w] = items[w], items[r]
                w -= 1
            else:
                r += 1
        if keys[r] > pivot:
            r -= 1
        if k <= r:
            hi = r
        else:
            lo = r + 1
    return items[k]
