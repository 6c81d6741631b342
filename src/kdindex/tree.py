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
K-d tree spatial index.

A :class:`KdTree` organizes a collection of items located by 2 or 3
coordinates. The tree is built once from the whole collection, splitting it
at the median on alternating axes, and then answers nearest neighbour,
k-nearest neighbours, radius and box queries by branch-and-bound descent.

The items themselves can be of any type: the tree only sees them through a
position function returning their coordinates. Trees are immutable once
built and can be queried concurrently.
'''
import heapq
import itertools
import logging
import math
import multiprocessing.pool
import numbers
import os
import time

import toolz

from .errors import EmptyInputError, InvalidDimensionError, NullInputError
from .node import TreeNode
from .selection import select_median


logger = logging.getLogger(__name__)

VALID_DIMENSIONS = (2, 3)


def parallel_depth(n_jobs):
    """
    Number of tree levels whose subtrees are built concurrently.

    It is the smallest depth such that ``n_jobs >> depth <= 1``, so that the
    number of concurrent builds is about the number of processing units.
    """
    depth = 0
    while n_jobs >> depth > 1:
        depth += 1
    return depth


def sqr_distance_2d(p1, p2):
    return (p1[0] - p2[0])**2 + (p1[1] - p2[1])**2


def sqr_distance_3d(p1, p2):
    return (p1[0] - p2[0])**2 + (p1[1] - p2[1])**2 + (p1[2] - p2[2])**2


class KdTree():
    """
    Build-once k-d tree over arbitrary items.

    Args:
        items (iterable): items to index. It is consumed once.
        get_position (callable): returns the coordinates of an item, as a
            sequence of at least `dimension` numbers. Extra components are
            ignored.
        dimension (int, optional): 2 or 3. With 2, items are considered as
            projected on the plane of their first two coordinates.
            Defaults to 3.
        n_jobs (int, optional): number of processing units used to build
            the tree. Defaults to the number of CPUs.

    Attributes:
        root (TreeNode): root node of the tree.
        dimension (int): number of coordinates used by the tree.

    Raises:
        InvalidDimensionError: if `dimension` is not the integer 2 or 3.
        NullInputError: if `items` or `get_position` is None.
        EmptyInputError: if `items` is empty.
    """

    def __init__(self, items, get_position, dimension=3, n_jobs=None):
        if (not isinstance(dimension, numbers.Integral)
                or dimension not in VALID_DIMENSIONS):
            raise InvalidDimensionError(
                "Invalid dimension {}: must be one of {}"
                .format(dimension, VALID_DIMENSIONS)
            )
        if items is None:
            raise NullInputError("items cannot be None.")
        if get_position is None:
            raise NullInputError("get_position cannot be None.")
        if n_jobs is None:
            n_jobs = os.cpu_count() or 1
        elif not isinstance(n_jobs, numbers.Integral) or n_jobs < 1:
            raise ValueError(
                "n_jobs must be a positive integer, got {}".format(n_jobs))
        self.dimension = int(dimension)
        self._get_position = get_position
        if dimension == 2:
            self._sqr_distance = sqr_distance_2d
        else:
            self._sqr_distance = sqr_distance_3d

        items = list(items)
        if not items:
            raise EmptyInputError("Cannot build a k-d tree without items.")
        self._size = len(items)
        pdepth = parallel_depth(n_jobs)
        t1 = time.perf_counter()
        self.root = self._build(items, 0, pdepth)
        t2 = time.perf_counter()
        logger.debug(
            "Built %d-d tree of %d items in %.6fs (parallel depth %d)",
            dimension, self._size, t2 - t1, pdepth,
        )

    def __len__(self):
        """Number of items in the tree."""
        return self._size

    def __iter__(self):
        """Iterates over the items in pre-order."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node.value
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)

    def __repr__(self):
        return "<{}(dimension={}, size={}) at 0x{:x}>".format(
            self.__class__.__name__, self.dimension, self._size, id(self))

    @property
    def height(self):
        """Number of levels in the tree."""
        height = 0
        stack = [self.root]
        while stack:
            node = stack.pop()
            height = max(height, node.depth + 1)
            stack.extend(child for child in (node.left, node.right)
                         if child is not None)
        return height

    # ===========================  Construction  ============================

    def _build(self, items, depth, pdepth):
        """Builds the subtree of `items`, rooted at `depth`."""
        if not items:
            return None
        axis = depth % self.dimension
        get_position = self._get_position
        median = select_median(
            items, key=lambda item: get_position(item)[axis])
        mid = len(items) // 2
        partitions = [items[:mid], items[mid + 1:]]
        task = toolz.partial(self._build, depth=depth + 1, pdepth=pdepth)
        if depth < pdepth:
            with multiprocessing.pool.ThreadPool(2) as pool:
                left, right = pool.map(task, partitions)
        else:
            left, right = map(task, partitions)
        return TreeNode(median, depth, left, right)

    # =============================  Queries  ===============================

    def _coords(self, point):
        coords = tuple(point)
        if len(coords) < self.dimension:
            raise ValueError(
                "Expected a point with at least {} coordinates, got {}"
                .format(self.dimension, len(coords))
            )
        return coords[:self.dimension]

    def nearest_neighbour(self, point):
        """
        Returns the item nearest to `point`.

        When several items are at the same distance, the first one found
        is returned.
        """
        best, _ = self._nearest(self._coords(point), self.root, None,
                                math.inf)
        return best

    def _nearest(self, point, node, best, best_dist):
        if node is None:
            return best, best_dist
        position = self._get_position(node.value)
        dist = self._sqr_distance(point, position)
        if dist < best_dist:
            best, best_dist = node.value, dist
        axis = node.depth % self.dimension
        delta = point[axis] - position[axis]
        near, far = ((node.left, node.right) if delta < 0
                     else (node.right, node.left))
        best, best_dist = self._nearest(point, near, best, best_dist)
        # The other half-space can only be closer if the splitting plane is.
        if delta * delta < best_dist:
            best, best_dist = self._nearest(point, far, best, best_dist)
        return best, best_dist

    def nearest_neighbours(self, point, radius, return_distance=False):
        """
        Returns the items within `radius` of `point`.

        Args:
            point (sequence): center of the search.
            radius (float): search distance, inclusive.
            return_distance (bool, optional): if True, returns
                ``(distance, item)`` pairs instead of items.

        Returns:
            list: matching items in tree order, not sorted by distance.
        """
        if radius < 0:
            raise ValueError(
                "radius must be non-negative, got {}".format(radius))
        found = []
        self._within(self._coords(point), radius * radius, self.root, found)
        if return_distance:
            return [(math.sqrt(dist), item) for dist, item in found]
        return [item for _, item in found]

    def _within(self, point, sqr_radius, node, found):
        if node is None:
            return
        position = self._get_position(node.value)
        dist = self._sqr_distance(point, position)
        if dist <= sqr_radius:
            found.append((dist, node.value))
        axis = node.depth % self.dimension
        delta = point[axis] - position[axis]
        near, far = ((node.left, node.right) if delta < 0
                     else (node.right, node.left))
        self._within(point, sqr_radius, near, found)
        if delta * delta <= sqr_radius:
            self._within(point, sqr_radius, far, found)

    def k_nearest_neighbours(self, point, k, return_distance=False):
        """
        Returns the `k` items nearest to `point`.

        Args:
            point (sequence): center of the search.
            k (int): number of items to return. All items are returned if
                the tree holds fewer than `k`.
            return_distance (bool, optional): if True, returns
                ``(distance, item)`` pairs instead of items.

        Returns:
            list: items sorted by increasing distance to `point`. Items at
                equal distance keep the order in which they were found.

        Raises:
            ValueError: if `k` is not an integer.
        """
        if not isinstance(k, numbers.Integral):
            raise ValueError("k must be an integer, got {!r}".format(k))
        if k <= 0:
            return []
        # Fixed length max heap on distance, hence the negated distances.
        # The counter breaks ties so that items are never compared.
        heap = []
        self._k_nearest(self._coords(point), k, self.root, heap,
                        itertools.count())
        ranked = sorted(heap, key=lambda entry: (-entry[0], entry[1]))
        if return_distance:
            return [(math.sqrt(-dist), item) for dist, _, item in ranked]
        return [item for _, _, item in ranked]

    def _k_nearest(self, point, k, node, heap, counter):
        if node is None:
            return
        position = self._get_position(node.value)
        dist = self._sqr_distance(point, position)
        if len(heap) < k:
            heapq.heappush(heap, (-dist, next(counter), node.value))
        elif dist < -heap[0][0]:
            heapq.heapreplace(heap, (-dist, next(counter), node.value))
        axis = node.depth % self.dimension
        delta = point[axis] - position[axis]
        near, far = ((node.left, node.right) if delta < 0
                     else (node.right, node.left))
        self._k_nearest(point, k, near, heap, counter)
        if len(heap) < k or delta * delta < -heap[0][0]:
            self._k_nearest(point, k, far, heap, counter)

    def boxed_range(self, corner1, corner2):
        """
        Returns the items inside the axis-aligned box spanned by two
        opposite corners, bounds included.
        """
        corners = list(zip(self._coords(corner1), self._coords(corner2)))
        lower = tuple(map(min, corners))
        upper = tuple(map(max, corners))
        found = []
        self._range(lower, upper, self.root, found)
        return found

    def _range(self, lower, upper, node, found):
        if node is None:
            return
        position = self._get_position(node.value)
        if all(lo <= x <= up for lo, x, up in zip(lower, position, upper)):
            found.append(node.value)
        axis = node.depth % self.dimension
        if upper[axis] < position[axis]:
            self._range(lower, upper, node.left, found)
        elif lower[axis] > position[axis]:
            self._range(lower, upper, node.right, found)
        else:
            self._range(lower, upper, node.left, found)
            self._range(lower, upper, node.right, found)
