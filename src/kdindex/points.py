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
K-d trees of plain points.

Points are stored as tuples of floats and are their own positions.
'''
import numpy
import toolz

from .tree import KdTree


def as_points(points, ncoords):
    """
    Normalizes `points` to a list of `ncoords`-tuples of floats.

    Args:
        points: iterable of coordinate sequences, or a 2d-array of shape
            ``(n, ncoords)``. None is passed through.
        ncoords (int): number of coordinates per point.

    Raises:
        ValueError: if the points do not have `ncoords` coordinates each.
    """
    if points is None:
        return None
    arr = numpy.asarray(list(points), dtype=float)
    if arr.size == 0:
        return []
    if arr.ndim != 2 or arr.shape[1] != ncoords:
        raise ValueError(
            "Points must have {} coordinates each, got an array of shape {}"
            .format(ncoords, arr.shape)
        )
    return [tuple(p) for p in arr.tolist()]


class Point3dTree(KdTree):
    """
    K-d tree of 3d points.

    Args:
        points: iterable of 3d points.
        ignore_z (bool, optional): if True, builds a 2d tree where points
            are considered as projected on the XY plane. Distances and box
            containment then disregard the Z coordinate. Defaults to False.
        n_jobs (int, optional): see :class:`KdTree`.
    """

    def __init__(self, points, ignore_z=False, n_jobs=None):
        super().__init__(as_points(points, 3), toolz.identity,
                         dimension=2 if ignore_z else 3, n_jobs=n_jobs)
        self.ignore_z = ignore_z


class Point2dTree(KdTree):
    """K-d tree of 2d points."""

    def __init__(self, points, n_jobs=None):
        super().__init__(as_points(points, 2), toolz.identity,
                         dimension=2, n_jobs=n_jobs)
