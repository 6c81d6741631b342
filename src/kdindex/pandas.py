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
"""
Module wrapping pandas DataFrames.
"""
import pandas

from .errors import NullInputError
from .tree import KdTree


class FrameTree():
    """
    K-d tree over the rows of a DataFrame.

    Rows are located by the values of 2 or 3 coordinate columns. Queries
    return slices of the frame, keeping its index.

    Parameters
    ----------
    frame: pandas DataFrame
    columns: sequence of str (default ('x', 'y'))
        Names of the coordinate columns. Their number sets the dimension of
        the tree.
    n_jobs: int, optional
        See :class:`KdTree`.

    Attributes
    ----------
    frame: pandas DataFrame
    columns: list of str
    tree: KdTree
        Tree over row positions in `frame`.
    """

    __slots__ = ('frame', 'columns', 'tree')

    def __init__(self, frame, columns=('x', 'y'), n_jobs=None):
        if frame is None:
            raise NullInputError("frame cannot be None.")
        self.frame = frame
        self.columns = list(columns)
        coords = [tuple(row) for row in
                  frame[self.columns].to_numpy(dtype=float).tolist()]
        self.tree = KdTree(range(len(coords)), coords.__getitem__,
                           dimension=len(self.columns), n_jobs=n_jobs)

    def __len__(self):
        return len(self.tree)

    def __repr__(self):
        return "<{}(columns={}, size={}) at 0x{:x}>".format(
            self.__class__.__name__, self.columns, len(self), id(self))

    def _rows(self, found, include_distance):
        if not include_distance:
            return self.frame.iloc[found]
        rows = self.frame.iloc[[i for _, i in found]].copy()
        rows['distance'] = [d for d, _ in found]
        return rows

    def nearest_neighbour(self, point):
        """Row nearest to `point`, as a Series."""
        return self.frame.iloc[self.tree.nearest_neighbour(point)]

    def nearest_neighbours(self, point, radius, include_distance=False):
        """
        Rows within `radius` of `point`.

        Parameters
        ----------
        point: sequence of float
        radius: float
        include_distance: bool (default False)
            Adds a 'distance' column with the distance to `point`.

        Returns
        -------
        pandas DataFrame
        """
        found = self.tree.nearest_neighbours(
            point, radius, return_distance=include_distance)
        return self._rows(found, include_distance)

    def k_nearest_neighbours(self, point, k, include_distance=False):
        """
        The `k` rows nearest to `point`, sorted by distance.

        Parameters
        ----------
        point: sequence of float
        k: int
        include_distance: bool (default False)
            Adds a 'distance' column with the distance to `point`.

        Returns
        -------
        pandas DataFrame
        """
        found = self.tree.k_nearest_neighbours(
            point, k, return_distance=include_distance)
        return self._rows(found, include_distance)

    def boxed_range(self, corner1, corner2):
        """Rows inside the box spanned by `corner1` and `corner2`."""
        return self.frame.iloc[self.tree.boxed_range(corner1, corner2)]


def from_points(points, columns=('x', 'y', 'z')):
    """Builds a DataFrame of coordinates, as expected by :class:`FrameTree`."""
    return pandas.DataFrame(list(points), columns=list(columns), dtype=float)
