"""
K-d tree spatial indexing of located items.

A k-d tree is built once from a whole collection, splitting it at the median
on alternating axes. The top levels of the tree are built in parallel. Built
trees answer nearest neighbour, k-nearest neighbours, radius and
axis-aligned box queries by branch-and-bound search, and are safe to query
concurrently.

Any item type can be indexed given a function returning its 2 or 3
coordinates. Point trees and a DataFrame wrapper cover the common cases.
"""
import logging

from .errors import (  # noqa: F401
    KdTreeError, NullInputError, EmptyInputError, InvalidDimensionError)
from .tree import KdTree  # noqa: F401
from .points import Point2dTree, Point3dTree  # noqa: F401

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
