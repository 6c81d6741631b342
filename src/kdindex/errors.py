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
Exceptions raised when building a k-d tree.

All of them are raised by the tree constructor, before any node exists: a
tree is either fully built or not built at all.
'''


class KdTreeError(Exception):
    """Base class of the k-d tree construction errors."""


class NullInputError(KdTreeError, TypeError):
    """The source items or the position function is missing."""


class EmptyInputError(KdTreeError, ValueError):
    """The source items are empty, so there is no root to build."""


class InvalidDimensionError(KdTreeError, ValueError):
    """The tree dimension is neither 2 nor 3."""
