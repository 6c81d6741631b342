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
Nodes of a k-d tree.
'''
import collections


TreeNode = collections.namedtuple('TreeNode', 'value depth left right')
TreeNode.__doc__ = """
A k-d tree node.

Nodes are created bottom-up, once their children exist, and never change
afterwards. A node owns its children: subtrees are never shared.

Attributes:
    value: the indexed item, as given by the caller.
    depth (int): depth of the node, the root being at depth 0. The node
        splits its subtrees on axis ``depth % dimension``.
    left (TreeNode or None): subtree of items not above the node on the
        splitting axis.
    right (TreeNode or None): subtree of items not below the node on the
        splitting axis.
"""
