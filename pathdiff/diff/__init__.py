# Copyright Red Hat
#
# pathdiff/diff/__init__.py - Path diff package
#
# This file is part of the pathdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Path diff package.

Provides ordered, path-addressed comparison of graphs of nested mappings
and lists. The main entry points are ``diff()``, ``DiffEngine`` and
``DiffOptions``.
"""
from .difftypes import ArrayEquality, ArrayPolicy, DiffType
from .engine import MISSING, DiffEngine, DiffRecord, DiffResults, diff, format_path
from .equality import NodeKind, leaf_equals, node_kind
from .options import DiffOptions

__all__ = [
    "ArrayEquality",
    "ArrayPolicy",
    "DiffEngine",
    "DiffOptions",
    "DiffRecord",
    "DiffResults",
    "DiffType",
    "MISSING",
    "NodeKind",
    "diff",
    "format_path",
    "leaf_equals",
    "node_kind",
]
