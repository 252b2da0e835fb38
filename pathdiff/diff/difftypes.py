# Copyright Red Hat
#
# pathdiff/diff/difftypes.py - Path diff types
#
# This file is part of the pathdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Path diff types
"""
from enum import Enum


class DiffType(Enum):
    """
    Enum for different difference types.
    """

    CREATE = "CREATE"
    REMOVE = "REMOVE"
    CHANGE = "CHANGE"


class ArrayPolicy(Enum):
    """
    Enum for the ways a pair of arrays may be compared.
    """

    DIFF = "diff"  # Recurse by index
    ATOMIC = "atomic"  # Compare as a single leaf
    IGNORE = "ignore"  # Skip the array subtree


class ArrayEquality(Enum):
    """
    Enum for whole-array equality rules used with ``ArrayPolicy.ATOMIC``.
    """

    REFERENCE = "reference"
    SHALLOW = "shallow"
