# Copyright Red Hat
#
# pathdiff/diff/arrays.py - Path diff array policy handling
#
# This file is part of the pathdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Array comparison policies.
"""
from typing import Any, Sequence
import logging

from pathdiff import PATHDIFF_SUBSYSTEM_DIFF

from .difftypes import ArrayEquality, ArrayPolicy
from .equality import leaf_equals
from .options import DiffOptions

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_diff(msg, *args, **kwargs):
    """A wrapper for diff subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": PATHDIFF_SUBSYSTEM_DIFF}, **kwargs)


def shallow_equal(previous: Sequence[Any], current: Sequence[Any]) -> bool:
    """
    Compare two arrays one level deep.

    :param previous: The previous array.
    :param current: The current array.
    :returns: ``True`` if both arrays have the same length and every pair
              of elements at the same index is equal according to
              ``leaf_equals()``.
    :rtype: ``bool``
    """
    if len(previous) != len(current):
        return False
    return all(leaf_equals(a, b) for a, b in zip(previous, current))


class ArrayPolicyDispatcher:
    """
    Decide how a pair of arrays is compared according to the configured
    ``ArrayPolicy``.
    """

    def __init__(self, options: DiffOptions):
        """
        Initialise a new ``ArrayPolicyDispatcher``.

        :param options: The effective diff options.
        :type options: ``DiffOptions``
        """
        self.policy: ArrayPolicy = options.array_policy
        self.equality: ArrayEquality = options.array_equality

    @property
    def recurses(self) -> bool:
        """
        ``True`` if array pairs are compared index by index.
        """
        return self.policy == ArrayPolicy.DIFF

    def arrays_equal(self, previous: Sequence[Any], current: Sequence[Any]) -> bool:
        """
        Compare two arrays as single values using the configured
        ``ArrayEquality`` rule.

        :param previous: The previous array.
        :param current: The current array.
        :returns: ``True`` if the arrays are equal.
        :rtype: ``bool``
        """
        if self.equality == ArrayEquality.REFERENCE:
            return previous is current
        return shallow_equal(previous, current)

    def changed(self, previous: Sequence[Any], current: Sequence[Any]) -> bool:
        """
        Return ``True`` if the pair of arrays should be reported as a single
        change at the arrays' own path.

        Only valid for policies that do not recurse: with
        ``ArrayPolicy.IGNORE`` the pair never changes.

        :param previous: The previous array.
        :param current: The current array.
        :returns: ``True`` if a change should be reported.
        :rtype: ``bool``
        :raises: ``ValueError`` if called for ``ArrayPolicy.DIFF``.
        """
        if self.policy == ArrayPolicy.IGNORE:
            _log_debug_diff("Skipping array pair under ignore policy")
            return False
        if self.policy == ArrayPolicy.ATOMIC:
            return not self.arrays_equal(previous, current)
        raise ValueError(f"Array policy {self.policy.value} compares by index")
