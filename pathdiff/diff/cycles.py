# Copyright Red Hat
#
# pathdiff/diff/cycles.py - Path diff cycle tracking
#
# This file is part of the pathdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Tracking of container pairs on the active comparison path.
"""
from contextlib import contextmanager
from typing import Any, Iterator, Set, Tuple
import logging

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error

#: Identity key for a (previous, current) container pair
PairKey = Tuple[int, int]


class CycleTracker:
    """
    Set of (previous, current) container pairs currently being compared.

    Pairs are keyed on the identity of both containers. A pair is entered
    before the engine descends into it and exited when the comparison of
    that pair returns, so ``is_active()`` is only true while the traversal
    is inside the pair's subtree. A tracker belongs to a single top-level
    diff call.
    """

    def __init__(self):
        """
        Initialise a new, empty ``CycleTracker``.
        """
        self._active: Set[PairKey] = set()

    def __len__(self) -> int:
        """
        Return the number of active pairs.
        """
        return len(self._active)

    @staticmethod
    def _key(previous: Any, current: Any) -> PairKey:
        return (id(previous), id(current))

    def is_active(self, previous: Any, current: Any) -> bool:
        """
        Test whether the pair ``(previous, current)`` is on the active path.

        :param previous: The container from the previous graph.
        :param current: The container from the current graph.
        :returns: ``True`` if the pair is being compared.
        :rtype: ``bool``
        """
        return self._key(previous, current) in self._active

    def enter(self, previous: Any, current: Any) -> PairKey:
        """
        Mark the pair ``(previous, current)`` as active.

        :param previous: The container from the previous graph.
        :param current: The container from the current graph.
        :returns: A token to pass to ``exit()``.
        :rtype: ``PairKey``
        """
        token = self._key(previous, current)
        self._active.add(token)
        return token

    def exit(self, token: PairKey):
        """
        Mark the pair identified by ``token`` as no longer active.

        :param token: A token returned by ``enter()``.
        :type token: ``PairKey``
        """
        self._active.discard(token)

    @contextmanager
    def track(self, previous: Any, current: Any) -> Iterator[PairKey]:
        """
        Context manager that keeps the pair ``(previous, current)`` active
        for the duration of the ``with`` block.
        """
        token = self.enter(previous, current)
        try:
            yield token
        finally:
            self.exit(token)
