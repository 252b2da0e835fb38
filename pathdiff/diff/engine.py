# Copyright Red Hat
#
# pathdiff/diff/engine.py - Path diff engine
#
# This file is part of the pathdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Path diff engine
"""
from typing import Any, Dict, Hashable, Iterator, List, Mapping, Optional, Tuple, Union
import logging

from pathdiff import PATHDIFF_SUBSYSTEM_DIFF

from .arrays import ArrayPolicyDispatcher
from .cycles import CycleTracker
from .difftypes import DiffType
from .equality import CONTAINER_KINDS, NodeKind, leaf_equals, node_kind
from .options import DiffOptions, resolve_options

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error

ENGINE_LOG_ME_HARDER = False

#: A path through a graph: object keys and array indices from the root
Path = Tuple[Hashable, ...]


def _log_debug_diff(msg, *args, **kwargs):
    """A wrapper for diff subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": PATHDIFF_SUBSYSTEM_DIFF}, **kwargs)


def _log_debug_diff_extra(msg, *args, **kwargs):
    """A wrapper for diff subsystem debug logs."""
    if ENGINE_LOG_ME_HARDER:  # pragma: no cover
        _log.debug(msg, *args, extra={"subsystem": PATHDIFF_SUBSYSTEM_DIFF}, **kwargs)


class _Missing:
    """
    Marker for a key or index that is absent on one side of a comparison.
    """

    def __repr__(self) -> str:
        return "<missing>"


#: Sentinel for absent nodes (``None`` is a valid node value)
MISSING = _Missing()


def format_path(path: Path) -> str:
    """
    Format ``path`` in ``key.key[index]`` notation.

    :param path: The path to format.
    :type path: ``Path``
    :returns: The formatted path, or the empty string for the root.
    :rtype: ``str``
    """
    parts = []
    for segment in path:
        if isinstance(segment, int) and not isinstance(segment, bool):
            parts.append(f"[{segment}]")
        elif isinstance(segment, str):
            parts.append(f".{segment}" if parts else segment)
        else:
            parts.append(f"[{segment!r}]")
    return "".join(parts)


class DiffRecord:
    """
    A single difference found at a path: a CREATE, REMOVE or CHANGE.
    """

    def __init__(
        self,
        diff_type: DiffType,
        path: Path,
        value: Any = MISSING,
        old_value: Any = MISSING,
    ):
        """
        Initialise a new ``DiffRecord`` object.

        :param diff_type: The diff type for this diff record.
        :type diff_type: ``DiffType``
        :param path: The path of the node that differs.
        :type path: ``Path``
        :param value: The current value (CREATE and CHANGE records).
        :param old_value: The previous value (REMOVE and CHANGE records).
        """
        self.diff_type = diff_type
        self.path = tuple(path)
        self.value = value
        self.old_value = old_value

    @classmethod
    def create(cls, path: Path, value: Any) -> "DiffRecord":
        """Return a new CREATE record."""
        return cls(DiffType.CREATE, path, value=value)

    @classmethod
    def remove(cls, path: Path, old_value: Any) -> "DiffRecord":
        """Return a new REMOVE record."""
        return cls(DiffType.REMOVE, path, old_value=old_value)

    @classmethod
    def change(cls, path: Path, value: Any, old_value: Any) -> "DiffRecord":
        """Return a new CHANGE record."""
        return cls(DiffType.CHANGE, path, value=value, old_value=old_value)

    @property
    def path_str(self) -> str:
        """
        This record's path in ``key.key[index]`` notation.
        """
        return format_path(self.path)

    def __eq__(self, other) -> bool:
        if not isinstance(other, DiffRecord):
            return NotImplemented
        return (
            self.diff_type == other.diff_type
            and self.path == other.path
            and self.value == other.value
            and self.old_value == other.old_value
        )

    def __repr__(self) -> str:
        """
        Return a machine-readable representation of this instance.

        :returns: ``DiffRecord`` constructor style string.
        :rtype: ``str``
        """
        args = [f"DiffType.{self.diff_type.name}", repr(self.path)]
        if self.value is not MISSING:
            args.append(f"value={self.value!r}")
        if self.old_value is not MISSING:
            args.append(f"old_value={self.old_value!r}")
        return f"DiffRecord({', '.join(args)})"

    def __str__(self) -> str:
        """
        Return a string representation of this ``DiffRecord`` object.

        :returns: A human readable representation of this ``DiffRecord``.
        :rtype: ``str``
        """
        path = self.path_str or "(root)"
        if self.diff_type == DiffType.CREATE:
            return f"CREATE {path} = {self.value!r}"
        if self.diff_type == DiffType.REMOVE:
            return f"REMOVE {path} (was {self.old_value!r})"
        return f"CHANGE {path}: {self.old_value!r} -> {self.value!r}"

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert this ``DiffRecord`` object into a dictionary holding the
        record type, path and whichever of ``value`` and ``oldValue`` apply
        to the record type.

        :returns: A dictionary mapping this instance's keys to values.
        :rtype: ``Dict[str, Any]``
        """
        out = {
            "type": self.diff_type.value,
            "path": list(self.path),
        }
        if self.value is not MISSING:
            out["value"] = self.value
        if self.old_value is not MISSING:
            out["oldValue"] = self.old_value
        return out


class DiffResults:
    """Ordered container for diff records with summary methods."""

    def __init__(self, records: List[DiffRecord], options: DiffOptions):
        self._records = records
        self.options = options

    def __repr__(self) -> str:
        """
        Return a machine-readable representation of this instance.

        :returns: ``DiffResults`` constructor style string.
        :rtype: ``str``
        """
        return f"DiffResults({self._records!r}, {self.options!r})"

    def __str__(self) -> str:
        return self.short()

    # List-like interface
    def __iter__(self) -> Iterator[DiffRecord]:
        """
        Implement iter(self).
        """
        return iter(self._records)

    def __len__(self):
        """
        Implement len(self).
        """
        return len(self._records)

    def __getitem__(self, index: int) -> DiffRecord:
        """
        Return self[index]

        :param index: The index to return.
        :type index: ``int``
        """
        return self._records[index]

    def __eq__(self, other) -> bool:
        if isinstance(other, DiffResults):
            return self._records == other._records
        if isinstance(other, list):
            return self._records == other
        return NotImplemented

    # Summary properties
    @property
    def total_changes(self) -> int:
        """
        Return the total number of records.
        """
        return len(self._records)

    @property
    def created(self) -> List[DiffRecord]:
        """
        Return the list of CREATE records.
        """
        return [r for r in self._records if r.diff_type == DiffType.CREATE]

    @property
    def removed(self) -> List[DiffRecord]:
        """
        Return the list of REMOVE records.
        """
        return [r for r in self._records if r.diff_type == DiffType.REMOVE]

    @property
    def changed(self) -> List[DiffRecord]:
        """
        Return the list of CHANGE records.
        """
        return [r for r in self._records if r.diff_type == DiffType.CHANGE]

    def paths(self) -> List[Path]:
        """
        Return the paths of all records, in result order.
        """
        return [r.path for r in self._records]

    def short(self) -> str:
        """
        Return one line per record.
        """
        return "\n".join(str(r) for r in self._records)

    def summary(self) -> str:
        """
        Return a one line count of records by type.
        """
        return (
            f"{self.total_changes} differences: "
            f"{len(self.created)} created, "
            f"{len(self.removed)} removed, "
            f"{len(self.changed)} changed"
        )


class _DiffContext:
    """
    Per-call state: one instance is built for each top-level comparison.
    """

    def __init__(self, options: DiffOptions):
        self.options = options
        self.keys_to_skip = options.keys_to_skip
        self.arrays = ArrayPolicyDispatcher(options)
        self.tracker: Optional[CycleTracker] = (
            CycleTracker() if options.track_circular_references else None
        )


class DiffEngine:
    """
    Core class for generating path diff comparisons.

    A ``DiffEngine`` holds no per-comparison state and may be shared and
    re-entered freely.
    """

    def compute_diff(
        self,
        previous: Any,
        current: Any,
        options: Optional[DiffOptions] = None,
    ) -> DiffResults:
        """
        Main diff computation logic.

        Records are ordered level by level: the REMOVE and CHANGE records
        found while walking ``previous``'s keys come first, followed by the
        CREATE records for keys only present in ``current``. Records for a
        nested container appear at the position of the key that leads to
        it.

        :param previous: The previous graph root.
        :param current: The current graph root.
        :param options: Options to apply to the diff generation.
        :type options: ``DiffOptions``
        :returns: A ``DiffResults`` instance containing ``DiffRecord``
                  objects.
        :rtype: ``DiffResults``
        """
        if options is None:
            options = DiffOptions()

        _log_debug(
            "Starting compute_diff (track_circular_references=%s, "
            "array_policy=%s, array_equality=%s, keys_to_skip=%d)",
            options.track_circular_references,
            options.array_policy.value,
            options.array_equality.value,
            len(options.keys_to_skip),
        )
        if not options.track_circular_references:
            _log_debug("Circular reference tracking disabled")

        context = _DiffContext(options)
        records = self._process((), previous, current, context)

        _log_debug("Finished compute_diff with %d records", len(records))
        return DiffResults(records, options)

    def _process(
        self, path: Path, previous: Any, current: Any, context: _DiffContext
    ) -> List[DiffRecord]:
        """
        Compare the nodes found at ``path`` in both graphs.

        :param path: The path of the nodes being compared.
        :type path: ``Path``
        :param previous: The previous node, or ``MISSING``.
        :param current: The current node, or ``MISSING``.
        :param context: The state of this comparison.
        :type context: ``_DiffContext``
        :returns: The ordered records for this path and its subtree.
        :rtype: ``List[DiffRecord]``
        """
        _log_debug_diff_extra("Comparing path '%s'", format_path(path))

        if previous is MISSING:
            return [DiffRecord.create(path, current)]
        if current is MISSING:
            return [DiffRecord.remove(path, previous)]

        kind_prev = node_kind(previous)
        kind_cur = node_kind(current)

        if kind_prev not in CONTAINER_KINDS and kind_cur not in CONTAINER_KINDS:
            if leaf_equals(previous, current):
                return []
            return [DiffRecord.change(path, current, previous)]

        if kind_prev != kind_cur:
            # Container replaced by a leaf, or object by array.
            return [DiffRecord.change(path, current, previous)]

        tracker = context.tracker
        if tracker is not None and tracker.is_active(previous, current):
            _log_debug_diff(
                "Circular reference at '%s': not recursing", format_path(path)
            )
            return []

        token = tracker.enter(previous, current) if tracker is not None else None
        try:
            if kind_prev == NodeKind.ARRAY and not context.arrays.recurses:
                if context.arrays.changed(previous, current):
                    return [DiffRecord.change(path, current, previous)]
                return []
            if kind_prev == NodeKind.ARRAY:
                return self._compare_arrays(path, previous, current, context)
            return self._compare_objects(path, previous, current, context)
        finally:
            if tracker is not None:
                tracker.exit(token)

    def _compare_objects(
        self,
        path: Path,
        previous: Mapping,
        current: Mapping,
        context: _DiffContext,
    ) -> List[DiffRecord]:
        """
        Compare two object nodes key by key.
        """
        skip = context.keys_to_skip
        removed_or_changed: List[DiffRecord] = []
        created: List[DiffRecord] = []

        for key in previous.keys():
            if key in skip:
                continue
            current_value = current[key] if key in current else MISSING
            removed_or_changed.extend(
                self._process(path + (key,), previous[key], current_value, context)
            )

        for key in current.keys():
            if key in skip or key in previous:
                continue
            created.extend(
                self._process(path + (key,), MISSING, current[key], context)
            )

        return removed_or_changed + created

    def _compare_arrays(
        self,
        path: Path,
        previous: Union[list, tuple],
        current: Union[list, tuple],
        context: _DiffContext,
    ) -> List[DiffRecord]:
        """
        Compare two array nodes index by index. Indices are never filtered
        by ``keys_to_skip``.
        """
        removed_or_changed: List[DiffRecord] = []
        created: List[DiffRecord] = []
        len_prev = len(previous)
        len_cur = len(current)

        for index in range(len_prev):
            current_value = current[index] if index < len_cur else MISSING
            removed_or_changed.extend(
                self._process(path + (index,), previous[index], current_value, context)
            )

        for index in range(len_prev, len_cur):
            created.extend(
                self._process(path + (index,), MISSING, current[index], context)
            )

        return removed_or_changed + created


def diff(
    previous: Any,
    current: Any,
    options: Union[DiffOptions, Mapping[str, Any], None] = None,
) -> DiffResults:
    """
    Compute the ordered differences between two graphs of nested mappings
    and lists.

    :param previous: The previous graph root.
    :param current: The current graph root.
    :param options: A ``DiffOptions`` instance, a mapping of option names to
                    values, or ``None`` for the defaults.
    :returns: The ordered diff records.
    :rtype: ``DiffResults``
    :raises: ``PathdiffArgumentError`` if ``options`` are invalid.
    """
    return DiffEngine().compute_diff(previous, current, resolve_options(options))
