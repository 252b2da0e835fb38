# Copyright Red Hat
#
# pathdiff/_pathdiff.py - Path diff global definitions
#
# This file is part of the pathdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Global definitions for the top-level pathdiff package.
"""
import logging

_log = logging.getLogger("pathdiff")

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error

# Pathdiff debugging subsystem mask (legacy interface)
PATHDIFF_DEBUG_DIFF = 1
PATHDIFF_DEBUG_OPTIONS = 2
PATHDIFF_DEBUG_ALL = PATHDIFF_DEBUG_DIFF | PATHDIFF_DEBUG_OPTIONS

# Pathdiff debugging subsystem names
PATHDIFF_SUBSYSTEM_DIFF = "pathdiff.diff"
PATHDIFF_SUBSYSTEM_OPTIONS = "pathdiff.options"

_DEBUG_MASK_TO_SUBSYSTEM = {
    PATHDIFF_DEBUG_DIFF: PATHDIFF_SUBSYSTEM_DIFF,
    PATHDIFF_DEBUG_OPTIONS: PATHDIFF_SUBSYSTEM_OPTIONS,
}

_debug_subsystems = set()


class SubsystemFilter(logging.Filter):
    """
    Filters DEBUG records based on a set of enabled subsystem names.
    Non-DEBUG records or DEBUG records without a 'subsystem' attribute
    are always passed through.
    """

    def __init__(self, name=""):
        super().__init__(name)
        self.enabled_subsystems = set(_debug_subsystems)

    def filter(self, record):
        # Always pass non-DEBUG messages.
        if record.levelno != logging.DEBUG:
            return True

        # Always pass DEBUG messages that aren't for a specific subsystem.
        if not hasattr(record, "subsystem"):
            return True

        return record.subsystem in self.enabled_subsystems

    def set_debug_subsystems(self, subsystems):
        """Sets the collection of subsystems to allow."""
        self.enabled_subsystems = set(subsystems)


def get_debug_mask():
    """
    Return the current debug mask for the ``pathdiff`` package.

    :returns: The current debug mask value
    :rtype: int
    """
    enabled_subsystems = set(_debug_subsystems)
    pathdiff_log = logging.getLogger("pathdiff")

    for handler in pathdiff_log.handlers:
        for f in handler.filters:
            if isinstance(f, SubsystemFilter):
                enabled_subsystems.update(f.enabled_subsystems)

    mask_map = {v: k for k, v in _DEBUG_MASK_TO_SUBSYSTEM.items()}
    mask = 0
    for subsystem_name in enabled_subsystems:
        mask |= mask_map.get(subsystem_name, 0)
    return mask


def set_debug_mask(mask):
    """
    Set the debug mask for the ``pathdiff`` package.

    :param mask: the logical OR of the ``PATHDIFF_DEBUG_*``
                 values to log.
    :rtype: None
    """
    # pylint: disable=global-statement
    global _debug_subsystems

    if mask < 0 or mask > PATHDIFF_DEBUG_ALL:
        raise ValueError(f"Invalid pathdiff debug mask: {mask}")

    enabled_subsystems = []
    for flag, subsystem_name in _DEBUG_MASK_TO_SUBSYSTEM.items():
        if mask & flag:
            enabled_subsystems.append(subsystem_name)

    pathdiff_log = logging.getLogger("pathdiff")
    for handler in pathdiff_log.handlers:
        for f in handler.filters:
            if isinstance(f, SubsystemFilter):
                f.set_debug_subsystems(enabled_subsystems)

    _debug_subsystems = set(enabled_subsystems)
    _log_debug("Set pathdiff debug subsystems: %s", ", ".join(enabled_subsystems))


#
# Pathdiff exception types
#


class PathdiffError(Exception):
    """
    Base class for path diff errors.
    """


class PathdiffArgumentError(PathdiffError):
    """
    An invalid argument was passed to a path diff API call.
    """


class PathdiffParseError(PathdiffError):
    """
    An error parsing a configuration value.
    """


__all__ = [
    "PATHDIFF_DEBUG_DIFF",
    "PATHDIFF_DEBUG_OPTIONS",
    "PATHDIFF_DEBUG_ALL",
    # Debug logging - subsystem name interface
    "SubsystemFilter",
    "PATHDIFF_SUBSYSTEM_DIFF",
    "PATHDIFF_SUBSYSTEM_OPTIONS",
    # Debug logging - legacy interface
    "set_debug_mask",
    "get_debug_mask",
    "PathdiffError",
    "PathdiffArgumentError",
    "PathdiffParseError",
]
