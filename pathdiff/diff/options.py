# Copyright Red Hat
#
# pathdiff/diff/options.py - Path diff options
#
# This file is part of the pathdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Path diff options.
"""
from dataclasses import dataclass, field, fields
from typing import Any, FrozenSet, Iterable, Union
from collections.abc import Mapping
from argparse import Namespace
from configparser import ConfigParser, Error as ConfigParserError
from os.path import exists
import logging

from pathdiff import (
    PATHDIFF_SUBSYSTEM_OPTIONS,
    PathdiffArgumentError,
    PathdiffParseError,
)

from .difftypes import ArrayEquality, ArrayPolicy

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error

#: Configuration file section holding diff options
_DIFF_CFG_SECTION = "diff"

#: Accepted alternate spellings for option names
_OPTION_ALIASES = {
    "trackCircularReferences": "track_circular_references",
    "arrayPolicy": "array_policy",
    "arrayEquality": "array_equality",
    "keysToSkip": "keys_to_skip",
}


def _log_debug_options(msg, *args, **kwargs):
    """A wrapper for options subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": PATHDIFF_SUBSYSTEM_OPTIONS}, **kwargs)


def _to_enum(enum_cls, value, name):
    """
    Coerce ``value`` to a member of ``enum_cls``.

    :param enum_cls: The ``Enum`` class to convert to.
    :param value: An enum member or its string value.
    :param name: The option name, for error reporting.
    :returns: The matching enum member.
    :raises: ``PathdiffArgumentError`` if ``value`` is not a valid member.
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError as err:
        valid = ", ".join(member.value for member in enum_cls)
        raise PathdiffArgumentError(
            f"Invalid value for {name}: '{value}' (expected one of: {valid})"
        ) from err


@dataclass(frozen=True)
class DiffOptions:
    """
    Path diff comparison options.
    """

    #: Stop recursing into container pairs already under comparison
    track_circular_references: bool = True
    #: How to compare pairs of arrays
    array_policy: ArrayPolicy = ArrayPolicy.DIFF
    #: Whole-array equality rule used when ``array_policy`` is atomic
    array_equality: ArrayEquality = ArrayEquality.SHALLOW
    #: Object keys to exclude from comparison
    keys_to_skip: FrozenSet[Any] = field(default_factory=frozenset)

    def __post_init__(self):
        # Frozen: coerce through object.__setattr__().
        object.__setattr__(
            self, "track_circular_references", bool(self.track_circular_references)
        )
        object.__setattr__(
            self, "array_policy", _to_enum(ArrayPolicy, self.array_policy, "array_policy")
        )
        object.__setattr__(
            self,
            "array_equality",
            _to_enum(ArrayEquality, self.array_equality, "array_equality"),
        )
        keys = self.keys_to_skip
        if keys is None:
            keys = ()
        elif isinstance(keys, (str, bytes)):
            keys = (keys,)
        object.__setattr__(self, "keys_to_skip", frozenset(keys))

    def __str__(self):
        """
        Return a human readable string representation of this
        ``DiffOptions`` instance.

        :returns: A human readable string.
        :rtype: ``str``
        """

        def _format_value(val: Any) -> str:
            if isinstance(val, (ArrayPolicy, ArrayEquality)):
                return val.value
            if isinstance(val, frozenset):
                return " ".join(sorted(str(key) for key in val))
            return str(val)

        return "\n".join(
            f"{key}={_format_value(val)}" for key, val in self.__dict__.items()
        )

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "DiffOptions":
        """
        Initialise DiffOptions from a mapping of option names to values.

        Option names may be given either in Python form
        (``array_policy``) or in camelCase form (``arrayPolicy``).

        :param values: A mapping of option names to values.
        :type values: ``Mapping[str, Any]``
        :returns: A new ``DiffOptions`` instance.
        :rtype: ``DiffOptions``
        :raises: ``PathdiffArgumentError`` if an option name is unknown.
        """
        field_names = {f.name for f in fields(cls)}
        kwargs = {}
        for name, value in values.items():
            key = _OPTION_ALIASES.get(name, name)
            if key not in field_names:
                raise PathdiffArgumentError(f"Unknown diff option: '{name}'")
            kwargs[key] = value
        options = cls(**kwargs)
        _log_debug_options("Initialised DiffOptions from mapping: %s", repr(options))
        return options

    @classmethod
    def from_cmd_args(cls, cmd_args: Namespace) -> "DiffOptions":
        """
        Initialise DiffOptions from command line arguments.

        Construct a new ``DiffOptions`` object from the command line
        arguments in ``cmd_args``. Arguments that are absent or ``None``
        take their default values.

        :param cmd_args: The command line selection arguments.
        :type cmd_args: ``Namespace``
        :returns: A new ``DiffOptions`` instance
        :rtype: ``DiffOptions``
        """
        field_names = {f.name for f in fields(cls)}
        kwargs = {
            name: getattr(cmd_args, name)
            for name in field_names
            if getattr(cmd_args, name, None) is not None
        }
        options = cls(**kwargs)
        _log_debug_options("Initialised DiffOptions from arguments: %s", repr(options))
        return options

    @classmethod
    def from_file(cls, config_file: str) -> "DiffOptions":
        """
        Load ``DiffOptions`` from an INI-style configuration file located at
        ``config_file``.

        Options are read from the ``[diff]`` section. The ``keys_to_skip``
        option is a comma separated list of key names. A missing file or
        section yields the default options.

        :param config_file: path to the configuration file.
        :type config_file: ``str``
        :returns: A ``DiffOptions`` instance initialised from ``config_file``.
        :rtype: ``DiffOptions``
        :raises: ``PathdiffParseError`` if a value cannot be parsed.
        """
        if not exists(config_file):
            _log_debug("No diff configuration at '%s': using defaults", config_file)
            return cls()

        _log_debug("Loading diff configuration from '%s'", config_file)
        cfg = ConfigParser(interpolation=None)
        try:
            cfg.read([config_file])
        except ConfigParserError as err:
            raise PathdiffParseError(
                f"Could not parse configuration file '{config_file}': {err}"
            ) from err

        if not cfg.has_section(_DIFF_CFG_SECTION):
            return cls()

        section = cfg[_DIFF_CFG_SECTION]
        kwargs = {}
        for name in section:
            if name not in {f.name for f in fields(cls)}:
                _log_warn(
                    "Ignoring unknown option '%s' in '%s'", name, config_file
                )
                continue
            if name == "track_circular_references":
                try:
                    kwargs[name] = section.getboolean(name)
                except ValueError as err:
                    raise PathdiffParseError(
                        f"Invalid boolean for {name} in '{config_file}': "
                        f"{section[name]}"
                    ) from err
            elif name == "keys_to_skip":
                kwargs[name] = _split_keys(section[name])
            else:
                kwargs[name] = section[name]

        try:
            options = cls(**kwargs)
        except PathdiffArgumentError as err:
            raise PathdiffParseError(f"{config_file}: {err}") from err
        _log_debug_options("Loaded DiffOptions from file: %s", repr(options))
        return options


def _split_keys(value: str) -> Iterable[str]:
    """
    Split a comma separated list of key names, dropping empty items.

    :param value: The string to split.
    :type value: ``str``
    :returns: A tuple of key names.
    :rtype: ``Iterable[str]``
    """
    return tuple(key.strip() for key in value.split(",") if key.strip())


def resolve_options(
    options: Union["DiffOptions", Mapping[str, Any], None],
) -> "DiffOptions":
    """
    Return a ``DiffOptions`` instance for ``options``.

    :param options: A ``DiffOptions`` instance, a mapping of option names
                    to values, or ``None`` for the defaults.
    :returns: The resolved options.
    :rtype: ``DiffOptions``
    :raises: ``PathdiffArgumentError`` if ``options`` cannot be resolved.
    """
    if options is None:
        return DiffOptions()
    if isinstance(options, DiffOptions):
        return options
    if isinstance(options, Mapping):
        return DiffOptions.from_dict(options)
    raise PathdiffArgumentError(
        f"Invalid diff options type: {type(options).__name__}"
    )
