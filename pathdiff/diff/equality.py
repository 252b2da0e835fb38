# Copyright Red Hat
#
# pathdiff/diff/equality.py - Path diff node classification and leaf equality
#
# This file is part of the pathdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Node classification and leaf value equality.

Every value found in an input graph is tagged with a ``NodeKind``. Object
and array nodes are containers and are handled by the diff engine; all
other kinds are leaves, compared with ``leaf_equals()`` using one rule per
kind:

* numbers are equal by value, NaN is equal to NaN and a negative zero is
  not equal to a positive zero;
* dates, datetimes and times are equal when they denote the same instant;
* compiled patterns are equal when their ``/pattern/flags`` source forms
  match;
* instances of subclasses of the primitive types (``IntEnum`` members,
  ``str`` subclasses and so on) are unwrapped to the primitive value first;
* anything else is only equal to itself.
"""
from collections.abc import Mapping
from datetime import date, time
from decimal import Decimal
from enum import Enum
from numbers import Number
from typing import Any
import cmath
import math
import re


class NodeKind(Enum):
    """
    Enum for the kinds of node found in an input graph.
    """

    OBJECT = "object"
    ARRAY = "array"
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    BYTES = "bytes"
    DATE = "date"
    PATTERN = "pattern"
    OPAQUE = "opaque"


#: Node kinds that may be recursed into
CONTAINER_KINDS = (NodeKind.OBJECT, NodeKind.ARRAY)

#: Primitive types that may be subclassed (boxed), and their unwrap functions
_BOXABLE = (
    (int, int.__int__),
    (float, float.__float__),
    (str, str.__str__),
    (bytes, bytes),
)

#: Regular expression flag letters in canonical order
_PATTERN_FLAGS = (
    (re.ASCII, "a"),
    (re.IGNORECASE, "i"),
    (re.LOCALE, "L"),
    (re.MULTILINE, "m"),
    (re.DOTALL, "s"),
    (re.UNICODE, "u"),
    (re.VERBOSE, "x"),
)


# pylint: disable=too-many-return-statements
def node_kind(value: Any) -> NodeKind:
    """
    Classify ``value``.

    :param value: The node to classify.
    :type value: ``Any``
    :returns: The kind of node.
    :rtype: ``NodeKind``
    """
    if isinstance(value, Mapping):
        return NodeKind.OBJECT
    if isinstance(value, (list, tuple)):
        return NodeKind.ARRAY
    if value is None:
        return NodeKind.NULL
    if isinstance(value, bool):
        return NodeKind.BOOL
    if isinstance(value, Number):
        return NodeKind.NUMBER
    if isinstance(value, str):
        return NodeKind.STRING
    if isinstance(value, (bytes, bytearray)):
        return NodeKind.BYTES
    if isinstance(value, (date, time)):
        return NodeKind.DATE
    if isinstance(value, re.Pattern):
        return NodeKind.PATTERN
    return NodeKind.OPAQUE


def is_container(value: Any) -> bool:
    """
    Return ``True`` if ``value`` is an object or array node.
    """
    return node_kind(value) in CONTAINER_KINDS


def unbox(value: Any) -> Any:
    """
    Unwrap an instance of a subclass of a primitive type to the primitive
    value it holds. Other values are returned unchanged.

    :param value: The value to unwrap.
    :type value: ``Any``
    :returns: The primitive value, or ``value``.
    """
    if isinstance(value, bool):
        return value
    value_type = type(value)
    for base, unwrap in _BOXABLE:
        if value_type is not base and isinstance(value, base):
            return unwrap(value)
    return value


def _is_nan(value: Number) -> bool:
    if isinstance(value, float):
        return math.isnan(value)
    if isinstance(value, Decimal):
        return value.is_nan()
    if isinstance(value, complex):
        return cmath.isnan(value)
    return False


def _is_negative_zero(value: Number) -> bool:
    if isinstance(value, float):
        return value == 0.0 and math.copysign(1.0, value) < 0
    if isinstance(value, Decimal):
        return value.is_zero() and value.is_signed()
    return False


def _numbers_equal(a: Number, b: Number) -> bool:
    """
    Compare two numbers: NaN equals NaN and signed zeros differ.
    """
    a_nan, b_nan = _is_nan(a), _is_nan(b)
    if a_nan or b_nan:
        return a_nan and b_nan
    try:
        if a != b:
            return False
    except TypeError:
        return False
    return _is_negative_zero(a) == _is_negative_zero(b)


def pattern_source(pattern: re.Pattern) -> str:
    """
    Return the canonical ``/pattern/flags`` form of a compiled pattern.

    :param pattern: The compiled regular expression.
    :type pattern: ``re.Pattern``
    :returns: The canonical source string.
    :rtype: ``str``
    """
    flags = "".join(
        letter for flag, letter in _PATTERN_FLAGS if pattern.flags & flag
    )
    source = pattern.pattern
    if isinstance(source, bytes):
        source = repr(source)
    return f"/{source}/{flags}"


def leaf_equals(a: Any, b: Any) -> bool:
    """
    Compare two leaf values.

    Containers are never compared structurally here: two containers are
    only equal if they are the same object.

    :param a: The previous value.
    :type a: ``Any``
    :param b: The current value.
    :type b: ``Any``
    :returns: ``True`` if the values are equal or ``False`` otherwise.
    :rtype: ``bool``
    """
    if a is b:
        return True

    a, b = unbox(a), unbox(b)
    kind = node_kind(a)
    if kind != node_kind(b):
        return False

    if kind == NodeKind.NULL:
        return True
    if kind == NodeKind.NUMBER:
        return _numbers_equal(a, b)
    if kind in (NodeKind.BOOL, NodeKind.STRING, NodeKind.BYTES):
        return a == b
    if kind == NodeKind.DATE:
        return _dates_equal(a, b)
    if kind == NodeKind.PATTERN:
        return pattern_source(a) == pattern_source(b)
    return a is b


def _dates_equal(a: Any, b: Any) -> bool:
    # A date never equals a datetime, and naive and aware datetimes
    # compare unequal without raising.
    if isinstance(a, date) != isinstance(b, date):
        return False
    return a == b
