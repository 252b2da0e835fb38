# Copyright Red Hat
#
# tests/diff/test_equality.py - Leaf equality tests.
#
# This file is part of the pathdiff project.
#
# SPDX-License-Identifier: Apache-2.0
import re
import unittest
from collections import OrderedDict
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from enum import IntEnum

from pathdiff.diff.equality import (
    NodeKind,
    is_container,
    leaf_equals,
    node_kind,
    pattern_source,
    unbox,
)


class Level(IntEnum):
    LOW = 1
    HIGH = 2


class Name(str):
    pass


class TestNodeKind(unittest.TestCase):
    def test_containers(self):
        self.assertEqual(node_kind({}), NodeKind.OBJECT)
        self.assertEqual(node_kind(OrderedDict()), NodeKind.OBJECT)
        self.assertEqual(node_kind([]), NodeKind.ARRAY)
        self.assertEqual(node_kind(()), NodeKind.ARRAY)
        self.assertTrue(is_container({"a": 1}))
        self.assertFalse(is_container("abc"))

    def test_leaves(self):
        self.assertEqual(node_kind(None), NodeKind.NULL)
        self.assertEqual(node_kind(True), NodeKind.BOOL)
        self.assertEqual(node_kind(1), NodeKind.NUMBER)
        self.assertEqual(node_kind(1.5), NodeKind.NUMBER)
        self.assertEqual(node_kind(Decimal("1")), NodeKind.NUMBER)
        self.assertEqual(node_kind("a"), NodeKind.STRING)
        self.assertEqual(node_kind(b"a"), NodeKind.BYTES)
        self.assertEqual(node_kind(date(2024, 1, 1)), NodeKind.DATE)
        self.assertEqual(node_kind(re.compile("a")), NodeKind.PATTERN)
        self.assertEqual(node_kind({1, 2}), NodeKind.OPAQUE)
        self.assertEqual(node_kind(object()), NodeKind.OPAQUE)


class TestLeafEquals(unittest.TestCase):
    def test_nan(self):
        self.assertTrue(leaf_equals(float("nan"), float("nan")))
        self.assertTrue(leaf_equals(Decimal("NaN"), Decimal("NaN")))
        self.assertFalse(leaf_equals(float("nan"), 1.0))
        self.assertFalse(leaf_equals(1.0, float("nan")))

    def test_signed_zero(self):
        self.assertFalse(leaf_equals(0.0, -0.0))
        self.assertFalse(leaf_equals(-0.0, 0))
        self.assertTrue(leaf_equals(-0.0, -0.0))
        self.assertTrue(leaf_equals(0, 0.0))
        self.assertFalse(leaf_equals(Decimal("0"), Decimal("-0")))

    def test_numbers(self):
        self.assertTrue(leaf_equals(1, 1.0))
        self.assertTrue(leaf_equals(2**70, 2**70))
        self.assertFalse(leaf_equals(1, 2))

    def test_categories_never_mix(self):
        self.assertFalse(leaf_equals(True, 1))
        self.assertFalse(leaf_equals(0, False))
        self.assertFalse(leaf_equals("1", 1))
        self.assertFalse(leaf_equals(None, 0))
        self.assertFalse(leaf_equals(b"a", "a"))
        self.assertTrue(leaf_equals(None, None))

    def test_dates(self):
        utc = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        plus_two = utc.astimezone(timezone(timedelta(hours=2)))
        self.assertTrue(leaf_equals(utc, plus_two))
        self.assertTrue(leaf_equals(date(2024, 5, 1), date(2024, 5, 1)))
        self.assertFalse(leaf_equals(date(2024, 5, 1), date(2024, 5, 2)))
        self.assertFalse(leaf_equals(datetime(2024, 5, 1), date(2024, 5, 1)))
        self.assertFalse(leaf_equals(utc, utc.replace(tzinfo=None)))
        self.assertFalse(leaf_equals(time(12, 0), date(2024, 5, 1)))
        self.assertTrue(leaf_equals(time(12, 0), time(12, 0)))

    def test_patterns(self):
        self.assertTrue(leaf_equals(re.compile("a+b"), re.compile("a+b")))
        self.assertFalse(leaf_equals(re.compile("a+b"), re.compile("a+b", re.I)))
        self.assertFalse(leaf_equals(re.compile("a"), re.compile(b"a")))
        self.assertEqual(pattern_source(re.compile("x", re.I | re.M)), "/x/imu")

    def test_boxed_primitives(self):
        self.assertEqual(type(unbox(Level.LOW)), int)
        self.assertIs(unbox(True), True)
        self.assertTrue(leaf_equals(Level.LOW, 1))
        self.assertFalse(leaf_equals(Level.LOW, Level.HIGH))
        self.assertTrue(leaf_equals(Name("x"), "x"))
        self.assertFalse(leaf_equals(Name("x"), "y"))

    def test_opaque_identity(self):
        marker = object()
        self.assertTrue(leaf_equals(marker, marker))
        self.assertFalse(leaf_equals(object(), object()))
        self.assertFalse(leaf_equals({1}, {1}))

    def test_containers_compared_by_identity(self):
        items = [1, 2]
        self.assertTrue(leaf_equals(items, items))
        self.assertFalse(leaf_equals([1, 2], [1, 2]))
        self.assertFalse(leaf_equals({"a": 1}, {"a": 1}))
