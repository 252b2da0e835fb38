# Copyright Red Hat
#
# tests/diff/test_arrays.py - ArrayPolicyDispatcher tests.
#
# This file is part of the pathdiff project.
#
# SPDX-License-Identifier: Apache-2.0
import unittest

from pathdiff.diff.arrays import ArrayPolicyDispatcher, shallow_equal
from pathdiff.diff.options import DiffOptions


class TestShallowEqual(unittest.TestCase):
    def test_equal(self):
        self.assertTrue(shallow_equal([1, "a", None], [1, "a", None]))
        self.assertTrue(shallow_equal([], ()))
        self.assertTrue(shallow_equal([float("nan")], [float("nan")]))

    def test_length_mismatch(self):
        self.assertFalse(shallow_equal([1, 2], [1, 2, 3]))

    def test_element_mismatch(self):
        self.assertFalse(shallow_equal([1, 2], [1, 3]))
        self.assertFalse(shallow_equal([0.0], [-0.0]))

    def test_nested_containers_by_reference(self):
        inner = {"a": 1}
        self.assertTrue(shallow_equal([inner], [inner]))
        self.assertFalse(shallow_equal([{"a": 1}], [{"a": 1}]))


class TestArrayPolicyDispatcher(unittest.TestCase):
    def test_diff_policy_recurses(self):
        dispatcher = ArrayPolicyDispatcher(DiffOptions())
        self.assertTrue(dispatcher.recurses)
        with self.assertRaises(ValueError):
            dispatcher.changed([1], [2])

    def test_atomic_shallow(self):
        dispatcher = ArrayPolicyDispatcher(DiffOptions(array_policy="atomic"))
        self.assertFalse(dispatcher.recurses)
        self.assertFalse(dispatcher.changed([1, 2], [1, 2]))
        self.assertTrue(dispatcher.changed([1, 2], [2, 1]))

    def test_atomic_reference(self):
        dispatcher = ArrayPolicyDispatcher(
            DiffOptions(array_policy="atomic", array_equality="reference")
        )
        items = [1, 2]
        self.assertFalse(dispatcher.changed(items, items))
        self.assertTrue(dispatcher.changed([1, 2], [1, 2]))

    def test_ignore(self):
        dispatcher = ArrayPolicyDispatcher(DiffOptions(array_policy="ignore"))
        self.assertFalse(dispatcher.recurses)
        self.assertFalse(dispatcher.changed([1, 2], ["x"]))
