# Copyright Red Hat
#
# tests/diff/test_cycles.py - CycleTracker tests.
#
# This file is part of the pathdiff project.
#
# SPDX-License-Identifier: Apache-2.0
import unittest

from pathdiff.diff.cycles import CycleTracker


class TestCycleTracker(unittest.TestCase):
    def setUp(self):
        self.tracker = CycleTracker()
        self.a = {"x": 1}
        self.b = {"x": 1}

    def test_enter_exit(self):
        self.assertFalse(self.tracker.is_active(self.a, self.b))
        token = self.tracker.enter(self.a, self.b)
        self.assertTrue(self.tracker.is_active(self.a, self.b))
        self.assertEqual(len(self.tracker), 1)
        self.tracker.exit(token)
        self.assertFalse(self.tracker.is_active(self.a, self.b))
        self.assertEqual(len(self.tracker), 0)

    def test_pair_is_ordered_and_joint(self):
        self.tracker.enter(self.a, self.b)
        self.assertFalse(self.tracker.is_active(self.b, self.a))
        self.assertFalse(self.tracker.is_active(self.a, self.a))
        self.assertFalse(self.tracker.is_active(self.a, {"x": 1}))

    def test_identity_not_equality(self):
        self.tracker.enter(self.a, self.b)
        self.assertFalse(self.tracker.is_active({"x": 1}, {"x": 1}))

    def test_track_context_manager(self):
        with self.tracker.track(self.a, self.b):
            self.assertTrue(self.tracker.is_active(self.a, self.b))
        self.assertFalse(self.tracker.is_active(self.a, self.b))

    def test_track_unwinds_on_error(self):
        with self.assertRaises(RuntimeError):
            with self.tracker.track(self.a, self.b):
                raise RuntimeError("boom")
        self.assertEqual(len(self.tracker), 0)
