#!/usr/bin/env python3
"""
Tests for ``VALET_*`` environment overrides.
"""

import unittest

import config
from valet.policy import PolicyError, ValetPolicy


class PolicyFromEnvTests(unittest.TestCase):
    def test_empty_env_gives_defaults(self):
        self.assertEqual(config.policy_from_env({}), ValetPolicy())

    def test_overrides_are_parsed(self):
        policy = config.policy_from_env({
            "VALET_TRIGGER_THRESHOLD": "75",
            "VALET_SUSTAIN_TICKS": "3",
            "VALET_REDIRECT": "yes",
            "VALET_TICK_MS": "100",
            "VALET_APPROACH_RADIUS": "",
        })
        self.assertEqual(policy.trigger_threshold, 75.0)
        self.assertEqual(policy.sustain_ticks, 3)
        self.assertTrue(policy.redirect_enabled)
        self.assertEqual(policy.tick_s, 0.1)
        self.assertEqual(policy.approach_radius, 80.0)

    def test_unparsable_value(self):
        with self.assertRaises(PolicyError):
            config.policy_from_env({"VALET_SUSTAIN_TICKS": "many"})
        with self.assertRaises(PolicyError):
            config.policy_from_env({"VALET_REDIRECT": "maybe"})

    def test_invalid_policy(self):
        with self.assertRaises(PolicyError):
            config.policy_from_env({"VALET_PROXIMITY_WEIGHT": "0.9"})


class SeedFromEnvTests(unittest.TestCase):
    def test_seed(self):
        self.assertEqual(config.seed_from_env({"VALET_SEED": "42"}), 42)
        self.assertIsNone(config.seed_from_env({}))
        with self.assertRaises(PolicyError):
            config.seed_from_env({"VALET_SEED": "abc"})


if __name__ == "__main__":
    unittest.main()
