import json
import unittest
from pathlib import Path
import tempfile

import yaml

from pi_collision.core.engine import CollisionPair, CollisionSequence
from pi_collision.studies import pi_digit_masses
from pi_collision.studies.mass_sweep import run_mass_sweep


def fake_simulation(mass_big):
    # Two full steps plus a final box collision without wall bounce -> 5 collisions
    pairs = [
        CollisionPair(0.5, 0.5, -0.5),
        CollisionPair(0.1, 0.2, -0.2),
        CollisionPair(-0.3, -0.1, None),
    ]
    return CollisionSequence(pairs, mass_big)


class TestMassSweep(unittest.TestCase):
    def test_summary_with_fake_simulation(self):
        summary = run_mass_sweep([4.0, 1.0], simulate_func=fake_simulation)
        self.assertEqual(len(summary), 2)
        # Input order is preserved
        self.assertEqual(list(summary["mass_big"]), [4.0, 1.0])
        self.assertEqual(list(summary["collisions"]), [5, 5])
        self.assertEqual(list(summary["n_pairs"]), [3, 3])
        self.assertFalse(summary.loc[0, "ends_with_wall"])
        self.assertAlmostEqual(float(summary.loc[0, "pi_estimate"]), 2.5)

    def test_pi_digits(self):
        summary = run_mass_sweep(pi_digit_masses(4))
        self.assertEqual(list(summary["collisions"]), [3, 31, 314, 3141])
        self.assertAlmostEqual(float(summary.loc[3, "pi_estimate"]), 3.141, places=6)

    def test_outputs_written(self):
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "sweep"
            run_mass_sweep([1.0, 100.0], out_dir=out)

            self.assertTrue((out / "mass_sweep_summary.csv").is_file())
            cfg = yaml.safe_load((out / "sweep_config.yml").read_text(encoding="utf-8"))
            self.assertEqual(cfg, {"masses": [1.0, 100.0]})
            meta = json.loads((out / "run_metadata.json").read_text(encoding="utf-8"))
            self.assertEqual(meta["study_type"], "mass_sweep")
            self.assertIn("git_hash", meta)

    def test_empty_sweep(self):
        summary = run_mass_sweep([])
        self.assertTrue(summary.empty)
        self.assertIn("collisions", summary.columns)


if __name__ == "__main__":
    unittest.main()
