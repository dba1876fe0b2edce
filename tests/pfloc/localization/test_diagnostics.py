"""Unit tests for pfloc.localization.diagnostics."""

import unittest

from pfloc.localization import (
    Particle,
    get_associations,
    get_sense_x,
    get_sense_y,
    set_associations,
)


class TestSetAssociations(unittest.TestCase):

    def setUp(self):
        self.particle = Particle(id=0, x=0.0, y=0.0, theta=0.0)

    def test_assigns_fields(self):
        result = set_associations(self.particle, [1, 2], [3.5, 4.0], [-1.0, 2.25])

        self.assertIs(result, self.particle)
        self.assertEqual(self.particle.associations, [1, 2])
        self.assertEqual(self.particle.sense_x, [3.5, 4.0])
        self.assertEqual(self.particle.sense_y, [-1.0, 2.25])

    def test_overwrites_previous_values(self):
        set_associations(self.particle, [1, 2, 3], [0.0, 0.0, 0.0], [0.0, 0.0, 0.0])
        set_associations(self.particle, [9], [1.0], [2.0])

        self.assertEqual(self.particle.associations, [9])
        self.assertEqual(self.particle.sense_x, [1.0])
        self.assertEqual(self.particle.sense_y, [2.0])

    def test_length_mismatch_raises(self):
        with self.assertRaises(ValueError):
            set_associations(self.particle, [1, 2], [0.0], [0.0, 1.0])


class TestRendering(unittest.TestCase):

    def test_space_separated_without_trailing_separator(self):
        p = Particle(id=0, x=0.0, y=0.0, theta=0.0)
        set_associations(p, [1, 4, 7], [1.5, 20.0, -3.25], [0.1, 2.0, 100.0])

        self.assertEqual(get_associations(p), "1 4 7")
        self.assertEqual(get_sense_x(p), "1.5 20 -3.25")
        self.assertEqual(get_sense_y(p), "0.1 2 100")

    def test_single_value(self):
        p = Particle(id=0, x=0.0, y=0.0, theta=0.0)
        set_associations(p, [42], [5.0], [6.0])

        self.assertEqual(get_associations(p), "42")
        self.assertEqual(get_sense_x(p), "5")

    def test_empty_lists_render_empty(self):
        p = Particle(id=0, x=0.0, y=0.0, theta=0.0)

        self.assertEqual(get_associations(p), "")
        self.assertEqual(get_sense_x(p), "")
        self.assertEqual(get_sense_y(p), "")


if __name__ == "__main__":
    unittest.main()
