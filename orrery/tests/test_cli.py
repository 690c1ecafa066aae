import io
import unittest
from contextlib import redirect_stderr, redirect_stdout

from orrery.__main__ import main


def run(argv):
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        code = main(argv)
    return code, out.getvalue(), err.getvalue()


class TestCommandLine(unittest.TestCase):

    def test_bodies(self):
        code, out, _ = run(['bodies'])
        self.assertEqual(code, 0)
        self.assertIn('Europa', out)
        self.assertIn('Jupiter', out)

    def test_compare(self):
        code, out, _ = run(['compare', 'earth', 'mars', '--departure-days', '10'])
        self.assertEqual(code, 0)
        self.assertIn('Earth -> Mars', out)
        self.assertIn('Chemical Rockets', out)
        self.assertIn('Warp Drive', out)

    def test_fly(self):
        code, out, _ = run(['fly', 'Earth', 'Mars', '--propulsion', 'warp-drive', '--time-speed', '1', '--dt', '1'])
        self.assertEqual(code, 0)
        self.assertIn('Arrived after', out)

    def test_kepler_method_option(self):
        code, out, _ = run(['compare', 'Earth', 'Mars', '--kepler-method', 'fixed-point'])
        self.assertEqual(code, 0)
        self.assertIn('Earth -> Mars', out)
        with self.assertRaises(SystemExit):
            run(['compare', 'Earth', 'Mars', '--kepler-method', 'halley'])

    def test_unknown_body(self):
        code, _, err = run(['compare', 'Earth', 'Vulcan'])
        self.assertEqual(code, 2)
        self.assertIn('Vulcan', err)


if __name__ == '__main__':
    unittest.main()
