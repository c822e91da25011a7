import io
import unittest
from contextlib import redirect_stderr, redirect_stdout

from avss.cli import main


def run(*argv):
    out = io.StringIO()
    with redirect_stdout(out):
        status = main(list(argv))
    return status, out.getvalue()


class CliTests(unittest.TestCase):
    def test_simulate(self):
        status, output = run("simulate", "--threshold", "2", "--participants", "3")
        self.assertEqual(status, 0)
        self.assertIn("3/3 nodes complete", output)
        self.assertIn("secret recovered: True", output)

    def test_simulate_with_tampered_echo(self):
        status, output = run(
            "simulate", "--threshold", "2", "--participants", "4",
            "--secret", "c0ffee", "--tamper", "2:1",
        )
        self.assertEqual(status, 0)
        self.assertIn("node 1: complete faulty=[2]", output)
        self.assertIn("secret recovered: True", output)

    def test_invalid_parameters(self):
        status, _ = run("simulate", "--threshold", "3", "--participants", "3")
        self.assertEqual(status, 2)
        status, _ = run("simulate", "--threshold", "2", "--participants", "3", "--secret", "xyz")
        self.assertEqual(status, 2)

    def test_bad_tamper_argument(self):
        with self.assertRaises(SystemExit):
            with redirect_stdout(io.StringIO()), redirect_stderr(io.StringIO()):
                main(["simulate", "--threshold", "2", "--participants", "3", "--tamper", "2"])

    def test_help(self):
        status, output = run()
        self.assertEqual(status, 0)
        self.assertIn("simulate", output)


if __name__ == "__main__":
    unittest.main()
