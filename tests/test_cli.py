import io
import logging
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest.mock import patch

from markovpass.cli import main


CORPUS = (
    "Either the well was very deep, or she fell very slowly, for she had plenty "
    "of time as she went down to look about her and to wonder what was going to "
    "happen next."
)


class TestCli(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.corpus = os.path.join(self.tmp.name, "corpus.txt")
        with open(self.corpus, "w", encoding="utf-8") as f:
            f.write(CORPUS)

    def tearDown(self):
        self.tmp.cleanup()

    def run_cli(self, argv):
        out = io.StringIO()
        with redirect_stdout(out):
            rc = main(argv)
        return rc, out.getvalue()

    def test_generate(self):
        rc, output = self.run_cli(["5", "--corpus", self.corpus, "--seed", "3"])
        self.assertEqual(rc, 0)
        self.assertIn("Your randomly generated 5 length passphrase is:", output)
        phrase = output.strip().splitlines()[-1]
        self.assertTrue(1 <= len(phrase.split()) <= 5)

    def test_seed_is_reproducible(self):
        argv = ["6", "--corpus", self.corpus, "--seed", "11", "--count", "3"]
        self.assertEqual(self.run_cli(argv), self.run_cli(argv))

    def test_count_and_separator(self):
        rc, output = self.run_cli(["4", "--corpus", self.corpus, "-c", "2", "-s", "_"])
        self.assertEqual(rc, 0)
        lines = output.strip().splitlines()
        self.assertIn("passphrases are:", output)
        self.assertTrue(all(" " not in line for line in lines[-2:]))

    def test_missing_corpus(self):
        missing = os.path.join(self.tmp.name, "missing.txt")
        with self.assertLogs('markovpass.cli', level='ERROR'):
            rc, _ = self.run_cli(["4", "--corpus", missing])
        self.assertEqual(rc, 1)

    def test_insufficient_corpus(self):
        with open(self.corpus, "w", encoding="utf-8") as f:
            f.write("Hello, --- world!")
        with self.assertLogs('markovpass.cli', level='ERROR'):
            rc, output = self.run_cli(["4", "--corpus", self.corpus])
        self.assertEqual(rc, 1)
        self.assertEqual(output, "")

    def test_corpus_not_utf8(self):
        with open(self.corpus, "wb") as f:
            f.write(b"one two \xff\xfe three four five")
        with self.assertLogs('markovpass.cli', level='ERROR') as logs:
            rc, output = self.run_cli(["4", "--corpus", self.corpus])
        self.assertEqual(rc, 1)
        self.assertEqual(output, "")
        self.assertIn("not valid UTF-8", logs.output[0])

    def test_corpus_is_directory(self):
        with self.assertLogs('markovpass.cli', level='ERROR') as logs:
            rc, output = self.run_cli(["4", "--corpus", self.tmp.name])
        self.assertEqual(rc, 1)
        self.assertEqual(output, "")
        self.assertIn("Cannot read corpus file", logs.output[0])

    def test_max_stalls_shortens_dead_end_walk(self):
        with open(self.corpus, "w", encoding="utf-8") as f:
            f.write("One, two. Three!")
        with self.assertLogs('markovpass.utils.sampling', level='WARNING'):
            rc, output = self.run_cli(["4", "--corpus", self.corpus, "--max-stalls", "1"])
        self.assertEqual(rc, 0)
        self.assertEqual(output.strip().splitlines()[-1], "three")

    def test_verbose_logs_seed(self):
        with patch('markovpass.cli.setup_logging') as setup:
            with self.assertLogs('markovpass', level='DEBUG') as logs:
                rc, _ = self.run_cli(["4", "--corpus", self.corpus, "--seed", "5", "-v"])
        self.assertEqual(rc, 0)
        setup.assert_called_once_with(logging.DEBUG)
        self.assertTrue(any("Seed triplet" in line for line in logs.output))

    def test_rejects_out_of_range_seed(self):
        for seed in ("99999999999999999999999", "-1"):
            with self.assertRaises(SystemExit) as ctx:
                with redirect_stdout(io.StringIO()):
                    main(["4", "--corpus", self.corpus, "--seed", seed])
            self.assertEqual(ctx.exception.code, 2)

    def test_rejects_non_positive_length(self):
        with self.assertRaises(SystemExit) as ctx:
            with redirect_stdout(io.StringIO()):
                main(["0", "--corpus", self.corpus])
        self.assertEqual(ctx.exception.code, 2)


if __name__ == '__main__':
    unittest.main()
