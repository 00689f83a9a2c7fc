"""
Tests for the fixture generator.
"""

import os
import sys
import tempfile
import unittest
from unittest.mock import patch

# Add the parent directory to Python path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from configuration import BYTES_PER_MB, BenchmarkConfig, default_size_tiers
from cli.fixtures import FixtureGenerator, FixtureGenerationError, run

SMALL_TIERS = [("001kb", 1024), ("003kb", 3 * 1024), ("010kb", 10 * 1024)]


class TestDefaultTiers(unittest.TestCase):
    """The default corpus layout."""

    def test_default_tier_names_and_sizes(self):
        tiers = default_size_tiers()
        self.assertEqual(
            tiers,
            [
                ("001mb", 1 * BYTES_PER_MB),
                ("010mb", 10 * BYTES_PER_MB),
                ("050mb", 50 * BYTES_PER_MB),
                ("100mb", 100 * BYTES_PER_MB),
                ("250mb", 250 * BYTES_PER_MB),
            ],
        )
        self.assertEqual(BYTES_PER_MB, 1048576)


class TestFixtureGenerator(unittest.TestCase):
    """Test cases for FixtureGenerator."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.fixtures_dir = os.path.join(self.tmp.name, "fixtures")
        # Chunk smaller than the tiers so the streaming path is exercised
        self.config = BenchmarkConfig(
            fixtures_dir=self.fixtures_dir,
            size_tiers=SMALL_TIERS,
            write_chunk_size=1000,
        )
        self.generator = FixtureGenerator(self.config)

    def tearDown(self):
        self.tmp.cleanup()

    def test_generate_fixture_data_exact_size(self):
        chunks = list(self.generator.generate_fixture_data(2500))
        self.assertEqual([len(c) for c in chunks], [1000, 1000, 500])
        self.assertEqual(list(self.generator.generate_fixture_data(0)), [])

    def test_creates_directory_and_exact_sizes(self):
        self.assertFalse(os.path.exists(self.fixtures_dir))

        paths = self.generator.create_fixtures()

        self.assertEqual(len(paths), len(SMALL_TIERS))
        for name, size_bytes in SMALL_TIERS:
            path = os.path.join(self.fixtures_dir, name)
            self.assertTrue(os.path.isfile(path))
            self.assertEqual(os.path.getsize(path), size_bytes)

    def test_rerun_overwrites_without_accumulating_files(self):
        self.generator.create_fixtures()
        first = {}
        for name, _ in SMALL_TIERS:
            with open(os.path.join(self.fixtures_dir, name), "rb") as f:
                first[name] = f.read()

        self.generator.create_fixtures()

        self.assertEqual(sorted(os.listdir(self.fixtures_dir)), sorted(n for n, _ in SMALL_TIERS))
        for name, size_bytes in SMALL_TIERS:
            with open(os.path.join(self.fixtures_dir, name), "rb") as f:
                data = f.read()
            self.assertEqual(len(data), size_bytes)
            # Random content, fresh on every run
            self.assertNotEqual(data, first[name])

    def test_stale_partial_files_are_removed(self):
        os.makedirs(self.fixtures_dir)
        stale = os.path.join(self.fixtures_dir, ".010kb.partial")
        with open(stale, "wb") as f:
            f.write(b"half")

        self.generator.create_fixtures()

        self.assertFalse(os.path.exists(stale))
        self.assertEqual(len(os.listdir(self.fixtures_dir)), len(SMALL_TIERS))

    def test_write_failure_leaves_no_truncated_fixture(self):
        def failing_data(size_bytes):
            yield b"x" * 100
            raise OSError(28, "No space left on device")

        os.makedirs(self.fixtures_dir)
        with patch.object(self.generator, "generate_fixture_data", side_effect=failing_data):
            with self.assertRaises(FixtureGenerationError):
                self.generator.create_fixture("003kb", 3 * 1024)

        self.assertEqual(os.listdir(self.fixtures_dir), [])

    def test_short_write_is_rejected(self):
        os.makedirs(self.fixtures_dir)
        with patch.object(self.generator, "generate_fixture_data", return_value=iter([b"x" * 10])):
            with self.assertRaises(FixtureGenerationError):
                self.generator.create_fixture("001kb", 1024)

        self.assertEqual(os.listdir(self.fixtures_dir), [])

    def test_failed_write_keeps_previous_complete_fixture(self):
        self.generator.create_fixtures()

        def failing_data(size_bytes):
            raise OSError(28, "No space left on device")
            yield

        with patch.object(self.generator, "generate_fixture_data", side_effect=failing_data):
            with self.assertRaises(FixtureGenerationError):
                self.generator.create_fixture("010kb", 10 * 1024)

        self.assertEqual(os.path.getsize(os.path.join(self.fixtures_dir, "010kb")), 10 * 1024)
        self.assertEqual(len(os.listdir(self.fixtures_dir)), len(SMALL_TIERS))

    def test_directory_creation_failure(self):
        blocker = os.path.join(self.tmp.name, "not-a-dir")
        with open(blocker, "w") as f:
            f.write("file")

        generator = FixtureGenerator(BenchmarkConfig(
            fixtures_dir=os.path.join(blocker, "fixtures"),
            size_tiers=SMALL_TIERS,
        ))
        with self.assertRaises(FixtureGenerationError):
            generator.create_fixtures()


class TestFixturesCli(unittest.TestCase):
    """Exit status of the fixture generator entry point."""

    def test_unwritable_directory_exits_non_zero(self):
        with tempfile.TemporaryDirectory() as tmp:
            blocker = os.path.join(tmp, "blocker")
            with open(blocker, "w") as f:
                f.write("file")

            status = run(["--fixtures-dir", os.path.join(blocker, "fixtures")])

        self.assertEqual(status, 1)

    def test_success_exits_zero(self):
        with tempfile.TemporaryDirectory() as tmp:
            fixtures_dir = os.path.join(tmp, "fixtures")
            with patch("cli.fixtures.BenchmarkConfig") as config_class:
                config_class.return_value = BenchmarkConfig(
                    fixtures_dir=fixtures_dir, size_tiers=SMALL_TIERS
                )
                status = run(["--fixtures-dir", fixtures_dir])

            self.assertEqual(status, 0)
            self.assertEqual(len(os.listdir(fixtures_dir)), len(SMALL_TIERS))


if __name__ == '__main__':
    unittest.main()
