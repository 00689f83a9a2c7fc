"""
Tests for transfer records and the Parquet result log.
"""

import os
import sys
import tempfile
import unittest

import pandas as pd

# Add the parent directory to Python path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from persistence.parquet import ParquetPersistence
from persistence.record import TransferRecord


class TestTransferRecord(unittest.TestCase):
    """Test TransferRecord status reporting."""

    def test_success(self):
        record = TransferRecord("tftp-hpa", "001mb", 1048576, "get", "octet", 0, 0.5)
        self.assertTrue(record.succeeded)
        self.assertEqual(record.status_text(), "ok")

    def test_failures(self):
        failed = TransferRecord("tftp-rs", "001mb", 1048576, "put", "octet", 1, 0.5)
        timed_out = TransferRecord("tftp-rs", "001mb", 1048576, "put", "octet", -15, 5.0, timed_out=True)
        not_launched = TransferRecord("tftp-rs", "001mb", 1048576, "put", "octet", None, 0.0,
                                      error="No such file or directory")

        self.assertFalse(failed.succeeded)
        self.assertFalse(timed_out.succeeded)
        self.assertFalse(not_launched.succeeded)
        self.assertEqual(timed_out.status_text(), "timed out")
        self.assertEqual(not_launched.status_text(), "error: No such file or directory")


class TestParquetPersistence(unittest.TestCase):
    """Test saving transfer records."""

    def test_nothing_to_save(self):
        with tempfile.TemporaryDirectory() as tmp:
            persistence = ParquetPersistence(os.path.join(tmp, "results"))
            self.assertTrue(os.path.isdir(persistence.output_dir))
            self.assertIsNone(persistence.save_to_file())

    def test_one_row_per_record(self):
        with tempfile.TemporaryDirectory() as tmp:
            persistence = ParquetPersistence(tmp)
            persistence.store_record(TransferRecord("tftp-hpa", "001mb", 1048576, "get", "octet", 0, 0.5))
            persistence.store_record(TransferRecord("tftp-rs", "001mb", 1048576, "get", "octet", 2, 0.7))

            filepath = persistence.save_to_file("run")

            self.assertTrue(os.path.basename(filepath).startswith("run_"))
            df = pd.read_parquet(filepath)
            self.assertEqual(len(df), 2)
            self.assertEqual(list(df['exit_status']), [0, 2])
            self.assertEqual(list(df['elapsed_s']), [0.5, 0.7])
            self.assertEqual(set(df['operation']), {"get"})

    def test_columns_follow_record_fields(self):
        with tempfile.TemporaryDirectory() as tmp:
            persistence = ParquetPersistence(tmp)
            record = TransferRecord("tftp-rs", "010mb", 10485760, "put", "netascii", None, 0.0,
                                    error="No such file or directory")
            persistence.store_record(record)

            df = pd.read_parquet(persistence.save_to_file())

            self.assertEqual(list(df.columns), list(record.to_row()))
            self.assertEqual(df['error'][0], "No such file or directory")
            self.assertEqual(len(os.listdir(tmp)), 1)


if __name__ == '__main__':
    unittest.main()
