"""
Opt-in Parquet log of transfer attempts, one row each.
"""

import os
import logging
from typing import List, Optional
from datetime import datetime

import pandas as pd

from configuration import DEFAULT_RESULTS_PREFIX
from persistence.record import TransferRecord

logger = logging.getLogger(__name__)


class ParquetPersistence:
    """Collects the records of one driver run and writes them as a single table."""

    def __init__(self, output_dir: str = "results"):
        self.output_dir: str = output_dir
        self.records: List[TransferRecord] = []

        # Fail before the first transfer rather than after the last one
        os.makedirs(output_dir, exist_ok=True)

    def store_record(self, record: TransferRecord) -> None:
        self.records.append(record)

    def save_to_file(self, filename_prefix: str = DEFAULT_RESULTS_PREFIX) -> Optional[str]:
        """Write `<prefix>_<timestamp>.parquet` and return its path, or None for an empty run."""
        if not self.records:
            return None

        df = pd.DataFrame([record.to_row() for record in self.records])
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = os.path.join(self.output_dir, f"{filename_prefix}_{stamp}.parquet")

        logger.info(f"Writing {len(df)} transfer rows to {filepath}")
        df.to_parquet(filepath, index=False)
        return filepath
