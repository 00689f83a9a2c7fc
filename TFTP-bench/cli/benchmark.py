"""
Benchmark driver: time the reference and candidate TFTP clients on every fixture.
"""

import asyncio
import os
import sys
import logging
import argparse
import random
from typing import List, Optional, Sequence

import uvloop

# Ensure project root is in path (for running as script)
# When run as module (python -m cli.benchmark), this is not needed
_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from configuration import BenchmarkConfig
from common.parameters import (
    BenchmarkParameters,
    ParameterError,
    USAGE,
    validate_invocation,
)
from common.system_factory import create_transfer_systems
from persistence.parquet import ParquetPersistence
from persistence.record import TransferRecord
from systems.base import TransferSystem

# Set up logging (only if not already configured)
if not logging.root.handlers:
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
    )
logger = logging.getLogger(__name__)


class BenchmarkDriver:
    """Runs one timed transfer per (fixture, implementation) pair, strictly in sequence."""

    def __init__(
        self,
        params: BenchmarkParameters,
        config: BenchmarkConfig = None,
        systems: List[TransferSystem] = None,
        persistence: Optional[ParquetPersistence] = None,
        shuffle: bool = False,
        rng: random.Random = None,
    ):
        self.params = params
        self.config = config or BenchmarkConfig()
        # Reference first, candidate second
        self.systems = systems if systems is not None else create_transfer_systems(self.config)
        self.persistence = persistence
        self.shuffle = shuffle
        self.rng = rng or random.Random()

        logger.info(
            f"Initialized benchmark driver: {params.operation} in {params.transfer_mode} mode, "
            f"implementations: {', '.join(system.name for system in self.systems)}"
        )

    def list_fixtures(self) -> List[str]:
        """Return fixture names, sorted, skipping hidden entries and directories."""
        fixtures_dir = self.config.fixtures_dir
        return sorted(
            entry for entry in os.listdir(fixtures_dir)
            if not entry.startswith(".") and os.path.isfile(os.path.join(fixtures_dir, entry))
        )

    def _ordered_systems(self) -> List[TransferSystem]:
        if not self.shuffle:
            return list(self.systems)
        systems = list(self.systems)
        self.rng.shuffle(systems)
        return systems

    async def run_benchmark(self) -> List[TransferRecord]:
        """Execute the complete benchmark.

        A failed transfer never stops the run; it is reported and the driver
        moves on.

        Returns:
            One record per transfer attempt, in execution order
        """
        fixtures = self.list_fixtures()
        if not fixtures:
            logger.warning(f"No fixtures found in {self.config.fixtures_dir}")

        operation = self.params.operation
        transfer_mode = self.params.transfer_mode
        verb = "Getting" if operation == "get" else "Putting"

        records = []
        for fixture in fixtures:
            print(f"{verb} file: {fixture}", flush=True)

            for system in self._ordered_systems():
                print(f"Using: {system.name}", flush=True)
                # Let the server settle before every measurement
                await asyncio.sleep(self.config.settle_delay)

                record = await system.run_transfer(fixture, operation, transfer_mode)
                print(format_record(record), flush=True)

                records.append(record)
                if self.persistence is not None:
                    self.persistence.store_record(record)

        failed = sum(1 for record in records if not record.succeeded)
        if failed:
            logger.warning(f"Completed {len(records)} transfers, {failed} failed")
        else:
            logger.info(f"Completed {len(records)} transfers")

        return records


def format_record(record: TransferRecord) -> str:
    """Render the per-transfer timing line written to stdout."""
    return (
        f"{record.implementation}: {record.operation} {record.fixture} "
        f"({record.transfer_mode}) {record.elapsed_s:.3f}s elapsed [{record.status_text()}]"
    )


class BenchmarkArgumentParser(argparse.ArgumentParser):
    """Argument parser reporting malformed invocations as ParameterError instead of exiting 2."""

    def error(self, message):
        raise ParameterError(message, show_usage=True)


def build_parser() -> argparse.ArgumentParser:
    parser = BenchmarkArgumentParser(
        prog="tftp-bench",
        description="Compare a reference and a candidate TFTP client on the fixture corpus",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate fixtures first
  tftp-bench-fixtures

  # Download every fixture in binary mode
  tftp-bench octet get

  # Upload every fixture, record results, give up on a transfer after 5 minutes
  tftp-bench --results-dir results --timeout 300 netascii put
        """,
    )
    parser.add_argument(
        "params", nargs="*", metavar="TRANSFER_MODE [REQUEST_TYPE]",
        help="'octet' or 'netascii' (default: octet), then 'get' or 'put' (default: get)",
    )
    parser.add_argument("--fixtures-dir", default=None,
                        help="Directory holding the fixtures (default: fixtures)")
    parser.add_argument("--timeout", type=float, default=None,
                        help="Per-transfer timeout in seconds, 0 disables (default: 600)")
    parser.add_argument("--settle-delay", type=float, default=None,
                        help="Pause before every transfer in seconds (default: 1)")
    parser.add_argument("--results-dir", default=None,
                        help="Also write a Parquet log of every transfer to this directory")
    parser.add_argument("--shuffle", action="store_true",
                        help="Randomize the implementation order per fixture")
    parser.add_argument("--time-wrapper", default=None,
                        help="External timing tool to wrap every transfer with, e.g. /usr/bin/time")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    return parser


def run(argv: Sequence[str] = None) -> int:
    """Validate the invocation, run the benchmark and return the exit status."""
    parser = build_parser()
    try:
        # Options may sit between the two positionals
        args = parser.parse_intermixed_args(argv)
        config = BenchmarkConfig(
            fixtures_dir=args.fixtures_dir,
            settle_delay=args.settle_delay,
            transfer_timeout=args.timeout,
            time_wrapper=args.time_wrapper,
        )
        params = validate_invocation(args.params, config.fixtures_dir)
    except ParameterError as e:
        print(str(e), file=sys.stderr)
        if e.show_usage:
            print(USAGE.format(prog=parser.prog), file=sys.stderr)
        return 1

    logging.getLogger().setLevel(getattr(logging, args.log_level))

    persistence = None
    try:
        if args.results_dir:
            persistence = ParquetPersistence(args.results_dir)
        driver = BenchmarkDriver(params, config=config, persistence=persistence, shuffle=args.shuffle)
        uvloop.run(driver.run_benchmark())
    except KeyboardInterrupt:
        logger.info("Benchmark interrupted by user")
        return 1
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        return 1
    finally:
        if persistence is not None:
            filepath = persistence.save_to_file()
            if filepath:
                logger.info(f"Saved transfer records to {filepath}")

    return 0


def main():
    """Main entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
