"""
Setup: generate the fixture corpus the benchmark driver transfers.
"""

import os
import sys
import logging
import argparse
import time
from typing import Iterator, List

# Ensure project root is in path (for running as script)
# When run as module (python -m cli.fixtures), this is not needed
_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from configuration import (
    BYTES_PER_MB,
    PARTIAL_SUFFIX,
    BenchmarkConfig,
)

# Set up logging (only if not already configured)
if not logging.root.handlers:
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
    )
logger = logging.getLogger(__name__)


class FixtureGenerationError(RuntimeError):
    """A fixture could not be written completely."""


class FixtureGenerator:
    """Writes one random-content file per size tier into the fixtures directory."""

    def __init__(self, config: BenchmarkConfig = None):
        self.config = config or BenchmarkConfig()
        self.fixtures_dir = self.config.fixtures_dir

        logger.info(f"Initialized fixture generator for {self.fixtures_dir}")

    def generate_fixture_data(self, size_bytes: int) -> Iterator[bytes]:
        """Yield exactly `size_bytes` random bytes in bounded chunks."""
        chunk_size = self.config.write_chunk_size

        for offset in range(0, size_bytes, chunk_size):
            yield os.urandom(min(chunk_size, size_bytes - offset))

    def partial_path(self, name: str) -> str:
        # Hidden so the driver never lists it as a fixture
        return os.path.join(self.fixtures_dir, f".{name}{PARTIAL_SUFFIX}")

    def create_fixture(self, name: str, size_bytes: int) -> str:
        """Write one fixture through a temporary file and rename it into place.

        Args:
            name: Fixture file name, e.g. '010mb'
            size_bytes: Exact size of the fixture

        Returns:
            Path of the finished fixture

        Raises:
            FixtureGenerationError: If the fixture could not be fully written.
                No file under `name` is left truncated.
        """
        final_path = self.config.fixture_path(name)
        partial_path = self.partial_path(name)

        try:
            written = 0
            with open(partial_path, "wb") as f:
                for chunk in self.generate_fixture_data(size_bytes):
                    f.write(chunk)
                    written += len(chunk)
                f.flush()
                os.fsync(f.fileno())

            if written != size_bytes:
                raise FixtureGenerationError(
                    f"Short write for {name}: {written} of {size_bytes} bytes"
                )

            os.replace(partial_path, final_path)

        except OSError as e:
            self._discard(partial_path)
            raise FixtureGenerationError(f"Failed to write fixture {name}: {e}") from e
        except BaseException:
            self._discard(partial_path)
            raise

        return final_path

    def create_fixtures(self) -> List[str]:
        """Create every configured size tier, overwriting existing fixtures.

        Returns:
            Paths of the created fixtures in tier order
        """
        try:
            os.makedirs(self.fixtures_dir, exist_ok=True)
        except OSError as e:
            raise FixtureGenerationError(
                f"Cannot create fixtures directory {self.fixtures_dir}: {e}"
            ) from e

        self._remove_stale_partials()

        logger.info("Creating fixtures ...")
        paths = []
        for name, size_bytes in self.config.size_tiers:
            start_time = time.time()
            path = self.create_fixture(name, size_bytes)
            write_time = time.time() - start_time

            logger.info(
                f"Created {path} ({size_bytes / BYTES_PER_MB:.0f} MiB) in {write_time:.2f} seconds"
            )
            paths.append(path)

        return paths

    def _remove_stale_partials(self) -> None:
        """Remove temporary files left behind by an interrupted earlier run."""
        for entry in os.listdir(self.fixtures_dir):
            if entry.startswith(".") and entry.endswith(PARTIAL_SUFFIX):
                logger.warning(f"Removing stale partial fixture {entry}")
                self._discard(os.path.join(self.fixtures_dir, entry))

    @staticmethod
    def _discard(path: str) -> None:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tftp-bench-fixtures",
        description="Generate the random-content fixture corpus for the TFTP benchmark",
    )
    parser.add_argument(
        "--fixtures-dir", default=None,
        help="Directory to write fixtures to (default: fixtures)",
    )
    parser.add_argument(
        "--log-level", default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    )
    return parser


def run(argv: List[str] = None) -> int:
    """Generate fixtures and return the process exit status."""
    args = build_parser().parse_args(argv)
    logging.getLogger().setLevel(getattr(logging, args.log_level))

    generator = FixtureGenerator(BenchmarkConfig(fixtures_dir=args.fixtures_dir))
    try:
        paths = generator.create_fixtures()
    except FixtureGenerationError as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        logger.info("Fixture generation interrupted by user")
        return 1

    logger.info(f"Created {len(paths)} fixtures in {generator.fixtures_dir}")
    return 0


def main():
    """Main entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
