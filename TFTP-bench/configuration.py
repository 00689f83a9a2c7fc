"""
Configuration constants for the TFTP benchmark harness.

This module contains all configuration parameters including:
- Fixture corpus layout and size tiers
- TFTP server address used by the reference client
- Paths of the reference and candidate client binaries
- Driver timing parameters (settle delay, per-transfer timeout)
"""

import os
from typing import List, Optional, Tuple

# =============================================================================
# FILE SIZE CONSTANTS
# =============================================================================

BYTES_PER_MB: int = 1024 * 1024

# =============================================================================
# FIXTURE CONFIGURATION
# =============================================================================

# Directory holding the generated corpus (relative to the working directory)
FIXTURES_DIR: str = os.getenv("TFTP_BENCH_FIXTURES_DIR", "fixtures")

# Size tiers in MiB, generated in this order
SIZE_TIERS_MB: Tuple[int, ...] = (1, 10, 50, 100, 250)

# 1 -> "001mb", 250 -> "250mb"
FIXTURE_NAME_FORMAT: str = "{:03d}mb"

# Suffix of the hidden file a fixture is written to before the final rename
PARTIAL_SUFFIX: str = ".partial"

# Random data is streamed to disk in chunks of this size
WRITE_CHUNK_SIZE: int = BYTES_PER_MB

# =============================================================================
# TFTP SERVER CONFIGURATION
# =============================================================================

TFTP_SERVER_HOST: str = os.getenv("TFTP_SERVER_HOST", "127.0.0.1")
TFTP_SERVER_PORT: int = int(os.getenv("TFTP_SERVER_PORT", "69"))

# =============================================================================
# IMPLEMENTATIONS UNDER TEST
# =============================================================================

# Reference implementation (tftp-hpa client)
REFERENCE_NAME: str = "tftp-hpa"
REFERENCE_CLIENT_BIN: str = os.getenv("TFTP_BIN", "/usr/bin/tftp")

# Candidate implementation (tftp-rs example clients)
CANDIDATE_NAME: str = "tftp-rs"
CANDIDATE_GET_BIN: str = os.getenv("TFTP_RS_GET_BIN", "../target/release/client-get")
CANDIDATE_PUT_BIN: str = os.getenv("TFTP_RS_PUT_BIN", "../target/release/client-put")

# Local file a reference `get` writes into, overwritten on every iteration
GET_DESTINATION: str = "/tmp/testfile"

# Remote file name a reference `put` writes to on the server
PUT_REMOTE_NAME: str = "testfile"

# =============================================================================
# BENCHMARK PARAMETERS
# =============================================================================

TRANSFER_MODES: Tuple[str, ...] = ("octet", "netascii")
OPERATIONS: Tuple[str, ...] = ("get", "put")

DEFAULT_TRANSFER_MODE: str = "octet"
DEFAULT_OPERATION: str = "get"

# =============================================================================
# DRIVER TIMING
# =============================================================================

SETTLE_DELAY_SECONDS: float = 1.0  # Pause before every transfer
TRANSFER_TIMEOUT_SECONDS: float = 600.0  # 0 disables the per-transfer timeout

# Seconds to wait after SIGTERM before a child process tree is killed
TERMINATE_GRACE_SECONDS: float = 3.0

# =============================================================================
# CLI DEFAULTS
# =============================================================================

DEFAULT_RESULTS_PREFIX: str = "tftp_bench"


def fixture_name(size_mb: int) -> str:
    """Return the fixture file name encoding a size tier."""
    return FIXTURE_NAME_FORMAT.format(size_mb)


def default_size_tiers() -> List[Tuple[str, int]]:
    """Return the default (name, size_bytes) tiers in generation order."""
    return [(fixture_name(size_mb), size_mb * BYTES_PER_MB) for size_mb in SIZE_TIERS_MB]


class BenchmarkConfig:
    """Process-wide settings shared by the fixture generator and the driver.

    Every field defaults to the module constant of the same purpose; tests
    substitute tiny size tiers, fake binaries and a zero settle delay.
    """

    def __init__(
        self,
        fixtures_dir: str = None,
        size_tiers: List[Tuple[str, int]] = None,
        server_host: str = None,
        server_port: int = None,
        reference_bin: str = None,
        candidate_get_bin: str = None,
        candidate_put_bin: str = None,
        get_destination: str = None,
        put_remote_name: str = None,
        settle_delay: float = None,
        transfer_timeout: Optional[float] = None,
        time_wrapper: Optional[str] = None,
        write_chunk_size: int = None,
    ):
        self.fixtures_dir = fixtures_dir if fixtures_dir is not None else FIXTURES_DIR
        self.size_tiers = list(size_tiers) if size_tiers is not None else default_size_tiers()
        self.server_host = server_host or TFTP_SERVER_HOST
        self.server_port = server_port if server_port is not None else TFTP_SERVER_PORT
        self.reference_bin = reference_bin or REFERENCE_CLIENT_BIN
        self.candidate_get_bin = candidate_get_bin or CANDIDATE_GET_BIN
        self.candidate_put_bin = candidate_put_bin or CANDIDATE_PUT_BIN
        self.get_destination = get_destination or GET_DESTINATION
        self.put_remote_name = put_remote_name or PUT_REMOTE_NAME
        self.settle_delay = settle_delay if settle_delay is not None else SETTLE_DELAY_SECONDS
        if transfer_timeout is None:
            transfer_timeout = TRANSFER_TIMEOUT_SECONDS
        # Non-positive timeouts mean "wait forever"
        self.transfer_timeout = transfer_timeout if transfer_timeout > 0 else None
        self.time_wrapper = time_wrapper or None
        self.write_chunk_size = write_chunk_size or WRITE_CHUNK_SIZE

    def fixture_path(self, name: str) -> str:
        """Path of a fixture relative to the working directory."""
        return os.path.join(self.fixtures_dir, name)

    def __repr__(self):
        return (
            f"BenchmarkConfig(fixtures_dir={self.fixtures_dir!r}, "
            f"server={self.server_host}:{self.server_port}, "
            f"tiers={[name for name, _ in self.size_tiers]})"
        )
