"""
Benchmark parameter parsing and validation for the driver.

All historical invocation forms go through one function with explicit
defaults:

    MODE OPERATION   canonical form
    MODE             operation defaults to 'get'
    (nothing)        mode defaults to 'octet', operation to 'get'
"""

import os
import logging
from typing import NamedTuple, Sequence

from configuration import (
    TRANSFER_MODES,
    OPERATIONS,
    DEFAULT_TRANSFER_MODE,
    DEFAULT_OPERATION,
)

logger = logging.getLogger(__name__)

MAX_POSITIONAL_ARGS = 2
USAGE = "Usage: {prog} [TRANSFER_MODE [REQUEST_TYPE]]"


class ParameterError(ValueError):
    """Invalid driver invocation. Nothing has been transferred yet."""

    def __init__(self, message: str, show_usage: bool = False):
        super().__init__(message)
        self.show_usage = show_usage


class BenchmarkParameters(NamedTuple):
    """Transfer mode and operation of one driver run."""

    transfer_mode: str
    operation: str


def parse_benchmark_parameters(args: Sequence[str]) -> BenchmarkParameters:
    """Turn positional arguments into validated benchmark parameters.

    Args:
        args: Positional arguments, at most two

    Returns:
        BenchmarkParameters with defaults applied

    Raises:
        ParameterError: On a wrong argument count or an unsupported value
    """
    args = list(args)
    if len(args) > MAX_POSITIONAL_ARGS:
        raise ParameterError(
            f"Expected at most {MAX_POSITIONAL_ARGS} arguments, got {len(args)}",
            show_usage=True,
        )

    transfer_mode = args[0] if len(args) > 0 else DEFAULT_TRANSFER_MODE
    operation = args[1] if len(args) > 1 else DEFAULT_OPERATION

    if transfer_mode not in TRANSFER_MODES:
        raise ParameterError("Transfer mode must be 'octet' or 'netascii'")

    if operation not in OPERATIONS:
        raise ParameterError("Request type must be either 'get' or 'put'")

    return BenchmarkParameters(transfer_mode=transfer_mode, operation=operation)


def check_fixtures_dir(fixtures_dir: str) -> None:
    """Fail unless the fixture generator has already run."""
    if not os.path.isdir(fixtures_dir):
        raise ParameterError(
            f"Fixtures directory '{fixtures_dir}' not found. "
            f"Run tftp-bench-fixtures to generate fixtures"
        )


def validate_invocation(args: Sequence[str], fixtures_dir: str) -> BenchmarkParameters:
    """Validate a driver invocation before any transfer is attempted.

    The fixtures directory is checked first, then the argument count, the
    transfer mode and the operation.
    """
    check_fixtures_dir(fixtures_dir)
    params = parse_benchmark_parameters(args)
    logger.debug(f"Validated parameters: {params}")
    return params
