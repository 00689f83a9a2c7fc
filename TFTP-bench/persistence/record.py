"""
Basic data structures for the TFTP benchmark.
"""

import time


class TransferRecord:
    """Outcome of one timed transfer by one implementation."""

    def __init__(self, implementation, fixture, fixture_bytes, operation, transfer_mode,
                 exit_status, elapsed_s, timed_out: bool = False, error: str = "",
                 start_ts: float = None, end_ts: float = None):
        self.implementation = implementation
        self.fixture = fixture
        self.fixture_bytes = fixture_bytes
        self.operation = operation
        self.transfer_mode = transfer_mode
        self.exit_status = exit_status
        self.elapsed_s = elapsed_s
        self.timed_out = timed_out
        self.error = error
        self.start_ts = start_ts or time.time()
        self.end_ts = end_ts or time.time()

    @property
    def succeeded(self) -> bool:
        return self.exit_status == 0 and not self.timed_out and not self.error

    def status_text(self) -> str:
        """Short human-readable status used in the timing line."""
        if self.timed_out:
            return "timed out"
        if self.error:
            return f"error: {self.error}"
        if self.exit_status == 0:
            return "ok"
        return f"exit status {self.exit_status}"

    def to_row(self) -> dict:
        return {
            'implementation': self.implementation,
            'fixture': self.fixture,
            'fixture_bytes': self.fixture_bytes,
            'operation': self.operation,
            'transfer_mode': self.transfer_mode,
            'exit_status': self.exit_status,
            'elapsed_s': self.elapsed_s,
            'timed_out': self.timed_out,
            'error': self.error,
            'start_ts': self.start_ts,
            'end_ts': self.end_ts,
        }
