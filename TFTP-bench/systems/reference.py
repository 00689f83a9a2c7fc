"""
tftp-hpa reference client implementation.
"""

from typing import List

from systems.base import TransferSystem
from configuration import BenchmarkConfig, REFERENCE_NAME
import logging

logger = logging.getLogger(__name__)


class ReferenceClientSystem(TransferSystem):
    """tftp-hpa client, configured entirely through its command line."""

    def __init__(self, config: BenchmarkConfig, name: str = REFERENCE_NAME):
        super().__init__(name=name, config=config)
        logger.info(
            f"Initialized {name} reference client "
            f"({config.reference_bin} -> {config.server_host}:{config.server_port})"
        )

    def build_command(self, fixture: str, operation: str, transfer_mode: str) -> List[str]:
        command = [
            self.config.reference_bin,
            "-v",
            self.config.server_host,
            str(self.config.server_port),
            "-m", transfer_mode,
            "-c", operation,
        ]
        if operation == "get":
            # Remote fixture name, local destination overwritten every time
            command += [fixture, self.config.get_destination]
        elif operation == "put":
            command += [self.config.fixture_path(fixture), self.config.put_remote_name]
        else:
            raise ValueError(f"Unsupported operation: {operation}")
        return command
