"""
tftp-rs candidate client implementation.
"""

from typing import List

from systems.base import TransferSystem
from configuration import BenchmarkConfig, CANDIDATE_NAME
import logging

logger = logging.getLogger(__name__)


class CandidateClientSystem(TransferSystem):
    """tftp-rs example clients.

    One executable per operation, taking the file as its only argument. The
    server address and transfer mode are baked into the binaries, so the
    mode is not passed on.
    """

    def __init__(self, config: BenchmarkConfig, name: str = CANDIDATE_NAME):
        super().__init__(name=name, config=config)
        logger.info(
            f"Initialized {name} candidate clients "
            f"(get: {config.candidate_get_bin}, put: {config.candidate_put_bin})"
        )

    def build_command(self, fixture: str, operation: str, transfer_mode: str) -> List[str]:
        if operation == "get":
            return [self.config.candidate_get_bin, fixture]
        elif operation == "put":
            return [self.config.candidate_put_bin, self.config.fixture_path(fixture)]
        raise ValueError(f"Unsupported operation: {operation}")
