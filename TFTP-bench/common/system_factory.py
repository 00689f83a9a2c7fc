"""
Factory module for creating transfer system instances.
"""

import logging

from configuration import BenchmarkConfig
from systems.base import TransferSystem
from systems.reference import ReferenceClientSystem
from systems.candidate import CandidateClientSystem

logger = logging.getLogger(__name__)

SYSTEM_TYPES = ("reference", "candidate")


def create_transfer_system(system_type: str, config: BenchmarkConfig) -> TransferSystem:
    """Create and return the transfer system for one implementation under test.

    Args:
        system_type: 'reference' or 'candidate'
        config: Shared benchmark configuration

    Returns:
        Transfer system instance (ReferenceClientSystem or CandidateClientSystem)

    Raises:
        ValueError: If system_type is not supported
    """
    system_type = system_type.lower()

    if system_type == "reference":
        return ReferenceClientSystem(config)

    elif system_type == "candidate":
        return CandidateClientSystem(config)

    else:
        raise ValueError(f"Unsupported system type: {system_type}. Must be 'reference' or 'candidate'.")


def create_transfer_systems(config: BenchmarkConfig) -> list:
    """Create both systems in benchmark order, reference first."""
    return [create_transfer_system(system_type, config) for system_type in SYSTEM_TYPES]
