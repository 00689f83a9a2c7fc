"""
Common utilities for the TFTP benchmark.
"""

from .parameters import BenchmarkParameters, ParameterError, parse_benchmark_parameters
from .system_factory import create_transfer_system, create_transfer_systems

__all__ = [
    'BenchmarkParameters',
    'ParameterError',
    'parse_benchmark_parameters',
    'create_transfer_system',
    'create_transfer_systems',
]
