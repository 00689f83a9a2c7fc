"""
Command line entry points of the TFTP benchmark.
"""
