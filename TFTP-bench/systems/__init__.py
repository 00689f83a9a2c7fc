"""
TFTP client implementations under test.
"""
