"""
Transfer records and result persistence.
"""
