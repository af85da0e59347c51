"""
sglacier - local receipt bookkeeping for files archived to an AWS Glacier vault.
"""

__version__ = "0.3.0"
