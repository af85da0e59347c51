"""
Command line interface for sglacier.
"""
