"""
Receipt store for archived files.

This package provides the path-addressed document accessors, the record
types of the current schema revision, the migration chain for older receipt
files, and loading/saving of the receipts file.
"""
