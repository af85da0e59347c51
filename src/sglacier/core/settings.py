"""
Project-wide constants or "settings" that are unlikely to change at runtime.
"""

CURRENT_SCHEMA_VERSION = 2  # Bump together with a new step in receipts.migration

INVENTORY_JOB_TYPE = "inventory-retrieval"

SHORT_ID_LENGTH = 17  # Characters of an archive/job ID shown in listings
JOB_OUTPUT_ID_LENGTH = 8  # Characters of a job ID used in output filenames
