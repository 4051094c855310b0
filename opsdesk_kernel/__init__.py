"""
OpsDesk Kernel - records store for the operations dashboard.

Two independent record types with:
- Store-assigned integer ids that are never reused
- Fixed-point money (NUMERIC(10, 2), half-up rounding)
- Created/updated timestamps from an injectable clock
- Read-only selectors for listings, summaries and chart rollups
"""

__version__ = "0.1.0"
