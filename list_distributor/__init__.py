"""Contact list ingestion and distribution.

Parses uploaded CSV / Excel contact lists into normalized records and splits
them across the active agents in contiguous, near-equal slices.
"""

__version__ = "0.1.0"
