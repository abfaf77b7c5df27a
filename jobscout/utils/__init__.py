"""
Shared utilities for jobscout.

Common functionality used across contexts:
- Logger setup with provenance
- Timestamps and day arithmetic
- Whole-term keyword matching
"""

from jobscout.utils.timestamp import now_exact, today

__all__ = ["now_exact", "today"]
