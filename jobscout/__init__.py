"""
jobscout: job discovery and matching engine.

Turns free-text job postings into structured, deduplicated, scored and
categorized records, and compares ranked postings side by side.

Entry point: jobscout.contexts.discovery.engine.JobDiscoveryEngine
"""

__version__ = "0.1.0"
