"""Bounded contexts of the job discovery engine: intake, matching, assessment, discovery."""
