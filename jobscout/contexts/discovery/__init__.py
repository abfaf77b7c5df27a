"""
Discovery Context

Responsibilities:
- Validates inbound requests, preferences and filters
- Orchestrates parse, dedup, rank and compare for callers
- Wraps every result in a success/error envelope with timing metadata
- Warns when an operation exceeds its performance target

Owns: The public engine API and its envelope contract
Never: Lets an exception escape an envelope-returning operation
"""
