"""
Intake Context

Responsibilities:
- Validates raw job posting text and applies user-supplied overrides
- Extracts title, company, location, work arrangement, salary and dates
- Extracts skills, tools, experience, seniority, responsibilities and benefits
- Assesses parse quality and builds the canonical id used for deduplication

Owns: RawPosting, ParsedJob and the tagged parse outcome
Never: Scores fit, categorizes, or ranks jobs
"""
