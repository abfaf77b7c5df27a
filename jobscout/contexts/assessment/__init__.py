"""
Assessment Context

Responsibilities:
- Scores the long-term career value of a job (brand, skill growth, network, compensation)
- Flags postings that look like scams from weighted red flags

Owns: Career capital and scam risk scoring
Never: Reads the candidate's fit score or category; a high-fit posting can still be risky
"""
