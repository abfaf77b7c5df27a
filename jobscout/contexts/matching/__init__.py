"""
Matching Context

Responsibilities:
- Obtains a fit score and gap breakdown from the Fit Oracle, or a degraded estimate
- Categorizes jobs as reach, target, safety or avoid and decides whether to apply
- Computes priority scores with itemized penalties and ranks batches of jobs
- Compares 2 to 5 ranked jobs side by side

Owns: Fit results, categories, ranked jobs and comparisons
Never: Parses posting text or formats response envelopes
"""
