"""
Ranking Context

Responsibilities:
- Computes per-call skill relevance from the task text and required skills
- Scores candidates on skill match, recent activity, and workload
- Derives activity and workload signals from raw timestamps and task counts
- Explains each score with a short justification

Owns: Ranking weights, relevance map, candidate scoring
Never: Parses messages or decides whether something is a task
"""
