"""
taskdispatch - Task-signal extraction and assignee ranking

Reads free-text team chat messages, decides whether they describe a delegable
task, and ranks teammates by how well they suit it.

Architecture:
- Detection Context: Task classification and attribute extraction from text
- Ranking Context: Skill relevance, candidate signals, and assignee scoring
- Dispatch Context: Message screening and the detect-then-rank pipeline
"""

__version__ = "0.1.0"
