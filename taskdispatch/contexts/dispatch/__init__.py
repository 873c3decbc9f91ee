"""
Dispatch Context

Responsibilities:
- Screens incoming chat messages before detection
- Runs detection against the current skill catalog
- Ranks the sender's teammates for detected tasks
- Summarizes the suggestion for the host application

Owns: Delegation pipeline, host-facing ports, team snapshot fixtures
Never: Delivers notifications or persists tasks
"""
