"""
Detection Context

Responsibilities:
- Classifies free-text messages as delegable tasks or chatter
- Extracts deadline, priority, and mentioned skills
- Separates the task sentence from surrounding context
- Resolves deadline phrases to calendar dates

Owns: Detection vocabulary, scoring rules, date and sentence recognizers
Never: Ranks people or reads team data
"""
