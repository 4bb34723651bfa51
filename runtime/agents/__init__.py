"""
Agents used by the GuessWho runtime.

GuessAgent:
- starts a game from a full name (search + first question)
- forwards yes/no answers and tracks the question counter
- ends the round (confirm / exit)
"""
