"""
Runtime package for the GuessWho server.

This package contains:
- API layer (FastAPI server + routes)
- Agents (turn-taking game logic)
- Stores (chat threads, translations)
- Models (Pydantic models for requests, responses and threads)
"""
