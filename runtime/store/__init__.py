"""
Storage abstractions for the GuessWho runtime.

Includes:
- ThreadStore: chat thread history (in-memory + optional file-backed)
- TranslationStore: read-only access to translations.json
"""
