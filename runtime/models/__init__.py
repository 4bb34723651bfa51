"""
Pydantic datamodels used by the GuessWho runtime.

Split into:
- thread_models: Thread + ThreadMessage (chat backend history)
- api_models: HTTP request/response schemas
"""
