"""
Service layer.

Each service encapsulates the business logic of one domain (accounts,
posts, likes) on top of a SQLite connection handed in by the caller.
Services raise ``ConnectAppError`` subclasses; they never return
partial results.
"""
