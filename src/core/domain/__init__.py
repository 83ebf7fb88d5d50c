"""Domain models and errors.

Why:
- Pure, strict data structures (Pydantic v2) plus the error taxonomy.
- The domain knows nothing about HTTP, the terminal or the config file format.
"""
