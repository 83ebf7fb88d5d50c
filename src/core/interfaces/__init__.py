"""Core interfaces/abstractions.

Why:
- Declares the contracts (Protocol) that adapters and the CLI implement.
- Inverts dependencies: the core depends on abstractions, so tests can plug in
  fakes for the ordering provider, the terminal and the config store.
"""
