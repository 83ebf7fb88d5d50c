"""Core: domain models, contracts and services (no terminal, no HTTP)."""
