"""Infrastructure adapters: HTTP ordering API, JSON config file, external editor."""
