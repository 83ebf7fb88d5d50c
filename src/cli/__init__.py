"""Typer CLI: `dominos order|track|config ...`."""
