"""Application services: validation, setup wizard, order building/pipeline, tracking.

They hold the flow logic and stay free of terminal rendering, so the CLI and
tests can drive them with different prompters and providers.
"""
