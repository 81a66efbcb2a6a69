"""Domain models and errors.

The domain holds pure, strict data structures (Pydantic v2): it knows nothing
about subprocesses, the filesystem layout of vendor builds, or the CLI.
"""
