"""
Exception hierarchy for dupelink.

Only unrecoverable conditions are raised as exceptions; per-file scan,
cache and hashing problems are handled where they happen and show up as
reduced counts in the log.
"""


class DupelinkError(Exception):
    """Base exception for all dupelink errors."""
    pass


class StartupError(DupelinkError):
    """Raised before any work begins: unusable root path or log file."""
    pass


class ActionError(DupelinkError):
    """Raised when deleting, trashing or linking a duplicate fails. Aborts the run."""
    pass
