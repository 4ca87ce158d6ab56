"""
Base error type for the node merger.
Each pipeline stage defines its own subclass next to the code that raises it.
"""


class MergerError(Exception):
    """Base class for every error that terminates a merge run."""
    pass
