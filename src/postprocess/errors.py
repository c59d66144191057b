"""
Errors raised by the post-processing pipeline.
"""


class InvalidInputError(ValueError):
    """Raised when a prediction tensor or class-name table is malformed."""
