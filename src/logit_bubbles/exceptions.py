"""Exception hierarchy for logit-bubbles.

All exceptions derive from LogitBubblesError, enabling broad catch patterns
at the application boundary while allowing fine-grained handling internally.

The probability, truncation and layout pipeline never raises for control
values: out-of-range temperatures, top-k and top-p are clamped instead.
These exceptions cover load-time data and configuration problems.
"""


class LogitBubblesError(Exception):
    """Base exception for all logit-bubbles errors."""


class ScoreSetError(LogitBubblesError):
    """The static score set is malformed.

    Raised at load time for empty or duplicate labels and for non-finite
    raw scores, none of which the pipeline can represent.
    """


class ConfigValidationError(LogitBubblesError):
    """Configuration field validation failed.

    Raised when overrides contain unknown keys or when canvas and radius
    settings describe an impossible geometry.
    """


class SolverError(LogitBubblesError):
    """The relaxation solver was driven with invalid arguments.

    Raised for negative step counts or node arrays of mismatched shape.
    Non-convergence is not an error.
    """
