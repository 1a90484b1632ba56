"""
Exception and warning types raised by otu_summary.
"""


class OTUSummaryError(Exception):
    """Base class for fatal summary errors."""


class EmptyDatasetError(OTUSummaryError):
    """A count matrix has no samples or no features."""


class MissingStatisticError(OTUSummaryError):
    """A statistic needed for the percentage rows is absent from the table."""


class DuplicateNameError(OTUSummaryError):
    """Two datasets resolve to the same column name."""


class InvalidCountMatrixError(OTUSummaryError):
    """Input is not a two-dimensional, non-negative numeric table."""


class InvalidNameWarning(UserWarning):
    """A dataset label had to be rewritten to become a valid column name."""
