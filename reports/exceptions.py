# reports/exceptions.py


class ReportError(Exception):
    """Base class for report generation errors."""


class TableLayoutError(ReportError):
    """Section data the table engine cannot lay out (bad arity, bad cell, oversized row)."""
