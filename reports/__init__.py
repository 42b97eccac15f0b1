# reports/__init__.py
from .schema import ReportRequest, Section
from .composer import ReportComposer, generate_report
from .tables import StripedTableEngine
from .exceptions import ReportError, TableLayoutError

__all__ = [
    "ReportRequest", "Section", "ReportComposer", "generate_report",
    "StripedTableEngine", "ReportError", "TableLayoutError",
]
