from __future__ import annotations


class ExtractionError(Exception):
    pass


class StructuralMiss(ExtractionError):
    """A required heading or value could not be located on a page."""

    def __init__(self, reason: str, elements_summary: str = ""):
        super().__init__(reason)
        self.reason = reason
        self.elements_summary = elements_summary
