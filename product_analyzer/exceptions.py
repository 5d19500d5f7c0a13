"""
Analysis errors

Every abort-class failure of an analysis run derives from AnalysisError so
callers can catch one type and show its message.
"""


class AnalysisError(Exception):
    """The export cannot be analysed; no partial result is produced."""


class EmptyFileError(AnalysisError):
    def __init__(self, message: str = "File is empty or invalid CSV format."):
        super().__init__(message)


class HeaderNotFoundError(AnalysisError):
    def __init__(self, message: str = 'Required identifier column ("Item ID") not found.'):
        super().__init__(message)


class MissingColumnsError(AnalysisError):
    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(f"Missing required columns: {', '.join(self.missing)}.")
