class MonocheckError(Exception):
    """Base class for monocheck errors"""


class RewriteCorruptionError(MonocheckError):
    """A fix could not be applied without risking the file's integrity.

    Raised per occurrence; the caller drops that fix and carries on with the
    rest of the file.
    """

    def __init__(self, file_path, line_number: int, reason: str):
        self.file_path = file_path
        self.line_number = line_number
        self.reason = reason
        super().__init__(f"{file_path}:{line_number}: {reason}")
