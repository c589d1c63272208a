class BroadsheetError(Exception):
    """Base class for problems found while aggregating exam results."""

    def __init__(self, message, student_id=None, subject_id=None):
        super().__init__(message)
        self.student_id = student_id
        self.subject_id = subject_id


class MalformedResult(BroadsheetError):
    """marks_obtained or max_marks is not a number."""


class MissingSchedule(BroadsheetError):
    """A result points at a subject that is not on the exam's date sheet."""
