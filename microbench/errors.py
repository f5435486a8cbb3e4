"""Harness errors. LowConfidence is not an exception; see ResultRecord.low_confidence."""


class BenchmarkError(Exception):
    """Base class for harness failures."""


class DuplicateCaseName(BenchmarkError):
    def __init__(self, name: str):
        super().__init__(f"benchmark case {name!r} is already registered")
        self.name = name


class EmptyCaseSet(BenchmarkError):
    def __init__(self):
        super().__init__("no benchmark cases registered")


class OperationPanicked(BenchmarkError):
    """An operation raised during measurement; the run is aborted."""

    def __init__(self, case_name: str, cause: BaseException):
        super().__init__(f"benchmark case {case_name!r} raised {type(cause).__name__}: {cause}")
        self.case_name = case_name
        self.cause = cause
