import enum


class ErrorTypes(enum.Enum):
    UNMATCHED_OPEN_PAREN = enum.auto()
    UNMATCHED_CLOSE_PAREN = enum.auto()
    INVALID_TAPE_CELL = enum.auto()
    OPERATION_LIMIT = enum.auto()


class InterpreterError(Exception):
    """Base class for exceptions to do with an interpreter."""


class _LocatedError(InterpreterError):
    """Error tied to a position in the program.

    Attributes:
        error -- Source of error (default to None).
        location -- Index into the program of the offending instruction (default to None).
        message -- Optional mesage (default to None)."""

    error_type = None

    def __init__(self, location=None, message=None, error=None):
        super().__init__(message or self.__doc__)
        self.error = error or self.error_type
        self.location = location
        self.message = message


class ProgramSyntaxError(_LocatedError):
    """Error raised when the brackets of a program don't line up."""


class ProgramRuntimeError(_LocatedError):
    """Error raised when a program does something illegal while running."""


class UnclosedLoopError(ProgramSyntaxError):
    """A skipped `[` has no `]` after it."""

    error_type = ErrorTypes.UNMATCHED_OPEN_PAREN


class UnopenedLoopError(ProgramSyntaxError):
    """A `]` was reached with no open loop."""

    error_type = ErrorTypes.UNMATCHED_CLOSE_PAREN


class TapeUnderflowError(ProgramRuntimeError):
    """The tape pointer was moved left of the first cell."""

    error_type = ErrorTypes.INVALID_TAPE_CELL


class BudgetExceededError(ProgramRuntimeError):
    """More operations were executed than the interpreter allows.

    Attributes:
        limit -- The ceiling that was exceeded."""

    error_type = ErrorTypes.OPERATION_LIMIT

    def __init__(self, limit, location=None, message=None):
        super().__init__(location, message or f'Operation limit of {limit} exceeded')
        self.limit = limit
