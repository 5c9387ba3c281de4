from __future__ import annotations


class WichtelError(RuntimeError):
    """Base class for every error the draw raises on purpose."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class GenerationError(WichtelError):
    pass


class ValidationError(WichtelError):
    """An assignment breaks one of the derangement invariants."""

    def __init__(self, reason: str):
        super().__init__(f"Invalid assignment: {reason}")
        self.reason = reason


class InvalidMemberError(WichtelError):
    def __init__(self, name):
        super().__init__("Invalid name.")
        self.name = name


class AssignmentMissingError(WichtelError):
    def __init__(self, name: str):
        super().__init__(f"There is no assignment for {name}.")
        self.name = name
