"""Exceptions raised by the timing registry."""


class TimingError(Exception):
    pass


class UnknownMarkError(TimingError, KeyError):
    """A measure referenced a mark that is not in the registry."""

    def __init__(self, mark_name: str):
        super().__init__(mark_name)
        self.mark_name = mark_name

    def __str__(self) -> str:
        # KeyError would repr() the argument
        return f"Unknown mark '{self.mark_name}'"
