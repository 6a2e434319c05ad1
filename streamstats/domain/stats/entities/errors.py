# streamstats/domain/stats/entities/errors.py


class StatError(Exception):
    """Base class for errors raised by online statistics."""
    pass


class MergeMismatchError(StatError):
    """Raised when two statistics with different types or configurations are merged."""
    def __init__(self, left, right, reason=None):
        self.left = left
        self.right = right
        self.reason = reason or "incompatible configuration"
        self.message = (
            f"Cannot merge {type(left).__name__} with {type(right).__name__}: {self.reason}"
        )
        super().__init__(self.message)


class IncompatibleInputError(StatError, TypeError):
    """Raised when a composite is built from stats that cannot share one observation."""
    def __init__(self, composite_name, input_types):
        self.composite_name = composite_name
        self.input_types = list(input_types)
        names = ", ".join(getattr(t, "__name__", str(t)) for t in self.input_types)
        self.message = f"{composite_name} components have incompatible input types: {names}"
        super().__init__(self.message)
