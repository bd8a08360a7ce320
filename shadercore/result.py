# ==========================================
# ERROR PROPAGATION: Result<T, E> Model
# ==========================================
"""
Ok / Err values used to carry build errors up through the include recursion.
"""


class Result:
    """Base class for Result<T, E> (Ok or Err)."""

    def is_ok(self) -> bool:
        return isinstance(self, Ok)

    def is_err(self) -> bool:
        return isinstance(self, Err)

    def unwrap(self):
        """Get value or raise the carried error."""
        if isinstance(self, Ok):
            return self.value
        if isinstance(self.error, BaseException):
            raise self.error
        raise RuntimeError(f"Called unwrap() on Err: {self.error}")


class Ok(Result):
    """Success case: Ok<T>."""

    def __init__(self, value):
        self.value = value

    def __repr__(self):
        return f"Ok({self.value!r})"

    def __eq__(self, other):
        return isinstance(other, Ok) and other.value == self.value


class Err(Result):
    """Error case: Err<E>."""

    def __init__(self, error):
        self.error = error

    def __repr__(self):
        return f"Err({self.error!r})"

    def __str__(self):
        return str(self.error)
