from glslpreprocessor import exceptions


class Diagnostic:
    __slots__ = ["message", "line", "filename", "kind"]

    def __init__(self, message, line, filename, kind=exceptions.ParseError):
        self.message = message
        self.line = line
        self.filename = filename
        self.kind = kind

    @classmethod
    def from_error(cls, error):
        line = error.line if error.line is not None else 0
        filename = error.filename if error.filename is not None else ""
        return cls(error.message, line, filename, type(error))

    def to_error(self):
        return self.kind(self.message, self.line, self.filename)

    def __eq__(self, other):
        if not isinstance(other, Diagnostic):
            return NotImplemented
        return ((self.message, self.line, self.filename) ==
                (other.message, other.line, other.filename))

    def __str__(self):
        return f"{self.filename}:{self.line}: error: {self.message}"

    def __repr__(self):
        return (f"Diagnostic({self.message!r}, {self.line!r}, "
                f"{self.filename!r})")


class Result:
    """
    Outcome of one preprocessing run.

    Exactly one of output and error is set. Build instances with
    Result.ok() or Result.failed(); release() hands the payload over and
    leaves the result empty, so releasing twice is harmless.
    """

    __slots__ = ["success", "_output", "_error"]

    def __init__(self, success, output=None, error=None):
        if success and (output is None or error is not None):
            raise ValueError("successful result needs output and no error")
        if not success and (error is None or output is not None):
            raise ValueError("failed result needs an error and no output")
        self.success = success
        self._output = output
        self._error = error

    @classmethod
    def ok(cls, output):
        return cls(True, output=output)

    @classmethod
    def failed(cls, diagnostic):
        return cls(False, error=diagnostic)

    @property
    def output(self):
        return self._output

    @property
    def error(self):
        return self._error

    @property
    def error_message(self):
        return self._error.message if self._error is not None else None

    @property
    def error_line(self):
        return self._error.line if self._error is not None else 0

    @property
    def error_file(self):
        return self._error.filename if self._error is not None else None

    def unwrap(self):
        if self.success:
            return self._output
        if self._error is None:
            raise ValueError("result has already been released")
        raise self._error.to_error()

    def release(self):
        payload = self._output if self.success else self._error
        self._output = None
        self._error = None
        self.success = False
        return payload

    def __bool__(self):
        return self.success

    def __repr__(self):
        if self.success:
            return f"Result.ok({len(self._output)} chars)"
        return f"Result.failed({self._error!r})"
