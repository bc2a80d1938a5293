from glslpreprocessor import exceptions
from glslpreprocessor.result import Diagnostic

INITIAL_CAPACITY = 4096


class OutputBuffer:
    """
    Append-only text accumulator with a hard size ceiling.

    Capacity doubles on demand and is clamped to max_size; an append that
    still does not fit raises LimitExceeded and leaves the buffer as is.
    """

    def __init__(self, max_size, initial_capacity=INITIAL_CAPACITY):
        self.max_size = max_size
        self.capacity = min(initial_capacity, max_size)
        self.size = 0
        self._chunks = []

    def append(self, text):
        if not text:
            return
        needed = self.size + len(text)
        if needed > self.capacity:
            self._grow(needed)
        self._chunks.append(text)
        self.size = needed

    def _grow(self, needed):
        new_capacity = self.capacity * 2
        if new_capacity < needed:
            new_capacity = needed * 2
        new_capacity = min(new_capacity, self.max_size)
        if needed > new_capacity:
            raise exceptions.LimitExceeded(
                "Output size exceeded maximum limit"
            )
        self.capacity = new_capacity

    def getvalue(self):
        if len(self._chunks) > 1:
            self._chunks = ["".join(self._chunks)]
        return self._chunks[0] if self._chunks else ""

    def __len__(self):
        return self.size


class ErrorReporter:
    """Keeps the first diagnostic recorded, later ones are dropped."""

    def __init__(self):
        self.diagnostic = None

    @property
    def has_error(self):
        return self.diagnostic is not None

    def record(self, error):
        if self.diagnostic is None:
            self.diagnostic = Diagnostic.from_error(error)
        return self.diagnostic
