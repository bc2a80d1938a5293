class ParseError(Exception):
    """
    Base class for every failure detected while preprocessing.

    The location is optional when raised; handlers closer to the line
    loop fill it in with locate(). The first location set is kept.
    """

    def __init__(self, message, line=None, filename=None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.filename = filename

    def locate(self, line, filename):
        if self.line is None:
            self.line = line
            self.filename = filename
        return self

    def __str__(self):
        if self.line is None:
            return self.message
        return f"{self.filename}:{self.line}: {self.message}"


class IncludeError(ParseError):
    pass


class DirectiveSyntaxError(ParseError):
    pass


class ConditionalError(ParseError):
    pass


class LimitExceeded(ParseError):
    pass


class RegistryFull(ValueError):
    pass
