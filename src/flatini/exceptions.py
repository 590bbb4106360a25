class IniError(Exception):
    pass


class ParseError(IniError):
    """A line halted parsing.

    Attributes:
        lineno: The 1-based number of the offending line.
        line: The offending line, without its line terminator.
        config: The sections parsed before the offending line.
    """

    reason = "invalid line"

    def __init__(self, lineno: int, line: str, config: dict[str, dict[str, str]]):
        self.lineno = lineno
        self.line = line
        self.config = config

        super().__init__(f"{self.reason} on line {lineno}: '{line}'")

    def __reduce__(self):
        return self.__class__, (self.lineno, self.line, self.config)


class MissingSectionContext(ParseError):
    reason = "property before any section"


class MissingSeparator(ParseError):
    reason = "no '=' in property"


class SourceUnavailable(IniError):
    pass


class DestinationUnwritable(IniError):
    pass
