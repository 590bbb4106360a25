import dataclasses
import io
import logging
from collections.abc import Callable, Iterable, Mapping
from typing import TextIO

from . import _conv
from .exceptions import MissingSectionContext, MissingSeparator, ParseError

Value = str | int | float | bool
Config = dict[str, dict[str, str]]

COMMENT_PREFIXES = (";", "#")

_log = logging.getLogger(__name__)


@dataclasses.dataclass(slots=True)
class Section:
    """An INI section, i.e. [name]."""

    name: str


@dataclasses.dataclass(slots=True)
class Property:
    """An INI property, i.e. key = value."""

    key: str
    value: str


@dataclasses.dataclass(slots=True)
class ParseResult:
    """The outcome of a parsing pass.

    Attributes:
        config: The sections parsed, possibly cut short by an error.
        error: The error that halted parsing, or None if the whole input was consumed.
    """

    config: Config
    error: ParseError | None = None

    @property
    def complete(self) -> bool:
        return self.error is None


def parse(line: str) -> Section | Property | None:
    """Parse an INI line.

    The line must already be stripped of leading whitespace, and must not be blank or a comment.

    Args:
        line: The line to parse.

    Returns:
        A section, property, or None if the line has no '=' separator.
    """

    if line.startswith("[") and line.endswith("]"):
        return Section(line[1:-1])

    key, sep, value = line.partition("=")
    if not sep:
        return None

    value = value.rstrip()
    # Only the first whitespace character after the separator is dropped.
    if value[:1].isspace():
        value = value[1:]

    return Property(key=key.strip(), value=value)


def scan(
    file: Iterable[str],
    parse_func: Callable[[str], Section | Property | None] = parse,
) -> ParseResult:
    """Parse an INI file, stopping at the first invalid line.

    Args:
        file: The lines to parse.
        parse_func: A function that returns a section, property, or None per line in the file.
            This function can be overriden to implement custom functionality.
            Defaults to parse.

    Returns:
        The parsed sections, and the error that stopped parsing if any.
    """

    config: Config = {}
    section: dict[str, str] | None = None

    for n, line in enumerate(file, start=1):
        line = line.rstrip("\r\n")
        stripped = line.lstrip()

        # Skip blank lines and comments.
        if not stripped or stripped.startswith(COMMENT_PREFIXES):
            continue

        cfg = parse_func(stripped)

        if isinstance(cfg, Section):
            # A repeated header starts the section over.
            config.pop(cfg.name, None)
            section = config[cfg.name] = {}
            continue

        error: ParseError | None = None
        if section is None:
            error = MissingSectionContext(n, line, config)
        elif cfg is None:
            error = MissingSeparator(n, line, config)

        if error is not None:
            _log.error("%s", error)
            return ParseResult(config, error)

        if not cfg.key:
            _log.debug("empty key on line %d, skipping: '%s'", n, line)
            continue

        section[cfg.key] = cfg.value

    return ParseResult(config)


def load(file: Iterable[str], **kwargs) -> Config:
    """Parse an INI file.

    Args:
        file: The lines to parse.
        **kwargs: Passed to scan().

    Returns:
        A dictionary of sections mapped to their properties.

    Raises:
        MissingSectionContext: A property came before any section.
        MissingSeparator: A property had no '=' separator.
    """

    result = scan(file, **kwargs)
    if result.error is not None:
        raise result.error

    return result.config


def loads(text: str, **kwargs) -> Config:
    """Parse an INI text.

    Args:
        text: The text to parse.
        **kwargs: Passed to load().

    Returns:
        See load().

    Raises:
        See load().
    """

    with io.StringIO(text) as buf:
        return load(buf, **kwargs)


def dump(config: Mapping[str, Mapping[str, Value]], file: TextIO):
    """Serialize a dictionary as INI to a file.

    Each section is followed by a blank line.
    Keys and values are written as is, so values containing newlines do not survive parsing.

    Args:
        config: The dictionary of sections mapped to properties.
        file: The file to serialize to.
    """

    for section, properties in config.items():
        print(f"[{section}]", file=file)

        for key, value in properties.items():
            print(f"{key} = {_conv.to_str(value)}", file=file)

        print(file=file)


def dumps(config: Mapping[str, Mapping[str, Value]]) -> str:
    """Serialize a dictionary as INI to a string.

    Args:
        config: The dictionary of sections mapped to properties.

    Returns:
        The INI as a string.
    """

    with io.StringIO() as buf:
        dump(config, buf)
        return buf.getvalue()
