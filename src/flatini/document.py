import io
import pathlib
import sys
from collections.abc import Iterable, Iterator
from typing import Self, TextIO

import attrs

from . import _conv, files, ini

Section = dict[str, ini.Value]


@attrs.define
class Document:
    """An INI file as an ordered mapping of section names to sections.

    Sections and the properties in them keep the order they were added in.

    Attributes:
        sections: The sections mapped by name.
        encoding: The encoding of the file the document was read from, if any.
            Saving uses it unless told otherwise.
    """

    sections: dict[str, Section] = attrs.field(factory=dict)
    encoding: str | None = attrs.field(default=None, eq=False, kw_only=True)

    def get(self, section_name: str, key: str) -> ini.Value | None:
        return get(self, section_name, key)

    def get_section(self, section_name: str) -> Section | None:
        return get_section(self, section_name)

    def set(self, section_name: str, key: str, value: ini.Value):
        set(self, section_name, key, value)

    def pprint(self, file: TextIO | None = None):
        pprint(self, file)

    def save(self, path: str | pathlib.Path, encoding: str | None = None) -> bool:
        return save(self, path, encoding)

    def to_str(self) -> str:
        """Serialize the document to INI format.

        Returns:
            The serialized document as a string.
        """

        return ini.dumps(self.sections)

    @classmethod
    def load(cls, file: Iterable[str], **kwargs) -> Self:
        """Parse an INI file into a document.

        Args:
            file: The lines to parse.
            **kwargs: Passed to ini.load().

        Returns:
            The parsed document.

        Raises:
            ParseError: A line could not be parsed.
                The sections parsed up to that line are in its config attribute.
        """

        return cls(ini.load(file, **kwargs))

    @classmethod
    def scan(cls, file: Iterable[str], **kwargs) -> tuple[Self, ini.ParseResult]:
        """Parse an INI file into a document without raising on invalid lines.

        Args:
            file: The lines to parse.
            **kwargs: Passed to ini.scan().

        Returns:
            The (possibly partial) document and the parse result it was built from.
        """

        result = ini.scan(file, **kwargs)
        return cls(result.config), result

    @classmethod
    def from_str(cls, text: str, **kwargs) -> Self:
        """Parse an INI text into a document.

        Args:
            text: The INI text to parse.
            **kwargs: Passed to ini.load().

        Returns:
            The parsed document.
        """

        with io.StringIO(text) as buf:
            return cls.load(buf, **kwargs)

    @classmethod
    def open(cls, path: str | pathlib.Path, encoding: str | None = None) -> Self:
        """Read an INI file from disk.

        Args:
            path: The path to the file.
            encoding: The file's encoding. If None, encoding detection is attempted.

        Returns:
            The parsed document.

        Raises:
            SourceUnavailable: The file could not be read.
            ParseError: A line could not be parsed.
        """

        encoding = files.resolve_encoding(path, encoding)
        return cls(files.read(path, encoding), encoding=encoding)

    def __getitem__(self, section_name: str) -> Section:
        return self.sections[section_name]

    def __contains__(self, section_name: object) -> bool:
        return section_name in self.sections

    def __iter__(self) -> Iterator[str]:
        return iter(self.sections)

    def __len__(self) -> int:
        return len(self.sections)


def get(doc: Document | None, section_name: str, key: str) -> ini.Value | None:
    """Get the value of a property.

    Args:
        doc: The document to look in.
        section_name: The section the property is in.
        key: The property's key.

    Returns:
        The value, or None if the document, section or key does not exist.
    """

    if (section := get_section(doc, section_name)) is None:
        return None

    return section.get(key)


def get_section(doc: Document | None, section_name: str) -> Section | None:
    """Get a section by name.

    The section is returned as is, so changes to it are reflected in the document.

    Args:
        doc: The document to look in.
        section_name: The section's name.

    Returns:
        The section, or None if the document or section does not exist.
    """

    if doc is None:
        return None

    return doc.sections.get(section_name)


def set(doc: Document | None, section_name: str, key: str, value: ini.Value):
    """Set the value of a property, creating its section if needed.

    The section name is used literally: "[foo]" names a section called "[foo]", not "foo".

    Args:
        doc: The document to modify. If None, nothing happens.
        section_name: The section the property is in.
        key: The property's key.
        value: The property's value. Non-string values are converted when serialized.
    """

    if doc is None:
        return

    doc.sections.setdefault(section_name, {})[key] = value


def pprint(doc: Document | None, file: TextIO | None = None):
    """Print a human-readable outline of a document.

    This is meant for inspection only; use ini.dump() to write INI.

    Args:
        doc: The document to print.
        file: Where to print to. Defaults to stdout.
    """

    if file is None:
        file = sys.stdout

    print("INI structure:", file=file)

    if doc is None:
        print("  (Empty)", file=file)
        return

    for name, section in doc.sections.items():
        print(f"  - {name} ({len(section)} props)", file=file)

        for key, value in section.items():
            print(f"    - |{key}| :: |{_conv.to_str(value)}|", file=file)


def save(
    doc: Document | None, path: str | pathlib.Path, encoding: str | None = None
) -> bool:
    """Save a document to disk in INI format.

    Args:
        doc: The document to save.
        path: Where to save it to.
        encoding: The file encoding.
            Defaults to the encoding the document was read with, or UTF-8.

    Returns:
        True if the document was written, False if there was no document.

    Raises:
        DestinationUnwritable: The file could not be written.
    """

    if doc is None:
        return False

    encoding = encoding or doc.encoding or files.DEFAULT_ENCODING
    files.write(doc.sections, path, encoding)
    return True
