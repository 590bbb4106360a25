"""Parser and serializer for flat INI files."""

from .document import Document, get, get_section, pprint, save, set
from .exceptions import (
    DestinationUnwritable,
    IniError,
    MissingSectionContext,
    MissingSeparator,
    ParseError,
    SourceUnavailable,
)
from .ini import dump, dumps, load, loads, scan
