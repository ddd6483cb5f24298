"""
Import parsers, one per supported export format.

Usage:
    >>> from backend.core.parsers import get_parser
    >>> parser = get_parser(ImportSource.LIFTIN)
    >>> parsed = parser.parse(raw_content, catalog)
"""
from typing import Dict

from application.exceptions import UnsupportedFormatError
from backend.core.parsers.base import ImportParser, ParsedImport, build_exercise
from backend.core.parsers.json_export import HevyParser, JsonExportParser, StrongParser
from backend.core.parsers.liftin_csv import LiftinCsvParser
from domain.models import ImportSource

PARSERS: Dict[ImportSource, ImportParser] = {
    ImportSource.HEVY: HevyParser(),
    ImportSource.STRONG: StrongParser(),
    ImportSource.LIFTIN: LiftinCsvParser(),
}


def get_parser(source: ImportSource) -> ImportParser:
    """
    Get the parser for a detected source.

    Raises:
        UnsupportedFormatError: If no parser handles `source`
    """
    try:
        return PARSERS[source]
    except KeyError:
        raise UnsupportedFormatError() from None


__all__ = [
    "ImportParser",
    "ParsedImport",
    "build_exercise",
    "JsonExportParser",
    "HevyParser",
    "StrongParser",
    "LiftinCsvParser",
    "PARSERS",
    "get_parser",
]
