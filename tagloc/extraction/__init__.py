"""Tagged text file handling modules."""

from .txt_parser import TxtParser, ParserState
from .txt_writer import TxtWriter, group_by_language

__all__ = ["TxtParser", "ParserState", "TxtWriter", "group_by_language"]
