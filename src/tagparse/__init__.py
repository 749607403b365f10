"""
Python package for extracting typed entities from tagged strings.

Tags are either delimited, like `[changes:5]`, or written as plain
`key=value` tokens within free-form text.
"""

from tagparse._config import ParserConfig
from tagparse._config_error import ConfigurationError, ConfigurationErrorCategory
from tagparse._entity import Entity, EntityDefinition, PrimitiveType
from tagparse._generator import TaggedStringGenerator, to_tag
from tagparse._parser import TaggedStringParser, from_tagged
from tagparse._result import ParseResult
