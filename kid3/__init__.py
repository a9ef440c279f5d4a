"""Drive the kid3-cli audio tagger from Python."""

__version__ = "0.3.0"

# Core API
from .dataclasses import Kid3Config, FileInfo, TagFrameOutput
from .core import Kid3

# Command building (for custom kid3-cli sessions)
from .builder import Kid3Builder, EmptyCommandError, DEFAULT_TAG

# Output parsing
from .parsers import (
    parse_tag_frame_output,
    parse_directory_list_output,
    parse_tag_numbers,
    UnparseableOutputError,
)

__all__ = [
    # Version
    '__version__',

    # Core API
    'Kid3',
    'Kid3Config',
    'FileInfo',
    'TagFrameOutput',

    # Command building
    'Kid3Builder',
    'EmptyCommandError',
    'DEFAULT_TAG',

    # Output parsing
    'parse_tag_frame_output',
    'parse_directory_list_output',
    'parse_tag_numbers',
    'UnparseableOutputError',
]
