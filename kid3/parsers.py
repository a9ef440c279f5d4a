"""Parsers for the text output of kid3-cli."""

import re
from typing import List, Optional

from kid3.dataclasses import FileInfo, TagFrameOutput

FILE_HEADER = re.compile(r'File:\s(.*)\s([0-9]{2,}\sHz)\s(.*)\s([0-9:]{4,})')
TAG_HEADER = re.compile(r'Tag\s([0-9]+):\s(.*)')
FRAME_LINE = re.compile(r'^ {2}((?:(?!\s{2}).)+)  +(.+)')
LISTING_LINE = re.compile(r'(?:[> ])?(?:[* ])(?:[1\- ])(?:[2\- ])-? (.*)')
TAG_NUMBERS = re.compile(r'\s([0-9,\s]+)')
# Only \n and \r\n end a line, frame values may hold other Unicode separators
LINE_BREAK = re.compile(r'\r?\n')

FILE_SECTION = 'file'


class UnparseableOutputError(ValueError):
    """Raised when kid3-cli output does not have the expected shape."""

    def __init__(self, message: str, output: str):
        super().__init__(message)
        self.output = output


def _lines(output: str) -> List[str]:
    return [line for line in LINE_BREAK.split(output) if line]


def parse_tag_frame_output(output: str) -> TagFrameOutput:
    """Parse the output of ``get`` into file info and frames per tag.

    Lines not indented by two spaces are headers: either the file header
    (``File: MPEG 1 Layer 3 128 kbps 44100 Hz Joint Stereo 3:25``) or a tag
    header (``Tag 2: ID3v2.3.0``). Indented lines are ``name  value`` frames of
    the most recent tag header. Anything else is skipped.

    Args:
        output: Standard output of kid3-cli

    Returns:
        TagFrameOutput; tags maps tag number ("1", "2") to {frame name: value}
    """
    result = TagFrameOutput()
    # None until the first header, then FILE_SECTION or a tag number
    section: Optional[str] = None

    for line in _lines(output):
        if not line.startswith('  '):
            file_match = FILE_HEADER.search(line)
            if file_match:
                section = FILE_SECTION
                result.file = FileInfo(*file_match.groups())
                continue

            tag_match = TAG_HEADER.search(line)
            if tag_match:
                section = tag_match.group(1)
                result.tags[section] = {}
            continue

        if section is None or section == FILE_SECTION:
            continue

        frame_match = FRAME_LINE.match(line)
        if frame_match:
            name, value = frame_match.groups()
            result.tags[section][name] = value

    return result


def parse_directory_list_output(output: str) -> List[str]:
    """Parse the output of ``ls`` into file names, in listing order."""
    files = []

    for line in _lines(output):
        match = LISTING_LINE.search(line)
        if match:
            files.append(match.group(1))

    return files


def parse_tag_numbers(output: str) -> List[int]:
    """Parse the output of ``tag`` (e.g. ``Tag: 1, 2``) into tag numbers.

    Raises:
        UnparseableOutputError: If no comma separated numbers are found
    """
    match = TAG_NUMBERS.search(output)
    if not match:
        raise UnparseableOutputError(f"No tag numbers in output: {output!r}", output)

    try:
        return [int(item) for item in match.group(0).strip().split(',')]
    except ValueError:
        raise UnparseableOutputError(f"Malformed tag numbers in output: {output!r}", output)
