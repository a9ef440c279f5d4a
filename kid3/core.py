"""High level kid3-cli operations.

This module composes :class:`Kid3Builder` calls for common workflows and turns
kid3-cli's text output into Python objects.
"""

import logging
import os
from typing import Dict, List, Mapping, Optional, Sequence, Union

from kid3.builder import Kid3Builder
from kid3.dataclasses import Kid3Config, TagFrameOutput
from kid3.parsers import (
    parse_directory_list_output,
    parse_tag_frame_output,
    parse_tag_numbers,
)


class Kid3:
    """Read, write and copy tags through kid3-cli."""

    def __init__(self, config: Optional[Kid3Config] = None) -> None:
        self.config = config or Kid3Config()  # Use defaults if no config provided
        self.logger = logging.getLogger(__name__)

    def _command_builder(self) -> Kid3Builder:
        """Create a fresh builder for one invocation."""
        builder = Kid3Builder(self.config.binary, self.config.encoding)
        if self.config.command_timeout is not None:
            builder.timeout(self.config.command_timeout)
        return builder

    def list_tag_numbers(self, filepath: str) -> List[int]:
        """Get the tag numbers kid3-cli reports for a file.

        Args:
            filepath: Path to the audio file

        Returns:
            Tag numbers, e.g. [1, 2]

        Raises:
            UnparseableOutputError: If kid3-cli prints no tag numbers
        """
        output = self._command_builder().get_tags().run_sync(filepath)
        return parse_tag_numbers(output)

    def get_tag_output(self, filepath: str,
                       columns: Union[str, Sequence[str], None] = None,
                       tag: Optional[int] = None) -> TagFrameOutput:
        """Get file info and the frames of every tag of a file.

        Args:
            filepath: Path to the audio file
            columns: Frame names to read; all frames by default. A single
                frame is printed as a bare value, see :meth:`get_tag_value`
            tag: Tag numbers to read (1, 2 or 12)
        """
        output = self._command_builder().get_tag_frame(columns, tag).run_sync(filepath)
        return parse_tag_frame_output(output)

    def get_tag_value(self, filepath: str, name: str, tag: Optional[int] = None) -> str:
        """Get the value of a single frame.

        kid3-cli prints a lone frame as its bare value rather than as a
        ``name  value`` listing, so the output is returned without parsing.

        Args:
            filepath: Path to the audio file
            name: Frame name, e.g. 'title'
            tag: Tag numbers to read (1, 2 or 12)

        Returns:
            The frame value, empty if the frame is not set
        """
        output = self._command_builder().get_tag_frame(name, tag).run_sync(filepath)
        return output.rstrip('\r\n')

    def get_tags(self, filepath: str,
                 columns: Union[str, Sequence[str], None] = None,
                 tag: Optional[int] = None) -> Dict[str, str]:
        """Get the frames of a file, taken from tag 2 when present, else tag 1.

        Args:
            filepath: Path to the audio file
            columns: Frame name(s) to read; all frames by default
            tag: Tag numbers to read (1, 2 or 12)

        Returns:
            Mapping of frame name to value
        """
        return self.get_tag_output(filepath, columns, tag).preferred_frames()

    def set_tags(self, tags: Mapping[str, str], filepath: str,
                 tag: Optional[int] = None) -> None:
        """Write frames to a file and save it.

        Args:
            tags: Frame name to value
            filepath: Path to the audio file
            tag: Tag numbers to write (1, 2 or 12)
        """
        builder = self._command_builder()

        for name, value in tags.items():
            builder.set_tag_frame(name, value, tag)

        self.logger.debug(f"Setting {len(tags)} frame(s) on {filepath}")
        builder.save().run_sync(filepath)

    def copy_tags(self, source: str, target: str,
                  from_tag: Optional[int] = None, to_tag: Optional[int] = None) -> None:
        """Copy the frames of one file to another.

        Runs as a single kid3-cli session, since the copy buffer only lives as
        long as the process.

        Args:
            source: Path to the file to copy from
            target: Path to the file to paste into
            from_tag: Tag numbers of the source file
            to_tag: Tag numbers of the target file
        """
        source_dir, source_name = os.path.split(os.path.abspath(source))
        target_dir, target_name = os.path.split(os.path.abspath(target))

        self.logger.debug(f"Copying tags from {source} to {target}")
        (self._command_builder()
            .cd(source_dir)
            .select_file(source_name)
            .copy(from_tag)
            .cd(target_dir)
            .select_file(target_name)
            .paste(to_tag)
            .save()
            .run_sync())

    def list_directory(self, directory: Optional[str] = None) -> List[str]:
        """List the files kid3-cli shows in a directory (home directory by default)."""
        output = self._command_builder().cd(directory).ls().run_sync()
        return parse_directory_list_output(output)
