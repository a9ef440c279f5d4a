"""Fluent builder for kid3-cli command lines.

Every method appends one interactive-shell command of kid3-cli and returns the
builder, so a whole session can be chained and executed as a single process:

    Kid3Builder().cd('/music').select_file('song.mp3').copy().run_sync()

Command documentation is taken from the kid3 handbook, section "kid3-cli".
"""

import asyncio
import logging
import re
import subprocess
from typing import List, Optional, Sequence, Union

logger = logging.getLogger(__name__)

# Default tag numbers: read from tag 2 if available, else tag 1; write tag 2.
DEFAULT_TAG = 12

_TRAILING_SEPARATOR = re.compile(r'(\\|/)$')
# Characters the shell still interprets inside double quotes
_SHELL_SPECIAL = re.compile(r'([\\"$`])')


class EmptyCommandError(ValueError):
    """Raised when a command line is built before any command was added."""


class Kid3Builder:
    """Accumulates kid3-cli commands and runs them in one invocation."""

    def __init__(self, binary: str = 'kid3-cli', encoding: str = 'utf-8') -> None:
        self.binary = binary
        self.encoding = encoding
        self._commands: List[str] = []

    @property
    def commands(self) -> List[str]:
        """The accumulated command fragments, in order."""
        return list(self._commands)

    def _add(self, fragment: str) -> 'Kid3Builder':
        self._commands.append(fragment)
        return self

    def build(self, filepath: Optional[str] = None) -> str:
        """Combine the commands into the argument string for kid3-cli.

        Args:
            filepath: Optional file the commands operate on

        Returns:
            ``-c <command> -c <command> ... ["<filepath>"]``

        Raises:
            EmptyCommandError: If no command has been added
        """
        if not self._commands:
            raise EmptyCommandError("Please add some commands first.")

        line = ' '.join(f'-c {item}' for item in self._commands)

        if filepath:
            line += f' "{shell_escape(filepath)}"'

        return line

    def _invocation(self, filepath: Optional[str]) -> str:
        line = f'{self.binary} {self.build(filepath)}'
        logger.debug(f"Running: {line}")
        return line

    def _complete(self, line: str, returncode: int, stdout: bytes, stderr: bytes) -> str:
        """Decode captured output, raising if kid3-cli failed."""
        output = (stdout or b'').decode(self.encoding, errors='replace')
        if returncode != 0:
            error_output = (stderr or b'').decode(self.encoding, errors='replace')
            logger.debug(f"Command exited with status {returncode}: {line}")
            raise subprocess.CalledProcessError(returncode, line, output, error_output)
        return output

    def run_sync(self, filepath: Optional[str] = None) -> str:
        """Run the commands and wait for kid3-cli to finish.

        Args:
            filepath: Optional file the commands operate on

        Returns:
            Standard output of kid3-cli

        Raises:
            EmptyCommandError: If no command has been added
            subprocess.CalledProcessError: If kid3-cli exits with a non-zero status
        """
        line = self._invocation(filepath)
        result = subprocess.run(line, shell=True, capture_output=True)
        return self._complete(line, result.returncode, result.stdout, result.stderr)

    async def run(self, filepath: Optional[str] = None) -> str:
        """Run the commands without blocking the event loop.

        Same contract as :meth:`run_sync`. Cancelling the awaiting task kills
        kid3-cli.
        """
        line = self._invocation(filepath)
        process = await asyncio.create_subprocess_shell(
            line,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        try:
            stdout, stderr = await process.communicate()
        except asyncio.CancelledError:
            if process.returncode is None:
                process.kill()
            raise
        return self._complete(line, process.returncode, stdout, stderr)

    # kid3-cli commands

    def help(self, command: Optional[str] = None) -> 'Kid3Builder':
        """Display help about COMMAND-NAME or about all commands."""
        return self._add(f'"help {shell_escape(command or "")}"')

    def timeout(self, value: Union[str, int, None] = None) -> 'Kid3Builder':
        """Overwrite the default command timeout.

        kid3-cli aborts commands after a command specific timeout: 10 seconds for
        ls and albumart, 60 seconds for autoimport and filter, 3 seconds for all
        others.

        Args:
            value: 'default', 'off' or a time in milliseconds
        """
        if value is None:
            value = 'default'
        return self._add(f'"timeout {quote(str(value))}"')

    def exit(self, force: bool = False) -> 'Kid3Builder':
        """Exit the shell; force is required when there are unsaved files."""
        return self._add(f'"exit {"force" if force else ""}"')

    def cd(self, directory: Optional[str] = None) -> 'Kid3Builder':
        """Change directory.

        Without a directory kid3-cli changes to the home directory. A single
        trailing path separator is stripped, except from the root directory.
        """
        directory = directory or ''
        if len(directory) > 1:
            directory = _TRAILING_SEPARATOR.sub('', directory)
        return self._add(f'"cd {quote(directory) if directory else ""}"')

    def pwd(self) -> 'Kid3Builder':
        """Print the current working directory."""
        return self._add('pwd')

    def ls(self) -> 'Kid3Builder':
        """List the current directory.

        Four characters before each file name show its state: ``>`` selected,
        ``*`` modified, ``1`` has tag 1, ``2`` has tag 2 (``-`` otherwise).
        """
        return self._add('ls')

    def save(self) -> 'Kid3Builder':
        return self._add('save')

    def select_file(self, filename: str) -> 'Kid3Builder':
        """Select files: all, none, first, previous, next or file names (wildcards allowed)."""
        return self._add(f'"select {quote(filename)}"')

    def select_tag(self, number: Optional[int] = None) -> 'Kid3Builder':
        """Set the default tag numbers used by commands that take a tag parameter."""
        return self._add(f'"tag {_tag(number)}"')

    def get_tags(self) -> 'Kid3Builder':
        """Display the current tag numbers (prints e.g. ``Tag: 1, 2``)."""
        return self._add('tag')

    def get_tag_frame(self, column: Union[str, Sequence[str], None] = None,
                      tag: Optional[int] = None) -> 'Kid3Builder':
        """Read a tag frame, or all frames when column is omitted or 'all'."""
        if column is None:
            column = 'all'
        elif not isinstance(column, str):
            column = ','.join(column)
        return self._add(f'"get {quote(column)} {_tag(tag)}"')

    def get_picture(self, path: str) -> 'Kid3Builder':
        """Save the contents of the picture frame to a file."""
        return self._add(f'"get picture:{quote(path)}"')

    def get_lyrics(self, path: str) -> 'Kid3Builder':
        """Save synchronized lyrics to an LRC file."""
        return self._add(f'"get SYLT:{quote(path)}"')

    def set_tag_frame(self, name: str, value: Optional[str] = None,
                      tag: Optional[int] = None) -> 'Kid3Builder':
        """Set the value of a tag frame."""
        return self._add(f'"set {quote(name)} {quote(value or "")} {_tag(tag)}"')

    def set_picture(self, path: str, description: Optional[str] = None) -> 'Kid3Builder':
        if description is None:
            description = 'Cover'
        return self._add(f'"set picture:{quote(path)} {quote(description)}"')

    def set_lyrics(self, path: str, description: Optional[str] = None) -> 'Kid3Builder':
        """Set synchronized lyrics from an LRC file."""
        return self._add(f'"set SYLT:{quote(path)} {quote(description or "")}"')

    def revert(self) -> 'Kid3Builder':
        """Revert modifications in the selected files (all files if none are selected)."""
        return self._add('revert')

    def import_tags(self, file: str, format: str, tag: Optional[int] = None) -> 'Kid3Builder':
        """Import tags from a file (or 'clipboard', or 'tags') in the named format, e.g. "CSV unquoted"."""
        return self._add(f'"import {quote(file)} {quote(format)} {_tag(tag)}"')

    def autoimport(self, profile: Optional[str] = None, tag: Optional[int] = None) -> 'Kid3Builder':
        """Batch import using a profile: All, MusicBrainz, Discogs or Cover Art."""
        if profile is None:
            profile = 'all'
        return self._add(f'"autoimport {quote(profile)} {_tag(tag)}"')

    def albumart(self, url: str, all: Optional[str] = None) -> 'Kid3Builder':
        """Set the album artwork by downloading a picture from a URL."""
        return self._add(f'"albumart {quote(url)} {shell_escape(all or "")}"')

    def export_tags(self, file: str, format: str, tag: Optional[int] = None) -> 'Kid3Builder':
        """Export tags to a file (or 'clipboard') in the named format."""
        return self._add(f'"export {quote(file)} {quote(format)} {_tag(tag)}"')

    def playlist(self) -> 'Kid3Builder':
        return self._add('playlist')

    def filenameformat(self) -> 'Kid3Builder':
        return self._add('filenameformat')

    def tagformat(self) -> 'Kid3Builder':
        return self._add('tagformat')

    def textencoding(self) -> 'Kid3Builder':
        return self._add('textencoding')

    def renamedir(self, format: str, type: str, tag: Optional[int] = None) -> 'Kid3Builder':
        """Rename or create directories from tag values.

        Args:
            format: Directory format, e.g. ``%{artist} - %{album}``
            type: create, rename or dryrun
            tag: Tag numbers
        """
        return self._add(f'"renamedir {quote(format)} {shell_escape(type)} {_tag(tag)}"')

    def numbertracks(self, track_number: Optional[int] = None,
                     tag: Optional[int] = None) -> 'Kid3Builder':
        """Number the selected tracks starting with track_number."""
        if track_number is None:
            track_number = 1
        return self._add(f'"numbertracks {quote(str(track_number))} {_tag(tag)}"')

    def filter(self, expression: str) -> 'Kid3Builder':
        """Show only files matching a filter expression or a predefined filter name."""
        return self._add(f'"filter \\"{shell_escape(expression)}\\""')

    def to24(self) -> 'Kid3Builder':
        """Convert ID3v2 tags to version 2.4."""
        return self._add('to24')

    def to23(self) -> 'Kid3Builder':
        """Convert ID3v2 tags to version 2.3."""
        return self._add('to23')

    def fromtag(self, format: str, tag: Optional[int] = None) -> 'Kid3Builder':
        """Set file names from tag values, e.g. ``%{track} - %{title}``."""
        return self._add(f'"fromtag {quote(format)} {_tag(tag)}"')

    def totag(self, format: str, tag: Optional[int] = None) -> 'Kid3Builder':
        """Set tag frames from file names."""
        return self._add(f'"totag {quote(format)} {_tag(tag)}"')

    def syncto(self, tag: int) -> 'Kid3Builder':
        """Copy the frames of the other tag into tag, e.g. syncto 2 sets ID3v2 from ID3v1."""
        return self._add(f'"syncto {tag}"')

    def copy(self, tag: Optional[int] = None) -> 'Kid3Builder':
        """Copy the frames of the selected file to kid3's copy buffer."""
        return self._add(f'"copy {_tag(tag)}"')

    def paste(self, tag: Optional[int] = None) -> 'Kid3Builder':
        """Set frames of the selected files from the copy buffer."""
        return self._add(f'"paste {_tag(tag)}"')

    def remove(self, tag: int) -> 'Kid3Builder':
        return self._add(f'"remove {tag}"')

    def play(self, command: Optional[str] = None) -> 'Kid3Builder':
        """Start playback, or control it with pause, stop, previous or next."""
        return self._add(f'"play {shell_escape(command or "")}"')


def shell_escape(value: str) -> str:
    """Backslash-escape the characters the shell expands inside double quotes."""
    return _SHELL_SPECIAL.sub(r'\\\1', value)


def quote(value: str) -> str:
    """Wrap a value in kid3-cli's single quotes, escaped for the enclosing shell string."""
    return f"'{shell_escape(value)}'"


def _tag(number: Optional[int]) -> int:
    return DEFAULT_TAG if number is None else number
