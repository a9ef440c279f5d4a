#!/usr/bin/env python3
"""Command-line interface for kid3-cli tagging.

This module provides the ``kid3-tag`` tool for reading, writing and copying
tags of audio files through kid3-cli.
"""

import argparse
import logging
import subprocess
import sys
from typing import Dict, List

from kid3 import __version__
from kid3.core import Kid3
from kid3.dataclasses import Kid3Config


def setup_logging(debug: bool = False):
    """Configure logging for CLI."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(message)s'
    )


def parse_frame_assignments(assignments: List[str]) -> Dict[str, str]:
    """Parse NAME=VALUE arguments into a frame mapping."""
    frames = {}
    for assignment in assignments:
        name, sep, value = assignment.partition('=')
        if not sep or not name:
            raise ValueError(f"Expected NAME=VALUE, got: {assignment}")
        frames[name] = value
    return frames


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description='Read and write audio file tags with kid3-cli',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s get song.mp3
  %(prog)s get song.mp3 --column title --tag 2
  %(prog)s set song.mp3 title="Song Name" artist=Someone
  %(prog)s copy original.mp3 copy.mp3 --from-tag 2 --to-tag 1
  %(prog)s tags song.mp3
  %(prog)s ls /path/to/music
        """
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parser.add_argument(
        '--binary',
        default='kid3-cli',
        help='Path to the kid3-cli executable (default: kid3-cli)'
    )

    parser.add_argument(
        '--timeout',
        help="Override kid3-cli's command timeout: default, off or milliseconds"
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )

    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')

    get_parser = subparsers.add_parser('get', help='Show the tag frames of a file')
    get_parser.add_argument('file', help='Audio file')
    get_parser.add_argument(
        '-c', '--column',
        action='append',
        dest='columns',
        help='Frame to show (repeatable, default: all frames); a single frame prints only its value'
    )
    get_parser.add_argument(
        '-t', '--tag',
        type=int,
        help='Tag numbers to read: 1, 2 or 12 (default: 12)'
    )

    set_parser = subparsers.add_parser('set', help='Set tag frames and save the file')
    set_parser.add_argument('file', help='Audio file')
    set_parser.add_argument('frames', nargs='+', metavar='NAME=VALUE', help='Frames to set')
    set_parser.add_argument(
        '-t', '--tag',
        type=int,
        help='Tag numbers to write: 1, 2 or 12 (default: 12)'
    )

    copy_parser = subparsers.add_parser('copy', help='Copy tag frames from one file to another')
    copy_parser.add_argument('source', help='File to copy from')
    copy_parser.add_argument('target', help='File to paste into')
    copy_parser.add_argument('--from-tag', type=int, help='Tag numbers of the source file')
    copy_parser.add_argument('--to-tag', type=int, help='Tag numbers of the target file')

    tags_parser = subparsers.add_parser('tags', help='List the tag numbers of a file')
    tags_parser.add_argument('file', help='Audio file')

    ls_parser = subparsers.add_parser('ls', help='List the files of a directory')
    ls_parser.add_argument('directory', nargs='?', help='Directory (default: home directory)')

    return parser.parse_args(argv)


def create_config_from_args(args) -> Kid3Config:
    """Create Kid3Config from command-line arguments."""
    return Kid3Config(
        binary=args.binary,
        command_timeout=args.timeout,
    )


def print_frames(frames: Dict[str, str]):
    """Print frames as aligned name/value columns."""
    if not frames:
        print("No tag frames found")
        return

    width = max(len(name) for name in frames)
    for name, value in frames.items():
        print(f"{name:<{width}}  {value}")


def run_command(kid3: Kid3, args) -> int:
    """Dispatch a parsed subcommand to the Kid3 facade."""
    logger = logging.getLogger(__name__)

    if args.command == 'get':
        if args.columns and len(args.columns) == 1 and args.columns[0] != 'all':
            print(kid3.get_tag_value(args.file, args.columns[0], args.tag))
            return 0

        output = kid3.get_tag_output(args.file, args.columns, args.tag)
        if output.file:
            print(f"File: {output.file.tag}, {output.file.frequency}, "
                  f"{output.file.channels}, {output.file.duration}")
        print_frames(output.preferred_frames())

    elif args.command == 'set':
        frames = parse_frame_assignments(args.frames)
        kid3.set_tags(frames, args.file, args.tag)
        logger.info(f"Updated {len(frames)} frame(s) in {args.file}")

    elif args.command == 'copy':
        kid3.copy_tags(args.source, args.target, args.from_tag, args.to_tag)
        logger.info(f"Copied tags from {args.source} to {args.target}")

    elif args.command == 'tags':
        numbers = kid3.list_tag_numbers(args.file)
        print(', '.join(str(number) for number in numbers))

    elif args.command == 'ls':
        for name in kid3.list_directory(args.directory):
            print(name)

    return 0


def main(argv=None):
    """Main CLI entry point."""
    args = parse_args(argv)
    setup_logging(args.debug)
    logger = logging.getLogger(__name__)

    if not args.command:
        print("Error: a command is required", file=sys.stderr)
        print("Use --help for usage information", file=sys.stderr)
        return 1

    kid3 = Kid3(create_config_from_args(args))

    try:
        return run_command(kid3, args)

    except subprocess.CalledProcessError as e:
        logger.error(f"kid3-cli failed with exit status {e.returncode}")
        if e.stderr:
            print(e.stderr.strip(), file=sys.stderr)
        if args.debug:
            raise
        return 1

    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.debug:
            raise
        return 1

    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 130


if __name__ == '__main__':
    sys.exit(main())
