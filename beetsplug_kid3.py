"""kid3-cli plugin for beets.

This plugin shows and writes the tag frames of library items through the
external kid3-cli tagger, so frames beets does not model can be inspected and
edited from ``beet``.
"""

import logging
import subprocess

from beets import plugins, ui, util

from kid3.cli import parse_frame_assignments
from kid3.core import Kid3
from kid3.dataclasses import Kid3Config


class Kid3Plugin(plugins.BeetsPlugin):
    """Plugin to read and write tag frames with kid3-cli."""

    def __init__(self):
        super().__init__()

        self.config.add({
            'binary': 'kid3-cli',      # Path to the kid3-cli executable
            'encoding': 'utf-8',       # Encoding of kid3-cli's output
            'command_timeout': None,   # 'default', 'off' or milliseconds; None keeps kid3's own
        })

        self.kid3_config = Kid3Config.from_beets_config(self.config)
        self.kid3 = Kid3(self.kid3_config)

    def commands(self):
        """Register the kid3 command."""
        cmd = ui.Subcommand('kid3', help='show or set tag frames with kid3-cli')
        cmd.parser.add_option('-s', '--set', action='append', dest='frames', metavar='NAME=VALUE',
                            help='set a tag frame (repeatable) and save the file')
        cmd.parser.add_option('-t', '--tag', type='int',
                            help='tag numbers to use: 1, 2 or 12 (default: 12)')
        cmd.parser.add_option('-d', '--dry-run', action='store_true',
                            help='show what would be done without making changes')
        cmd.parser.add_option('--debug', action='store_true',
                            help='enable debug logging')
        cmd.func = self.kid3_command
        return [cmd]

    def kid3_command(self, lib, opts, args):
        """Handle the kid3 command."""
        if opts.debug:
            self._log.setLevel(logging.DEBUG)
            logging.basicConfig(level=logging.DEBUG)

        frames = None
        if opts.frames:
            try:
                frames = parse_frame_assignments(opts.frames)
            except ValueError as e:
                raise ui.UserError(str(e))

        items = lib.items(args)

        if not items:
            ui.print_("No items found")
            return

        for item in items:
            path = util.displayable_path(item.path)
            try:
                if frames is not None:
                    self._set_frames(path, frames, opts.tag, opts.dry_run)
                else:
                    self._show_frames(path, opts.tag)
            except subprocess.CalledProcessError as e:
                self._log.error("kid3-cli failed for {0}: {1}", path, (e.stderr or '').strip())

    def _show_frames(self, path: str, tag=None):
        """Print the frames kid3-cli reports for one file."""
        ui.print_(path)
        frames = self.kid3.get_tags(path, tag=tag)
        if not frames:
            ui.print_("  (no tag frames)")
        for name, value in frames.items():
            ui.print_(f"  {name}: {value}")

    def _set_frames(self, path: str, frames, tag=None, dry_run: bool = False):
        """Write frames to one file unless dry_run is set."""
        if dry_run:
            ui.print_(f"[DRY RUN] Would set {', '.join(frames)} on {path}")
            return

        self.kid3.set_tags(frames, path, tag)
        self._log.info("Updated {0} frame(s): {1}", len(frames), path)
