from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass(repr=True)
class Kid3Config:
    """Configuration for driving kid3-cli."""
    binary: str = 'kid3-cli'  # Path or name of the kid3-cli executable
    encoding: str = 'utf-8'  # Used to decode the captured output

    # Overrides kid3-cli's per-command timeout ('default', 'off' or milliseconds).
    # None leaves the tool's own defaults in place.
    command_timeout: Optional[str] = None

    @classmethod
    def from_beets_config(cls, config) -> 'Kid3Config':
        """Create Kid3Config from beets configuration object."""
        command_timeout = config['command_timeout'].get()
        return cls(
            binary=config['binary'].get('kid3-cli'),
            encoding=config['encoding'].get('utf-8'),
            command_timeout=str(command_timeout) if command_timeout is not None else None,
        )


@dataclass(frozen=True)
class FileInfo:
    """File header of a tag frame listing."""
    tag: str  # Format label, e.g. "MPEG 1 Layer 3 128 kbps"
    frequency: str  # e.g. "44100 Hz"
    channels: str
    duration: str


@dataclass(repr=True)
class TagFrameOutput:
    """Parsed output of kid3-cli's get command."""
    file: Optional[FileInfo] = None
    tags: Dict[str, Dict[str, str]] = field(default_factory=dict)

    def preferred_frames(self) -> Dict[str, str]:
        """Frames of tag 2 if present, else tag 1 (kid3's own precedence)."""
        if '2' in self.tags:
            return self.tags['2']
        return self.tags.get('1', {})
