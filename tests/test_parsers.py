"""Tests for parsing kid3-cli output."""

import pytest
from kid3.dataclasses import FileInfo
from kid3.parsers import (
    UnparseableOutputError,
    parse_directory_list_output,
    parse_tag_frame_output,
    parse_tag_numbers,
)


class TestParseTagFrameOutput:
    """Test suite for the `get` output parser."""

    def test_single_tag(self):
        """Test a file header, one tag header and two frames."""
        output = (
            "File: MPEG 1 Layer 3 128 kbps 44100 Hz Joint Stereo 3:25\n"
            "Tag 2: ID3v2.3.0\n"
            "  title  Song Name\n"
            "  artist  Someone\n"
        )
        result = parse_tag_frame_output(output)

        assert result.tags == {'2': {'title': 'Song Name', 'artist': 'Someone'}}
        assert result.file == FileInfo(
            tag='MPEG 1 Layer 3 128 kbps',
            frequency='44100 Hz',
            channels='Joint Stereo',
            duration='3:25',
        )

    def test_both_tags(self, sample_tag_frame_output):
        """Test frames are grouped under their tag number."""
        result = parse_tag_frame_output(sample_tag_frame_output)

        assert set(result.tags) == {'1', '2'}
        assert result.tags['1'] == {
            'Title': 'Old Name',
            'Artist': 'Someone Else',
            'Track Number': '3',
        }
        assert result.tags['2']['Title'] == 'Song Name'
        assert result.tags['2']['Album'] == 'An Album'

    def test_value_keeps_inner_double_spaces(self, sample_tag_frame_output):
        """Test only the first double space separates name from value."""
        result = parse_tag_frame_output(sample_tag_frame_output)
        assert result.tags['2']['Comment'] == 'two  spaces inside'

    def test_frames_before_header_are_ignored(self):
        """Test frames without a preceding tag header are skipped."""
        output = (
            "  Title  Stray\n"
            "Tag 1: ID3v1.1\n"
            "  Title  Kept\n"
        )
        result = parse_tag_frame_output(output)
        assert result.tags == {'1': {'Title': 'Kept'}}
        assert result.file is None

    def test_frames_in_file_section_are_ignored(self):
        """Test indented lines below the file header are not frames."""
        output = (
            "File: FLAC 900 kbps 48000 Hz Stereo 10:01\n"
            "  Bitrate  900\n"
            "Tag 2: Vorbis\n"
            "  TITLE  Track\n"
        )
        result = parse_tag_frame_output(output)
        assert result.tags == {'2': {'TITLE': 'Track'}}
        assert result.file.frequency == '48000 Hz'
        assert result.file.duration == '10:01'

    def test_duplicate_frame_overwrites(self):
        """Test a later frame of the same name wins."""
        output = "Tag 2: ID3v2.4.0\n  Artist  First\n  Artist  Second\n"
        assert parse_tag_frame_output(output).tags['2'] == {'Artist': 'Second'}

    def test_repeated_tag_header_resets_frames(self):
        output = "Tag 2: ID3v2.4.0\n  Artist  First\nTag 2: ID3v2.4.0\n  Title  Only\n"
        assert parse_tag_frame_output(output).tags['2'] == {'Title': 'Only'}

    def test_unknown_header_keeps_section(self):
        """Test headers that match neither pattern leave the current tag active."""
        output = "Tag 1: ID3v1.1\nSomething else\n  Title  Still tag 1\n"
        assert parse_tag_frame_output(output).tags == {'1': {'Title': 'Still tag 1'}}

    def test_unmatched_frame_line_is_skipped(self):
        """Test an indented line without a value is ignored."""
        output = "Tag 2: ID3v2.3.0\n  Lonely\n  Title  Song\n"
        assert parse_tag_frame_output(output).tags == {'2': {'Title': 'Song'}}

    def test_windows_line_endings(self):
        output = "Tag 2: ID3v2.3.0\r\n  Title  Song\r\n\r\n  Artist  Band\r\n"
        assert parse_tag_frame_output(output).tags == {'2': {'Title': 'Song', 'Artist': 'Band'}}

    @pytest.mark.parametrize("separator", ['\x0c', '\x1c', '\x85', '\u2028'])
    def test_unicode_separator_in_value(self, separator):
        """Test only newlines end a frame, so other separators stay in the value."""
        output = f"Tag 2: ID3v2.4.0\n  Lyrics  first{separator}second\n  Title  Song\n"
        assert parse_tag_frame_output(output).tags == {
            '2': {'Lyrics': f'first{separator}second', 'Title': 'Song'},
        }

    def test_empty_output(self):
        result = parse_tag_frame_output("")
        assert result.file is None
        assert result.tags == {}

    def test_preferred_frames_tag2_first(self, sample_tag_frame_output):
        """Test tag 2 is preferred when both tags exist."""
        result = parse_tag_frame_output(sample_tag_frame_output)
        assert result.preferred_frames()['Title'] == 'Song Name'

    def test_preferred_frames_tag1_fallback(self, sample_tag1_only_output):
        """Test tag 1 is used when there is no tag 2."""
        result = parse_tag_frame_output(sample_tag1_only_output)
        assert result.preferred_frames() == {'Title': 'Lonely Tag', 'Artist': 'Nobody'}

    def test_preferred_frames_empty_tag2(self):
        """Test an empty tag 2 still takes precedence over tag 1."""
        result = parse_tag_frame_output("Tag 1: ID3v1.1\n  Title  Old\nTag 2: ID3v2.3.0\n")
        assert result.preferred_frames() == {}


class TestParseDirectoryListOutput:
    """Test suite for the `ls` output parser."""

    def test_listing_order(self, sample_directory_listing):
        """Test names are returned in listing order without state flags."""
        assert parse_directory_list_output(sample_directory_listing) == [
            'Song A.mp3',
            'Song B.flac',
            'untagged.ogg',
            'only v1.mp3',
        ]

    def test_non_matching_lines_dropped(self):
        """Test lines without the flag prefix are skipped without affecting others."""
        output = "  12 first.mp3\nError:nothing\n  -- second.mp3\n"
        assert parse_directory_list_output(output) == ['first.mp3', 'second.mp3']

    def test_empty_lines_ignored(self):
        assert parse_directory_list_output("\n\n  12 a.mp3\n\n") == ['a.mp3']

    def test_file_name_with_line_separator(self):
        assert parse_directory_list_output("  12 a\u2028b.mp3\r\n  -- c.mp3\r\n") == ['a\u2028b.mp3', 'c.mp3']

    def test_empty_output(self):
        assert parse_directory_list_output("") == []


class TestParseTagNumbers:
    """Test suite for the `tag` output parser."""

    def test_two_tags(self):
        assert parse_tag_numbers("Tag: 1, 2\n") == [1, 2]

    def test_single_tag(self):
        assert parse_tag_numbers("Tag: 2\n") == [2]

    def test_combined_selector(self):
        assert parse_tag_numbers("Tags: 12") == [12]

    def test_missing_numbers(self):
        """Test output without numbers raises a typed error carrying the output."""
        with pytest.raises(UnparseableOutputError) as exc_info:
            parse_tag_numbers("nothing here")
        assert exc_info.value.output == "nothing here"

    def test_empty_output(self):
        with pytest.raises(UnparseableOutputError):
            parse_tag_numbers("")

    def test_malformed_numbers(self):
        """Test empty items between commas are rejected."""
        with pytest.raises(UnparseableOutputError):
            parse_tag_numbers("Tag: 1,,2")
