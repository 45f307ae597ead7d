"""
SubRip (.srt) export of subtitle segments.
"""
from pathlib import Path
from typing import Iterable, Union

from .types import SubtitleSegment


MS_PER_DAY = 24 * 60 * 60 * 1000


def format_srt_time(t: float) -> str:
    """
    Format an instant as HH:MM:SS,mmm.

    Args:
        t: Seconds since the epoch

    Returns:
        UTC time of day with millisecond precision and a comma separator
    """
    ms = round(t * 1000) % MS_PER_DAY
    seconds, ms = divmod(ms, 1000)
    minutes, seconds = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d},{ms:03d}"


def export_srt(segments: Iterable[SubtitleSegment]) -> bytes:
    """
    Serialize segments to SubRip.

    Args:
        segments: Finalized segments in chronological order (e.g. a SubtitleLog)

    Returns:
        UTF-8 encoded SRT, empty for no segments
    """
    blocks = []
    for i, segment in enumerate(segments, start=1):
        blocks.append(
            f"{i}\n"
            f"{format_srt_time(segment.start_time)} --> {format_srt_time(segment.end_time)}\n"
            f"{segment.text}\n"
            "\n"
        )
    return "".join(blocks).encode("utf-8")


def write_srt(segments: Iterable[SubtitleSegment], path: Union[str, Path]) -> Path:
    """Write segments to an .srt file and return its path."""
    out = Path(path)
    out.write_bytes(export_srt(segments))
    return out
