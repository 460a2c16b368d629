"""Caption track selection.

Every strategy that sees several tracks picks one with the same
four-step policy:

1. exact language match, human-authored
2. exact language match, any kind
3. same base language tag ('en' matches 'en-US', 'en-GB')
4. first track in upstream order
"""

from collections.abc import Sequence

from yt_transcript.extraction.errors import NoCaptionsAvailable
from yt_transcript.extraction.models import CaptionTrack


def base_tag(language_code: str) -> str:
    """Return the primary subtag of a language code, lowercased."""
    return language_code.replace("_", "-").split("-", 1)[0].strip().lower()


def select_track(tracks: Sequence[CaptionTrack], language: str) -> CaptionTrack:
    """Pick the track to download for the requested language.

    Args:
        tracks: Tracks in the order the upstream returned them.
        language: Requested language code.

    Returns:
        Selected track.

    Raises:
        NoCaptionsAvailable: When the track list is empty.
    """
    if not tracks:
        raise NoCaptionsAvailable("No caption tracks available")

    wanted = language.strip().lower()

    for track in tracks:
        if track.language_code.lower() == wanted and not track.is_auto_generated:
            return track

    for track in tracks:
        if track.language_code.lower() == wanted:
            return track

    wanted_base = base_tag(wanted)
    for track in tracks:
        if base_tag(track.language_code) == wanted_base:
            return track

    return tracks[0]


def language_codes(tracks: Sequence[CaptionTrack]) -> list[str]:
    """Distinct language codes of the tracks, in upstream order."""
    return list(dict.fromkeys(track.language_code for track in tracks))
