"""Typed parsing of YouTube player responses.

Both the internal player API and the watch page expose the same
player JSON. It is validated into pydantic models once, so a missing
or malformed field surfaces as ParseFailure instead of a silent None
deep inside a strategy.
"""

from typing import Any
from urllib.parse import urljoin

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from yt_transcript.extraction.errors import NoCaptionsAvailable, ParseFailure
from yt_transcript.extraction.models import CaptionTrack

# =============================================================================
# MODELS
# =============================================================================


class _PlayerModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class TextRun(_PlayerModel):
    """Single run of a formatted string."""

    text: str = ""


class TrackName(_PlayerModel):
    """Localized track name, either simpleText or runs."""

    simple_text: str | None = Field(default=None, alias="simpleText")
    runs: list[TextRun] = Field(default_factory=list)

    @property
    def text(self) -> str:
        """Flattened display text."""
        if self.simple_text:
            return self.simple_text
        return "".join(run.text for run in self.runs)


class CaptionTrackEntry(_PlayerModel):
    """One entry of captionTracks."""

    base_url: str = Field(alias="baseUrl", min_length=1)
    language_code: str = Field(alias="languageCode", min_length=1)
    kind: str | None = None
    vss_id: str | None = Field(default=None, alias="vssId")
    name: TrackName | None = None

    @property
    def is_auto_generated(self) -> bool:
        """ASR tracks carry kind='asr' and a vssId starting with 'a.'."""
        return self.kind == "asr" or (self.vss_id or "").startswith("a.")


class TracklistRenderer(_PlayerModel):
    """playerCaptionsTracklistRenderer block."""

    caption_tracks: list[CaptionTrackEntry] = Field(default_factory=list, alias="captionTracks")


class Captions(_PlayerModel):
    """captions block."""

    renderer: TracklistRenderer = Field(alias="playerCaptionsTracklistRenderer")


class PlayabilityStatus(_PlayerModel):
    """playabilityStatus block."""

    status: str = "OK"
    reason: str | None = None


class VideoDetails(_PlayerModel):
    """videoDetails block."""

    video_id: str | None = Field(default=None, alias="videoId")
    title: str | None = None


class PlayerResponse(_PlayerModel):
    """Subset of the player response the strategies rely on."""

    playability_status: PlayabilityStatus = Field(
        default_factory=PlayabilityStatus,
        alias="playabilityStatus",
    )
    captions: Captions | None = None
    video_details: VideoDetails | None = Field(default=None, alias="videoDetails")

    @property
    def title(self) -> str | None:
        """Video title, if present."""
        return self.video_details.title if self.video_details else None


# =============================================================================
# PARSING
# =============================================================================


def parse_player_response(data: Any) -> PlayerResponse:
    """Validate raw player JSON.

    Args:
        data: Decoded JSON object.

    Returns:
        Validated player response.

    Raises:
        ParseFailure: When the object does not match the expected shape.
    """
    if not isinstance(data, dict):
        raise ParseFailure(f"Player response is not an object ({type(data).__name__})")
    try:
        return PlayerResponse.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise ParseFailure(f"Unexpected player response at '{location}': {first['msg']}") from e


def extract_caption_tracks(player: PlayerResponse, base_url: str) -> list[CaptionTrack]:
    """Map the player caption tracks to CaptionTrack objects.

    Args:
        player: Validated player response.
        base_url: Site root used to resolve relative track URLs.

    Returns:
        Tracks in upstream order (never empty).

    Raises:
        NoCaptionsAvailable: Video is unplayable or has no tracks.
    """
    status = player.playability_status
    if status.status != "OK":
        reason = status.reason or "no reason given"
        raise NoCaptionsAvailable(f"Video not playable: {status.status} ({reason})")

    if player.captions is None or not player.captions.renderer.caption_tracks:
        raise NoCaptionsAvailable("No caption tracks available")

    return [
        CaptionTrack(
            language_code=entry.language_code,
            display_name=entry.name.text if entry.name else entry.language_code,
            is_auto_generated=entry.is_auto_generated,
            source_url=urljoin(f"{base_url}/", entry.base_url),
        )
        for entry in player.captions.renderer.caption_tracks
    ]
