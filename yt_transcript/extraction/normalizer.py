"""Caption payload decoding and text normalization.

Turns the caption formats served by YouTube (json3 event lists,
srv1 and srv3 timed-text XML) into ordered transcript segments with
plain text, and joins segments into the final transcript string.
"""

import html
import json
import warnings
from collections.abc import Callable, Iterable
from typing import Any

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning, Tag

from yt_transcript.extraction.errors import ParseFailure
from yt_transcript.extraction.models import TranscriptSegment

# Segment texts are short fragments, often looking like URLs or paths.
warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)

_PARSER = "html.parser"


# =============================================================================
# TEXT
# =============================================================================


def normalize_text(raw: str) -> str:
    """Normalize one caption fragment to plain text.

    Markup tags are removed by an HTML parser, which also decodes named
    and numeric character references. Entity-decoded brackets therefore
    survive as literal text. Whitespace runs, newlines and non-breaking
    spaces collapse to single spaces.

    Args:
        raw: Raw fragment text.

    Returns:
        Normalized text, possibly empty.
    """
    if not raw:
        return ""
    return collapse_whitespace(BeautifulSoup(raw, _PARSER).get_text())


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace of already decoded text to single spaces."""
    return " ".join(text.split())


def decode_plain_text(text: str) -> str:
    """Decode character references in text that carries no markup."""
    return collapse_whitespace(html.unescape(text))


def build_transcript(segments: Iterable[TranscriptSegment]) -> str:
    """Join segment texts in order with single spaces."""
    return " ".join(segment.text for segment in segments if segment.text).strip()


def make_segments(
    items: Iterable[tuple[str, float, float]],
    clean: Callable[[str], str] = normalize_text,
) -> list[TranscriptSegment]:
    """Build normalized segments, dropping those left empty.

    Args:
        items: (raw_text, start_seconds, duration_seconds) tuples.
        clean: Text cleaner matching how the texts are encoded.

    Returns:
        Ordered list of non-empty segments.
    """
    segments = []
    for raw_text, start, duration in items:
        text = clean(raw_text)
        if text:
            segments.append(TranscriptSegment(text=text, start_seconds=start, duration_seconds=duration))
    return segments


# =============================================================================
# PAYLOADS
# =============================================================================


def parse_caption_payload(payload: str) -> list[TranscriptSegment]:
    """Decode a caption payload in any supported format.

    Args:
        payload: Response body of a caption track URL.

    Returns:
        Ordered, normalized, non-empty segments.

    Raises:
        ParseFailure: Payload is empty, malformed or of unknown shape.
    """
    if not payload or not payload.strip():
        raise ParseFailure("Empty caption payload")

    if payload.lstrip().startswith("{"):
        return _parse_json3(payload)
    return _parse_timed_text(payload)


def _parse_json3(payload: str) -> list[TranscriptSegment]:
    """Decode a json3 payload (events with utf8 segments)."""
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise ParseFailure(f"Malformed JSON caption payload: {e.msg}") from e

    events = data.get("events") if isinstance(data, dict) else None
    if not isinstance(events, list):
        raise ParseFailure("JSON caption payload has no 'events' list")

    return make_segments(_iter_json3_events(events), clean=decode_plain_text)


def _iter_json3_events(events: list[Any]) -> Iterable[tuple[str, float, float]]:
    """Yield (text, start, duration) for events carrying text segments."""
    for event in events:
        if not isinstance(event, dict) or not isinstance(event.get("segs"), list):
            continue
        text = "".join(str(seg.get("utf8", "")) for seg in event["segs"] if isinstance(seg, dict))
        yield text, _ms(event.get("tStartMs")), _ms(event.get("dDurationMs"))


def _parse_timed_text(payload: str) -> list[TranscriptSegment]:
    """Decode srv1 (<text start dur>) or srv3 (<p t d>) XML."""
    soup = BeautifulSoup(payload, _PARSER)

    srv1 = soup.find_all("text")
    if srv1:
        return make_segments(
            (_inner_text(node), _seconds(node.get("start")), _seconds(node.get("dur")))
            for node in srv1
        )

    srv3 = soup.find_all("p")
    if srv3:
        return make_segments(
            ((_inner_text(node), _ms(node.get("t")), _ms(node.get("d"))) for node in srv3),
            clean=collapse_whitespace,
        )

    raise ParseFailure("Caption payload contains no timed text elements")


def _inner_text(node: Tag) -> str:
    # Payload parsing decodes the XML layer. srv1 bodies are HTML escaped
    # into XML, so their text is markup decoded once more by normalize_text.
    # srv3 bodies are plain text once the XML layer is gone.
    return node.get_text()


def _seconds(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _ms(value: Any) -> float:
    return _seconds(value) / 1000.0
