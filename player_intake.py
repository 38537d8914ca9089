"""
Virtual Coach AI — Player Intake
Normalizes the two request shapes the report endpoint accepts (multipart
upload form, or a JSON body with a "player" object) into one PlayerProfile.
Every fallback is applied here, once, so nothing downstream re-checks blanks.
"""

import os
from typing import Mapping, Optional

from werkzeug.utils import secure_filename

from report_schema import NO_VIDEO_INFO, PlayerProfile


ALLOWED_EXTENSIONS = {'mp4', 'mov', 'avi', 'mkv', 'm4v', 'webm'}

MAX_NAME_LENGTH = 50
MAX_TEXT_LENGTH = 2000

# Fallback for each profile field when the caller leaves it blank
FIELD_DEFAULTS = {
    "name": "Player",
    "handicap": "N/A",
    "hand": "Right",
    "eye": "Unknown",
    "club": "N/A",
    "notes": "N/A",
    "ball_flight": "N/A",
    "swing_info": NO_VIDEO_INFO,
}

# Request field name -> profile field name
WIRE_FIELDS = {
    "name": "name",
    "handicap": "handicap",
    "hand": "hand",
    "eye": "eye",
    "club": "club",
    "notes": "notes",
    "ballFlight": "ball_flight",
    "swingInfo": "swing_info",
}


class UnsupportedVideo(ValueError):
    """The attached swing clip has a file type we don't accept."""


def allowed_file(filename: str) -> bool:
    return '.' in filename and \
           filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


def _clean(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _normalize_hand(value: str) -> str:
    lowered = value.lower()
    if lowered in ("left", "l", "lefty", "left-handed"):
        return "Left"
    return "Right"


def merge_voice_note(ball_flight: str, voice_note: str) -> str:
    """Appends a transcribed voice note to the typed ball-flight description."""
    ball_flight = _clean(ball_flight)
    voice_note = _clean(voice_note)
    if not voice_note:
        return ball_flight
    if not ball_flight:
        return voice_note
    return f"{ball_flight}\n\nVoice note: {voice_note}"


def build_profile(fields: Mapping) -> PlayerProfile:
    """
    Applies the fallbacks to raw request fields and returns a complete profile.

    Args:
        fields: Mapping keyed by wire names (name, handicap, hand, eye, club,
                notes, ballFlight, voiceNote, swingInfo). Missing, None and
                blank values all fall back to the defaults.

    Returns:
        PlayerProfile with every field populated
    """
    values = {}
    for wire_name, field_name in WIRE_FIELDS.items():
        value = _clean(fields.get(wire_name))
        if field_name == "ball_flight":
            value = merge_voice_note(value, fields.get("voiceNote"))
        if field_name == "name":
            value = value[:MAX_NAME_LENGTH]
        elif field_name != "swing_info":
            value = value[:MAX_TEXT_LENGTH]
        values[field_name] = value or FIELD_DEFAULTS[field_name]

    values["hand"] = _normalize_hand(values["hand"])
    return PlayerProfile(**values)


def describe_swing_clip(filename: str, size_bytes: int) -> str:
    """Textual evidence for an uploaded clip. Frames are never decoded."""
    size_kb = round(size_bytes / 1024)
    return (
        f"Swing video uploaded: {filename}, approx {size_kb} KB. "
        "Treat this as a single-swing clip matching the description."
    )


def _upload_size(upload) -> int:
    stream = upload.stream
    position = stream.tell()
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(position)
    return size


def profile_from_form(form: Mapping, files: Optional[Mapping] = None) -> PlayerProfile:
    """
    Builds a profile from multipart upload fields.

    The optional "swingVideo" attachment contributes only its filename and
    size. Raises UnsupportedVideo for file types outside ALLOWED_EXTENSIONS.
    """
    fields = {key: form.get(key) for key in (*WIRE_FIELDS, "voiceNote")}
    fields["swingInfo"] = None

    upload = files.get("swingVideo") if files else None
    if upload is not None and upload.filename:
        if not allowed_file(upload.filename):
            raise UnsupportedVideo(
                'Unsupported file format. Please upload MP4, MOV, or AVI.'
            )
        fields["swingInfo"] = describe_swing_clip(
            secure_filename(upload.filename), _upload_size(upload)
        )

    return build_profile(fields)


def profile_from_json(body) -> PlayerProfile:
    """Builds a profile from a JSON body of the form {"player": {...}}."""
    player = body.get("player") if isinstance(body, dict) else None
    if not isinstance(player, dict):
        player = {}
    return build_profile(player)
