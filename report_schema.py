"""
Virtual Coach AI — Swing Report Schema
The data model shared by report synthesis, the report Q&A and the handoff
to the report page. Wire names are camelCase to match what the UI stores.
"""

import json
import re
from enum import Enum
from typing import List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic.alias_generators import to_camel


# ─────────────────────────────────────────────────────────
# CONSTANTS
# ─────────────────────────────────────────────────────────

# The 9-stage swing model every report is expected to walk through
SWING_STAGES = ("P1", "P2", "P3", "P4", "P5", "P6", "P7", "P8", "P9")

UNKNOWN_STATUS = "UNKNOWN"

NO_VIDEO_INFO = "No video file attached; treat description as main source."

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


class CheckpointStatus(str, Enum):
    GREEN = "GREEN"    # on track
    YELLOW = "YELLOW"  # watch area
    RED = "RED"        # priority leak


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# ─────────────────────────────────────────────────────────
# INPUTS
# ─────────────────────────────────────────────────────────

class PlayerProfile(_WireModel):
    """Fully defaulted player info for one report request."""

    name: str = "Player"
    handicap: str = "N/A"
    hand: str = "Right"
    eye: str = "Unknown"
    club: str = "N/A"
    notes: str = "N/A"
    ball_flight: str = "N/A"
    swing_info: str = NO_VIDEO_INFO


class ConversationMessage(_WireModel):
    role: str
    content: str

    @field_validator("role")
    @classmethod
    def _known_role(cls, value: str) -> str:
        if value not in ("user", "assistant"):
            raise ValueError(f"role must be 'user' or 'assistant', got {value!r}")
        return value


# ─────────────────────────────────────────────────────────
# REPORT
# ─────────────────────────────────────────────────────────

class Checkpoint(_WireModel):
    label: str
    phase: str = ""
    status: str = UNKNOWN_STATUS
    note: Optional[str] = None
    short: Optional[str] = None
    long: Optional[str] = None
    youtube_query: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def _keep_status(cls, value):
        # Kept as sent; checkpoint_tone decides how an odd value is shown
        if value is None:
            return UNKNOWN_STATUS
        if not isinstance(value, str):
            return str(value)
        return value

    @property
    def is_known_status(self) -> bool:
        return checkpoint_tone(self.status) != UNKNOWN_STATUS


class PlanBlock(_WireModel):
    title: str
    text: str


class SwingRatings(_WireModel):
    swing: Optional[str] = None
    power: Optional[str] = None
    consistency: Optional[str] = None
    readiness: Optional[str] = None


class SwingReport(_WireModel):
    """
    A synthesized swing report. Treated as read-only once created.

    priority_fixes is ranked: index 0 is the ONE priority the golfer should
    work on, everything after it is a second step.
    """

    player_name: str = "Player"
    hand: str = "Right"
    eye: str = "Unknown"
    handicap: Union[str, int, float] = "N/A"
    summary: Tuple[str, ...] = ()
    strengths: Tuple[str, ...] = ()
    priority_fixes: Tuple[str, ...] = ()
    power_leaks: Tuple[str, ...] = ()
    checkpoints: Tuple[Checkpoint, ...] = ()
    plan_blocks: Tuple[PlanBlock, ...] = ()
    swing_ratings: Optional[SwingRatings] = None

    @field_validator("summary", mode="before")
    @classmethod
    def _wrap_summary(cls, value):
        if isinstance(value, str):
            return (value,) if value.strip() else ()
        return value

    @property
    def top_priority(self) -> Optional[str]:
        return self.priority_fixes[0] if self.priority_fixes else None

    @property
    def summary_paragraph(self) -> str:
        return " ".join(s.strip() for s in self.summary if s.strip())

    def missing_stages(self) -> List[str]:
        """P1–P9 labels that have no checkpoint in this report."""
        present = {cp.label.strip().upper() for cp in self.checkpoints}
        return [stage for stage in SWING_STAGES if stage not in present]

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ─────────────────────────────────────────────────────────
# PARSING & RENDERING HELPERS
# ─────────────────────────────────────────────────────────

def parse_report(raw: str) -> Tuple[Optional[SwingReport], Optional[str]]:
    """
    Converts the model's raw text into a SwingReport.

    Never raises on bad input: returns (report, None) on success and
    (None, problem) when the text is not a {"report": {...}} JSON object
    matching the report shape.
    """
    text = (raw or "").strip()
    fenced = _FENCE_RE.match(text)
    if fenced:
        text = fenced.group(1)

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        return None, f"Coach response was not valid JSON ({e.msg})."

    if not isinstance(payload, dict) or not isinstance(payload.get("report"), dict):
        return None, "Coach response did not contain a report object."

    return coerce_report(payload["report"])


def coerce_report(data) -> Tuple[Optional[SwingReport], Optional[str]]:
    """Validates an already-decoded report object."""
    if isinstance(data, SwingReport):
        return data, None
    if not isinstance(data, dict):
        return None, "Report must be a JSON object."
    try:
        return SwingReport.model_validate(data), None
    except ValidationError as e:
        first = e.errors()[0]
        where = ".".join(str(part) for part in first["loc"]) or "report"
        return None, f"Report does not match the expected shape at {where}: {first['msg']}"


def checkpoint_tone(status: str) -> str:
    """Visual state for a checkpoint status; anything unexpected is UNKNOWN."""
    normalized = (status or "").strip().upper() if isinstance(status, str) else ""
    if normalized in CheckpointStatus.__members__:
        return normalized
    return UNKNOWN_STATUS
