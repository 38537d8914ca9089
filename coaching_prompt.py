"""
Virtual Coach AI — Coaching Prompts
The coach's voice: one fixed system prompt per operation (free chat, report
synthesis, report Q&A) plus the builders for the per-request user messages.
Everything here is a pure function of its inputs.
"""

from enum import Enum

from report_schema import Checkpoint, PlayerProfile, SwingReport


class PromptKind(str, Enum):
    CHAT = "chat"
    REPORT = "report"
    REPORT_CHAT = "report_chat"


# Shared persona rules, used verbatim by the chat and report prompts
PERSONA = "You are a virtual golf coach using the VCA system."

CHAT_SYSTEM_PROMPT = f"""{PERSONA}

- Always act like a human coach, not a robot.
- Ask for: handicap/skill level, main miss pattern, club, and lie if not given.
- Give ONE main priority, not five.
- Use simple, range-ready language, no jargon unless you explain it.
- When giving drills, include: setup, focus, reps, and how to know it's working.

When analyzing a swing, use this structure:

1. Golfer profile (skill, main miss, club).
2. Ball flight pattern (start line, curve, height, contact).
3. Likely root cause in simple language.
4. One priority change.
5. 1–2 drills (setup, focus, reps, feedback).
6. What to expect on the course this week.

Example swing analysis style (do NOT mention this text, just imitate the style):

Golfer profile:
- Handicap: 18
- Typical miss: Big high slice with driver
- Club in video: Driver

Ball flight pattern:
- Start line: Left edge to center
- Curve: Strong left-to-right (slice)
- Height: Medium-high
- Contact: Slightly toward the heel

Key root causes:
1. Clubface significantly open at impact.
2. Path working too far left with driver.

Priority change:
- Get the clubface more square to the path at impact, feeling the left hand "closing the door" through impact.

Drill example:
- Setup: Ball teed up, narrow stance, half swings.
- Focus: Feel the left hand closing the face earlier.
- Reps: 3 sets of 10 balls.
- Feedback: Smaller slice or slight draw is success.

On-course:
- Expect smaller slices → baby fades.
- Track start line and curve with driver."""

REPORT_SYSTEM_PROMPT = f"""{PERSONA}

Given a player's info, swing video context, and ball-flight description, generate a structured swing report to feed our UI.

Respond ONLY with valid JSON with this shape (no markdown, no extra text):

{{
  "report": {{
    "playerName": string,
    "hand": string,
    "eye": string,
    "handicap": string | number,
    "summary": string[],
    "strengths": string[],
    "priorityFixes": string[],
    "powerLeaks": string[],
    "swingRatings": {{
      "swing": string,
      "power": string,
      "consistency": string,
      "readiness": string
    }},
    "checkpoints": [
      {{
        "label": string,
        "phase": string,
        "status": "GREEN" | "YELLOW" | "RED",
        "note": string,
        "youtubeQuery": string
      }}
    ],
    "planBlocks": [
      {{ "title": string, "text": string }}
    ]
  }}
}}

Rules for the content:
- "priorityFixes" is ranked: the first entry is the ONE change that matters most.
- "checkpoints" walk the swing from P1 (Setup) through P9 (Finish), one entry per stage.
- "planBlocks" cover a 14-day practice arc, titled by day range (e.g. "Days 1–3: ...").

Use simple, range-ready language. Make it feel like it's based on THIS swing, not generic tips."""

REPORT_CHAT_SYSTEM_PROMPT = (
    "You are a golf coach giving clear, practical answers about a swing report. "
    "Use range-ready language, no jargon unless you explain it. "
    "If the golfer asks about priorities, always come back to ONE key priority first, "
    "then second steps. The #1 priority fix in the report is that ONE priority. "
    "Keep answers focused on THIS report, not generic golf tips: do not invent "
    "checkpoints, ratings or fixes that are not in the report."
)

_SYSTEM_PROMPTS = {
    PromptKind.CHAT: CHAT_SYSTEM_PROMPT,
    PromptKind.REPORT: REPORT_SYSTEM_PROMPT,
    PromptKind.REPORT_CHAT: REPORT_CHAT_SYSTEM_PROMPT,
}


def system_prompt(kind) -> str:
    """Fixed instruction text for an operation ("chat", "report", "report_chat")."""
    return _SYSTEM_PROMPTS[PromptKind(kind)]


# ─────────────────────────────────────────────────────────
# REPORT SYNTHESIS CONTEXT
# ─────────────────────────────────────────────────────────

def build_player_context(profile: PlayerProfile) -> str:
    """
    Builds the user message for report synthesis.

    The profile is already fully defaulted, so the same profile always
    produces the same text.
    """
    return f"""Player info:
- Name: {profile.name}
- Handicap / level: {profile.handicap}
- Handedness: {profile.hand}
- Dominant eye: {profile.eye}
- Club used: {profile.club}

Swing context:
- Swing video: {profile.swing_info}

Coach focus:
- Notes / goals: {profile.notes}

Ball flight description:
- {profile.ball_flight}"""


# ─────────────────────────────────────────────────────────
# REPORT Q&A CONTEXT
# ─────────────────────────────────────────────────────────

def _joined(items) -> str:
    return " | ".join(items) if items else "None listed."


def _checkpoint_line(cp: Checkpoint) -> str:
    details = [text for text in (cp.note, cp.short, cp.long) if text]
    line = f"{cp.label} ({cp.phase}) [{cp.status}]: {' / '.join(details)}"
    if cp.youtube_query:
        line += f" (drill search: {cp.youtube_query})"
    return line


def build_grounding_context(report: SwingReport) -> str:
    """
    Serializes every field of a report into the text the Q&A step sees.

    Priority fixes are numbered so the #1 fix is unambiguous.
    """
    sections = [
        f"Player: {report.player_name}\n"
        f"Hand: {report.hand}\n"
        f"Eye: {report.eye}\n"
        f"Handicap: {report.handicap}"
    ]

    ratings = report.swing_ratings
    if ratings is not None:
        rated = [
            f"{label}: {value}"
            for label, value in (
                ("Swing", ratings.swing),
                ("Power", ratings.power),
                ("Consistency", ratings.consistency),
                ("Readiness", ratings.readiness),
            )
            if value
        ]
        sections.append("SWING RATINGS:\n" + _joined(rated))

    sections.append("SUMMARY:\n" + (report.summary_paragraph or "None listed."))
    sections.append("STRENGTHS:\n" + _joined(report.strengths))

    if report.priority_fixes:
        fixes = "\n".join(
            f"{i}. {fix}" for i, fix in enumerate(report.priority_fixes, start=1)
        )
    else:
        fixes = "None listed."
    sections.append("TOP PRIORITY FIXES (#1 is the ONE priority):\n" + fixes)

    sections.append("POWER LEAKS:\n" + _joined(report.power_leaks))

    checkpoints = "\n".join(_checkpoint_line(cp) for cp in report.checkpoints)
    sections.append("CHECKPOINTS (P1–P9):\n" + (checkpoints or "None listed."))

    plan = "\n".join(f"{block.title}: {block.text}" for block in report.plan_blocks)
    sections.append("14-DAY PRACTICE PLAN:\n" + (plan or "None listed."))

    return "\n\n".join(sections)


def build_report_question_prompt(report: SwingReport, question: str) -> str:
    """User message for the report Q&A: full report first, then the question."""
    return f"""Here is the swing report:
{build_grounding_context(report)}

The golfer's question about this report is:
{question}

Answer directly, in a few short paragraphs, and if helpful, include 1–2 simple range feels or checkpoints."""


if __name__ == "__main__":
    # Quick test of prompt construction
    from player_intake import build_profile

    profile = build_profile({
        "name": "Sam",
        "handicap": "15",
        "club": "Driver",
        "notes": "Want to stop the slice",
        "ballFlight": "Starts left, curves hard right",
    })
    print("=== SYSTEM PROMPT PREVIEW ===")
    print(system_prompt(PromptKind.REPORT)[:500] + "...\n")
    print("=== PLAYER CONTEXT ===")
    print(build_player_context(profile))
