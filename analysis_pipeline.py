"""
Virtual Coach AI — Coaching Pipeline
Handles: coaching chat, player info → structured swing report, and
questions about an existing report. Each operation is one Claude call.

Dependencies:
    pip install anthropic pydantic

The Claude client is created once by the web server and passed into every
operation; nothing here keeps state between requests.
"""

import logging
import os
from typing import Optional

import anthropic

from coaching_prompt import (
    PromptKind,
    build_player_context,
    build_report_question_prompt,
    system_prompt,
)
from report_schema import ConversationMessage, PlayerProfile, coerce_report, parse_report

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────
# CONFIGURATION
# ─────────────────────────────────────────────────────────

CLAUDE_MODEL = os.environ.get("VCA_MODEL", "claude-sonnet-4-5")

CHAT_MAX_TOKENS = 1024
REPORT_MAX_TOKENS = 4096
ANSWER_MAX_TOKENS = 600
ANSWER_TEMPERATURE = 0.7

CHAT_ERROR_PREFIX = "Server error while generating your coaching response: "
EMPTY_ANSWER = "I couldn't generate an answer. Try asking again in a different way."


class MissingReportInput(ValueError):
    """The report Q&A was called without a usable report or question."""


# ─────────────────────────────────────────────────────────
# CLAUDE API CALL
# ─────────────────────────────────────────────────────────

def create_client(api_key: Optional[str] = None) -> anthropic.Anthropic:
    """
    Builds the shared Claude client. Retries are off so the first failure
    is what the caller sees.
    """
    return anthropic.Anthropic(
        api_key=api_key or os.environ.get("ANTHROPIC_API_KEY"),
        max_retries=0,
    )


def generate_text(
    client,
    system: str,
    messages: list[dict],
    max_tokens: int,
    temperature: Optional[float] = None
) -> str:
    """Sends one request to Claude and returns the text of the reply."""
    params = {
        "model": CLAUDE_MODEL,
        "max_tokens": max_tokens,
        "system": system,
        "messages": messages,
    }
    if temperature is not None:
        params["temperature"] = temperature

    response = client.messages.create(**params)

    if not response.content:
        return ""
    return response.content[0].text


# ─────────────────────────────────────────────────────────
# COACHING CHAT
# ─────────────────────────────────────────────────────────

def coach_reply(client, messages) -> dict:
    """
    Produces the next coach turn for a caller-owned conversation.

    Args:
        client: Shared Claude client
        messages: Full history as [{"role": "user"|"assistant", "content": str}],
                  ending with the newest user turn

    Returns:
        {"content": str}. Failures are returned as an apology in "content"
        instead of being raised, so the chat UI can always render the reply.
    """
    try:
        history = [ConversationMessage.model_validate(m) for m in messages]
        if not history:
            raise ValueError("No messages to respond to.")

        content = generate_text(
            client,
            system=system_prompt(PromptKind.CHAT),
            messages=[m.model_dump() for m in history],
            max_tokens=CHAT_MAX_TOKENS,
        )
        return {"content": content}

    except Exception as e:
        logger.exception("Error in coaching chat")
        return {"content": CHAT_ERROR_PREFIX + (str(e) or "Unknown error.")}


# ─────────────────────────────────────────────────────────
# REPORT SYNTHESIS
# ─────────────────────────────────────────────────────────

def synthesize_report(client, profile: PlayerProfile) -> dict:
    """
    Full pipeline: player profile → structured swing report.

    Args:
        client: Shared Claude client
        profile: Fully defaulted PlayerProfile (see player_intake)

    Returns:
        Dict with keys:
            - success: False only when Claude could not be reached or
              rejected the request
            - report: SwingReport, or None when the reply did not parse
            - error: Why there is no report, or None
    """
    try:
        raw = generate_text(
            client,
            system=system_prompt(PromptKind.REPORT),
            messages=[{"role": "user", "content": build_player_context(profile)}],
            max_tokens=REPORT_MAX_TOKENS,
        )
    except anthropic.APIError as e:
        logger.exception("Claude API error during report synthesis")
        return {"success": False, "report": None, "error": f"Claude API error: {e}"}
    except Exception as e:
        logger.exception("Unexpected error during report synthesis")
        return {"success": False, "report": None, "error": f"Unexpected error: {e}"}

    report, problem = parse_report(raw)
    if report is None:
        logger.warning("Swing report did not parse: %s", problem)
        return {"success": True, "report": None, "error": problem}

    missing = report.missing_stages()
    if missing:
        logger.warning("Swing report for %s is missing checkpoints %s",
                       report.player_name, ", ".join(missing))

    return {"success": True, "report": report, "error": None}


# ─────────────────────────────────────────────────────────
# REPORT Q&A
# ─────────────────────────────────────────────────────────

def answer_report_question(client, report, question) -> dict:
    """
    Answers a golfer's question about one specific, existing report.

    Raises MissingReportInput, before any Claude call, when the question is
    blank or the report is absent or not report-shaped.

    Returns:
        {"success": True, "answer": str} or {"success": False, "error": str}
    """
    question = question.strip() if isinstance(question, str) else ""
    if not question or not report:
        raise MissingReportInput("Missing report or question")

    swing_report, problem = coerce_report(report)
    if swing_report is None:
        raise MissingReportInput(f"Invalid report: {problem}")

    try:
        answer = generate_text(
            client,
            system=system_prompt(PromptKind.REPORT_CHAT),
            messages=[{
                "role": "user",
                "content": build_report_question_prompt(swing_report, question),
            }],
            max_tokens=ANSWER_MAX_TOKENS,
            temperature=ANSWER_TEMPERATURE,
        )
    except Exception as e:
        logger.exception("Error answering report question")
        return {"success": False, "error": str(e) or "Error generating answer"}

    return {"success": True, "answer": answer.strip() or EMPTY_ANSWER}
