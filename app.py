"""
Virtual Coach AI — Web Server
Connects the coaching chat, swing upload and report pages to the Claude
coaching pipeline.

Setup:
    pip install -e .
    export ANTHROPIC_API_KEY=your_key_here
    python app.py

Endpoints:
    POST /api/chat          free-form coaching chat
    POST /api/report        player info (+ optional swing clip) → swing report
    POST /api/report-chat   question about a previously generated report
    GET  /api/health        monitoring

The report is returned to the caller, which keeps it (see handoff.py);
nothing is stored here between requests.
"""

import logging
import os

from flask import Flask, jsonify, request
from flask_cors import CORS

from analysis_pipeline import (
    CLAUDE_MODEL,
    MissingReportInput,
    answer_report_question,
    coach_reply,
    create_client,
    synthesize_report,
)
from handoff import handoff_payload
from player_intake import UnsupportedVideo, profile_from_form, profile_from_json

logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app)

# ─────────────────────────────────────────
# CONFIGURATION
# ─────────────────────────────────────────

ANTHROPIC_API_KEY = os.environ.get("ANTHROPIC_API_KEY")

# Max upload size: 500MB by default. The clip is only described, never decoded.
MAX_UPLOAD_MB = int(os.environ.get("VCA_MAX_UPLOAD_MB", "500"))
app.config['MAX_CONTENT_LENGTH'] = MAX_UPLOAD_MB * 1024 * 1024

# One shared Claude client for every request
app.config['COACH_CLIENT'] = create_client(ANTHROPIC_API_KEY)


def coach_client():
    return app.config['COACH_CLIENT']


# ─────────────────────────────────────────
# ROUTES
# ─────────────────────────────────────────

@app.route('/api/chat', methods=['POST'])
def chat():
    """
    Coaching chat. Accepts JSON {"messages": [{"role", "content"}, ...]}.
    Always answers 200 with {"content": ...}; errors come back as content.
    """
    body = request.get_json(silent=True) or {}
    messages = body.get('messages') if isinstance(body, dict) else None
    return jsonify(coach_reply(coach_client(), messages or [])), 200


@app.route('/api/report', methods=['POST'])
def report():
    """
    Swing report synthesis.
    Accepts either a multipart form with:
        - name, handicap, club, hand, eye, notes, ballFlight, voiceNote (strings)
        - swingVideo (file, optional; only its name and size are used)
    or JSON {"player": {...same fields...}}.

    Returns {"report": {...}} or {"report": null, "error": ...}.
    """
    try:
        if request.mimetype == 'multipart/form-data':
            profile = profile_from_form(request.form, request.files)
        else:
            profile = profile_from_json(request.get_json(silent=True) or {})
    except UnsupportedVideo as e:
        return jsonify({'report': None, 'error': str(e)}), 400

    result = synthesize_report(coach_client(), profile)

    swing_report = result['report']
    body = {'report': handoff_payload(swing_report)}
    if result['error']:
        body['error'] = result['error']

    if result['success']:
        return jsonify(body), 200
    else:
        return jsonify(body), 500


@app.route('/api/report-chat', methods=['POST'])
def report_chat():
    """
    Question about one report. Accepts JSON {"report": {...}, "question": "..."}.
    Returns {"answer": ...}; 400 when report or question is missing.
    """
    body = request.get_json(silent=True) or {}
    if not isinstance(body, dict):
        body = {}

    try:
        result = answer_report_question(
            coach_client(), body.get('report'), body.get('question')
        )
    except MissingReportInput as e:
        return jsonify({'error': str(e)}), 400

    if result['success']:
        return jsonify({'answer': result['answer']}), 200
    else:
        return jsonify({'error': result['error']}), 500


@app.route('/api/health')
def health():
    """Simple health check for monitoring"""
    return jsonify({
        'status': 'ok',
        'api_key_set': bool(ANTHROPIC_API_KEY),
        'model': CLAUDE_MODEL,
    })


# ─────────────────────────────────────────
# ERROR HANDLERS
# ─────────────────────────────────────────

@app.errorhandler(413)
def file_too_large(e):
    return jsonify({
        'report': None,
        'error': f'Swing video is too large. Please keep it under {MAX_UPLOAD_MB}MB.'
    }), 413


@app.errorhandler(500)
def internal_error(e):
    logger.error("Unhandled server error: %s", e)
    return jsonify({
        'error': 'An unexpected server error occurred. Please try again.'
    }), 500


# ─────────────────────────────────────────
# RUN
# ─────────────────────────────────────────

if __name__ == '__main__':
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not ANTHROPIC_API_KEY:
        print("⚠️  WARNING: ANTHROPIC_API_KEY not set. Set it before running.")
        print("   export ANTHROPIC_API_KEY=your_key_here")
    else:
        print("✅ Anthropic API key found")

    port = int(os.environ.get("PORT", "5000"))
    print(f"🤖 Model: {CLAUDE_MODEL}")
    print("⛳ Virtual Coach AI server starting...")
    print(f"   API listening on http://localhost:{port}\n")

    app.run(debug=True, host='0.0.0.0', port=port)
