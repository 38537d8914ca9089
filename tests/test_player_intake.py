import io

import pytest
from werkzeug.datastructures import FileStorage, ImmutableMultiDict

from player_intake import (
    UnsupportedVideo,
    build_profile,
    describe_swing_clip,
    merge_voice_note,
    profile_from_form,
    profile_from_json,
)
from report_schema import NO_VIDEO_INFO

BLANK = {"name": "", "handicap": "", "club": "", "hand": "", "notes": "", "ballFlight": ""}


def test_blank_fields_fall_back_to_defaults():
    profile = build_profile(BLANK)

    assert profile.name == "Player"
    assert profile.handicap == "N/A"
    assert profile.hand == "Right"
    assert profile.eye == "Unknown"
    assert profile.club == "N/A"
    assert profile.notes == "N/A"
    assert profile.ball_flight == "N/A"
    assert profile.swing_info == NO_VIDEO_INFO


def test_values_are_trimmed_and_numbers_stringified():
    profile = build_profile({"name": "  Sam ", "handicap": 12, "hand": "left", "club": "7 iron"})

    assert profile.name == "Sam"
    assert profile.handicap == "12"
    assert profile.hand == "Left"
    assert profile.club == "7 iron"


def test_unrecognized_hand_defaults_to_right():
    assert build_profile({"hand": "ambidextrous"}).hand == "Right"


def test_name_is_capped():
    assert len(build_profile({"name": "x" * 200}).name) == 50


@pytest.mark.parametrize(
    "ball_flight, voice, expected",
    [
        ("Slice", "", "Slice"),
        ("", "Starts left", "Starts left"),
        ("Slice", "Starts left", "Slice\n\nVoice note: Starts left"),
    ],
)
def test_merge_voice_note(ball_flight, voice, expected):
    assert merge_voice_note(ball_flight, voice) == expected


def test_voice_note_lands_in_ball_flight():
    profile = build_profile({"ballFlight": "High fade", "voiceNote": "feels steep"})

    assert profile.ball_flight == "High fade\n\nVoice note: feels steep"


def test_describe_swing_clip_uses_name_and_size_only():
    assert describe_swing_clip("swing.mp4", 2048) == (
        "Swing video uploaded: swing.mp4, approx 2 KB. "
        "Treat this as a single-swing clip matching the description."
    )


def test_profile_from_form_with_video():
    form = ImmutableMultiDict({"name": "Sam", "hand": "Left", "ballFlight": "Hook"})
    files = {"swingVideo": FileStorage(stream=io.BytesIO(b"x" * 4096), filename="my swing.mov")}

    profile = profile_from_form(form, files)

    assert profile.name == "Sam"
    assert profile.hand == "Left"
    assert profile.swing_info.startswith("Swing video uploaded: my_swing.mov, approx 4 KB.")


def test_profile_from_form_without_video():
    profile = profile_from_form(ImmutableMultiDict({"name": "Sam"}), {})

    assert profile.swing_info == NO_VIDEO_INFO


def test_profile_from_form_rejects_unsupported_video():
    files = {"swingVideo": FileStorage(stream=io.BytesIO(b"x"), filename="swing.exe")}

    with pytest.raises(UnsupportedVideo):
        profile_from_form(ImmutableMultiDict({}), files)


def test_profile_from_json_reads_player_object():
    profile = profile_from_json({"player": {"name": "Alex", "ballFlight": "Push", "swingInfo": "Clip from range"}})

    assert profile.name == "Alex"
    assert profile.ball_flight == "Push"
    assert profile.swing_info == "Clip from range"


@pytest.mark.parametrize("body", [{}, {"player": None}, {"player": "Sam"}, []])
def test_profile_from_json_missing_player_uses_defaults(body):
    profile = profile_from_json(body)

    assert profile.name == "Player"
    assert profile.swing_info == NO_VIDEO_INFO


def test_both_input_shapes_give_the_same_profile():
    fields = {"name": "Sam", "handicap": "9", "club": "Driver", "hand": "Right", "notes": "More speed", "ballFlight": "Low draw"}

    assert profile_from_form(ImmutableMultiDict(fields), {}) == profile_from_json({"player": fields})
