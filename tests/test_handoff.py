import json

from handoff import LATEST_REPORT_KEY, dump_report, handoff_payload, load_report
from report_schema import coerce_report


def test_round_trip_is_lossless(report_payload):
    report, _ = coerce_report(report_payload)

    restored = load_report(dump_report(report))

    assert restored == report
    assert json.loads(dump_report(restored)) == report_payload


def test_load_report_without_a_stored_report():
    assert load_report(None) is None
    assert load_report("") is None
    assert load_report("{not json") is None
    assert load_report(json.dumps(["nope"])) is None


def test_storage_key():
    assert LATEST_REPORT_KEY == "vca-latest-report"


def test_handoff_payload_is_what_gets_stored(report_payload):
    report, _ = coerce_report(report_payload)

    assert handoff_payload(None) is None
    assert handoff_payload(report) == report_payload
    assert json.loads(dump_report(report)) == handoff_payload(report)


def test_report_endpoint_sends_the_handoff_payload(http, report_reply, report_payload):
    client, fake = http
    fake.messages.reply = report_reply

    body = client.post("/api/report", json={"player": {"name": "Sam"}}).get_json()

    assert body["report"] == handoff_payload(load_report(json.dumps(report_payload)))
    assert load_report(json.dumps(body["report"])).top_priority == report_payload["priorityFixes"][0]
