from datetime import datetime, timedelta, timezone
from urllib.parse import parse_qs, urlparse

import pytest

from models.sacrament_meeting import SacramentMeeting
from utils.calendar_links import google_calendar_link
from utils.llm_output import extract_suggestion, message_text
from utils.pdf_export import agenda_filename, render_agenda_pdf


def test_calendar_link_uses_utc_range():
    start = datetime(2025, 6, 1, 19, 30, tzinfo=timezone(timedelta(hours=-7)))

    url = google_calendar_link("Interview: Jane", start, details="Purpose: calling")

    parsed = urlparse(url)
    assert parsed.netloc == "calendar.google.com"
    params = parse_qs(parsed.query)
    assert params["action"] == ["TEMPLATE"]
    assert params["text"] == ["Interview: Jane"]
    assert params["dates"] == ["20250602T023000Z/20250602T033000Z"]
    assert params["details"] == ["Purpose: calling"]
    assert "location" not in params


def test_calendar_link_treats_naive_as_utc():
    url = google_calendar_link("x", datetime(2025, 1, 1, 8, 0), duration=timedelta(minutes=30))
    assert "dates=20250101T080000Z/20250101T083000Z" in url


@pytest.mark.parametrize("raw", [
    '{"suggestedImprovements": "Invite youth speakers."}',
    '```json\n{"suggestedImprovements": "Invite youth speakers."}\n```',
    'Sure! Here it is: {"suggestedImprovements": "Invite youth speakers."} Hope it helps.',
])
def test_extract_suggestion_from_json_shapes(raw):
    assert extract_suggestion(raw) == "Invite youth speakers."


def test_extract_suggestion_falls_back_to_prose():
    assert extract_suggestion("Invite youth speakers.") == "Invite youth speakers."
    with pytest.raises(ValueError):
        extract_suggestion("   ")


def test_message_text_joins_text_parts():
    assert message_text([{"type": "text", "text": "a"}, {"type": "image"}, "b"]) == "ab"


def _meeting(**overrides):
    data = {
        "date": datetime(2025, 6, 1, tzinfo=timezone.utc),
        "preside": "Bishop Ruiz",
        "dirige": "Brother Soto",
        "hymnSacramental": {"name": "I Stand All Amazed", "number": 193},
        "speakers": ["Ana", "Luis"],
        "asuntosDelBarrio": [{"type": "sostenimiento", "personName": "Marta", "calling": "Primary President"}],
    }
    data.update(overrides)
    return SacramentMeeting.model_validate(data)


def test_agenda_pdf_renders():
    pdf = render_agenda_pdf(_meeting())
    assert pdf.startswith(b"%PDF")
    assert agenda_filename(_meeting()) == "Sacrament_Agenda_2025-06-01.pdf"


def test_agenda_pdf_handles_sparse_and_long_agendas():
    assert render_agenda_pdf(_meeting(preside=None, hymnSacramental=None, speakers=[])).startswith(b"%PDF")
    many = [{"type": "relevo", "personName": f"Member {i}", "calling": "Teacher"} for i in range(80)]
    assert render_agenda_pdf(_meeting(asuntosDelBarrio=many)).startswith(b"%PDF")


def test_agenda_summary_lists_speakers():
    summary = _meeting().summary()
    assert "Speakers: Ana, Luis" in summary
    assert "Sacramental Hymn: 193 - I Stand All Amazed" in summary
