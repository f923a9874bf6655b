# utils/pdf_export.py
import io
from typing import Optional

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from models.sacrament_meeting import Hymn, SacramentMeeting

MARGIN = 15 * mm
VALUE_X = 60 * mm
BOTTOM = 20 * mm


def agenda_filename(meeting: SacramentMeeting) -> str:
    return f"Sacrament_Agenda_{meeting.date.strftime('%Y-%m-%d')}.pdf"


def _hymn(h: Optional[Hymn]) -> str:
    return (h.label() if h else "") or "-"


class _Page:
    """Top-down line writer over a reportlab canvas, starting a new page when full."""

    def __init__(self, c: canvas.Canvas):
        self.c = c
        self.width, self.height = A4
        self.y = self.height - 20 * mm

    def advance(self, step: float) -> None:
        self.y -= step
        if self.y < BOTTOM:
            self.c.showPage()
            self.y = self.height - 20 * mm

    def centered(self, text: str, size: int, bold: bool = False, step: float = 10 * mm) -> None:
        self.c.setFont("Helvetica-Bold" if bold else "Helvetica", size)
        self.c.drawCentredString(self.width / 2, self.y, text)
        self.advance(step)

    def line(self, text: str, size: int = 12, x: float = MARGIN, bold: bool = False, step: float = 8 * mm) -> None:
        self.c.setFont("Helvetica-Bold" if bold else "Helvetica", size)
        self.c.drawString(x, self.y, text)
        self.advance(step)

    def field(self, label: str, value: str, step: float = 8 * mm) -> None:
        self.c.setFont("Helvetica-Bold", 12)
        self.c.drawString(MARGIN, self.y, label)
        self.c.setFont("Helvetica", 12)
        self.c.drawString(VALUE_X, self.y, value or "-")
        self.advance(step)


def render_agenda_pdf(meeting: SacramentMeeting) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.setTitle("Sacrament Meeting Agenda")
    page = _Page(c)

    page.centered("Sacrament Meeting Agenda", 18, bold=True)
    page.centered(meeting.date.strftime("%B %d, %Y"), 12, step=15 * mm)

    page.field("Presiding:", meeting.preside or "")
    page.field("Conducting:", meeting.dirige or "")
    if meeting.pianist:
        page.field("Pianist:", meeting.pianist)
    if meeting.music_director:
        page.field("Music Director:", meeting.music_director)
    page.advance(4 * mm)

    if meeting.authorities:
        page.line(f"Welcome to visiting authorities: {meeting.authorities}", size=10, step=10 * mm)

    page.field("Opening Hymn:", _hymn(meeting.opening_hymn))
    page.field("Opening Prayer:", meeting.opening_prayer or "By assignment", step=12 * mm)

    page.line("Ward Business", bold=True)
    if meeting.asuntos_del_barrio:
        for item in meeting.asuntos_del_barrio:
            kind = "Sustaining" if item.type == "sostenimiento" else "Release"
            page.line(f"{kind}: {item.person_name or ''} as {item.calling or ''}", x=MARGIN + 5 * mm, step=6 * mm)
    else:
        page.line("None", x=MARGIN + 5 * mm, step=6 * mm)
    page.advance(6 * mm)

    page.field("Sacrament Hymn:", _hymn(meeting.hymn_sacramental))
    page.line("Administration of the Sacrament", size=10, step=12 * mm)

    page.line("Speakers", bold=True)
    for speaker in meeting.speakers:
        page.line(speaker, x=MARGIN + 5 * mm, step=7 * mm)
    page.advance(5 * mm)

    page.field("Closing Hymn:", _hymn(meeting.hymn_final))
    page.field("Closing Prayer:", meeting.closing_prayer or "")

    c.showPage()
    c.save()
    return buf.getvalue()
