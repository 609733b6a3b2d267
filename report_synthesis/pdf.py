from __future__ import annotations  # PDF rendering for evaluation reports

import os
from datetime import datetime, timezone
from typing import Any, Iterable, Optional, Tuple

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from .models import CRITERIA, EvaluationReport, Recommendation

DEJAVU_SANS = "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"  # System font
DEJAVU_SANS_BOLD = "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf"  # System font

ACCENT = (45, 115, 245)  # Palette accent
TEXT = (34, 34, 34)  # Primary text color
MUTED = (100, 100, 100)  # Secondary text color
RULE = (230, 230, 230)  # Divider color

CRITERION_LABELS = {
    "codingSkills": "Coding Skills",
    "communication": "Communication",
    "algorithmicThinking": "Algorithmic Thinking",
}

RECOMMENDATION_COLORS = {
    Recommendation.STRONG_HIRE: (22, 128, 61),
    Recommendation.HIRE: (37, 99, 235),
    Recommendation.MAYBE: (202, 138, 4),
    Recommendation.NO_HIRE: (185, 28, 28),
}


class EvaluationPDF(FPDF):  # PDF with banner header and paginated footer
    def __init__(self, title: str) -> None:
        super().__init__()
        self.title_text = title
        self._font_regular = "Helvetica"
        self._font_bold = "Helvetica"
        self._unicode_fonts = False

    def use_unicode_fonts(self) -> None:
        if not (os.path.exists(DEJAVU_SANS) and os.path.exists(DEJAVU_SANS_BOLD)):
            return
        self.add_font("DejaVu", "", DEJAVU_SANS)
        self.add_font("DejaVu", "B", DEJAVU_SANS_BOLD)
        self._font_regular = "DejaVu"
        self._font_bold = "DejaVu"
        self._unicode_fonts = True

    def clean(self, value: Any) -> str:  # Core fonts only cover latin-1
        text = "" if value is None else str(value)
        if self._unicode_fonts:
            return text
        return text.replace("•", "-").encode("latin-1", "replace").decode("latin-1")

    def paragraph(self, text: str, *, size: int = 11, height: float = 6, color: Tuple[int, int, int] = TEXT) -> None:
        self.set_x(self.l_margin)
        self.set_text_color(*color)
        self.set_font(self._font_regular, "", size)
        self.multi_cell(0, height, self.clean(text), new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    def header(self) -> None:
        self.set_fill_color(*ACCENT)
        self.rect(0, 0, self.w, 18, style="F")
        self.set_text_color(255, 255, 255)
        self.set_font(self._font_bold, "B", 15)
        self.set_xy(self.l_margin, 5)
        self.cell(0, 8, self.clean(self.title_text), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        self.set_text_color(*TEXT)
        self.set_y(24)

    def footer(self) -> None:
        self.set_y(-12)
        self.set_draw_color(*RULE)
        self.set_line_width(0.2)
        self.line(self.l_margin, self.get_y(), self.w - self.r_margin, self.get_y())
        self.set_text_color(120, 120, 120)
        self.set_font(self._font_regular, "", 9)
        self.cell(0, 10, f"Page {self.page_no()}/{{nb}}", align="R")


def _section_title(pdf: EvaluationPDF, title: str) -> None:  # Render styled section title
    pdf.ln(2)
    pdf.set_x(pdf.l_margin)
    pdf.set_text_color(*TEXT)
    pdf.set_font(pdf._font_bold, "B", 13)
    pdf.cell(0, 9, pdf.clean(title), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_draw_color(*RULE)
    pdf.set_line_width(0.2)
    y = pdf.get_y()
    pdf.line(pdf.l_margin, y, pdf.w - pdf.r_margin, y)
    pdf.ln(2)


def _bullets(pdf: EvaluationPDF, items: Iterable[str]) -> None:
    rendered = False
    for item in items:
        pdf.paragraph(f"• {item}")
        rendered = True
    if not rendered:
        pdf.paragraph("-", color=MUTED)


def _grades(pdf: EvaluationPDF, report: EvaluationReport) -> None:  # Score row plus feedback per criterion
    for key in CRITERIA:
        grade = getattr(report.grades, key)
        pdf.set_x(pdf.l_margin)
        pdf.set_font(pdf._font_bold, "B", 11)
        pdf.set_text_color(*TEXT)
        pdf.cell(120, 7, pdf.clean(CRITERION_LABELS[key]))
        pdf.set_text_color(*ACCENT)
        pdf.cell(0, 7, f"{grade.score}/10", align="R", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.paragraph(grade.feedback, size=10, height=5, color=MUTED)
        pdf.ln(1)


def generate_report_pdf(
    report: EvaluationReport,
    *,
    title: str = "Interview Evaluation Report",
    generated_at: Optional[datetime] = None,
) -> bytes:  # Build PDF payload for an evaluation report
    pdf = EvaluationPDF(title)
    pdf.use_unicode_fonts()
    pdf.alias_nb_pages()
    pdf.set_margins(15, 22, 15)
    pdf.set_auto_page_break(auto=True, margin=15)
    pdf.add_page()

    stamp = (generated_at or datetime.now(timezone.utc)).strftime("%d %b %Y, %H:%M UTC")
    pdf.paragraph(f"Generated {stamp}", size=9, color=MUTED)

    _section_title(pdf, "Recommendation")
    pdf.set_x(pdf.l_margin)
    pdf.set_font(pdf._font_bold, "B", 14)
    pdf.set_text_color(*RECOMMENDATION_COLORS[report.recommendation])
    pdf.cell(0, 9, pdf.clean(report.recommendation.value), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.paragraph(report.recommendationReasoning)

    _section_title(pdf, "Summary")
    pdf.paragraph(report.summary)

    _section_title(pdf, "Grades")
    _grades(pdf, report)

    _section_title(pdf, "Strengths")
    _bullets(pdf, report.strengths)

    _section_title(pdf, "Areas for Improvement")
    _bullets(pdf, report.areasForImprovement)

    return bytes(pdf.output())


__all__ = ["generate_report_pdf"]
