from __future__ import annotations  # Re-export report_synthesis public API

from .extraction import extract_report, locate_object, strip_fence
from .generator import GatewayReportGenerator, ReportGenerator
from .models import CRITERIA, CriterionGrade, EvaluationReport, Grades, Recommendation
from .pdf import generate_report_pdf
from .synthesizer import CODE_HEADER, ReportSynthesizer, SynthesisOutcome, SynthesisStage, build_context, build_prompt

__all__ = [
    "CODE_HEADER",
    "CRITERIA",
    "CriterionGrade",
    "EvaluationReport",
    "GatewayReportGenerator",
    "Grades",
    "Recommendation",
    "ReportGenerator",
    "ReportSynthesizer",
    "SynthesisOutcome",
    "SynthesisStage",
    "build_context",
    "build_prompt",
    "extract_report",
    "generate_report_pdf",
    "locate_object",
    "strip_fence",
]
