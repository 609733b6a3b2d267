from __future__ import annotations  # Evaluation report schema

from enum import Enum
from typing import List

from pydantic import BaseModel, Field

CRITERIA = ("codingSkills", "communication", "algorithmicThinking")


class Recommendation(str, Enum):
    STRONG_HIRE = "Strong Hire"
    HIRE = "Hire"
    MAYBE = "Maybe"
    NO_HIRE = "No Hire"


class CriterionGrade(BaseModel):  # Score must be a true integer in 1..10, never coerced
    score: int = Field(strict=True, ge=1, le=10)
    feedback: str


class Grades(BaseModel):  # Fixed criterion set, all required
    codingSkills: CriterionGrade
    communication: CriterionGrade
    algorithmicThinking: CriterionGrade


class EvaluationReport(BaseModel):  # Structured evaluation returned to the display layer
    summary: str
    grades: Grades
    strengths: List[str]
    areasForImprovement: List[str]
    recommendation: Recommendation
    recommendationReasoning: str


__all__ = ["CRITERIA", "CriterionGrade", "EvaluationReport", "Grades", "Recommendation"]
