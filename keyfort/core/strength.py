import math
import re
from pydantic import BaseModel

STRENGTH_LABELS = ["Very Weak", "Weak", "Fair", "Strong", "Very Strong"]
MAX_TALLY = 6


class StrengthAssessment(BaseModel):
    score: int
    label: str
    percentage: int


def score_password_strength(password: str) -> StrengthAssessment:
    """Bucket a password into one of five strength levels.

    Three length thresholds (8, 12, 16) and three variety checks (mixed case,
    digit, anything outside ``[A-Za-z0-9]``) each add one point; the tally is
    then scaled from 0..6 down to 0..4.
    """
    if not password:
        return StrengthAssessment(score=0, label=STRENGTH_LABELS[0], percentage=0)

    tally = 0
    if len(password) >= 8: tally += 1
    if len(password) >= 12: tally += 1
    if len(password) >= 16: tally += 1
    if re.search(r"[a-z]", password) and re.search(r"[A-Z]", password):
        tally += 1
    if re.search(r"[0-9]", password):
        tally += 1
    if re.search(r"[^a-zA-Z0-9]", password):
        tally += 1

    normalized = math.floor(min(4, tally / MAX_TALLY * 4))
    return StrengthAssessment(
        score=normalized,
        label=STRENGTH_LABELS[normalized],
        percentage=normalized * 25,
    )
