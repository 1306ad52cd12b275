from collections import Counter
from datetime import datetime, timezone
from typing import Iterable, List, Optional
from pydantic import BaseModel
from .models import AuditEntry
from .strength import score_password_strength

STALE_AFTER_DAYS = 90
WEAK_SCORE_THRESHOLD = 1
ISSUE_PENALTY = 10


def _as_utc(moment: datetime) -> datetime:
    # naive timestamps are taken to be UTC, as the server stores them
    return moment if moment.tzinfo is not None else moment.replace(tzinfo=timezone.utc)


class SecurityAnalysis(BaseModel):
    score: int
    weak_passwords: List[AuditEntry] = []
    reused_passwords: List[AuditEntry] = []
    old_passwords: List[AuditEntry] = []
    total_issues: int = 0


def calculate_security_score(entries: Iterable[AuditEntry], now: Optional[datetime] = None) -> SecurityAnalysis:
    """Score a vault from 0 to 100, losing ten points per issue found.

    An entry can count more than once: weak, reused and old are tallied
    independently. Entries whose password could not be decrypted only take
    part in the staleness check.
    """
    entries = list(entries)
    now = _as_utc(now) if now else datetime.now(timezone.utc)

    readable = [e for e in entries if e.password]
    weak = [e for e in readable if score_password_strength(e.password).score <= WEAK_SCORE_THRESHOLD]

    counts = Counter(e.password for e in readable)
    reused = [e for e in readable if counts[e.password] > 1]

    old = [e for e in entries if (now - _as_utc(e.updated_at)).days > STALE_AFTER_DAYS]

    total_issues = len(weak) + len(reused) + len(old)
    score = max(0, min(100, 100 - total_issues * ISSUE_PENALTY))
    return SecurityAnalysis(
        score=score,
        weak_passwords=weak,
        reused_passwords=reused,
        old_passwords=old,
        total_issues=total_issues,
    )


def score_label(score: int) -> str:
    if score >= 80:
        return "Excellent"
    if score >= 60:
        return "Good"
    if score >= 40:
        return "Fair"
    return "Poor"
