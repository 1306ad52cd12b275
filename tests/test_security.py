from datetime import datetime, timedelta, timezone

from keyfort.core.models import AuditEntry
from keyfort.core.security import calculate_security_score, score_label

NOW = datetime(2026, 6, 1, 12, 0, 0)


def _entry(item_id, password, age_days=0, title=None):
    return AuditEntry(
        item_id=item_id,
        title=title or f"item {item_id}",
        password=password,
        updated_at=NOW - timedelta(days=age_days),
    )


def test_empty_vault_scores_full_marks():
    result = calculate_security_score([], now=NOW)
    assert result.score == 100
    assert result.total_issues == 0


def test_strong_unique_fresh_passwords_have_no_issues():
    entries = [_entry(1, "Vq8!mZr2#Lp0Xe4$"), _entry(2, "Tn5@cW9^Hb1&Kd7*")]
    result = calculate_security_score(entries, now=NOW)
    assert result.score == 100
    assert result.weak_passwords == []


def test_weak_passwords_are_flagged():
    entries = [_entry(1, "abc"), _entry(2, "password1"), _entry(3, "Vq8!mZr2#Lp0Xe4$")]
    result = calculate_security_score(entries, now=NOW)
    assert [e.item_id for e in result.weak_passwords] == [1, 2]
    assert result.score == 80


def test_reuse_is_detected_on_plaintext():
    entries = [_entry(1, "Vq8!mZr2#Lp0Xe4$"), _entry(2, "Vq8!mZr2#Lp0Xe4$"), _entry(3, "Tn5@cW9^Hb1&Kd7*")]
    result = calculate_security_score(entries, now=NOW)
    assert [e.item_id for e in result.reused_passwords] == [1, 2]
    assert result.total_issues == 2


def test_old_passwords_after_ninety_days():
    entries = [_entry(1, "Vq8!mZr2#Lp0Xe4$", age_days=90), _entry(2, "Tn5@cW9^Hb1&Kd7*", age_days=91)]
    result = calculate_security_score(entries, now=NOW)
    assert [e.item_id for e in result.old_passwords] == [2]


def test_issues_accumulate_per_category():
    # weak, reused and old all at once
    entries = [_entry(1, "abc", age_days=200), _entry(2, "abc", age_days=200)]
    result = calculate_security_score(entries, now=NOW)
    assert result.total_issues == 6
    assert result.score == 40


def test_score_never_negative():
    entries = [_entry(i, "abc", age_days=365) for i in range(10)]
    assert calculate_security_score(entries, now=NOW).score == 0


def test_undecryptable_entries_only_checked_for_age():
    entries = [_entry(1, None, age_days=100), _entry(2, None)]
    result = calculate_security_score(entries, now=NOW)
    assert result.weak_passwords == []
    assert result.reused_passwords == []
    assert [e.item_id for e in result.old_passwords] == [1]


def test_timezone_aware_timestamps():
    fresh = AuditEntry(item_id=1, title="Bank", password="Vq8!mZr2#Lp0Xe4$", updated_at=datetime.now(timezone.utc))
    result = calculate_security_score([fresh])
    assert result.old_passwords == []
    assert result.score == 100


def test_naive_and_aware_timestamps_mix():
    aware_now = NOW.replace(tzinfo=timezone.utc)
    entries = [
        _entry(1, "Vq8!mZr2#Lp0Xe4$", age_days=100),
        AuditEntry(item_id=2, title="Shop", password="Tn5@cW9^Hb1&Kd7*", updated_at=aware_now - timedelta(days=5)),
    ]
    result = calculate_security_score(entries, now=aware_now)
    assert [e.item_id for e in result.old_passwords] == [1]


def test_score_labels():
    assert score_label(100) == "Excellent"
    assert score_label(80) == "Excellent"
    assert score_label(79) == "Good"
    assert score_label(60) == "Good"
    assert score_label(40) == "Fair"
    assert score_label(39) == "Poor"
