from datetime import datetime, timedelta, timezone

from app.services.reveal_clock import RevealClock

NOW = datetime(2025, 12, 19, 18, 0, tzinfo=timezone.utc)


def fixed_now():
    return NOW


def test_no_reveal_time_means_always_visible():
    clock = RevealClock(None, now=fixed_now)
    assert clock.results_visible() is True
    assert clock.voting_locked() is False


def test_results_hidden_before_reveal():
    clock = RevealClock(NOW + timedelta(minutes=1), lock_after_reveal=True, now=fixed_now)
    assert clock.results_visible() is False
    assert clock.voting_locked() is False


def test_results_visible_at_reveal_time():
    clock = RevealClock(NOW, now=fixed_now)
    assert clock.results_visible() is True


def test_voting_stays_open_after_reveal_by_default():
    clock = RevealClock(NOW - timedelta(hours=1), now=fixed_now)
    assert clock.voting_locked() is False


def test_lock_flag_closes_voting_after_reveal():
    clock = RevealClock(NOW - timedelta(hours=1), lock_after_reveal=True, now=fixed_now)
    status = clock.status()
    assert status.results_visible is True
    assert status.voting_locked is True


def test_naive_reveal_time_is_utc():
    clock = RevealClock(datetime(2025, 12, 19, 18, 0), now=fixed_now)
    assert clock.reveal_at == NOW
    assert clock.results_visible() is True
