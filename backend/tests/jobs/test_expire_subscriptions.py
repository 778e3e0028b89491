"""Tests for the subscription expiry sweep."""

import logging
from datetime import timedelta

from click.testing import CliRunner

from quizbank.common.time import utcnow
from quizbank.jobs import run as run_module
from quizbank.jobs.subscriptions import expire_subscriptions
from quizbank.models.user import UserSubscription


def add_subscription(db, user, expire_at, is_active=True, is_deleted=False):
    subscription = UserSubscription(
        user_id=user.id, expire_at=expire_at, is_active=is_active, is_deleted=is_deleted
    )
    db.add(subscription)
    db.commit()
    return subscription


def test_expires_only_past_active_subscriptions(db, test_user):
    now = utcnow()
    expired = add_subscription(db, test_user, now - timedelta(minutes=1))
    current = add_subscription(db, test_user, now + timedelta(days=1))
    deleted = add_subscription(db, test_user, now - timedelta(days=1), is_deleted=True)

    assert expire_subscriptions(db, now=now) == 1

    for subscription in (expired, current, deleted):
        db.refresh(subscription)
    assert expired.is_active is False
    assert current.is_active is True
    assert deleted.is_active is True


def test_sweep_is_idempotent(db, test_user):
    now = utcnow()
    add_subscription(db, test_user, now - timedelta(hours=1))

    assert expire_subscriptions(db, now=now) == 1
    assert expire_subscriptions(db, now=now) == 0


def test_sweep_logs_expired_count(db, test_user, caplog):
    now = utcnow()
    add_subscription(db, test_user, now - timedelta(hours=1))
    add_subscription(db, test_user, now - timedelta(hours=2))
    caplog.set_level(logging.INFO, logger="quizbank.jobs.subscriptions")

    expire_subscriptions(db, now=now)
    expire_subscriptions(db, now=now)

    records = [r for r in caplog.records if getattr(r, "event", None) == "subscriptions_expired"]
    assert len(records) == 1
    assert records[0].count == 2


def test_cli_runs_job(db, test_user, monkeypatch):
    add_subscription(db, test_user, utcnow() - timedelta(hours=1))
    monkeypatch.setattr(run_module, "setup_logging", lambda: None)

    result = CliRunner().invoke(run_module.run, ["expire_subscriptions"])

    assert result.exit_code == 0, result.output
    assert "Job completed: 1" in result.output


def test_cli_rejects_unknown_job(monkeypatch):
    monkeypatch.setattr(run_module, "setup_logging", lambda: None)

    result = CliRunner().invoke(run_module.run, ["unknown_job"])

    assert result.exit_code != 0
