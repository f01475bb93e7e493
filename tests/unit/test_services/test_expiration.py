"""
Expiration Policy Unit Tests
"""

from datetime import datetime, timedelta, timezone

from kvcache.domain.key_value import KeyValueModel
from kvcache.services.expiration import (
    DEFAULT_EXPIRE_DURATION,
    apply_default_times,
    expired_filter,
    is_expired,
)

NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


class TestApplyDefaultTimes:
    """Default timestamp derivation"""

    def test_fills_both_timestamps(self):
        record = apply_default_times(KeyValueModel(key="k", value=1), now=NOW)

        assert record.created_at == NOW
        assert record.expire_at == NOW + timedelta(seconds=60)

    def test_default_duration_is_sixty_seconds(self):
        assert DEFAULT_EXPIRE_DURATION == timedelta(seconds=60)

    def test_keeps_future_expiry(self):
        expire_at = NOW + timedelta(hours=3)
        record = apply_default_times(
            KeyValueModel(key="k", expire_at=expire_at), now=NOW
        )

        assert record.expire_at == expire_at

    def test_replaces_past_expiry(self):
        record = apply_default_times(
            KeyValueModel(key="k", expire_at=NOW - timedelta(seconds=1)), now=NOW
        )

        assert record.expire_at == NOW + timedelta(seconds=60)

    def test_expiry_derives_from_supplied_created_at(self):
        created_at = NOW - timedelta(seconds=10)
        record = apply_default_times(
            KeyValueModel(key="k", created_at=created_at), now=NOW
        )

        assert record.created_at == created_at
        assert record.expire_at == created_at + timedelta(seconds=60)

    def test_custom_duration(self):
        record = apply_default_times(
            KeyValueModel(key="k"), now=NOW, default_expire=timedelta(minutes=5)
        )

        assert record.expire_at == NOW + timedelta(minutes=5)

    def test_does_not_mutate_input(self):
        original = KeyValueModel(key="k")
        apply_default_times(original, now=NOW)

        assert original.created_at is None
        assert original.expire_at is None

    def test_uses_current_time_when_now_omitted(self):
        before = datetime.now(timezone.utc)
        record = apply_default_times(KeyValueModel(key="k"))

        assert record.created_at >= before
        assert record.expire_at > record.created_at


class TestIsExpired:
    """Liveness check on read"""

    def test_future_expiry_is_live(self):
        record = KeyValueModel(key="k", expire_at=NOW + timedelta(seconds=1))
        assert is_expired(record, NOW) is False

    def test_past_expiry_is_expired(self):
        record = KeyValueModel(key="k", expire_at=NOW - timedelta(seconds=1))
        assert is_expired(record, NOW) is True

    def test_expiry_equal_to_now_is_still_live(self):
        record = KeyValueModel(key="k", expire_at=NOW)
        assert is_expired(record, NOW) is False

    def test_unset_expiry_is_expired(self):
        assert is_expired(KeyValueModel(key="k"), NOW) is True


def test_expired_filter_matches_at_or_before_now_and_unset():
    assert expired_filter(NOW) == {
        "$or": [
            {"expireAt": {"$lte": NOW}},
            {"expireAt": None},
        ]
    }
