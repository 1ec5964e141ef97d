from datetime import datetime, timedelta

import pytest
from pytz import timezone

from conftest import MADRID, T0, ConstantProvider, ScriptedProvider
from lunartrack.cache import TrackCache
from lunartrack.compute import InvalidConfiguration, PositionComputationFailed
from lunartrack.models import ObserverLocation, TrackConfig

HOURLY_4H = TrackConfig(interval_minutes=60, window_hours_each_side=4)


class TestTrackCache:
    def test_hit_on_equal_inputs(self):
        """Equal but distinct input objects share one computation."""
        provider = ConstantProvider()
        cache = TrackCache(provider)
        first = cache.get(T0, MADRID, HOURLY_4H)
        second = cache.get(
            T0,
            ObserverLocation(latitude_deg=40.4168, longitude_deg=-3.7038),
            TrackConfig(interval_minutes=60, window_hours_each_side=4),
        )
        assert second is first
        assert provider.calls == 9
        assert len(cache) == 1

    def test_mapping_and_dataclass_config_share_key(self):
        provider = ConstantProvider()
        cache = TrackCache(provider)
        cache.get(T0, MADRID, HOURLY_4H)
        cache.get(T0, MADRID, {"interval_minutes": 60, "window_hours_each_side": 4})
        assert provider.calls == 9

    def test_same_instant_in_other_zone_hits(self):
        provider = ConstantProvider()
        cache = TrackCache(provider)
        cache.get(T0, MADRID, HOURLY_4H)
        madrid_time = timezone("Europe/Madrid").localize(datetime(2024, 6, 21, 20, 0))
        cache.get(madrid_time, MADRID, HOURLY_4H)
        assert provider.calls == 9

    def test_different_inputs_miss(self):
        provider = ConstantProvider()
        cache = TrackCache(provider)
        cache.get(T0, MADRID, HOURLY_4H)
        cache.get(T0 + timedelta(minutes=1), MADRID, HOURLY_4H)
        cache.get(T0, ObserverLocation(51.5, -0.1), HOURLY_4H)
        assert provider.calls == 27
        assert len(cache) == 3

    def test_least_recently_used_evicted(self):
        cache = TrackCache(ConstantProvider(), maxsize=2)
        first = T0
        second = T0 + timedelta(hours=1)
        third = T0 + timedelta(hours=2)
        cache.get(first, MADRID, HOURLY_4H)
        cache.get(second, MADRID, HOURLY_4H)
        cache.get(first, MADRID, HOURLY_4H)
        cache.get(third, MADRID, HOURLY_4H)
        assert TrackCache.key(first, MADRID, HOURLY_4H) in cache
        assert TrackCache.key(second, MADRID, HOURLY_4H) not in cache
        assert TrackCache.key(third, MADRID, HOURLY_4H) in cache

    def test_size_bounded(self):
        """The cache never holds more than maxsize tracks."""
        provider = ConstantProvider()
        cache = TrackCache(provider, maxsize=3)
        for hour in range(10):
            cache.get(T0 + timedelta(hours=hour), MADRID, HOURLY_4H)
            assert len(cache) <= 3
        assert len(cache) == 3
        assert provider.calls == 90

    def test_failure_not_cached(self):
        fail_at = T0 + timedelta(hours=1)
        cache = TrackCache(ScriptedProvider([1] * 9, fail_at=fail_at))
        with pytest.raises(PositionComputationFailed):
            cache.get(T0 + timedelta(hours=4), MADRID, HOURLY_4H)
        assert len(cache) == 0

    def test_invalid_config(self):
        cache = TrackCache(ConstantProvider())
        with pytest.raises(InvalidConfiguration):
            cache.get(T0, MADRID, {"interval_minutes": 0})

    def test_clear(self):
        provider = ConstantProvider()
        cache = TrackCache(provider)
        cache.get(T0, MADRID, HOURLY_4H)
        cache.clear()
        cache.get(T0, MADRID, HOURLY_4H)
        assert provider.calls == 18

    def test_maxsize_must_be_positive(self):
        with pytest.raises(ValueError):
            TrackCache(ConstantProvider(), maxsize=0)
