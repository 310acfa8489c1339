"""
Tests for spacetime hashing orchestration.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from sthash.core.errors import ConfigurationError, InvalidArgument
from sthash.models.dto import HashConfig, SpacetimeRecord
from sthash.services.perimeter import enumerate_perimeter
from sthash.services.quantizer import quantify_duration
from sthash.services.spacetime_hasher import (
    count_tokens,
    count_tokens_for_records,
    hash_record,
    hash_records,
    hash_spacetime,
)


class TestHashSpacetime:
    """Tests for hash_spacetime."""

    def test_golden_vector(self, golden_tokens):
        assert hash_spacetime("abc", 100, 700, 25.123456, 122.123000, 10, -3, 1) == golden_tokens

    def test_deterministic(self):
        args = ("k", 1581378989, 1581382589, 37.460459, 126.44068, 5, -3, 2)
        assert hash_spacetime(*args) == hash_spacetime(*args)

    @pytest.mark.parametrize("spread_out", [0, 1, 2, 3])
    def test_output_length(self, spread_out):
        tokens = hash_spacetime("k", 1000, 5000, 37.46, 126.44, 15, -3, spread_out)
        expected = len(quantify_duration(1000, 5000, 15)) * len(
            enumerate_perimeter(0, 0, 1, 1, spread_out)
        )
        assert len(tokens) == expected

    def test_spread_zero_duplicates_center_token(self):
        tokens = hash_spacetime("abc", 600, 600, 25.123456, 122.123, 10, -3, 0)
        assert len(tokens) == 2
        assert tokens[0] == tokens[1]

    def test_executor_keeps_canonical_order(self, golden_tokens):
        with ThreadPoolExecutor(max_workers=3) as executor:
            tokens = hash_spacetime("abc", 100, 700, 25.123456, 122.123, 10, -3, 1, executor=executor)
        assert tokens == golden_tokens

    def test_same_cell_overlapping_time_shares_tokens(self):
        a = hash_spacetime("k", 100, 700, 25.1231, 122.1231, 10, -3, 1)
        b = hash_spacetime("k", 650, 1300, 25.1239, 122.1238, 10, -3, 1)
        assert set(a) & set(b)

    def test_adjacent_cells_share_an_edge_token(self):
        # Integer grid so that both squares compute their shared edge exactly
        a = hash_spacetime("k", 0, 0, 25.5, 122.7, 10, 0, 1)
        b = hash_spacetime("k", 0, 0, 26.3, 122.2, 10, 0, 1)
        assert set(a) & set(b)

    def test_distant_records_share_nothing(self):
        a = hash_spacetime("k", 0, 3600, 10.5, 100.5, 10, 0, 1)
        b = hash_spacetime("k", 0, 3600, 50.5, 100.5, 10, 0, 1)
        assert not set(a) & set(b)

    def test_disjoint_times_share_nothing(self):
        a = hash_spacetime("k", 0, 500, 25.1231, 122.1231, 10, -3, 1)
        b = hash_spacetime("k", 7200, 7800, 25.1231, 122.1231, 10, -3, 1)
        assert not set(a) & set(b)

    def test_different_keys_share_nothing(self):
        a = hash_spacetime("k1", 100, 700, 25.1231, 122.1231, 10, -3, 1)
        b = hash_spacetime("k2", 100, 700, 25.1231, 122.1231, 10, -3, 1)
        assert not set(a) & set(b)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"time_step_minutes": 0},
            {"spread_out": -1},
            {"lat": float("nan")},
            {"lng": float("inf")},
            {"begin": 800},
        ],
    )
    def test_invalid_arguments(self, overrides):
        args = dict(key="k", begin=100, end=700, lat=25.1, lng=122.1,
                    time_step_minutes=10, latlng_precision=-3, spread_out=1)
        args.update(overrides)
        with pytest.raises(InvalidArgument):
            hash_spacetime(**args)

    def test_empty_key(self):
        with pytest.raises(ConfigurationError):
            hash_spacetime("", 100, 700, 25.1, 122.1, 10, -3, 1)


class TestHashRecord:
    """Tests for the record/config wrappers."""

    @pytest.fixture
    def config(self):
        return HashConfig.build(key="abc", time_step_minutes=10, latlng_precision=-3, spread_out=1)

    def test_matches_positional_call(self, config, golden_tokens):
        record = SpacetimeRecord.build(begin=100, end=700, lat=25.123456, lng=122.123)
        assert hash_record(record, config) == golden_tokens

    def test_batch_keeps_input_order(self, config, golden_tokens):
        records = [
            SpacetimeRecord.build(begin=0, end=0, lat=37.46, lng=126.44),
            SpacetimeRecord.build(begin=100, end=700, lat=25.123456, lng=122.123),
        ]
        result = hash_records(records, config)
        assert len(result) == 2
        assert result[1] == golden_tokens
        assert len(result[0]) == 8

    def test_empty_batch(self, config):
        assert hash_records([], config) == []


class TestCountTokens:
    """Tests for the closed-form token count used to bound requests."""

    @pytest.mark.parametrize(
        "begin,end,step,spread_out",
        [
            (100, 700, 10, 1),
            (600, 600, 10, 0),
            (601, 601, 10, 2),
            (1581378989, 1581465389, 15, 3),
            (0, 3600, 60, 0),
        ],
    )
    def test_matches_hashed_length(self, begin, end, step, spread_out):
        config = HashConfig.build(key="k", time_step_minutes=step, latlng_precision=-3, spread_out=spread_out)
        record = SpacetimeRecord.build(begin=begin, end=end, lat=37.46, lng=126.44)
        assert count_tokens(record, config) == len(hash_record(record, config))

    def test_sums_over_records(self):
        config = HashConfig.build(key="k", time_step_minutes=10, latlng_precision=-3, spread_out=1)
        records = [
            SpacetimeRecord.build(begin=100, end=700, lat=1.0, lng=1.0),
            SpacetimeRecord.build(begin=0, end=0, lat=1.0, lng=1.0),
        ]
        assert count_tokens_for_records(records, config) == 24 + 8

    def test_large_spread_out_is_counted_without_hashing(self):
        config = HashConfig.build(key="k", time_step_minutes=10, latlng_precision=-3, spread_out=10**9)
        record = SpacetimeRecord.build(begin=0, end=0, lat=1.0, lng=1.0)
        assert count_tokens(record, config) == 8 * 10**9

    def test_overflowing_step(self):
        config = HashConfig.build(key="k", time_step_minutes=1e-300, latlng_precision=-3, spread_out=1)
        record = SpacetimeRecord.build(begin=0, end=1e300, lat=1.0, lng=1.0)
        with pytest.raises(InvalidArgument, match="too small"):
            count_tokens(record, config)
