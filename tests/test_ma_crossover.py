"""
Tests for ma_signal_bot/strategy/ma_crossover.py

Covers:
- ingest: history append/trim, one-tick lag, trade log prepend/trim, purity
- MovingAverageCrossover: window validation and state threading
- End-to-end warm-up scenario from an empty state
"""

from datetime import datetime, timedelta, timezone

import pytest

from ma_signal_bot.strategy.ma_crossover import (
    EngineState,
    MovingAverageCrossover,
    TickSnapshot,
    ingest,
)
from ma_signal_bot.strategy.signal import Signal, TradeRecord

T0 = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def _run(prices, state=None, strategy=None):
    """Feed prices one by one; return every snapshot."""
    strategy = strategy or MovingAverageCrossover()
    state = state or EngineState()
    snapshots = []
    for i, price in enumerate(prices):
        snap = strategy.generate(state, price, now=T0 + timedelta(seconds=i))
        state = snap.state
        snapshots.append(snap)
    return snapshots


class TestIngestHistory:
    """Rolling window: append at tail, cap at 20."""

    def test_first_sample_into_empty_history(self):
        snap = ingest((), (), 100.0, now=T0)
        assert snap.history == (100.0,)
        assert snap.short_ma is None
        assert snap.long_ma is None
        assert snap.signal is Signal.UNDETERMINED
        assert snap.trade_log == ()

    def test_history_never_exceeds_cap(self):
        snaps = _run([float(p) for p in range(1, 101)])
        assert all(len(s.history) <= 20 for s in snaps)
        assert snaps[-1].history == tuple(float(p) for p in range(81, 101))

    def test_last_element_is_latest_sample(self):
        prices = [5.0, 3.0, 8.0, 1.0] * 10
        for price, snap in zip(prices, _run(prices)):
            assert snap.history[-1] == price
            assert snap.price == price

    def test_inputs_are_not_mutated(self):
        history = [1.0, 2.0, 3.0]
        log = []
        ingest(history, log, 4.0, now=T0)
        assert history == [1.0, 2.0, 3.0]
        assert log == []


class TestOneTickLag:
    """Averages are computed from the history before the new sample."""

    def test_averages_ignore_current_sample(self):
        history = tuple([100.0] * 20)
        snap = ingest(history, (), 1_000_000.0, now=T0)
        assert snap.short_ma == 100.0
        assert snap.long_ma == 100.0
        assert snap.signal is Signal.UNDETERMINED

    def test_short_average_needs_five_prior_samples(self):
        snaps = _run([10.0] * 7)
        assert [s.short_ma for s in snaps] == [None] * 5 + [10.0, 10.0]


class TestTradeLog:
    """Newest first, capped at 5, only BUY/SELL produce records."""

    def test_buy_appends_record_with_sample_price(self):
        history = tuple([100.0] * 15 + [110.0] * 5)
        snap = ingest(history, (), 111.0, now=T0)
        assert snap.signal is Signal.BUY
        assert snap.trade_log == (TradeRecord(side=Signal.BUY, price=111.0, ts=T0),)
        assert snap.new_trade == snap.trade_log[0]

    def test_sell_appends_record(self):
        history = tuple([100.0] * 15 + [90.0] * 5)
        snap = ingest(history, (), 89.0, now=T0)
        assert snap.signal is Signal.SELL
        assert snap.trade_log[0].side is Signal.SELL
        assert snap.trade_log[0].price == 89.0

    def test_equal_averages_leave_log_alone(self):
        existing = (TradeRecord(side=Signal.SELL, price=1.0, ts=T0),)
        snap = ingest(tuple([50.0] * 20), existing, 50.0, now=T0)
        assert snap.signal is Signal.UNDETERMINED
        assert snap.trade_log == existing
        assert snap.new_trade is None

    def test_keeps_five_most_recent_newest_first(self):
        prices = [float(p) for p in range(1, 31)]
        snaps = _run(prices)
        final = snaps[-1]
        assert len(final.trade_log) == 5
        assert [t.price for t in final.trade_log] == [30.0, 29.0, 28.0, 27.0, 26.0]
        assert all(t.side is Signal.BUY for t in final.trade_log)
        assert all(len(s.trade_log) <= 5 for s in snaps)

    def test_default_timestamp_is_wall_clock(self):
        before = datetime.now(timezone.utc)
        snap = ingest(tuple([100.0] * 15 + [110.0] * 5), (), 1.0)
        assert snap.trade_log[0].ts >= before


class TestWarmupScenario:
    """[100]*19, then 110, then 90 from an empty state."""

    def test_scenario(self):
        snaps = _run([100.0] * 19 + [110.0, 90.0])

        assert all(s.long_ma is None for s in snaps[:20])
        assert all(s.signal is Signal.UNDETERMINED for s in snaps[:20])
        assert all(s.trade_log == () for s in snaps[:20])

        last = snaps[20]
        assert last.short_ma == pytest.approx(102.0)
        assert last.long_ma == pytest.approx(100.5)
        assert last.signal is Signal.BUY
        assert len(last.trade_log) == 1
        assert last.trade_log[0].side is Signal.BUY
        assert last.trade_log[0].price == 90.0
        assert last.history == tuple([100.0] * 18 + [110.0, 90.0])

    def test_next_tick_turns_to_sell(self):
        snaps = _run([100.0] * 19 + [110.0, 90.0, 90.0, 90.0, 90.0])
        # short window: 100, 110, 90, 90, 90
        assert snaps[-1].short_ma < snaps[-1].long_ma
        assert snaps[-1].signal is Signal.SELL
        assert [t.side for t in snaps[-1].trade_log][-1] is Signal.BUY


class TestMovingAverageCrossover:
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"short_window": 0},
            {"short_window": 20, "long_window": 20},
            {"short_window": 30, "long_window": 20},
            {"history_cap": 10},
            {"trade_log_cap": 0},
        ],
    )
    def test_rejects_invalid_settings(self, kwargs):
        with pytest.raises(ValueError):
            MovingAverageCrossover(**kwargs)

    def test_custom_windows(self):
        strategy = MovingAverageCrossover(short_window=2, long_window=3, history_cap=3, trade_log_cap=2)
        snaps = _run([1.0, 2.0, 3.0, 4.0, 5.0, 6.0], strategy=strategy)
        assert snaps[3].short_ma == 2.5
        assert snaps[3].long_ma == 2.0
        assert snaps[-1].history == (4.0, 5.0, 6.0)
        assert [t.price for t in snaps[-1].trade_log] == [6.0, 5.0]

    def test_snapshot_state_round_trip(self):
        snap = _run([1.0, 2.0])[-1]
        assert isinstance(snap, TickSnapshot)
        assert snap.state == EngineState(history=(1.0, 2.0), trade_log=())
