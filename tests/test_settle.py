import asyncio

import pytest

from tubefinder.services.settle import Settled, all_failed, failures, settle_all, successes


async def _value(value, delay=0.0):
    await asyncio.sleep(delay)
    return value


async def _fail(message, delay=0.0):
    await asyncio.sleep(delay)
    raise ValueError(message)


class TestSettleAll:
    @pytest.mark.asyncio
    async def test_collects_successes_and_failures(self):
        outcomes = await settle_all({"a": _value(1), "b": _fail("boom"), "c": _value(3)})
        assert outcomes["a"] == Settled(value=1)
        assert not outcomes["b"].ok
        assert str(outcomes["b"].error) == "boom"
        assert successes(outcomes) == {"a": 1, "c": 3}
        assert list(failures(outcomes)) == ["b"]

    @pytest.mark.asyncio
    async def test_early_failure_does_not_cancel_slow_success(self):
        outcomes = await settle_all({"fast_fail": _fail("nope"), "slow": _value("done", delay=0.05)})
        assert outcomes["slow"].value == "done"

    @pytest.mark.asyncio
    async def test_runs_concurrently(self):
        started = []

        async def track(name):
            started.append(name)
            await asyncio.sleep(0.05)
            return name

        loop = asyncio.get_running_loop()
        begin = loop.time()
        await settle_all({str(i): track(str(i)) for i in range(4)})
        assert len(started) == 4
        assert loop.time() - begin < 0.15

    @pytest.mark.asyncio
    async def test_all_failed_is_conjunction(self):
        outcomes = await settle_all({"a": _fail("x"), "b": _fail("y")})
        assert all_failed(outcomes)
        mixed = await settle_all({"a": _fail("x"), "b": _value(None)})
        assert not all_failed(mixed)

    @pytest.mark.asyncio
    async def test_none_is_a_success(self):
        outcomes = await settle_all({"a": _value(None)})
        assert outcomes["a"].ok

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self):
        async def cancelled():
            raise asyncio.CancelledError()

        with pytest.raises(asyncio.CancelledError):
            await settle_all({"a": cancelled(), "b": _value(1)})
