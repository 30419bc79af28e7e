import asyncio

import pytest

from custom_components.watch_winder.commands import CommandDispatcher
from custom_components.watch_winder.const import ALL_MOTORS, NOTIFY_ERROR, NOTIFY_SUCCESS
from custom_components.watch_winder.models import Direction, MotorSlot
from custom_components.watch_winder.store import ConfigStore

from .common import settings_payload


@pytest.fixture
def store(notify):
    store = ConfigStore(notify)
    store.load(settings_payload())
    return store


@pytest.fixture
def commands(api, store, notify):
    return CommandDispatcher(api, store, notify)


def test_start_and_stop_all(api, notify, commands):
    assert asyncio.run(commands.async_start()) is True
    assert asyncio.run(commands.async_stop(ALL_MOTORS)) is True

    assert api.calls == [("start", 0), ("stop", 0)]
    assert notify == [("All motors started", NOTIFY_SUCCESS), ("All motors stopped", NOTIFY_SUCCESS)]


def test_start_and_stop_one_motor(api, notify, commands):
    asyncio.run(commands.async_start(MotorSlot.TWO))
    asyncio.run(commands.async_stop(1))

    assert api.calls == [("start", 2), ("stop", 1)]
    assert notify == [("Motor 2 started", NOTIFY_SUCCESS), ("Motor 1 stopped", NOTIFY_SUCCESS)]


def test_failures_are_reported_per_call(api, notify, commands):
    api.fail.add("start")

    assert asyncio.run(commands.async_start()) is False
    assert asyncio.run(commands.async_start(MotorSlot.ONE)) is False
    assert asyncio.run(commands.async_stop(MotorSlot.ONE)) is True

    assert notify == [
        ("Failed to start motors", NOTIFY_ERROR),
        ("Failed to start motor 1", NOTIFY_ERROR),
        ("Motor 1 stopped", NOTIFY_SUCCESS),
    ]


def test_stop_failure(api, notify, commands):
    api.fail.add("stop")

    assert asyncio.run(commands.async_stop()) is False
    assert asyncio.run(commands.async_stop(2)) is False
    assert notify == [("Failed to stop motors", NOTIFY_ERROR), ("Failed to stop motor 2", NOTIFY_ERROR)]


def test_invalid_motor_is_rejected_without_a_request(api, notify, commands):
    assert asyncio.run(commands.async_start(3)) is False
    assert asyncio.run(commands.async_stop(-1)) is False

    assert api.calls == []
    assert notify == [("Unknown motor: 3", NOTIFY_ERROR), ("Unknown motor: -1", NOTIFY_ERROR)]


def test_test_run_rejects_all_motors(api, notify, commands):
    assert asyncio.run(commands.async_test(ALL_MOTORS)) is False
    assert asyncio.run(commands.async_test(3)) is False

    assert api.calls == []
    assert notify == [("Unknown motor: 0", NOTIFY_ERROR), ("Unknown motor: 3", NOTIFY_ERROR)]



def test_test_run_uses_configured_direction(api, notify, commands):
    assert asyncio.run(commands.async_test(MotorSlot.TWO)) is True

    assert api.calls == [("test", MotorSlot.TWO, Direction.COUNTER_CLOCKWISE, 3)]
    assert notify == [("Testing motor 2...", NOTIFY_SUCCESS)]


def test_test_run_snapshots_direction(api, notify, store):
    class SlowApi(type(api)):
        async def test(self, motor, direction, duration):
            # The operator flips the direction while the request is in flight.
            store.set(motor, "direction", Direction.CLOCKWISE)
            await asyncio.sleep(0)
            await super().test(motor, direction, duration)

    slow = SlowApi()
    commands = CommandDispatcher(slow, store, notify)

    asyncio.run(commands.async_test(MotorSlot.TWO))

    assert slow.calls == [("test", MotorSlot.TWO, Direction.COUNTER_CLOCKWISE, 3)]
    assert store.get(MotorSlot.TWO).direction is Direction.CLOCKWISE


def test_test_run_failure(api, notify, commands):
    api.fail.add("test")

    assert asyncio.run(commands.async_test(MotorSlot.ONE)) is False
    assert notify == [("Testing motor 1...", NOTIFY_SUCCESS), ("Failed to test motor 1", NOTIFY_ERROR)]


def test_overlapping_commands_are_all_sent(api, commands):
    async def run():
        return await asyncio.gather(
            commands.async_start(MotorSlot.ONE),
            commands.async_stop(MotorSlot.ONE),
            commands.async_test(MotorSlot.ONE),
        )

    assert asyncio.run(run()) == [True, True, True]
    assert sorted(c[0] for c in api.calls) == ["start", "stop", "test"]
