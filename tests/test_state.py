import asyncio

from cadet_quiz.controller import GameState
from cadet_quiz.state import GameStore

from .conftest import FakeProvider


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_idle_games_are_dropped_on_create():
    clock = FakeClock()
    store = GameStore(idle_ttl=60, clock=clock)
    provider = FakeProvider()
    stale = store.create_game(provider, total_rounds=5, feedback_delay=0)
    active = store.create_game(provider, total_rounds=5, feedback_delay=0)

    clock.now += 45
    store.get(active)
    clock.now += 30
    newest = store.create_game(provider, total_rounds=5, feedback_delay=0)

    assert not store.has_game(stale)
    assert store.has_game(active)
    assert store.has_game(newest)
    assert len(store) == 2


def test_store_stays_bounded_under_many_creates():
    clock = FakeClock()
    store = GameStore(idle_ttl=10, clock=clock)
    provider = FakeProvider()
    for _ in range(1000):
        store.create_game(provider, total_rounds=5, feedback_delay=0)
        clock.now += 1

    assert len(store) <= 11


async def test_expired_game_has_its_pending_fetch_cancelled():
    clock = FakeClock()
    store = GameStore(idle_ttl=5, clock=clock)
    provider = FakeProvider()
    provider.gate.clear()
    game_id = store.create_game(provider, total_rounds=5, feedback_delay=0)
    controller = store.get(game_id).controller
    await controller.select_difficulty("Médio")
    pending = controller._task

    clock.now += 10
    assert store.prune() == 1
    await asyncio.wait({pending})

    assert pending.cancelled()
    assert controller.state is GameState.LOADING
    assert not store.has_game(game_id)


async def test_discard_returns_controller_to_start():
    store = GameStore()
    provider = FakeProvider()
    game_id = store.create_game(provider, total_rounds=5, feedback_delay=0)
    controller = store.get(game_id).controller
    await controller.select_difficulty("Fácil")
    await controller.settle()

    await store.discard(game_id)

    assert not store.has_game(game_id)
    assert controller.state is GameState.START
