import asyncio
import inspect
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from slashbot.application.client import CommandClient
from slashbot.core.container import Container, reset_container, set_container
from slashbot.domain.invocation import ChannelKind, Invocation, MemberInfo
from slashbot.domain.permissions import Permission
from slashbot.infrastructure.cooldown_store import InMemoryCooldownStore

OWNER_ID = 1
CO_OWNER_ID = 2
USER_ID = 100
GROUP_ID = -500
CHANNEL_ID = -500


def pytest_pyfunc_call(pyfuncitem):
    if inspect.iscoroutinefunction(pyfuncitem.obj):
        funcargs = {
            name: pyfuncitem.funcargs[name] for name in pyfuncitem._fixtureinfo.argnames
        }
        asyncio.run(pyfuncitem.obj(**funcargs))
        return True
    return None


@pytest.fixture(autouse=True)
def _container_scope():

    container = Container()
    set_container(container)
    yield container
    reset_container()


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingListener:
    def __init__(self) -> None:
        self.calls: list = []

    def on_terminated(self, invocation, command) -> None:
        self.calls.append(("terminated", invocation, command))

    def on_completed(self, invocation, command) -> None:
        self.calls.append(("completed", invocation, command))

    def on_exception(self, invocation, command, error) -> None:
        self.calls.append(("exception", invocation, command, error))

    @property
    def kinds(self) -> list:
        return [call[0] for call in self.calls]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return InMemoryCooldownStore(clock=clock)


@pytest.fixture
def listener():
    return RecordingListener()


@pytest.fixture
def client(store, listener):
    return CommandClient(
        owner_id=OWNER_ID,
        co_owner_ids=[CO_OWNER_ID],
        success="OK",
        warning="WARN",
        error="ERR",
        cooldowns=store,
        listener=listener,
    )


@pytest.fixture
def responder():
    return SimpleNamespace(reply=AsyncMock(), reply_ephemeral=AsyncMock())


@pytest.fixture
def member():
    return MemberInfo(
        user_id=USER_ID,
        roles=("member",),
        permissions=frozenset({Permission.MESSAGE_READ, Permission.MESSAGE_WRITE}),
    )


@pytest.fixture
def bot_member():
    return MemberInfo(
        user_id=999,
        roles=("administrator",),
        permissions=frozenset(
            {
                Permission.MESSAGE_READ,
                Permission.MESSAGE_WRITE,
                Permission.MESSAGE_MANAGE,
            }
        ),
    )


@pytest.fixture
def make_invocation(responder, member, bot_member):
    """Factory for group invocations; pass ``private=True`` for a DM."""

    def _make(command_path: str = "test", *, private: bool = False, **overrides):
        if private:
            values = dict(
                channel_id=USER_ID,
                channel_kind=ChannelKind.PRIVATE,
                group_id=None,
                member=None,
                self_member=None,
            )
        else:
            values = dict(
                channel_id=CHANNEL_ID,
                channel_kind=ChannelKind.TEXT,
                group_id=GROUP_ID,
                member=member,
                self_member=bot_member,
            )
        values.update(
            command_path=command_path, user_id=USER_ID, responder=responder
        )
        values.update(overrides)
        return Invocation(**values)

    return _make
