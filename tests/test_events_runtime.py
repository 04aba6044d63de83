from __future__ import annotations

import unittest
from types import SimpleNamespace

try:
    import discord
    from discord.ext import commands
except ModuleNotFoundError:
    discord = None
    commands = None

if commands is not None:
    from misc.events_runtime import register_runtime_events
    from misc.runtime_deps import RuntimeBootDeps
    from misc.runtime_deps import RuntimeDeps

from classroom.store import ClassroomStore


class FakeResponse:
    def __init__(self, done: bool = False):
        self.done = done
        self.sent: list[str] = []

    def is_done(self):
        return self.done

    async def send_message(self, text, *, ephemeral=False):
        self.sent.append(text)


def _bot_with(route):
    bot = commands.Bot(command_prefix="!", intents=discord.Intents.none())
    register_runtime_events(
        bot,
        deps=RuntimeDeps(store=ClassroomStore(), route_component_interaction=route),
        boot=RuntimeBootDeps(bot_name="LabBot", config_warnings=[]),
    )
    return bot


@unittest.skipIf(commands is None, "discord.py not installed")
class InteractionEventTests(unittest.IsolatedAsyncioTestCase):
    async def test_route_receives_store(self):
        seen: list = []

        async def _route(interaction, *, store):
            seen.append((interaction, store))
            return True

        bot = _bot_with(_route)
        interaction = SimpleNamespace(response=FakeResponse())
        await bot.on_interaction(interaction)
        self.assertEqual(len(seen), 1)
        self.assertIsInstance(seen[0][1], ClassroomStore)

    async def test_route_error_gets_ephemeral_reply(self):
        async def _route(interaction, *, store):
            raise RuntimeError("boom")

        bot = _bot_with(_route)
        interaction = SimpleNamespace(response=FakeResponse())
        await bot.on_interaction(interaction)
        self.assertEqual(interaction.response.sent, ["An error occurred while handling the interaction."])

    async def test_route_error_after_reply_stays_quiet(self):
        async def _route(interaction, *, store):
            raise RuntimeError("boom")

        bot = _bot_with(_route)
        interaction = SimpleNamespace(response=FakeResponse(done=True))
        await bot.on_interaction(interaction)
        self.assertEqual(interaction.response.sent, [])


@unittest.skipIf(commands is None, "discord.py not installed")
class CommandErrorEventTests(unittest.IsolatedAsyncioTestCase):
    async def test_unknown_command_is_silent(self):
        bot = _bot_with(None)
        sent: list[str] = []

        async def _send(text):
            sent.append(text)

        ctx = SimpleNamespace(send=_send, command=None)
        await bot.on_command_error(ctx, commands.CommandNotFound("nope"))
        self.assertEqual(sent, [])

    async def test_dm_use_is_explained(self):
        bot = _bot_with(None)
        sent: list[str] = []

        async def _send(text):
            sent.append(text)

        ctx = SimpleNamespace(send=_send, command=None)
        await bot.on_command_error(ctx, commands.NoPrivateMessage())
        self.assertEqual(sent, ["This command only works in a server."])


if __name__ == "__main__":
    unittest.main()
