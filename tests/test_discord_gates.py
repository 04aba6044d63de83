from __future__ import annotations

import unittest
from types import SimpleNamespace
from unittest import mock

try:
    from misc.discord_gates import channel_can_host_threads
    from misc.discord_gates import channel_is_thread
    from misc.discord_gates import classroom_for_channel
except ModuleNotFoundError:
    classroom_for_channel = None

from classroom.models import Classroom
from classroom.store import ClassroomStore


class FakeThread:
    def __init__(self, channel_id: int):
        self.id = int(channel_id)


class FakeTextChannel:
    def __init__(self, channel_id: int):
        self.id = int(channel_id)


@unittest.skipIf(classroom_for_channel is None, "discord.py not installed")
class DiscordGatesTests(unittest.TestCase):
    def setUp(self):
        patch_thread = mock.patch("misc.discord_gates.discord.Thread", FakeThread)
        patch_text = mock.patch("misc.discord_gates.discord.TextChannel", FakeTextChannel)
        patch_thread.start()
        patch_text.start()
        self.addCleanup(patch_thread.stop)
        self.addCleanup(patch_text.stop)

        self.store = ClassroomStore()
        self.classroom = Classroom(777, "c")
        self.store.register(777, self.classroom)

    def test_thread_detection(self):
        self.assertTrue(channel_is_thread(FakeThread(1)))
        self.assertFalse(channel_is_thread(FakeTextChannel(1)))
        self.assertFalse(channel_is_thread(SimpleNamespace(id=1)))

    def test_only_text_channels_host_threads(self):
        self.assertTrue(channel_can_host_threads(FakeTextChannel(1)))
        self.assertFalse(channel_can_host_threads(FakeThread(1)))

    def test_registered_thread_resolves_classroom(self):
        self.assertIs(classroom_for_channel(FakeThread(777), self.store), self.classroom)

    def test_unregistered_thread_is_none(self):
        self.assertIsNone(classroom_for_channel(FakeThread(778), self.store))

    def test_text_channel_with_matching_id_is_none(self):
        self.assertIsNone(classroom_for_channel(FakeTextChannel(777), self.store))
        self.assertIsNone(classroom_for_channel(None, self.store))


if __name__ == "__main__":
    unittest.main()
