from __future__ import annotations

import unittest

try:
    from misc.discord_text import chunk_text
    from misc.discord_text import send_chunked
except ModuleNotFoundError:
    chunk_text = None


@unittest.skipIf(chunk_text is None, "discord.py not installed")
class ChunkTextTests(unittest.TestCase):
    def test_short_text_is_single_chunk(self):
        self.assertEqual(chunk_text("hello", limit=10), ["hello"])
        self.assertEqual(chunk_text("", limit=10), [""])

    def test_prefers_newline_boundaries(self):
        text = "line one\nline two\nline three"
        self.assertEqual(chunk_text(text, limit=18), ["line one\nline two", "line three"])

    def test_hard_split_without_whitespace(self):
        chunks = chunk_text("x" * 25, limit=10)
        self.assertEqual(chunks, ["x" * 10, "x" * 10, "x" * 5])

    def test_listing_lines_stay_whole(self):
        lines = [f"- <#{n}> Classroom-2026-10-{n:02d} groups=2 students=12" for n in range(1, 40)]
        chunks = chunk_text("\n".join(lines), limit=200)
        self.assertGreater(len(chunks), 1)
        self.assertTrue(all(len(c) <= 200 for c in chunks))
        self.assertEqual([line for c in chunks for line in c.split("\n")], lines)


@unittest.skipIf(chunk_text is None, "discord.py not installed")
class SendChunkedTests(unittest.IsolatedAsyncioTestCase):
    async def test_sends_each_chunk(self):
        class FakeChannel:
            def __init__(self):
                self.sent: list[str] = []

            async def send(self, text):
                self.sent.append(text)

        channel = FakeChannel()
        await send_chunked(channel, "- a\n" * 1000)
        self.assertGreater(len(channel.sent), 1)
        self.assertTrue(all(len(part) <= 1900 for part in channel.sent))


if __name__ == "__main__":
    unittest.main()
