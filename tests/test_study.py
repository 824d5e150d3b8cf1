import asyncio
import unittest

from studiq.modules.ai.gateway import SUMMARY_ERROR, AIGateway
from studiq.modules.ai.results import ErrorKind
from studiq.modules.context import IMAGE_PLACEHOLDER, StudyContextStore
from studiq.modules.study import Summarizer
from tests.fakes import FakeClient, GatedClient


class TestStudyContextStore(unittest.TestCase):
    def test_replace_append_clear(self):
        store = StudyContextStore()
        self.assertTrue(store.is_empty)

        store.replace("Chapter 1")
        store.append("\nChapter 2")
        self.assertEqual(store.text, "Chapter 1\nChapter 2")
        self.assertFalse(store.is_empty)

        store.clear()
        self.assertEqual(store.text, "")

    def test_whitespace_counts_as_empty(self):
        self.assertTrue(StudyContextStore(" \n\t").is_empty)

    def test_attach_image_appends_placeholder(self):
        store = StudyContextStore("notes")
        store.attach_image(b"\xff\xd8\xff", filename="board.jpg")
        self.assertEqual(store.text, "notes" + IMAGE_PLACEHOLDER)

        store.attach_image(b"")
        self.assertEqual(store.text, "notes" + IMAGE_PLACEHOLDER)


class TestSummarizer(unittest.IsolatedAsyncioTestCase):
    async def test_stores_summary(self):
        summarizer = Summarizer(AIGateway(FakeClient(text="- key idea")))

        self.assertTrue(await summarizer.summarize("notes"))

        self.assertEqual(summarizer.summary, "- key idea")
        self.assertIsNone(summarizer.last_error)

    async def test_blank_context_is_gated(self):
        client = FakeClient()
        summarizer = Summarizer(AIGateway(client))

        self.assertFalse(await summarizer.summarize(""))
        self.assertEqual(summarizer.summary, "")
        self.assertEqual(client.calls, [])

    async def test_failure_shows_error_text(self):
        summarizer = Summarizer(AIGateway(FakeClient(error=ConnectionError())))

        await summarizer.summarize("notes")

        self.assertEqual(summarizer.summary, SUMMARY_ERROR)
        self.assertEqual(summarizer.last_error, ErrorKind.TRANSPORT)

    async def test_one_request_at_a_time(self):
        client = GatedClient(text="- done")
        summarizer = Summarizer(AIGateway(client))

        first = asyncio.create_task(summarizer.summarize("notes"))
        await client.entered.wait()
        self.assertFalse(await summarizer.summarize("notes"))

        client.release()
        self.assertTrue(await first)
        self.assertEqual(len(client.calls), 1)


if __name__ == "__main__":
    unittest.main()
