# tests/test_synthesizer.py
"""Tests for answer synthesis."""

from unittest.mock import MagicMock

import pytest

from ragline.exceptions import ExternalServiceError, ValidationError
from ragline.models import SearchResult
from ragline.retriever import Retriever
from ragline.settings import Settings
from ragline.synthesizer import (
    FALLBACK_ANSWER,
    SYSTEM_PROMPT,
    AnswerSynthesizer,
    build_context,
    build_messages,
)


def result(index, content, score=0.1):
    return SearchResult(
        chunk_id=f"c{index}", document_id="d", chunk_index=index, content=content, score=score
    )


@pytest.fixture
def retriever():
    return MagicMock(spec=Retriever)


class TestPrompt:
    def test_build_context(self):
        context = build_context([result(0, "  first chunk \n"), result(1, "second chunk")])
        assert context == "[1]\nfirst chunk\n---\n[2]\nsecond chunk\n---\n"

    def test_build_messages(self):
        messages = build_messages("[1]\nctx\n---\n", "What?")

        assert [m["role"] for m in messages] == ["system", "user", "user"]
        assert messages[0]["content"] == SYSTEM_PROMPT
        assert messages[1]["content"] == "Here is the relevant context:\n\n[1]\nctx\n---\n"
        assert messages[2]["content"] == "Question: What?"

    def test_system_prompt_names_fallback(self):
        assert FALLBACK_ANSWER in SYSTEM_PROMPT


class TestAnswerSynthesizer:
    def test_answer(self, retriever, fake_llm):
        results = [result(0, "The answer is 42."), result(1, "Unrelated.", 0.6)]
        retriever.search.return_value = results
        synthesizer = AnswerSynthesizer(retriever, fake_llm, max_tokens=256, temperature=0.0)

        answer = synthesizer.answer("  What is the answer?  ", top_k=2)

        assert answer.answer == "Forty-two."
        assert answer.query == "What is the answer?"
        assert answer.results == results
        retriever.search.assert_called_once_with("What is the answer?", 2)

        call = fake_llm.calls[0]
        assert call["temperature"] == 0.0
        assert call["max_tokens"] == 256
        assert "[1]\nThe answer is 42.\n---\n[2]\nUnrelated.\n---\n" in call["messages"][1]["content"]
        assert call["messages"][2]["content"] == "Question: What is the answer?"

    def test_no_results_uses_fallback(self, retriever, fake_llm):
        retriever.search.return_value = []
        synthesizer = AnswerSynthesizer(retriever, fake_llm)

        answer = synthesizer.answer("Anything?")

        assert answer.answer == FALLBACK_ANSWER
        assert answer.results == []
        assert fake_llm.calls == []

    @pytest.mark.parametrize("top_k", [None, 0, -1])
    def test_default_top_k(self, retriever, fake_llm, top_k):
        retriever.search.return_value = []
        synthesizer = AnswerSynthesizer(retriever, fake_llm, default_top_k=3)

        synthesizer.answer("q", top_k=top_k)

        retriever.search.assert_called_once_with("q", 3)

    @pytest.mark.parametrize("query", ["", "  ", None])
    def test_blank_query(self, retriever, fake_llm, query):
        with pytest.raises(ValidationError):
            AnswerSynthesizer(retriever, fake_llm).answer(query)
        retriever.search.assert_not_called()

    def test_custom_system_prompt(self, retriever, fake_llm):
        retriever.search.return_value = [result(0, "ctx")]
        synthesizer = AnswerSynthesizer(retriever, fake_llm, system_prompt="Answer in French.")

        synthesizer.answer("q")

        assert fake_llm.calls[0]["messages"][0]["content"] == "Answer in French."

    def test_llm_failure_propagates(self, retriever):
        retriever.search.return_value = [result(0, "ctx")]
        llm = MagicMock()
        llm.complete.side_effect = ExternalServiceError("Chat completion failed")

        with pytest.raises(ExternalServiceError):
            AnswerSynthesizer(retriever, llm).answer("q")
        llm.complete.assert_called_once()

    def test_from_settings(self, retriever, fake_llm):
        settings = Settings(default_top_k=7, max_tokens=99, temperature=1.0, system_prompt="S")

        synthesizer = AnswerSynthesizer.from_settings(retriever, fake_llm, settings)

        assert synthesizer.default_top_k == 7
        assert synthesizer.max_tokens == 99
        assert synthesizer.temperature == 1.0
        assert synthesizer.system_prompt == "S"
