"""
Test suite for ProfileExtractor.

Includes the upload-then-extract scenarios: a 49-character document gives
no profile without calling the model; a 200-character resume gives one.

System role: Verification of profile derivation from the document corpus
"""

import json
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from draftsmith.configs.ingestion import IngestionSettings
from draftsmith.core.document_processing import DocumentPipeline
from draftsmith.core.document_processing.tasks import EmbeddingTask
from draftsmith.core.exceptions import LLMInvocationError, ProfileExtractionError
from draftsmith.core.profile.extractor import ProfileExtractor

USER = "user-1"

RESUME_200 = (
    "Jane Doe\n"
    "Email: jane.doe@example.com\n"
    "Senior Software Engineer at Acme Corp (2019 - 2024)\n"
    "Skills: Python, FastAPI, PostgreSQL, AWS\n"
    "Education: BSc Computer Science, MIT, 2018\n"
)
RESUME_200 = RESUME_200 + "x" * (200 - len(RESUME_200))

EXTRACTED = {
    "fullName": "Jane Doe",
    "email": "jane.doe@example.com",
    "skills": ["Python", "FastAPI", "PostgreSQL", "AWS"],
    "experience": [
        {"title": "Senior Software Engineer", "company": "Acme Corp", "duration": "2019 - 2024"}
    ],
    "education": [{"degree": "BSc Computer Science", "institution": "MIT", "year": 2018}],
}


@pytest.fixture
def pipeline(mock_embeddings: MagicMock) -> DocumentPipeline:
    return DocumentPipeline(IngestionSettings(), EmbeddingTask(mock_embeddings, dimension=4))


@pytest.fixture
def extractor(mock_invoker: MagicMock) -> ProfileExtractor:
    return ProfileExtractor(mock_invoker, max_input_chars=20000)


class TestExtractAfterUpload:
    """End-to-end: upload through the pipeline, then extract."""

    @pytest.mark.asyncio
    async def test_49_character_document_gives_no_profile_and_no_llm_call(
        self, pipeline, extractor, mock_invoker, test_async_db
    ) -> None:
        # Arrange
        text = "Jane Doe, engineer. Python. jane@example.com ok."
        text = text + "." * (49 - len(text))
        assert len(text) == 49
        await pipeline.process(test_async_db, USER, "short.txt", "text/plain", "k1", text.encode())

        # Act
        profile = await extractor.extract(test_async_db, USER)

        # Assert
        assert profile is None
        mock_invoker.invoke.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_200_character_resume_gives_profile_with_name(
        self, pipeline, extractor, mock_invoker, test_async_db
    ) -> None:
        # Arrange
        mock_invoker.invoke.return_value = "```json\n" + json.dumps(EXTRACTED) + "\n```"
        await pipeline.process(
            test_async_db, USER, "cv.txt", "text/plain", "k2", RESUME_200.encode()
        )

        # Act
        profile = await extractor.extract(test_async_db, USER)

        # Assert
        assert profile is not None
        assert profile.full_name == "Jane Doe"
        assert profile.education[0].year == "2018"
        assert "[Document: cv.txt]" in profile.raw_text
        prompt = mock_invoker.invoke.await_args.args[0]
        assert "Jane Doe" in prompt
        assert mock_invoker.invoke.await_args.kwargs["temperature"] == 0.2


class TestGatherCorpus:
    @pytest.mark.asyncio
    async def test_newest_document_first_and_chunkless_skipped(
        self, extractor, test_async_db, make_document
    ) -> None:
        # Arrange
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        await make_document(test_async_db, USER, "old.txt", ["old text"], created_at=base)
        await make_document(
            test_async_db, USER, "new.txt", ["new a", "new b"], created_at=base + timedelta(days=1)
        )
        await make_document(
            test_async_db, USER, "blank.png", [], created_at=base + timedelta(days=2)
        )

        # Act
        corpus = await extractor.gather_corpus(test_async_db, USER)

        # Assert
        assert corpus == "[Document: new.txt]\nnew a\nnew b\n\n---\n\n[Document: old.txt]\nold text"


class TestExtractFailures:
    @pytest.mark.asyncio
    async def test_unparseable_output_raises_extraction_error(
        self, extractor, mock_invoker, test_async_db, make_document
    ) -> None:
        # Arrange
        await make_document(test_async_db, USER, "cv.txt", [RESUME_200])
        mock_invoker.invoke.return_value = "Sorry, I cannot help with that."

        # Act & Assert
        with pytest.raises(ProfileExtractionError, match="unusable output"):
            await extractor.extract(test_async_db, USER)

    @pytest.mark.asyncio
    async def test_llm_failure_raises_extraction_error_with_cause(
        self, extractor, mock_invoker, test_async_db, make_document
    ) -> None:
        # Arrange
        await make_document(test_async_db, USER, "cv.txt", [RESUME_200])
        cause = LLMInvocationError("both providers failed", provider="fallback")
        mock_invoker.invoke.side_effect = cause

        # Act & Assert
        with pytest.raises(ProfileExtractionError) as exc_info:
            await extractor.extract(test_async_db, USER)
        assert exc_info.value.__cause__ is cause

    @pytest.mark.asyncio
    async def test_corpus_is_truncated_to_input_limit(
        self, mock_invoker, test_async_db, make_document
    ) -> None:
        # Arrange
        await make_document(test_async_db, USER, "big.txt", ["A" * 5000])
        mock_invoker.invoke.return_value = json.dumps({"fullName": "A"})
        extractor = ProfileExtractor(mock_invoker, max_input_chars=1000)

        # Act
        await extractor.extract(test_async_db, USER)

        # Assert
        prompt = mock_invoker.invoke.await_args.args[0]
        assert "A" * 1000 not in prompt.replace("[Document: big.txt]\n", "")
