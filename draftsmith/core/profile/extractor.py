"""
Profile extraction from a user's document corpus.

Concatenates every document's chunk text (newest document first, chunks
in order, each block labelled with its file name) and asks the model for a
single JSON object in the profile shape.

Dependencies: sqlalchemy, draftsmith.core.agentic_system
System role: Structured profile derivation
"""

import logging

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from draftsmith.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud
from draftsmith.core.agentic_system.llm_invoker import LLMInvoker
from draftsmith.core.agentic_system.structured_output import parse_json_object
from draftsmith.core.exceptions import ParseError, ProfileExtractionError
from draftsmith.core.profile.schema import Profile

logger = logging.getLogger(__name__)

MIN_CORPUS_CHARS = 50
EXTRACTION_TEMPERATURE = 0.2
DOCUMENT_BLOCK_SEPARATOR = "\n\n---\n\n"

EXTRACTION_PROMPT = """Extract a structured professional profile from the following document content.
The content comes from the user's uploaded documents (LinkedIn export, certificates, resumes).

=== DOCUMENT CONTENT ===
{corpus}
=== END CONTENT ===

Return a JSON object with exactly this structure. Use an empty string or empty array for anything not found:
{{
    "fullName": "Person's full name",
    "email": "email@example.com",
    "phone": "phone number",
    "location": "City, Country",
    "linkedin": "LinkedIn URL if present",
    "summary": "Professional summary",
    "skills": ["skill1", "skill2"],
    "experience": [
        {{"title": "Job Title", "company": "Company", "duration": "Start - End", "description": "Key responsibilities"}}
    ],
    "education": [
        {{"degree": "Degree", "institution": "University", "year": "Graduation Year"}}
    ],
    "certifications": ["Certification"],
    "projects": [
        {{"name": "Project", "description": "Brief description", "technologies": ["tech1"]}}
    ],
    "achievements": ["Achievement"]
}}

Return ONLY valid JSON, no markdown."""


class ProfileExtractor:
    """Derive a Profile from all of a user's documents with one LLM call."""

    def __init__(
        self,
        invoker: LLMInvoker,
        max_input_chars: int = 20000,
        crud: DocumentCRUD | None = None,
    ) -> None:
        self._invoker = invoker
        self._max_input_chars = max_input_chars
        self._crud = crud or document_crud

    async def gather_corpus(self, session: AsyncSession, user_id: str) -> str:
        """
        Concatenate the user's document text, newest document first.

        Documents without chunks are skipped.

        Returns:
            str: "[Document: name]\\n<chunks>" blocks joined by a rule line
        """
        documents = await self._crud.get_recent_by_user(session, user_id)
        blocks = [
            f"[Document: {doc.name or 'Unknown'}]\n{doc.text}"
            for doc in documents
            if doc.chunks
        ]
        return DOCUMENT_BLOCK_SEPARATOR.join(blocks)

    async def extract(self, session: AsyncSession, user_id: str) -> Profile | None:
        """
        Extract a profile, or None when there is too little text.

        The returned profile's raw_text is the full corpus it was derived from.

        Args:
            session: Async database session
            user_id: Owning user

        Returns:
            Profile | None: Extracted profile, None for insufficient data

        Raises:
            ProfileExtractionError: The model call failed or returned no
                decodable profile
        """
        corpus = await self.gather_corpus(session, user_id)
        return await self.extract_from_corpus(user_id, corpus)

    async def extract_from_corpus(self, user_id: str, corpus: str) -> Profile | None:
        """
        Extract a profile from an already gathered corpus.

        Returns:
            Profile | None: Extracted profile with raw_text set to the corpus,
                None when the corpus is under the minimum length
        """
        if len(corpus.strip()) < MIN_CORPUS_CHARS:
            logger.info(
                f"{__name__}:extract_from_corpus - Not enough document text to extract a profile",
                extra={"user_id": user_id, "corpus_len": len(corpus)},
            )
            return None

        prompt = EXTRACTION_PROMPT.format(corpus=corpus[: self._max_input_chars])
        try:
            raw = await self._invoker.invoke(prompt, temperature=EXTRACTION_TEMPERATURE)
            profile = Profile.model_validate(parse_json_object(raw))
        except (ParseError, PydanticValidationError) as e:
            raise ProfileExtractionError(
                f"Profile extraction returned unusable output: {e}",
                user_id=user_id,
            ) from e
        except Exception as e:
            raise ProfileExtractionError(
                f"Profile extraction failed: {e}",
                user_id=user_id,
            ) from e

        profile.raw_text = corpus
        logger.info(
            f"{__name__}:extract_from_corpus - Profile extracted",
            extra={
                "user_id": user_id,
                "has_name": bool(profile.full_name),
                "skills": len(profile.skills),
                "experience": len(profile.experience),
            },
        )
        return profile
