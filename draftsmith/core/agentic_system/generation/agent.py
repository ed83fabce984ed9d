"""
Generation agent.

Produces full replacement markup for three request kinds:
- create: from profile, retrieved context and a job description / request
- edit: from the current markup and an instruction (JSON content + summary)
- repair: from failing LaTeX and a truncated compiler diagnostic

Dependencies: langchain_core.prompts, draftsmith.core.agentic_system
System role: Markup generation orchestration
"""

import logging

from pydantic import ValidationError as PydanticValidationError

from draftsmith.core.agentic_system.generation.prompts import (
    CREATE_EMAIL_PROMPT,
    CREATE_RESUME_PROMPT,
    EDIT_PROMPT,
    EMAIL_RULES,
    LATEX_RULES,
    LATEX_TEMPLATE,
    REPAIR_DIRECTIVE,
    REPAIR_PROMPT,
)
from draftsmith.core.agentic_system.generation.schema import (
    EditResponse,
    GenerationKind,
    GenerationRequest,
    GenerationResult,
    MarkupTarget,
)
from draftsmith.core.agentic_system.llm_invoker import LLMInvoker
from draftsmith.core.agentic_system.structured_output import parse_json_object, strip_fences
from draftsmith.core.exceptions import GenerationError, ParseError

logger = logging.getLogger(__name__)

RAW_CONTEXT_CHARS = 10000
GENERATION_TEMPERATURE = 0.2


def build_user_data(profile_text: str, context: str) -> str:
    """Assemble the user-data block from a formatted profile and retrieved text."""
    blocks = []
    if profile_text.strip():
        blocks.append(f"\n===== USER DATA =====\n{profile_text.rstrip()}\n===== END USER DATA =====\n")
    if context.strip():
        blocks.append(
            "\n===== RELEVANT DOCUMENT EXCERPTS =====\n"
            f"{context[:RAW_CONTEXT_CHARS]}\n"
            "===== END =====\n"
        )
    if not blocks:
        blocks.append(
            "\nNo personal data is available. Use clear placeholders such as "
            "[Full Name], [Email] and [Experience].\n"
        )
    return "".join(blocks)


class GenerationAgent:
    """Turn generation requests into markup via the LLM invoker."""

    def __init__(
        self,
        invoker: LLMInvoker,
        error_excerpt_chars: int = 1500,
        temperature: float = GENERATION_TEMPERATURE,
    ) -> None:
        """
        Args:
            invoker: LLM invocation layer (primary + rate-limit fallback)
            error_excerpt_chars: Max diagnostic characters sent when repairing
            temperature: Sampling temperature for all generation calls
        """
        self._invoker = invoker
        self._error_excerpt_chars = error_excerpt_chars
        self._temperature = temperature

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """
        Dispatch a generation request by kind.

        Raises:
            GenerationError: Missing input markup or empty model output
            ParseError: Edit response is not the required JSON shape
            LLMInvocationError: Terminal provider failure
        """
        logger.info(
            f"{__name__}:generate - START",
            extra={
                "kind": request.kind.value,
                "target": request.target.value,
                "instruction_len": len(request.instruction),
            },
        )
        if request.kind is GenerationKind.CREATE:
            return await self._create(request)
        if request.current_markup is None:
            raise GenerationError(
                f"{request.kind.value} requires current markup",
                {"kind": request.kind.value},
            )
        if request.kind is GenerationKind.EDIT:
            return await self._edit(request)
        return await self._repair(request)

    async def create(
        self,
        instruction: str,
        target: MarkupTarget = MarkupTarget.RESUME,
        profile_text: str = "",
        context: str = "",
    ) -> str:
        result = await self.generate(
            GenerationRequest(
                kind=GenerationKind.CREATE,
                target=target,
                instruction=instruction,
                profile_text=profile_text,
                context=context,
            )
        )
        return result.markup

    async def edit(
        self,
        current_markup: str,
        instruction: str,
        target: MarkupTarget = MarkupTarget.RESUME,
        attachment_text: str | None = None,
    ) -> GenerationResult:
        return await self.generate(
            GenerationRequest(
                kind=GenerationKind.EDIT,
                target=target,
                instruction=instruction,
                current_markup=current_markup,
                attachment_text=attachment_text,
            )
        )

    async def repair(self, current_markup: str, diagnostic: str) -> str:
        result = await self.generate(
            GenerationRequest(
                kind=GenerationKind.REPAIR,
                target=MarkupTarget.RESUME,
                instruction=diagnostic,
                current_markup=current_markup,
            )
        )
        return result.markup

    async def _create(self, request: GenerationRequest) -> GenerationResult:
        user_data = build_user_data(request.profile_text, request.context)
        if request.target is MarkupTarget.RESUME:
            prompt = CREATE_RESUME_PROMPT.format(
                rules=LATEX_RULES,
                template=LATEX_TEMPLATE,
                user_data=user_data,
                instruction=request.instruction,
            )
        else:
            prompt = CREATE_EMAIL_PROMPT.format(
                rules=EMAIL_RULES,
                user_data=user_data,
                instruction=request.instruction,
            )
        raw = await self._invoker.invoke(prompt, temperature=self._temperature)
        return GenerationResult(markup=self._require_markup(raw, request))

    async def _edit(self, request: GenerationRequest) -> GenerationResult:
        is_resume = request.target is MarkupTarget.RESUME
        extra_context = ""
        if request.attachment_text:
            extra_context = (
                "\nAdditional context from an attached document:\n"
                f"{request.attachment_text[:RAW_CONTEXT_CHARS]}\n"
                "Use it if relevant to the instruction.\n"
            )
        prompt = EDIT_PROMPT.format(
            rules=LATEX_RULES if is_resume else EMAIL_RULES,
            target_label="LaTeX resume" if is_resume else "email",
            current_markup=request.current_markup,
            instruction=request.instruction,
            extra_context=extra_context,
        )
        raw = await self._invoker.invoke(prompt, temperature=self._temperature)

        data = parse_json_object(raw)
        try:
            response = EditResponse.model_validate(data)
        except PydanticValidationError as e:
            raise ParseError("Edit response is missing 'content'", raw_output=raw) from e

        summary = response.summary.strip() or self._default_summary(request.instruction)
        return GenerationResult(
            markup=self._require_markup(response.content, request),
            summary=summary,
        )

    async def _repair(self, request: GenerationRequest) -> GenerationResult:
        diagnostic = request.instruction[: self._error_excerpt_chars]
        prompt = REPAIR_PROMPT.format(
            rules=LATEX_RULES,
            diagnostic=diagnostic,
            current_markup=request.current_markup,
            directive=REPAIR_DIRECTIVE,
        )
        raw = await self._invoker.invoke(prompt, temperature=self._temperature)
        return GenerationResult(markup=self._require_markup(raw, request))

    def _require_markup(self, raw: str, request: GenerationRequest) -> str:
        markup = strip_fences(raw)
        if not markup:
            raise GenerationError(
                "Model returned empty markup",
                {"kind": request.kind.value, "target": request.target.value},
            )
        return markup

    @staticmethod
    def _default_summary(instruction: str) -> str:
        excerpt = instruction[:100] + ("..." if len(instruction) > 100 else "")
        return f'Made changes based on your request: "{excerpt}"'
