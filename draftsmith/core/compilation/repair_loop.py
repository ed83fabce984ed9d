"""
Compile -> repair -> recompile controller for one project.

State machine:
    IDLE -> COMPILING -> SUCCESS | FAILED
    FAILED -> REPAIRING -> RECOMPILING -> SUCCESS | FAILED

A failure episode starts with the first failed compile and ends only on a
successful one. Within an episode at most `max_auto_repairs` repairs run
automatically; further repairs need an explicit request and stop at
`max_repair_attempts`. Compiles for one project are serialized by a lock,
and markup edits are coalesced by a debouncer before compiling.

Dependencies: asyncio, draftsmith.core.compilation, draftsmith.configs,
              draftsmith.observability
System role: Bounded automatic recovery from compile failures
"""

import asyncio
import logging
from typing import Awaitable, Callable, Protocol

from draftsmith.configs.compiler import CompilerSettings
from draftsmith.core.compilation.debouncer import Debouncer
from draftsmith.core.compilation.models import (
    CompilationAttempt,
    CompileOutcome,
    CompileState,
    CompileStatus,
)
from draftsmith.core.exceptions import (
    CompilationError,
    CompilerUnavailableError,
    DraftsmithException,
    RepairLimitError,
    ValidationError,
)
from draftsmith.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)


class Compiler(Protocol):
    async def compile(self, markup: str) -> bytes: ...


class Repairer(Protocol):
    async def repair(self, current_markup: str, diagnostic: str) -> str: ...


# (source_markup, repaired_markup, diagnostic) -> False when a newer edit superseded the source
RepairedHook = Callable[[str, str, str], Awaitable[bool]]
# (compiled_markup, artifact)
CompiledHook = Callable[[str, bytes], Awaitable[None]]


class RepairLoopController:
    """Serialized, bounded compile/repair loop for a single project."""

    def __init__(
        self,
        project_id: str,
        compiler: Compiler,
        repairer: Repairer,
        settings: CompilerSettings,
        on_repaired: RepairedHook | None = None,
        on_compiled: CompiledHook | None = None,
    ) -> None:
        """
        Args:
            project_id: Project this controller serves
            compiler: Compilation client
            repairer: Generation agent (repair kind)
            settings: Debounce delay and repair limits
            on_repaired: Stores the repair before recompiling; returning False
                abandons the cycle because the source markup was edited meanwhile
            on_compiled: Awaited with the compiled markup and artifact after each success
        """
        self.project_id = project_id
        self._compiler = compiler
        self._repairer = repairer
        self._settings = settings
        self._on_repaired = on_repaired
        self._on_compiled = on_compiled

        self._lock = asyncio.Lock()
        self._debouncer = Debouncer(settings.debounce_seconds, self._compile_latest)
        self._latest_markup: str | None = None

        self.state = CompileState.IDLE
        self.retry_count = 0
        self.auto_repairs_used = 0
        self.last_diagnostic: str | None = None
        self.episode = 0
        self._attempts: list[CompilationAttempt] = []
        self._compiler_unreachable = False

    @property
    def attempts(self) -> tuple[CompilationAttempt, ...]:
        """Attempts of the most recent cycle, in order."""
        return tuple(self._attempts)

    @property
    def gave_up(self) -> bool:
        """Failed with no automatic repair left; only the user can move it on."""
        return (
            self.state is CompileState.FAILED
            and self.auto_repairs_used >= self._settings.max_auto_repairs
        )

    @property
    def is_idle(self) -> bool:
        return (
            not self._lock.locked()
            and not self._debouncer.pending
            and self.last_diagnostic is None
        )

    def status(self) -> CompileStatus:
        return CompileStatus(
            state=self.state,
            retry_count=self.retry_count,
            auto_repairs_used=self.auto_repairs_used,
            max_repair_attempts=self._settings.max_repair_attempts,
            last_diagnostic=self.last_diagnostic,
            gave_up=self.gave_up,
            pending_compile=self._debouncer.pending,
            episode=self.episode,
            attempts=len(self._attempts),
        )

    def schedule_compile(self, markup: str) -> None:
        """Record the latest markup and (re)start the debounce timer."""
        self._latest_markup = markup
        self._debouncer.schedule()

    async def wait_for_pending(self) -> None:
        """Wait for any scheduled compile to finish."""
        await self._debouncer.drain()

    async def shutdown(self) -> None:
        self._debouncer.cancel()
        await self._debouncer.drain()

    async def compile(self, markup: str, auto_repair: bool = True) -> CompileOutcome:
        """
        Compile markup, repairing automatically once per failure episode.

        Args:
            markup: Current markup
            auto_repair: Allow the automatic repair on failure

        Returns:
            CompileOutcome: Final state of this cycle
        """
        async with self._lock:
            self._attempts = []
            self.state = CompileState.COMPILING
            outcome = await self._attempt(markup, repaired=False)
            if outcome.succeeded or outcome.compiler_unavailable:
                return outcome

            if auto_repair and self._auto_repair_available():
                self.auto_repairs_used += 1
                logger.warning(
                    f"{__name__}:compile - Compile failed, running automatic repair",
                    extra={"project_id": self.project_id, "episode": self.episode},
                )
                return await self._repair_and_recompile(markup, outcome.diagnostic or "", manual=False)
            return outcome

    async def repair(self, markup: str) -> CompileOutcome:
        """
        Run a user-requested repair of the last failure and recompile.

        Raises:
            ValidationError: There is no unresolved compile failure
            RepairLimitError: The episode's repair ceiling is reached
            GenerationError, LLMInvocationError: The repair call failed
        """
        async with self._lock:
            if self.state is not CompileState.FAILED or not self.last_diagnostic:
                raise ValidationError("There is no compile failure to repair")
            if self._compiler_unreachable:
                raise ValidationError("The compiler was unreachable; retry the compile instead")
            if self.retry_count >= self._settings.max_repair_attempts:
                raise RepairLimitError(
                    self.project_id,
                    self.retry_count,
                    self._settings.max_repair_attempts,
                )
            self._attempts = []
            return await self._repair_and_recompile(markup, self.last_diagnostic, manual=True)

    def _auto_repair_available(self) -> bool:
        return (
            self.auto_repairs_used < self._settings.max_auto_repairs
            and self.retry_count < self._settings.max_repair_attempts
        )

    async def _repair_and_recompile(
        self,
        markup: str,
        diagnostic: str,
        manual: bool,
    ) -> CompileOutcome:
        self.state = CompileState.REPAIRING
        self.retry_count += 1
        try:
            repaired = await self._repairer.repair(markup, diagnostic)
        except DraftsmithException as e:
            self.state = CompileState.FAILED
            logger.warning(
                f"{__name__}:_repair_and_recompile - Repair generation failed",
                extra={
                    "project_id": self.project_id,
                    "manual": manual,
                    "error_type": type(e).__name__,
                },
            )
            if manual:
                raise
            return CompileOutcome(
                state=self.state,
                markup=markup,
                diagnostic=diagnostic,
            )

        if self._on_repaired is not None:
            applied = await self._on_repaired(markup, repaired, diagnostic)
            if applied is False:
                self.state = CompileState.FAILED
                logger.info(
                    f"{__name__}:_repair_and_recompile - Repair superseded by a newer edit",
                    extra={"project_id": self.project_id, "manual": manual},
                )
                return CompileOutcome(
                    state=self.state,
                    markup=markup,
                    diagnostic=diagnostic,
                    superseded=True,
                )

        self.state = CompileState.RECOMPILING
        outcome = await self._attempt(repaired, repaired=True)
        logger.info(
            f"{__name__}:_repair_and_recompile - Recompiled after repair",
            extra={
                "project_id": self.project_id,
                "succeeded": outcome.succeeded,
                "retry_count": self.retry_count,
            },
        )
        return outcome

    async def _attempt(self, markup: str, repaired: bool) -> CompileOutcome:
        number = len(self._attempts) + 1
        try:
            artifact = await self._compiler.compile(markup)
        except CompilationError as e:
            log_with_context(
                logger,
                logging.WARNING,
                f"{__name__}:_attempt - Compile failed",
                project_id=self.project_id,
                attempt=number,
                repaired=repaired,
                diagnostic=e.diagnostic,
            )
            self._attempts.append(
                CompilationAttempt(
                    attempt=number, markup=markup, repaired=repaired, diagnostic=e.diagnostic
                )
            )
            self._mark_failed(e.diagnostic)
            return CompileOutcome(
                state=self.state, markup=markup, diagnostic=e.diagnostic, repaired=repaired
            )
        except CompilerUnavailableError as e:
            self._attempts.append(
                CompilationAttempt(
                    attempt=number, markup=markup, repaired=repaired, diagnostic=e.message
                )
            )
            self._mark_failed(e.message, unreachable=True)
            return CompileOutcome(
                state=self.state,
                markup=markup,
                diagnostic=e.message,
                repaired=repaired,
                compiler_unavailable=True,
            )

        self._attempts.append(
            CompilationAttempt(attempt=number, markup=markup, repaired=repaired, artifact=artifact)
        )
        self._mark_succeeded()
        if self._on_compiled is not None:
            await self._on_compiled(markup, artifact)
        return CompileOutcome(
            state=self.state, markup=markup, artifact=artifact, repaired=repaired
        )

    def _mark_failed(self, diagnostic: str, unreachable: bool = False) -> None:
        if self.last_diagnostic is None:
            self.episode += 1
        self.state = CompileState.FAILED
        self.last_diagnostic = diagnostic
        self._compiler_unreachable = unreachable

    def _mark_succeeded(self) -> None:
        self.state = CompileState.SUCCESS
        self.retry_count = 0
        self.auto_repairs_used = 0
        self.last_diagnostic = None
        self._compiler_unreachable = False

    async def _compile_latest(self) -> None:
        if self._latest_markup is None:
            return
        await self.compile(self._latest_markup)
