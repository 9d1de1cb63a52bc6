# codearchitect/core/orchestrator.py
"""
Request orchestration.

Turns one user request into: a distilled project context, one or two
streamed model calls, and the resulting session updates (chat messages,
plan file live writing, or agent file changes applied to the workspace).

State flow: idle -> context-gathering -> prompting -> (mode branch)
-> applying-results -> idle.
"""

import asyncio
import logging
from datetime import datetime
from enum import Enum
from typing import Awaitable, Callable, Dict, List

from codearchitect.core import prompts
from codearchitect.core.context.distiller import ContextDistiller, DistilledContext
from codearchitect.core.file_actions import extract_files, parse_directives
from codearchitect.core.prompts import ProjectState
from codearchitect.core.session import ChatMode, Session

logger = logging.getLogger(__name__)

NO_PROVIDER_MESSAGE = "No AI provider configured. Please check your settings."
PLAN_BATCH_LINES = 3
PLAN_FILE_FORMAT = "PLAN_%Y-%m-%d_%H-%M.md"
DEFAULT_PLAN_PACING = 0.05

PLAN_HEADER = """# Implementation Plan: {request}

*Plan generated on {generated}*

## Analyzing Requirements...

*AI is analyzing the task and generating a comprehensive implementation plan...*

---
*This plan is being written live by the AI. Watch as the content appears below.*
---

"""

PLAN_SUCCESS_MESSAGE = (
    "✅ **Implementation plan created!**\n\n"
    "📄 **File:** `{path}`\n"
    "📝 **Status:** Plan generated and saved\n"
    "👀 **View:** The plan file is now the active file\n\n"
    "The AI has analyzed your request and written a comprehensive implementation plan "
    "to `{path}`."
)

PLAN_FALLBACK_MESSAGE = "📋 **Implementation Plan**\n\n{plan}"

# Marks the end of the plan line stream
_END_OF_PLAN = object()


class OrchestratorState(str, Enum):
    IDLE = "idle"
    CONTEXT_GATHERING = "context-gathering"
    PROMPTING = "prompting"
    APPLYING_RESULTS = "applying-results"


class Orchestrator:
    """
    Runs ask/plan/agent/debug requests against a Session.

    Args:
        session: State to read and mutate
        dispatcher: Object with ``active_provider()`` and async
            ``generate_response(prompt, system, on_stream, model_id)``
        workspace: Optional workspace collaborator (file server or local dir)
        plan_pacing: Seconds to pause every few plan lines (0 in tests)
        clock: Returns "now"; used for plan file names
    """

    def __init__(
        self,
        session: Session,
        dispatcher,
        workspace=None,
        plan_pacing: float = DEFAULT_PLAN_PACING,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.session = session
        self.dispatcher = dispatcher
        self.workspace = workspace
        self.plan_pacing = plan_pacing
        self.clock = clock
        self.state = OrchestratorState.IDLE
        self._handlers: Dict[ChatMode, Callable[[str, ProjectState], Awaitable[None]]] = {
            ChatMode.ASK: self._handle_ask,
            ChatMode.PLAN: self._handle_plan,
            ChatMode.AGENT: self._handle_agent,
            ChatMode.DEBUG: self._handle_debug,
        }

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------
    async def orchestrate(self, content: str, mode) -> None:
        """
        Handle one user request. Never raises; failures end up in the
        session status log as ``ERR: <message>``.
        """
        mode = ChatMode(mode)
        session = self.session
        session.add_message("user", content, mode)

        try:
            self.state = OrchestratorState.CONTEXT_GATHERING
            context = await self._gather_context()

            session.reset_log(f"Initializing {mode.value.upper()} mode...")

            if self.dispatcher.active_provider() is None:
                session.log(f"ERR: {NO_PROVIDER_MESSAGE}")
                session.add_message("assistant", NO_PROVIDER_MESSAGE, mode)
                return

            self.state = OrchestratorState.PROMPTING
            state = ProjectState(active_file=session.active_file, context=context)
            await self._handlers[mode](content, state)
        except Exception as e:
            logger.error(f"Orchestration failed in {mode.value} mode: {e}", exc_info=True)
            session.log(f"ERR: {e}")
        finally:
            session.live_writing_file = None
            self.state = OrchestratorState.IDLE

    async def _gather_context(self) -> DistilledContext:
        """Workspace snapshot when a collaborator is attached, local file map otherwise."""
        distiller = ContextDistiller(self.workspace)
        return await distiller.distill(
            self.session.files,
            self.session.active_file,
            use_backend=self.workspace is not None,
        )

    async def _generate(self, prompt_pair, on_stream=None) -> str:
        prompt, system = prompt_pair
        return await self.dispatcher.generate_response(
            prompt, system, on_stream, self.session.selected_model
        )

    # ------------------------------------------------------------------
    # ask / debug
    # ------------------------------------------------------------------
    async def _handle_ask(self, request: str, state: ProjectState) -> None:
        self.session.log("Processing Question with Rich Context")
        response = await self._generate(prompts.ask_prompt(request, state))
        self.session.add_message("assistant", response, ChatMode.ASK)

    async def _handle_debug(self, request: str, state: ProjectState) -> None:
        self.session.log("Performing Intelligent Code Analysis")
        analysis = await self._generate(prompts.debug_prompt(request, state))
        self.session.add_message("assistant", analysis, ChatMode.DEBUG)

    # ------------------------------------------------------------------
    # plan
    # ------------------------------------------------------------------
    async def _handle_plan(self, request: str, state: ProjectState) -> None:
        session = self.session
        session.log("Creating Implementation Plan")

        now = self.clock()
        initial = PLAN_HEADER.format(request=request, generated=now.strftime("%Y-%m-%d %H:%M:%S"))
        file_name = now.strftime(PLAN_FILE_FORMAT)
        prompt_pair = prompts.plan_prompt(request, state)

        try:
            if self.workspace is not None:
                await self.workspace.create_file(file_name, initial)
        except Exception as e:
            logger.error(f"Failed to create plan file {file_name}: {e}")
            plan = await self._generate((prompt_pair[0], prompts.plan_fallback_system(state)))
            session.log("Plan generated (file creation failed, showing in chat)")
            session.live_writing_file = None
            session.add_message("assistant", PLAN_FALLBACK_MESSAGE.format(plan=plan), ChatMode.PLAN)
            return

        path = session.merge_files({file_name: initial})[0]
        session.set_active_file(path)
        session.live_writing_file = path
        session.log(f"Plan file created: {path} - Opening for live editing")

        content = await self._write_plan_live(path, initial, prompt_pair)

        if self.workspace is not None:
            try:
                await self.workspace.write_file(path, content)
            except Exception as e:
                logger.error(f"Failed to save final plan to {path}: {e}")
                session.log(f"Plan kept in session only: {e}")

        session.log(f"Plan completed and saved to {path}")
        session.live_writing_file = None
        session.add_message("assistant", PLAN_SUCCESS_MESSAGE.format(path=path), ChatMode.PLAN)

    async def _write_plan_live(self, path: str, initial: str, prompt_pair) -> str:
        """
        Stream the plan into ``path`` one line at a time.

        The model stream produces complete lines into a queue; the writer
        drains it, updating the file and pausing every few lines.
        """
        queue: asyncio.Queue = asyncio.Queue()
        emitted = 0
        last_seen = ""

        def on_stream(text: str) -> None:
            nonlocal emitted, last_seen
            last_seen = text
            cut = text.rfind("\n") + 1
            if cut > emitted:
                for line in text[emitted:cut].split("\n")[:-1]:
                    queue.put_nowait(line)
                emitted = cut

        writer = asyncio.ensure_future(self._plan_writer(path, initial, queue))
        try:
            plan = await self._generate(prompt_pair, on_stream)
            if emitted and plan.startswith(last_seen[:emitted]):
                remainder = plan[emitted:]
            else:
                remainder = plan
            lines = remainder.split("\n")
            if lines[-1] == "":
                lines.pop()
            for line in lines:
                queue.put_nowait(line)
            queue.put_nowait(_END_OF_PLAN)
            return await writer
        finally:
            if not writer.done():
                writer.cancel()

    async def _plan_writer(self, path: str, initial: str, queue: asyncio.Queue) -> str:
        content = initial
        index = 0
        while True:
            line = await queue.get()
            if line is _END_OF_PLAN:
                return content
            content += line + "\n"
            self.session.write_file(path, content)
            if index % PLAN_BATCH_LINES == 0:
                await asyncio.sleep(self.plan_pacing)
            index += 1

    # ------------------------------------------------------------------
    # agent
    # ------------------------------------------------------------------
    async def _handle_agent(self, request: str, state: ProjectState) -> None:
        session = self.session

        session.log("Analyzing Request with AI Context")
        requirements = await self._generate(prompts.analysis_prompt(request, state))

        session.log("Generating Framework-Aware Code")
        code_output = await self._generate(prompts.code_prompt(request, requirements, state))

        self.state = OrchestratorState.APPLYING_RESULTS
        await self._apply_directives(code_output)

        patches = extract_files(code_output)
        if patches:
            written = session.merge_files(patches)
            session.set_active_file(written[0])
            session.log(f"Created/Updated: {', '.join(written)}")

        session.add_message("assistant", code_output, ChatMode.AGENT)

    async def _apply_directives(self, output: str) -> List[str]:
        """
        Apply [CREATE]/[MODIFY] directives to the workspace, one file at a
        time. Failures are logged and skipped; nothing is rolled back.

        Returns:
            Paths that were applied successfully
        """
        directives = parse_directives(output)
        if self.workspace is None:
            if directives:
                logger.debug("No workspace attached; directives applied to the session only")
            return []

        applied: List[str] = []
        for directive in directives:
            try:
                if directive.operation == "create":
                    logger.info(f"AI creating file: {directive.path}")
                    await self.workspace.create_file(directive.path, directive.content)
                else:
                    logger.info(f"AI modifying file: {directive.path}")
                    await self.workspace.write_file(directive.path, directive.content)
                applied.append(directive.path)
            except Exception as e:
                logger.error(f"Failed to {directive.operation} file {directive.path}: {e}")
                self.session.log(f"Failed to {directive.operation} {directive.path}: {e}")
        return applied
