"""Agents for AI rewrites of the workspace and code explanations"""

import asyncio
from dataclasses import dataclass
from typing import Optional

import pydantic

import config
from aieditor import llm
from aieditor.errors import EditorError, EmptyInstructionError, MalformedResponseError
from aieditor.logger import get_logger
from aieditor.models import GenerationRequest, GenerationResponse, Selection, WorkspaceState
from aieditor.prompt import (
    build_explain_content,
    build_explain_system,
    build_generate_content,
    generate_system_prompt,
)

logger = get_logger(__name__)

GENERATE_FAILED = "Generation failed. Please try again."
EXPLAIN_PENDING = "Analyzing and explaining the code..."
EXPLAIN_EMPTY = "No explanation was found."
EXPLAIN_FAILED = "Could not reach the AI to explain the code."


@dataclass
class GenerationResult:
    """Result of a generation request"""

    status: str  # "success", "error" or "superseded"
    message: str
    state: Optional[WorkspaceState] = None
    error: Optional[EditorError] = None


@dataclass
class ExplainResult:
    status: str  # "success", "error", "skipped" or "superseded"
    explanation: str = ""
    error: Optional[EditorError] = None


def parse_files(text: str) -> GenerationResponse:
    """Validate a generation reply; anything but the three-key shape is rejected whole"""
    try:
        return GenerationResponse.model_validate_json(text)
    except pydantic.ValidationError as e:
        logger.error(f"Failed to parse generation response: {e}")
        logger.error(f"Raw response (first 500 chars): {text[:500]}")
        raise MalformedResponseError(str(e))


class GenerationAgent:
    """Rewrites all three buffers from one user instruction.

    Each request takes a sequence number; a reply that arrives after a newer
    request was issued is dropped instead of overwriting the newer result.
    """

    def __init__(self, session):
        self.session = session
        self._sequence = 0
        self._pending = 0

    @property
    def in_flight(self) -> bool:
        return self._pending > 0

    async def generate(
        self, instruction: str | None = None, deep_reasoning: bool | None = None
    ) -> GenerationResult:
        session = self.session
        text = session.instruction if instruction is None else instruction

        # Validated before any await: an empty instruction never reaches the network
        if not text or not text.strip():
            error = EmptyInstructionError()
            session.status.set_error(error.user_message)
            return GenerationResult(status="error", message=error.user_message, error=error)

        deep = session.deep_reasoning if deep_reasoning is None else deep_reasoning
        self._sequence += 1
        sequence = self._sequence
        logger.info(f"Generation #{sequence}: starting (deep reasoning: {deep})")

        state = session.store.get()
        request = GenerationRequest(instruction=text, component_mode=state.component_mode, buffers=state)
        content = build_generate_content(request)
        session.status.set_status("Thinking deeply..." if deep else "Processing...", ttl=None)

        self._pending += 1
        try:
            raw = await asyncio.to_thread(llm.generate_json, content, generate_system_prompt, deep)
            files = parse_files(raw)
        except EditorError as e:
            return self._fail(sequence, e)
        except Exception as e:
            logger.error(f"Generation #{sequence}: unexpected error: {str(e)}", exc_info=True)
            return self._fail(sequence, EditorError(str(e), user_message=GENERATE_FAILED))
        finally:
            self._pending -= 1

        if sequence != self._sequence:
            logger.info(f"Generation #{sequence}: superseded by #{self._sequence}, discarding")
            return GenerationResult(status="superseded", message="Superseded by a newer request")

        session.store.set_all(files.html or "", files.css or "", files.js or "")
        session.refresh()
        session.instruction = ""
        message = "Updated successfully! 🎉"
        session.status.set_status(message)
        logger.info(f"Generation #{sequence}: applied, preview revision {session.revision}")

        return GenerationResult(status="success", message=message, state=session.store.get())

    def _fail(self, sequence: int, error: EditorError) -> GenerationResult:
        if sequence != self._sequence:
            logger.info(f"Generation #{sequence}: failed after being superseded: {error}")
            return GenerationResult(status="superseded", message="Superseded by a newer request")

        logger.error(f"Generation #{sequence}: {type(error).__name__}: {error}")
        self.session.status.set_error(error.user_message)
        return GenerationResult(status="error", message=error.user_message, error=error)


class ExplainAgent:
    """Explains the selected code in the configured language.

    Like generation, explain calls are sequenced: only the most recent call
    writes the explanation and clears the ``explaining`` flag.
    """

    def __init__(self, session, language: str | None = None):
        self.session = session
        self.language = language or config.EXPLAIN_LANGUAGE
        self._sequence = 0

    async def explain(self, selection: Selection | None = None) -> ExplainResult:
        session = self.session
        if selection is None:
            selection = session.current_selection()
        if not selection.text:
            return ExplainResult(status="skipped")

        self._sequence += 1
        sequence = self._sequence
        session.explaining = True
        session.explanation = EXPLAIN_PENDING

        content = build_explain_content(selection.source_kind, selection.text, self.language)
        system_instruction = build_explain_system(self.language)
        try:
            text = await asyncio.to_thread(llm.generate_text, content, system_instruction)
        except EditorError as e:
            logger.error(f"Explain #{sequence} failed: {e}")
            return self._finish(sequence, ExplainResult(status="error", explanation=EXPLAIN_FAILED, error=e))
        except Exception as e:
            logger.error(f"Explain #{sequence} failed unexpectedly: {str(e)}", exc_info=True)
            result = ExplainResult(status="error", explanation=EXPLAIN_FAILED, error=EditorError(str(e)))
            return self._finish(sequence, result)

        return self._finish(sequence, ExplainResult(status="success", explanation=text or EXPLAIN_EMPTY))

    def _finish(self, sequence: int, result: ExplainResult) -> ExplainResult:
        if sequence != self._sequence:
            logger.info(f"Explain #{sequence}: superseded by #{self._sequence}, discarding")
            return ExplainResult(status="superseded", explanation=result.explanation, error=result.error)

        self.session.explanation = result.explanation
        self.session.explaining = False
        return result
