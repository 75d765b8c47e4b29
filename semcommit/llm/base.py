"""Base class shared by all LLM providers."""

import logging
from abc import ABC, abstractmethod

from semcommit.llm.parsing import parse_commit_plan
from semcommit.llm.prompts import build_commit_prompts
from semcommit.models import AnalysisRequest, CommitPlan

logger = logging.getLogger(__name__)


class BaseLLMProvider(ABC):
    """Abstract base class for LLM providers.

    Subclasses implement a single round-trip in `complete`; prompt building
    and response parsing are shared.
    """

    name: str = ""

    def __init__(self, model: str):
        self.model = model

    @abstractmethod
    def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Send one request and return the assistant text.

        Args:
            system_prompt: The system instructions.
            user_prompt: The user message.

        Returns:
            The raw assistant text.

        Raises:
            LLMTimeoutError: If the request exceeds the timeout.
            LLMAuthError: If the credentials are rejected.
            LLMTransportError: For other API or network failures.
            LLMResponseParseError: If the response is empty or truncated.
        """
        pass

    def analyze(self, request: AnalysisRequest) -> CommitPlan:
        """Ask the model for a commit plan.

        Args:
            request: The analysis request.

        Returns:
            The parsed (unvalidated) CommitPlan.

        Raises:
            LLMError: Any of the LLMError subclasses.
        """
        system_prompt, user_prompt = build_commit_prompts(request)
        logger.debug(
            "Requesting plan from %s/%s (%d prompt chars)",
            self.name,
            self.model,
            len(system_prompt) + len(user_prompt),
        )
        raw_response = self.complete(system_prompt, user_prompt)
        plan = parse_commit_plan(raw_response)
        logger.debug("%s returned %d commits", self.name, len(plan.commits))
        return plan

    def explain_diff(self, system_prompt: str, user_prompt: str) -> str:
        """Ask the model for a free-text explanation of a diff."""
        return self.complete(system_prompt, user_prompt).strip()
