"""JSON parsing and validation utilities for LLM responses.

Contains functions for parsing and validating LLM responses:
- parse_json_response: Parse raw LLM response as JSON
- parse_commit_plan: Parse raw LLM response into a CommitPlan
"""

import json

from pydantic import ValidationError

from semcommit.llm.exceptions import LLMResponseParseError
from semcommit.models import CommitPlan


def parse_json_response(raw_response: str) -> dict:
    """Parse the LLM response as JSON.

    Args:
        raw_response: The raw text response from the LLM.

    Returns:
        The parsed JSON as a dictionary.

    Raises:
        LLMResponseParseError: If parsing fails.
    """
    cleaned = (raw_response or "").strip()

    # Remove markdown code fences if the model included them despite instructions
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        # Remove first line (```json or ```)
        lines = lines[1:]
        # Remove last line if it's ```
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines)

    # Extract the outermost object if there's extra content around it
    first_brace = cleaned.find("{")
    last_brace = cleaned.rfind("}")

    if first_brace != -1 and last_brace != -1 and last_brace > first_brace:
        cleaned = cleaned[first_brace:last_brace + 1]

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise LLMResponseParseError(f"Failed to parse LLM response as JSON: {e}", raw_response)

    if not isinstance(parsed, dict):
        raise LLMResponseParseError("LLM response is not a JSON object", raw_response)

    return parsed


def parse_commit_plan(raw_response: str) -> CommitPlan:
    """Parse the LLM response into a CommitPlan.

    Args:
        raw_response: The raw text response from the LLM.

    Returns:
        The CommitPlan (not yet validated against the working set).

    Raises:
        LLMResponseParseError: If the response is not JSON or does not match
            the {"commits": [...]} schema.
    """
    parsed = parse_json_response(raw_response)

    if "commits" not in parsed:
        raise LLMResponseParseError('LLM response is missing the "commits" key', raw_response)

    try:
        return CommitPlan.model_validate(parsed)
    except ValidationError as e:
        raise LLMResponseParseError(f"LLM response does not match the commit plan schema: {e}", raw_response)
