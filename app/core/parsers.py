# parsers.py
"""
Output parsers for LLM responses.
Providers are asked for raw JSON but often wrap it in prose or markdown.
"""

import json
import re
import logging
from typing import Any, Dict

from langchain_core.output_parsers import BaseOutputParser

from app.core.exceptions import JSONParseError

logger = logging.getLogger(__name__)


def parse_json_object(text: str) -> Dict[str, Any]:
    """
    Decode the JSON object contained in model output.

    Steps:
    1. Strip BOM and whitespace
    2. Unwrap markdown code fences
    3. Extract the outermost {...} span
    4. Remove trailing commas

    Raises:
        JSONParseError: if nothing decodes to a JSON object
    """
    if not isinstance(text, str) or not text.strip():
        raise JSONParseError("Empty model output", raw_text=text)

    json_str = _clean_text(text)
    json_str = _extract_json(json_str)

    # ValueError covers JSONDecodeError; RecursionError comes from very deep nesting
    try:
        data = json.loads(json_str)
    except (ValueError, RecursionError):
        try:
            data = json.loads(_fix_common_issues(json_str))
        except (ValueError, RecursionError) as e:
            logger.debug(f"Failed text: {text[:300]}")
            raise JSONParseError(f"Invalid JSON format: {e}", raw_text=text)

    if not isinstance(data, dict):
        raise JSONParseError(f"Expected a JSON object, got {type(data).__name__}", raw_text=text)

    logger.debug(f"Parsed JSON object ({len(json_str)} chars)")
    return data


def _clean_text(text: str) -> str:
    """Remove formatting issues."""
    text = text.strip()
    if text.startswith('\ufeff'):
        text = text[1:]
    return text


def _extract_json(text: str) -> str:
    """Extract JSON from markdown or plain text."""
    # Try markdown code block
    json_match = re.search(r'```(?:json)?\s*(\{.*\})\s*```', text, re.DOTALL)
    if json_match:
        return json_match.group(1)

    # Outermost object
    json_match = re.search(r'\{.*\}', text, re.DOTALL)
    if json_match:
        return json_match.group(0)

    return text


def _fix_common_issues(json_str: str) -> str:
    """Fix trailing commas."""
    return re.sub(r',(\s*[}\]])', r'\1', json_str)


class QuizJSONOutputParser(BaseOutputParser):
    """LangChain parser wrapper around ``parse_json_object``."""

    def parse(self, text: str) -> Dict[str, Any]:
        return parse_json_object(text)

    def get_format_instructions(self) -> str:
        return "Respond ONLY with a JSON object. No markdown, no explanations."

    @property
    def _type(self) -> str:
        return "quiz_json"
