"""
Prompt template manager.

Loads prompt templates from the app/prompts/ directory and assembles them
into conversations. Supports variable substitution.
"""

import logging
import re
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from app.core.constants import TurnRole
from app.schemas.quiz import ConversationTurn

logger = logging.getLogger(__name__)

DEFAULT_PROMPTS_DIR = Path(__file__).resolve().parent.parent / "prompts"


class PromptManager:
    """
    Manages prompt templates with variable substitution.

    Features:
    - Load prompts from text files
    - Variable substitution with {{VARIABLE}} syntax
    - Caching of raw templates

    Example:
        manager = PromptManager()
        conversation = manager.build_conversation(
            "questions_system", "questions_user", TOPIC="Photosynthesis"
        )
    """

    def __init__(self, prompts_dir: Optional[Path] = None):
        self.prompts_dir = Path(prompts_dir) if prompts_dir else DEFAULT_PROMPTS_DIR
        self._cache: Dict[str, str] = {}

        if not self.prompts_dir.exists():
            logger.warning(f"Prompts directory not found: {self.prompts_dir}")

    def load_prompt(self, name: str, **kwargs) -> str:
        """
        Load and format a prompt template.

        Args:
            name: Prompt template name (without .txt extension)
            **kwargs: Variables to substitute in the template

        Returns:
            Formatted prompt string
        """
        template = self._load_template(name)
        return self._substitute_variables(template, kwargs)

    def build_conversation(
        self,
        system_name: str,
        user_name: str,
        **kwargs: Any
    ) -> Tuple[ConversationTurn, ...]:
        """Render a system template and a user template into a conversation."""
        return (
            ConversationTurn(role=TurnRole.SYSTEM, content=self.load_prompt(system_name, **kwargs)),
            ConversationTurn(role=TurnRole.USER, content=self.load_prompt(user_name, **kwargs)),
        )

    def _load_template(self, name: str) -> str:
        """Load template from cache or file."""
        if name in self._cache:
            return self._cache[name]

        template_file = self.prompts_dir / f"{name}.txt"

        if not template_file.exists():
            raise FileNotFoundError(
                f"Prompt template not found: {template_file}\n"
                f"Available templates: {self.list_templates()}"
            )

        template = template_file.read_text(encoding='utf-8').strip()
        self._cache[name] = template
        logger.debug(f"Loaded prompt template: {name}")
        return template

    def _substitute_variables(self, template: str, variables: Dict[str, Any]) -> str:
        result = template

        for key, value in variables.items():
            placeholder = f"{{{{{key}}}}}"
            result = result.replace(placeholder, str(value))

        unsubstituted = re.findall(r'\{\{(\w+)\}\}', result)
        if unsubstituted:
            logger.warning(f"Unsubstituted variables in template: {unsubstituted}")

        return result

    def list_templates(self) -> list[str]:
        """List available prompt templates."""
        if not self.prompts_dir.exists():
            return []
        return sorted(f.stem for f in self.prompts_dir.glob("*.txt"))


# Global instance
_prompt_manager: Optional[PromptManager] = None


def get_prompt_manager() -> PromptManager:
    """Get global PromptManager instance (singleton)."""
    global _prompt_manager
    if _prompt_manager is None:
        _prompt_manager = PromptManager()
    return _prompt_manager
