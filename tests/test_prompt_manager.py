from __future__ import annotations

import pytest

from app.core.constants import TurnRole
from app.core.prompt_manager import PromptManager


def test_shipped_templates_render_into_conversation():
    manager = PromptManager()
    conversation = manager.build_conversation(
        "feedback_system", "feedback_user",
        TOPIC="Photosynthesis", SCORE=3, QUESTION_COUNT=5, MAX_CHARS=300,
    )

    assert [turn.role for turn in conversation] == [TurnRole.SYSTEM, TurnRole.USER]
    assert conversation[1].content.startswith("Topic: Photosynthesis. Score: 3/5.")
    assert "{{" not in conversation[1].content


def test_templates_are_read_once(tmp_path):
    (tmp_path / "greeting.txt").write_text("Hello {{NAME}}\n", encoding="utf-8")
    manager = PromptManager(prompts_dir=tmp_path)

    assert manager.load_prompt("greeting", NAME="Ada") == "Hello Ada"
    (tmp_path / "greeting.txt").write_text("Changed", encoding="utf-8")
    assert manager.load_prompt("greeting", NAME="Lin") == "Hello Lin"


def test_missing_template_names_available_ones(tmp_path):
    (tmp_path / "b.txt").write_text("b", encoding="utf-8")
    (tmp_path / "a.txt").write_text("a", encoding="utf-8")
    manager = PromptManager(prompts_dir=tmp_path)

    with pytest.raises(FileNotFoundError, match=r"\['a', 'b'\]"):
        manager.load_prompt("missing")
