from app.modules.flashcards.prompts import SYSTEM_PROMPT, build_prompt


def test_prompt_contains_topic_count_and_level():
    prompt = build_prompt("Go channels", 3, "intermediate")
    assert "Go channels" in prompt.user
    assert "exactly 3 " in prompt.user
    assert "intermediate level" in prompt.user


def test_prompt_demands_json_array_of_pairs():
    prompt = build_prompt("photosynthesis", 5, "beginner")
    assert '[{"question": "...", "answer": "..."}]' in prompt.user
    assert "No other text" in prompt.user
    assert "JSON array" in prompt.system


def test_prompt_is_deterministic():
    assert build_prompt("sql joins", 7, "advanced") == build_prompt("sql joins", 7, "advanced")


def test_messages_are_system_then_user():
    prompt = build_prompt("rust lifetimes", 2, "expert")
    messages = prompt.messages()
    assert [m["role"] for m in messages] == ["system", "user"]
    assert messages[0]["content"] == SYSTEM_PROMPT
    assert messages[1]["content"] == prompt.user
