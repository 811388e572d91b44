from types import SimpleNamespace
from typing import Any, Dict, List


def text_block(text: str) -> SimpleNamespace:
    return SimpleNamespace(type="text", text=text)


def tool_use_block(tool_use_id: str, name: str, tool_input: Dict[str, Any]) -> SimpleNamespace:
    return SimpleNamespace(type="tool_use", id=tool_use_id, name=name, input=tool_input)


class FakeMessages:
    def __init__(self, responses: List[List[SimpleNamespace]]):
        self.responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def create(self, **kwargs):
        # Snapshot the messages; the service keeps appending to the same list
        self.calls.append({**kwargs, "messages": [dict(m) for m in kwargs["messages"]]})
        content = self.responses.pop(0) if self.responses else [text_block("Done.")]
        return SimpleNamespace(content=content, stop_reason="end_turn")


class FakeAnthropic:
    """Stands in for `anthropic.Anthropic`, replaying canned responses in order."""

    def __init__(self, *responses: List[SimpleNamespace]):
        self.messages = FakeMessages(list(responses))
