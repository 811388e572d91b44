# eventops/services/assistant/__init__.py
from .service import AssistantService, get_assistant_service
from .tools import AGENT_TOOLS, get_anthropic_tools, tool_requires_confirmation
