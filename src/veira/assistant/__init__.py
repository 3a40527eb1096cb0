"""Remote assistant integration."""

from veira.assistant.client import AssistantClient, AssistantError, GeminiClient

__all__ = ["AssistantClient", "AssistantError", "GeminiClient"]
