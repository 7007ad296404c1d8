"""Optional AI provider access: chat client and prompt templates."""

from tdeecoach.llm.client import ChatClient, build_chat_client, parse_json_reply

__all__ = ["ChatClient", "build_chat_client", "parse_json_reply"]
