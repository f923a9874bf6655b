# agent_runner.py
from typing import List

from langchain.chat_models import init_chat_model
from langchain_core.messages import BaseMessage

from config import AppConfig


def build_llm(cfg: AppConfig):
    kwargs = {"model_provider": cfg.agenda_model_provider}
    if cfg.google_api_key:
        kwargs["api_key"] = cfg.google_api_key
    return init_chat_model(cfg.agenda_model, **kwargs)


async def run_messages(llm, messages: List[BaseMessage]) -> str:
    """Send one conversation and return the final message content."""
    result = await llm.ainvoke(messages)
    return result.content
