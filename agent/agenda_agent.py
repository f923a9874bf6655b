# agent/agenda_agent.py
import logging
from typing import Dict, Optional

from langchain_core.messages import HumanMessage, SystemMessage

import agent_runner
from config import AppConfig
from models.sacrament_meeting import SacramentMeeting
from prompts.agenda_prompts import AGENDA_SYSTEM, agenda_user_prompt
from utils.llm_output import extract_suggestion, message_text

logger = logging.getLogger(__name__)


class AgendaSuggestionError(RuntimeError):
    pass


async def suggest_agenda_improvements(cfg: AppConfig, ward_needs: str, past_meeting_data: str,
                                      current_agenda: Optional[SacramentMeeting] = None) -> Dict[str, str]:
    """Ask the chat model how to improve an agenda. Returns {"suggestedImprovements": ...}."""
    messages = [
        SystemMessage(AGENDA_SYSTEM),
        HumanMessage(agenda_user_prompt(
            ward_needs, past_meeting_data, current_agenda.summary() if current_agenda else "")),
    ]
    try:
        llm = agent_runner.build_llm(cfg)
        content = await agent_runner.run_messages(llm, messages)
        suggestion = extract_suggestion(message_text(content))
    except Exception as e:
        logger.exception("agenda suggestion failed")
        raise AgendaSuggestionError(str(e)) from e
    return {"suggestedImprovements": suggestion}
