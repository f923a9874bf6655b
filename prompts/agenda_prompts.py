# prompts/agenda_prompts.py

AGENDA_SYSTEM = """You are an assistant to a bishop, helping them create impactful sacrament meeting agendas.
Return STRICT JSON only (no markdown, no commentary)."""

AGENDA_USER_TPL = """Based on the ward needs, past meeting data and the current agenda (if available),
suggest improvements to the agenda. Consider optimizing themes and speakers to best address the ward's needs.

Ward Needs: {ward_needs}
Past Meeting Data: {past_meeting_data}
Current Agenda:
{current_agenda}

Return JSON exactly with this key only:
{{"suggestedImprovements": "..."}}
"""

NO_AGENDA = "No current agenda provided."


def agenda_user_prompt(ward_needs: str, past_meeting_data: str, current_agenda: str = "") -> str:
    return AGENDA_USER_TPL.format(
        ward_needs=ward_needs.strip(),
        past_meeting_data=past_meeting_data.strip(),
        current_agenda=(current_agenda or NO_AGENDA).strip(),
    )
