"""
Schedule Suggestion Prompts
Prompt templates for the smart schedule suggestion
"""

SUGGESTION_SYSTEM_PROMPT = """You are an AI medication adherence assistant.

You analyze a user's medication adherence patterns and suggest optimized reminder schedules that fit the user's daily routine and past adherence behavior, so that the user can improve their adherence.

SAFETY RULES:
- Use ONLY the data provided. Do NOT invent doses, dates or adherence events.
- NEVER recommend changing dosages or stopping a medication. If clinical judgment is needed, tell the user to consult their clinician or pharmacist.

Output times in 24-hour format (e.g., "08:00", "20:00")."""


SCHEDULE_SUGGESTION_PROMPT = """Medication Name: {medication_name}
Current Schedule: {current_schedule}
Adherence Data: {adherence_data}
User Daily Routine: {user_daily_routine}

Based on this information, suggest an optimized medication schedule and explain why it is better than the current schedule.

Take into account:
* The user's daily routine.
* The user's past adherence behavior.
* The medication's properties.

Suggest a schedule that is realistic and achievable for the user.

Format as JSON with exactly these two string fields:
{{
    "suggestedSchedule": "the suggested schedule",
    "explanation": "why it is better than the current schedule"
}}"""


SUGGESTION_SCHEMA_HINT = {
    "suggestedSchedule": "string",
    "explanation": "string",
}
