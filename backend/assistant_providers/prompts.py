from __future__ import annotations

from chat_memory import Message


MEDICAL_CONTEXT = """You are MediTrack Assistant, a professional medical assistant for doctors.
Your purpose is to assist healthcare professionals with:
- Clinical information and evidence-based medicine
- Patient management workflows
- Medical reference information
- Treatment protocols and guidelines
- Lab result interpretation assistance
- Medical terminology and coding
- EHR system navigation

Always maintain a professional, concise tone appropriate for medical professionals.
Provide accurate, evidence-based information when possible.
When uncertain, clearly indicate the limitations of your knowledge."""


def system_prompt(extra_context: str | None = None) -> str:
    extra = (extra_context or "").strip()
    if not extra:
        return MEDICAL_CONTEXT
    return f"{MEDICAL_CONTEXT}\n\nAdditional context from the application:\n{extra[:2000]}"


def chat_messages(message: str, history: list[Message], extra_context: str | None = None) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": system_prompt(extra_context)},
        *[{"role": turn.role, "content": turn.content[:1200]} for turn in history if turn.content.strip()],
        {"role": "user", "content": message.strip()[:2000]},
    ]


def transcript_prompt(message: str, history: list[Message], extra_context: str | None = None) -> str:
    formatted_history = "\n".join(
        f"{'User' if turn.role == 'user' else 'Assistant'}: {turn.content}" for turn in history
    )
    return f"{system_prompt(extra_context)}\n\n{formatted_history}\n\nUser: {message.strip()}\nAssistant:"
