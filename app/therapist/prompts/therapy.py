"""Fixed texts for the therapist persona and the supportive extras."""

from __future__ import annotations
from textwrap import dedent


GREETING = "Hello, I'm your virtual therapist. How are you feeling today?"

FALLBACK_REPLY = (
    "I'm sorry, I had trouble processing that. "
    "Would you like to try sharing that again?"
)

MOTIVATIONAL_QUOTES = (
    "You are stronger than you think.",
    "This too shall pass.",
    "Be patient with yourself. Healing takes time.",
    "Your feelings are valid.",
    "Progress, not perfection.",
)

BREATHING_EXERCISE = dedent(
    """\
    Let's try a short breathing exercise:
    - Inhale slowly through your nose for 4 seconds.
    - Hold your breath for 4 seconds.
    - Exhale gently through your mouth for 4 seconds.
    Repeat this for a minute. Let your mind settle."""
)

GRATITUDE_PROMPT = dedent(
    """\
    Take a moment to reflect on something you're grateful for today.
    It could be a small moment, a person, or even your own resilience."""
)


def build_therapist_system() -> str:
    return (
        "You are a highly educated and compassionate mental health therapist. "
        "Speak in a calm, empathetic, and supportive tone. "
        "Ask open-ended questions, validate emotions, and guide the user to "
        "reflect on their thoughts and feelings. "
        "Occasionally include helpful practices like breathing exercises, "
        "gratitude journaling, or motivational affirmations when appropriate."
    )


def quote_block(quote: str) -> str:
    return f'💬 *Quote:* "{quote}"'


def breathing_block() -> str:
    return f"🧘 *Breathing Exercise:* {BREATHING_EXERCISE}"


def gratitude_block() -> str:
    return f"📓 *Gratitude Prompt:* {GRATITUDE_PROMPT}"
