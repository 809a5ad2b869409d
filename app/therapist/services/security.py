"""
Purpose: Guardrails for user input before it reaches the provider.
Content: early, predictable failures; prevent blank or oversized requests.
Harm filtering is left to the provider's safety thresholds.
"""

MAX_INPUT_CHARS = 4000


class DefaultSecurity:
    def validate_user_input(self, text: str) -> None:
        if not (text or "").strip():
            raise ValueError("Please enter a non-empty message.")
        if len(text) > MAX_INPUT_CHARS:
            raise ValueError(
                "Your message is too long.\n"
                f"Please keep it under {MAX_INPUT_CHARS} characters."
            )

    def sanitize_for_prompt(self, text: str) -> str:
        return (text or "").replace("\x00", "").strip()
