"""System prompt loading.

Prompts live as markdown files under ``prompts/<locale>/``; each search stage
loads its own system prompt by name.
"""

from pathlib import Path


PROMPTS_DIR = Path(__file__).resolve().parent


def load_system_prompt(name: str, locale: str = "en") -> str:
    """Load the system prompt ``<name>.md`` for the given locale."""

    fname = PROMPTS_DIR / locale / f"{name}.md"
    return fname.read_text(encoding="utf-8").strip()
