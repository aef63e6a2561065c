"""Prompt templates for movie recommendations.

Both providers ask for the same thing: exactly two recommendations, one
in the same genre and one with similar themes in a different genre, each
formatted as a bolded "Title (Year)" line plus a short rationale.  The
wording differs per provider:

- OpenAI gets a system message (role) and a user message (task).
- Anthropic gets everything in a single user message.

When a search snippet is available it is quoted into the user prompt as
current context; otherwise a shorter prompt is used.
"""

from __future__ import annotations

RECOMMENDATION_SYSTEM_PROMPT = (
    "You are a movie recommendation assistant with access to current movie "
    "information. Provide exactly 2 movie recommendations in a clear format, "
    "taking into account the most recent context about movies."
)

ROLE_PREAMBLE = (
    "You are a movie recommendation assistant with access to current movie information."
)

RECOMMENDATION_TASK = (
    "1) One similar movie in the same genre, "
    "2) One movie with similar themes but in a different genre. "
    'Format each recommendation as: "**Movie Title (Year)** - Brief description '
    "explaining why it's recommended.\""
)


def build_openai_messages(title: str, enrichment: str | None) -> list[dict[str, str]]:
    """Build the chat messages for an OpenAI-style completion."""
    if enrichment:
        context = (
            f'Based on the movie "{title}" and this current information: {enrichment}\n\n'
            "Give me 2 movie recommendations:"
        )
    else:
        context = f'Give me 2 movie recommendations for someone who liked "{title}":'

    return [
        {"role": "system", "content": RECOMMENDATION_SYSTEM_PROMPT},
        {"role": "user", "content": f"{context} {RECOMMENDATION_TASK}"},
    ]


def build_anthropic_prompt(title: str, enrichment: str | None) -> str:
    """Build the single user message sent to the Anthropic Messages API."""
    if enrichment:
        context = (
            f'I enjoyed "{title}". Here\'s some current information about it: {enrichment}\n\n'
            "Based on this context, please provide exactly 2 movie recommendations:"
        )
    else:
        context = f'I enjoyed "{title}". Please provide exactly 2 movie recommendations:'

    return f"{ROLE_PREAMBLE} {context} {RECOMMENDATION_TASK}"
