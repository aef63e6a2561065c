"""reelpick — movie recommendations from one or more LLM providers."""

__version__ = "0.1.0"
