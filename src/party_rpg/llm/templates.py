"""Jinja2 environment for the prompt templates in llm/prompts/."""
from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

_PROMPTS_DIR = Path(__file__).parent / "prompts"
_jinja_env: Environment | None = None


def get_jinja() -> Environment:
    global _jinja_env
    if _jinja_env is None:
        _jinja_env = Environment(
            loader=FileSystemLoader(str(_PROMPTS_DIR)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
    return _jinja_env


def render(template_name: str, **context) -> str:
    return get_jinja().get_template(template_name).render(**context).strip()
