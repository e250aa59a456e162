"""
Prompt template module
"""
from .templates import get_explanation_prompt

__all__ = [
    "get_explanation_prompt",
]
