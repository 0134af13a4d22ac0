"""Inference endpoint adapter."""

from .generator import DescriptionGenerator, LLMRequest

__all__ = ["DescriptionGenerator", "LLMRequest"]
