"""Localized rendering of impact reports."""

from .locales import MESSAGES, SUPPORTED_LANGUAGES, translate, format_date
from .report_renderer import describe_last_change, describe_impact, render_markdown, render_json

__all__ = [
    "MESSAGES", "SUPPORTED_LANGUAGES", "translate", "format_date",
    "describe_last_change", "describe_impact", "render_markdown", "render_json",
]
