"""Saídas legíveis de um run: resumo textual e relatório Markdown."""

from .report_md import generate_report_md
from .summary import render_summary

__all__ = ["generate_report_md", "render_summary"]
