"""Scaffolding synthesizer and file templates."""

from .service import ScaffoldingSynthesizer, render_template

__all__ = ["ScaffoldingSynthesizer", "render_template"]
