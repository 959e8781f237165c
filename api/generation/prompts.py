"""
Prompt builders for icon generation.
"""

from __future__ import annotations

from enum import Enum


class IconStyle(str, Enum):
    OUTLINE = "outline"
    MINIMAL = "minimal"
    DETAILED = "detailed"

    @classmethod
    def parse(cls, value: str | None) -> "IconStyle":
        """
        Unknown or empty styles fall back to outline.
        """
        raw = (value or "").strip().lower()
        for style in cls:
            if style.value == raw:
                return style
        return cls.OUTLINE


def style_guide(style: IconStyle) -> str:
    match style:
        case IconStyle.MINIMAL:
            return "Ultra-minimal. 2–4 strokes maximum. Abstract geometric reduction of the concept."
        case IconStyle.DETAILED:
            return "More complex with inner detail lines. Still stroke-only but richer silhouette."
        case _:
            return (
                "Clean minimal Lucide/Feather-style stroke paths. Simple geometric forms. "
                "Elegant and immediately recognizable."
            )


def icon_prompt(name: str, category: str, style: IconStyle) -> str:
    return (
        "You are an expert SVG icon designer for a stroke-based icon system (like Lucide or Feather Icons).\n\n"
        f'Design a "{name}" icon for category "{category}".\n'
        f"Style: {style_guide(style)}\n\n"
        "STRICT RULES:\n"
        "- viewBox: 0 0 24 24\n"
        '- Output ONLY the SVG path "d" attribute value(s)\n'
        "- Multiple sub-paths: join with a space in one string\n"
        "- NO fill anywhere — stroke only\n"
        "- Coordinates stay within 2–22 (2px padding all sides)\n"
        f'- Must be immediately recognizable as "{name}"\n'
        "- 3–6 relevant search tags\n\n"
        "Respond ONLY with valid JSON, no markdown fences:\n"
        '{"path":"<path d value>","tags":["tag1","tag2","tag3"]}'
    )
