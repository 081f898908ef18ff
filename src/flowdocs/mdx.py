"""Turn raw documentation MDX into plain markdown.

JSX components used by the documentation site are either rendered as
markdown equivalents (Do / Don't blocks), replaced with a short note (live
editors), unwrapped (layout wrappers) or dropped.
"""

from __future__ import annotations

import re

LIVE_EDITOR_NOTE = "[Interactive example — view on the documentation site]"

_SUBSTITUTIONS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"^import\s+.*$", re.MULTILINE), ""),
    (re.compile(r"\A---\n[\s\S]*?\n---\n?"), ""),
    (re.compile(r"<LiveCodeEditor\s[\s\S]*?/>"), LIVE_EDITOR_NOTE),
    (re.compile(r"<PropertiesTables\s*/>"), ""),
    (re.compile(r"<PropertiesTables[^>]*>[\s\S]*?</PropertiesTables>"), ""),
    (re.compile(r"</?DoAndDont>"), ""),
    (re.compile(r"<Do>\s*"), "**Do:**\n"),
    (re.compile(r"</Do>\s*"), "\n"),
    (re.compile(r"<Dont>\s*"), "**Don't:**\n"),
    (re.compile(r"</Dont>\s*"), "\n"),
    (re.compile(r"<(Section|Anatomy|Overview|Guidelines)[^>]*>"), ""),
    (re.compile(r"</(Section|Anatomy|Overview|Guidelines)>"), ""),
    # self-closing components, with and without attributes
    (re.compile(r"<[A-Z][A-Za-z]*\s(?:[^<>]|=>)*?/>"), ""),
    (re.compile(r"<[A-Z][A-Za-z]*\s*/>"), ""),
    # remaining wrappers keep their content
    (re.compile(r"<[A-Z][A-Za-z]*[^>]*>"), ""),
    (re.compile(r"</[A-Z][A-Za-z]*>"), ""),
    (re.compile(r"\n{3,}"), "\n\n"),
]


def clean_mdx(raw: str) -> str:
    text = raw
    for pattern, replacement in _SUBSTITUTIONS:
        text = pattern.sub(replacement, text)
    return text.strip()
