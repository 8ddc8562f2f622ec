"""Placeholder substitution for autorun templates.

Descriptor fields are addressed as ``{{appName}}``-style tokens. Drivers may
register extra tokens (for example the init.d ``@name@`` family) whose values
can reference descriptor tokens; those values are expanded first, then the
template is substituted in a single pass so that no replaced text is ever
scanned again.
"""

import re
from collections.abc import Mapping

from loguru import logger

from daemonforge.errors import RenderError

PLACEHOLDER_RE = re.compile(r"\{\{\s*[A-Za-z_][A-Za-z0-9_]*\s*\}\}")


def field_token(name: str) -> str:
    return "{{" + name + "}}"


def substitute(text: str, replacements: Mapping[str, str]) -> str:
    """Replace every occurrence of every token in *replacements* exactly once.

    Longer tokens take precedence where tokens overlap.
    """
    tokens = sorted((t for t in replacements if t), key=len, reverse=True)
    if not tokens:
        return text
    pattern = re.compile("|".join(re.escape(t) for t in tokens))
    return pattern.sub(lambda m: replacements[m.group(0)], text)


def build_replacements(
    fields: Mapping[str, str],
    extra: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Combine descriptor fields and driver tokens into one token->value map."""
    replacements = {field_token(name): value for name, value in fields.items()}
    for token, value in (extra or {}).items():
        replacements[token] = substitute(value, replacements)
    return replacements


def leftover_placeholders(text: str) -> list[str]:
    """Return the distinct ``{{name}}`` placeholders still present in *text*."""
    seen: list[str] = []
    for match in PLACEHOLDER_RE.findall(text):
        if match not in seen:
            seen.append(match)
    return seen


def render(
    template: bytes,
    fields: Mapping[str, str],
    extra: Mapping[str, str] | None = None,
    strict: bool = False,
) -> bytes:
    """Render *template* with descriptor *fields* and driver tokens *extra*.

    Unknown ``{{name}}`` placeholders are left verbatim and logged, or raise
    RenderError when *strict* is set.
    """
    try:
        text = template.decode("utf-8")
    except UnicodeDecodeError as e:
        raise RenderError(f"Template is not valid UTF-8: {e}") from e

    replacements = build_replacements(fields, extra)
    leftovers = [p for p in leftover_placeholders(text) if p not in replacements]
    for token in extra or {}:
        if token not in text:
            continue
        for placeholder in leftover_placeholders(replacements[token]):
            if placeholder not in leftovers:
                leftovers.append(placeholder)

    if leftovers:
        if strict:
            raise RenderError(f"Unreplaced placeholders in template: {', '.join(leftovers)}")
        logger.warning(f"Leaving unreplaced placeholders in autorun script: {', '.join(leftovers)}")

    return substitute(text, replacements).encode("utf-8")
