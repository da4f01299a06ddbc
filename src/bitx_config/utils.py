"""Merge helpers for bitx-config."""

from typing import Any

PROJECT_OVERRIDE_HEADER = "\n\n# Project-specific rules (override global):\n\n"


def merge_text(global_content: str | None, project_content: str | None) -> str:
    """Merge global and project text content.

    Global content is kept, and project content follows it after an annotation
    header. "Override" tells the reader which part is more specific. Nothing
    from the global side is removed.

    Args:
        global_content: Global text or None
        project_content: Project text or None

    Returns:
        Merged text ("" when neither side has content)

    Examples:
        >>> merge_text(None, None)
        ''
        >>> merge_text("global", None)
        'global'
        >>> merge_text("global", "project")
        'global\\n\\n# Project-specific rules (override global):\\n\\nproject'
    """
    merged = global_content or ""

    if project_content:
        if merged:
            merged += PROJECT_OVERRIDE_HEADER
        merged += project_content

    return merged


def deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two settings mappings, overlay taking precedence.

    Nested mappings merge recursively. Any other value from overlay, lists
    included, replaces the base value outright.

    Args:
        base: Lower-precedence settings (global)
        overlay: Higher-precedence settings (project)

    Returns:
        New merged dictionary; neither input is modified

    Examples:
        >>> deep_merge({"model": {"name": "a", "temperature": 0}}, {"model": {"name": "b"}})
        {'model': {'name': 'b', 'temperature': 0}}
    """
    result = dict(base)

    for key, value in overlay.items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = deep_merge(current, value)
        else:
            result[key] = value

    return result
