"""Error-message templating.

Templates use ``{field}`` and ``{value}`` plus one rule-specific placeholder:

- ``list``: ``{list}`` (comma-joined allowed values)
- ``range``: ``{range[min]}`` and ``{range[max]}``
- ``len``: ``{len[min]}`` and ``{len[max]}``
- any other rule name ``x``: ``{x}`` (the rule's raw parameter)

Placeholders that do not apply are left as they are.
"""

from collections.abc import Mapping
from typing import Any

from .values import display_value


def render_message(
    template: str,
    field: str,
    value: Any = None,
    rule_name: str | None = None,
    rule_param: Any = None,
) -> str:
    """Render a message template.

    Args:
        template: Template string
        field: Field name substituted for every ``{field}``
        value: Offending value substituted for every ``{value}``
        rule_name: Name of the rule member that failed, as declared
        rule_param: That member's configured parameter

    Returns:
        The rendered message

    Example:
        ```python
        render_message("{field} must be one of {list}", "status", 9, "list", [1, 2, 3])
        # 'status must be one of 1,2,3'
        ```
    """
    message = template.replace("{field}", field)
    message = message.replace("{value}", display_value(value))

    if not rule_name:
        return message

    if rule_name == "list":
        message = message.replace("{list}", display_value(rule_param), 1)
    elif rule_name in ("range", "len"):
        bounds = rule_param if isinstance(rule_param, Mapping) else {}
        message = message.replace(
            f"{{{rule_name}[min]}}", display_value(bounds.get("min")), 1
        )
        message = message.replace(
            f"{{{rule_name}[max]}}", display_value(bounds.get("max")), 1
        )
    else:
        message = message.replace(f"{{{rule_name}}}", display_value(rule_param), 1)

    return message
