"""Macro expansion of ``$NAME`` / ``${NAME}`` tokens.

Unknown names are left as written so a path like ``$UNSET/env`` survives
expansion untouched. ``$$`` is an escaped literal dollar sign.
"""

import re
from typing import Mapping, Optional

_MACRO = re.compile(r"\$(\$|\{(?P<braced>[A-Za-z0-9_.]+)\}|(?P<bare>[A-Za-z0-9_]+))")


def replace_macro(template: Optional[str], variables: Mapping[str, str]) -> Optional[str]:
    """Expand macro tokens in template using variables.

    Examples:
        >>> replace_macro("$WORKSPACE/env", {"WORKSPACE": "/ws"})
        '/ws/env'
        >>> replace_macro("${HOME}/x-$MISSING", {"HOME": "/h"})
        '/h/x-$MISSING'
        >>> replace_macro("cost: $$5", {})
        'cost: $5'
    """
    if template is None:
        return None

    def _substitute(match: "re.Match[str]") -> str:
        if match.group(1) == "$":
            return "$"
        name = match.group("braced") or match.group("bare")
        value = variables.get(name)
        if value is None:
            return match.group(0)
        return value

    return _MACRO.sub(_substitute, template)


__all__ = ["replace_macro"]
