"""Encoding of request parameters.

GET requests carry parameters in the query string, where a list value
repeats its key (``members=a&members=b``). Other methods send the same
parameter map as a JSON body.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import date
from typing import Any
from urllib.parse import quote_plus, urlencode


def stringify(value: Any) -> str:
    """Render a scalar parameter value: ``True`` -> ``"true"``, dates as ISO."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def to_query_string(parameters: Mapping[str, Any]) -> str:
    """Encode parameters as ``?k=v&...``, or ``""`` when there are none.

    Examples:
        >>> to_query_string({"$fields": "*,parent!", "members": ["a", "b"]})
        '?%24fields=*%2Cparent%21&members=a&members=b'
    """
    pairs: list[tuple[str, str]] = []
    for key, value in parameters.items():
        if isinstance(value, (list, tuple)):
            pairs.extend((key, stringify(item)) for item in value)
        else:
            pairs.append((key, stringify(value)))
    if not pairs:
        return ""
    return "?" + urlencode(pairs, quote_via=quote_plus, safe="*")


def to_json_body(parameters: Mapping[str, Any]) -> str | None:
    """Encode parameters as a JSON object, or ``None`` when there are none."""
    if not parameters:
        return None
    return json.dumps(parameters, default=stringify)
