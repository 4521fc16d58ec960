"""Shared helpers for parsing provider and backend responses"""

import json
from typing import Any, Union


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def loads_strict(body: Union[str, bytes]) -> Any:
    """Parse JSON, rejecting NaN, Infinity and -Infinity

    Python's json module accepts those constants but they are not JSON, and
    a payload carrying them cannot be rendered back to the client.

    Raises:
        ValueError: If the body is not valid JSON
    """
    return json.loads(body, parse_constant=_reject_constant)
