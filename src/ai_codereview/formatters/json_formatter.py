"""JSON export of review reports."""

import json
from typing import Any, Mapping


def render_json(data: Mapping[str, Any]) -> str:
    """Pretty JSON for a report in its dashboard (``to_dict``) form."""
    return json.dumps(data, indent=2, ensure_ascii=False)
