"""Template Filling — {{key}} token replacement for prompt recipes."""

import re


def fill_template(template: str, values: dict | None) -> str:
    """Replace every {{key}} with its value. None becomes an empty string.

    Tokens without a matching key are left in place.
    """
    result = str(template)
    for key, value in (values or {}).items():
        pattern = re.compile(r"\{\{" + re.escape(str(key)) + r"\}\}")
        replacement = "" if value is None else str(value)
        result = pattern.sub(lambda _m: replacement, result)
    return result
