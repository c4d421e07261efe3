"""Name casing helpers for generated TypeScript identifiers."""

import re

_WORD_SEPARATOR = re.compile(r"[_\-\s]+")
_LEADING_UPPER = re.compile(r"^[A-Z]+")


def pascalize(text: str) -> str:
    """Convert snake_case, kebab-case or spaced text into PascalCase.

    Existing inner capitals are kept, so ``GetUser`` stays ``GetUser``.
    """
    parts = [part for part in _WORD_SEPARATOR.split(text.strip()) if part]
    return "".join(part[:1].upper() + part[1:] for part in parts)


def camelize(text: str) -> str:
    """Convert text into lowerCamelCase.

    Examples:
        ``GetUser`` -> ``getUser``
        ``user_profile`` -> ``userProfile``
        ``URLBuilder`` -> ``urlBuilder``
        ``ID`` -> ``id``

    """
    pascal = pascalize(text)
    match = _LEADING_UPPER.match(pascal)
    if not match:
        return pascal

    run = match.group(0)
    if len(run) == len(pascal):
        return pascal.lower()
    if len(run) == 1:
        return run.lower() + pascal[1:]
    # Acronym prefix: keep the capital that starts the next word
    return run[:-1].lower() + pascal[len(run) - 1 :]
