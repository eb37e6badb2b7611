"""
String utility functions for prismafill.

Naming transformations used to guess MongoDB collection names and output
file names from Prisma model names.
"""

from __future__ import annotations

import re

# Plurals that no suffix rule produces
_IRREGULAR_PLURALS = {
    "person": "people",
    "child": "children",
    "man": "men",
    "woman": "women",
    "mouse": "mice",
    "datum": "data",
    "medium": "media",
    "criterion": "criteria",
    "index": "indices",
    "matrix": "matrices",
    "vertex": "vertices",
}

# Words whose plural is the same as the singular
_UNCOUNTABLE = {"equipment", "information", "metadata", "news", "series", "species"}

# (pattern, replacement) tried in order; the first match wins
_SUFFIX_RULES = [
    (re.compile(r"(hero|potato|tomato|echo|veto)$", re.IGNORECASE), r"\1es"),
    (re.compile(r"(s|x|z|ch|sh)$", re.IGNORECASE), r"\1es"),
    (re.compile(r"([^aeiou])y$", re.IGNORECASE), r"\1ies"),
    (re.compile(r"(el|al|ol|ea|oa|ar)f$", re.IGNORECASE), r"\1ves"),
    (re.compile(r"fe$", re.IGNORECASE), "ves"),
]

# Trailing word of a model or collection name: after the last "-"/"_", or the
# last capitalised word of a CamelCase name
_LAST_WORD_RE = re.compile(r"^(.*[-_]|.+?(?=[A-Z][a-z]+$))?(.+)$")


def _match_case(plural: str, word: str) -> str:
    return plural.capitalize() if word[:1].isupper() else plural


def _inflect(word: str) -> str:
    lower_word = word.lower()
    if lower_word in _UNCOUNTABLE:
        return word
    if lower_word in _IRREGULAR_PLURALS:
        return _match_case(_IRREGULAR_PLURALS[lower_word], word)

    for pattern, replacement in _SUFFIX_RULES:
        if pattern.search(word):
            return pattern.sub(replacement, word, count=1)
    return word + "s"


def pluralize(word: str) -> str:
    """
    Convert a singular English word to its plural form.

    Only the last word is inflected, so CamelCase, kebab-case and snake_case
    names keep their prefix untouched.

    Examples:
        >>> pluralize("Task")
        'Tasks'
        >>> pluralize("UserProfile")
        'UserProfiles'
        >>> pluralize("user-category")
        'user-categories'
        >>> pluralize("Person")
        'People'
    """
    if not word:
        return word
    match = _LAST_WORD_RE.match(word)
    assert match is not None
    prefix, last_word = match.groups()
    return (prefix or "") + _inflect(last_word)


def camel_to_snake(name: str) -> str:
    """
    Convert CamelCase to snake_case.

    Examples:
        >>> camel_to_snake("UserProfile")
        'user_profile'
        >>> camel_to_snake("HTTPRequest")
        'http_request'
    """
    s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", name)
    s2 = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1)
    return re.sub(r"[\s\-_]+", "_", s2).strip("_").lower()


def kebab_case(name: str) -> str:
    """
    Convert a name to kebab-case.

    Examples:
        >>> kebab_case("UserProfile")
        'user-profile'
        >>> kebab_case("order_item")
        'order-item'
    """
    return camel_to_snake(name).replace("_", "-")
