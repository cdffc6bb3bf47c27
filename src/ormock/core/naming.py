"""Naming helpers matching the ORM's utilities.

Singular/plural forms come from the ``inflection`` package, the Python
port of the inflector the ORM itself uses.
"""

import inflection


def uppercase_first(text: str) -> str:
    """Uppercase the first character of a string."""
    return text[:1].upper() + text[1:]


def singularize(word: str) -> str:
    return inflection.singularize(word)


def pluralize(word: str) -> str:
    return inflection.pluralize(word)


def method_suffix(name: str) -> str:
    """Snake-case a model or alias name for use in a generated method name.

    Example:
        >>> method_suffix("UserProfile")
        'user_profile'
    """
    return inflection.underscore(name)
