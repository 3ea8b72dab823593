"""Default naming rules applied to wrapped remote schemas."""

from __future__ import annotations

import re
from collections.abc import Callable

from gqlregistry.domain.ports import RewriteRule

_BOUNDARIES = (
    re.compile(r"([a-z0-9])([A-Z])"),
    re.compile(r"([A-Z])([A-Z][a-z])"),
)
_SEPARATORS = re.compile(r"[^A-Za-z0-9]+")


def split_words(value: str) -> list[str]:
    for boundary in _BOUNDARIES:
        value = boundary.sub(r"\1 \2", value)
    return [word for word in _SEPARATORS.split(value) if word]


def pascal_case(value: str) -> str:
    """``book_author`` -> ``BookAuthor``; ``HTTPStatus`` -> ``HttpStatus``.

    A word after the first that starts with a digit keeps an underscore in
    front of it, so ``version_2`` becomes ``Version_2``.
    """

    return "".join(_capitalize(word, index) for index, word in enumerate(split_words(value)))


def _capitalize(word: str, index: int) -> str:
    if index > 0 and word[0].isdigit():
        return f"_{word[0]}{word[1:].lower()}"
    return word[0].upper() + word[1:].lower()


def camel_case(value: str) -> str:
    """``books_by_pk`` -> ``booksByPk``."""

    pascal = pascal_case(value)
    return pascal[:1].lower() + pascal[1:]


class RenameTypes(RewriteRule):
    def __init__(self, renamer: Callable[[str], str] = pascal_case) -> None:
        self.renamer = renamer

    def rename_type(self, name: str) -> str:
        return self.renamer(name)


class RenameFields(RewriteRule):
    """Rename object, interface and input object fields outside the root types."""

    def __init__(self, renamer: Callable[[str], str] = camel_case) -> None:
        self.renamer = renamer

    def rename_field(self, type_name: str, field_name: str) -> str:
        return self.renamer(field_name)


class RenameRootFields(RewriteRule):
    def __init__(self, renamer: Callable[[str], str] = camel_case) -> None:
        self.renamer = renamer

    def rename_root_field(self, operation: str, field_name: str) -> str:
        return self.renamer(field_name)


def default_naming_rules() -> tuple[RewriteRule, ...]:
    return (RenameTypes(), RenameRootFields(), RenameFields())
