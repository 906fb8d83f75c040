from __future__ import annotations

import re
from types import MappingProxyType
from typing import Mapping, Optional

PLACEHOLDER_PATTERN = re.compile(r"\$([A-Za-z0-9_]+)\$")

DEFAULT_REPLACEMENTS: Mapping[str, str] = MappingProxyType(
    {
        "USERS_TABLE_NAME": "auth_user",
        "SESSIONS_TABLE_NAME": "auth_session",
        "EMAIL_UNIQUE": "UNIQUE",
    }
)


class SQLTemplateReplacer:
    """Substitutes ``$NAME$`` tokens in statement skeletons.

    The dictionary is the default one with ``overrides`` merged on top: keys
    present in ``overrides`` win, all other defaults are kept and unknown keys
    become new entries. The dictionary cannot be changed after construction;
    build a new replacer instead.

    Substitution happens in a single pass, so replacement text that itself
    looks like a token is never substituted again. Tokens without an entry
    are left untouched.
    """

    def __init__(
        self,
        overrides: Optional[Mapping[str, str]] = None,
        *,
        defaults: Mapping[str, str] = DEFAULT_REPLACEMENTS,
    ) -> None:
        merged = dict(defaults)
        if overrides:
            merged.update(overrides)
        self._mapping = MappingProxyType(merged)

    @property
    def mapping(self) -> Mapping[str, str]:
        return self._mapping

    def apply(self, skeleton: str) -> str:
        def _substitute(match: re.Match[str]) -> str:
            value = self._mapping.get(match.group(1))
            return match.group(0) if value is None else value

        return PLACEHOLDER_PATTERN.sub(_substitute, skeleton)

    def unresolved(self, skeleton: str) -> list[str]:
        """Return the tokens in ``skeleton`` that have no entry, in order of appearance."""
        return [match.group(0) for match in PLACEHOLDER_PATTERN.finditer(skeleton) if match.group(1) not in self._mapping]
