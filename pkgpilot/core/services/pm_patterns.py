"""
Command patterns — regex sources that recognise a command in any manager.

Used by callers that need to *recognise* a package-manager invocation
(for example in a shell history line or a hook payload) regardless of
which manager wrote it.  The result is a pattern source string; compile
it with ``re.compile`` or use ``compile_command_pattern``.
"""

from __future__ import annotations

import re

# Exactly the characters with special meaning in a regex source
_REGEX_METACHARACTERS = re.compile(r"[.*+?^${}()|\[\]\\]")


def escape_regex(text: str) -> str:
    """Backslash-escape regex metacharacters so ``text`` matches literally."""
    return _REGEX_METACHARACTERS.sub(lambda m: "\\" + m.group(0), text)


def _surface_forms(action: str) -> list[str]:
    if action == "install":
        # yarn installs when run bare
        return ["npm install", "pnpm install", "yarn install", "yarn", "bun install"]

    if action == "test":
        return [
            "npm test", "npm run test",
            "pnpm test", "pnpm run test",
            "yarn test", "yarn run test",
            "bun test", "bun run test",
        ]

    a = escape_regex(action)
    return [
        f"npm run {a}",
        f"pnpm {a}", f"pnpm run {a}",
        f"yarn {a}", f"yarn run {a}",
        f"bun run {a}",
    ]


def get_command_pattern(action: str) -> str:
    """Build a regex source matching ``action`` under npm, pnpm, yarn or bun.

    Example::

        >>> bool(re.search(get_command_pattern("lint"), "pnpm lint"))
        True
    """
    return "(" + "|".join(_surface_forms(action)) + ")"


def compile_command_pattern(action: str) -> re.Pattern[str]:
    return re.compile(get_command_pattern(action))
