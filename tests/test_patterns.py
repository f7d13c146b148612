"""
Tests for command patterns — cross-manager regexes and literal escaping.
"""

import re

import pytest

from pkgpilot.core.services.pm_patterns import (
    compile_command_pattern,
    escape_regex,
    get_command_pattern,
)


def _matches(action: str, command: str) -> bool:
    return re.search(get_command_pattern(action), command) is not None


class TestKnownActions:
    @pytest.mark.parametrize("command", ["npm install", "pnpm install", "yarn", "yarn install", "bun install"])
    def test_install(self, command):
        assert _matches("install", command)

    @pytest.mark.parametrize("command", [
        "npm test", "npm run test", "pnpm test", "yarn test", "bun test", "bun run test",
    ])
    def test_test(self, command):
        assert _matches("test", command)

    def test_test_rejects_other_tools(self):
        assert not _matches("test", "cargo test")
        assert not _matches("test", "go test ./...")

    def test_test_contains_literal_forms(self):
        pattern = get_command_pattern("test")
        for form in ("npm test", "pnpm test", "bun test"):
            assert form in pattern

    def test_build_contains_literal_forms(self):
        pattern = get_command_pattern("build")
        assert "npm run build" in pattern
        assert "yarn build" in pattern

    def test_dev(self):
        pattern = get_command_pattern("dev")
        assert "npm run dev" in pattern
        assert "pnpm" in pattern
        assert "yarn dev" in pattern
        assert "bun run dev" in pattern
        assert _matches("dev", "pnpm dev")
        assert _matches("dev", "pnpm run dev")

    def test_is_group(self):
        pattern = get_command_pattern("lint")
        assert pattern.startswith("(") and pattern.endswith(")")


class TestCustomActions:
    @pytest.mark.parametrize("command", ["npm run lint", "pnpm lint", "pnpm run lint", "yarn lint", "bun run lint"])
    def test_forms(self, command):
        assert _matches("lint", command)

    def test_npm_needs_run(self):
        assert not _matches("lint", "npm lint")

    def test_compiled(self):
        regex = compile_command_pattern("typecheck")
        assert regex.search("bun run typecheck")
        assert not regex.search("tsc --noEmit")


class TestEscaping:
    def test_dot_is_literal(self):
        regex = compile_command_pattern("test.all")
        assert regex.search("npm run test.all")
        assert not regex.search("npm run testXall")

    def test_brackets(self):
        assert _matches("build[prod]", "npm run build[prod]")

    def test_parentheses_compile(self):
        regex = compile_command_pattern("foo(bar)")
        assert regex.search("npm run foo(bar)")

    def test_pipe_is_not_alternation(self):
        regex = compile_command_pattern("lint|fix")
        assert regex.search("npm run lint|fix")
        assert not regex.search("npm run lint")
        assert not regex.search("fix")

    def test_dollar(self):
        assert _matches("deploy$prod", "npm run deploy$prod")

    def test_all_metacharacters(self):
        action = "test.*+?^${}()|[]\\"
        regex = compile_command_pattern(action)
        assert regex.search(f"npm run {action}")

    def test_dash_not_special(self):
        regex = compile_command_pattern("simple-test")
        assert regex.search("npm run simple-test")
        assert not regex.search("npm run simpleXtest")

    def test_spaces_preserved(self):
        assert _matches(" dev ", "npm run  dev ")

    @pytest.mark.parametrize("text, expected", [
        ("a.b", r"a\.b"),
        ("x|y", r"x\|y"),
        ("[a]", r"\[a\]"),
        ("a\\b", "a\\\\b"),
        ("plain-name_1", "plain-name_1"),
        ("@scope/pkg", "@scope/pkg"),
    ])
    def test_escape_regex(self, text, expected):
        assert escape_regex(text) == expected
