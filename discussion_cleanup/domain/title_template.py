"""Compile discussion title templates into full-string matchers."""

import re

# Placeholders as they appear after re.escape(), e.g. \{login\}
_ESCAPED_PLACEHOLDER = re.compile(r"\\\{[A-Za-z0-9_]+\\\}")
_WILDCARD = ".*?"


class TitleMatcher:
    """Predicate telling whether a title was produced from a template."""

    def __init__(self, template: str, pattern: "re.Pattern[str]"):
        self.template = template
        self.pattern = pattern

    def matches(self, title: str) -> bool:
        return self.pattern.fullmatch(title) is not None

    def __repr__(self) -> str:
        return f"TitleMatcher({self.template!r})"


def compile_title_template(template: str) -> TitleMatcher:
    """
    Build a matcher for titles rendered from ``template``.

    Literal text, regex metacharacters included, must match exactly. Each
    ``{name}`` placeholder matches any run of characters, possibly empty.
    The whole title has to match, not just a substring of it.
    """
    escaped = re.escape(template)
    body = _ESCAPED_PLACEHOLDER.sub(lambda _: _WILDCARD, escaped)
    return TitleMatcher(template, re.compile(f"^{body}$"))
