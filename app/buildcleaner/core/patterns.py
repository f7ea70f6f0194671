"""Name matching for cleaning rules.

Folder rules are exact directory names. File rules are globs over a
bare file name supporting ``*`` (any run of characters, possibly empty)
and ``?`` (exactly one character). There are no character classes and
no escapes; every other glyph is literal. Matching is case-sensitive
and must consume the whole name.
"""

import os
from collections.abc import Iterable

from buildcleaner.models.rules import CleaningRule, RuleKind

_SEPARATORS: tuple[str, ...] = tuple({"/", os.sep})


def matches(pattern: str, name: str) -> bool:
    """Check whether a name matches a single rule pattern.

    A pattern ending with a path separator is a folder rule and must
    equal ``name`` exactly once the separator is stripped. Anything
    else is treated as a glob.

    Args:
        pattern: Folder rule (``"target/"``) or file glob (``"*.log"``).
        name: Bare file or directory name.

    Returns:
        True if the whole name matches, False otherwise.
    """
    if pattern.endswith(_SEPARATORS):
        return pattern[:-1] == name
    return _glob_match(pattern, name)


def _glob_match(pattern: str, text: str) -> bool:
    memo: dict[tuple[int, int], bool] = {}

    def match_at(p: int, t: int) -> bool:
        key = (p, t)
        if key in memo:
            return memo[key]

        if p == len(pattern):
            result = t == len(text)
        elif pattern[p] == "*":
            # Try every suffix, including the empty one
            result = any(match_at(p + 1, i) for i in range(t, len(text) + 1))
        elif pattern[p] == "?":
            result = t < len(text) and match_at(p + 1, t + 1)
        else:
            result = t < len(text) and text[t] == pattern[p] and match_at(p + 1, t + 1)

        memo[key] = result
        return result

    return match_at(0, 0)


def matches_rule(kind: RuleKind, rule: str, name: str) -> bool:
    """Match a name against a stored rule of the given kind.

    Folder rules are stored without a trailing separator, so they are
    turned back into folder patterns here.

    Args:
        kind: Kind of the rule.
        rule: Stored rule (folder name or file glob).
        name: Bare file or directory name.

    Returns:
        True if the name matches the rule.
    """
    if kind is RuleKind.FOLDER:
        return matches(f"{rule}/", name)
    if kind is RuleKind.FILE:
        return matches(rule, name)
    msg = f"Unknown rule kind: {kind!r}"
    raise ValueError(msg)


def matches_any(kind: RuleKind, rules: CleaningRule | Iterable[str], name: str) -> bool:
    """Check whether a name matches any rule of the given kind.

    Args:
        kind: Kind of rules to apply.
        rules: Either a full CleaningRule or an iterable of stored rules.
        name: Bare file or directory name.

    Returns:
        True if at least one rule matches.
    """
    candidates = rules.patterns(kind) if isinstance(rules, CleaningRule) else rules
    return any(matches_rule(kind, rule, name) for rule in candidates)
