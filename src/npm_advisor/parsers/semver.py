"""Node-compatible semver ranges built atop semver.Version.

Supported range expressions:
- exact versions (e.g., "1.2.3", "=1.2.3", "v1.2.3")
- caret ranges ^x.y.z → >=x.y.z <x+1.0.0-0 (left-most non-zero part is locked)
- tilde ranges ~x.y.z → >=x.y.z <x.y+1.0-0
- X-ranges and partial versions: "*", "1.x", "1.2", ""
- hyphen ranges "1.2.3 - 2.3.4"
- comparator sets split by spaces, e.g., ">=1.0.0 <2.0.0"
- unions joined by "||"

Only the strict grammar is accepted: anything else (git URLs, tags such as
"latest", file paths) is not a valid version or range.
"""

from __future__ import annotations

import re

from semver import Version

MAX_LENGTH = 256

_NUM = r"0|[1-9]\d*"
_XR = rf"(?:{_NUM}|x|X|\*)"
_IDENT = r"(?:0|[1-9]\d*|\d*[a-zA-Z-][a-zA-Z0-9-]*)"
_PRERELEASE = rf"(?:-(?P<pre>{_IDENT}(?:\.{_IDENT})*))"
_BUILD = r"(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))"

_PARTIAL = (
    rf"v?=?\s*(?P<major>{_XR})(?:\.(?P<minor>{_XR})(?:\.(?P<patch>{_XR})"
    rf"{_PRERELEASE}?{_BUILD}?)?)?"
)
_COMPARATOR_RE = re.compile(rf"^(?P<op><=|>=|<|>|=|~>|~|\^)?\s*{_PARTIAL}$")

_HYPHEN_RE = re.compile(r"^(?P<low>\S+)\s+-\s+(?P<high>\S+)$")
_OPERATOR_SPACE_RE = re.compile(r"(<=|>=|<|>|=|~>|~|\^)\s+")


def _make(major: int, minor: int, patch: int, pre: str | None = None) -> Version:
    return Version(major, minor, patch, pre or None)


def _next_major(v: Version) -> Version:
    return _make(v.major + 1, 0, 0, "0")


def _next_minor(v: Version) -> Version:
    return _make(v.major, v.minor + 1, 0, "0")


def _next_patch(v: Version) -> Version:
    return _make(v.major, v.minor, v.patch + 1, "0")


def parse(version: str) -> Version:
    """Parse an exact version, raising ValueError when it is not one.

    A single leading "v" and surrounding whitespace are accepted; build
    metadata is dropped.
    """
    if not isinstance(version, str) or len(version) > MAX_LENGTH:
        raise ValueError(f"Invalid version: {version!r}")
    text = version.strip()
    if text.startswith("v"):
        text = text[1:]
    return Version.parse(text).replace(build=None)


def valid(version: str) -> str | None:
    """Return the cleaned version string, or None when it is not exact."""
    try:
        return str(parse(version))
    except ValueError:
        return None


def major(version: str) -> int:
    return parse(version).major


def minor(version: str) -> int:
    return parse(version).minor


def patch(version: str) -> int:
    return parse(version).patch


# ---- Ranges ---------------------------------------------------------------------------

# A comparator is (operator, version); ("", None) matches any version.
Comparator = tuple[str, "Version | None"]

_ANY: Comparator = ("", None)
_NONE: Comparator = ("<", _make(0, 0, 0, "0"))


def _is_x(part: str | None) -> bool:
    return part is None or part in {"x", "X", "*"}


def _partial(token: str) -> tuple[str, str | None, str | None, str | None, str | None]:
    match = _COMPARATOR_RE.match(token)
    if not match:
        raise ValueError(f"Invalid comparator: {token!r}")
    return (
        match.group("op") or "",
        match.group("major"),
        match.group("minor"),
        match.group("patch"),
        match.group("pre"),
    )


def _caret(M: str, m: str | None, p: str | None, pre: str | None) -> list[Comparator]:
    if _is_x(M):
        return [_ANY]
    major_ = int(M)
    if _is_x(m):
        low = _make(major_, 0, 0)
        return [(">=", low), ("<", _next_major(low))]
    minor_ = int(m)
    if _is_x(p):
        low = _make(major_, minor_, 0)
        upper = _next_major(low) if major_ else _next_minor(low)
        return [(">=", low), ("<", upper)]
    low = _make(major_, minor_, int(p), pre)
    if major_:
        upper = _next_major(low)
    elif minor_:
        upper = _next_minor(low)
    else:
        upper = _next_patch(low)
    return [(">=", low), ("<", upper)]


def _tilde(M: str, m: str | None, p: str | None, pre: str | None) -> list[Comparator]:
    if _is_x(M):
        return [_ANY]
    major_ = int(M)
    if _is_x(m):
        low = _make(major_, 0, 0)
        return [(">=", low), ("<", _next_major(low))]
    low = _make(major_, int(m), 0 if _is_x(p) else int(p), None if _is_x(p) else pre)
    return [(">=", low), ("<", _next_minor(low))]


def _xrange(
    op: str, M: str, m: str | None, p: str | None, pre: str | None
) -> list[Comparator]:
    any_x = _is_x(M) or _is_x(m) or _is_x(p)
    if op == "=" and any_x:
        op = ""

    if _is_x(M):
        return [_NONE] if op in {"<", ">"} else [_ANY]

    if op and any_x:
        major_ = int(M)
        minor_ = 0 if _is_x(m) else int(m)
        if op == ">":
            # >1 means >=2.0.0, >1.2 means >=1.3.0
            if _is_x(m):
                return [(">=", _make(major_ + 1, 0, 0))]
            return [(">=", _make(major_, minor_ + 1, 0))]
        if op == "<=":
            # <=1 means <2.0.0-0, <=1.2 means <1.3.0-0
            if _is_x(m):
                return [("<", _make(major_ + 1, 0, 0, "0"))]
            return [("<", _make(major_, minor_ + 1, 0, "0"))]
        if op == "<":
            return [("<", _make(major_, minor_, 0, "0"))]
        return [(op, _make(major_, minor_, 0))]

    if _is_x(m):
        low = _make(int(M), 0, 0)
        return [(">=", low), ("<", _next_major(low))]
    if _is_x(p):
        low = _make(int(M), int(m), 0)
        return [(">=", low), ("<", _next_minor(low))]
    return [(op, _make(int(M), int(m), int(p), pre))]


def _parse_comparator(token: str) -> list[Comparator]:
    op, M, m, p, pre = _partial(token)
    if op == "^":
        return _caret(M, m, p, pre)
    if op in {"~", "~>"}:
        return _tilde(M, m, p, pre)
    return _xrange(op, M, m, p, pre)


def _parse_hyphen(low: str, high: str) -> list[Comparator]:
    _, lM, lm, lp, lpre = _partial(low)
    _, hM, hm, hp, hpre = _partial(high)
    comparators: list[Comparator] = []

    if not _is_x(lM):
        comparators.append(
            (
                ">=",
                _make(
                    int(lM),
                    0 if _is_x(lm) else int(lm),
                    0 if _is_x(lp) else int(lp),
                    None if _is_x(lp) else lpre,
                ),
            )
        )

    if not _is_x(hM):
        if _is_x(hm):
            comparators.append(("<", _make(int(hM) + 1, 0, 0, "0")))
        elif _is_x(hp):
            comparators.append(("<", _make(int(hM), int(hm) + 1, 0, "0")))
        else:
            comparators.append(("<=", _make(int(hM), int(hm), int(hp), hpre)))

    return comparators or [_ANY]


def _parse_set(expr: str) -> list[Comparator]:
    expr = expr.strip()
    hyphen = _HYPHEN_RE.match(expr)
    if hyphen:
        return _parse_hyphen(hyphen.group("low"), hyphen.group("high"))

    expr = _OPERATOR_SPACE_RE.sub(r"\1", expr)
    tokens = expr.split()
    if not tokens:
        return [_ANY]

    comparators: list[Comparator] = []
    for token in tokens:
        comparators.extend(_parse_comparator(token))

    # Drop redundant match-anything entries from multi-comparator sets.
    narrowed = [c for c in comparators if c != _ANY]
    return narrowed or [_ANY]


def _parse_range(expr: str) -> list[list[Comparator]]:
    if not isinstance(expr, str) or len(expr) > MAX_LENGTH:
        raise ValueError(f"Invalid range: {expr!r}")
    return [_parse_set(part) for part in re.split(r"\s*\|\|\s*", expr.strip())]


def _format_set(comparators: list[Comparator]) -> str:
    if comparators == [_ANY]:
        return "*"
    return " ".join(f"{op}{version}" for op, version in comparators)


def valid_range(expr: str) -> str | None:
    """Return the normalised range string, or None when expr is not a range."""
    try:
        sets = _parse_range(expr)
    except ValueError:
        return None
    return "||".join(_format_set(s) for s in sets)


def _test(comparator: Comparator, version: Version) -> bool:
    op, bound = comparator
    if bound is None:
        return True
    if op in {"", "="}:
        return version == bound
    if op == ">":
        return version > bound
    if op == ">=":
        return version >= bound
    if op == "<":
        return version < bound
    return version <= bound


def _test_set(comparators: list[Comparator], version: Version) -> bool:
    if not all(_test(c, version) for c in comparators):
        return False

    if version.prerelease:
        # Prereleases only match when the set opts in on the same release triple.
        for _, bound in comparators:
            if bound is None or not bound.prerelease:
                continue
            if bound.to_tuple()[:3] == version.to_tuple()[:3]:
                return True
        return False

    return True


def satisfies(installed: str, expr: str) -> bool:
    """Return True when the exact version ``installed`` matches the range ``expr``."""
    try:
        v = parse(installed)
        sets = _parse_range(expr)
    except ValueError:
        return False
    return any(_test_set(s, v) for s in sets)
