"""Antスタイル（``**`` 対応）のパスパターン照合。

パスは '/' 区切りの相対パスとして扱い、大文字小文字を区別する。

- ``*`` : 1セグメント内の任意の文字列
- ``?`` : 1セグメント内の任意の1文字
- ``**``: 0個以上のディレクトリ
- 末尾が ``/`` のパターンは ``/**`` とみなす
"""

import re
from collections.abc import Iterable

from prefixguard.models.errors import InvalidPatternError


def _translate_segment(segment: str) -> str:
    parts: list[str] = []
    for char in segment:
        if char == "*":
            parts.append("[^/]*")
        elif char == "?":
            parts.append("[^/]")
        else:
            parts.append(re.escape(char))
    return "".join(parts)


def _validate(pattern: str) -> None:
    if not pattern.strip():
        raise InvalidPatternError(pattern, "pattern is empty")
    if pattern.startswith("/"):
        raise InvalidPatternError(pattern, "pattern must be relative")
    if "\\" in pattern:
        raise InvalidPatternError(pattern, "use '/' as the path separator")
    for segment in pattern.split("/"):
        if "**" in segment and segment != "**":
            raise InvalidPatternError(pattern, "'**' must be a whole path segment")


class PathPattern:
    """コンパイル済みのパスパターン。"""

    def __init__(self, pattern: str) -> None:
        _validate(pattern)
        self.pattern = pattern
        if pattern.endswith("/"):
            pattern += "**"

        segments = pattern.split("/")
        regex = ""
        for index, segment in enumerate(segments):
            last = index == len(segments) - 1
            if segment == "**":
                regex += ".*" if last else "(?:[^/]*/)*"
            else:
                regex += _translate_segment(segment) + ("" if last else "/")
        self._regex = re.compile(regex)

    def matches(self, path: str) -> bool:
        """相対パスがパターンに一致するか判定する。"""
        return self._regex.fullmatch(path) is not None

    def __repr__(self) -> str:
        return f"PathPattern({self.pattern!r})"


def compile_patterns(patterns: Iterable[str]) -> list[PathPattern]:
    """パターン文字列をまとめてコンパイルする。

    Raises:
        InvalidPatternError: 構文が不正なパターンが含まれる場合。
    """
    return [PathPattern(pattern) for pattern in patterns]


def directory_pattern(prefix: str) -> PathPattern:
    """プレフィックス配下の全ファイルに一致するパターン（``prefix/**``）を返す。"""
    return PathPattern(f"{prefix}/**")


def matches_any(path: str, patterns: Iterable[PathPattern]) -> bool:
    return any(pattern.matches(path) for pattern in patterns)
