"""ソースツリーのパッケージ配置検証ロジック。"""

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from prefixguard.models.errors import SourceReadError
from prefixguard.validators.patterns import PathPattern, compile_patterns, directory_pattern, matches_any

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_INCLUDES: tuple[str, ...] = ("**/*.java",)


class SourceTreeValidator:
    """許可プレフィックス外に置かれたソースファイルを検出する。

    ファイルは次のいずれかを満たせば問題なしとみなす。

    - いずれかの許可プレフィックス配下（``prefix/**``）にある
    - スキップパターンのいずれかに一致する
    """

    def __init__(
        self,
        allowed_prefixes: Iterable[str],
        skipped_files: Iterable[str] = (),
        includes: Iterable[str] = DEFAULT_SOURCE_INCLUDES,
    ) -> None:
        self._allowed_prefixes = list(allowed_prefixes)
        self._prefix_patterns = [directory_pattern(prefix) for prefix in self._allowed_prefixes]
        self._skipped_patterns: list[PathPattern] = compile_patterns(skipped_files)
        self._include_patterns: list[PathPattern] = compile_patterns(includes)

    @property
    def allowed_prefixes(self) -> list[str]:
        return list(self._allowed_prefixes)

    def _iter_source_files(self, source_root: Path) -> list[str]:
        """source_root配下の対象ソースファイルを '/' 区切りの相対パスで返す。

        Raises:
            SourceReadError: 走査中に読めないディレクトリがあった場合。
        """

        def _raise(error: OSError) -> None:
            raise error

        relative_paths: list[str] = []
        try:
            for dirpath, _, filenames in os.walk(source_root, onerror=_raise):
                base = Path(dirpath)
                for filename in filenames:
                    relative_paths.append((base / filename).relative_to(source_root).as_posix())
        except OSError as e:
            raise SourceReadError(str(source_root), e.strerror or str(e)) from e

        return sorted(path for path in relative_paths if matches_any(path, self._include_patterns))

    def is_compliant(self, relative_path: str) -> bool:
        return matches_any(relative_path, self._prefix_patterns) or matches_any(
            relative_path, self._skipped_patterns
        )

    def validate(self, source_root: Path) -> list[str]:
        """単一のソースルートを検証する。

        Args:
            source_root: ソースルートディレクトリ。

        Returns:
            問題のあるファイルの相対パスのリスト。存在しないルートは空リスト。
        """
        if not source_root.is_dir():
            logger.info("Skipping source root %s: not an existing directory", source_root)
            return []

        problems = [path for path in self._iter_source_files(source_root) if not self.is_compliant(path)]
        logger.debug("Source root %s: %d problematic files", source_root, len(problems))
        return problems

    def validate_roots(self, source_roots: Iterable[Path]) -> list[str]:
        """複数のソースルートを順に検証し、結果を1つのリストに集約する。"""
        problems: list[str] = []
        for source_root in source_roots:
            logger.info("\t%s", source_root)
            problems.extend(self.validate(source_root))
        return problems
