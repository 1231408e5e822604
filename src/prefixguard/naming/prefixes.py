"""モジュール座標（groupId/artifactId）からの許可パッケージプレフィックス導出。"""

import re
from collections.abc import Iterable

from prefixguard.models.errors import ConfigurationError

# Mavenプラグインの命名規則によるartifactIdの接尾辞
MAVEN_PLUGIN_SUFFIX = "-maven-plugin"

DEFAULT_PACKAGE_PARTS_TO_SKIP: tuple[str, ...] = ("commons",)

# '.' と '-' はどちらもパッケージ区切りとして扱う
_PACKAGE_SEPARATOR_RE = re.compile(r"[.-]")


def _remove_first(value: str, fragment: str) -> str | None:
    """最初に出現したfragmentを取り除いた文字列を返す。含まれない場合はNone。"""
    start = value.find(fragment)
    if start < 0:
        return None
    return value[:start] + value[start + len(fragment) :]


def _unique(values: Iterable[str]) -> list[str]:
    """挿入順を保ったまま重複を除く。"""
    return list(dict.fromkeys(values))


def possible_ids(id_: str, parts_to_skip: Iterable[str] = DEFAULT_PACKAGE_PARTS_TO_SKIP) -> list[str]:
    """識別子から許容される表記ゆれの候補を列挙する。

    元の識別子、``-maven-plugin`` を除いたもの、スキップ対象の部分文字列を
    1箇所だけ取り除いたもの、末尾の ``s`` を除いた単数形を返す。

    Args:
        id_: ドット/ハイフン区切りの識別子。
        parts_to_skip: 省略可能な歴史的命名の断片（例: ``commons``）。

    Returns:
        重複のない候補のリスト。先頭は常に元の識別子。
    """
    ids = [id_]

    if id_.endswith(MAVEN_PLUGIN_SUFFIX):
        ids.append(id_[: -len(MAVEN_PLUGIN_SUFFIX)])

    for part in parts_to_skip:
        for fragment in (f".{part}", f"-{part}", f"{part}-"):
            variant = _remove_first(id_, fragment)
            if variant is not None:
                ids.append(variant)

    if id_.endswith("s"):
        ids.append(id_[:-1])

    return _unique(ids)


def convert_package_to_file(id_: str) -> str:
    """識別子を '/' 区切りのディレクトリパスに変換する。"""
    return "/".join(_PACKAGE_SEPARATOR_RE.split(id_))


def _collapse_repeated_segments(prefix: str) -> str:
    # a/b/ear/ear -> a/b/ear
    return "/".join(_unique(prefix.split("/")))


def create_allowed_prefixes(
    group_id: str,
    artifact_id: str,
    package_parts_to_skip: Iterable[str] = DEFAULT_PACKAGE_PARTS_TO_SKIP,
) -> list[str]:
    """groupIdとartifactIdからソースファイルの許可ルートプレフィックスを導出する。

    候補生成は ``groupId + "." + artifactId`` の結合文字列に対して1回だけ行う。
    結合位置をまたぐ接尾辞・部分文字列の除去を正しく扱うため。

    Args:
        group_id: groupId。
        artifact_id: artifactId。
        package_parts_to_skip: 省略可能な命名の断片。

    Returns:
        重複のない許可プレフィックスのリスト（生成順）。

    Raises:
        ConfigurationError: group_idまたはartifact_idが空の場合。
    """
    if not group_id or not artifact_id:
        raise ConfigurationError(
            f"groupId and artifactId must not be empty (groupId={group_id!r}, artifactId={artifact_id!r})"
        )

    combined = f"{group_id}.{artifact_id}"
    prefixes = [convert_package_to_file(candidate) for candidate in possible_ids(combined, package_parts_to_skip)]

    collapsed = [_collapse_repeated_segments(prefix) for prefix in prefixes]
    return _unique(prefixes + collapsed)


def create_allowed_prefix(group_id: str, artifact_id: str) -> str:
    """代表となる単一のプレフィックスを返す。artifactIdの ``-maven-plugin`` は除く。"""
    if artifact_id.endswith(MAVEN_PLUGIN_SUFFIX):
        artifact_id = artifact_id[: -len(MAVEN_PLUGIN_SUFFIX)]
    return convert_package_to_file(f"{group_id}.{artifact_id}")
