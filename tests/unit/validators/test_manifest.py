"""マニフェスト解析とManifestValidatorのユニットテスト。"""

from collections.abc import Callable
from pathlib import Path

import pytest

from prefixguard.models.errors import ManifestReadError
from prefixguard.validators.manifest import ManifestValidator, parse_manifest, split_package_names


class TestParseManifest:
    def test_simple_headers(self, write_manifest: Callable[[str], Path]) -> None:
        path = write_manifest(
            "Manifest-Version: 1.0\nBundle-SymbolicName: com.acme.util\nExport-Package: com.acme.util\n"
        )
        headers = parse_manifest(path)
        assert headers["Manifest-Version"] == "1.0"
        assert headers["Export-Package"] == "com.acme.util"

    def test_continuation_lines(self, write_manifest: Callable[[str], Path]) -> None:
        path = write_manifest("Manifest-Version: 1.0\r\nExport-Package: com.acme.ut\r\n il,com.acme.api\r\n")
        assert parse_manifest(path)["Export-Package"] == "com.acme.util,com.acme.api"

    def test_main_section_ends_at_blank_line(self, write_manifest: Callable[[str], Path]) -> None:
        path = write_manifest("Manifest-Version: 1.0\n\nName: foo/Bar.class\nExport-Package: x\n")
        assert "Export-Package" not in parse_manifest(path)

    def test_malformed_line(self, write_manifest: Callable[[str], Path]) -> None:
        path = write_manifest("Manifest-Version: 1.0\nthis is not a header\n")
        with pytest.raises(ManifestReadError) as exc_info:
            parse_manifest(path)
        assert "line 2" in exc_info.value.reason

    def test_leading_continuation_line(self, write_manifest: Callable[[str], Path]) -> None:
        path = write_manifest(" orphan\n")
        with pytest.raises(ManifestReadError):
            parse_manifest(path)

    def test_not_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "MANIFEST.MF"
        path.write_bytes(b"Export-Package: \xff\xfe\n")
        with pytest.raises(ManifestReadError):
            parse_manifest(path)

    def test_directory_is_unreadable(self, tmp_path: Path) -> None:
        with pytest.raises(ManifestReadError):
            parse_manifest(tmp_path)


class TestSplitPackageNames:
    def test_plain_list(self) -> None:
        assert split_package_names("com.a, com.b,com.c") == ["com.a", "com.b", "com.c"]

    def test_attributes_are_dropped(self) -> None:
        value = 'com.a;version="[1.0,2.0)",com.b;uses:="com.x.internal"'
        assert split_package_names(value) == ["com.a", "com.b"]

    def test_multiple_packages_in_one_clause(self) -> None:
        assert split_package_names("com.a;com.b;version=1.0") == ["com.a", "com.b"]

    def test_empty_value(self) -> None:
        assert split_package_names("") == []


class TestManifestValidator:
    def test_export_violation(self) -> None:
        result = ManifestValidator(["internal"]).validate({"Export-Package": "com.acme.internal.util"})
        assert len(result.violations) == 1
        violation = result.violations[0]
        assert violation.header == "Export-Package"
        assert violation.package_name == "com.acme.internal.util"
        assert violation.token == "internal"

    def test_import_violation_and_clean_export(self) -> None:
        result = ManifestValidator(["internal"]).validate(
            {"Export-Package": "com.acme.api", "Import-Package": "org.foo.internal,org.bar"}
        )
        assert [(v.header, v.package_name) for v in result.violations] == [("Import-Package", "org.foo.internal")]
        assert result.checked_headers == ["Export-Package", "Import-Package"]

    def test_token_is_substring_match(self) -> None:
        result = ManifestValidator(["impl"]).validate({"Export-Package": "com.acme.implementation"})
        assert len(result.violations) == 1

    def test_every_token_reported(self) -> None:
        result = ManifestValidator(["internal", "impl"]).validate({"Export-Package": "com.internal.impl"})
        assert [v.token for v in result.violations] == ["internal", "impl"]

    def test_no_headers(self) -> None:
        result = ManifestValidator(["internal"]).validate({"Manifest-Version": "1.0"})
        assert result.violations == []
        assert result.checked_headers == []

    def test_validate_file_missing(self, tmp_path: Path) -> None:
        assert ManifestValidator().validate_file(tmp_path / "META-INF" / "MANIFEST.MF") is None

    def test_validate_file(self, write_manifest: Callable[[str], Path]) -> None:
        path = write_manifest("Manifest-Version: 1.0\nExport-Package: com.acme.internal.util\n")
        result = ManifestValidator().validate_file(path)
        assert result is not None
        assert len(result.violations) == 1
