"""ソース配置検証とマニフェスト検証を束ねるサービス。"""

import logging

from prefixguard.config import ValidatorConfig
from prefixguard.models.errors import NonCompliantSourceError, ProhibitedDependencyError
from prefixguard.models.validation import ValidationReport
from prefixguard.naming.prefixes import create_allowed_prefixes
from prefixguard.validators.manifest import ManifestValidator
from prefixguard.validators.source_tree import SourceTreeValidator

logger = logging.getLogger(__name__)


class ValidationService:
    """設定に従って両方の検証を実行し、fail/warnポリシーを適用する。"""

    def __init__(self, config: ValidatorConfig) -> None:
        self._config = config

    def collect(self) -> ValidationReport:
        """検証を実行して結果を返す。問題が見つかっても例外は送出しない。

        Raises:
            ConfigurationError: スキップパターン等の設定が不正な場合。
            ManifestReadError: マニフェストが存在するが読めない場合。
            SourceReadError: ソースルートの走査中にI/Oエラーが発生した場合。
        """
        config = self._config
        report = ValidationReport(group_id=config.group_id, artifact_id=config.artifact_id)

        if config.packaging in config.skip_packagings:
            logger.info('Skipping for packaging "%s"', config.packaging)
            report.skipped = True
            return report

        logger.info("Validating package prefixes of %s:%s", config.group_id, config.artifact_id)

        report.allowed_prefixes = create_allowed_prefixes(
            config.group_id, config.artifact_id, config.package_parts_to_skip
        )
        logger.info("Allowed prefixes: %s", report.allowed_prefixes)

        source_validator = SourceTreeValidator(
            report.allowed_prefixes,
            skipped_files=config.skipped_files,
            includes=config.source_includes,
        )
        source_roots = config.all_source_roots()
        report.source_roots = [str(root) for root in source_roots]
        logger.info("Source Roots:")
        report.problematic_files = source_validator.validate_roots(source_roots)

        manifest_path = config.resolved_manifest_path()
        if manifest_path is None:
            logger.info("No manifest configured, skipping manifest validation")
        else:
            report.manifest_path = str(manifest_path)
            manifest_result = ManifestValidator(config.prohibited_package_tokens).validate_file(manifest_path)
            if manifest_result is not None:
                report.manifest_checked = True
                report.manifest_checked_headers = manifest_result.checked_headers
                report.manifest_violations = manifest_result.violations

        if report.manifest_violations or (report.problematic_files and config.fail):
            report.outcome = "failure"
        elif report.problematic_files:
            report.outcome = "warning"
        return report

    def run(self) -> ValidationReport:
        """検証を実行し、問題を個別にログ出力してからポリシーを適用する。

        Returns:
            成功または警告のみの場合の検証結果。

        Raises:
            ProhibitedDependencyError: マニフェストに禁止パッケージがある場合（常に）。
            NonCompliantSourceError: failが有効で問題のあるファイルがある場合。
        """
        report = self.collect()
        self.enforce(report)
        return report

    def enforce(self, report: ValidationReport) -> None:
        """collectの結果の問題を1件ずつログ出力し、ポリシーを適用する。"""
        if report.skipped:
            return

        self._log_source_problems(report)
        self._log_manifest_violations(report)

        if report.manifest_violations:
            raise ProhibitedDependencyError(report.manifest_violations)
        if report.problematic_files and self._config.fail:
            raise NonCompliantSourceError(report.problematic_files)

    def _log_source_problems(self, report: ValidationReport) -> None:
        if not report.problematic_files:
            logger.info("No problematic files found")
            return

        level = logging.ERROR if self._config.fail else logging.WARNING
        logger.log(level, "Found files within a problematic package:")
        for problematic_file in report.problematic_files:
            logger.log(level, "  %s", problematic_file)

    @staticmethod
    def _log_manifest_violations(report: ValidationReport) -> None:
        if not report.manifest_checked:
            return
        if not report.manifest_checked_headers:
            logger.info("No Export-Package/Import-Package headers in %s, nothing to check", report.manifest_path)
            return
        if not report.manifest_violations:
            logger.info("No prohibited packages found in %s", report.manifest_path)
            return

        logger.error("Found prohibited packages in %s:", report.manifest_path)
        for violation in report.manifest_violations:
            logger.error("  %s: %s (contains %r)", violation.header, violation.package_name, violation.token)
