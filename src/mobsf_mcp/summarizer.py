"""Project a raw MobSF report onto the fixed per-platform summary."""

from typing import Any

from mobsf_mcp.models import (
    AndroidFindings,
    AndroidSummary,
    IosFindings,
    IosSummary,
    PlatformKind,
    RawReport,
    Summary,
)

# (summary field, report key)
ANDROID_FIELDS: list[tuple[str, str]] = [
    ("app_name", "app_name"),
    ("package_name", "package_name"),
    ("version_name", "version_name"),
    ("permissions", "permissions"),
    ("exported_activities", "exported_activities"),
    ("services", "services"),
    ("receivers", "receivers"),
    ("providers", "providers"),
]

ANDROID_FINDINGS: list[tuple[str, str]] = [
    ("manifest_analysis", "manifest_analysis"),
    ("urls", "urls"),
    ("domains", "domains"),
    ("tracker_analysis", "tracker_analysis"),
    ("network_security", "network_security"),
]

IOS_FIELDS: list[tuple[str, str]] = [
    ("app_name", "app_name"),
    ("bundle_id", "identifier"),
    ("version", "version"),
    ("min_ios_version", "minimum_os"),
    ("platform", "platform"),
    ("binary_archs", "archs"),
    ("entitlements", "entitlements"),
    ("url_schemes", "url_schemes"),
]

IOS_FINDINGS: list[tuple[str, str]] = [
    ("binary_code_analysis", "binary_code_analysis"),
    ("possible_hardcoded_secrets", "possible_hardcoded_secrets"),
    ("binary_analysis", "binary_analysis"),
    ("strings_analysis", "strings_analysis"),
    ("keychain_analysis", "keychain_analysis"),
]


def _pick(report: RawReport, mapping: list[tuple[str, str]]) -> dict[str, Any]:
    return {target: report[source] for target, source in mapping if source in report}


def summarize(report: RawReport, platform: PlatformKind) -> Summary:
    """Build the summary for *platform*. Missing report keys are left unset."""
    if platform is PlatformKind.ANDROID:
        return AndroidSummary(
            **_pick(report, ANDROID_FIELDS),
            analysis_findings=AndroidFindings(**_pick(report, ANDROID_FINDINGS)),
        )
    return IosSummary(
        **_pick(report, IOS_FIELDS),
        analysis_findings=IosFindings(**_pick(report, IOS_FINDINGS)),
    )
