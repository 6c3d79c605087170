"""Report rendering: markdown and JSON forms of an ImpactReport."""

import json
from typing import List, Optional, Tuple

from ..analyzers.history_resolver import HistoryFailure, LastChangeInfo
from ..analyzers.impact_aggregator import FileImpact
from ..analyzers.report_builder import ImpactReport
from .locales import format_date, translate

FAILURE_KEYS = {
    HistoryFailure.NOT_A_REPOSITORY: 'notAGitRepo',
    HistoryFailure.NO_COMMITS: 'noCommit',
    HistoryFailure.TOOL_NOT_INSTALLED: 'gitNotInstalled',
    HistoryFailure.TIMEOUT: 'gitTimeout',
    HistoryFailure.UNKNOWN_ERROR: 'unknownGitError',
}


def describe_last_change(info: LastChangeInfo, lang: Optional[str] = None) -> Tuple[str, Optional[str]]:
    """(author display, time display) for the report header."""
    if info.failure is not None:
        reason = translate(FAILURE_KEYS[info.failure], lang)
        if info.failure is HistoryFailure.UNKNOWN_ERROR and info.detail:
            reason = f"{reason}: {info.detail}"
        return reason, None

    if info.repository_wide:
        return f"{info.author} ({translate('generalGitInfo', lang)})", None

    return info.author or '', format_date(info.timestamp, lang)


def describe_impact(report: ImpactReport, impact: FileImpact, lang: Optional[str] = None) -> str:
    """One-line label of an impacted file: path, usage kind, confidence, via."""
    parts = [translate('directUsage' if impact.is_direct else 'indirectUsage', lang)]
    if report.target_symbol and impact.references_symbol:
        parts.append(translate('highConfidence' if impact.is_high_confidence else 'lowConfidence', lang))
    if impact.via_attribution is not None:
        parts.append(translate('via', lang, impact.via_attribution.name))
    return f"{report.relative(impact.file)} ({', '.join(parts)})"


def render_markdown(report: ImpactReport, lang: Optional[str] = None) -> str:
    """Localized markdown report."""
    author, when = describe_last_change(report.last_change, lang)

    lines: List[str] = [
        f"# {translate('impactTitle', lang)}",
        "",
        f"- **{translate('file', lang)}:** `{report.relative(report.requested_file)}`",
        f"- **{translate('lastChangedBy', lang)}:** {author}",
    ]
    if when:
        lines.append(f"- **{translate('lastChangedTime', lang)}:** {when}")
    lines.append(f"- **{translate('scannedFiles', lang)}:** {report.scanned_file_count}")
    if report.declaring_context:
        lines.append(f"- **{translate('declaringContext', lang)}:** `{report.declaring_context}`")

    lines += ["", f"## {translate('usageDetail', lang)}", ""]
    if not report.impacts:
        lines.append(f"_{translate('notFound', lang)}_")
    for impact in report.impacts.values():
        lines.append(f"### {describe_impact(report, impact, lang)}")
        for match in impact.matches:
            lines.append(f"- {translate('line', lang)} {match.line_number}: `{match.line_text}`")
        lines.append("")

    if report.target_symbol:
        lines.append("")
        if report.symbol_not_found:
            lines.append(translate('warning', lang, report.target_symbol))
        else:
            lines.append(
                f"**{translate('note', lang)}:** "
                f"{translate('functionFound', lang, report.target_symbol, report.symbol_found_count)}"
            )

    tier = report.risk_tier
    lines += [
        "",
        f"## {translate(tier.label_key, lang)}",
        "",
        translate(tier.message_key, lang, report.impacted_count),
        "",
    ]
    return "\n".join(lines)


def render_json(report: ImpactReport) -> str:
    return json.dumps(report.to_dict(), indent=2, ensure_ascii=False)
