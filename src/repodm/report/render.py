"""Human-readable rendering of a comparison report."""

from collections.abc import Callable

from termcolor import colored

from .summary import ComparisonReport, RiskLevel

IDENTICAL_PREVIEW = 3

ARROW = "↔"

RISK_VERDICTS = {
    RiskLevel.HIGH: ("High plagiarism risk detected!", 'red'),
    RiskLevel.MODERATE: ("Moderate similarity detected", 'yellow'),
    RiskLevel.LOW: ("Low plagiarism risk", 'green'),
}


def similarity_color(score: float) -> str:
    """Severity band of a near match."""
    if score > 0.9:
        return 'red'
    if score > 0.8:
        return 'yellow'
    return 'cyan'


def format_percentage(score: float) -> str:
    return f"{score * 100:.1f}%"


class ReportRenderer:
    """Writes a ComparisonReport line by line.

    Args:
        out: Callable receiving one line at a time (print by default)
        color: Whether to emit ANSI colors
    """

    def __init__(self, out: Callable[[str], None] = print, color: bool = True):
        self._out = out
        self._color = color

    def _line(self, text: str = '', color: str | None = None):
        if self._color and color is not None and text:
            text = colored(text, color)
        self._out(text)

    def render_header(self, repo1: str, repo2: str):
        self._line("Comparing repositories:", 'blue')
        self._line(f"  Source: {repo1}", 'dark_grey')
        self._line(f"  Target: {repo2}", 'dark_grey')
        self._line()

    def render(self, report: ComparisonReport):
        self._line("Similarity Report", 'yellow')
        self._line()

        if report.identical:
            self._line(f"Identical files (skipped): {len(report.identical)}", 'blue')
            for match in report.identical[:IDENTICAL_PREVIEW]:
                self._line(f"  {match.path1} {ARROW} {match.path2}", 'dark_grey')
            remainder = len(report.identical) - IDENTICAL_PREVIEW
            if remainder > 0:
                self._line(f"  ... and {remainder} more", 'dark_grey')
            self._line()

        if not report.near_matches:
            self._line("No significant similarities found", 'green')
            return

        for match in report.near_matches:
            self._line(f"{format_percentage(match.similarity)} similarity", similarity_color(match.similarity))
            self._line(f"  {match.path1} {ARROW} {match.path2}", 'dark_grey')
            self._line()

        high_label = format_percentage(report.high_threshold).replace('.0%', '%')
        self._line("Summary:", 'blue')
        self._line(f"  Similar files: {len(report.near_matches)}", 'dark_grey')
        self._line(f"  Identical files (skipped): {len(report.identical)}", 'dark_grey')
        self._line(f"  High similarity (>{high_label}): {report.high_similarity_count}", 'dark_grey')
        self._line(f"  Average similarity: {format_percentage(report.average_similarity)}", 'dark_grey')
        if report.skipped_files:
            self._line(f"  Files skipped (empty or fetch failed): {report.skipped_files}", 'dark_grey')

        verdict, color = RISK_VERDICTS[report.risk]
        self._line()
        self._line(verdict, color)


def render_report(report: ComparisonReport, repo1: str | None = None, repo2: str | None = None, *,
                  out: Callable[[str], None] = print, color: bool = True):
    renderer = ReportRenderer(out, color)
    if repo1 is not None and repo2 is not None:
        renderer.render_header(repo1, repo2)
    renderer.render(report)
