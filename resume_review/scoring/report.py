# resume_review/scoring/report.py
from resume_review.scoring.models import AnalysisResult


def _bar(percentage: int, width: int = 20) -> str:
    filled = percentage * width // 100
    return "█" * filled + "░" * (width - filled)


def render_report(result: AnalysisResult, show_sections: bool = True) -> str:
    """Generate a plain-text analysis report"""
    report = f"""
=== Resume Analysis Report ===
File: {result.file_name}
Field of study: {result.major_name or 'Unknown'}

Score: {result.score}/100 ({result.grade}) {'✓ PASS' if result.passes_screening else '✗ BELOW THRESHOLD'}
"""

    if show_sections:
        report += "\nSections:\n"
        for section in result.section_scores:
            report += (
                f"  {section.section_name:<15} {_bar(section.percentage)} "
                f"{section.achieved_score:>2}/{section.max_score:<2}"
            )
            if section.matched:
                report += f"  [{', '.join(section.matched)}]"
            report += "\n"

    report += f"\nFeedback ({len(result.feedback)}):\n"
    if result.feedback:
        report += "\n".join(f"  - {line}" for line in result.feedback)
    else:
        report += "  No issues found!"

    return report
