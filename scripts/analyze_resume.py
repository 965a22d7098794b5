# scripts/analyze_resume.py
#!/usr/bin/env python3
"""
CLI script to score extracted resume text
Usage:
    python scripts/analyze_resume.py --input resume.txt
    python scripts/analyze_resume.py --input resume.txt --output analysis.json
    python scripts/analyze_resume.py --input resume.txt --show-sections
"""

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from resume_review.config import ReviewConfig, get_config
from resume_review.errors import ConfigurationError, InputValidationError
from resume_review.scoring import ResumeScorer, render_report
from resume_review.utils import setup_logging


def main():
    parser = argparse.ArgumentParser(description='Score extracted resume text')
    parser.add_argument(
        '--input',
        required=True,
        help='Text file produced by the PDF/OCR extraction step'
    )
    parser.add_argument(
        '--output',
        help='Output JSON file for the analysis'
    )
    parser.add_argument(
        '--config',
        help='YAML config file (default: $RESUME_REVIEW_CONFIG or config/review.yaml)'
    )
    parser.add_argument(
        '--rules',
        help='YAML file with rule set overrides'
    )
    parser.add_argument(
        '--show-sections',
        action='store_true',
        help='Print the detected text of each section'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    args = parser.parse_args()

    try:
        config = ReviewConfig.from_yaml(args.config) if args.config else get_config()
    except (OSError, TypeError) as e:
        print(f"ERROR: Failed to load config: {e}")
        return 1
    if args.rules:
        config.rules_file = Path(args.rules)

    setup_logging(config.log_dir, 'DEBUG' if args.verbose else config.log_level)

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"ERROR: Input file not found: {input_path}")
        return 1

    text = input_path.read_text(encoding='utf-8')

    try:
        scorer = ResumeScorer(config=config)
        result = scorer.analyze(input_path.name, text)
    except ConfigurationError as e:
        print(f"ERROR: Invalid configuration: {e}")
        return 1
    except InputValidationError as e:
        print(f"ERROR: Invalid input: {e}")
        return 1

    print(render_report(result))

    if args.show_sections:
        print("\n=== Detected Sections ===")
        for name, content in result.sections.items():
            if content:
                print(f"\n[{name}]\n{content}")

    if args.output:
        with open(args.output, 'w') as f:
            json.dump(result.to_dict(), f, indent=2)
        print(f"\n✓ Analysis saved to: {args.output}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
