#!/usr/bin/env python3
"""
Debug script to see what each ticket extractor finds in a transcript.

Usage:
    python scripts/debug_ticket.py ticket.txt
    cat ticket.txt | python scripts/debug_ticket.py
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from ticketscan.config import configure_logging
from ticketscan.services.orchestrator import DEFAULT_EXTRACTORS, ExtractionOrchestrator, looks_like_movie_ticket
from ticketscan.utils.scoring import select_best_candidate


def main():
    configure_logging()

    if len(sys.argv) > 1:
        with open(sys.argv[1]) as f:
            text = f.read()
    else:
        text = sys.stdin.read()

    print("=" * 60)
    print(f"Looks like a movie ticket: {looks_like_movie_ticket(text)}")
    print("=" * 60)

    for field_name, extractor in DEFAULT_EXTRACTORS.items():
        candidates = extractor.candidates(text)
        winner = select_best_candidate(candidates)
        print(f"\n{field_name}:")
        for candidate in candidates:
            marker = '✓' if candidate is winner else ' '
            print(f"  {marker} {candidate.strategy:<36} {candidate.value!r}")

    report = ExtractionOrchestrator().extract(text)

    print("\n" + "=" * 60)
    print("MERGED RECORD")
    print("=" * 60)
    for field_name, value in report.record.model_dump().items():
        print(f"  {field_name:<14} {value!r:<30} ({report.sources[field_name]})")

    if report.failed_fields:
        print(f"\nFailed extractors: {', '.join(report.failed_fields)}")


if __name__ == "__main__":
    main()
