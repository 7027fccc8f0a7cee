#!/usr/bin/env python3
"""
Demo: Compose style cycles and inspect them.

Shows pairwise and product composition, repetition, and the
analyzer and table backends.
"""

from propcycle import cycler
from propcycle.analyzer import analyze_cycler
from propcycle.backends import TableFormat, generate_table, save_table_file


def main():
    colors = cycler(color=['r', 'g', 'b'])
    styles = cycler(linestyle=['-', '--', '-.'])

    print("=" * 80)
    print("CYCLER DEMO")
    print("=" * 80)

    examples = [
        ("PAIRWISE", colors + styles),
        ("PRODUCT", colors * styles),
        ("REPEAT", (colors + styles) * 2),
    ]

    for title, cc in examples:
        print(f"\n{title}: {cc!r}")
        print("-" * 80)
        print(generate_table(cc))

        report = analyze_cycler(cc)
        print(f"\n   Length: {report.length}, depth: {report.metrics.depth}")
        if report.warnings:
            print(f"   Warnings ({len(report.warnings)}):")
            for warning in report.warnings:
                print(f"      - {warning}")

    save_table_file(colors * styles, "example_cycle.html", fmt=TableFormat.HTML)
    print("\n✅ Product table exported to example_cycle.html")


if __name__ == "__main__":
    main()
