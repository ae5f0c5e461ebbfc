#!/usr/bin/env python3
"""
Critical Path Analyzer - Command Line Interface
"""

import json
import sys
from critical_path_analyzer import CriticalPathAnalyzer
from critical_path_analyzer.formatters import format_duration_us


def main(argv=None):
    import argparse
    parser = argparse.ArgumentParser(
        description='Compute the merged critical path of APM span and transaction documents.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python analyze_critical_path.py events.json
  python analyze_critical_path.py events.json -o path.json --sort-by depth
  python analyze_critical_path.py search_response.json --workers 4
  python analyze_critical_path.py events.json --strict-roots
  python analyze_critical_path.py events.json --no-skew-correction
        """
    )
    parser.add_argument('input_file', help='JSON array of documents or a search response')
    parser.add_argument('-o', '--output', dest='output_file', default='critical_path.json',
                        help='Output JSON file')
    parser.add_argument('--workers', type=int, default=1,
                        help='Number of worker processes used to scan traces')
    parser.add_argument('--strict-roots', action='store_true',
                        help='Fail on traces with more than one root item instead of dropping them')
    parser.add_argument('--sort-by', choices=['hash', 'depth', 'duration'], default=None,
                        help='Order of the merged critical path items')
    parser.add_argument('--no-skew-correction', dest='correct_clock_skew', action='store_false',
                        help='Keep every service on its own clock instead of aligning it to the caller')
    args = parser.parse_args(argv)

    try:
        analyzer = CriticalPathAnalyzer(
            num_workers=args.workers,
            strict_roots=args.strict_roots,
            sort_by=args.sort_by,
            correct_clock_skew=args.correct_clock_skew
        )

        print(f"\nConfiguration:")
        print(f"  Input file: {args.input_file}")
        print(f"  Workers: {args.workers}")
        print(f"  Strict roots: {args.strict_roots}")
        print(f"  Clock skew correction: {args.correct_clock_skew}")
        print(f"  Sort by: {args.sort_by or 'first seen'}\n")

        critical_path = analyzer.process_trace_file(args.input_file)

        with open(args.output_file, 'w') as f:
            json.dump(analyzer.to_result(), f, indent=2)

        root = next((item for item in critical_path if item['hash'] == 'root'), None)
        if root is not None:
            print(f"Mean trace duration: {format_duration_us(root['duration'])}")
        print(f"Traces averaged: {analyzer.sample_size}")
        print(f"\n✓ Analysis complete! Results written to {args.output_file}")
    except FileNotFoundError:
        print(f"Error: File '{args.input_file}' not found.")
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
