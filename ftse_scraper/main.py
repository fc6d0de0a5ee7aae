"""Main entry point for the FTSE 100 scenarios."""

import argparse
import sys
import traceback
from typing import Dict, List, Optional

from .core.config import ScraperConfig
from .core.scenarios import SCENARIOS, run_scenario, scenario_names
from .dynamic.browser_engine import PlaywrightEngine


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Scrape the FTSE 100 constituents table on londonstockexchange.com',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run.py                                   # All scenarios, headless
  python run.py --scenario risers --top 5         # Five biggest risers
  python run.py --scenario market-cap --pages 3   # Market caps from pages 1-3
  python run.py --scenario homepage --headed      # Watch the browser
        """
    )

    parser.add_argument(
        '--scenario',
        action='append',
        choices=['all'] + list(SCENARIOS),
        help='Scenario to run (repeatable, default: all)'
    )
    parser.add_argument(
        '--headed',
        action='store_true',
        help='Show the browser window'
    )
    parser.add_argument(
        '--top',
        type=int,
        default=None,
        help='Number of constituents in the risers/fallers tables (default: 10)'
    )
    parser.add_argument(
        '--pages',
        type=int,
        default=None,
        help='Table pages to visit for market caps (default: 5)'
    )
    parser.add_argument(
        '--threshold',
        type=float,
        default=None,
        help='Market cap threshold in £m (default: 7)'
    )
    parser.add_argument(
        '--screenshot',
        type=str,
        default=None,
        help='Screenshot path for the homepage scenario'
    )
    parser.add_argument(
        '--timeout',
        type=int,
        default=None,
        help='Browser timeout in ms (default: 30000)'
    )

    return parser


def config_from_args(args: argparse.Namespace, base: Optional[ScraperConfig] = None) -> ScraperConfig:
    config = base or ScraperConfig()
    return config.with_overrides(
        headless=False if args.headed else None,
        top_n=args.top,
        total_pages=args.pages,
        market_cap_threshold=args.threshold,
        screenshot_path=args.screenshot,
        browser_timeout=args.timeout,
    )


def run_all(names: List[str], config: ScraperConfig, engine_factory=PlaywrightEngine) -> Dict[str, bool]:
    """Run scenarios one after another; a failure only stops its own scenario."""
    outcomes = {}
    for name in names:
        try:
            run_scenario(name, config, engine_factory=engine_factory)
            outcomes[name] = True
            print(f"\n✓ {name} passed")
        except Exception as e:
            outcomes[name] = False
            print(f"\n✗ {name} failed: {e}")
            traceback.print_exc()
    return outcomes


def print_summary(outcomes: Dict[str, bool]) -> None:
    print(f"\n{'='*80}")
    print("SUMMARY")
    print(f"{'='*80}")
    for name, passed in outcomes.items():
        status = "✓ PASSED" if passed else "✗ FAILED"
        print(f"{name}: {status}")


def main(argv: Optional[List[str]] = None) -> int:
    """Run the selected scenarios and return the exit code."""
    args = build_parser().parse_args(argv)
    config = config_from_args(args)

    if not config.validate():
        return 2

    outcomes = run_all(scenario_names(args.scenario), config)
    print_summary(outcomes)

    return 0 if all(outcomes.values()) else 1


if __name__ == "__main__":
    sys.exit(main())
