"""
Example: Building a climbing year in review.

This example shows how to use the high-level ClimbingStatistics class
on a ticks export, and how to switch collectors off.
"""
import logging
import sys

from climbing_wrapped import ClimbingStatistics, TickLoadError


class PrintHooks:
    """Minimal progress hooks printing each step."""

    def report_step(self, info="", target=None, reset_counter=False, plus_step=0):
        if info:
            print(f"  ... {info}")

    def stop_requested(self):
        return False


def example_basic_usage(source, year):
    """Basic usage of the ClimbingStatistics wrapper."""

    stats = ClimbingStatistics(source=source, year=year, app_hooks=PrintHooks())

    print("=== Basic Statistics ===")
    print(f"Total climbs: {stats.get_value('basicStats', 'totalClimbs')}")
    print(f"Unique routes: {stats.get_value('basicStats', 'uniqueRoutes')}")
    print(f"Sessions: {stats.get_value('basicStats', 'climbingSessions')}")
    print(f"Total pitches: {stats.get_value('basicStats', 'totalPitches')}")

    print("\n=== Highlights ===")
    highlights = stats.get_category('highlights', {})
    hardest = highlights.get('hardestRoute')
    if hardest:
        print(f"Hardest route: {hardest['name']} ({hardest['rating']})")
    busiest = highlights.get('busiestDay', {})
    print(f"Busiest day: {busiest.get('date')} with {busiest.get('climbCount')} climbs")
    for area in highlights.get('topAreas', []):
        print(f"  {area['area']}: {area['count']}")

    print("\n=== Fun Stats ===")
    print(f"Sending season: {stats.get_value('funStats', 'sendingSeason')}")
    print(f"Spirit crag: {stats.get_value('funStats', 'spiritCrag')}")
    print(f"Vertical miles: {stats.get_value('funStats', 'verticalMiles')}")

    changes = stats.get_value('yearComparison', 'changes', {})
    if changes:
        print("\n=== Compared With Last Year ===")
        print(f"Climbs: {changes['climbsChange']}%")
        print(f"Average grade: {changes['gradeChange']:+}")


def example_with_config(source, year):
    """Example using ClimbingStatistics with custom configuration."""

    config = {
        'collectors': {
            'fun_stats': False,
            'route_types': False,
            'year_comparison': False,
        },
        'options': {
            'top_areas_limit': 3,
        },
    }

    stats = ClimbingStatistics(source=source, year=year, config_dict=config)
    print(f"Sections collected: {list(stats.to_dict())}")


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format='%(levelname)s %(name)s: %(message)s')

    if len(sys.argv) < 2:
        print(f"Usage: {sys.argv[0]} <ticks.csv or URL> [year]")
        sys.exit(1)
    ticks_source = sys.argv[1]
    report_year = int(sys.argv[2]) if len(sys.argv) > 2 else None

    try:
        print("=== Example 1: Basic Usage ===\n")
        example_basic_usage(ticks_source, report_year)

        print("\n\n=== Example 2: With Custom Config ===\n")
        example_with_config(ticks_source, report_year)
    except TickLoadError as e:
        print(f"Could not load ticks: {e}")
        sys.exit(1)
