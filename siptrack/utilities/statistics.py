"""
Statistics report for SipTrack.
Prints the dashboard numbers for one user in the terminal and saves them as JSON.
"""
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional
import json
import logging

from siptrack.infra.Drink_Repository import DrinkRepository
from siptrack.infra.Mood_Repository import MoodRepository
from siptrack.logic.reporting.dashboard import build_dashboard
from siptrack.utilities.constants import WEEKLY

logger = logging.getLogger(__name__)


class SipTrackStats:
    """Generate statistics and insights from stored drink logs and moods."""

    def __init__(self, drinks_file: Path, moods_file: Path, user_id: str):
        self.drinks = DrinkRepository(drinks_file)
        self.moods = MoodRepository(moods_file)
        self.user_id = user_id

    def top_drinks(self, limit: int = 5):
        """Most logged drinks by total servings."""
        counts: Dict[str, int] = {}
        for log in self.drinks.list(self.user_id):
            label = f"{log.brand} {log.name}".strip()
            counts[label] = counts.get(label, 0) + log.quantity
        return sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))[:limit]

    def generate_report(self, period: str = WEEKLY, now: Optional[datetime] = None) -> Dict:
        report = build_dashboard(self.drinks.list(self.user_id), self.moods.list(self.user_id),
                                 now=now, period=period)
        report['user_id'] = self.user_id
        report['top_drinks'] = self.top_drinks()
        return report

    def print_report(self, period: str = WEEKLY):
        report = self.generate_report(period)
        totals, trends = report['totals'], report['trends']

        def trend(metric):
            t = trends[metric]
            if t['direction'] == 'stable':
                return "stable"
            sign = "▲" if t['direction'] == 'up' else "▼"
            verdict = "good" if t['favorable'] else "bad"
            return f"{sign} {t['percent_change']:.1f}% ({verdict})"

        print("\n" + "=" * 60)
        print(f"🍺 SIPTRACK REPORT - {self.user_id}")
        print("=" * 60)

        print("\n📊 LIFETIME TOTALS (trend: last 7 days vs previous 7):")
        print(f"  Drinks:       {totals['drinks']:>10}   {trend('drinks')}")
        print(f"  Spent:        ${totals['spent']:>9.2f}   {trend('spent')}")
        print(f"  Calories:     {totals['calories']:>10,}   {trend('calories')}")
        print(f"  Weight gain:  {totals['weight_gain_lbs']:>6.2f} lbs   {trend('weight_gain')}")

        print(f"\n💸 SPENDING ({period}):")
        if not report['charts']['spending']:
            print("  No drinks logged yet.")
        for row in report['charts']['spending']:
            print(f"  {row['name']:20s}: ${row['spending']:.2f}")

        if report['top_drinks']:
            print("\n🏆 MOST LOGGED:")
            for i, (name, count) in enumerate(report['top_drinks'], 1):
                print(f"  {i}. {name}: {count}")

        mood = report['mood']
        print("\n🙂 MOOD:")
        average = f"{mood['average']:.2f}" if mood['average'] is not None else "N/A"
        print(f"  Entries: {mood['entries']}   Average: {average}   Trend: {trend('mood')}")
        corr = report['correlation']
        if corr['days_analyzed']:
            print(f"  Drinking days: {corr['average_mood_with_drinks']:.2f}   "
                  f"Dry days: {corr['average_mood_without_drinks']:.2f}   "
                  f"Difference: {corr['correlation_strength']:+.2f} ({corr['days_analyzed']} days)")

        print("\n" + "=" * 60)
        print(f"Report generated: {report['generated_at']}")
        print("=" * 60 + "\n")


# CLI interface
if __name__ == "__main__":
    import argparse
    from siptrack.infra.paths import DRINKS_FILE, MOODS_FILE
    from siptrack.utilities.config import DEFAULT_USER_ID

    parser = argparse.ArgumentParser(description='Print a SipTrack statistics report')
    parser.add_argument('--user', default=DEFAULT_USER_ID)
    parser.add_argument('--period', choices=['weekly', 'monthly'], default=WEEKLY)
    parser.add_argument('--out', default='siptrack_stats.json', help='JSON report path')
    args = parser.parse_args()

    stats = SipTrackStats(DRINKS_FILE, MOODS_FILE, args.user)
    stats.print_report(args.period)

    output_file = Path(args.out)
    with open(output_file, 'w', encoding='utf-8') as f:
        json.dump(stats.generate_report(args.period), f, indent=2, ensure_ascii=False)
    print(f"✓ Detailed report saved to: {output_file}")
