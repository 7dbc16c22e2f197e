#!/usr/bin/env python
"""Collect today's CSE trade summary and save it as a price snapshot.

Makes one bulk request for every tracked symbol and upserts the results
into stock_prices under today's date. Intended to run from cron after the
market closes.

Usage:
    python -m scripts.collect_stock_data
    python -m scripts.collect_stock_data --dry-run
"""

import argparse
import sys
from datetime import date

from config import settings
from database import get_session_local, init_db
from logging_config import setup_logging
from services.market_data_service import MarketDataService, calculate_market_summary


def collect_stock_data(dry_run: bool = False, service: MarketDataService | None = None) -> int:
    """Fetch live quotes and persist them.

    Returns:
        Process exit code: 0 on success, 1 if no data could be collected
        or saved.
    """
    service = service or MarketDataService()
    today = date.today()

    print(f"Collecting data for {len(settings.TRACKED_SYMBOLS)} symbols using bulk endpoint...")
    quotes = service.fetch_live_quotes(as_of=today)
    if not quotes:
        print("Error: no quotes returned (exchange unavailable)")
        return 1

    print(f"Collected {len(quotes)} quotes for {today.isoformat()}")
    for q in quotes:
        print(f"  {q.symbol:<8} {q.price:>12} {q.change:>+10} vol {q.volume}")

    summary = calculate_market_summary(quotes)
    print(
        f"\nAdvancers: {summary.advancers}  Decliners: {summary.decliners}  "
        f"Unchanged: {summary.unchanged}  Volume: {summary.total_volume}"
    )

    if dry_run:
        print("\n[DRY RUN] No changes made. Run without --dry-run to save.")
        return 0

    init_db()
    SessionLocal = get_session_local()
    if SessionLocal is None:
        print("Error: DATABASE_URL is not configured; cannot save snapshot")
        return 1

    db = SessionLocal()
    try:
        saved = service.save_snapshot(db, quotes, as_of=today)
        print(f"\nSaved {saved} stock prices. Daily data collection completed successfully!")
    except Exception as e:
        print(f"Error: {e}")
        raise
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Collect today's CSE quotes into the price snapshot table"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Fetch and print quotes without saving them",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args()

    setup_logging("DEBUG" if args.verbose else None)
    sys.exit(collect_stock_data(dry_run=args.dry_run))
