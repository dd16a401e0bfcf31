# src/sprintcal/main.py

import argparse
import logging
import sys
from datetime import date
from typing import List, Optional

import matplotlib

from .calendar_logic import build_calendar
from .charts import render_calendar_png
from .config import load_config, parse_params, query_params, save_config, to_query_string
from .export_utils import export_calendar_pdf, format_legend_text, format_month_text


def parse_args(argv: Optional[List[str]] = None):
    p = argparse.ArgumentParser(prog="sprintcal", description="Rolling sprint calendar (development / QA / release).")
    p.add_argument("--start-day", help="Sprint start weekday, 0=Sunday … 6=Saturday")
    p.add_argument("--dev", help="Development days")
    p.add_argument("--qa", help="QA days")
    p.add_argument("--months", help="Months to display (1-12)")
    p.add_argument("--center", help="Center date YYYY-MM-DD [default: today]")
    p.add_argument("--query", help='Parameters as query string, e.g. "startDay=2&dev=7&qa=7"')
    p.add_argument("--png", help="Also render the calendar to this PNG file")
    p.add_argument("--pdf", help="Also export the calendar to this PDF file")
    p.add_argument("--save-config", action="store_true", help="Remember the cadence for later runs")
    return p.parse_args(argv)


def run_cli(argv: Optional[List[str]] = None, today: Optional[date] = None) -> int:
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    args = parse_args(argv)
    today = today or date.today()

    # saved config < --query < single options
    params = load_config()
    if args.query:
        params.update(query_params(args.query))
    for key, value in (('startDay', args.start_day), ('dev', args.dev), ('qa', args.qa),
                       ('months', args.months), ('center', args.center)):
        if value is not None:
            params[key] = value
    config = parse_params(params, today)

    months = build_calendar(config, today)
    for month in months:
        print(format_month_text(month))
        print()
    print(format_legend_text())
    print(f"Parameters: ?{to_query_string(config)}")

    if args.png:
        render_calendar_png(months, args.png)
        print(f"PNG saved: {args.png}")
    if args.pdf:
        export_calendar_pdf(months, args.pdf, config)
        print(f"PDF saved: {args.pdf}")
    if args.save_config:
        path = save_config(config)
        print(f"Configuration saved to {path}.")
    return 0


def main():
    # files only, no interactive window
    matplotlib.use("Agg")
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
