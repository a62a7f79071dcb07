"""Facebook Ads Report - command line entry point.

Runs the insights pipeline for one ad account and writes the result to a
file, to Google Sheets, or both.

Usage:
    # Last 7 days as CSV on stdout
    adsreport-run --account-id act_123456789

    # Explicit range, Excel file
    adsreport-run --account-id act_123456789 --from 2024-06-01 --to 2024-06-30 \\
        --format excel --output report.xlsx

    # Snapshot to Google Sheets and print the Looker Studio link
    adsreport-run --account-id act_123456789 --sync-sheets --looker

Environment Variables:
    FACEBOOK_ACCESS_TOKEN: Facebook user access token
    GOOGLE_SERVICE_ACCOUNT_EMAIL / GOOGLE_PRIVATE_KEY / GOOGLE_SHEETS_ID: Sheets target
    LOG_LEVEL / LOG_FILE: Logging settings
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from adsreport.adapters.http_client import GraphHTTPClient
from adsreport.core.config import AppConfig, ConfigurationManager
from adsreport.core.constants import LOG_FORMAT, ExportFormat
from adsreport.core.exceptions import ReportError
from adsreport.infrastructure.token_provider import StaticTokenProvider
from adsreport.platforms.facebook.client import FacebookGraphClient
from adsreport.platforms.facebook.pipeline import InsightsPipeline
from adsreport.services.export_service import SheetsSyncService, export_report, parse_export_format
from adsreport.sinks.google_sheets import GoogleSheetsSink
from adsreport.utils.date_utils import get_range_dates
from shared.utils.logging import setup_logging

DEFAULT_LOOKBACK_DAYS = 7
FORMAT_JSON = "json"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Export Facebook Ads insights for one ad account")
    parser.add_argument("--account-id", required=True, help="Ad account id (act_ prefix optional)")
    parser.add_argument("--from", dest="since", help="First day, YYYY-MM-DD")
    parser.add_argument("--to", dest="until", help="Last day, YYYY-MM-DD")
    parser.add_argument(
        "--days",
        type=int,
        default=DEFAULT_LOOKBACK_DAYS,
        help="Look-back window when --from/--to are omitted",
    )
    parser.add_argument("--format", default="csv", choices=["csv", "excel", FORMAT_JSON])
    parser.add_argument("--output", help="Output file (stdout when omitted, required for excel)")
    parser.add_argument("--sync-sheets", action="store_true", help="Write the report to Google Sheets")
    parser.add_argument("--looker", action="store_true", help="Print the Looker Studio report URL")
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument("--log-level", help="Override LOG_LEVEL")
    return parser.parse_args(argv)


def _write_output(content, output: Optional[str]) -> None:
    if output is None:
        sys.stdout.write(content if isinstance(content, str) else content.decode("utf-8"))
        sys.stdout.write("\n")
        return

    path = Path(output)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    logger.success(f"Report written to {path}")


def run(args: argparse.Namespace, config: AppConfig) -> int:
    if args.format == ExportFormat.EXCEL.value and not args.output:
        logger.error("--output is required for excel exports")
        return 2

    since, until = args.since, args.until
    if not since or not until:
        since, until = get_range_dates(args.days)

    http = GraphHTTPClient(StaticTokenProvider.from_env(), config.facebook)
    report = InsightsPipeline(FacebookGraphClient(http)).run(args.account_id, since, until)

    if args.format == FORMAT_JSON:
        _write_output(json.dumps(report.to_dict(), indent=2), args.output)
    else:
        exported = export_report(report, parse_export_format(args.format))
        _write_output(exported.content, args.output)

    if args.sync_sheets or args.looker:
        service = SheetsSyncService(GoogleSheetsSink.from_config(config.sheets))
        if args.sync_sheets:
            result = service.sync(report)
            if not result.ok:
                logger.error(f"Sheets sync incomplete: {result.errors}")
                return 1
        if args.looker:
            logger.info(f"Looker Studio: {service.looker_url()}")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        config = ConfigurationManager(args.config).load_config({"log_level": args.log_level})
        setup_logging(level=config.log_level, format=LOG_FORMAT, log_file=config.log_file)
        return run(args, config)
    except ReportError as e:
        logger.error(f"Report failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
