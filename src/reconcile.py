#!/usr/bin/env python3
"""
reconcile.py -- report still lifes whose LifeWiki glider synthesis can be improved.

Reads:
  - still_list.txt (mandatory), bob_shemyakin.txt and secondary_b.txt (optional)
  - wikitext of every page in the configured LifeWiki category (read-only)
Writes:
  - discrepancy report to stdout
  - logs/output.applebot.log, and logs/dumper.txt with --dump
"""

import argparse
import logging
import sys
import time
from pathlib import Path

from synthcheck import config
from synthcheck.errors import ReconcileError
from synthcheck.parsers import load_datasets
from synthcheck.ranking import KIND_MISSING, build_report
from synthcheck.records import RecordStore
from synthcheck.report import render_sentences, render_table
from synthcheck.utils import DebugDump, format_elapsed, local_timestamp
from synthcheck.wiki import WikiClient, collect_wiki_values

logger = logging.getLogger("reconcile")
# Copy of the printed report for the run log file only.
report_logger = logging.getLogger("reconcile.report")


def setup_logging(log_file=config.LOG_FILE, verbose=False):
    """Log to stderr and, best-effort, to the run log file."""
    handlers = [logging.StreamHandler()]
    report_logger.handlers.clear()
    report_logger.propagate = False
    if log_file:
        try:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setFormatter(logging.Formatter(config.LOG_FORMAT, config.LOG_DATEFMT))
            handlers.append(file_handler)
            report_logger.addHandler(file_handler)
        except OSError as exc:
            print(f"[!] Cannot write log file {log_file}: {exc}", file=sys.stderr)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=config.LOG_FORMAT,
        datefmt=config.LOG_DATEFMT,
        handlers=handlers,
        force=True,
    )


def run(settings, client=None, out=None):
    """Run one reconciliation and return the list of reported discrepancies."""
    out = out or sys.stdout
    settings.validate()

    store = RecordStore()
    with DebugDump(settings.dump_path, enabled=settings.debug_dump) as dump:
        load_datasets(store, settings.primary_path, settings.secondary_a_path, settings.secondary_b_path)
        dump.write("records after flat-file datasets", store.to_dict())

        client = client or WikiClient()
        if not settings.anonymous:
            client.login(settings.username, settings.password)
        try:
            wiki_stats = collect_wiki_values(store, client, settings.category)
        finally:
            if not settings.anonymous:
                client.logout()
        logger.info(
            "[+] Wiki pages: %s listed, %s matched, %s without apgcode, %s missing.",
            wiki_stats.pages_listed,
            wiki_stats.pages_matched,
            wiki_stats.pages_unmatched,
            wiki_stats.pages_missing,
        )
        dump.write("records after wiki", store.to_dict())

    report = build_report(store)
    if report:
        if settings.report_format == "sentences":
            rendered = plain = render_sentences(report)
        else:
            rendered = render_table(report, color=settings.color)
            plain = render_table(report) if settings.color else rendered
        print(rendered, file=out)
        for line in plain.splitlines():
            report_logger.info(line)
    missing = sum(1 for entry in report if entry.kind == KIND_MISSING)
    logger.info(
        "[+] %s pages can be improved (%s without synthesis, %s with a worse one).",
        len(report),
        missing,
        len(report) - missing,
    )
    return report


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Compare LifeWiki glider syntheses against flat-file synthesis lists.")
    parser.add_argument("--category", default=config.DEFAULT_CATEGORY, help="Wiki category to read pages from.")
    parser.add_argument("--primary", default=str(config.PRIMARY_LIST_FILE), help="Primary list (mandatory).")
    parser.add_argument("--secondary-a", default=str(config.SECONDARY_A_FILE), help="Secondary list A (optional).")
    parser.add_argument("--secondary-b", default=str(config.SECONDARY_B_FILE), help="Secondary list B (optional).")
    parser.add_argument(
        "--anonymous",
        action=argparse.BooleanOptionalAction,
        default=config.DEFAULT_ANONYMOUS,
        help="Do not log in (default). Negate with --no-anonymous.",
    )
    parser.add_argument("-u", "--username", default=config.DEFAULT_USERNAME, help="Username for logging in.")
    parser.add_argument("-p", "--password", default=None, help="Password for logging in.")
    parser.add_argument("--dump", action="store_true", help=f"Write a debug snapshot to {config.DEBUG_DUMP_FILE}.")
    parser.add_argument("--format", dest="report_format", choices=config.REPORT_FORMATS, default="table")
    parser.add_argument("--color", action="store_true", help="Highlight best costs with ANSI bold.")
    parser.add_argument("--log-file", default=str(config.LOG_FILE), help="Run log file ('' to disable).")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug-level logging.")
    return parser.parse_args(argv)


def settings_from_args(args):
    return config.RunSettings(
        category=args.category,
        primary_path=Path(args.primary),
        secondary_a_path=Path(args.secondary_a) if args.secondary_a else None,
        secondary_b_path=Path(args.secondary_b) if args.secondary_b else None,
        anonymous=args.anonymous,
        username=args.username,
        password=args.password,
        debug_dump=args.dump,
        color=args.color,
        report_format=args.report_format,
    )


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_file, verbose=args.verbose)
    started = time.monotonic()
    logger.info("[*] Starting up at %s.", local_timestamp())
    try:
        run(settings_from_args(args))
    except ReconcileError as exc:
        logger.error("[!] %s", exc)
        return 1
    logger.info("[+] Finished at %s (%s elapsed).", local_timestamp(), format_elapsed(time.monotonic() - started))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
