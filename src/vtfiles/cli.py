"""Command line front-end: ``vtfiles report|upload|upload-url``."""

import argparse
import asyncio
import hashlib
import logging
import sys
from pathlib import Path

from . import config
from .errors import ConfigError, FileTooLargeError, VirusTotalError
from .schemas import is_error
from .utils import format_summary, is_valid_hash, summarize_report
from .virus_total import VirusTotalClient

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_API_ERROR = 1
EXIT_USAGE = 2
EXIT_FAILURE = 3


def build_parser():
    parser = argparse.ArgumentParser(prog="vtfiles", description="Look up and submit files on VirusTotal.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    sub = parser.add_subparsers(dest="command", required=True)

    report = sub.add_parser("report", help="Fetch the analysis report for a hash.")
    report.add_argument("hash", help="MD5, SHA1 or SHA256 of the file.")
    report.add_argument("--json", action="store_true", help="Print the full report as JSON.")

    upload = sub.add_parser("upload", help="Upload a file for scanning.")
    upload.add_argument("path", type=Path)
    upload.add_argument("--password", help="Password of a protected archive.")
    upload.add_argument("--large", action="store_true", help="Go through an upload URL (files of 32 MB and more).")

    sub.add_parser("upload-url", help="Request an upload URL for a large file.")
    return parser


def _print_error(result):
    print(f"VirusTotal error {result.error.code}: {result.error.message}", file=sys.stderr)
    return EXIT_API_ERROR


async def _report(client, args):
    if not is_valid_hash(args.hash.strip()):
        print(f"Not an MD5/SHA1/SHA256 hash: {args.hash}", file=sys.stderr)
        return EXIT_USAGE

    result = await client.get_file_report(args.hash)
    if is_error(result):
        return _print_error(result)

    if args.json:
        print(result.model_dump_json(by_alias=True, indent=2))
    else:
        print(format_summary(summarize_report(result)))
    return EXIT_OK


async def _upload(client, args):
    try:
        content = args.path.read_bytes()
    except OSError as e:
        print(f"Cannot read {args.path}: {e.strerror or e}", file=sys.stderr)
        return EXIT_USAGE
    upload_url = None

    if args.large:
        url_result = await client.get_upload_url()
        if is_error(url_result):
            return _print_error(url_result)
        upload_url = url_result.data

    try:
        result = await client.upload_file(args.path.name, content, password=args.password, upload_url=upload_url)
    except FileTooLargeError as e:
        print(f"{e}. Retry with --large.", file=sys.stderr)
        return EXIT_USAGE

    if is_error(result):
        return _print_error(result)

    print(f"Analysis ID: {result.data.id}")
    print(f"Analysis: {result.data.links.self_}")
    print(f"SHA256: {hashlib.sha256(content).hexdigest()}")
    return EXIT_OK


async def _upload_url(client, args):
    result = await client.get_upload_url()
    if is_error(result):
        return _print_error(result)
    print(result.data)
    return EXIT_OK


COMMANDS = {
    "report": _report,
    "upload": _upload,
    "upload-url": _upload_url,
}


async def run(client, args):
    logger.debug(f"Running {args.command}")
    try:
        return await COMMANDS[args.command](client, args)
    except VirusTotalError as e:
        print(f"Request failed: {e}", file=sys.stderr)
        return EXIT_FAILURE


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=config.LOG_FORMAT,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        client = VirusTotalClient()
    except ConfigError as e:
        print(f"{e}. Put it in the environment or a .env file.", file=sys.stderr)
        return EXIT_USAGE

    return asyncio.run(run(client, args))
