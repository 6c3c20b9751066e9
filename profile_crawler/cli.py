"""
Command-line interface for the profile graph crawler.
"""

import argparse
import logging
import sys
import time
from pathlib import Path

from profile_crawler import __version__
from profile_crawler.config import DEFAULT_DEPTH, DEFAULT_OUTPUT, DEFAULT_WORKERS
from profile_crawler.core.crawler import Crawler
from profile_crawler.core.storage import ProfileStore
from profile_crawler.session import build_session
from profile_crawler.utils.handles import read_seed_input
from profile_crawler.utils.log import log, setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="profile-crawler",
        description="Crawl profiles and their images, then follow everyone "
                    "who liked or commented on them for N generations.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m profile_crawler -i alice\n"
            "  python -m profile_crawler -i handles.txt --depth 3 --workers 20\n"
            "  python -m profile_crawler -i handles.txt --output data --check\n"
        ),
    )
    parser.add_argument(
        "-i", "--input",
        help="File with one profile handle per line, or a single handle (required)",
    )
    parser.add_argument(
        "-o", "--output", default=DEFAULT_OUTPUT,
        help=f"Directory where to save data (default: {DEFAULT_OUTPUT!r})",
    )
    parser.add_argument(
        "-d", "--depth", type=int, default=DEFAULT_DEPTH,
        help="Number of generations; each one also collects profiles of "
             "those who liked and commented on the previous one's images "
             f"(default: {DEFAULT_DEPTH})",
    )
    parser.add_argument(
        "-w", "--workers", type=int, default=DEFAULT_WORKERS,
        help=f"Parallel workers count (default: {DEFAULT_WORKERS})",
    )
    parser.add_argument(
        "-c", "--check", action="store_true", default=False,
        help="Skip profiles whose output directory already exists",
    )
    parser.add_argument(
        "--no-images", dest="download_images", action="store_false", default=True,
        help="Save profile.json and images.json only, without image files",
    )
    parser.add_argument(
        "--no-verify-ssl", dest="verify_ssl", action="store_false", default=True,
        help="Disable TLS certificate verification",
    )
    parser.add_argument(
        "--no-progress", dest="progress", action="store_false", default=True,
        help="Disable the per-generation progress bar",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Enable verbose debug logging",
    )
    parser.add_argument(
        "--log-file",
        help="Write detailed logs to this file (always at DEBUG level)",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.input:
        parser.print_help(sys.stderr)
        parser.exit(2)
    if args.workers < 1:
        parser.error("--workers must be at least 1")
    return args


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    setup_logging(debug=args.debug, log_file=args.log_file)

    if args.debug:
        logging.getLogger("urllib3").setLevel(logging.DEBUG)

    if not args.verify_ssl:
        import urllib3
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
        log.warning("TLS certificate verification is DISABLED (--no-verify-ssl)")

    seeds = read_seed_input(args.input)
    output_dir = Path(args.output)
    output_dir.mkdir(parents=True, exist_ok=True)
    log.info("Output directory : %s", output_dir.resolve())

    session = build_session(
        verify_ssl=args.verify_ssl, pool_size=max(args.workers, 10) * 2
    )

    t0 = time.monotonic()
    with ProfileStore(output_dir, session, download_images=args.download_images) as store:
        crawler = Crawler(
            seeds,
            depth=args.depth,
            workers=args.workers,
            store=store,
            skip=store.already_crawled if args.check else None,
            session=session,
            progress=args.progress and sys.stderr.isatty(),
        )
        crawler.run()
    elapsed = time.monotonic() - t0
    log.info("Total elapsed time: %.1f s", elapsed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
