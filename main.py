# Main script: archive a site or list existing archives
import sys
import logging
import argparse

from config_loader import load_config
from logger_setup import setup_logging
from archive_index import list_domains, list_sessions
from crawler import run_crawl
from exceptions import ArchiverError
from launcher import normalize_page_budget


def build_parser():
    parser = argparse.ArgumentParser(description="Crawl a site and save a browsable offline snapshot.")
    parser.add_argument('--config', default=None, help="Path to a JSON config file (default: config.json if present)")
    subparsers = parser.add_subparsers(dest='command', required=True)

    archive_parser = subparsers.add_parser('archive', help="Crawl and archive a site")
    archive_parser.add_argument('url', help="Start URL")
    archive_parser.add_argument('--max-pages', type=int, default=None, help="Page budget for the session")

    list_parser = subparsers.add_parser('list', help="List archived domains, or the sessions of one domain")
    list_parser.add_argument('domain', nargs='?', default=None)
    return parser


def _run_archive(args, config):
    page_budget = normalize_page_budget(args.max_pages, config['default_max_pages'])
    try:
        report = run_crawl(args.url, page_budget, config)
    except ValueError as e:
        logging.error(f"Invalid start URL: {e}")
        return 1
    except ArchiverError as e:
        logging.error(f"Archiving failed: {e}")
        return 1

    logging.info("--- Processing Summary ---")
    logging.info(f"Pages archived: {len(report.crawled_pages)}")
    logging.info(f"Pages failed: {len(report.failed_pages)}")
    logging.info(f"Manifest: {report.manifest_path}")
    print(report.session.archive_path)
    return 0


def _run_list(args, config):
    archive_root = config['archive_root']
    if args.domain is None:
        for domain in list_domains(archive_root):
            print(domain)
        return 0

    for session in list_sessions(archive_root, args.domain):
        print(f"{session['id']}\t{session['startUrl']}\t{session['entrypoint']}\t{len(session['crawledPages'])} pages")
    return 0


# --- Main Execution ---
def main(argv=None):
    """Main function dispatching the CLI commands."""
    args = build_parser().parse_args(argv)
    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError, RuntimeError) as e:
        print(f"Error: Invalid configuration: {e}", file=sys.stderr)
        return 1

    setup_logging(config['log_file'], config['log_level'])
    if args.command == 'archive':
        return _run_archive(args, config)
    return _run_list(args, config)


if __name__ == "__main__":
    sys.exit(main())
