import argparse
import logging
import sys
import textwrap
from functools import wraps

from tqdm import tqdm

from . import Comparer, Processor, Settings
from .report.render import render_report


def needs_comparer(func):
    """Decorator for commands that compare repositories.

    The decorated function will receive (comparer, args).
    The wrapper function takes (settings, args), creates the Processor and the Comparer.
    """
    @wraps(func)
    def wrapper(settings, args):
        with Processor() as processor:
            comparer = Comparer(
                processor,
                settings,
                near_threshold=args.threshold,
                fetch_concurrency=args.concurrency,
                ref=args.ref
            )
            if not args.log_file:
                comparer.configure_logging_from_settings()
            return func(comparer, args)
    return wrapper


def repodm_main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        prog='repodm',
        description='Compare GitHub repositories for plagiarism detection by normalizing source files and scoring '
                    'pairwise edit-distance similarity.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent('''
            Examples:
              repodm compare octocat/hello-world octocat/spoon-knife
              repodm compare https://github.com/owner/repo1 owner/repo2
            ''').strip()
    )
    parser.add_argument(
        '--config',
        metavar='PATH',
        help='Path to a TOML settings file. If not provided, uses REPODM_CONFIG environment variable or ./repodm.toml '
             'when it exists.')
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Log progress information to stderr')
    parser.add_argument(
        '--log-file',
        metavar='PATH',
        help='Path to log file for operation logging. If not provided, uses logging.path from settings or no '
             'logging.')
    parser.add_argument(
        '--log-level',
        metavar='LEVEL',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Applies to the log file when --log-file is '
             'given, otherwise to stderr. Defaults to INFO.')
    subparsers = parser.add_subparsers(
        dest='command',
        title='Commands',
        description='Available commands',
        help='Use "repodm COMMAND --help" for command-specific help',
        required=True
    )

    parser_compare = subparsers.add_parser(
        'compare',
        help='Compare two GitHub repositories (format: owner/repo or full GitHub URL)',
        description='Lists the source files of both repositories, compares every file of the first repository '
                    'with every file of the second, and reports identical files, similar files and an overall '
                    'plagiarism risk.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent('''
            Examples:
              repodm compare owner/repo1 owner/repo2
              repodm compare --threshold 0.8 --ref master owner/repo1 owner/repo2

            Set GITHUB_TOKEN to raise the GitHub API rate limit.
            ''').strip())
    parser_compare.add_argument(
        'repo1',
        metavar='REPO1',
        help='Source repository')
    parser_compare.add_argument(
        'repo2',
        metavar='REPO2',
        help='Target repository')
    parser_compare.add_argument(
        '--threshold',
        type=float,
        metavar='RATIO',
        help='Report file pairs whose similarity is above RATIO (default: compare.near_threshold setting or 0.7)')
    parser_compare.add_argument(
        '--ref',
        metavar='REF',
        help='Branch, tag or commit to compare in both repositories (default: github.ref setting or main)')
    parser_compare.add_argument(
        '--concurrency',
        type=int,
        metavar='N',
        help='Maximum number of concurrent file downloads (default: fetch.concurrency setting or 8)')
    parser_compare.add_argument(
        '--no-progress',
        action='store_true',
        help='Do not show a progress bar')
    parser_compare.add_argument(
        '--no-color',
        action='store_true',
        help='Do not color the report')
    parser_compare.set_defaults(method=_compare)

    args = parser.parse_args(argv)

    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            level=getattr(logging, args.log_level or 'INFO'),
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
    elif args.verbose or args.log_level:
        logging.basicConfig(
            level=getattr(logging, args.log_level or 'INFO'),
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    try:
        settings = Settings.discover(args.config)
        args.method(settings, args)
    except Exception as e:
        logging.getLogger(__name__).debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


@needs_comparer
def _compare(comparer: Comparer, args):
    color = not args.no_color and sys.stdout.isatty()

    with tqdm(desc="Analyzing file similarities", unit="file", disable=args.no_progress or None) as bar:
        report = comparer.compare(args.repo1, args.repo2, progress=bar.update,
                                  on_start=lambda total: bar.reset(total=total))

    render_report(report, args.repo1, args.repo2, color=color)


if __name__ == '__main__':
    repodm_main()
