"""
Main entry point for FIB Study.

Imports question sets from CSV, looks up words and runs the API server.
"""

import argparse
import logging
import sys
from pathlib import Path

from .config import Config
from .errors import ErrorHandler, FibStudyError
from .importer import import_questions_file
from .questions import QuestionRepository
from .review import BatchSubmitter, ReviewTable
from .store import create_store


def setup_logging(verbose: bool = False):
    """Set up logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )


def print_error_summary(error_handler: ErrorHandler):
    """Print recorded errors with their first suggested action."""
    if not error_handler.has_errors():
        return

    error_summary = error_handler.get_error_summary()

    print("\n" + "=" * 50)
    print("⚠️  ISSUES DETECTED")
    print("=" * 50)
    for error in error_summary['errors']:
        print(f"❌ [{error['code']}] {error['message']}")
        if error['suggested_actions']:
            print(f"   Suggestion: {error['suggested_actions'][0]}")


def run_import(csv_file: Path, submit: bool, page: int, error_handler: ErrorHandler) -> int:
    """
    Import a CSV file, print a review page and optionally save the questions.

    Returns:
        Process exit code
    """
    logger = logging.getLogger(__name__)

    try:
        result = import_questions_file(csv_file)
    except FibStudyError as e:
        error_handler.add_exception(e)
        return 1

    print(f"📋 {result.total_rows} rows read: {len(result.valid_questions)} valid, "
          f"{result.rejected_count} rejected")
    for message in result.errors:
        print(f"   • {message}")

    table = ReviewTable(result.valid_questions)
    table.validate()
    review_page = table.page(page)
    print(f"\nShowing {review_page.start} to {review_page.end} of {review_page.total} questions "
          f"(page {review_page.page}/{review_page.total_pages})")
    for row in review_page.rows:
        status = "✓" if row.is_valid else "✗ " + ", ".join(row.errors)
        print(f"  {row.ordinal:>3}. [{row.question.type}] {row.question.title}  {status}")

    if not submit:
        return 0

    store = create_store()
    try:
        submitter = BatchSubmitter(QuestionRepository(store))
        ids = table.submit(
            submitter,
            on_progress=lambda percent: print(f"   Uploading... {percent}%")
        )
    except FibStudyError as e:
        error_handler.add_exception(e)
        return 1
    finally:
        store.close()

    logger.info(f"Saved {len(ids)} questions")
    print(f"✅ Saved {len(ids)} questions")
    return 0


def run_lookup(word: str) -> int:
    """
    Look up one word through the dictionary cache and print the bundle.

    Returns:
        Process exit code
    """
    from .lookup import LookupSession, LookupState, WordLookupCache
    from .lookup.dictionary_service import FreeDictionaryService
    from .lookup.image_service import UnsplashImageService
    from .lookup.translation_service import GoogleTranslationService

    store = create_store()
    try:
        cache = WordLookupCache(
            store,
            GoogleTranslationService(),
            UnsplashImageService(),
            FreeDictionaryService()
        )
        session = LookupSession(cache)
        state = session.lookup(word)
    finally:
        store.close()

    if state != LookupState.RESOLVED:
        print(f"❌ {session.error}")
        return 1

    definition = session.definition
    print(f"📖 {word}")
    if definition.ipa:
        print(f"   IPA: {definition.ipa}")
    if definition.part_of_speech:
        print(f"   Part of speech: {definition.part_of_speech}")
    print(f"   Vietnamese: {definition.vietnamese}")
    for url in definition.images[:Config.IMAGE_PAGE_SIZE]:
        print(f"   🖼  {url}")
    return 0


def run_server():
    """Run the API server."""
    from .web.run import main as run_web
    run_web()
    return 0


def main(argv=None):
    """Command line interface."""
    parser = argparse.ArgumentParser(
        description="Import fill-in-the-blank question sets and look up passage words",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s import questions.csv
  %(prog)s import questions.csv --page 2
  %(prog)s import questions.csv --submit
  %(prog)s lookup "Hello!"
  %(prog)s serve

CSV format:
  Header row with columns title, content, text, type (case-insensitive).
  type must be RWFIB or RFIB and defaults to RWFIB when empty.
        """
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    subparsers = parser.add_subparsers(dest="command")

    import_parser = subparsers.add_parser("import", help="Import and review a CSV question set")
    import_parser.add_argument(
        "csv_file",
        type=Path,
        help="Path to the CSV file"
    )
    import_parser.add_argument(
        "--page",
        type=int,
        default=1,
        help=f"Review page to show ({Config.REVIEW_PAGE_SIZE} questions per page)"
    )
    import_parser.add_argument(
        "--submit",
        action="store_true",
        help="Save the valid questions to the document store"
    )

    lookup_parser = subparsers.add_parser("lookup", help="Look up a word")
    lookup_parser.add_argument("word", help="Word to look up")

    subparsers.add_parser("serve", help="Run the API server")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(args.verbose)
    error_handler = ErrorHandler()

    if args.command == "import":
        exit_code = run_import(args.csv_file, args.submit, args.page, error_handler)
    elif args.command == "lookup":
        exit_code = run_lookup(args.word)
    else:
        exit_code = run_server()

    print_error_summary(error_handler)
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
