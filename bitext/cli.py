#!/usr/bin/env python3
"""
bitext - search and inspect translation interchange files

Supported Formats:
    - TMX (translation memories)
    - TBX (term bases)
    - XLIFF 1.2 (.xlf, .xliff, .sdlxliff, .mqxliff, .txlf, .mxliff)
    - XLZ (zipped XLIFF)
    - XLSX (id / source / target tables)

Commands:
    search   - Find a string or pattern in source and target text
    meta     - Count records per language
    extract  - Print the plain text of every record
    formats  - List supported formats

Output is JSON on stdout (or YAML with --output yaml). Errors are printed
as a JSON object on stderr with exit code 1.
"""

import argparse
import json
import logging
import sys

import yaml

from .documents import BilingualDocument, TermBase, TranslationMemory, summarize_languages
from .readers import ReaderRegistry, read_document
from .search import create_matcher
from .segment import extract_text


def cmd_search(args) -> dict:
    """Search every file for a literal string or pattern."""
    matcher = create_matcher(args.query, regex=args.regex)

    files = []
    total_results = 0
    total_matches = 0
    for path in args.files:
        document = read_document(path, args.format)
        results = document.search(matcher, include_tags=args.include_tags)
        entry = {
            "file": path,
            "results": [
                {"text": r.text, "matched": r.matched, "extra": list(r.extra)}
                for r in results
            ],
        }
        if args.count:
            matches = document.count_matches(matcher, include_tags=args.include_tags)
            entry["match_count"] = matches
            total_matches += matches
        files.append(entry)
        total_results += len(results)

    result = {
        "status": "ok",
        "query": args.query,
        "mode": "pattern" if args.regex else "literal",
        "files": files,
        "summary": f"{total_results} matching records in {len(files)} files",
    }
    if args.count:
        result["match_count"] = total_matches
    return result


def cmd_meta(args) -> dict:
    """Count records per language across files."""
    documents = [read_document(path, args.format) for path in args.files]
    return {
        "status": "ok",
        "languages": summarize_languages(documents),
        "files": [
            {"file": d.path, "languages": dict(sorted(d.language_counts().items()))}
            for d in documents
        ],
    }


def cmd_extract(args) -> dict:
    """Render every record of one file as plain text."""
    document = read_document(args.file, args.format)
    include_tags = args.include_tags

    if isinstance(document, BilingualDocument):
        records = [
            {
                "id": unit.id,
                "sn": unit.sequence_number,
                "translate": unit.translate,
                "source": extract_text(unit.source, include_tags),
                "target": extract_text(unit.target, include_tags),
            }
            for unit in document.trans_units
        ]
    elif isinstance(document, TranslationMemory):
        records = [
            {
                "id": unit.tuid,
                "variants": {v.language: extract_text(v.segment, include_tags) for v in unit.variants},
            }
            for unit in document.units
        ]
    elif isinstance(document, TermBase):
        records = [
            {
                "id": entry.id,
                "terms": {ls.language: extract_text(ls.term, include_tags) for ls in entry.lang_sets},
            }
            for entry in document.term_entries
        ]
    else:
        records = []

    return {
        "status": "ok",
        "file": args.file,
        "records": records,
        "summary": f"{len(records)} records",
    }


def cmd_formats(args) -> dict:
    """List supported formats."""
    formats = ReaderRegistry.list_formats()
    return {
        "status": "ok",
        "formats": formats,
        "summary": f"{len(formats)} formats supported: {', '.join(f['name'] for f in formats)}",
    }


def render(result: dict, output: str) -> str:
    """Serialize a command result as JSON or YAML."""
    if output == "yaml":
        return yaml.safe_dump(result, allow_unicode=True, sort_keys=False)
    return json.dumps(result, indent=2, ensure_ascii=False)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bitext",
        description="bitext - search and inspect translation interchange files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Supported Formats:
  tmx      - Translation Memory eXchange
  tbx      - TermBase eXchange
  xliff    - .xlf .xliff .sdlxliff .mqxliff .txlf .mxliff
  xlz      - zipped XLIFF (content.xlf)
  xlsx     - bilingual spreadsheet (id, source, target)

Examples:
  # Literal search, tags excluded from the searched text
  bitext search --query "Hello" memory.tmx

  # Pattern search with match counts
  bitext search --query "\\d+ items?" --regex --count project.sdlxliff

  # Records per language
  bitext meta *.tmx *.xlz

  # Plain text of every unit, inline code included
  bitext extract strings.xlsx --include-tags
        """,
    )
    parser.add_argument("--output", "-o", default="json", choices=["json", "yaml"],
                        help="Output format (default: json)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log progress to stderr")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    format_choices = sorted(f["name"] for f in ReaderRegistry.list_formats())

    search_parser = subparsers.add_parser("search", help="Search source and target text")
    search_parser.add_argument("files", nargs="+", help="Input files")
    search_parser.add_argument("--query", "-q", required=True, help="String or pattern to find")
    search_parser.add_argument("--regex", "-r", action="store_true", help="Treat query as a regular expression")
    search_parser.add_argument("--include-tags", "-t", action="store_true",
                               help="Search the content of inline codes too")
    search_parser.add_argument("--count", "-c", action="store_true", help="Also count every match")
    search_parser.add_argument("--format", "-f", choices=format_choices,
                               help="Input format (default: from extension)")

    meta_parser = subparsers.add_parser("meta", help="Count records per language")
    meta_parser.add_argument("files", nargs="+", help="Input files")
    meta_parser.add_argument("--format", "-f", choices=format_choices,
                             help="Input format (default: from extension)")

    extract_parser = subparsers.add_parser("extract", help="Print plain text of every record")
    extract_parser.add_argument("file", help="Input file")
    extract_parser.add_argument("--include-tags", "-t", action="store_true",
                                help="Include the content of inline codes")
    extract_parser.add_argument("--format", "-f", choices=format_choices,
                                help="Input format (default: from extension)")

    subparsers.add_parser("formats", help="List supported formats")

    return parser


COMMANDS = {
    "search": cmd_search,
    "meta": cmd_meta,
    "extract": cmd_extract,
    "formats": cmd_formats,
}


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        result = COMMANDS[args.command](args)
        print(render(result, args.output))
    except Exception as e:
        print(json.dumps({
            "status": "error",
            "error": str(e),
            "error_type": type(e).__name__,
        }), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
