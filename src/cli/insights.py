# =============================================================================
# src/cli/insights.py -- Document Insights command-line tool
# =============================================================================
#
# One-shot access to the extraction and insight core without running the
# API server or touching the document database:
#
#   extract   FILE               Print the normalized text of a document
#   fetch     URL                Print a Confluence page's title and text
#   ask       QUERY FILE...      Extract files, then ask the AI provider
#   providers                    List providers with complete configuration
#
# Configuration comes from the same Settings (.env / environment) as the
# server, so AI_PROVIDER and the provider keys apply here too.  Log output
# goes to stderr so stdout carries only the result.
# =============================================================================

"""Command-line access to document extraction, Confluence fetches and insights.

Usage::

    python -m src.cli.insights extract report.pdf
    python -m src.cli.insights fetch https://acme.atlassian.net/wiki/spaces/X/pages/123
    python -m src.cli.insights ask "What are the risks?" report.pdf notes.txt --provider demo
    python -m src.cli.insights providers

Exit codes: 0 on success, 1 on any application error, 2 on bad arguments.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

import structlog
from pydantic import ValidationError

from src.config.loader import load_config
from src.config.settings import Settings
from src.models.insight import InsightDocument
from src.utils.errors import DocumentInsightsError


def _configure_cli_logging(verbose: bool) -> None:
    """Send structlog and stdlib logging to stderr, WARNING+ unless verbose."""
    level = logging.DEBUG if verbose else logging.WARNING

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers.clear()
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    root.addHandler(handler)
    root.setLevel(level)
    for name in ("httpx", "httpcore", "openai", "anthropic"):
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------


async def _cmd_extract(args: argparse.Namespace, settings: Settings) -> int:
    from src.services.document_extractor import DocumentExtractor

    path = Path(args.file)
    data = path.read_bytes()
    extractor = DocumentExtractor(libreoffice_timeout=settings.libreoffice_timeout)
    fmt = extractor.validate(path.name, len(data), settings.upload_max_size)
    text = await extractor.extract(data, fmt)

    if args.json_output:
        metadata = extractor.metadata(path.name, len(data))
        print(json.dumps({"metadata": metadata.model_dump(), "content": text}, indent=2))
    else:
        print(text)
    return 0


async def _cmd_fetch(args: argparse.Namespace, settings: Settings) -> int:
    from src.providers.content.confluence_provider import ConfluenceContentProvider

    provider = ConfluenceContentProvider(settings)
    try:
        page = await provider.fetch(args.url, token=args.token, email=args.email)
    finally:
        await provider.aclose()

    if args.json_output:
        print(json.dumps(page.model_dump(), indent=2))
    else:
        print(page.title)
        print("=" * len(page.title))
        print(page.content)
    return 0


async def _cmd_ask(args: argparse.Namespace, settings: Settings) -> int:
    from src.providers.cache.memory_cache import MemoryCacheProvider
    from src.providers.llm import build_llm_providers
    from src.services.document_extractor import DocumentExtractor
    from src.services.insight_service import InsightService

    extractor = DocumentExtractor(libreoffice_timeout=settings.libreoffice_timeout)
    documents: list[InsightDocument] = []
    for index, file_name in enumerate(args.files, start=1):
        path = Path(file_name)
        data = path.read_bytes()
        fmt = extractor.validate(path.name, len(data), settings.upload_max_size)
        content = await extractor.extract(data, fmt)
        documents.append(
            InsightDocument(id=str(index), name=path.name, type="upload", content=content)
        )

    cache_config = load_config(args.config, settings)["cache"]
    providers = build_llm_providers(settings)
    service = InsightService(
        providers=providers,
        insights_cache=MemoryCacheProvider(**_cache_kwargs(cache_config, "insights")),
        summaries_cache=MemoryCacheProvider(**_cache_kwargs(cache_config, "summaries")),
        topics_cache=MemoryCacheProvider(**_cache_kwargs(cache_config, "topics")),
        default_provider=settings.ai_provider,
        temperature=settings.ai_temperature,
        max_tokens=settings.ai_max_tokens,
    )
    try:
        insights = await service.generate_insights(args.query, documents, provider=args.provider)
    finally:
        for name in ("google", "ollama"):
            await providers[name].aclose()

    if args.json_output:
        print(
            json.dumps(
                {
                    "query": args.query,
                    "provider": service.get_provider(args.provider).get_provider_name(),
                    "documents_analyzed": len(documents),
                    "insights": insights,
                },
                indent=2,
            )
        )
    else:
        print(insights)
    return 0


async def _cmd_providers(args: argparse.Namespace, settings: Settings) -> int:
    available = settings.get_available_providers()
    if args.json_output:
        print(json.dumps({"provider": settings.ai_provider, "available_providers": available}))
    else:
        print(f"Configured provider: {settings.ai_provider}")
        print(f"Available providers: {', '.join(available)}")
    return 0


def _cache_kwargs(cache_config: dict, name: str) -> dict:
    section = cache_config[name]
    return {"max_size": int(section["max_size"]), "ttl": float(section["ttl"]), "name": name}


_COMMANDS = {
    "extract": _cmd_extract,
    "fetch": _cmd_fetch,
    "ask": _cmd_ask,
    "providers": _cmd_providers,
}


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m src.cli.insights",
        description="Extract document text, fetch Confluence pages and generate AI insights.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Print results as JSON.",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug logging on stderr.",
    )
    parser.add_argument(
        "--config",
        default="config/config.yaml",
        help="Path to the YAML config file (cache sizing).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    extract = subparsers.add_parser("extract", help="Print a document's extracted text.")
    extract.add_argument("file", help="Path to a .pdf, .doc, .docx or .txt file.")

    fetch = subparsers.add_parser("fetch", help="Fetch a Confluence page.")
    fetch.add_argument("url", help="Browser URL of the page.")
    fetch.add_argument("--email", default=None, help="Confluence account email.")
    fetch.add_argument("--token", default=None, help="Confluence API token.")

    ask = subparsers.add_parser("ask", help="Ask a question about one or more documents.")
    ask.add_argument("query", help="The question to answer.")
    ask.add_argument("files", nargs="+", help="Documents to answer from.")
    ask.add_argument("--provider", default=None, help="Overrides AI_PROVIDER.")

    subparsers.add_parser("providers", help="List providers with complete configuration.")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse *argv*, run the chosen subcommand and return the exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_cli_logging(args.verbose)

    settings = Settings()
    try:
        return asyncio.run(_COMMANDS[args.command](args, settings))
    except (DocumentInsightsError, ValidationError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
