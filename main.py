#!/usr/bin/env python3
"""
docsearch demo script.

Builds a vector database from a directory of markdown files and answers
questions against it.

Usage:
    python main.py build docs/ --output site/
    python main.py query site/vector-db.json "How do I install it?"
"""

import argparse
import sys
from pathlib import Path

from loguru import logger

from docsearch.config import ComponentFactory, load_config, settings
from docsearch.errors import DocSearchError
from docsearch.indexing import VectorDatabaseBuilder
from docsearch.loader import MarkdownLoader
from docsearch.retrieval import SearchSession, VectorSearch
from docsearch.utils import configure_logging, run_async_in_sync_context


def build(args: argparse.Namespace) -> int:
    config = load_config(args.config, args.input_dir)
    documents = MarkdownLoader().load_directory(args.input_dir)
    if not documents:
        logger.warning(f"No markdown files found in {args.input_dir}")

    embedder = ComponentFactory.create_embedder(config.embedder)
    builder = VectorDatabaseBuilder(
        embedder=embedder,
        chunker=ComponentFactory.create_chunker(config.build),
        batch_size=config.build.batch_size,
    )

    output = Path(args.output) / settings.VECTOR_DB_FILENAME
    try:
        run_async_in_sync_context(builder.build_to_path(documents, output))
    finally:
        embedder.close()

    stats = builder.last_stats
    print(
        f"Wrote {output}: {stats.reused_chunks + stats.new_chunks} chunks "
        f"({stats.reused_documents} documents reused, {stats.changed_documents} rebuilt)"
    )
    return 0


def query(args: argparse.Namespace) -> int:
    config = load_config(args.config, Path(args.database).parent)
    embedder = ComponentFactory.create_query_embedder(config)
    session = SearchSession(
        embedder=embedder,
        search=VectorSearch(args.database),
        top_k=args.top_k or config.build.top_k,
    )

    try:
        answer = session.query_sync(args.question)
    finally:
        embedder.close()

    print(answer.answer)
    if answer.sources:
        print("\nSources:")
        for source in answer.sources:
            print(f"  - {source.title}: {source.url}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Semantic search over documentation")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL)
    parser.add_argument("-c", "--config", help="Path to docsearch.config.json")
    commands = parser.add_subparsers(dest="command", required=True)

    build_parser = commands.add_parser("build", help="Build the vector database")
    build_parser.add_argument("input_dir")
    build_parser.add_argument("-o", "--output", default="dist")
    build_parser.set_defaults(handler=build)

    query_parser = commands.add_parser("query", help="Ask a question")
    query_parser.add_argument("database", help="Path or URL of vector-db.json")
    query_parser.add_argument("question")
    query_parser.add_argument("-k", "--top-k", type=int)
    query_parser.set_defaults(handler=query)

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        return args.handler(args)
    except (DocSearchError, FileNotFoundError) as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
