"""
Command line entry point.

Usage:
    vocabgraph                                  # latest schema.org release
    vocabgraph --ontology https://schema.org/version/14.0/schemaorg-current-https.nt
    vocabgraph --file schemaorg-current-https.nt --nodeprecated --output graph.json
    vocabgraph --config config.json --log-level DEBUG --log-format json
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from tqdm import tqdm

from .config import LoaderConfig
from .constants import ExitCode, LoggingConfig
from .errors import ConfigError, ParseError, SchemaError, TransportError, VocabularyError
from .graph import GraphResolver, ResolvedGraph
from .logging_setup import setup_logging
from .triples import load, load_file

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='vocabgraph',
        description="Load an N-Triples vocabulary and resolve it into a class graph",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s
    %(prog)s --file schemaorg-current-https.nt --output graph.json
    %(prog)s --ontology https://schema.org/version/latest/schemaorg-current-http.nt --nodeprecated
        """,
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument('--ontology', metavar='URL',
                        help='N-Triples address to load (default: latest schema.org release)')
    source.add_argument('--file', metavar='PATH',
                        help='Local N-Triples file to load instead of fetching')

    parser.add_argument('--config', '-c', metavar='PATH',
                        help='JSON configuration file')

    deprecated = parser.add_mutually_exclusive_group()
    deprecated.add_argument('--deprecated', dest='include_deprecated', action='store_true',
                            default=None, help='Include deprecated classes and properties')
    deprecated.add_argument('--nodeprecated', dest='include_deprecated', action='store_false',
                            help='Omit deprecated classes and properties')

    parser.add_argument('--output', '-o', metavar='PATH',
                        help='Write the resolved graph as JSON to this path ("-" for stdout)')

    parser.add_argument('--log-level', default=LoggingConfig.DEFAULT_LOG_LEVEL,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Logging level (default: %(default)s)')
    parser.add_argument('--log-file', metavar='PATH', help='Also write logs to this file')
    parser.add_argument('--log-format', default=LoggingConfig.DEFAULT_FORMAT_STYLE,
                        choices=list(LoggingConfig.SUPPORTED_FORMATS),
                        help='Log record format (default: %(default)s)')
    parser.add_argument('--no-progress', action='store_true',
                        help='Disable the progress bar')
    return parser


def _load_config(args: argparse.Namespace) -> LoaderConfig:
    config = LoaderConfig.from_file(args.config) if args.config else LoaderConfig()
    if args.include_deprecated is not None:
        config.include_deprecated = args.include_deprecated
    return config


def _resolve(args: argparse.Namespace, config: LoaderConfig) -> ResolvedGraph:
    if args.file:
        triples = load_file(args.file, config)
    else:
        triples = load(args.ontology, config)

    resolver = GraphResolver()
    pbar = tqdm(desc="Loading vocabulary", unit=" triples", dynamic_ncols=True,
                disable=args.no_progress, file=sys.stderr)

    def progress_callback(n: int) -> None:
        pbar.update(n - pbar.n)

    try:
        resolver.add_all(triples, progress_callback=progress_callback)
    finally:
        pbar.close()
        triples.close()
    return resolver.resolve()


def _write_output(graph: ResolvedGraph, output: str, include_deprecated: bool) -> None:
    document = json.dumps(graph.to_dict(include_deprecated), indent=2, ensure_ascii=False)
    if output == '-':
        print(document)
        return
    with open(output, 'w', encoding='utf-8') as f:
        f.write(document)
        f.write('\n')
    logger.info(f"Wrote resolved graph to {output}")


def _print_summary(graph: ResolvedGraph, include_deprecated: bool) -> None:
    classes = sum(1 for _ in graph.iter_classes(include_deprecated))
    properties = sum(1 for _ in graph.iter_property_types(include_deprecated))
    print(
        f"Resolved {classes} classes, {properties} properties, "
        f"{len(graph.enum_values)} enum values ({len(graph.warnings)} warnings)",
        file=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI and return the process exit code."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_file, args.log_format)

    try:
        config = _load_config(args)
        graph = _resolve(args, config)
        if args.output:
            _write_output(graph, args.output, config.include_deprecated)
        _print_summary(graph, config.include_deprecated)
        return ExitCode.SUCCESS
    except ConfigError as e:
        logger.error(f"Configuration error: {e}", extra={"error": e})
        return ExitCode.CONFIG_ERROR
    except FileNotFoundError as e:
        logger.error(str(e))
        return ExitCode.FILE_NOT_FOUND
    except TransportError as e:
        logger.error(f"Transport error: {e}", extra={"error": e})
        return ExitCode.TRANSPORT_ERROR
    except (ParseError, SchemaError) as e:
        logger.error(str(e), extra={"error": e})
        return ExitCode.PARSE_ERROR
    except VocabularyError as e:
        logger.error(f"Unexpected vocabulary error: {e}", extra={"error": e})
        return ExitCode.ERROR
    except OSError as e:
        logger.error(f"Could not write output: {e}")
        return ExitCode.ERROR
    except KeyboardInterrupt:
        logger.warning("Cancelled by user")
        return ExitCode.CANCELLED


if __name__ == '__main__':
    sys.exit(main())
