#!/usr/bin/env python3
"""
GST Invoice Generator - Main Entry Point.

This is the main entry point for the invoice generator. It provides
both a command-line interface and programmatic access to loading an
invoice definition, rendering it and exporting the result.

Usage:
    Command Line:
        python main.py --input invoice.yaml
        python main.py --input invoice.yaml --mode visual --output ./pdfs/
        python main.py --input invoice.yaml --upload
        python main.py --list-saved

    Python:
        from main import run_generation
        summary = run_generation("invoice.yaml")

Author: ML Engineering Team
Version: 1.0.0
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Any, Dict, Optional

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import ConfigurationManager
from gst_invoice.utils.exceptions import InvoiceError
from gst_invoice.utils.helpers import format_file_size
from gst_invoice.utils.logger import get_logger, set_level, setup_logger_from_config


def parse_arguments(argv: Optional[list] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="GST Invoice Generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    Generate a PDF:
        python main.py --input invoice.yaml --output ./outputs/

    Visual capture and print:
        python main.py --input invoice.yaml --mode visual --print

    Upload and list saved invoices:
        python main.py --input invoice.yaml --upload
        python main.py --list-saved
        """
    )

    # Input/Output arguments
    parser.add_argument(
        "--input", "-i",
        type=str,
        default=None,
        help="Invoice definition file (YAML or JSON)"
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Output directory (default: paths.output_dir)"
    )

    # Export options
    parser.add_argument(
        "--mode", "-m",
        choices=["programmatic", "visual"],
        default=None,
        help="Rendering mode (default: rendering.mode)"
    )

    parser.add_argument(
        "--print",
        action="store_true",
        dest="print_invoice",
        help="Open a print-ready copy in the default viewer"
    )

    parser.add_argument(
        "--upload",
        action="store_true",
        help="Upload the rendered invoice to blob storage"
    )

    parser.add_argument(
        "--list-saved",
        action="store_true",
        help="List previously uploaded invoices"
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to custom configuration file"
    )

    # Logging options
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress console output"
    )

    args = parser.parse_args(argv)
    if not args.input and not args.list_saved:
        parser.error("--input is required unless --list-saved is given")
    return args


def initialize_system(args: argparse.Namespace) -> ConfigurationManager:
    """
    Initialize the generator with configuration and logging.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Initialized configuration manager.
    """
    config = ConfigurationManager(args.config)

    logger = setup_logger_from_config(quiet=args.quiet)

    if args.debug:
        set_level("DEBUG")

    logger.info("=" * 60)
    logger.info("GST INVOICE GENERATOR")
    logger.info("=" * 60)
    logger.info(f"Version: {config.get('project.version', '1.0.0')}")
    if args.input:
        logger.info(f"Input: {args.input}")

    return config


async def _generate(
    input_path: str,
    output_dir: Optional[str],
    mode: Optional[str],
    print_copy: bool,
    upload: bool
) -> Dict[str, Any]:
    from gst_invoice.export import ExportHandler
    from gst_invoice.io import load_invoice

    logger = get_logger(__name__)

    session = load_invoice(input_path)
    handler = ExportHandler(session, output_dir=output_dir)

    document = await handler.download(mode)
    summary = {
        'invoice_no': session.record.invoice_no,
        'total': str(session.record.total),
        'pdf_path': str(document.path),
        'pages': document.page_count,
        'print_path': None,
        'upload': None,
    }

    if print_copy:
        printed = await handler.print()
        summary['print_path'] = str(printed.path)

    if upload:
        result = await handler.upload()
        summary['upload'] = {
            'success': result.success,
            'url': result.url,
            'error': result.error,
        }
        if not result.success:
            logger.error(f"Upload failed: {result.error}")

    return summary


def run_generation(
    input_path: str,
    output_dir: Optional[str] = None,
    config_path: Optional[str] = None,
    mode: Optional[str] = None,
    print_copy: bool = False,
    upload: bool = False
) -> Dict[str, Any]:
    """
    Generate an invoice PDF from a definition file.

    This is the main programmatic entry point. It loads the definition,
    recomputes every total, renders the PDF and optionally prints and
    uploads it.

    Args:
        input_path: YAML or JSON invoice definition.
        output_dir: Directory for the PDF.
        config_path: Optional custom configuration file path.
        mode: "programmatic" or "visual".
        print_copy: Open a print-flagged copy in the viewer.
        upload: Upload the rendered PDF to blob storage.

    Returns:
        Summary dictionary (invoice_no, total, pdf_path, pages,
        print_path, upload).

    Example:
        >>> summary = run_generation("invoice.yaml", "outputs/")
        >>> print(summary['pdf_path'])
    """
    ConfigurationManager(config_path)
    return asyncio.run(_generate(input_path, output_dir, mode, print_copy, upload))


def list_saved(config_path: Optional[str] = None) -> int:
    """
    Print saved invoices, newest first.

    Returns:
        Exit code.
    """
    from gst_invoice.storage import InvoiceStorage, invoice_display_name

    ConfigurationManager(config_path)
    logger = get_logger(__name__)

    result = asyncio.run(InvoiceStorage().list_invoices())
    if not result.success:
        logger.error(f"Could not list invoices: {result.error}")
        return 1

    logger.info(f"{result.count} saved invoice(s)")
    for blob in result.invoices:
        print(f"{invoice_display_name(blob.pathname):40s} {format_file_size(blob.size):>10s}  {blob.url}")
    return 0


def main(argv: Optional[list] = None) -> int:
    """
    Main function - entry point for command-line execution.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        args = parse_arguments(argv)
        initialize_system(args)
        logger = get_logger(__name__)

        if args.list_saved and not args.input:
            return list_saved(args.config)

        summary = run_generation(
            input_path=args.input,
            output_dir=args.output,
            config_path=args.config,
            mode=args.mode,
            print_copy=args.print_invoice,
            upload=args.upload
        )

        logger.info("=" * 60)
        logger.info(
            f"Invoice {summary['invoice_no']} complete: total {summary['total']}, "
            f"{summary['pages']} page(s)"
        )
        logger.info(f"PDF: {summary['pdf_path']}")
        logger.info("=" * 60)

        if args.list_saved:
            return list_saved(args.config)

        if summary['upload'] and not summary['upload']['success']:
            return 1
        return 0

    except InvoiceError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return 130

    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        if "--debug" in sys.argv:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
