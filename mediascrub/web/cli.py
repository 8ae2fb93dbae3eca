#!/usr/bin/env python3
"""CLI entry point for the mediascrub upload server."""

import argparse
import logging
import sys

from .app import create_app


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the web server.
    
    Args:
        verbose: If True, enable DEBUG level logging
    """
    level = logging.DEBUG if verbose else logging.INFO
    
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()]
    )
    
    # Reduce noise from werkzeug in non-debug mode
    if not verbose:
        logging.getLogger('werkzeug').setLevel(logging.WARNING)


def parse_arguments() -> argparse.Namespace:
    """Parse command-line arguments.
    
    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="mediascrub upload server - strips image metadata before storage",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Start server on default port
  mediascrub-web
  
  # Start on custom port with a config file
  mediascrub-web --port 8080 --config /path/to/config.yaml

Upload with:
  curl -H "X-Identity-Id: abc" -F files=@photo.jpg http://localhost:5060/api/upload
"""
    )
    
    parser.add_argument(
        "--port", "-p",
        type=int,
        default=5060,
        help="Port to run the server on (default: 5060)"
    )
    
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1, localhost only)"
    )
    
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="Path to config file (default: ~/.mediascrub/config.yaml)"
    )
    
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode with auto-reload"
    )
    
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    
    return parser.parse_args()


def main() -> int:
    """Main entry point for the upload server.
    
    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    args = parse_arguments()
    
    setup_logging(args.verbose or args.debug)
    logger = logging.getLogger(__name__)
    
    try:
        app = create_app(config_path=args.config, debug=args.debug)
        
        print(f"\nmediascrub upload API at http://{args.host}:{args.port}/api/upload\n")
        
        app.run(
            host=args.host,
            port=args.port,
            debug=args.debug,
            threaded=True,
            use_reloader=args.debug
        )
        
        return 0
        
    except KeyboardInterrupt:
        print()
        print("Server stopped.")
        return 0
        
    except Exception as e:
        logger.error(f"Failed to start server: {e}", exc_info=args.verbose)
        print(f"\nError: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
