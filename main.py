import argparse
import logging

import uvicorn
from dotenv import load_dotenv

from core.config import get_api_host, get_api_port, get_log_level


def main():
    """Main entry point for the Text2Deck web server."""
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="Serve the Text2Deck API (Google sign-in and slide creation)"
    )
    parser.add_argument(
        "--host",
        type=str,
        default=get_api_host(),
        help="Interface to bind (default: api.host from configs/config.yaml)",
    )
    parser.add_argument(
        "--port",
        "-p",
        type=int,
        default=get_api_port(),
        help="Port to listen on (default: api.port from configs/config.yaml)",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Restart the server when source files change",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=get_log_level(),
        help="Logging level (default: logging.level from configs/config.yaml)",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    print(f"Serving Text2Deck on http://{args.host}:{args.port}")
    print(f"Sign in at http://{args.host}:{args.port}/oauth/start")
    print()

    uvicorn.run(
        "backend.api:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level.lower(),
    )


if __name__ == "__main__":
    main()
