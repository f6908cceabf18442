"""CLI entry point for the apiassist API server."""

import argparse
import os


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="apiassist-server",
        description="apiassist API server: integration generation and publishing pipeline",
    )
    parser.add_argument("--host", default="0.0.0.0", help="Bind host (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8080, help="Bind port (default: 8080)")
    parser.add_argument(
        "--local",
        action="store_true",
        help="Local dev mode: coloured console logs instead of JSON",
    )
    args = parser.parse_args(argv)

    if args.local:
        os.environ["APIASSIST_JSON_LOGS"] = "0"

    import uvicorn

    uvicorn.run("apiassist.main:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
