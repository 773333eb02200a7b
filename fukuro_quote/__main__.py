"""Allow running as: python -m fukuro_quote"""

import argparse

from fukuro_quote.main import run, serve


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="fukuro_quote", description="Fukuro Studio quotes")
    parser.add_argument("request", nargs="?", help="JSON file holding a quote request")
    parser.add_argument("--submit", action="store_true", help="save the quote after pricing it")
    parser.add_argument("--serve", action="store_true", help="start the HTTP API")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8000)
    return parser.parse_args()


def main() -> None:
    args = _parse_args()
    if args.serve:
        serve(args.host, args.port)
    elif args.request:
        run(args.request, submit=args.submit)
    else:
        raise SystemExit("Give a request file or --serve")


if __name__ == "__main__":
    main()
