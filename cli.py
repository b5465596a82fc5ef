import argparse

from commands.clean import clean
from commands.serve import serve


def main():
    parser = argparse.ArgumentParser()
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("clean", help="Format and type check the code")

    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)
    serve_parser.add_argument("--reload", action="store_true")

    args = parser.parse_args()
    if args.command == "clean":
        clean()
    elif args.command == "serve":
        serve(args.host, args.port, args.reload)


if __name__ == "__main__":
    main()
