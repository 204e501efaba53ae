"""
Launch the survivorship API:

    survivorship-server --port 8000

Picks the next free port when the requested one is taken, then starts uvicorn
and optionally opens the interactive API docs.
"""
from __future__ import annotations

import argparse
import socket
import sys
import threading
import webbrowser

_WILDCARD_HOSTS = ("0.0.0.0", "::")


def _docs_host(host: str) -> str:
    return "127.0.0.1" if host in _WILDCARD_HOSTS else host


def find_available_port(host: str, start_port: int, *, max_tries: int = 50) -> tuple[int, bool]:
    """Return the first bindable port at or above ``start_port``.

    The second element is True when the requested port itself was busy.
    """
    if max_tries < 1:
        raise ValueError("max_tries must be >= 1")

    failure: OSError | None = None
    for port in range(start_port, start_port + max_tries):
        try:
            with socket.create_server((host, port), reuse_port=False):
                pass
        except OSError as exc:
            failure = exc
        else:
            return port, port != start_port

    raise RuntimeError(
        f"Ports {start_port}-{start_port + max_tries - 1} on {host} are all busy (last error: {failure})"
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="survivorship-server",
        description="Serve the survivorship campaign API.",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Host to listen on (default: %(default)s).")
    parser.add_argument("--port", type=int, default=8000, help="Starting port (default: %(default)s).")
    parser.add_argument("--reload", action="store_true", help="Enable uvicorn --reload.")
    parser.add_argument("--open", action="store_true", help="Open the API docs in a browser.")
    args = parser.parse_args(argv)

    try:
        chosen_port, did_fallback = find_available_port(args.host, args.port, max_tries=50)
    except (RuntimeError, ValueError) as exc:
        print(f"[survivorship] Failed to select a free port: {exc}", file=sys.stderr)
        return 2

    url = f"http://{_docs_host(args.host)}:{chosen_port}"
    if did_fallback:
        print(f"[survivorship] Serving on {url} (selected because {args.port} was in use).")
    else:
        print(f"[survivorship] Serving on {url}.")

    if args.open:
        threading.Timer(1.0, webbrowser.open, args=(f"{url}/docs",)).start()

    import uvicorn

    try:
        uvicorn.run(
            "survivorship.web.main:app",
            host=args.host,
            port=chosen_port,
            reload=args.reload,
        )
    except KeyboardInterrupt:
        return 0
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
