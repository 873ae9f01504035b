"""Command-line entry point: runs the HTTP listener and the optional HTTPS listener."""
from __future__ import annotations

import argparse
import asyncio
import contextlib
import signal
import sys
from collections.abc import Iterator, Sequence
from pathlib import Path

import uvicorn

from .app import app
from .config import Settings, get_settings
from .logging_config import logger, setup_logging

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class ListenerServer(uvicorn.Server):
    """uvicorn server that leaves signal handling to :func:`serve`.

    Several servers share one event loop, so a single handler has to stop
    all of them instead of each server capturing the signals for itself.
    """

    @contextlib.contextmanager
    def capture_signals(self) -> Iterator[None]:
        yield


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="realip",
        description="Report the caller's apparent IP address over HTTP and optionally HTTPS.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Plain HTTP on port 8080
  realip --http-port 8080

  # HTTP and HTTPS
  realip --cert-file server.crt --key-file server.key

Environment Variables:
  REALIP_HOST, REALIP_HTTP_PORT, REALIP_HTTPS_PORT,
  REALIP_CERT_FILE, REALIP_KEY_FILE, REALIP_LOG_LEVEL
        """,
    )
    parser.add_argument("--host", default=settings.host, help=f"Interface to bind (default: {settings.host})")
    parser.add_argument("--http-port", type=int, default=settings.http_port, help=f"HTTP port (default: {settings.http_port})")
    parser.add_argument(
        "--https-port",
        type=int,
        default=settings.https_port,
        help=f"HTTPS port, used only with a certificate and key (default: {settings.https_port})",
    )
    parser.add_argument("--cert-file", default=settings.cert_file, help="TLS certificate file (PEM)")
    parser.add_argument("--key-file", default=settings.key_file, help="TLS private key file (PEM)")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=settings.log_level.upper(),
        help=f"Log level (default: {settings.log_level.upper()})",
    )
    return parser


def parse_arguments(argv: Sequence[str] | None = None, settings: Settings | None = None) -> argparse.Namespace:
    parser = build_parser(settings or get_settings())
    args = parser.parse_args(argv)
    if bool(args.cert_file) != bool(args.key_file):
        parser.error("--cert-file and --key-file must be given together")
    for option, path in (("--cert-file", args.cert_file), ("--key-file", args.key_file)):
        if path and not Path(path).is_file():
            parser.error(f"{option}: no such file: {path}")
    args.tls = bool(args.cert_file and args.key_file)
    return args


def build_servers(args: argparse.Namespace) -> list[ListenerServer]:
    configs = [
        uvicorn.Config(
            app,
            host=args.host,
            port=args.http_port,
            proxy_headers=False,
            log_config=None,
            log_level=args.log_level.lower(),
        )
    ]
    if args.tls:
        configs.append(
            uvicorn.Config(
                app,
                host=args.host,
                port=args.https_port,
                ssl_certfile=args.cert_file,
                ssl_keyfile=args.key_file,
                proxy_headers=False,
                log_config=None,
                log_level=args.log_level.lower(),
            )
        )
    return [ListenerServer(config) for config in configs]


def install_shutdown_handlers(servers: Sequence[uvicorn.Server]) -> None:
    loop = asyncio.get_running_loop()

    def _stop(signame: str) -> None:
        logger.info("server.shutdown", signal=signame)
        for server in servers:
            if server.should_exit:
                server.force_exit = True
            server.should_exit = True

    for sig in SHUTDOWN_SIGNALS:
        try:
            loop.add_signal_handler(sig, _stop, sig.name)
        except NotImplementedError:
            signal.signal(sig, lambda signum, frame: loop.call_soon_threadsafe(_stop, signal.Signals(signum).name))


async def serve(servers: Sequence[uvicorn.Server]) -> None:
    install_shutdown_handlers(servers)
    for server in servers:
        scheme = "https" if server.config.is_ssl else "http"
        logger.info("server.listen", scheme=scheme, host=server.config.host, port=server.config.port)
    await asyncio.gather(*(server.serve() for server in servers))


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_arguments(argv)
    setup_logging(args.log_level)
    servers = build_servers(args)
    logger.info("server.start", listeners=len(servers), tls=args.tls)
    try:
        asyncio.run(serve(servers))
    except SystemExit as exc:
        if exc.code:
            logger.error("server.fatal", exit_code=exc.code)
        raise
    except Exception:
        logger.exception("server.fatal")
        sys.exit(1)
    logger.info("server.stopped")


if __name__ == "__main__":
    main()
