from __future__ import annotations

import argparse
import logging
import os

import uvicorn

from miniwiki_core.app import create_app
from miniwiki_core.config import (
    WikiConfig,
    load_wiki_config,
    resolve_configured_paths,
    write_wiki_config,
)
from miniwiki_core.home import ensure_wiki_layout, resolve_miniwiki_home

logger = logging.getLogger("miniwiki_core")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="miniwiki", description="Serve a flat-file wiki")
    p.add_argument("--home", help="Wiki home directory (overrides MINIWIKI_HOME)")
    p.add_argument("--host", help="Bind address (overrides MINIWIKI_BIND and config)")
    p.add_argument("--port", type=int, help="Listen port (overrides MINIWIKI_PORT and config)")
    p.add_argument(
        "--write-config",
        action="store_true",
        help="Save the effective bind address to config/wiki.json and exit",
    )
    return p


def resolve_bind(
    args: argparse.Namespace, config: WikiConfig, environ: dict[str, str] | None = None
) -> tuple[str, int]:
    env = os.environ if environ is None else environ

    host = args.host or env.get("MINIWIKI_BIND") or config.network.bind_host

    env_port = env.get("MINIWIKI_PORT")
    if args.port is not None:
        port = args.port
    elif env_port:
        port = int(env_port)
    else:
        port = config.network.port

    return host, port


def with_bind(config: WikiConfig, host: str, port: int) -> WikiConfig:
    network = config.network.model_copy(update={"bind_host": host, "port": port})
    return config.model_copy(update={"network": network})


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    if args.home:
        # The app lifespan resolves home from the environment.
        os.environ["MINIWIKI_HOME"] = args.home

    home = resolve_miniwiki_home()
    paths = ensure_wiki_layout(home)
    config = load_wiki_config(paths)
    paths = resolve_configured_paths(paths, config)

    # Console only; the app lifespan attaches the rotating file handler.
    logging.basicConfig(
        level=config.logging.level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )

    host, port = resolve_bind(args, config)

    if args.write_config:
        write_wiki_config(paths, with_bind(config, host, port))
        logger.info("Wrote %s", paths.wiki_config_path)
        return

    uvicorn.run(create_app(), host=host, port=port)


if __name__ == "__main__":
    main()
