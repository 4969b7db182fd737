from __future__ import annotations

import asyncio

import uvicorn

from wikiwiki.settings import settings

from .app import create_app


async def _main() -> None:
    config = uvicorn.Config(
        create_app(),
        host=settings.bind_host,
        port=settings.bind_port,
        log_level=(settings.log_level or "info").lower(),
    )
    server = uvicorn.Server(config)
    await server.serve()


def main() -> None:
    asyncio.run(_main())


if __name__ == "__main__":
    main()
