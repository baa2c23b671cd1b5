import asyncio
import logging

from blog_api.config import settings
from blog_api.server import Server


def main() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    try:
        asyncio.run(Server().serve(settings.database_url))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
