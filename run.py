import logging
from typing import Optional

import uvicorn

from livecrawl.api.server import create_app
from livecrawl.container import Container


def main(container: Optional[Container] = None):
    container = container or Container()
    logging.basicConfig(
        level=container.config.LOG_LEVEL() or "INFO",
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app(container.crawl_controller(), container_env=container.config())
    uvicorn.run(
        app,
        host=container.config.LIVECRAWL_HOST(),
        port=container.config.LIVECRAWL_PORT(),
    )


if __name__ == '__main__':
    main()
