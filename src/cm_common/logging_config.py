"""Root logger setup for the client process."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(debug: bool = False) -> None:
    logging.basicConfig(level=logging.DEBUG if debug else logging.INFO, format=LOG_FORMAT)
    # httpx logs every request at INFO; the request-log middleware already covers ours
    logging.getLogger("httpx").setLevel(logging.DEBUG if debug else logging.WARNING)
