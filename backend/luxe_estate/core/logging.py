import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # uvicorn's access log duplicates RequestIDMiddleware.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
