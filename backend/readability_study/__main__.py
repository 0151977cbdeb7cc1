import logging

import uvicorn

from readability_study.core.config import load_settings


def main() -> None:
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("readability_study.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
