"""Run the API with uvicorn: ``python -m linkdigest``."""

import uvicorn

from linkdigest.settings import settings


def main() -> None:
    uvicorn.run("linkdigest.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
