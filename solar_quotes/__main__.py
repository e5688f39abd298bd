"""Run the API server: python -m solar_quotes"""

import uvicorn

from solar_quotes.config import settings
from solar_quotes.infrastructure.database.session import create_db_engine, init_db


def main() -> None:
    init_db(create_db_engine(settings.database_url))
    uvicorn.run("solar_quotes.api.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
