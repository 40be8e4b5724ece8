"""
Campus Auto-Rickshaw Rides Backend
==================================
Entry point.  ``python main.py`` serves on HOST:PORT from the
environment; ``uvicorn main:app --reload`` works as well.
"""

import uvicorn

from campus_rides.api.app import create_app
from campus_rides.config import settings

app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
