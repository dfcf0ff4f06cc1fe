"""
Run the PriceHub server.
"""
import os

# Load environment before settings are read
from dotenv import load_dotenv
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), ".env"))

import uvicorn

from pricehub.core.config import settings
from pricehub.core.logging import configure_logging

if __name__ == "__main__":
    configure_logging(settings.log_level)
    print(f"Starting {settings.app_name} on :{settings.port}")
    print(f"API Docs: http://localhost:{settings.port}/docs")
    print("-" * 50)

    uvicorn.run(
        "pricehub.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
