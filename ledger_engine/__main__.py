"""
Server entry point.

Usage:
    python -m ledger_engine
"""

import uvicorn

from ledger_engine.config import get_settings

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "ledger_engine.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
