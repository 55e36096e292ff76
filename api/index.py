"""
Vercel Serverless Function wrapper for the portfolio FastAPI app
"""
import sys
from pathlib import Path

# Add backend to Python path
backend_path = Path(__file__).parent.parent / "backend"
sys.path.insert(0, str(backend_path))

from portfolio_api.main import app

# Vercel's @vercel/python builder expects a Lambda-style handler; Mangum adapts ASGI.
# lifespan stays on: each startup/shutdown cycle builds and closes its own GitHub client.
from mangum import Mangum

mangum_handler = Mangum(app, lifespan="auto")


def handler(event, context=None):
    """Vercel serverless function handler"""
    return mangum_handler(event, context)
