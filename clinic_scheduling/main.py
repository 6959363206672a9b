"""
Main application entry point.
"""

import uvicorn
from .api.app import create_app

app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "clinic_scheduling.main:app",
        host="0.0.0.0",
        port=8001,
        reload=True
    )
