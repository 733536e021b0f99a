"""AI Recipe Service - HTTP entry point.

Serves recipe generation (ingredients -> signed AI recipes with photos) and
saving of generated recipes over a FastAPI app.

Run with: python app.py
"""

import uvicorn

from recipe_service.api.app import create_app
from recipe_service.utils.config import config
from recipe_service.utils.logger import logger


app = create_app()


if __name__ == "__main__":
    logger.info(f"Starting AI Recipe Service on port {config.PORT}")
    logger.info(f"Model priority: {', '.join(config.AI_MODELS)}")
    logger.info(f"API docs available at: http://localhost:{config.PORT}/docs")
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
