import os

import uvicorn

from envhealth.config import settings
from utils.logging_utils import get_tagged_logger, mask_api_key, setup_logging

logger = get_tagged_logger(__name__, tag="server")


if __name__ == "__main__":
    setup_logging(level=settings.log_level, job_name="envhealth_server")
    logger.info(
        "Starting dashboard server",
        extra={
            "api_base_url": settings.api_base_url,
            "data_source": settings.data_source,
            "api_key": mask_api_key(settings.api_key),
        },
    )

    uvicorn.run(
        "envhealth.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        reload=False,
    )
