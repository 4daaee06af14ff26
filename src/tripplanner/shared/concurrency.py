import asyncio
from tripplanner.shared.config.settings import settings

LLM_REQUEST_SEMAPHORE = asyncio.Semaphore(settings.LLM_MAX_CONCURRENCY)
