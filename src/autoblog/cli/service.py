"""Generator service for CLI commands.

Each call wires a fresh generator, runs one entry point, waits for
queued background work and closes the HTTP clients.
"""

from __future__ import annotations

from typing import Optional

from ..content.models import BatchResult, GenerationOptions, GenerationResult
from ..content.orchestrator import ContentGenerator, build_content_generator
from ..providers.config import ProviderConfig, load_provider_config
from ..services.background import BackgroundTasks
from ..storage.memory import InMemoryPostStore


class BlogGeneratorService:
    """Run the content generator against the in-memory post store."""

    def __init__(self, config: Optional[ProviderConfig] = None):
        self.config = config or load_provider_config()
        self.post_store = InMemoryPostStore()
        self.background = BackgroundTasks()

    def _build(self) -> ContentGenerator:
        return build_content_generator(self.config, self.post_store, self.background)

    async def _shutdown(self, generator: ContentGenerator) -> None:
        # Download tracking still uses the image client
        await self.background.drain()
        await generator.image_provider.close()
        await generator.discovery.close()

    async def generate(self, topic: str, options: GenerationOptions) -> GenerationResult:
        generator = self._build()
        try:
            return await generator.generate_post_from_content(topic, options)
        finally:
            await self._shutdown(generator)

    async def generate_batch(self, options: GenerationOptions) -> BatchResult:
        """Run a batch.

        Raises:
            ConfigError: The model client is not configured.
        """
        generator = self._build()
        try:
            return await generator.generate_multiple_posts(options)
        finally:
            await self._shutdown(generator)
