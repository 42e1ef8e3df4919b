"""
Provider Status Use Case

Connectivity check, reported together with the outbound rate window.
"""

from typing import Any

from storefront.domains.ecommerce.application.ports import IFulfillmentProvider


class ProviderStatusUseCase:
    def __init__(self, provider: IFulfillmentProvider):
        self.provider = provider

    async def health(self) -> dict[str, Any]:
        result = await self.provider.health_check()
        result["rate_limit"] = self.provider.rate_limit_status()
        return result
