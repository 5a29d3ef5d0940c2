from __future__ import annotations

from dataclasses import dataclass

from ..models_promotions import Promotion, PromotionCreate
from .resource import ResourceClient


@dataclass
class PromotionsClient(ResourceClient):
    path = "/promotions"
    module = "promotions"
    record_model = Promotion
    create_model = PromotionCreate

    def approve(self, promotion_id: int, notes: str | None = None) -> Promotion:
        return self.action(promotion_id, "approve", {"notes": notes})

    def cancel(self, promotion_id: int, reason: str) -> Promotion:
        # Cancelling is a DELETE carrying the reason; the row stays with status "cancelled".
        payload = self._request(
            "DELETE",
            f"{self.path}/{promotion_id}",
            json_body={"reason": reason},
            module=self.module,
            operation="cancel",
        )
        return self._detail(payload, "cancel")
