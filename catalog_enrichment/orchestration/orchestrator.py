"""
Update Orchestrator

Executes an update plan against the platform gateway, one step at a
time, and collects a per-step outcome report.

Failure policy:
- A failed step is recorded and the run continues.
- Only the SEO step is required; the run succeeds iff it succeeded.
- Variant prices try the REST path first and fall back to GraphQL
  exactly once, and only when REST says "not found".
- Losing the connection to the platform aborts the run
  (ShopifyConnectionError propagates).
- Once the per-event deadline has passed, remaining steps are recorded
  as failed without being issued.
"""

import logging
import time
from decimal import Decimal
from typing import Any, Callable, Dict, Mapping, Optional

from ..content.synthesizer import derive_alt_text
from ..models import (
    InferredAttributes,
    OutcomeReport,
    ProductEvent,
    SeoContent,
    StepKind,
    StepOutcome,
    StepStatus,
    UpdateStep,
)
from ..shopify.errors import ShopifyAPIError, ShopifyConnectionError, ShopifyNotFoundError
from .plan import build_update_plan

logger = logging.getLogger(__name__)

DEADLINE_EXCEEDED = "deadline exceeded"


class UpdateOrchestrator:
    """
    Applies enrichment results to the platform.

    Usage:
        orchestrator = UpdateOrchestrator(gateway, brand="DTP Jewelry")
        report = orchestrator.apply(event, attributes, seo, description, prices)
        if not report.success:
            ...

    The gateway is any object exposing the ShopifyGateway write methods.
    """

    def __init__(
        self,
        gateway: Any,
        brand: str = "DTP Jewelry",
        metafield: Optional[Dict[str, str]] = None,
        deadline_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the orchestrator.

        Args:
            gateway: Platform gateway (ShopifyGateway or a test double)
            brand: Brand name for the image alt text suffix
            metafield: namespace/key/type of the material metafield
            deadline_seconds: Overall time budget for one apply() call
            clock: Monotonic clock, injectable for tests
        """
        self.gateway = gateway
        self.brand = brand
        self.metafield = metafield
        self.deadline_seconds = deadline_seconds
        self._clock = clock

        self._handlers: Dict[StepKind, Callable[[UpdateStep], StepOutcome]] = {
            StepKind.SEO: self._write_seo,
            StepKind.DESCRIPTION: self._write_description,
            StepKind.TAGS: self._write_tags,
            StepKind.VARIANT_PRICE: self._write_variant_price,
            StepKind.METAFIELD: self._write_metafield,
            StepKind.COLLECTION: self._add_to_collection,
            StepKind.IMAGE_ALT: self._fill_image_alt_text,
        }

    def apply(
        self,
        event: ProductEvent,
        attributes: InferredAttributes,
        seo: SeoContent,
        description_html: str,
        prices: Mapping[str, Decimal],
    ) -> OutcomeReport:
        """
        Build the update plan for one event and execute it in order.

        Returns:
            OutcomeReport with one outcome per step

        Raises:
            ShopifyConnectionError: If the platform becomes unreachable
        """
        plan = build_update_plan(
            event,
            attributes,
            seo,
            description_html,
            prices,
            alt_text=derive_alt_text(seo.title, self.brand),
            metafield=self.metafield,
        )

        report = OutcomeReport(product_id=event.id)
        started = self._clock()

        for step in plan:
            if self._deadline_passed(started):
                logger.error("Deadline exceeded, not issuing %s[%s]", step.kind.value, step.target)
                report.outcomes.append(self._outcome(step, StepStatus.FAILED, DEADLINE_EXCEEDED))
                continue
            report.outcomes.append(self._execute(step))

        failed = len(report.diagnostics)
        if report.success:
            logger.info("Product %s updated: %d steps, %d best-effort failures",
                        event.id, len(report.outcomes), failed)
        else:
            logger.error("Product %s update failed: %d of %d steps failed",
                         event.id, failed, len(report.outcomes))
        return report

    def _deadline_passed(self, started: float) -> bool:
        if self.deadline_seconds is None:
            return False
        return self._clock() - started > self.deadline_seconds

    @staticmethod
    def _outcome(step: UpdateStep, status: StepStatus, detail: str = "", used_fallback: bool = False) -> StepOutcome:
        return StepOutcome(
            kind=step.kind,
            target=step.target,
            status=status,
            required=step.required,
            detail=detail,
            used_fallback=used_fallback,
        )

    def _execute(self, step: UpdateStep) -> StepOutcome:
        """
        Run one step; any error other than an unreachable shop becomes a
        failed outcome so the remaining steps still run.
        """
        try:
            outcome = self._handlers[step.kind](step)
        except ShopifyConnectionError:
            raise
        except ShopifyAPIError as e:
            outcome = self._outcome(step, StepStatus.FAILED, str(e))
        except Exception as e:
            logger.exception("%s[%s]: unexpected error", step.kind.value, step.target)
            outcome = self._outcome(step, StepStatus.FAILED, f"unexpected error: {e}")

        if outcome.ok:
            logger.info("%s[%s]: ok%s", step.kind.value, step.target,
                        f" ({outcome.detail})" if outcome.detail else "")
        elif outcome.status is StepStatus.SKIPPED:
            logger.debug("%s[%s]: skipped (%s)", step.kind.value, step.target, outcome.detail)
        elif step.required:
            logger.error("%s[%s]: failed: %s", step.kind.value, step.target, outcome.detail)
        else:
            logger.warning("%s[%s]: failed: %s", step.kind.value, step.target, outcome.detail)
        return outcome

    # ── Step handlers ──────────────────────────────────────────────────

    def _write_seo(self, step: UpdateStep) -> StepOutcome:
        self.gateway.update_product_seo(step.target, step.payload["title"], step.payload["description"])
        return self._outcome(step, StepStatus.OK)

    def _write_description(self, step: UpdateStep) -> StepOutcome:
        self.gateway.update_product_description(step.target, step.payload["body_html"])
        return self._outcome(step, StepStatus.OK)

    def _write_tags(self, step: UpdateStep) -> StepOutcome:
        self.gateway.update_product_tags(step.target, step.payload["tags"])
        return self._outcome(step, StepStatus.OK, f"{len(step.payload['tags'])} tags")

    def _write_variant_price(self, step: UpdateStep) -> StepOutcome:
        price = step.payload["price"]
        try:
            self.gateway.update_variant_price_rest(step.target, price)
            return self._outcome(step, StepStatus.OK, f"price {price}")
        except ShopifyNotFoundError:
            logger.info("Variant %s not found via REST, retrying through GraphQL", step.target)

        try:
            self.gateway.update_variant_price_graphql(
                step.payload["product_gid"], step.payload["variant_gid"], price
            )
        except ShopifyAPIError as e:
            return self._outcome(step, StepStatus.FAILED, f"fallback failed: {e}", used_fallback=True)
        return self._outcome(step, StepStatus.OK, f"price {price} via GraphQL", used_fallback=True)

    def _write_metafield(self, step: UpdateStep) -> StepOutcome:
        p = step.payload
        self.gateway.set_metafield(step.target, p["namespace"], p["key"], p["value"], p["type"])
        return self._outcome(step, StepStatus.OK, f"{p['namespace']}.{p['key']}={p['value']}")

    def _add_to_collection(self, step: UpdateStep) -> StepOutcome:
        product_gid = step.payload["product_gid"]
        collection_gid = self.gateway.find_collection_by_title(step.target)
        if not collection_gid:
            return self._outcome(step, StepStatus.SKIPPED, "collection not found")
        if self.gateway.collection_has_product(collection_gid, product_gid):
            return self._outcome(step, StepStatus.OK, "already a member")
        self.gateway.add_product_to_collection(collection_gid, product_gid)
        return self._outcome(step, StepStatus.OK, "added")

    def _fill_image_alt_text(self, step: UpdateStep) -> StepOutcome:
        alt_text = step.payload["alt_text"]
        images = self.gateway.list_product_images(step.target)
        missing = [image for image in images if not image.alt_text.strip()]

        errors = []
        for image in missing:
            try:
                self.gateway.set_image_alt_text(step.target, image.id, alt_text)
            except ShopifyAPIError as e:
                errors.append(f"image {image.id}: {e}")

        if errors:
            return self._outcome(step, StepStatus.FAILED,
                                 f"{len(errors)} of {len(missing)} images failed: " + "; ".join(errors))
        return self._outcome(step, StepStatus.OK,
                             f"{len(missing)} set, {len(images) - len(missing)} kept")
