"""
Update Plan

Turns one product event plus its computed enrichment into the ordered
list of mutation steps to issue. A plan is built fresh per event and
discarded after execution.
"""

from decimal import Decimal
from typing import Dict, List, Mapping, Optional

from ..models import InferredAttributes, ProductEvent, SeoContent, StepKind, UpdateStep

DEFAULT_METAFIELD = {
    "namespace": "dtp",
    "key": "material",
    "type": "single_line_text_field",
}


def build_update_plan(
    event: ProductEvent,
    attributes: InferredAttributes,
    seo: SeoContent,
    description_html: str,
    prices: Mapping[str, Decimal],
    alt_text: str,
    metafield: Optional[Dict[str, str]] = None,
) -> List[UpdateStep]:
    """
    Build the ordered update plan.

    Order: SEO (required), description, tags, variant prices, material
    metafield, collection memberships, image alt text. Content goes
    first, and a content failure never blocks the price writes that
    follow.

    Args:
        event: Validated product event
        attributes: Classified attributes (tags, collections, material)
        seo: SEO title/description
        description_html: Synthesized description
        prices: Variant id -> price; variants without a price are not written
        alt_text: Alt text for images that have none
        metafield: namespace/key/type of the material metafield

    Returns:
        List of UpdateStep
    """
    metafield = {**DEFAULT_METAFIELD, **(metafield or {})}

    steps = [
        UpdateStep(
            kind=StepKind.SEO,
            target=event.graphql_id,
            payload={"title": seo.title, "description": seo.description},
            required=True,
        ),
        UpdateStep(
            kind=StepKind.DESCRIPTION,
            target=event.id,
            payload={"body_html": description_html},
        ),
        UpdateStep(
            kind=StepKind.TAGS,
            target=event.id,
            payload={"tags": list(attributes.tags)},
        ),
    ]

    for variant in event.variants:
        price = prices.get(variant.id)
        if price is None:
            continue
        steps.append(UpdateStep(
            kind=StepKind.VARIANT_PRICE,
            target=variant.id,
            payload={
                "price": price,
                "variant_gid": variant.graphql_id,
                "product_gid": event.graphql_id,
            },
        ))

    steps.append(UpdateStep(
        kind=StepKind.METAFIELD,
        target=event.graphql_id,
        payload={
            "namespace": metafield["namespace"],
            "key": metafield["key"],
            "type": metafield["type"],
            "value": attributes.material.value,
        },
    ))

    for title in attributes.collections:
        steps.append(UpdateStep(
            kind=StepKind.COLLECTION,
            target=title,
            payload={"product_gid": event.graphql_id},
        ))

    steps.append(UpdateStep(
        kind=StepKind.IMAGE_ALT,
        target=event.id,
        payload={"alt_text": alt_text},
    ))

    return steps
