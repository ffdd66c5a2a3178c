"""FastAPI shell receiving product-creation webhooks."""

import json
import logging
from functools import lru_cache
from typing import Any, Dict

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from ..common.settings import load_settings
from ..models import ProductEvent
from ..pipeline import EnrichmentPipeline
from ..shopify.errors import ShopifyConnectionError

logger = logging.getLogger(__name__)

app = FastAPI(title="Catalog Enrichment Webhooks")


@lru_cache(maxsize=1)
def get_pipeline() -> EnrichmentPipeline:
    return EnrichmentPipeline(load_settings())


@app.get("/healthz")
def healthz() -> Dict[str, str]:
    return {"status": "ok"}


@app.post("/webhook/products/create")
async def product_created(request: Request, pipeline: EnrichmentPipeline = Depends(get_pipeline)) -> Any:
    body = await request.body()
    try:
        payload = json.loads(body or b"null")
    except ValueError:
        raise HTTPException(status_code=400, detail="Body is not valid JSON") from None

    try:
        event = ProductEvent.from_payload(payload)
    except ValueError as e:
        logger.warning("Rejected webhook: %s", e)
        raise HTTPException(status_code=400, detail=str(e)) from None

    # Blocking I/O; each delivery runs on its own worker thread
    try:
        report = await run_in_threadpool(pipeline.process, event)
    except ShopifyConnectionError as e:
        logger.error("Webhook error for product %s: %s", event.id, e)
        return JSONResponse(status_code=500, content={"status": "failed"})

    if not report.success:
        return JSONResponse(status_code=500, content={"status": "failed"})
    return {"status": "ok"}
