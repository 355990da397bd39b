import os
import time
from typing import List

import uvicorn
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from quote_scraper.application.scrape_service import (
    ScrapeExecutionParams,
    ScrapeExecutionResult,
    run_scrape_job,
)
from quote_scraper.domain.models import DEFAULT_SYMBOLS


class ScrapeRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    symbols: List[str] = Field(
        default_factory=lambda: list(DEFAULT_SYMBOLS),
        min_length=1,
        examples=[["MSFT", "AAPL"]],
        description="Ticker symbols to visit, in order.",
    )
    out: str = Field(
        "stocks.csv",
        examples=["output/stocks.csv"],
        description="Output CSV path.",
    )
    timeout_seconds: int = Field(
        20, ge=1, le=120, description="HTTP request timeout in seconds."
    )
    log_level: str = Field(
        "INFO", examples=["INFO"], description="DEBUG, INFO, WARNING or ERROR."
    )
    use_cache: bool = Field(
        False,
        description="Reuse quotes cached in Redis instead of fetching them again.",
    )


class ScrapeResponse(BaseModel):
    success: bool
    source: str
    output_path: str
    total_records: int
    failed_symbols: int
    elapsed_seconds: float


app = FastAPI(
    title="Quote Scraper API",
    description=(
        "API for scraping Yahoo Finance quote pages into a CSV file. "
        "Use /docs to try the parameters through Swagger."
    ),
    version="0.1.0",
)


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/meta/options")
def options() -> dict:
    return {
        "endpoints": [
            "/health",
            "/meta/options",
            "/scrape",
        ],
        "notes": [
            "Use POST /scrape to run synchronously (waits until the CSV is written).",
            "Cache TTL and Redis settings come from QUOTE_SCRAPER_* environment variables.",
            "Swagger: /docs",
            "ReDoc: /redoc",
        ],
        "defaults": {
            "symbols": list(DEFAULT_SYMBOLS),
            "out": "stocks.csv",
            "timeout_seconds": 20,
            "log_level": "INFO",
            "use_cache": False,
        },
    }


@app.post("/scrape", response_model=ScrapeResponse)
def scrape(request: ScrapeRequest) -> ScrapeResponse:
    start = time.perf_counter()
    params = ScrapeExecutionParams(
        symbols=request.symbols,
        out=request.out,
        timeout_seconds=request.timeout_seconds,
        log_level=request.log_level,
        use_cache=request.use_cache,
        cache_ttl_minutes=int(os.getenv("QUOTE_SCRAPER_CACHE_TTL_MINUTES", "30")),
        redis_url=os.getenv("QUOTE_SCRAPER_REDIS_URL", "redis://localhost:6379/0"),
        redis_key_prefix=os.getenv(
            "QUOTE_SCRAPER_REDIS_KEY_PREFIX", "quote_scraper:quotes"
        ),
    )

    try:
        result: ScrapeExecutionResult = run_scrape_job(params)
    except Exception as exc:  # noqa: BLE001
        raise HTTPException(status_code=500, detail=str(exc))

    return ScrapeResponse(
        success=True,
        source=result.source,
        output_path=result.output_path,
        total_records=result.total_records,
        failed_symbols=result.failed_symbols,
        elapsed_seconds=round(time.perf_counter() - start, 3),
    )


def run() -> None:
    host = os.getenv("QUOTE_SCRAPER_API_HOST", "127.0.0.1")
    port = int(os.getenv("QUOTE_SCRAPER_API_PORT", "8000"))
    uvicorn.run("quote_scraper.api:app", host=host, port=port, reload=False)


if __name__ == "__main__":
    run()
