from contextlib import asynccontextmanager
import logging

from cfgrib.dataset import DatasetBuildError
from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from fastapi.concurrency import run_in_threadpool

from gribweather.backends.base import BackendError
from gribweather.backends.metno_urls import validate_area
from gribweather.config import configure_logging
from gribweather.pipeline.errors import ExtractionError
from gribweather.service import GribService

configure_logging()
LOGGER = logging.getLogger("gribweather.webapp")

service = GribService()


@asynccontextmanager
async def lifespan(_: FastAPI):
    yield
    service.close()


app = FastAPI(title="gribweather", lifespan=lifespan)


def _run_product(product: str, area: str):
    try:
        area = validate_area(area)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    try:
        return service.get_product(product, area)
    except BackendError as exc:
        LOGGER.error("Error getting %s data for %s: %s", product, area, exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    except ExtractionError as exc:
        LOGGER.error("Error parsing %s data for %s: %s", product, area, exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except (OSError, EOFError, DatasetBuildError) as exc:
        LOGGER.error("Unreadable %s dataset for %s: %s", product, area, exc)
        raise HTTPException(status_code=502, detail=f"Unreadable dataset: {exc}") from exc


@app.get("/api/weather/waves/{area}")
async def waves(area: str):
    results = await run_in_threadpool(_run_product, "waves", area)
    return JSONResponse(content=results[0].to_dict())


@app.get("/api/weather/wind/{area}")
async def wind(area: str):
    results = await run_in_threadpool(_run_product, "wind", area)
    return JSONResponse(content=[result.to_dict() for result in results])


@app.get("/api/weather/current/{area}")
async def current(area: str):
    results = await run_in_threadpool(_run_product, "current", area)
    return JSONResponse(content=[result.to_dict() for result in results])


@app.get("/api/weather/precipitation/{area}")
async def precipitation(area: str):
    results = await run_in_threadpool(_run_product, "precipitation", area)
    return JSONResponse(content=results[0].to_dict())


@app.get("/api/health")
async def health():
    return {"status": "ok", "cached_files": len(service.cache)}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8080)
