from fastapi import FastAPI, Query, HTTPException
from fastapi.middleware.cors import CORSMiddleware
import logging
import uvicorn

from errors import NoRecords, StorageError
from models import ProgressIn
from repo_records import RecordRepo
from service_records import ProgressService
from settings import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="AIbit Progress Backend")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept"],
)

# Instantiate the repo + service here so the routes remain thin. Tests
# swap `svc.repo` for one bound to an in-memory collection.
repo = RecordRepo()
svc = ProgressService(repo)


@app.get("/")
def root():
    return {"message": "Hello from Nillion-based API for AIbit!"}


@app.get("/health")
async def health():
    try:
        await svc.health_check()
        return {"ok": True}
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Node health check failed: {e}")


@app.post("/add-nft-data")
async def add_nft_data(item: ProgressIn):
    try:
        result = await svc.add_progress([item])
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageError as e:
        logger.error("Error in /add-nft-data: %s", e)
        raise HTTPException(status_code=500, detail=str(e))
    return {"message": "NFT data added successfully!", **result}


@app.get("/get-latest-nft")
async def get_latest_nft(fitbitid: str = Query(None)):
    if not fitbitid:
        raise HTTPException(status_code=400, detail="Missing required query parameter: fitbitid")
    try:
        latest = await svc.latest(fitbitid)
    except NoRecords as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StorageError as e:
        logger.error("Error in /get-latest-nft: %s", e)
        raise HTTPException(status_code=500, detail=str(e))
    if latest is None:
        raise HTTPException(status_code=404, detail=f"No NFT records found for fitbitid: {fitbitid}")
    return latest.to_public()


@app.get("/get-leaderboard")
async def get_leaderboard():
    try:
        board = await svc.leaderboard()
    except NoRecords as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StorageError as e:
        logger.error("Error in /get-leaderboard: %s", e)
        raise HTTPException(status_code=500, detail=str(e))
    return {"leaderboard": [{"fitbitid": entry.user_id, "level": entry.level} for entry in board]}


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
