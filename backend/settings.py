"""
Centralized runtime configuration for the backend.

This module uses `python-dotenv` to read a local `.env` file during
development and exposes a Pydantic `Settings` model named `settings`.

Environment variables used:
- `NILLION_SCHEMA_ID` — id of the collection progress records live in.
- `NILLION_ORG_SECRET_KEY` / `NILLION_ORG_DID` — org credentials.
- `NILLION_NODE1_URL`, `NILLION_NODE1_DID`, `NILLION_NODE2_URL`, ... —
  storage nodes, numbered from 1. Collection stops at the first missing URL.
- `ALLOWED_ORIGINS` — comma separated list of CORS origins.
- `PORT` — port used when running `python main.py`.
- `MAX_BATCH_SIZE` — safety limit for records appended in one request.
- `LOG_LEVEL` — root log level (DEBUG, INFO, ...).

Example `.env`:
NILLION_ORG_SECRET_KEY=...
NILLION_ORG_DID=did:nil:testnet:nillion1...
NILLION_NODE1_URL=https://nildb-nx8v.nillion.network
NILLION_NODE1_DID=did:nil:testnet:nillion1qfrl8nje3nvwh6cryj63mz2y6gsdptvn07nx8v
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List
import os
from dotenv import load_dotenv

load_dotenv()


DEFAULT_ORIGINS = "https://aibit-front-ic06d.kinsta.page,https://localhost:8888"


class NodeConfig(BaseModel):
    url: str
    did: str


def _nodes_from_env() -> List[NodeConfig]:
    nodes: List[NodeConfig] = []
    n = 1
    while os.getenv(f"NILLION_NODE{n}_URL"):
        nodes.append(NodeConfig(
            url=os.environ[f"NILLION_NODE{n}_URL"],
            did=os.getenv(f"NILLION_NODE{n}_DID", ""),
        ))
        n += 1
    return nodes


def _origins_from_env() -> List[str]:
    raw = os.getenv("ALLOWED_ORIGINS", DEFAULT_ORIGINS)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseModel):
    """Typed settings container.

    All downstream code should import `settings` from this module. Use
    these attributes (not os.getenv) so tests can monkeypatch `settings`.
    """

    schema_id: str = os.getenv(
        "NILLION_SCHEMA_ID", "e8317b4e-3b48-4f50-9adf-93be295a09e1"
    )
    org_secret_key: str = os.getenv("NILLION_ORG_SECRET_KEY", "")
    org_did: str = os.getenv("NILLION_ORG_DID", "")
    nodes: List[NodeConfig] = Field(default_factory=_nodes_from_env)
    allowed_origins: List[str] = Field(default_factory=_origins_from_env)
    port: int = int(os.getenv("PORT", "3001"))
    max_batch_size: int = int(os.getenv("MAX_BATCH_SIZE", "100"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    def org_config(self) -> Dict[str, Any]:
        """Return the org config shape the secretvaults client expects."""

        return {
            "nodes": [n.model_dump() for n in self.nodes],
            "org_credentials": {
                "secret_key": self.org_secret_key,
                "org_did": self.org_did,
            },
        }


settings = Settings()
