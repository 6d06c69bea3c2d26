"""FastAPI server for Brass combat.

Exposes the battlefield over HTTP: spawn and clear ships, run rounds and
inspect the fleets while an optional background loop keeps the battle going.
"""

import argparse
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from ..engine.battlefield import BattleLoop, Battlefield
from ..utils.constants import API_HOST, API_PORT, MAX_LOADED_TEMPLATES, SHIPS_DIR, TICK_DELAY
from ..utils.template_loader import TemplateCache
from .schemas.requests import RunRoundsRequest, SpawnShipsRequest
from .schemas.responses import (
    BattleStateResponse,
    KillShipsResponse,
    RoundReportResponse,
    RunRoundsResponse,
    SpawnShipsResponse,
    TemplatesResponse,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def create_app(battlefield: Battlefield, loop: BattleLoop | None = None) -> FastAPI:
    """Build the API around a battlefield.

    Args:
        battlefield: Battlefield served by every endpoint
        loop: Optional round worker started and stopped with the app
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager for startup/shutdown."""
        logger.info("Brass combat server starting...")
        if loop is not None:
            loop.start()
        yield
        logger.info("Brass combat server shutting down...")
        if loop is not None:
            loop.stop()

    app = FastAPI(
        title="Brass Combat API",
        description="Web API for aggregate fleet combat",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ============================================
    # API ENDPOINTS
    # ============================================

    @app.get("/api")
    def api_root():
        """API root endpoint - server health check."""
        return {
            "service": "Brass Combat",
            "status": "operational",
            "round": battlefield.round,
            "ships": battlefield.ship_count(),
        }

    @app.get("/api/battle", response_model=BattleStateResponse)
    def get_battle():
        """Get every fleet on the battlefield."""
        return BattleStateResponse(**battlefield.snapshot())

    @app.post("/api/battle/ships", response_model=SpawnShipsResponse)
    def spawn_ships(request: SpawnShipsRequest):
        """Spawn ships for a faction.

        Example:
            POST /api/battle/ships
            {"typeName": "frigate", "faction": "red", "quantity": 20}
        """
        try:
            spawned = battlefield.spawn_ships(request.typeName, request.faction, request.quantity)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

        if spawned is None:
            raise HTTPException(
                status_code=404, detail=f"Ship template '{request.typeName}' could not be loaded"
            )

        return SpawnShipsResponse(
            typeName=request.typeName,
            faction=spawned.faction.name,
            quantity=spawned.value.count,
            state=BattleStateResponse(**battlefield.snapshot()),
        )

    @app.delete("/api/battle/ships", response_model=KillShipsResponse)
    def kill_ships():
        """Remove every ship from the battlefield."""
        return KillShipsResponse(removed=battlefield.kill_ships())

    @app.post("/api/battle/rounds", response_model=RunRoundsResponse)
    def run_rounds(request: RunRoundsRequest | None = None):
        """Run combat rounds now and return their reports."""
        rounds = request.rounds if request is not None else 1
        reports = [
            RoundReportResponse.from_report(battlefield.run_round()) for _ in range(rounds)
        ]
        logger.info(f"Ran {rounds} rounds on request")
        return RunRoundsResponse(
            reports=reports, state=BattleStateResponse(**battlefield.snapshot())
        )

    @app.get("/api/templates", response_model=TemplatesResponse)
    def list_templates():
        """List cached and available ship templates."""
        return TemplatesResponse(
            loaded=battlefield.cache.loaded(), available=battlefield.cache.names()
        )

    return app


app = create_app(Battlefield(TemplateCache(SHIPS_DIR, MAX_LOADED_TEMPLATES)))


def main():
    """Run the API server with a background round loop."""
    import uvicorn

    parser = argparse.ArgumentParser(description="Brass combat API server")
    parser.add_argument("--host", default=API_HOST, help=f"Bind address (default: {API_HOST})")
    parser.add_argument("--port", type=int, default=API_PORT, help=f"Port (default: {API_PORT})")
    parser.add_argument("--ships-dir", default=SHIPS_DIR, help="Directory of .ship records")
    parser.add_argument(
        "--tick", type=float, default=TICK_DELAY, help="Seconds between combat rounds"
    )
    args = parser.parse_args()

    battlefield = Battlefield(TemplateCache(args.ships_dir, MAX_LOADED_TEMPLATES))
    server_app = create_app(battlefield, BattleLoop(battlefield, args.tick))
    uvicorn.run(server_app, host=args.host, port=args.port, log_level="info")


if __name__ == "__main__":
    main()
