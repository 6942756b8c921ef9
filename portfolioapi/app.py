"""HTTP application wiring: routes, CORS and the server entry point."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Any, Optional, Sequence

from dotenv import load_dotenv
from flask import Flask, Response, jsonify, request

from .cache_repository import RedisManagerCacheRepository
from .connections import MongoConnection, flush_all_registers, get_redis_client
from .controllers import GetAllPortfoliosOfUserController, HealthController, RunSeedController
from .manager_cache_service import ManagerCacheService
from .mongo_repositories import (
    AllPortfolioOfUserRepository,
    RunSeedRepository,
    SeedRunCheckRepository,
)
from .portfolio_services import AllPortfolioOfUserService, ManagerCacheAllPortfolioOfUserService
from .seed_file_repository import LoadDataSeedRepository
from .seed_services import RunSeedService, SeedRunCheckService
from .use_cases import GetAllPortfolioOfUserUseCase, RunSeedUseCase

PREFIX_API = "/v1"
ALLOWED_METHODS = ("GET", "POST")

_log = logging.getLogger(__name__)


def _install_cors(app: Flask) -> None:
    """Allow any origin to use GET and POST."""

    @app.before_request
    def _preflight() -> Optional[Response]:
        if request.method == "OPTIONS":
            return Response(status=204)
        return None

    @app.after_request
    def _cors_headers(response: Response) -> Response:
        response.headers.add("Vary", "Origin")
        if not request.headers.get("Origin"):
            return response
        response.headers["Access-Control-Allow-Origin"] = "*"
        if request.method == "OPTIONS":
            response.headers.add("Vary", "Access-Control-Request-Method")
            response.headers.add("Vary", "Access-Control-Request-Headers")
            response.headers["Access-Control-Allow-Methods"] = ",".join(ALLOWED_METHODS)
            requested = request.headers.get("Access-Control-Request-Headers")
            if requested:
                response.headers["Access-Control-Allow-Headers"] = requested
        return response


def register_health_routes(app: Flask, controller: Any) -> None:
    """Serve the health check at GET /health."""

    def health():
        payload, status = controller.execute()
        return jsonify(payload), status

    app.add_url_rule("/health", endpoint="health", view_func=health, methods=["GET"])


def register_seed_routes(app: Flask, controller: Any) -> None:
    """Serve the seed loader at GET /seed."""

    def seed():
        payload, status = controller.execute()
        return jsonify(payload), status

    app.add_url_rule("/seed", endpoint="seed", view_func=seed, methods=["GET"])


def register_portfolio_routes(app: Flask, controller: Any) -> None:
    """Serve a user's portfolio at POST /v1/user/portfolio/<consumerId>."""

    def portfolio(consumerId: str):
        payload, status = controller.execute(consumerId, request.get_json(silent=True))
        return jsonify(payload), status

    app.add_url_rule(
        f"{PREFIX_API}/user/portfolio/<consumerId>",
        endpoint="portfolio_of_user",
        view_func=portfolio,
        methods=["POST"],
    )


def build_seed_controller(db: Any) -> RunSeedController:
    """Assemble the seed controller over the given database connection."""
    load_data_seed_repository = LoadDataSeedRepository()
    run_seed_repository = RunSeedRepository(db)
    seed_run_check_repository = SeedRunCheckRepository(db)

    run_seed_service = RunSeedService(run_seed_repository, load_data_seed_repository)
    check_seed_service = SeedRunCheckService(seed_run_check_repository)
    use_case = RunSeedUseCase(run_seed_service, check_seed_service)
    return RunSeedController(use_case)


def build_portfolio_controller(db: Any, redis_client: Any) -> GetAllPortfoliosOfUserController:
    """Assemble the portfolio controller over the database and the cache client."""
    manager_cache_repository = RedisManagerCacheRepository(redis_client)
    portfolio_repository = AllPortfolioOfUserRepository(db)

    manager_cache_service = ManagerCacheService(manager_cache_repository)
    portfolio_service = AllPortfolioOfUserService(portfolio_repository)
    portfolio_cache_service = ManagerCacheAllPortfolioOfUserService(manager_cache_service)

    use_case = GetAllPortfolioOfUserUseCase(portfolio_cache_service, portfolio_service)
    return GetAllPortfoliosOfUserController(use_case)


def create_app(db: Any, redis_client: Any) -> Flask:
    """Build the application with CORS and every route registered."""
    app = Flask(__name__)
    _install_cors(app)
    register_health_routes(app, HealthController())
    register_seed_routes(app, build_seed_controller(db))
    register_portfolio_routes(app, build_portfolio_controller(db, redis_client))
    return app


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Load the environment, flush the cache and serve on $PORT."""
    parser = argparse.ArgumentParser(
        prog="portfolioapi",
        description="Serve the portfolio API on the port named by $PORT.",
    )
    parser.parse_args(argv)

    if not load_dotenv():
        print("Error loading .env file")

    port_text = os.environ.get("PORT", "")
    try:
        port = int(port_text) if port_text else 0
    except ValueError:
        print(f"Error starting server: invalid port {port_text!r}", file=sys.stderr)
        raise SystemExit(1)

    flush_all_registers()
    app = create_app(MongoConnection(), get_redis_client())

    try:
        app.run(host="0.0.0.0", port=port)
    except OSError as error:
        print(f"Error starting server: {error}", file=sys.stderr)
        raise SystemExit(1) from error
    return 0