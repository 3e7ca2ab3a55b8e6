"""Webhook HTTP surface: the ChallengePayload API cert-manager calls into."""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from bunny_webhook.config import AppConfig
from bunny_webhook.dns.base import Solver
from bunny_webhook.exceptions import SolverError
from bunny_webhook.models import ChallengeRequest
from bunny_webhook.secret_store import load_kube_configuration

logger = logging.getLogger(__name__)

API_VERSION = "v1alpha1"
_PAYLOAD_API_VERSION = "webhook.acme.cert-manager.io/v1alpha1"


class ChallengePayload(BaseModel):
    apiVersion: str = _PAYLOAD_API_VERSION
    kind: str = "ChallengePayload"
    request: dict[str, Any]


def _failure(uid: str, message: str) -> dict:
    return {
        "uid": uid,
        "success": False,
        "status": {"status": "Failure", "message": message, "reason": "InternalError", "code": 500},
    }


def handle_challenge(solver: Solver, request: ChallengeRequest) -> dict:
    """Run Present or CleanUp for one challenge and build the ChallengeResponse."""
    try:
        if request.action == "Present":
            solver.present(request)
        elif request.action == "CleanUp":
            solver.cleanup(request)
        else:
            return _failure(request.uid, f"unknown challenge action {request.action!r}")
    except SolverError as exc:
        logger.error("%s failed for %s (uid %s): %s", request.action, request.dns_name, request.uid, exc)
        return _failure(request.uid, str(exc))
    return {"uid": request.uid, "success": True}


def create_app(
    config: AppConfig,
    solver: Solver,
    load_configuration: Callable[[], Any] = load_kube_configuration,
) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        solver.initialize(load_configuration())
        logger.info("Solver %r ready for group %s", solver.name(), config.group_name)
        yield

    app = FastAPI(title="bunny.net DNS-01 webhook", lifespan=lifespan)
    group_version = f"{config.group_name}/{API_VERSION}"

    def _check_group(group: str) -> None:
        if group != config.group_name:
            raise HTTPException(status_code=404, detail=f"unknown API group {group!r}")

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    @app.get("/apis/{group}/" + API_VERSION)
    def api_resources(group: str):
        _check_group(group)
        return {
            "kind": "APIResourceList",
            "apiVersion": "v1",
            "groupVersion": group_version,
            "resources": [
                {
                    "name": solver.name(),
                    "singularName": solver.name(),
                    "namespaced": False,
                    "kind": "ChallengePayload",
                    "verbs": ["create"],
                }
            ],
        }

    @app.post("/apis/{group}/" + API_VERSION + "/{solver_name}")
    def solve(group: str, solver_name: str, payload: ChallengePayload):
        _check_group(group)
        if solver_name != solver.name():
            raise HTTPException(status_code=404, detail=f"unknown solver {solver_name!r}")
        request = ChallengeRequest.from_dict(payload.request)
        return {
            "apiVersion": payload.apiVersion,
            "kind": payload.kind,
            "response": handle_challenge(solver, request),
        }

    return app
