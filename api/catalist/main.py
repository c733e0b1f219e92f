"""FastAPI application entrypoint and health reporting utilities."""

from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catalist.api.router import api_router
from catalist.core.config import settings
from catalist.core.logging import configure_logging
from catalist.providers.observability import provider_monitor

configure_logging()

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(api_router, prefix=settings.api_prefix)


def _summarize_providers(snapshot: dict[str, Any]) -> dict[str, Any]:
    """Condense provider monitor state into health-friendly telemetry.

    Open circuits and repeated failures mark a source degraded. Fallback counts are
    reported but never degrade health by themselves.
    """
    issues: list[dict[str, Any]] = []
    sources: dict[str, Any] = {}
    for source, payload in snapshot.items():
        circuit = payload.get("circuit", {})
        remaining = float(circuit.get("remaining_cooldown") or 0.0)
        state = "ok"
        if remaining > 0:
            issues.append({"source": source, "reason": "circuit_open", "remaining_cooldown": round(remaining, 2)})
            state = "degraded"
        operations = payload.get("operations", {})
        failure_total = 0
        fallback_total = 0
        last_error: str | None = None
        for operation, metrics in operations.items():
            failed = int(metrics.get("failed") or 0)
            failure_total += failed
            fallback_total += int(metrics.get("fallbacks") or 0)
            if metrics.get("last_error"):
                last_error = metrics["last_error"]
                issues.append(
                    {"source": source, "operation": operation, "reason": "last_error", "error": last_error}
                )
            if failed >= 3:
                issues.append(
                    {"source": source, "operation": operation, "reason": "repeated_failures", "failed": failed}
                )
                state = "degraded"
        sources[source] = {
            "state": state,
            "circuit": circuit,
            "failure_total": failure_total,
            "fallback_total": fallback_total,
            "last_error": last_error,
        }
    return {"sources": sources, "issues": issues}


@app.get("/health", tags=["internal"])
@app.get(f"{settings.api_prefix}/health", tags=["internal"])
async def health() -> dict[str, Any]:
    snapshot = await provider_monitor.snapshot()
    telemetry = _summarize_providers(snapshot)
    status = "ok" if not telemetry["issues"] else "degraded"
    return {"status": status, "providers": telemetry}
