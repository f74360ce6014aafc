"""Observability configuration using Logfire.

Logfire provides structured logging and tracing on top of OpenTelemetry,
with integrations for FastAPI, SQLAlchemy and httpx.

Usage:
    import logfire

    logfire.info("Claim issued", claim_id=str(claim.id))

    with logfire.span("finalize_claim.execute", token=token[:8] + "..."):
        ...

Claim secrets must never reach the logs: tokens are truncated at the call
site, and the scrubbing patterns below redact passcodes and passwords that
end up in captured attributes.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from lunabeam.config import Settings

# Attribute names redacted by Logfire in addition to its defaults
SCRUBBED_ATTRIBUTES = ["passcode", "new_credential", "secret_hash", "auth_token"]


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for observability.

    - Development: local console output unless a token is provided
    - Production: sends to Logfire cloud when a token is provided

    Token Configuration:
    - Set OBSERVABILITY__LOGFIRE_TOKEN environment variable to enable cloud sending
    - Can be explicitly controlled with OBSERVABILITY__SEND_TO_LOGFIRE

    Args:
        settings: Application settings
    """
    # Priority: explicit setting > token presence > default (False)
    if settings.observability.send_to_logfire is not None:
        send_to_logfire = settings.observability.send_to_logfire
    else:
        send_to_logfire = bool(settings.observability.logfire_token)

    config_kwargs = {
        "service_name": "lunabeam-api",
        "service_version": settings.git_sha,
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
        "scrubbing": logfire.ScrubbingOptions(extra_patterns=SCRUBBED_ATTRIBUTES),
    }

    if settings.observability.logfire_token:
        config_kwargs["token"] = settings.observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
        has_token=bool(settings.observability.logfire_token),
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Instrument FastAPI application with Logfire.

    Request headers are not captured: the session cookie travels in them.

    Args:
        app: FastAPI application instance
    """

    def _map_request_attributes(request, attributes):
        result = {**attributes}
        values = result.get("values")
        if isinstance(values, dict) and isinstance(values.get("token"), str):
            result["values"] = {**values, "token": values["token"][:8] + "..."}
        if hasattr(request, "method"):
            result["method"] = request.method
        if hasattr(request, "url"):
            # Claim tokens are path parameters
            result["path"] = _redact_claim_path(request.url.path)
        return result

    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_map_request_attributes,
    )
    logfire.info("FastAPI instrumented")


def _redact_claim_path(path: str) -> str:
    """Truncate the token segment of /claims/<token>[/...] paths."""
    parts = path.split("/")
    if len(parts) > 2 and parts[1] == "claims" and len(parts[2]) > 8:
        parts[2] = parts[2][:8] + "..."
    return "/".join(parts)


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Instrument SQLAlchemy engine with Logfire.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(
        engine=engine.sync_engine,
        enable_commenter=True,  # Add SQL comments with span context
    )
    logfire.info("SQLAlchemy instrumented")


def instrument_httpx() -> None:
    """Instrument outbound httpx requests (Resend) with Logfire."""
    logfire.instrument_httpx()
    logfire.info("httpx instrumented")
